# services/occupancy_service.py
"""
Room occupancy bookkeeping.

Room.occupancy counts tenants that are approved and active in the room.
Every change goes through a single conditional UPDATE so the capacity check
and the increment happen atomically in the database:

     UPDATE rooms
        SET occupancy = occupancy + 1,
            status = CASE WHEN occupancy + 1 >= capacity THEN 'occupied' ELSE status END
      WHERE id = :room_id AND occupancy < capacity

Two concurrent approvals for the last seat cannot both succeed: the second
statement matches zero rows.
"""
import logging

from sqlalchemy import and_, case, update
from sqlalchemy.orm import Session

from exceptions import ConflictError, NotFoundError
from models import Room, RoomStatus
from models.base import utcnow

logger = logging.getLogger(__name__)


def _get_room(db: Session, room_id: int) -> Room:
     room = db.get(Room, room_id)
     if room is None:
          raise NotFoundError("Room not found")
     return room


def ensure_room_has_space(db: Session, room_id: int) -> Room:
     """
     Non-reserving availability check (used when a request is only being
     submitted, e.g. self onboarding).

     Raises:
          NotFoundError: room does not exist
          ConflictError: room is at capacity
     """
     room = _get_room(db, room_id)
     if room.occupancy >= room.capacity:
          raise ConflictError("Room is fully occupied")
     return room


def reserve_seat(db: Session, room_id: int) -> Room:
     """
     Atomically take one seat in a room.

     Increments occupancy only while occupancy < capacity and flips the status
     to occupied when the room becomes full.

     Raises:
          NotFoundError: room does not exist
          ConflictError: room is already at capacity
     """
     stmt = (
          update(Room)
          .where(and_(Room.id == room_id, Room.occupancy < Room.capacity))
          .values(
               occupancy=Room.occupancy + 1,
               status=case(
                    (Room.occupancy + 1 >= Room.capacity, RoomStatus.OCCUPIED.value),
                    else_=Room.status,
               ),
               updated_at=utcnow(),
          )
          .execution_options(synchronize_session=False)
     )
     result = db.execute(stmt)
     if result.rowcount == 0:
          # Distinguish a missing room from a full one
          room = _get_room(db, room_id)
          db.refresh(room)
          logger.info("Seat reservation refused: room %s full (%s/%s)", room_id, room.occupancy, room.capacity)
          raise ConflictError("Room is fully occupied")

     room = _get_room(db, room_id)
     db.refresh(room)
     logger.info("Reserved seat in room %s (%s/%s)", room_id, room.occupancy, room.capacity)
     return room


def release_seat(db: Session, room_id: int) -> Room:
     """
     Atomically give back one seat. Occupancy never drops below zero; an
     occupied room that gains a free seat becomes available again (rooms under
     maintenance keep their status).
     """
     stmt = (
          update(Room)
          .where(and_(Room.id == room_id, Room.occupancy > 0))
          .values(
               occupancy=Room.occupancy - 1,
               status=case(
                    (
                         and_(Room.status == RoomStatus.OCCUPIED.value, Room.occupancy - 1 < Room.capacity),
                         RoomStatus.AVAILABLE.value,
                    ),
                    else_=Room.status,
               ),
               updated_at=utcnow(),
          )
          .execution_options(synchronize_session=False)
     )
     result = db.execute(stmt)
     room = _get_room(db, room_id)
     db.refresh(room)
     if result.rowcount == 0:
          logger.warning("Release on room %s ignored: occupancy already 0", room_id)
     else:
          logger.info("Released seat in room %s (%s/%s)", room_id, room.occupancy, room.capacity)
     return room


def status_for(room: Room) -> str:
     """Status implied by the counters, leaving maintenance untouched."""
     if room.status == RoomStatus.MAINTENANCE.value:
          return room.status
     if room.occupancy >= room.capacity:
          return RoomStatus.OCCUPIED.value
     return RoomStatus.AVAILABLE.value
