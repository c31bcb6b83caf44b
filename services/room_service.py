# services/room_service.py
"""
Room Service - Business logic layer for the room inventory of a hostel.
"""
import logging
from typing import List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from exceptions import ConflictError, NotFoundError, ValidationError
from models import Room, RoomStatus, Tenant, User
from schemas.room import RoomCreate, RoomUpdate
from services.access import apply_scope, in_scope, paginate
from services.occupancy_service import status_for

logger = logging.getLogger(__name__)


class RoomService:
     """Service class for room-related business logic."""

     @staticmethod
     def get_scoped(db: Session, user: User, room_id: int) -> Room:
          room = db.get(Room, room_id)
          if room is None or not in_scope(user, room.property_id):
               raise NotFoundError("Room not found")
          return room

     @staticmethod
     def _ensure_number_free(db: Session, property_id: Optional[int], number: str, exclude_id: Optional[int] = None):
          query = db.query(Room.id).filter(Room.property_id == property_id, Room.number == number)
          if exclude_id is not None:
               query = query.filter(Room.id != exclude_id)
          if query.first() is not None:
               raise ConflictError("Room number already exists")

     @staticmethod
     def list_rooms(
          db: Session,
          user: User,
          search: Optional[str] = None,
          status: Optional[str] = None,
          room_type: Optional[str] = None,
          page: int = 1,
          limit: int = 10,
     ) -> Tuple[List[Room], int, int]:
          """
          List rooms of the caller's hostel sorted by room number.

          Returns:
               (rooms, total, total_pages)
          """
          query = apply_scope(db.query(Room), Room.property_id, user)
          if search:
               query = query.filter(func.lower(Room.number).like(f"%{search.strip().lower()}%"))
          if status and status != "all":
               query = query.filter(Room.status == status)
          if room_type and room_type != "all":
               query = query.filter(Room.type == room_type)
          query = query.order_by(Room.number, Room.id)
          return paginate(query, page, limit)

     @staticmethod
     def list_available(db: Session, user: User) -> List[Room]:
          """Rooms a new tenant can pick: available, active and not full."""
          query = apply_scope(db.query(Room), Room.property_id, user)
          return (
               query.filter(
                    Room.status == RoomStatus.AVAILABLE.value,
                    Room.active == True,  # noqa: E712
                    Room.occupancy < Room.capacity,
               )
               .order_by(Room.number, Room.id)
               .all()
          )

     @staticmethod
     def stats(db: Session, user: User) -> dict:
          base = apply_scope(db.query(Room), Room.property_id, user)
          by_status = dict(
               apply_scope(db.query(Room.status, func.count(Room.id)), Room.property_id, user)
               .group_by(Room.status)
               .all()
          )
          by_type = (
               apply_scope(db.query(Room.type, func.count(Room.id)), Room.property_id, user)
               .group_by(Room.type)
               .order_by(Room.type)
               .all()
          )
          occupied, capacity = apply_scope(
               db.query(func.coalesce(func.sum(Room.occupancy), 0), func.coalesce(func.sum(Room.capacity), 0)),
               Room.property_id,
               user,
          ).one()
          return {
               "total": base.count(),
               "available": by_status.get(RoomStatus.AVAILABLE.value, 0),
               "occupied": by_status.get(RoomStatus.OCCUPIED.value, 0),
               "maintenance": by_status.get(RoomStatus.MAINTENANCE.value, 0),
               "by_type": [{"type": room_type, "count": count} for room_type, count in by_type],
               "occupancy": {"total": int(occupied), "capacity": int(capacity)},
          }

     @staticmethod
     def create_room(db: Session, user: User, data: RoomCreate) -> Room:
          """
          Add a room to the admin's hostel. A superadmin picks the hostel
          through property_id.

          Raises:
               ValidationError: no hostel to attach the room to
               ConflictError: number already used in the hostel
          """
          property_id = data.property_id if user.is_superadmin and data.property_id else user.property_id
          if property_id is None and not user.is_superadmin:
               raise ValidationError("Your account is not assigned to a hostel")
          RoomService._ensure_number_free(db, property_id, data.number)

          room = Room(
               property_id=property_id,
               number=data.number,
               type=data.type,
               rent=data.rent,
               capacity=data.capacity,
               occupancy=0,
               status=data.status,
          )
          db.add(room)
          db.flush()
          logger.info("Room %s (%s) created in property %s", room.id, room.number, property_id)
          return room

     @staticmethod
     def update_room(db: Session, user: User, room_id: int, data: RoomUpdate) -> Room:
          """
          Partial update. Capacity can never drop below the seats in use, and
          the status is recomputed from the counters unless the room is
          being put under maintenance.
          """
          room = RoomService.get_scoped(db, user, room_id)
          fields = data.model_dump(exclude_unset=True, exclude_none=True)

          capacity = fields.get("capacity", room.capacity)
          occupancy = fields.get("occupancy", room.occupancy)
          if occupancy > capacity:
               if "capacity" in fields and "occupancy" not in fields:
                    raise ValidationError("Capacity cannot be less than current occupancy")
               raise ValidationError("Occupancy cannot exceed capacity")

          if "number" in fields and fields["number"] != room.number:
               RoomService._ensure_number_free(db, room.property_id, fields["number"], exclude_id=room.id)

          for key, value in fields.items():
               setattr(room, key, value)

          # Maintenance sticks until lifted explicitly; otherwise the counters decide
          room.status = status_for(room)
          db.flush()
          logger.info("Room %s updated: %s", room.id, sorted(fields))
          return room

     @staticmethod
     def delete_room(db: Session, user: User, room_id: int) -> None:
          """
          Raises:
               ConflictError: tenants still occupy the room
          """
          room = RoomService.get_scoped(db, user, room_id)
          if room.occupancy > 0:
               raise ConflictError("Cannot delete a room that has tenants")

          for tenant in db.query(Tenant).filter(Tenant.room_id == room.id).all():
               tenant.room_id = None
          db.flush()
          db.delete(room)
          db.flush()
          logger.info("Room %s deleted by user %s", room_id, user.id)
