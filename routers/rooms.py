# routers/rooms.py
"""
Room API routes.

Role-based access:
- Any signed-in user: rooms open for onboarding in their hostel
- Staff: list, view and statistics
- Admin: create, update, delete
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import get_current_user, require_admin, require_staff
from models import User
from schemas.common import MessageResponse
from schemas.room import (
     RoomCreate,
     RoomListResponse,
     RoomResponse,
     RoomStatsResponse,
     RoomStatusLiteral,
     RoomTypeLiteral,
     RoomUpdate,
)
from services.room_service import RoomService

router = APIRouter(prefix="/api/rooms", tags=["rooms"])


@router.get("", response_model=RoomListResponse, summary="List rooms")
def list_rooms(
     search: Optional[str] = Query(None, description="Room number contains"),
     status_filter: Optional[RoomStatusLiteral] = Query(None, alias="status"),
     room_type: Optional[RoomTypeLiteral] = Query(None, alias="type"),
     page: int = Query(1, ge=1),
     limit: int = Query(10, ge=1, le=100),
     db: Session = Depends(get_session),
     user: User = Depends(require_staff),
):
     rooms, total, total_pages = RoomService.list_rooms(
          db, user, search=search, status=status_filter, room_type=room_type, page=page, limit=limit
     )
     return RoomListResponse(
          rooms=[RoomResponse.model_validate(r) for r in rooms],
          total=total,
          total_pages=total_pages,
          current_page=page,
     )


@router.get("/available", response_model=List[RoomResponse], summary="Rooms open for onboarding")
def available_rooms(
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user),
):
     """Rooms with a free seat in the caller's hostel."""
     return [RoomResponse.model_validate(r) for r in RoomService.list_available(db, user)]


@router.get("/stats", response_model=RoomStatsResponse, summary="Room statistics")
def room_stats(
     db: Session = Depends(get_session),
     user: User = Depends(require_staff),
):
     return RoomStatsResponse(**RoomService.stats(db, user))


@router.get("/{room_id}", response_model=RoomResponse, summary="Get room")
def get_room(
     room_id: int,
     db: Session = Depends(get_session),
     user: User = Depends(require_staff),
):
     return RoomResponse.model_validate(RoomService.get_scoped(db, user, room_id))


@router.post("", response_model=RoomResponse, status_code=status.HTTP_201_CREATED, summary="Create room")
def create_room(
     body: RoomCreate,
     db: Session = Depends(get_session),
     user: User = Depends(require_admin),
):
     """
     Add a room to the admin's hostel. Room numbers are unique per hostel;
     new rooms start empty.
     """
     room = RoomService.create_room(db, user, body)
     db.commit()
     return RoomResponse.model_validate(room)


@router.put("/{room_id}", response_model=RoomResponse, summary="Update room")
def update_room(
     room_id: int,
     body: RoomUpdate,
     db: Session = Depends(get_session),
     user: User = Depends(require_admin),
):
     room = RoomService.update_room(db, user, room_id, body)
     db.commit()
     return RoomResponse.model_validate(room)


@router.delete("/{room_id}", response_model=MessageResponse, summary="Delete room")
def delete_room(
     room_id: int,
     db: Session = Depends(get_session),
     user: User = Depends(require_admin),
):
     """Rooms with tenants in them cannot be deleted."""
     RoomService.delete_room(db, user, room_id)
     db.commit()
     return MessageResponse(message="Room removed")
