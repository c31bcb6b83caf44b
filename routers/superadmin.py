# routers/superadmin.py
"""
Super admin API routes: platform statistics, hostel onboarding and
compliance review, and admin account management.

Every route requires the superadmin role.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import require_superadmin
from models import User
from models.property import COMPLIANCE_DOCUMENTS
from schemas.auth import UserResponse
from schemas.common import MessageResponse
from schemas.hostel import (
     AdminCreate,
     AdminListResponse,
     AdminResponse,
     AdminUpdate,
     HostelActionResponse,
     HostelCreate,
     HostelDetailResponse,
     HostelListResponse,
     HostelResponse,
     HostelStatusLiteral,
     HostelUpdate,
     HostelVerifyRequest,
     HostelWithStats,
     PlatformStatsResponse,
     RoleUpdate,
     RoleUpdateResponse,
)
from schemas.room import RoomResponse
from schemas.tenant import TenantResponse
from services.hostel_service import HostelService
from utils import storage

router = APIRouter(prefix="/api/superadmin", tags=["superadmin"])


# ---------------------------------------------------------------------------
# Platform
# ---------------------------------------------------------------------------

@router.get("/stats", response_model=PlatformStatsResponse, summary="Platform statistics")
def platform_stats(
     db: Session = Depends(get_session),
     user: User = Depends(require_superadmin),
):
     return PlatformStatsResponse(**HostelService.platform_stats(db))


# ---------------------------------------------------------------------------
# Hostels
# ---------------------------------------------------------------------------

@router.get("/hostels", response_model=HostelListResponse, summary="List hostels")
def list_hostels(
     search: Optional[str] = Query(None, description="Name, address, owner or organizational code"),
     status_filter: Optional[HostelStatusLiteral] = Query(None, alias="status"),
     page: int = Query(1, ge=1),
     limit: int = Query(20, ge=1, le=100),
     db: Session = Depends(get_session),
     user: User = Depends(require_superadmin),
):
     """Hostels newest first, each with tenant and room counts."""
     hostels, total, total_pages = HostelService.list_hostels(
          db, search=search, status=status_filter, page=page, limit=limit
     )
     items = [
          HostelWithStats(
               **HostelResponse.model_validate(h).model_dump(),
               stats=HostelService.hostel_stats(db, h.id),
          )
          for h in hostels
     ]
     return HostelListResponse(hostels=items, total=total, total_pages=total_pages, current_page=page)


@router.get("/hostels-unassigned", response_model=List[HostelResponse], summary="Hostels without an admin")
def unassigned_hostels(
     db: Session = Depends(get_session),
     user: User = Depends(require_superadmin),
):
     return [HostelResponse.model_validate(h) for h in HostelService.list_unassigned(db)]


@router.get("/hostels/{hostel_id}", response_model=HostelDetailResponse, summary="Hostel detail")
def get_hostel(
     hostel_id: int,
     db: Session = Depends(get_session),
     user: User = Depends(require_superadmin),
):
     detail = HostelService.hostel_detail(db, hostel_id)
     return HostelDetailResponse(
          hostel=HostelResponse.model_validate(detail["hostel"]),
          tenants=[TenantResponse.model_validate(t) for t in detail["tenants"]],
          rooms=[RoomResponse.model_validate(r) for r in detail["rooms"]],
          admins=[UserResponse.model_validate(a) for a in detail["admins"]],
     )


@router.post("/hostels", response_model=HostelResponse, status_code=status.HTTP_201_CREATED, summary="Create hostel")
def create_hostel(
     body: HostelCreate,
     db: Session = Depends(get_session),
     user: User = Depends(require_superadmin),
):
     """Registers a hostel and issues its organizational code."""
     hostel = HostelService.create_hostel(db, user, body)
     db.commit()
     return HostelResponse.model_validate(hostel)


@router.put("/hostels/{hostel_id}", response_model=HostelResponse, summary="Update hostel")
def update_hostel(
     hostel_id: int,
     body: HostelUpdate,
     db: Session = Depends(get_session),
     user: User = Depends(require_superadmin),
):
     hostel = HostelService.update_hostel(db, user, hostel_id, body)
     db.commit()
     return HostelResponse.model_validate(hostel)


@router.put("/hostels/{hostel_id}/verify", response_model=HostelActionResponse, summary="Verify or reject hostel")
def verify_hostel(
     hostel_id: int,
     body: HostelVerifyRequest,
     db: Session = Depends(get_session),
     user: User = Depends(require_superadmin),
):
     hostel = HostelService.verify_hostel(db, user, hostel_id, body.action, body.reason)
     db.commit()
     outcome = "verified" if body.action == "verify" else "rejected"
     return HostelActionResponse(
          message=f"Hostel {outcome} successfully",
          hostel=HostelResponse.model_validate(hostel),
     )


@router.put("/hostels/{hostel_id}/documents/{document}", response_model=HostelResponse, summary="Upload compliance document")
def upload_document(
     hostel_id: int,
     document: str,
     file: UploadFile = File(...),
     db: Session = Depends(get_session),
     user: User = Depends(require_superadmin),
):
     """
     Store one compliance document (trade_license, noc, owner_government_id...)
     and attach its URL to the hostel.
     """
     if document not in COMPLIANCE_DOCUMENTS:
          raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Unknown document type")
     previous = getattr(HostelService.get_hostel(db, hostel_id), document)
     url = storage.store_upload(file, f"compliance/{hostel_id}")
     hostel = HostelService.set_document(db, hostel_id, document, url)
     db.commit()
     storage.remove_upload(previous)
     return HostelResponse.model_validate(hostel)


@router.delete("/hostels/{hostel_id}", response_model=MessageResponse, summary="Delete hostel")
def delete_hostel(
     hostel_id: int,
     db: Session = Depends(get_session),
     user: User = Depends(require_superadmin),
):
     HostelService.delete_hostel(db, hostel_id)
     db.commit()
     return MessageResponse(message="Hostel and all associated data removed")


# ---------------------------------------------------------------------------
# Admin accounts
# ---------------------------------------------------------------------------

@router.get("/admins", response_model=AdminListResponse, summary="List admins")
def list_admins(
     db: Session = Depends(get_session),
     user: User = Depends(require_superadmin),
):
     return AdminListResponse(admins=[AdminResponse.model_validate(a) for a in HostelService.list_admins(db)])


@router.post("/admins", response_model=AdminResponse, status_code=status.HTTP_201_CREATED, summary="Create admin")
def create_admin(
     body: AdminCreate,
     db: Session = Depends(get_session),
     user: User = Depends(require_superadmin),
):
     admin = HostelService.create_admin(db, body)
     db.commit()
     return AdminResponse.model_validate(admin)


@router.put("/admins/{user_id}", response_model=AdminResponse, summary="Update admin")
def update_admin(
     user_id: int,
     body: AdminUpdate,
     db: Session = Depends(get_session),
     user: User = Depends(require_superadmin),
):
     admin = HostelService.update_admin(db, user_id, body)
     db.commit()
     db.refresh(admin)
     return AdminResponse.model_validate(admin)


@router.delete("/admins/{user_id}", response_model=MessageResponse, summary="Delete admin")
def delete_admin(
     user_id: int,
     db: Session = Depends(get_session),
     user: User = Depends(require_superadmin),
):
     HostelService.delete_admin(db, user_id)
     db.commit()
     return MessageResponse(message="Admin removed")


@router.put("/admins/{user_id}/role", response_model=RoleUpdateResponse, summary="Change a user's role")
def update_role(
     user_id: int,
     body: RoleUpdate,
     db: Session = Depends(get_session),
     user: User = Depends(require_superadmin),
):
     target = HostelService.update_role(db, user_id, body.role)
     db.commit()
     return RoleUpdateResponse(
          message=f"User role updated to {target.role}",
          user=UserResponse.model_validate(target),
     )
