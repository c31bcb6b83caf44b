# routers/tenants.py
"""
Tenant API routes.

Role-based access:
- Staff (staff/admin/superadmin): list and view tenants of their hostel
- Admin: register, approve, reject, edit, vacate and remove tenants; SMS
- Tenant: onboarding and own dashboard
"""
from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import get_current_user, require_admin, require_staff, require_tenant
from models import User
from rate_limiter import sms_rate_limit
from schemas.common import MessageResponse
from schemas.payment import PaymentResponse
from schemas.tenant import (
     ManualSmsRequest,
     ManualSmsResponse,
     OnboardResponse,
     SendSmsRequest,
     SendSmsResponse,
     TenantActionResponse,
     TenantCreate,
     TenantDashboardResponse,
     TenantListResponse,
     TenantOnboard,
     TenantReject,
     TenantResponse,
     TenantStatsResponse,
     TenantUpdate,
)
from schemas.ticket import TicketResponse
from services.tenant_service import TenantService

router = APIRouter(prefix="/api/tenants", tags=["tenants"])


# ---------------------------------------------------------------------------
# Collection and static paths (declared before /{tenant_id})
# ---------------------------------------------------------------------------

@router.get("", response_model=TenantListResponse, summary="List tenants")
def list_tenants(
     search: Optional[str] = Query(None, description="Name, email or phone"),
     status_filter: Literal["all", "active", "inactive"] = Query("all", alias="status"),
     approval_status: Optional[Literal["pending", "approved", "rejected"]] = Query(None),
     page: int = Query(1, ge=1),
     limit: int = Query(10, ge=1, le=100),
     db: Session = Depends(get_session),
     user: User = Depends(require_staff),
):
     """
     List tenants of the caller's hostel, newest first.
     Superadmin sees every hostel.
     """
     tenants, total, total_pages = TenantService.list_tenants(
          db, user, search=search, status=status_filter, approval_status=approval_status, page=page, limit=limit
     )
     return TenantListResponse(
          tenants=[TenantResponse.model_validate(t) for t in tenants],
          total=total,
          total_pages=total_pages,
          current_page=page,
     )


@router.get("/stats", response_model=TenantStatsResponse, summary="Tenant statistics")
def tenant_stats(
     db: Session = Depends(get_session),
     user: User = Depends(require_admin),
):
     return TenantStatsResponse(**TenantService.stats(db, user))


@router.get("/dashboard/my-info", response_model=TenantDashboardResponse, summary="Resident dashboard")
def my_dashboard(
     db: Session = Depends(get_session),
     user: User = Depends(require_tenant),
):
     """Rent, due date, open issues and recent activity for the signed-in tenant."""
     data = TenantService.dashboard(db, user)
     data["recent_payments"] = [PaymentResponse.model_validate(p) for p in data["recent_payments"]]
     data["active_tickets"] = [TicketResponse.model_validate(t) for t in data["active_tickets"]]
     return TenantDashboardResponse(**data)


@router.post(
     "",
     response_model=TenantResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Register a tenant (admin)",
)
def create_tenant(
     body: TenantCreate,
     db: Session = Depends(get_session),
     user: User = Depends(require_admin),
):
     """
     Admin-entered tenants skip the approval queue: they are created approved
     and active, and take a seat in the given room right away.
     """
     tenant = TenantService.create_tenant(db, user, body)
     db.commit()
     return TenantResponse.model_validate(tenant)


@router.post(
     "/onboard",
     response_model=OnboardResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Submit tenant onboarding",
)
def onboard(
     body: TenantOnboard,
     db: Session = Depends(get_session),
     user: User = Depends(require_tenant),
):
     """Self registration. The tenant waits as pending until an admin approves."""
     tenant = TenantService.onboard(db, user, body)
     db.commit()
     return OnboardResponse.model_validate(tenant)


@router.post("/send-sms", response_model=SendSmsResponse, summary="Send SMS to tenants")
@sms_rate_limit
def send_sms(
     request: Request,
     body: SendSmsRequest,
     db: Session = Depends(get_session),
     user: User = Depends(require_admin),
):
     message, results = TenantService.send_sms_to_tenants(db, user, body)
     return SendSmsResponse(message=message, results=results)


@router.post("/send-manual-sms", response_model=ManualSmsResponse, summary="Send SMS to any number")
@sms_rate_limit
def send_manual_sms(
     request: Request,
     body: ManualSmsRequest,
     user: User = Depends(require_admin),
):
     sid = TenantService.send_manual_sms(body.phone, body.message)
     return ManualSmsResponse(message="SMS sent successfully", sid=sid)


# ---------------------------------------------------------------------------
# Single tenant
# ---------------------------------------------------------------------------

@router.get("/{tenant_id}", response_model=TenantResponse, summary="Get tenant")
def get_tenant(
     tenant_id: int,
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user),
):
     """Staff see tenants of their hostel; a tenant may only read their own profile."""
     return TenantResponse.model_validate(TenantService.get_for_viewer(db, user, tenant_id))


@router.put("/{tenant_id}/approve", response_model=TenantActionResponse, summary="Approve tenant")
def approve_tenant(
     tenant_id: int,
     db: Session = Depends(get_session),
     user: User = Depends(require_admin),
):
     """
     Approve a registration and take a seat in the tenant's room.
     Returns 400 when the room is already full; the tenant then stays pending.
     """
     tenant = TenantService.approve(db, user, tenant_id)
     db.commit()
     TenantService.notify_approval(tenant)
     return TenantActionResponse(message="Tenant approved successfully", tenant=TenantResponse.model_validate(tenant))


@router.put("/{tenant_id}/reject", response_model=TenantActionResponse, summary="Reject tenant")
def reject_tenant(
     tenant_id: int,
     body: Optional[TenantReject] = None,
     db: Session = Depends(get_session),
     user: User = Depends(require_admin),
):
     reason = body.rejection_reason if body is not None else None
     tenant = TenantService.reject(db, user, tenant_id, reason)
     db.commit()
     return TenantActionResponse(message="Tenant rejected", tenant=TenantResponse.model_validate(tenant))


@router.put("/{tenant_id}/vacate", response_model=TenantActionResponse, summary="Vacate tenant")
def vacate_tenant(
     tenant_id: int,
     db: Session = Depends(get_session),
     user: User = Depends(require_admin),
):
     tenant = TenantService.vacate(db, user, tenant_id)
     db.commit()
     return TenantActionResponse(message="Tenant vacated", tenant=TenantResponse.model_validate(tenant))


@router.put("/{tenant_id}", response_model=TenantResponse, summary="Update tenant")
def update_tenant(
     tenant_id: int,
     body: TenantUpdate,
     db: Session = Depends(get_session),
     user: User = Depends(require_admin),
):
     """
     Partial update. A new room_id on a seated tenant is a room exchange:
     the new room is reserved before the old one is released.
     """
     tenant = TenantService.update(db, user, tenant_id, body)
     db.commit()
     return TenantResponse.model_validate(tenant)


@router.delete("/{tenant_id}", response_model=MessageResponse, summary="Remove tenant")
def delete_tenant(
     tenant_id: int,
     db: Session = Depends(get_session),
     user: User = Depends(require_admin),
):
     TenantService.delete(db, user, tenant_id)
     db.commit()
     return MessageResponse(message="Tenant removed")
