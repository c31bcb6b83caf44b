# services/tenant_service.py
"""
Tenant Service - Business logic layer for the tenant lifecycle.

registration (onboard, pending) -> admin approval (approved, active, seat held)
-> vacate / room exchange / removal

Room occupancy is only touched through services.occupancy_service so the
capacity check and the counter update stay a single statement.
"""
import calendar
import logging
from datetime import date
from typing import List, Optional, Tuple

from sqlalchemy import func, or_
from sqlalchemy.orm import Session, joinedload

from exceptions import ConflictError, GatewayError, NotFoundError, PermissionDeniedError, ValidationError
from models import ApprovalStatus, Payment, PaymentType, Property, Role, Room, Tenant, Ticket, User
from models.base import utcnow
from models.ticket import OPEN_TICKET_STATUSES
from schemas.tenant import SendSmsRequest, TenantCreate, TenantOnboard, TenantUpdate
from services import occupancy_service
from services.access import apply_scope, in_scope, paginate
from utils import email as mailer
from utils import sms

logger = logging.getLogger(__name__)


def _add_month(day: date) -> date:
     """Same day next month, clamped to the month's length."""
     year = day.year + (day.month // 12)
     month = day.month % 12 + 1
     return date(year, month, min(day.day, calendar.monthrange(year, month)[1]))


def _split_name(name: str) -> Tuple[str, Optional[str]]:
     parts = (name or "").split()
     if not parts:
          return "", None
     return parts[0], " ".join(parts[1:]) or None


class TenantService:
     """Service class for tenant-related business logic."""

     # ------------------------------------------------------------------
     # Lookups
     # ------------------------------------------------------------------

     @staticmethod
     def get_scoped(db: Session, user: User, tenant_id: int) -> Tenant:
          """
          Load a tenant visible to a staff-level user.

          Raises:
               NotFoundError: missing, or in another hostel
          """
          tenant = (
               db.query(Tenant)
               .options(joinedload(Tenant.room))
               .filter(Tenant.id == tenant_id)
               .first()
          )
          if tenant is None or not in_scope(user, tenant.property_id):
               raise NotFoundError("Tenant not found")
          return tenant

     @staticmethod
     def get_for_viewer(db: Session, user: User, tenant_id: int) -> Tenant:
          """Staff see tenants of their hostel; a tenant sees only their own profile."""
          if user.role == Role.TENANT.value:
               if user.tenant_id != tenant_id:
                    raise PermissionDeniedError("Not authorized to view this tenant")
               tenant = db.get(Tenant, tenant_id)
               if tenant is None:
                    raise NotFoundError("Tenant not found")
               return tenant
          return TenantService.get_scoped(db, user, tenant_id)

     @staticmethod
     def _scoped_room(db: Session, user: User, room_id: int) -> Room:
          room = db.get(Room, room_id)
          if room is None or not in_scope(user, room.property_id):
               raise NotFoundError("Room not found")
          return room

     @staticmethod
     def _ensure_email_free(db: Session, email: str, exclude_id: Optional[int] = None) -> None:
          query = db.query(Tenant.id).filter(func.lower(Tenant.email) == email.lower())
          if exclude_id is not None:
               query = query.filter(Tenant.id != exclude_id)
          if query.first() is not None:
               raise ConflictError("Tenant with this email already exists")

     # ------------------------------------------------------------------
     # Queries
     # ------------------------------------------------------------------

     @staticmethod
     def list_tenants(
          db: Session,
          user: User,
          search: Optional[str] = None,
          status: str = "all",
          approval_status: Optional[str] = None,
          page: int = 1,
          limit: int = 10,
     ) -> Tuple[List[Tenant], int, int]:
          """
          List tenants of the caller's hostel, newest first.

          Args:
               search: case-insensitive match on first/last name, email, phone
               status: 'all', 'active' or 'inactive'
               approval_status: pending/approved/rejected filter

          Returns:
               (tenants, total, total_pages)
          """
          query = apply_scope(db.query(Tenant).options(joinedload(Tenant.room)), Tenant.property_id, user)

          if search:
               pattern = f"%{search.strip().lower()}%"
               query = query.filter(
                    or_(
                         func.lower(Tenant.first_name).like(pattern),
                         func.lower(Tenant.last_name).like(pattern),
                         func.lower(Tenant.email).like(pattern),
                         Tenant.phone.like(pattern),
                    )
               )
          if status and status != "all":
               query = query.filter(Tenant.active == (status == "active"))
          if approval_status:
               query = query.filter(Tenant.approval_status == approval_status)

          query = query.order_by(Tenant.created_at.desc(), Tenant.id.desc())
          return paginate(query, page, limit)

     @staticmethod
     def stats(db: Session, user: User) -> dict:
          base = apply_scope(db.query(Tenant), Tenant.property_id, user)
          total = base.count()
          active = base.filter(Tenant.active == True).count()  # noqa: E712
          pending = base.filter(Tenant.approval_status == ApprovalStatus.PENDING.value).count()

          by_room = (
               apply_scope(db.query(Tenant.room_id, func.count(Tenant.id)), Tenant.property_id, user)
               .filter(Tenant.room_id.isnot(None))
               .group_by(Tenant.room_id)
               .order_by(Tenant.room_id)
               .all()
          )
          return {
               "total": total,
               "active": active,
               "inactive": total - active,
               "pending": pending,
               "by_room": [{"room_id": room_id, "count": count} for room_id, count in by_room],
          }

     @staticmethod
     def dashboard(db: Session, user: User) -> dict:
          """
          Summary for the signed-in resident.

          current_rent is the last rent payment, falling back to the room's
          rent; the next due date is one month after that payment, or the 1st
          of next month when nothing was paid yet.
          """
          if user.tenant_id is None:
               raise NotFoundError("Tenant profile not found")
          tenant = db.query(Tenant).options(joinedload(Tenant.room)).filter(Tenant.id == user.tenant_id).first()
          if tenant is None:
               raise NotFoundError("Tenant profile not found")

          recent_payments = (
               db.query(Payment)
               .filter(Payment.tenant_id == tenant.id)
               .order_by(Payment.paid_at.desc())
               .limit(5)
               .all()
          )
          active_tickets = (
               db.query(Ticket)
               .filter(Ticket.tenant_id == tenant.id, Ticket.status.in_(OPEN_TICKET_STATUSES))
               .order_by(Ticket.created_at.desc())
               .all()
          )
          last_rent = (
               db.query(Payment)
               .filter(Payment.tenant_id == tenant.id, Payment.type == PaymentType.RENT.value)
               .order_by(Payment.paid_at.desc())
               .first()
          )

          today = date.today()
          if last_rent is not None:
               current_rent = float(last_rent.amount)
               due_date = _add_month(last_rent.paid_at.date())
          else:
               current_rent = float(tenant.room.rent) if tenant.room is not None else 0.0
               due_date = _add_month(today.replace(day=1))

          return {
               "tenant_id": tenant.id,
               "user_name": tenant.full_name,
               "approval_status": tenant.approval_status,
               "active": tenant.active,
               "current_rent": current_rent,
               "due_date": due_date,
               "active_issues": len(active_tickets),
               "room_number": tenant.room.number if tenant.room is not None else None,
               "recent_payments": recent_payments,
               "active_tickets": active_tickets,
          }

     # ------------------------------------------------------------------
     # Registration
     # ------------------------------------------------------------------

     @staticmethod
     def create_tenant(db: Session, user: User, data: TenantCreate) -> Tenant:
          """
          Admin-entered tenant: approved and active immediately, holding a
          seat in the given room.

          Raises:
               ConflictError: email taken, or room full
               NotFoundError: room missing or outside the admin's hostel
          """
          TenantService._ensure_email_free(db, data.email)

          fields = data.model_dump(exclude_unset=True)
          room = None
          if data.room_id is not None:
               room = TenantService._scoped_room(db, user, data.room_id)
               occupancy_service.reserve_seat(db, room.id)

          tenant = Tenant(**fields)
          tenant.property_id = room.property_id if room is not None else user.property_id
          tenant.approval_status = ApprovalStatus.APPROVED.value
          tenant.approved_by = user.id
          tenant.approval_date = utcnow()
          tenant.active = True
          db.add(tenant)
          db.flush()

          logger.info("Tenant %s created by user %s (room=%s)", tenant.id, user.id, tenant.room_id)
          return tenant

     @staticmethod
     def onboard(db: Session, user: User, data: TenantOnboard) -> Tenant:
          """
          Self-service registration by a tenant account. The request waits
          for admin approval, so the room is only checked for space here.

          Raises:
               ConflictError: already onboarded, or room full
               ValidationError: terms not accepted
               NotFoundError: room missing or in another hostel
          """
          if user.tenant_id is not None:
               raise ConflictError("User already onboarded")
          if not data.terms_accepted:
               raise ValidationError("You must accept the terms and conditions")

          room = occupancy_service.ensure_room_has_space(db, data.room_id)
          if user.property_id is not None and room.property_id != user.property_id:
               raise NotFoundError("Room not found")
          TenantService._ensure_email_free(db, user.email)

          first_name, last_name = _split_name(user.name)
          property_id = user.property_id or room.property_id
          org_code = None
          if property_id is not None:
               hostel = db.get(Property, property_id)
               org_code = hostel.organizational_code if hostel is not None else None

          tenant = Tenant(**data.model_dump(exclude_unset=True))
          tenant.first_name = first_name
          tenant.last_name = last_name
          tenant.email = user.email
          tenant.phone = user.phone
          tenant.property_id = property_id
          tenant.terms_accepted_at = utcnow()
          tenant.organizational_code = org_code
          tenant.approval_status = ApprovalStatus.PENDING.value
          tenant.active = False
          db.add(tenant)
          db.flush()

          user.tenant_id = tenant.id
          if user.property_id is None:
               user.property_id = property_id
          db.flush()

          logger.info("User %s submitted onboarding as tenant %s (room=%s)", user.id, tenant.id, room.id)
          return tenant

     # ------------------------------------------------------------------
     # Approval workflow
     # ------------------------------------------------------------------

     @staticmethod
     def approve(db: Session, user: User, tenant_id: int) -> Tenant:
          """
          Approve a pending (or previously rejected) tenant and take the
          room seat. When the room is full nothing changes and the tenant
          stays pending.

          Raises:
               NotFoundError: tenant missing
               ConflictError: already approved, or room full
          """
          tenant = TenantService.get_scoped(db, user, tenant_id)
          if tenant.approval_status == ApprovalStatus.APPROVED.value:
               raise ConflictError("Tenant is already approved")

          if tenant.room_id is not None:
               occupancy_service.reserve_seat(db, tenant.room_id)

          tenant.approval_status = ApprovalStatus.APPROVED.value
          tenant.active = True
          tenant.approved_by = user.id
          tenant.approval_date = utcnow()
          tenant.rejection_reason = None
          tenant.vacated_at = None
          db.flush()
          db.refresh(tenant)

          logger.info("Tenant %s approved by user %s", tenant.id, user.id)
          return tenant

     @staticmethod
     def notify_approval(tenant: Tenant) -> None:
          """Best-effort SMS and email; failures are logged only."""
          try:
               result = sms.send_sms(
                    tenant.phone,
                    f"Hello {tenant.first_name}, your tenant registration has been approved! "
                    "You can now log in to RootnSpace.",
                    "tenant-approval",
               )
               if not result.success:
                    logger.warning("Approval SMS for tenant %s not sent: %s", tenant.id, result.error)
          except Exception:
               logger.exception("Approval SMS for tenant %s failed", tenant.id)
          try:
               if not mailer.send_approval_email(tenant.email, tenant.first_name):
                    logger.warning("Approval email for tenant %s not sent", tenant.id)
          except Exception:
               logger.exception("Approval email for tenant %s failed", tenant.id)

     @staticmethod
     def reject(db: Session, user: User, tenant_id: int, reason: Optional[str] = None) -> Tenant:
          """
          Reject a registration. Occupancy is never touched: a pending
          tenant holds no seat, and an approved one must be vacated instead.
          """
          tenant = TenantService.get_scoped(db, user, tenant_id)
          if tenant.approval_status == ApprovalStatus.APPROVED.value:
               raise ConflictError("Cannot reject an approved tenant; vacate the tenant instead")

          tenant.approval_status = ApprovalStatus.REJECTED.value
          tenant.active = False
          tenant.rejection_reason = (reason or "").strip() or "No reason provided"
          db.flush()

          logger.info("Tenant %s rejected by user %s", tenant.id, user.id)
          return tenant

     # ------------------------------------------------------------------
     # Changes
     # ------------------------------------------------------------------

     @staticmethod
     def update(db: Session, user: User, tenant_id: int, data: TenantUpdate) -> Tenant:
          """
          Partial update.

          Moving a seat-holding tenant to another room reserves the new room
          before releasing the old one, so a full target leaves everything as
          it was. Toggling active on an approved tenant takes or gives back
          the seat.
          """
          tenant = TenantService.get_scoped(db, user, tenant_id)
          fields = data.model_dump(exclude_unset=True)

          if fields.get("email") and fields["email"] != tenant.email:
               TenantService._ensure_email_free(db, fields["email"], exclude_id=tenant.id)

          old_room_id = tenant.room_id
          was_holding = tenant.holds_seat
          new_room_id = fields.pop("room_id", old_room_id)
          # null for active means "leave as is"; null for room_id unassigns
          new_active = fields.pop("active", None)
          if new_active is None:
               new_active = tenant.active
          if "first_name" in fields and fields["first_name"] is None:
               fields.pop("first_name")

          if new_room_id is not None and new_room_id != old_room_id:
               TenantService._scoped_room(db, user, new_room_id)
          if new_active and not tenant.active and tenant.approval_status != ApprovalStatus.APPROVED.value:
               raise ValidationError("Only approved tenants can be activated")

          will_hold = (
               new_room_id is not None
               and tenant.approval_status == ApprovalStatus.APPROVED.value
               and bool(new_active)
          )
          moved = new_room_id != old_room_id

          if will_hold and (not was_holding or moved):
               occupancy_service.reserve_seat(db, new_room_id)
          if was_holding and (not will_hold or moved):
               occupancy_service.release_seat(db, old_room_id)

          if moved:
               logger.info("Tenant %s moved from room %s to %s", tenant.id, old_room_id, new_room_id)
          if new_active and not tenant.active:
               tenant.vacated_at = None

          for key, value in fields.items():
               setattr(tenant, key, value)
          tenant.room_id = new_room_id
          tenant.active = bool(new_active)
          if new_room_id is not None and moved:
               tenant.property_id = db.get(Room, new_room_id).property_id
          db.flush()
          db.refresh(tenant)
          return tenant

     @staticmethod
     def vacate(db: Session, user: User, tenant_id: int) -> Tenant:
          """Move an active tenant out: release the seat and stamp vacated_at."""
          tenant = TenantService.get_scoped(db, user, tenant_id)
          if not tenant.active:
               raise ConflictError("Tenant is not currently active")

          if tenant.holds_seat:
               occupancy_service.release_seat(db, tenant.room_id)
          tenant.active = False
          tenant.vacated_at = utcnow()
          db.flush()
          db.refresh(tenant)

          logger.info("Tenant %s vacated room %s", tenant.id, tenant.room_id)
          return tenant

     @staticmethod
     def delete(db: Session, user: User, tenant_id: int) -> None:
          """
          Remove a tenant with their payments and tickets. A held seat is
          given back (occupancy drops by exactly one, never below zero).
          """
          tenant = TenantService.get_scoped(db, user, tenant_id)
          if tenant.holds_seat:
               occupancy_service.release_seat(db, tenant.room_id)

          for linked in db.query(User).filter(User.tenant_id == tenant.id).all():
               linked.tenant_id = None
          db.flush()

          db.delete(tenant)
          db.flush()
          logger.info("Tenant %s removed by user %s", tenant_id, user.id)

     # ------------------------------------------------------------------
     # Messaging
     # ------------------------------------------------------------------

     @staticmethod
     def send_sms_to_tenants(db: Session, user: User, data: SendSmsRequest) -> Tuple[str, List[dict]]:
          """
          Bulk SMS. Individual failures are reported per tenant and never
          abort the batch.

          Returns:
               (summary message, per-tenant results)
          """
          if not data.tenant_ids:
               raise ValidationError("Tenant IDs array is required")
          if not data.message or not data.message.strip():
               raise ValidationError("Message is required")

          tenants = (
               apply_scope(db.query(Tenant), Tenant.property_id, user)
               .filter(Tenant.id.in_(data.tenant_ids))
               .order_by(Tenant.id)
               .all()
          )
          if not tenants:
               raise NotFoundError("No tenants found")

          message = data.message.strip()
          results = []
          for tenant in tenants:
               result = sms.send_sms(tenant.phone, f"Hello {tenant.full_name}, {message}", "bulk")
               results.append(
                    {
                         "tenant_id": tenant.id,
                         "name": tenant.full_name,
                         "phone": tenant.phone,
                         "success": result.success,
                         "error": result.error,
                    }
               )

          sent = sum(1 for r in results if r["success"])
          failed = len(results) - sent
          logger.info("Bulk SMS by user %s: %s sent, %s failed", user.id, sent, failed)
          return f"SMS sent to {sent} tenants, {failed} failed", results

     @staticmethod
     def send_manual_sms(phone: str, message: str) -> Optional[str]:
          """
          Send a one-off SMS to any number.

          Returns:
               gateway message sid

          Raises:
               ValidationError: blank phone or message
               GatewayError: the gateway refused or is not configured
          """
          if not phone or not phone.strip():
               raise ValidationError("Phone number is required")
          if not message or not message.strip():
               raise ValidationError("Message is required")

          result = sms.send_sms(phone.strip(), message.strip(), "manual")
          if not result.success:
               raise GatewayError(result.error or "Failed to send SMS")
          return result.sid
