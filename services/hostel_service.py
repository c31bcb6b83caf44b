# services/hostel_service.py
"""
Hostel Service - platform administration used by the super admin.

Covers hostel registration and compliance review, and the admin accounts
that run each hostel.
"""
import logging
from typing import List, Optional, Tuple

from sqlalchemy import func, or_
from sqlalchemy.orm import Session, joinedload

from exceptions import ConflictError, NotFoundError, PermissionDeniedError, ValidationError
from models import (
     ApprovalStatus,
     HostelVerificationStatus,
     Payment,
     Property,
     Role,
     Room,
     RoomStatus,
     Tenant,
     Ticket,
     User,
     VerificationStatus,
)
from models.base import utcnow
from models.property import COMPLIANCE_DOCUMENTS, generate_property_code
from schemas.hostel import AdminCreate, AdminUpdate, HostelCreate, HostelUpdate
from security import hash_password
from services.access import paginate

logger = logging.getLogger(__name__)

ASSIGNABLE_ROLES = (Role.ADMIN.value, Role.STAFF.value, Role.TENANT.value)


def unique_property_code(db: Session) -> str:
     while True:
          code = generate_property_code()
          if db.query(Property.id).filter(Property.organizational_code == code).first() is None:
               return code


class HostelService:
     """Service class for super-admin hostel and admin management."""

     # ------------------------------------------------------------------
     # Stats
     # ------------------------------------------------------------------

     @staticmethod
     def platform_stats(db: Session) -> dict:
          by_status = dict(
               db.query(Property.verification_status, func.count(Property.id))
               .group_by(Property.verification_status)
               .all()
          )
          return {
               "total_hostels": sum(by_status.values()),
               "verified_hostels": by_status.get(HostelVerificationStatus.VERIFIED.value, 0),
               "pending_hostels": by_status.get(HostelVerificationStatus.PENDING.value, 0),
               "rejected_hostels": by_status.get(HostelVerificationStatus.REJECTED.value, 0),
               "total_admins": db.query(User).filter(User.role == Role.ADMIN.value).count(),
               "total_tenants": db.query(Tenant).count(),
               "active_tenants": db.query(Tenant).filter(Tenant.active == True).count(),  # noqa: E712
               "total_rooms": db.query(Room).count(),
               "available_rooms": db.query(Room).filter(Room.status == RoomStatus.AVAILABLE.value).count(),
          }

     @staticmethod
     def hostel_stats(db: Session, property_id: int) -> dict:
          tenants = db.query(Tenant).filter(Tenant.property_id == property_id)
          rooms = db.query(Room).filter(Room.property_id == property_id)
          return {
               "total_tenants": tenants.count(),
               "active_tenants": tenants.filter(Tenant.active == True).count(),  # noqa: E712
               "pending_tenants": tenants.filter(Tenant.approval_status == ApprovalStatus.PENDING.value).count(),
               "total_rooms": rooms.count(),
               "available_rooms": rooms.filter(Room.status == RoomStatus.AVAILABLE.value).count(),
          }

     # ------------------------------------------------------------------
     # Hostels
     # ------------------------------------------------------------------

     @staticmethod
     def get_hostel(db: Session, hostel_id: int) -> Property:
          hostel = (
               db.query(Property)
               .options(joinedload(Property.owner))
               .filter(Property.id == hostel_id)
               .first()
          )
          if hostel is None:
               raise NotFoundError("Hostel not found")
          return hostel

     @staticmethod
     def list_hostels(
          db: Session,
          search: Optional[str] = None,
          status: Optional[str] = None,
          page: int = 1,
          limit: int = 20,
     ) -> Tuple[List[Property], int, int]:
          """
          Search over name, address, owner name and organizational code.

          Returns:
               (hostels, total, total_pages)
          """
          query = db.query(Property).options(joinedload(Property.owner))
          if search:
               pattern = f"%{search.strip().lower()}%"
               query = query.filter(
                    or_(
                         func.lower(Property.name).like(pattern),
                         func.lower(Property.address).like(pattern),
                         func.lower(Property.owner_full_name).like(pattern),
                         func.lower(Property.organizational_code).like(pattern),
                    )
               )
          if status and status != "all":
               query = query.filter(Property.verification_status == status)
          query = query.order_by(Property.created_at.desc(), Property.id.desc())
          return paginate(query, page, limit)

     @staticmethod
     def list_unassigned(db: Session) -> List[Property]:
          """Hostels with no owning admin yet."""
          return (
               db.query(Property)
               .filter(Property.owner_id.is_(None))
               .order_by(Property.name)
               .all()
          )

     @staticmethod
     def hostel_detail(db: Session, hostel_id: int) -> dict:
          hostel = HostelService.get_hostel(db, hostel_id)
          tenants = (
               db.query(Tenant)
               .options(joinedload(Tenant.room))
               .filter(Tenant.property_id == hostel.id)
               .order_by(Tenant.created_at.desc())
               .all()
          )
          rooms = db.query(Room).filter(Room.property_id == hostel.id).order_by(Room.number).all()
          admins = (
               db.query(User)
               .filter(User.property_id == hostel.id, User.role.in_((Role.ADMIN.value, Role.STAFF.value)))
               .order_by(User.created_at)
               .all()
          )
          return {"hostel": hostel, "tenants": tenants, "rooms": rooms, "admins": admins}

     @staticmethod
     def _assign_owner(db: Session, hostel: Property, owner_id: Optional[int]) -> None:
          if owner_id is None:
               hostel.owner = None
               return
          owner = db.get(User, owner_id)
          if owner is None or owner.role != Role.ADMIN.value:
               raise ValidationError("Owner must be an existing admin")
          hostel.owner = owner
          if owner.property_id is None:
               owner.property_id = hostel.id

     @staticmethod
     def _apply_status(hostel: Property, status: str, user: User) -> None:
          hostel.verification_status = status
          if status == HostelVerificationStatus.VERIFIED.value:
               hostel.verified_at = utcnow()
               hostel.verified_by = user.id

     @staticmethod
     def create_hostel(db: Session, user: User, data: HostelCreate) -> Property:
          fields = data.model_dump(exclude_unset=True, exclude={"owner_id", "verification_status"})
          hostel = Property(**fields)
          hostel.organizational_code = unique_property_code(db)
          HostelService._apply_status(hostel, data.verification_status, user)
          db.add(hostel)
          db.flush()

          if data.owner_id is not None:
               HostelService._assign_owner(db, hostel, data.owner_id)
          db.flush()
          logger.info("Hostel %s (%s) created, code=%s", hostel.id, hostel.name, hostel.organizational_code)
          return hostel

     @staticmethod
     def update_hostel(db: Session, user: User, hostel_id: int, data: HostelUpdate) -> Property:
          hostel = HostelService.get_hostel(db, hostel_id)
          fields = data.model_dump(exclude_unset=True)
          if "owner_id" in fields:
               HostelService._assign_owner(db, hostel, fields.pop("owner_id"))
          status = fields.pop("verification_status", None)
          if status is not None and status != hostel.verification_status:
               HostelService._apply_status(hostel, status, user)
          for key, value in fields.items():
               if value is None and key in ("name", "address"):
                    continue
               setattr(hostel, key, value)
          db.flush()
          return hostel

     @staticmethod
     def verify_hostel(db: Session, user: User, hostel_id: int, action: str, reason: Optional[str] = None) -> Property:
          """
          Approve or reject a hostel's compliance review. The owning admin's
          account verification follows the hostel's outcome.

          Raises:
               ValidationError: action other than 'verify' / 'reject'
          """
          hostel = HostelService.get_hostel(db, hostel_id)
          owner = db.get(User, hostel.owner_id) if hostel.owner_id else None

          if action == "verify":
               HostelService._apply_status(hostel, HostelVerificationStatus.VERIFIED.value, user)
               hostel.rejection_reason = None
               if owner is not None:
                    owner.verification_status = VerificationStatus.VERIFIED.value
                    owner.verified_at = utcnow()
          elif action == "reject":
               hostel.verification_status = HostelVerificationStatus.REJECTED.value
               hostel.rejection_reason = (reason or "").strip() or "No reason provided"
               if owner is not None:
                    owner.verification_status = VerificationStatus.REJECTED.value
          else:
               raise ValidationError("Invalid action. Use 'verify' or 'reject'.")

          db.flush()
          logger.info("Hostel %s %s by user %s", hostel.id, hostel.verification_status, user.id)
          return hostel

     @staticmethod
     def set_document(db: Session, hostel_id: int, document: str, url: str) -> Property:
          if document not in COMPLIANCE_DOCUMENTS:
               raise ValidationError("Unknown document type")
          hostel = HostelService.get_hostel(db, hostel_id)
          setattr(hostel, document, url)
          if hostel.verification_status == HostelVerificationStatus.PENDING.value:
               hostel.verification_status = HostelVerificationStatus.UNDER_REVIEW.value
          db.flush()
          return hostel

     @staticmethod
     def delete_hostel(db: Session, hostel_id: int) -> None:
          """Remove a hostel with its tenants, rooms, payments and tickets."""
          hostel = HostelService.get_hostel(db, hostel_id)
          tenant_ids = [row.id for row in db.query(Tenant.id).filter(Tenant.property_id == hostel.id).all()]
          room_ids = [row.id for row in db.query(Room.id).filter(Room.property_id == hostel.id).all()]

          payments = db.query(Payment).filter(Payment.property_id == hostel.id)
          tickets = db.query(Ticket).filter(Ticket.property_id == hostel.id)
          if tenant_ids:
               payments = db.query(Payment).filter(
                    or_(Payment.property_id == hostel.id, Payment.tenant_id.in_(tenant_ids))
               )
               tickets = db.query(Ticket).filter(
                    or_(Ticket.property_id == hostel.id, Ticket.tenant_id.in_(tenant_ids))
               )
          payments.delete(synchronize_session=False)
          tickets.delete(synchronize_session=False)
          if room_ids:
               db.query(Ticket).filter(Ticket.room_id.in_(room_ids)).update(
                    {Ticket.room_id: None}, synchronize_session=False
               )
               db.query(Tenant).filter(Tenant.room_id.in_(room_ids)).update(
                    {Tenant.room_id: None}, synchronize_session=False
               )
          if tenant_ids:
               db.query(User).filter(User.tenant_id.in_(tenant_ids)).update(
                    {User.tenant_id: None}, synchronize_session=False
               )
          db.query(User).filter(User.property_id == hostel.id).update(
               {User.property_id: None}, synchronize_session=False
          )
          db.query(Tenant).filter(Tenant.property_id == hostel.id).delete(synchronize_session=False)
          db.query(Room).filter(Room.property_id == hostel.id).delete(synchronize_session=False)
          db.query(Property).filter(Property.id == hostel.id).delete(synchronize_session=False)
          db.expire_all()
          logger.info(
               "Hostel %s removed with %s tenants and %s rooms", hostel_id, len(tenant_ids), len(room_ids)
          )

     # ------------------------------------------------------------------
     # Admin accounts
     # ------------------------------------------------------------------

     @staticmethod
     def list_admins(db: Session) -> List[User]:
          return (
               db.query(User)
               .options(joinedload(User.property))
               .filter(User.role == Role.ADMIN.value)
               .order_by(User.created_at.desc(), User.id.desc())
               .all()
          )

     @staticmethod
     def get_admin(db: Session, user_id: int) -> User:
          admin = db.get(User, user_id)
          if admin is None or admin.role != Role.ADMIN.value:
               raise NotFoundError("Admin not found")
          return admin

     @staticmethod
     def _hostel_or_error(db: Session, property_id: int) -> Property:
          hostel = db.get(Property, property_id)
          if hostel is None:
               raise NotFoundError("Hostel not found")
          return hostel

     @staticmethod
     def create_admin(db: Session, data: AdminCreate) -> User:
          """
          Create an admin account with its own organizational code. When a
          hostel is given and has no owner yet, the admin becomes its owner.
          """
          if db.query(User.id).filter(func.lower(User.email) == data.email).first() is not None:
               raise ConflictError("User already exists")

          hostel = HostelService._hostel_or_error(db, data.property_id) if data.property_id else None
          admin = User(
               name=data.name.strip(),
               email=data.email,
               phone=data.phone,
               password=hash_password(data.password),
               role=Role.ADMIN.value,
               property_id=hostel.id if hostel is not None else None,
               verification_status=VerificationStatus.PENDING.value,
          )
          db.add(admin)
          db.flush()
          admin.generate_org_code()
          if hostel is not None and hostel.owner_id is None:
               hostel.owner_id = admin.id
          db.flush()
          logger.info("Admin %s created (property=%s)", admin.id, admin.property_id)
          return admin

     @staticmethod
     def update_admin(db: Session, user_id: int, data: AdminUpdate) -> User:
          admin = HostelService.get_admin(db, user_id)
          fields = data.model_dump(exclude_unset=True, exclude_none=True)
          if "email" in fields and fields["email"] != admin.email:
               taken = db.query(User.id).filter(func.lower(User.email) == fields["email"], User.id != admin.id).first()
               if taken is not None:
                    raise ConflictError("Email already in use")
          if "property_id" in fields:
               HostelService._hostel_or_error(db, fields["property_id"])
          if fields.get("verification_status") == VerificationStatus.VERIFIED.value:
               admin.verified_at = utcnow()
          for key, value in fields.items():
               setattr(admin, key, value)
          db.flush()
          return admin

     @staticmethod
     def delete_admin(db: Session, user_id: int) -> None:
          """
          Delete an admin account. Hostels it owned become unassigned and
          records it signed keep their data without the reference.
          """
          target = db.get(User, user_id)
          if target is None:
               raise NotFoundError("User not found")
          if target.is_superadmin:
               raise PermissionDeniedError("Cannot delete superadmin")

          db.query(Property).filter(Property.owner_id == target.id).update(
               {Property.owner_id: None}, synchronize_session=False
          )
          db.query(Property).filter(Property.verified_by == target.id).update(
               {Property.verified_by: None}, synchronize_session=False
          )
          db.query(Tenant).filter(Tenant.approved_by == target.id).update(
               {Tenant.approved_by: None}, synchronize_session=False
          )
          db.query(Payment).filter(Payment.recorded_by == target.id).update(
               {Payment.recorded_by: None}, synchronize_session=False
          )
          db.query(Ticket).filter(Ticket.created_by == target.id).update(
               {Ticket.created_by: None}, synchronize_session=False
          )
          db.delete(target)
          db.flush()
          logger.info("User %s deleted", user_id)

     @staticmethod
     def update_role(db: Session, user_id: int, role: str) -> User:
          """
          Raises:
               ValidationError: role outside admin/staff/tenant
               PermissionDeniedError: target is the superadmin
          """
          if role not in ASSIGNABLE_ROLES:
               raise ValidationError("Invalid role")
          target = db.get(User, user_id)
          if target is None:
               raise NotFoundError("User not found")
          if target.is_superadmin:
               raise PermissionDeniedError("Cannot change superadmin role")

          target.role = role
          if role == Role.ADMIN.value and not target.organizational_code:
               target.generate_org_code()
          db.flush()
          logger.info("User %s role changed to %s", target.id, role)
          return target
