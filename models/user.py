# models/user.py
import enum
import secrets

from sqlalchemy import Column, Integer, String, Boolean, DateTime, JSON, ForeignKey, func
from sqlalchemy.orm import relationship
from .base import Base, utcnow


class Role(str, enum.Enum):
     """Account roles, from platform operator down to resident."""
     SUPERADMIN = "superadmin"
     ADMIN = "admin"
     STAFF = "staff"
     TENANT = "tenant"


class VerificationStatus(str, enum.Enum):
     """Owner/admin account verification."""
     UNVERIFIED = "unverified"
     PENDING = "pending"
     VERIFIED = "verified"
     REJECTED = "rejected"


STAFF_ROLES = (Role.STAFF.value, Role.ADMIN.value, Role.SUPERADMIN.value)
ADMIN_ROLES = (Role.ADMIN.value, Role.SUPERADMIN.value)


def default_settings() -> dict:
     return {
          "notifications": {
               "email_notifications": {
                    "new_tenants": True,
                    "payment_reminders": True,
                    "maintenance_requests": True,
                    "system_updates": False,
               },
               "app_notifications": {
                    "push_notifications": True,
                    "sound_alerts": True,
                    "desktop_notifications": False,
               },
          }
     }


class User(Base):
     """
     User model - central authentication table.

     Admin and staff users are bound to one hostel through property_id;
     tenant users link to their tenant profile through tenant_id once
     onboarded.
     """
     __tablename__ = "users"

     id = Column(Integer, primary_key=True, autoincrement=True)
     name = Column(String(100), nullable=False)
     email = Column(String(255), unique=True, nullable=False, index=True)
     password = Column(String(255), nullable=False)
     role = Column(String(20), default=Role.TENANT.value, nullable=False, index=True)
     phone = Column(String(20), nullable=False)
     email_verified = Column(Boolean, default=False, nullable=False)
     phone_verified = Column(Boolean, default=False, nullable=False)

     property_id = Column(Integer, ForeignKey("properties.id", ondelete="SET NULL", use_alter=True), nullable=True, index=True)
     tenant_id = Column(Integer, ForeignKey("tenants.id", ondelete="SET NULL", use_alter=True), nullable=True)

     # Owner/Admin verification
     verification_status = Column(String(20), default=VerificationStatus.UNVERIFIED.value, nullable=False, index=True)
     verified_at = Column(DateTime, nullable=True)
     organizational_code = Column(String(50), unique=True, nullable=True)
     qr_code = Column(String(500), nullable=True)

     # Password reset (sha256 of the emailed token)
     reset_password_token = Column(String(64), nullable=True, index=True)
     reset_password_expire = Column(DateTime, nullable=True)

     profile_image = Column(String(500), nullable=True)
     settings = Column(JSON, default=default_settings, nullable=True)

     created_at = Column(DateTime, default=utcnow, server_default=func.now(), nullable=False)
     updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=True)

     @property
     def is_superadmin(self) -> bool:
          return self.role == Role.SUPERADMIN.value

     # Relationships (declared after the @property helpers, which need the builtin name)
     property = relationship("Property", foreign_keys=[property_id], back_populates="staff_members")
     tenant = relationship("Tenant", foreign_keys=[tenant_id], post_update=True)

     def generate_org_code(self) -> str:
          """
          Generate the organizational code tenants use to self-register
          under this admin's hostel. Requires a flushed id.
          """
          suffix = str(self.id or 0).zfill(6)[-6:]
          code = f"ORG-{suffix}-{secrets.token_hex(3).upper()}"
          self.organizational_code = code
          return code

     def __repr__(self):
          return f"<User(id={self.id}, email='{self.email}', role='{self.role}')>"
