# models/tenant.py
import enum

from sqlalchemy import Column, Integer, String, Numeric, Boolean, Date, DateTime, Text, ForeignKey, func
from sqlalchemy.orm import relationship
from .base import Base, utcnow


class ApprovalStatus(str, enum.Enum):
     """Onboarding approval. pending -> approved | rejected, decided by an admin."""
     PENDING = "pending"
     APPROVED = "approved"
     REJECTED = "rejected"


GENDERS = ("male", "female", "other")
BLOOD_GROUPS = ("A+", "A-", "B+", "B-", "AB+", "AB-", "O+", "O-", "")


class Tenant(Base):
     """
     Tenant model - resident profile within a hostel.

     A tenant holds a seat in its room (counted in Room.occupancy) only while
     approved and active.
     """
     __tablename__ = "tenants"

     id = Column(Integer, primary_key=True, autoincrement=True)
     property_id = Column(Integer, ForeignKey("properties.id", ondelete="CASCADE"), nullable=True, index=True)

     # Personal info
     first_name = Column(String(100), nullable=False)
     last_name = Column(String(100), nullable=True)
     email = Column(String(255), unique=True, nullable=False, index=True)
     phone = Column(String(20), nullable=True)
     date_of_birth = Column(Date, nullable=True)
     gender = Column(String(10), nullable=True)
     occupation = Column(String(255), nullable=True)
     native_place = Column(String(255), nullable=True)

     # ID verification
     aadhar_number = Column(String(12), nullable=True)
     identity_proof = Column(String(500), nullable=True)
     photo = Column(String(500), nullable=True)

     # Stay
     room_id = Column(Integer, ForeignKey("rooms.id", ondelete="SET NULL"), nullable=True, index=True)
     room_category = Column(String(50), nullable=True)
     move_in_date = Column(Date, nullable=True)
     expected_duration = Column(String(50), nullable=True)
     security_deposit = Column(Numeric(12, 2), nullable=True)
     vacated_at = Column(DateTime, nullable=True)

     # Emergency contact
     emergency_contact_name = Column(String(200), nullable=True)
     emergency_contact_relationship = Column(String(100), nullable=True)
     emergency_contact_phone = Column(String(20), nullable=True)

     # Health
     blood_group = Column(String(3), default="", nullable=True)
     medical_condition = Column(Text, nullable=True)

     # Agreement
     terms_accepted = Column(Boolean, default=False, nullable=False)
     terms_accepted_at = Column(DateTime, nullable=True)
     digital_signature = Column(Text, nullable=True)
     organizational_code = Column(String(50), nullable=True, index=True)

     # Approval
     approval_status = Column(String(20), default=ApprovalStatus.PENDING.value, nullable=False, index=True)
     approved_by = Column(Integer, ForeignKey("users.id", ondelete="NO ACTION"), nullable=True)
     approval_date = Column(DateTime, nullable=True)
     rejection_reason = Column(Text, nullable=True)
     active = Column(Boolean, default=False, nullable=False, index=True)

     # Timestamps
     created_at = Column(DateTime, default=utcnow, server_default=func.now(), nullable=False, index=True)
     updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=True)

     @property
     def full_name(self) -> str:
          return f"{self.first_name} {self.last_name or ''}".strip()

     @property
     def holds_seat(self) -> bool:
          """True when this tenant is counted in its room's occupancy."""
          return (
               self.room_id is not None
               and self.approval_status == ApprovalStatus.APPROVED.value
               and bool(self.active)
          )

     # Relationships (declared after the @property helpers, which need the builtin name)
     property = relationship("Property", back_populates="tenants")
     room = relationship("Room", back_populates="tenants")
     payments = relationship("Payment", back_populates="tenant", cascade="all, delete-orphan")
     tickets = relationship("Ticket", back_populates="tenant", cascade="all, delete-orphan")

     def __repr__(self):
          return f"<Tenant(id={self.id}, name='{self.full_name}', status='{self.approval_status}')>"
