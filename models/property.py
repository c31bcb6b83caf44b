# models/property.py
import enum
import secrets

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from .base import Base, utcnow


class HostelVerificationStatus(str, enum.Enum):
     """Compliance review state of a hostel."""
     PENDING = "pending"
     UNDER_REVIEW = "under_review"
     VERIFIED = "verified"
     REJECTED = "rejected"


# Uploaded compliance documents, stored as URLs
COMPLIANCE_DOCUMENTS = (
     "owner_government_id",
     "trade_license",
     "fire_safety_certificate",
     "noc",
     "proof_of_address",
     "gst_certificate",
     "building_occupancy_certificate",
     "lease_agreement",
     "insurance_certificate",
     "health_sanitation_certificate",
)


def generate_property_code() -> str:
     return f"ORG-{secrets.token_hex(4).upper()}"


class Property(Base):
     """
     Property model - a hostel/PG building managed on the platform.
     """
     __tablename__ = "properties"

     id = Column(Integer, primary_key=True, autoincrement=True)
     name = Column(String(255), nullable=False)
     address = Column(String(500), nullable=False)
     owner_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)

     # Owner details
     owner_full_name = Column(String(200), nullable=True)
     owner_pan = Column(String(20), nullable=True)
     owner_business_phone = Column(String(20), nullable=True)
     owner_business_email = Column(String(255), nullable=True)
     owner_personal_phone = Column(String(20), nullable=True)
     owner_personal_email = Column(String(255), nullable=True)
     owner_government_id = Column(String(500), nullable=True)
     owner_government_id_type = Column(String(20), nullable=True)  # aadhaar, passport, voter_id

     # Verification documents
     trade_license = Column(String(500), nullable=True)
     fire_safety_certificate = Column(String(500), nullable=True)
     noc = Column(String(500), nullable=True)
     proof_of_address = Column(String(500), nullable=True)
     gst_certificate = Column(String(500), nullable=True)
     building_occupancy_certificate = Column(String(500), nullable=True)
     lease_agreement = Column(String(500), nullable=True)
     insurance_certificate = Column(String(500), nullable=True)
     health_sanitation_certificate = Column(String(500), nullable=True)

     # Verification status
     verification_status = Column(String(20), default=HostelVerificationStatus.PENDING.value, nullable=False, index=True)
     verified_at = Column(DateTime, nullable=True)
     verified_by = Column(Integer, ForeignKey("users.id", ondelete="NO ACTION"), nullable=True)
     rejection_reason = Column(Text, nullable=True)

     # Operational
     organizational_code = Column(String(50), unique=True, nullable=True, index=True)
     qr_code = Column(Text, nullable=True)

     # Timestamps
     created_at = Column(DateTime, default=utcnow, server_default=func.now(), nullable=False)
     updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=True)

     # Relationships
     owner = relationship("User", foreign_keys=[owner_id], post_update=True)
     staff_members = relationship("User", foreign_keys="User.property_id", back_populates="property")
     rooms = relationship("Room", back_populates="property")
     tenants = relationship("Tenant", back_populates="property")

     def __repr__(self):
          return f"<Property(id={self.id}, name='{self.name}', status='{self.verification_status}')>"
