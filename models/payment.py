# models/payment.py
import enum

from sqlalchemy import Column, Integer, Numeric, String, Text, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from .base import Base, utcnow


class PaymentMethod(str, enum.Enum):
     CASH = "cash"
     CARD = "card"
     ONLINE = "online"
     BANK_TRANSFER = "bank_transfer"
     CHECK = "check"


class PaymentStatus(str, enum.Enum):
     PENDING = "pending"
     COMPLETED = "completed"
     FAILED = "failed"
     REFUNDED = "refunded"


class PaymentType(str, enum.Enum):
     RENT = "rent"
     DEPOSIT = "deposit"
     MAINTENANCE = "maintenance"
     OTHER = "other"


class Payment(Base):
     """
     Payment model - money received from a tenant, recorded by hostel staff.
     """

     id = Column(Integer, primary_key=True, autoincrement=True)
     tenant_id = Column(Integer, ForeignKey("tenants.id", ondelete="CASCADE"), nullable=False, index=True)
     property_id = Column(Integer, ForeignKey("properties.id", ondelete="NO ACTION"), nullable=True, index=True)

     amount = Column(Numeric(12, 2), nullable=False)
     method = Column(String(20), default=PaymentMethod.CASH.value, nullable=False)
     status = Column(String(20), default=PaymentStatus.COMPLETED.value, nullable=False, index=True)
     type = Column(String(20), default=PaymentType.RENT.value, nullable=False, index=True)
     paid_at = Column(DateTime, default=utcnow, nullable=False, index=True)
     notes = Column(Text, nullable=True)
     recorded_by = Column(Integer, ForeignKey("users.id", ondelete="NO ACTION"), nullable=True)

     created_at = Column(DateTime, default=utcnow, server_default=func.now(), nullable=False)

     # Relationships
     tenant = relationship("Tenant", back_populates="payments")

     @property
     def tenant_name(self):
          return self.tenant.full_name if self.tenant is not None else None

     def __repr__(self):
          return f"<Payment(id={self.id}, tenant_id={self.tenant_id}, amount={self.amount}, status='{self.status}')>"
