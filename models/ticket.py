# models/ticket.py
import enum

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from .base import Base, utcnow


class TicketPriority(str, enum.Enum):
     LOW = "low"
     MEDIUM = "medium"
     HIGH = "high"


class TicketCategory(str, enum.Enum):
     TECHNICAL = "technical"
     PAYMENT = "payment"
     MAINTENANCE = "maintenance"
     COMPLAINT = "complaint"
     SECURITY = "security"
     PLUMBING = "plumbing"
     OTHER = "other"


class TicketStatus(str, enum.Enum):
     OPEN = "open"
     IN_PROGRESS = "in_progress"
     RESOLVED = "resolved"
     CLOSED = "closed"


OPEN_TICKET_STATUSES = (TicketStatus.OPEN.value, TicketStatus.IN_PROGRESS.value)


class Ticket(Base):
     """
     Ticket model - maintenance request or complaint raised within a hostel.
     """

     id = Column(Integer, primary_key=True, autoincrement=True)
     tenant_id = Column(Integer, ForeignKey("tenants.id", ondelete="CASCADE"), nullable=True, index=True)
     property_id = Column(Integer, ForeignKey("properties.id", ondelete="NO ACTION"), nullable=True, index=True)
     room_id = Column(Integer, ForeignKey("rooms.id", ondelete="NO ACTION"), nullable=True)

     title = Column(String(200), nullable=False)
     description = Column(Text, nullable=True)
     priority = Column(String(10), default=TicketPriority.MEDIUM.value, nullable=False)
     category = Column(String(20), default=TicketCategory.OTHER.value, nullable=False)
     status = Column(String(20), default=TicketStatus.OPEN.value, nullable=False, index=True)
     resolution_notes = Column(Text, nullable=True)

     created_by = Column(Integer, ForeignKey("users.id", ondelete="NO ACTION"), nullable=True)
     resolved_at = Column(DateTime, nullable=True)
     created_at = Column(DateTime, default=utcnow, server_default=func.now(), nullable=False, index=True)
     updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=True)

     # Relationships
     tenant = relationship("Tenant", back_populates="tickets")

     def __repr__(self):
          return f"<Ticket(id={self.id}, title='{self.title}', status='{self.status}')>"
