# models/__init__.py
from .base import Base
from .user import User, Role, VerificationStatus
from .property import Property, HostelVerificationStatus
from .room import Room, RoomStatus, RoomType
from .tenant import Tenant, ApprovalStatus
from .payment import Payment, PaymentMethod, PaymentStatus, PaymentType
from .ticket import Ticket, TicketCategory, TicketPriority, TicketStatus

__all__ = [
     "Base",
     "User",
     "Role",
     "VerificationStatus",
     "Property",
     "HostelVerificationStatus",
     "Room",
     "RoomStatus",
     "RoomType",
     "Tenant",
     "ApprovalStatus",
     "Payment",
     "PaymentMethod",
     "PaymentStatus",
     "PaymentType",
     "Ticket",
     "TicketCategory",
     "TicketPriority",
     "TicketStatus",
]
