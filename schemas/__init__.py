# schemas/__init__.py
from .auth import (
     RegisterRequest,
     LoginRequest,
     AuthResponse,
     UserResponse,
     ProfileResponse,
)
from .room import RoomCreate, RoomUpdate, RoomResponse, RoomListResponse, RoomStatsResponse
from .tenant import (
     TenantCreate,
     TenantOnboard,
     TenantUpdate,
     TenantResponse,
     TenantListResponse,
     TenantStatsResponse,
)
from .payment import PaymentCreate, PaymentUpdate, PaymentResponse, PaymentListResponse
from .ticket import TicketCreate, TicketUpdate, TicketResponse, TicketListResponse
from .hostel import HostelCreate, HostelUpdate, HostelResponse, AdminCreate, AdminUpdate

__all__ = [
     "RegisterRequest",
     "LoginRequest",
     "AuthResponse",
     "UserResponse",
     "ProfileResponse",
     "RoomCreate",
     "RoomUpdate",
     "RoomResponse",
     "RoomListResponse",
     "RoomStatsResponse",
     "TenantCreate",
     "TenantOnboard",
     "TenantUpdate",
     "TenantResponse",
     "TenantListResponse",
     "TenantStatsResponse",
     "PaymentCreate",
     "PaymentUpdate",
     "PaymentResponse",
     "PaymentListResponse",
     "TicketCreate",
     "TicketUpdate",
     "TicketResponse",
     "TicketListResponse",
     "HostelCreate",
     "HostelUpdate",
     "HostelResponse",
     "AdminCreate",
     "AdminUpdate",
]
