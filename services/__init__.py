# services/__init__.py
from .tenant_service import TenantService
from .room_service import RoomService
from .auth_service import AuthService
from .hostel_service import HostelService
from .payment_service import PaymentService
from .ticket_service import TicketService
from .occupancy_service import reserve_seat, release_seat, ensure_room_has_space
from .seed_service import seed_defaults

__all__ = [
     "TenantService",
     "RoomService",
     "AuthService",
     "HostelService",
     "PaymentService",
     "TicketService",
     "reserve_seat",
     "release_seat",
     "ensure_room_has_space",
     "seed_defaults",
]
