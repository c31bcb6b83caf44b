# routers/__init__.py
from .auth import router as auth_router
from .tenants import router as tenants_router
from .rooms import router as rooms_router
from .superadmin import router as superadmin_router
from .payments import router as payments_router
from .tickets import router as tickets_router
from .uploads import router as uploads_router

__all__ = [
     "auth_router",
     "tenants_router",
     "rooms_router",
     "superadmin_router",
     "payments_router",
     "tickets_router",
     "uploads_router",
]
