"""
Domain exceptions raised by the service layer.

Each carries the HTTP status the API layer answers with, so routers can let
them propagate and a single exception handler renders them.

Usage:
    from exceptions import NotFoundError

    room = db.get(Room, room_id)
    if room is None:
        raise NotFoundError("Room not found")
"""
from typing import Any, Dict, Optional


class HostelError(Exception):
    """Base exception for all service-layer errors"""

    status_code = 400

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"detail": self.message}
        if self.details:
            body["details"] = self.details
        return body


class ValidationError(HostelError):
    """Request data breaks a business rule"""

    status_code = 400


class ConflictError(HostelError):
    """Operation conflicts with current state (duplicate, full room, already approved)"""

    status_code = 400


class NotFoundError(HostelError):
    """Requested record does not exist or is outside the caller's hostel"""

    status_code = 404


class PermissionDeniedError(HostelError):
    """Caller's role does not allow the operation"""

    status_code = 403


class GatewayError(HostelError):
    """An outbound integration (SMS, email) reported a failure"""

    status_code = 502
