"""
Request dependencies: bearer token verification, current user loading and
role gates.

Usage:
    @router.get("/stats")
    def stats(user: User = Depends(require_admin)):
        ...
"""
import logging
from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from jose import JWTError
from sqlalchemy.orm import Session

from database import get_session
from models import User, Role
from models.user import ADMIN_ROLES, STAFF_ROLES
from security import decode_access_token

logger = logging.getLogger(__name__)


# Token Auth Dependency
def verify_token(request: Request) -> dict:
    auth = request.headers.get("Authorization")
    if not auth or not auth.startswith("Bearer "):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authorized, no token")
    token = auth.split(" ", 1)[1].strip()
    try:
        payload = decode_access_token(token)
    except JWTError as e:
        logger.info("Rejected bearer token: %s", e)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authorized, token failed")
    if "id" not in payload:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authorized, token failed")
    return payload


def get_current_user(
    token: dict = Depends(verify_token),
    db: Session = Depends(get_session),
) -> User:
    user: Optional[User] = db.get(User, token["id"])
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authorized, user not found")
    logger.debug("Authenticated user %s (%s)", user.id, user.role)
    return user


def _role_gate(allowed, label: str):
    def checker(user: User = Depends(get_current_user)) -> User:
        if user.role not in allowed:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=f"{label} access required")
        return user

    return checker


require_superadmin = _role_gate((Role.SUPERADMIN.value,), "Super Admin")
require_admin = _role_gate(ADMIN_ROLES, "Admin")
require_staff = _role_gate(STAFF_ROLES, "Staff")
require_tenant = _role_gate((Role.TENANT.value,), "Tenant")
