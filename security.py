import hashlib
import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple

from jose import jwt
from passlib.context import CryptContext

import config

# Bcrypt
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, hashed: str) -> bool:
    try:
        return pwd_context.verify(password, hashed)
    except ValueError:
        # Malformed hash in the database
        return False


def create_access_token(user_id: int, expires_days: Optional[int] = None) -> str:
    expire = datetime.now(timezone.utc) + timedelta(days=expires_days or config.JWT_EXPIRES_DAYS)
    return jwt.encode({"id": user_id, "exp": expire}, config.JWT_SECRET, algorithm=config.JWT_ALGORITHM)


def decode_access_token(token: str) -> dict:
    """Raises jose.JWTError on bad signature, malformed token or expiry."""
    return jwt.decode(token, config.JWT_SECRET, algorithms=[config.JWT_ALGORITHM])


def hash_reset_token(token: str) -> str:
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


def generate_reset_token() -> Tuple[str, str]:
    """Returns (token sent to the user, sha256 stored in the database)."""
    token = secrets.token_hex(32)
    return token, hash_reset_token(token)
