# services/auth_service.py
"""
Auth Service - account registration, credentials and profile management.
"""
import logging
from datetime import timedelta
from typing import Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

import config
from exceptions import ConflictError, NotFoundError, ValidationError
from models import Property, Role, User
from models.base import utcnow
from models.user import ADMIN_ROLES, default_settings
from schemas.auth import ProfileUpdate, RegisterRequest
from security import generate_reset_token, hash_password, hash_reset_token, verify_password
from utils import email as mailer

logger = logging.getLogger(__name__)


class AuthService:
     """Service class for authentication and account logic."""

     @staticmethod
     def find_by_email(db: Session, email: str) -> Optional[User]:
          return db.query(User).filter(func.lower(User.email) == email.strip().lower()).first()

     @staticmethod
     def resolve_organizational_code(db: Session, code: str) -> Optional[int]:
          """
          Map a hostel code to a property id.

          Admins hand out either their personal code or the hostel's own
          code; both are accepted.

          Raises:
               ValidationError: code matches neither
          """
          owner = (
               db.query(User)
               .filter(User.organizational_code == code, User.role.in_(ADMIN_ROLES))
               .first()
          )
          if owner is not None:
               return owner.property_id

          hostel = db.query(Property).filter(Property.organizational_code == code).first()
          if hostel is not None:
               return hostel.id
          raise ValidationError("Invalid organizational code")

     @staticmethod
     def register(db: Session, data: RegisterRequest) -> User:
          """
          Create a tenant account, optionally bound to a hostel.

          Raises:
               ConflictError: email already registered
               ValidationError: unknown organizational code
          """
          if AuthService.find_by_email(db, data.email) is not None:
               raise ConflictError("User already exists")

          property_id = None
          if data.organizational_code:
               property_id = AuthService.resolve_organizational_code(db, data.organizational_code)

          user = User(
               name=data.name,
               email=data.email,
               phone=data.phone,
               password=hash_password(data.password),
               role=Role.TENANT.value,
               property_id=property_id,
               settings=default_settings(),
          )
          db.add(user)
          db.flush()
          logger.info("Registered user %s (property=%s)", user.id, property_id)
          return user

     @staticmethod
     def authenticate(db: Session, email: str, password: str) -> User:
          """
          Raises:
               ValidationError: unknown email or wrong password (same message)
          """
          user = AuthService.find_by_email(db, email)
          if user is None or not verify_password(password, user.password):
               logger.info("Failed login for %s", email)
               raise ValidationError("Invalid credentials")
          return user

     @staticmethod
     def requires_onboarding(user: User) -> bool:
          return user.role == Role.TENANT.value and user.tenant_id is None

     @staticmethod
     def update_profile(db: Session, user: User, data: ProfileUpdate) -> User:
          fields = data.model_dump(exclude_unset=True, exclude_none=True)
          if "email" in fields and fields["email"] != user.email:
               existing = AuthService.find_by_email(db, fields["email"])
               if existing is not None and existing.id != user.id:
                    raise ConflictError("Email already in use")
          for key, value in fields.items():
               setattr(user, key, value)
          db.flush()
          return user

     @staticmethod
     def update_settings(db: Session, user: User, notifications: dict) -> dict:
          """Merge notification preference groups into the stored settings."""
          settings = dict(user.settings or default_settings())
          current = dict(settings.get("notifications") or {})
          for group, prefs in notifications.items():
               if isinstance(prefs, dict):
                    merged = dict(current.get(group) or {})
                    merged.update(prefs)
                    current[group] = merged
               else:
                    current[group] = prefs
          settings["notifications"] = current
          # Reassign so the JSON column is flagged dirty
          user.settings = settings
          db.flush()
          return settings

     @staticmethod
     def change_password(db: Session, user: User, current_password: str, new_password: str) -> None:
          if not verify_password(current_password, user.password):
               raise ValidationError("Current password is incorrect")
          user.password = hash_password(new_password)
          db.flush()
          logger.info("User %s changed password", user.id)

     @staticmethod
     def forgot_password(db: Session, email: str) -> Tuple[User, str]:
          """
          Issue a reset token valid for RESET_TOKEN_TTL_MINUTES. Only its
          sha256 is stored; the link is emailed best-effort.

          Returns:
               (user, reset_url)
          """
          user = AuthService.find_by_email(db, email)
          if user is None:
               raise NotFoundError("No account found with that email")

          token, token_hash = generate_reset_token()
          user.reset_password_token = token_hash
          user.reset_password_expire = utcnow() + timedelta(minutes=config.RESET_TOKEN_TTL_MINUTES)
          db.flush()

          base = (config.FRONTEND_URL or "http://localhost:8080").rstrip("/")
          reset_url = f"{base}/reset-password/{token}"
          if not mailer.send_password_reset_email(user.email, reset_url):
               logger.warning("Reset email for user %s not delivered", user.id)
          logger.info("Password reset requested for user %s", user.id)
          return user, reset_url

     @staticmethod
     def reset_password(db: Session, token: str, password: str) -> User:
          """
          Raises:
               ValidationError: token unknown or expired
          """
          user = (
               db.query(User)
               .filter(
                    User.reset_password_token == hash_reset_token(token),
                    User.reset_password_expire > utcnow(),
               )
               .first()
          )
          if user is None:
               raise ValidationError("Invalid or expired reset token")

          user.password = hash_password(password)
          user.reset_password_token = None
          user.reset_password_expire = None
          db.flush()
          logger.info("Password reset completed for user %s", user.id)
          return user
