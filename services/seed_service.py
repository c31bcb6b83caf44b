# services/seed_service.py
"""
Startup seeding: guarantees the platform always has a way in.

1. A superadmin account (if none exists)
2. A verified default hostel (if no hostel exists)
"""
import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

import config
from models import HostelVerificationStatus, Property, Role, User, VerificationStatus
from models.base import utcnow
from models.user import default_settings
from security import hash_password
from services.hostel_service import unique_property_code

logger = logging.getLogger(__name__)


def ensure_superadmin(db: Session) -> User:
     superadmin = db.query(User).filter(User.role == Role.SUPERADMIN.value).first()
     if superadmin is not None:
          return superadmin

     superadmin = User(
          name="Super Admin",
          email=config.SUPERADMIN_EMAIL.strip().lower(),
          phone=config.SUPERADMIN_PHONE,
          password=hash_password(config.SUPERADMIN_PASSWORD),
          role=Role.SUPERADMIN.value,
          verification_status=VerificationStatus.VERIFIED.value,
          verified_at=utcnow(),
          settings=default_settings(),
     )
     db.add(superadmin)
     db.flush()
     logger.info("Default superadmin created: %s", superadmin.email)
     return superadmin


def ensure_default_hostel(db: Session, superadmin: User) -> Optional[Property]:
     if db.query(Property.id).first() is not None:
          return None

     hostel = Property(
          name=config.DEFAULT_HOSTEL_NAME,
          address=config.DEFAULT_HOSTEL_ADDRESS,
          verification_status=HostelVerificationStatus.VERIFIED.value,
          verified_at=utcnow(),
          verified_by=superadmin.id,
          organizational_code=unique_property_code(db),
     )
     db.add(hostel)
     db.flush()
     logger.info('Default hostel "%s" created (org code %s)', hostel.name, hostel.organizational_code)
     return hostel


def seed_defaults(db: Session) -> bool:
     """
     Run both seeds in one transaction. Failures are logged and rolled back
     so a seeding problem never prevents the API from starting.

     Returns:
          bool: True when seeding completed
     """
     try:
          superadmin = ensure_superadmin(db)
          ensure_default_hostel(db, superadmin)
          db.commit()
          return True
     except SQLAlchemyError:
          db.rollback()
          logger.exception("Seeding defaults failed")
          return False
