# services/access.py
"""
Hostel scoping helpers shared by the service layer.

- Superadmin: every hostel (no filter)
- Admin / staff / tenant: only records of the hostel in user.property_id
"""
import math
from typing import Optional, Tuple

from sqlalchemy.orm import Query

from models import User


def property_scope(user: User) -> Optional[int]:
     """Hostel id the user is confined to, or None for platform-wide access."""
     if user.is_superadmin:
          return None
     return user.property_id


def in_scope(user: User, property_id: Optional[int]) -> bool:
     if user.is_superadmin:
          return True
     return property_id == user.property_id


def apply_scope(query: Query, column, user: User) -> Query:
     """Filter a query on its property column unless the user is a superadmin."""
     if user.is_superadmin:
          return query
     # Users without a hostel only see unassigned records
     return query.filter(column == user.property_id)


def paginate(query: Query, page: int, limit: int) -> Tuple[list, int, int]:
     """
     Run a paginated query.

     Returns:
          (items, total, total_pages)
     """
     total = query.order_by(None).count()
     items = query.offset((page - 1) * limit).limit(limit).all()
     total_pages = math.ceil(total / limit) if limit else 0
     return items, total, total_pages
