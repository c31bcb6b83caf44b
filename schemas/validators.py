"""
Shared field rules for request schemas.
"""
import re

PHONE_RE = re.compile(r"^\d{10}$")
AADHAR_RE = re.compile(r"^\d{12}$")
SPECIAL_CHARS_RE = re.compile(r"[!@#$%^&*(),.?\":{}|<>]")


def check_phone(value):
     if value is None:
          return value
     value = value.strip()
     if not PHONE_RE.match(value):
          raise ValueError("Phone must be 10 digits")
     return value


def check_aadhar(value):
     if value is None or value == "":
          return value
     if not AADHAR_RE.match(value):
          raise ValueError("Aadhaar must be 12 digits")
     return value


def check_strong_password(value: str) -> str:
     """Minimum 8 characters with upper, lower, digit and special character."""
     if len(value) < 8:
          raise ValueError("Password must be at least 8 characters")
     if not re.search(r"[A-Z]", value):
          raise ValueError("Password must contain at least one uppercase letter")
     if not re.search(r"[a-z]", value):
          raise ValueError("Password must contain at least one lowercase letter")
     if not re.search(r"[0-9]", value):
          raise ValueError("Password must contain at least one number")
     if not SPECIAL_CHARS_RE.search(value):
          raise ValueError("Password must contain at least one special character")
     return value


def normalize_email(value):
     if value is None:
          return value
     return value.strip().lower()
