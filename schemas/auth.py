"""
Pydantic schemas for authentication and account API request/response validation.
"""
from datetime import datetime
from typing import Any, Dict, Optional
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from .validators import check_phone, check_strong_password, normalize_email


class RegisterRequest(BaseModel):
     """Self-service tenant sign-up."""
     name: str = Field(..., min_length=2, max_length=100, description="Full name")
     email: EmailStr
     phone: str = Field(..., description="10 digit mobile number")
     password: str
     organizational_code: Optional[str] = Field(
          None, description="Hostel code shared by the admin; binds the account to that hostel"
     )

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "name": "Priya Raman",
                    "email": "priya@example.com",
                    "phone": "9876543210",
                    "password": "Str0ng@Pass",
                    "organizational_code": "ORG-1A2B3C4D",
               }
          }
     )

     @field_validator("email")
     @classmethod
     def lower_email(cls, value):
          return normalize_email(value)

     @field_validator("phone")
     @classmethod
     def valid_phone(cls, value):
          return check_phone(value)

     @field_validator("password")
     @classmethod
     def strong_password(cls, value):
          return check_strong_password(value)

     @field_validator("name")
     @classmethod
     def strip_name(cls, value: str) -> str:
          value = value.strip()
          if len(value) < 2:
               raise ValueError("Name must be 2-100 characters")
          return value

     @field_validator("organizational_code")
     @classmethod
     def non_empty_code(cls, value: Optional[str]) -> Optional[str]:
          if value is None:
               return value
          value = value.strip()
          if not value:
               raise ValueError("Organizational code cannot be empty if provided")
          return value


class LoginRequest(BaseModel):
     email: EmailStr
     password: str = Field(..., min_length=1, description="Password is required")

     @field_validator("email")
     @classmethod
     def lower_email(cls, value):
          return normalize_email(value)


class UserResponse(BaseModel):
     """Public view of an account."""
     id: int
     name: str
     email: str
     phone: str
     role: str
     property_id: Optional[int] = None
     tenant_id: Optional[int] = None
     verification_status: str = "unverified"
     organizational_code: Optional[str] = None
     profile_image: Optional[str] = None
     created_at: Optional[datetime] = None

     model_config = ConfigDict(from_attributes=True)


class ProfileResponse(UserResponse):
     qr_code: Optional[str] = None
     email_verified: bool = False
     phone_verified: bool = False
     settings: Optional[Dict[str, Any]] = None


class AuthResponse(UserResponse):
     """Login/registration result carrying the bearer token."""
     token: str
     requires_onboarding: bool = False


class ProfileUpdate(BaseModel):
     name: Optional[str] = Field(None, min_length=2, max_length=100)
     email: Optional[EmailStr] = None
     phone: Optional[str] = None

     @field_validator("email")
     @classmethod
     def lower_email(cls, value):
          return normalize_email(value)

     @field_validator("phone")
     @classmethod
     def valid_phone(cls, value):
          return check_phone(value)


class SettingsUpdate(BaseModel):
     notifications: Dict[str, Any] = Field(..., description="Notification preference groups")


class SettingsResponse(BaseModel):
     message: str
     settings: Dict[str, Any]


class ChangePasswordRequest(BaseModel):
     current_password: str = Field(..., min_length=1)
     new_password: str

     @field_validator("new_password")
     @classmethod
     def strong_password(cls, value):
          return check_strong_password(value)


class ForgotPasswordRequest(BaseModel):
     email: EmailStr

     @field_validator("email")
     @classmethod
     def lower_email(cls, value):
          return normalize_email(value)


class ForgotPasswordResponse(BaseModel):
     message: str
     reset_url: Optional[str] = None


class ResetPasswordRequest(BaseModel):
     token: str = Field(..., min_length=1, description="Reset token is required")
     password: str

     @field_validator("password")
     @classmethod
     def strong_password(cls, value):
          return check_strong_password(value)
