"""
Pydantic schemas for the super-admin hostel and admin management API.
"""
from datetime import datetime
from typing import List, Literal, Optional
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from .auth import UserResponse
from .room import RoomResponse
from .tenant import TenantResponse
from .validators import check_phone, check_strong_password, normalize_email

GovernmentIdLiteral = Literal["aadhaar", "passport", "voter_id", ""]
HostelStatusLiteral = Literal["pending", "under_review", "verified", "rejected"]


class HostelOwnerFields(BaseModel):
     owner_full_name: Optional[str] = Field(None, max_length=200)
     owner_pan: Optional[str] = Field(None, max_length=20)
     owner_business_phone: Optional[str] = None
     owner_business_email: Optional[EmailStr] = None
     owner_personal_phone: Optional[str] = None
     owner_personal_email: Optional[EmailStr] = None
     owner_government_id_type: Optional[GovernmentIdLiteral] = None


class HostelCreate(HostelOwnerFields):
     """Schema for registering a hostel on the platform."""
     name: str = Field(..., min_length=1, max_length=255)
     address: str = Field(..., min_length=1, max_length=500)
     owner_id: Optional[int] = Field(None, gt=0, description="Admin user who runs the hostel")
     verification_status: HostelStatusLiteral = "pending"

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "name": "Green Nest PG",
                    "address": "12 Anna Salai, Chennai",
                    "owner_full_name": "S. Lakshmi",
                    "owner_id": 2,
               }
          }
     )


class HostelUpdate(HostelOwnerFields):
     name: Optional[str] = Field(None, min_length=1, max_length=255)
     address: Optional[str] = Field(None, min_length=1, max_length=500)
     owner_id: Optional[int] = Field(None, gt=0)
     verification_status: Optional[HostelStatusLiteral] = None


class HostelVerifyRequest(BaseModel):
     action: str = Field(..., description="'verify' or 'reject'")
     reason: Optional[str] = Field(None, max_length=1000)


class OwnerSummary(BaseModel):
     id: int
     name: str
     email: str
     phone: str
     role: str
     verification_status: str

     model_config = ConfigDict(from_attributes=True)


class HostelResponse(BaseModel):
     id: int
     name: str
     address: str
     owner_id: Optional[int] = None
     owner: Optional[OwnerSummary] = None
     owner_full_name: Optional[str] = None
     owner_pan: Optional[str] = None
     owner_business_phone: Optional[str] = None
     owner_business_email: Optional[str] = None
     owner_personal_phone: Optional[str] = None
     owner_personal_email: Optional[str] = None
     owner_government_id: Optional[str] = None
     owner_government_id_type: Optional[str] = None
     trade_license: Optional[str] = None
     fire_safety_certificate: Optional[str] = None
     noc: Optional[str] = None
     proof_of_address: Optional[str] = None
     gst_certificate: Optional[str] = None
     building_occupancy_certificate: Optional[str] = None
     lease_agreement: Optional[str] = None
     insurance_certificate: Optional[str] = None
     health_sanitation_certificate: Optional[str] = None
     verification_status: str
     verified_at: Optional[datetime] = None
     verified_by: Optional[int] = None
     rejection_reason: Optional[str] = None
     organizational_code: Optional[str] = None
     qr_code: Optional[str] = None
     created_at: Optional[datetime] = None
     updated_at: Optional[datetime] = None

     model_config = ConfigDict(from_attributes=True)


class HostelStats(BaseModel):
     total_tenants: int = 0
     active_tenants: int = 0
     pending_tenants: int = 0
     total_rooms: int = 0
     available_rooms: int = 0


class HostelWithStats(HostelResponse):
     stats: HostelStats


class HostelListResponse(BaseModel):
     hostels: List[HostelWithStats]
     total: int
     total_pages: int
     current_page: int


class HostelDetailResponse(BaseModel):
     hostel: HostelResponse
     tenants: List[TenantResponse]
     rooms: List[RoomResponse]
     admins: List[UserResponse]


class HostelActionResponse(BaseModel):
     message: str
     hostel: HostelResponse


class PlatformStatsResponse(BaseModel):
     total_hostels: int
     verified_hostels: int
     pending_hostels: int
     rejected_hostels: int
     total_admins: int
     total_tenants: int
     active_tenants: int
     total_rooms: int
     available_rooms: int


class AdminCreate(BaseModel):
     """Schema for creating a hostel admin account."""
     name: str = Field(..., min_length=2, max_length=100)
     email: EmailStr
     phone: str
     password: str
     property_id: Optional[int] = Field(None, gt=0, description="Hostel to put under this admin")

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


class AdminUpdate(BaseModel):
     name: Optional[str] = Field(None, min_length=2, max_length=100)
     email: Optional[EmailStr] = None
     phone: Optional[str] = None
     property_id: Optional[int] = Field(None, gt=0)
     verification_status: Optional[Literal["unverified", "pending", "verified", "rejected"]] = None

     @field_validator("email")
     @classmethod
     def lower_email(cls, value):
          return normalize_email(value)

     @field_validator("phone")
     @classmethod
     def valid_phone(cls, value):
          return check_phone(value)


class PropertySummary(BaseModel):
     id: int
     name: str
     address: str
     verification_status: str
     organizational_code: Optional[str] = None

     model_config = ConfigDict(from_attributes=True)


class AdminResponse(UserResponse):
     property: Optional[PropertySummary] = None


class AdminListResponse(BaseModel):
     admins: List[AdminResponse]


class RoleUpdate(BaseModel):
     role: str = Field(..., description="admin, staff or tenant")


class RoleUpdateResponse(BaseModel):
     message: str
     user: UserResponse
