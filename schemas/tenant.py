"""
Pydantic schemas for Tenant API request/response validation.
"""
from datetime import date, datetime
from typing import List, Literal, Optional
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from .payment import PaymentResponse
from .room import RoomResponse
from .ticket import TicketResponse
from .validators import check_aadhar, check_phone, normalize_email

GenderLiteral = Literal["male", "female", "other"]
BloodGroupLiteral = Literal["A+", "A-", "B+", "B-", "AB+", "AB-", "O+", "O-", ""]

class TenantProfileFields(BaseModel):
     """Optional personal fields shared by admin entry and self onboarding."""
     aadhar_number: Optional[str] = Field(None, description="12 digit Aadhaar number")
     move_in_date: Optional[date] = None
     emergency_contact_name: Optional[str] = None
     emergency_contact_relationship: Optional[str] = None
     emergency_contact_phone: Optional[str] = None
     security_deposit: Optional[float] = Field(None, ge=0)
     date_of_birth: Optional[date] = None
     gender: Optional[GenderLiteral] = None
     occupation: Optional[str] = None
     native_place: Optional[str] = None
     blood_group: Optional[BloodGroupLiteral] = None
     medical_condition: Optional[str] = None
     expected_duration: Optional[str] = Field(None, description="e.g. '6 months', '1 year'")
     room_category: Optional[str] = None

     @field_validator("aadhar_number")
     @classmethod
     def valid_aadhar(cls, value):
          return check_aadhar(value)

class TenantCreate(TenantProfileFields):
     """Admin-entered tenant. Created approved and active."""
     first_name: str = Field(..., min_length=1, max_length=100)
     last_name: Optional[str] = Field(None, max_length=100)
     email: EmailStr
     phone: Optional[str] = None
     room_id: Optional[int] = Field(None, gt=0)

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "first_name": "Arun",
                    "last_name": "Kumar",
                    "email": "arun@example.com",
                    "phone": "9876543210",
                    "room_id": 1,
                    "move_in_date": "2026-11-01",
                    "security_deposit": 5000,
               }
          }
     )

     @field_validator("first_name")
     @classmethod
     def required_first_name(cls, value: str) -> str:
          value = value.strip()
          if not value:
               raise ValueError("First name is required")
          return value

     @field_validator("email")
     @classmethod
     def lower_email(cls, value):
          return normalize_email(value)

     @field_validator("phone")
     @classmethod
     def valid_phone(cls, value):
          return check_phone(value)

class TenantOnboard(TenantProfileFields):
     """Self-service onboarding submitted by a registered tenant user."""
     room_id: int = Field(..., gt=0, description="Room selection is required")
     move_in_date: date = Field(..., description="Move-in date is required")
     terms_accepted: bool = False
     identity_proof: Optional[str] = Field(None, description="URL of the uploaded ID document")
     photo: Optional[str] = Field(None, description="URL of the tenant photo with ID")
     digital_signature: Optional[str] = None

class TenantUpdate(TenantProfileFields):
     """Schema for updating a tenant. Only provided fields are changed."""
     first_name: Optional[str] = Field(None, min_length=1, max_length=100)
     last_name: Optional[str] = Field(None, max_length=100)
     email: Optional[EmailStr] = None
     phone: Optional[str] = None
     room_id: Optional[int] = Field(None, gt=0)
     active: Optional[bool] = None

     @field_validator("email")
     @classmethod
     def lower_email(cls, value):
          return normalize_email(value)

     @field_validator("phone")
     @classmethod
     def valid_phone(cls, value):
          return check_phone(value)

class TenantReject(BaseModel):
     rejection_reason: Optional[str] = Field(None, max_length=1000)

class TenantResponse(BaseModel):
     id: int
     property_id: Optional[int] = None
     first_name: str
     last_name: Optional[str] = None
     email: str
     phone: Optional[str] = None
     date_of_birth: Optional[date] = None
     gender: Optional[str] = None
     aadhar_number: Optional[str] = None
     identity_proof: Optional[str] = None
     occupation: Optional[str] = None
     native_place: Optional[str] = None
     room_id: Optional[int] = None
     room: Optional[RoomResponse] = None
     room_category: Optional[str] = None
     move_in_date: Optional[date] = None
     expected_duration: Optional[str] = None
     emergency_contact_name: Optional[str] = None
     emergency_contact_relationship: Optional[str] = None
     emergency_contact_phone: Optional[str] = None
     security_deposit: Optional[float] = None
     blood_group: Optional[str] = None
     medical_condition: Optional[str] = None
     photo: Optional[str] = None
     terms_accepted: bool = False
     terms_accepted_at: Optional[datetime] = None
     approval_status: str
     approved_by: Optional[int] = None
     approval_date: Optional[datetime] = None
     rejection_reason: Optional[str] = None
     active: bool
     vacated_at: Optional[datetime] = None
     created_at: Optional[datetime] = None
     updated_at: Optional[datetime] = None

     model_config = ConfigDict(from_attributes=True)

class OnboardResponse(TenantResponse):
     message: str = "Registration submitted. Awaiting admin approval."

class TenantActionResponse(BaseModel):
     """Result of approve/reject/vacate."""
     message: str
     tenant: TenantResponse

class TenantListResponse(BaseModel):
     tenants: List[TenantResponse]
     total: int
     total_pages: int
     current_page: int

class RoomTenantCount(BaseModel):
     room_id: int
     count: int

class TenantStatsResponse(BaseModel):
     total: int
     active: int
     inactive: int
     pending: int
     by_room: List[RoomTenantCount]

class SendSmsRequest(BaseModel):
     tenant_ids: List[int] = Field(default_factory=list, description="Tenants to notify")
     message: str = ""

class SmsResultItem(BaseModel):
     tenant_id: int
     name: str
     phone: Optional[str] = None
     success: bool
     error: Optional[str] = None

class SendSmsResponse(BaseModel):
     message: str
     results: List[SmsResultItem]

class ManualSmsRequest(BaseModel):
     phone: str = ""
     message: str = ""

class ManualSmsResponse(BaseModel):
     message: str
     sid: Optional[str] = None

class TenantDashboardResponse(BaseModel):
     """Home screen summary for a resident."""
     tenant_id: int
     user_name: str
     approval_status: str
     active: bool
     current_rent: float
     due_date: date
     active_issues: int
     room_number: Optional[str] = None
     recent_payments: List[PaymentResponse]
     active_tickets: List[TicketResponse]
