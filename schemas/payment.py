"""
Pydantic schemas for Payment API request/response validation.
"""
from datetime import datetime
from typing import Dict, List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field

PaymentMethodLiteral = Literal["cash", "card", "online", "bank_transfer", "check"]
PaymentStatusLiteral = Literal["pending", "completed", "failed", "refunded"]
PaymentTypeLiteral = Literal["rent", "deposit", "maintenance", "other"]


class PaymentCreate(BaseModel):
     """Schema for recording a payment."""
     tenant_id: int = Field(..., gt=0, description="Tenant is required")
     amount: float = Field(..., gt=0, description="Amount must be positive")
     method: PaymentMethodLiteral = "cash"
     status: PaymentStatusLiteral = "completed"
     type: PaymentTypeLiteral = "rent"
     paid_at: Optional[datetime] = Field(None, description="Defaults to now")
     notes: Optional[str] = Field(None, max_length=2000)

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "tenant_id": 1,
                    "amount": 6500,
                    "method": "online",
                    "type": "rent",
               }
          }
     )


class PaymentUpdate(BaseModel):
     amount: Optional[float] = Field(None, gt=0)
     method: Optional[PaymentMethodLiteral] = None
     status: Optional[PaymentStatusLiteral] = None
     type: Optional[PaymentTypeLiteral] = None
     paid_at: Optional[datetime] = None
     notes: Optional[str] = Field(None, max_length=2000)


class PaymentResponse(BaseModel):
     id: int
     tenant_id: int
     property_id: Optional[int] = None
     amount: float
     method: str
     status: str
     type: str
     paid_at: datetime
     notes: Optional[str] = None
     recorded_by: Optional[int] = None
     created_at: Optional[datetime] = None

     tenant_name: Optional[str] = None

     model_config = ConfigDict(from_attributes=True)


class PaymentListResponse(BaseModel):
     payments: List[PaymentResponse]
     total: int
     total_pages: int
     current_page: int


class AmountBucket(BaseModel):
     count: int = 0
     amount: float = 0.0


class PaymentStatsResponse(BaseModel):
     total_count: int
     total_collected: float
     by_status: Dict[str, AmountBucket]
     by_type: Dict[str, AmountBucket]
