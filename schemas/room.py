"""
Pydantic schemas for Room API request/response validation.
"""
from datetime import datetime
from typing import List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

RoomTypeLiteral = Literal["single", "double", "shared"]
RoomStatusLiteral = Literal["available", "occupied", "maintenance"]


class RoomCreate(BaseModel):
     """Schema for adding a room to a hostel."""
     number: str = Field(..., min_length=1, max_length=50, description="Room number, unique within the hostel")
     type: RoomTypeLiteral = Field(default="single", description="Room type")
     rent: float = Field(..., gt=0, description="Monthly rent")
     capacity: int = Field(default=1, ge=1, description="Maximum concurrent occupants")
     status: RoomStatusLiteral = Field(default="available")
     property_id: Optional[int] = Field(
          None, gt=0, description="Hostel the room belongs to (superadmin only; admins use their own hostel)"
     )

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "number": "101",
                    "type": "double",
                    "rent": 6500,
                    "capacity": 2,
               }
          }
     )

     @field_validator("number")
     @classmethod
     def strip_number(cls, value: str) -> str:
          value = value.strip()
          if not value:
               raise ValueError("Room number is required")
          return value


class RoomUpdate(BaseModel):
     """Schema for updating a room. Only provided fields are changed."""
     number: Optional[str] = Field(None, min_length=1, max_length=50)
     type: Optional[RoomTypeLiteral] = None
     rent: Optional[float] = Field(None, gt=0)
     capacity: Optional[int] = Field(None, ge=1)
     status: Optional[RoomStatusLiteral] = None
     occupancy: Optional[int] = Field(None, ge=0)
     active: Optional[bool] = None


class RoomResponse(BaseModel):
     id: int
     property_id: Optional[int] = None
     number: str
     type: str
     rent: float
     capacity: int
     occupancy: int
     status: str
     active: bool
     created_at: Optional[datetime] = None
     updated_at: Optional[datetime] = None

     model_config = ConfigDict(from_attributes=True)


class RoomListResponse(BaseModel):
     rooms: List[RoomResponse]
     total: int
     total_pages: int
     current_page: int


class RoomTypeCount(BaseModel):
     type: str
     count: int


class OccupancyTotals(BaseModel):
     total: int = 0
     capacity: int = 0


class RoomStatsResponse(BaseModel):
     total: int
     available: int
     occupied: int
     maintenance: int
     by_type: List[RoomTypeCount]
     occupancy: OccupancyTotals
