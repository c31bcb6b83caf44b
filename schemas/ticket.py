"""
Pydantic schemas for maintenance Ticket API request/response validation.
"""
from datetime import datetime
from typing import List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

TicketPriorityLiteral = Literal["low", "medium", "high"]
TicketCategoryLiteral = Literal["technical", "payment", "maintenance", "complaint", "security", "plumbing", "other"]
TicketStatusLiteral = Literal["open", "in_progress", "resolved", "closed"]


class TicketCreate(BaseModel):
     """Schema for raising a ticket."""
     title: str = Field(..., min_length=1, max_length=200)
     description: Optional[str] = Field(None, max_length=2000)
     priority: TicketPriorityLiteral = "medium"
     category: TicketCategoryLiteral = "other"
     tenant_id: Optional[int] = Field(None, gt=0, description="Staff only: tenant the ticket is raised for")

     @field_validator("title")
     @classmethod
     def required_title(cls, value: str) -> str:
          value = value.strip()
          if not value:
               raise ValueError("Title is required")
          return value


class TicketUpdate(BaseModel):
     title: Optional[str] = Field(None, min_length=1, max_length=200)
     description: Optional[str] = Field(None, max_length=2000)
     priority: Optional[TicketPriorityLiteral] = None
     category: Optional[TicketCategoryLiteral] = None
     status: Optional[TicketStatusLiteral] = None
     resolution_notes: Optional[str] = Field(None, max_length=2000)


class TicketResponse(BaseModel):
     id: int
     tenant_id: Optional[int] = None
     property_id: Optional[int] = None
     room_id: Optional[int] = None
     title: str
     description: Optional[str] = None
     priority: str
     category: str
     status: str
     resolution_notes: Optional[str] = None
     created_by: Optional[int] = None
     resolved_at: Optional[datetime] = None
     created_at: Optional[datetime] = None
     updated_at: Optional[datetime] = None

     model_config = ConfigDict(from_attributes=True)


class TicketListResponse(BaseModel):
     tickets: List[TicketResponse]
     total: int
     total_pages: int
     current_page: int
