# routers/tickets.py
"""
Maintenance ticket API routes.

Role-based access:
- Tenant: raise and follow own tickets
- Staff: handle tickets of their hostel
- Admin: delete tickets
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import get_current_user, require_admin
from models import User
from schemas.common import MessageResponse
from schemas.ticket import (
     TicketCategoryLiteral,
     TicketCreate,
     TicketListResponse,
     TicketPriorityLiteral,
     TicketResponse,
     TicketStatusLiteral,
     TicketUpdate,
)
from services.ticket_service import TicketService

router = APIRouter(prefix="/api/tickets", tags=["tickets"])


@router.get("", response_model=TicketListResponse, summary="List tickets")
def list_tickets(
     status_filter: Optional[TicketStatusLiteral] = Query(None, alias="status"),
     priority: Optional[TicketPriorityLiteral] = Query(None),
     category: Optional[TicketCategoryLiteral] = Query(None),
     page: int = Query(1, ge=1),
     limit: int = Query(10, ge=1, le=100),
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user),
):
     tickets, total, total_pages = TicketService.list_tickets(
          db, user, status=status_filter, priority=priority, category=category, page=page, limit=limit
     )
     return TicketListResponse(
          tickets=[TicketResponse.model_validate(t) for t in tickets],
          total=total,
          total_pages=total_pages,
          current_page=page,
     )


@router.post("", response_model=TicketResponse, status_code=status.HTTP_201_CREATED, summary="Raise ticket")
def create_ticket(
     body: TicketCreate,
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user),
):
     ticket = TicketService.create_ticket(db, user, body)
     db.commit()
     return TicketResponse.model_validate(ticket)


@router.get("/{ticket_id}", response_model=TicketResponse, summary="Get ticket")
def get_ticket(
     ticket_id: int,
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user),
):
     return TicketResponse.model_validate(TicketService.get_ticket(db, user, ticket_id))


@router.put("/{ticket_id}", response_model=TicketResponse, summary="Update ticket")
def update_ticket(
     ticket_id: int,
     body: TicketUpdate,
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user),
):
     """Status changes are staff-only; resolving a ticket stamps resolved_at."""
     ticket = TicketService.update_ticket(db, user, ticket_id, body)
     db.commit()
     return TicketResponse.model_validate(ticket)


@router.delete("/{ticket_id}", response_model=MessageResponse, summary="Delete ticket")
def delete_ticket(
     ticket_id: int,
     db: Session = Depends(get_session),
     user: User = Depends(require_admin),
):
     TicketService.delete_ticket(db, user, ticket_id)
     db.commit()
     return MessageResponse(message="Ticket removed")
