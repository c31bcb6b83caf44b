# services/ticket_service.py
"""
Ticket Service - maintenance requests and complaints.

Tenants raise tickets for themselves; hostel staff can raise them on a
tenant's behalf and move them through open -> in_progress -> resolved/closed.
"""
import logging
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from exceptions import NotFoundError, PermissionDeniedError, ValidationError
from models import Role, Tenant, Ticket, TicketStatus, User
from models.base import utcnow
from schemas.ticket import TicketCreate, TicketUpdate
from services.access import apply_scope, in_scope, paginate

logger = logging.getLogger(__name__)

# Fields a resident may still edit on their own ticket
TENANT_EDITABLE = ("title", "description", "priority", "category")


class TicketService:
     """Service class for ticket-related business logic."""

     @staticmethod
     def _base_query(db: Session, user: User):
          if user.role == Role.TENANT.value:
               return db.query(Ticket).filter(Ticket.tenant_id == user.tenant_id)
          return apply_scope(db.query(Ticket), Ticket.property_id, user)

     @staticmethod
     def list_tickets(
          db: Session,
          user: User,
          status: Optional[str] = None,
          priority: Optional[str] = None,
          category: Optional[str] = None,
          page: int = 1,
          limit: int = 10,
     ) -> Tuple[List[Ticket], int, int]:
          query = TicketService._base_query(db, user)
          if status and status != "all":
               query = query.filter(Ticket.status == status)
          if priority:
               query = query.filter(Ticket.priority == priority)
          if category:
               query = query.filter(Ticket.category == category)
          query = query.order_by(Ticket.created_at.desc(), Ticket.id.desc())
          return paginate(query, page, limit)

     @staticmethod
     def get_ticket(db: Session, user: User, ticket_id: int) -> Ticket:
          ticket = TicketService._base_query(db, user).filter(Ticket.id == ticket_id).first()
          if ticket is None:
               raise NotFoundError("Ticket not found")
          return ticket

     @staticmethod
     def create_ticket(db: Session, user: User, data: TicketCreate) -> Ticket:
          """
          Raise a ticket. For residents the tenant, room and hostel come from
          their own profile; staff may name a tenant or raise a hostel-wide
          ticket.

          Raises:
               ValidationError: resident without a tenant profile
               NotFoundError: named tenant missing or in another hostel
          """
          tenant = None
          if user.role == Role.TENANT.value:
               if user.tenant_id is None:
                    raise ValidationError("Complete onboarding before raising tickets")
               tenant = db.get(Tenant, user.tenant_id)
          elif data.tenant_id is not None:
               tenant = db.get(Tenant, data.tenant_id)
               if tenant is None or not in_scope(user, tenant.property_id):
                    raise NotFoundError("Tenant not found")

          ticket = Ticket(
               title=data.title,
               description=data.description,
               priority=data.priority,
               category=data.category,
               status=TicketStatus.OPEN.value,
               created_by=user.id,
          )
          if tenant is not None:
               ticket.tenant_id = tenant.id
               ticket.room_id = tenant.room_id
               ticket.property_id = tenant.property_id
          else:
               ticket.property_id = user.property_id
          db.add(ticket)
          db.flush()
          logger.info("Ticket %s raised by user %s (tenant=%s)", ticket.id, user.id, ticket.tenant_id)
          return ticket

     @staticmethod
     def update_ticket(db: Session, user: User, ticket_id: int, data: TicketUpdate) -> Ticket:
          """
          Partial update. Residents can only reword an open ticket; status
          changes are reserved to staff. resolved_at is stamped on the move
          to resolved and cleared when the ticket is reopened.
          """
          ticket = TicketService.get_ticket(db, user, ticket_id)
          fields = data.model_dump(exclude_unset=True, exclude_none=True)

          if user.role == Role.TENANT.value:
               forbidden = set(fields) - set(TENANT_EDITABLE)
               if forbidden:
                    raise PermissionDeniedError("Only staff can change ticket status")
               if ticket.status != TicketStatus.OPEN.value:
                    raise ValidationError("Only open tickets can be edited")

          new_status = fields.get("status")
          if new_status is not None and new_status != ticket.status:
               if new_status == TicketStatus.RESOLVED.value:
                    ticket.resolved_at = utcnow()
               elif new_status in (TicketStatus.OPEN.value, TicketStatus.IN_PROGRESS.value):
                    ticket.resolved_at = None
               logger.info("Ticket %s status %s -> %s", ticket.id, ticket.status, new_status)

          for key, value in fields.items():
               setattr(ticket, key, value)
          db.flush()
          return ticket

     @staticmethod
     def delete_ticket(db: Session, user: User, ticket_id: int) -> None:
          ticket = TicketService.get_ticket(db, user, ticket_id)
          db.delete(ticket)
          db.flush()
          logger.info("Ticket %s deleted by user %s", ticket_id, user.id)
