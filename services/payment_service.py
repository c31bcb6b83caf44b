# services/payment_service.py
"""
Payment Service - rent and deposit collections recorded by hostel staff.
"""
import logging
from typing import List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from exceptions import NotFoundError
from models import Payment, PaymentStatus, Role, Tenant, User
from models.base import utcnow
from schemas.payment import PaymentCreate, PaymentUpdate
from services.access import apply_scope, in_scope, paginate

logger = logging.getLogger(__name__)


class PaymentService:
     """Service class for payment-related business logic."""

     @staticmethod
     def _base_query(db: Session, user: User):
          query = db.query(Payment).options(joinedload(Payment.tenant))
          if user.role == Role.TENANT.value:
               # Residents only ever see their own payments
               return query.filter(Payment.tenant_id == user.tenant_id)
          return apply_scope(query, Payment.property_id, user)

     @staticmethod
     def list_payments(
          db: Session,
          user: User,
          tenant_id: Optional[int] = None,
          status: Optional[str] = None,
          payment_type: Optional[str] = None,
          page: int = 1,
          limit: int = 10,
     ) -> Tuple[List[Payment], int, int]:
          query = PaymentService._base_query(db, user)
          if tenant_id is not None:
               query = query.filter(Payment.tenant_id == tenant_id)
          if status:
               query = query.filter(Payment.status == status)
          if payment_type:
               query = query.filter(Payment.type == payment_type)
          query = query.order_by(Payment.paid_at.desc(), Payment.id.desc())
          return paginate(query, page, limit)

     @staticmethod
     def get_payment(db: Session, user: User, payment_id: int) -> Payment:
          payment = PaymentService._base_query(db, user).filter(Payment.id == payment_id).first()
          if payment is None:
               raise NotFoundError("Payment not found")
          return payment

     @staticmethod
     def record_payment(db: Session, user: User, data: PaymentCreate) -> Payment:
          """
          Record a payment against a tenant of the staff member's hostel.

          Raises:
               NotFoundError: tenant missing or in another hostel
          """
          tenant = db.get(Tenant, data.tenant_id)
          if tenant is None or not in_scope(user, tenant.property_id):
               raise NotFoundError("Tenant not found")

          payment = Payment(
               tenant_id=tenant.id,
               property_id=tenant.property_id,
               amount=data.amount,
               method=data.method,
               status=data.status,
               type=data.type,
               paid_at=data.paid_at or utcnow(),
               notes=data.notes,
               recorded_by=user.id,
          )
          db.add(payment)
          db.flush()
          logger.info("Payment %s of %s recorded for tenant %s", payment.id, payment.amount, tenant.id)
          return payment

     @staticmethod
     def update_payment(db: Session, user: User, payment_id: int, data: PaymentUpdate) -> Payment:
          payment = PaymentService.get_payment(db, user, payment_id)
          for key, value in data.model_dump(exclude_unset=True, exclude_none=True).items():
               setattr(payment, key, value)
          db.flush()
          return payment

     @staticmethod
     def delete_payment(db: Session, user: User, payment_id: int) -> None:
          payment = PaymentService.get_payment(db, user, payment_id)
          db.delete(payment)
          db.flush()
          logger.info("Payment %s deleted by user %s", payment_id, user.id)

     @staticmethod
     def stats(db: Session, user: User) -> dict:
          """Counts and amounts grouped by status and by type."""
          def grouped(column):
               rows = (
                    apply_scope(
                         db.query(column, func.count(Payment.id), func.coalesce(func.sum(Payment.amount), 0)),
                         Payment.property_id,
                         user,
                    )
                    .group_by(column)
                    .all()
               )
               return {key: {"count": count, "amount": float(amount)} for key, count, amount in rows}

          by_status = grouped(Payment.status)
          by_type = grouped(Payment.type)
          return {
               "total_count": sum(bucket["count"] for bucket in by_status.values()),
               "total_collected": by_status.get(PaymentStatus.COMPLETED.value, {}).get("amount", 0.0),
               "by_status": by_status,
               "by_type": by_type,
          }

