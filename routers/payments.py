# routers/payments.py
"""
Payment API routes.

Role-based access:
- Tenant: own payments only
- Staff: record and edit payments of their hostel, summary
- Admin: delete payments
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import get_current_user, require_admin, require_staff
from models import User
from schemas.common import MessageResponse
from schemas.payment import (
     PaymentCreate,
     PaymentListResponse,
     PaymentResponse,
     PaymentStatsResponse,
     PaymentStatusLiteral,
     PaymentTypeLiteral,
     PaymentUpdate,
)
from services.payment_service import PaymentService

router = APIRouter(prefix="/api/payments", tags=["payments"])


@router.get("", response_model=PaymentListResponse, summary="List payments")
def list_payments(
     tenant_id: Optional[int] = Query(None, gt=0),
     status_filter: Optional[PaymentStatusLiteral] = Query(None, alias="status"),
     payment_type: Optional[PaymentTypeLiteral] = Query(None, alias="type"),
     page: int = Query(1, ge=1),
     limit: int = Query(10, ge=1, le=100),
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user),
):
     """Staff see their hostel's payments; tenants see only their own."""
     payments, total, total_pages = PaymentService.list_payments(
          db, user, tenant_id=tenant_id, status=status_filter, payment_type=payment_type, page=page, limit=limit
     )
     return PaymentListResponse(
          payments=[PaymentResponse.model_validate(p) for p in payments],
          total=total,
          total_pages=total_pages,
          current_page=page,
     )


@router.get("/stats", response_model=PaymentStatsResponse, summary="Payment summary")
def payment_stats(
     db: Session = Depends(get_session),
     user: User = Depends(require_staff),
):
     return PaymentStatsResponse(**PaymentService.stats(db, user))


@router.post(
     "",
     response_model=PaymentResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Record payment",
)
def record_payment(
     body: PaymentCreate,
     db: Session = Depends(get_session),
     user: User = Depends(require_staff),
):
     payment = PaymentService.record_payment(db, user, body)
     db.commit()
     return PaymentResponse.model_validate(payment)


@router.get("/{payment_id}", response_model=PaymentResponse, summary="Get payment")
def get_payment(
     payment_id: int,
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user),
):
     return PaymentResponse.model_validate(PaymentService.get_payment(db, user, payment_id))


@router.put("/{payment_id}", response_model=PaymentResponse, summary="Update payment")
def update_payment(
     payment_id: int,
     body: PaymentUpdate,
     db: Session = Depends(get_session),
     user: User = Depends(require_staff),
):
     payment = PaymentService.update_payment(db, user, payment_id, body)
     db.commit()
     return PaymentResponse.model_validate(payment)


@router.delete("/{payment_id}", response_model=MessageResponse, summary="Delete payment")
def delete_payment(
     payment_id: int,
     db: Session = Depends(get_session),
     user: User = Depends(require_admin),
):
     PaymentService.delete_payment(db, user, payment_id)
     db.commit()
     return MessageResponse(message="Payment removed")
