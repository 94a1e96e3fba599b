"""
Premium payment routes and gateway callbacks.
"""
from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.orm import Session
from typing import List
from travelbuddy.db.session import get_db
from travelbuddy.models.user import User
from travelbuddy.schemas.payment import (
    SubscriptionInit, VerifiedBadgeInit, PaymentSession, PaymentResponse
)
from travelbuddy.api.dependencies import get_current_user
from travelbuddy.services import payment_service
from travelbuddy.services.sslcommerz_service import PaymentGatewayClient, get_payment_gateway

router = APIRouter(prefix="/payments", tags=["payments"])


async def _callback_data(request: Request) -> dict:
    form = await request.form()
    return dict(form)


@router.post("/subscription/init", response_model=PaymentSession, status_code=status.HTTP_201_CREATED)
async def init_subscription(
    payload: SubscriptionInit,
    current_user: User = Depends(get_current_user),
    gateway: PaymentGatewayClient = Depends(get_payment_gateway),
    db: Session = Depends(get_db)
):
    """Start a subscription purchase."""
    return payment_service.init_subscription(
        payload.plan_type, current_user, gateway, db,
        phone_number=payload.phone_number, address=payload.address
    )


@router.post("/verified-badge/init", response_model=PaymentSession, status_code=status.HTTP_201_CREATED)
async def init_verified_badge(
    payload: VerifiedBadgeInit,
    current_user: User = Depends(get_current_user),
    gateway: PaymentGatewayClient = Depends(get_payment_gateway),
    db: Session = Depends(get_db)
):
    """Start a verified badge purchase."""
    return payment_service.init_verified_badge(
        current_user, gateway, db,
        phone_number=payload.phone_number, address=payload.address
    )


@router.post("/ssl/success", response_model=PaymentResponse)
async def ssl_success(
    request: Request,
    transaction_id: str = Query(..., alias="transactionId", min_length=5),
    gateway: PaymentGatewayClient = Depends(get_payment_gateway),
    db: Session = Depends(get_db)
):
    """Gateway redirect after a successful payment."""
    callback_data = await _callback_data(request)
    return payment_service.process_success(transaction_id, callback_data, gateway, db)


@router.post("/ssl/fail", response_model=PaymentResponse)
async def ssl_fail(
    request: Request,
    transaction_id: str = Query(..., alias="transactionId", min_length=5),
    db: Session = Depends(get_db)
):
    callback_data = await _callback_data(request)
    return payment_service.process_fail(transaction_id, db, callback_data)


@router.post("/ssl/cancel", response_model=PaymentResponse)
async def ssl_cancel(
    request: Request,
    transaction_id: str = Query(..., alias="transactionId", min_length=5),
    db: Session = Depends(get_db)
):
    callback_data = await _callback_data(request)
    return payment_service.process_cancel(transaction_id, db, callback_data)


@router.post("/ssl/ipn", response_model=PaymentResponse)
async def ssl_ipn(
    request: Request,
    gateway: PaymentGatewayClient = Depends(get_payment_gateway),
    db: Session = Depends(get_db)
):
    """Server-to-server notification; the transaction id comes in the form body."""
    callback_data = await _callback_data(request)
    return payment_service.process_success(callback_data.get("tran_id", ""), callback_data, gateway, db)


@router.get("/me", response_model=List[PaymentResponse])
async def list_my_payments(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List my payments, newest first."""
    return payment_service.get_my_payments(current_user, db)
