"""
Payment service for premium features: subscription and verified badge.
"""
import calendar
import logging
import uuid
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional
from sqlalchemy.orm import Session
from travelbuddy.core.config import settings
from travelbuddy.core.exceptions import NotFoundError, ForbiddenError, BadRequestError
from travelbuddy.models.payment import Payment, PaymentPurpose, PaymentStatus, SubscriptionPlan
from travelbuddy.models.user import User
from travelbuddy.services.sslcommerz_service import PaymentGatewayClient

logger = logging.getLogger(__name__)

PRODUCT_NAMES = {
    SubscriptionPlan.MONTHLY: "TravelBuddy Subscription (Monthly)",
    SubscriptionPlan.YEARLY: "TravelBuddy Subscription (Yearly)",
}


def subscription_price(plan_type: SubscriptionPlan) -> int:
    if plan_type == SubscriptionPlan.YEARLY:
        return settings.SUBSCRIPTION_YEARLY_PRICE
    return settings.SUBSCRIPTION_MONTHLY_PRICE


def add_months(value: datetime, months: int) -> datetime:
    """Shift by whole months, clamping the day to the target month's length."""
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


def new_transaction_id(prefix: str) -> str:
    return f"{prefix}_{uuid.uuid4().hex[:20]}"


def _get_live_user(user_id: int, db: Session) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if not user or user.is_deleted:
        raise NotFoundError("User not found!!")
    return user


def _open_session(
    user: User,
    payment: Payment,
    product_name: str,
    gateway: PaymentGatewayClient,
    db: Session,
    phone_number: Optional[str] = None,
    address: Optional[str] = None
) -> Dict[str, Any]:
    db.add(payment)
    db.commit()
    db.refresh(payment)

    session = gateway.init_payment(
        transaction_id=payment.transaction_id,
        amount=float(payment.amount),
        customer={
            "name": user.full_name,
            "email": user.email,
            "phone_number": phone_number or "N/A",
            "address": address or "N/A",
        },
        product_name=product_name
    )
    return {
        "payment_id": payment.id,
        "transaction_id": payment.transaction_id,
        "gateway": payment.gateway.value,
        "session": session,
    }


def init_subscription(
    plan_type: SubscriptionPlan,
    current_user: User,
    gateway: PaymentGatewayClient,
    db: Session,
    phone_number: Optional[str] = None,
    address: Optional[str] = None
) -> Dict[str, Any]:
    """Record an INITIATED subscription payment and open a gateway session."""
    user = _get_live_user(current_user.id, db)
    payment = Payment(
        user_id=user.id,
        transaction_id=new_transaction_id("SUB"),
        purpose=PaymentPurpose.SUBSCRIPTION,
        plan_type=plan_type,
        amount=Decimal(subscription_price(plan_type)),
        currency=settings.PAYMENT_CURRENCY,
        status=PaymentStatus.INITIATED
    )
    logger.info(f"User {user.id} starting {plan_type.value} subscription payment")
    return _open_session(user, payment, PRODUCT_NAMES[plan_type], gateway, db, phone_number, address)


def init_verified_badge(
    current_user: User,
    gateway: PaymentGatewayClient,
    db: Session,
    phone_number: Optional[str] = None,
    address: Optional[str] = None
) -> Dict[str, Any]:
    """Start a verified badge purchase; only subscribers without a badge may buy one."""
    user = _get_live_user(current_user.id, db)
    if not user.is_subscribed:
        raise ForbiddenError("You must be subscribed to buy verified badge.")
    if user.has_verified_badge:
        raise BadRequestError("You already have verified badge.")

    payment = Payment(
        user_id=user.id,
        transaction_id=new_transaction_id("BADGE"),
        purpose=PaymentPurpose.VERIFIED_BADGE,
        amount=Decimal(settings.VERIFIED_BADGE_PRICE),
        currency=settings.PAYMENT_CURRENCY,
        status=PaymentStatus.INITIATED
    )
    logger.info(f"User {user.id} starting verified badge payment")
    return _open_session(user, payment, "TravelBuddy Verified Badge", gateway, db, phone_number, address)


def get_payment_by_transaction(transaction_id: str, db: Session) -> Payment:
    payment = db.query(Payment).filter(Payment.transaction_id == transaction_id).first()
    if not payment:
        raise NotFoundError("Payment not found!!")
    return payment


def _apply_benefit(payment: Payment, user: User, now: datetime) -> None:
    if payment.purpose == PaymentPurpose.SUBSCRIPTION:
        # Extend from the current expiry if it is still running
        base = user.subscription_expires_at
        if not base or base < now:
            base = now
        months = 12 if payment.plan_type == SubscriptionPlan.YEARLY else 1
        user.is_subscribed = True
        user.subscription_expires_at = add_months(base, months)
    elif payment.purpose == PaymentPurpose.VERIFIED_BADGE:
        if not user.is_subscribed:
            raise ForbiddenError("Subscription required for badge.")
        user.has_verified_badge = True


def process_success(
    transaction_id: str,
    callback_data: Dict[str, Any],
    gateway: PaymentGatewayClient,
    db: Session,
    now: Optional[datetime] = None
) -> Payment:
    """
    Confirm a successful callback with the gateway and unlock the purchase.

    Callback data is trusted only after the gateway's validation API has
    confirmed it. A payment already marked PAID is returned unchanged so a
    repeated callback or IPN cannot extend a subscription twice.
    """
    payment = get_payment_by_transaction(transaction_id, db)
    if payment.status == PaymentStatus.PAID:
        return payment

    validation = gateway.validate_payment(callback_data)
    if validation.get("tran_id") and validation["tran_id"] != transaction_id:
        raise BadRequestError("Transaction mismatch.")

    user = _get_live_user(payment.user_id, db)
    _apply_benefit(payment, user, now or datetime.utcnow())

    payment.status = PaymentStatus.PAID
    payment.gateway_data = validation
    db.commit()
    db.refresh(payment)

    logger.info(f"Payment {transaction_id} confirmed for user {user.id} ({payment.purpose.value})")
    return payment


def _close_payment(
    transaction_id: str,
    new_status: PaymentStatus,
    db: Session,
    callback_data: Optional[Dict[str, Any]] = None
) -> Payment:
    payment = get_payment_by_transaction(transaction_id, db)
    if payment.status == PaymentStatus.PAID:
        raise BadRequestError("Payment is already completed.")
    payment.status = new_status
    if callback_data:
        payment.gateway_data = callback_data
    db.commit()
    db.refresh(payment)

    logger.warning(f"Payment {transaction_id} marked {new_status.value}")
    return payment


def process_fail(transaction_id: str, db: Session, callback_data: Optional[Dict[str, Any]] = None) -> Payment:
    return _close_payment(transaction_id, PaymentStatus.FAILED, db, callback_data)


def process_cancel(transaction_id: str, db: Session, callback_data: Optional[Dict[str, Any]] = None) -> Payment:
    return _close_payment(transaction_id, PaymentStatus.CANCELED, db, callback_data)


def get_my_payments(current_user: User, db: Session) -> List[Payment]:
    return db.query(Payment).filter(
        Payment.user_id == current_user.id
    ).order_by(Payment.created_at.desc(), Payment.id.desc()).all()
