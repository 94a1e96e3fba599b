"""
Pydantic schemas for premium payments.
"""
from pydantic import BaseModel, Field
from typing import Any, Dict, Optional
from datetime import datetime
from decimal import Decimal
from travelbuddy.models.payment import PaymentPurpose, PaymentStatus, SubscriptionPlan


class CustomerContact(BaseModel):
    phone_number: Optional[str] = Field(None, min_length=6, max_length=20)
    address: Optional[str] = Field(None, max_length=200)


class SubscriptionInit(CustomerContact):
    """Schema for starting a subscription purchase."""
    plan_type: SubscriptionPlan


class VerifiedBadgeInit(CustomerContact):
    """Schema for starting a verified badge purchase."""
    pass


class PaymentSession(BaseModel):
    """Gateway session handed back to the client."""
    payment_id: int
    transaction_id: str
    gateway: str
    session: Dict[str, Any]


class PaymentResponse(BaseModel):
    id: int
    transaction_id: str
    purpose: PaymentPurpose
    plan_type: Optional[SubscriptionPlan] = None
    amount: Decimal
    currency: str
    status: PaymentStatus
    created_at: datetime

    class Config:
        from_attributes = True
