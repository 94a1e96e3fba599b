"""
Payment model for premium purchases made through the payment gateway.
"""
from sqlalchemy import Column, String, Integer, Numeric, JSON, ForeignKey, Enum as SQLEnum
from sqlalchemy.orm import relationship
from travelbuddy.db.base import BaseModel
import enum


class PaymentGateway(str, enum.Enum):
    SSLCOMMERZ = "SSLCOMMERZ"


class PaymentPurpose(str, enum.Enum):
    """What the payment unlocks."""
    SUBSCRIPTION = "SUBSCRIPTION"
    VERIFIED_BADGE = "VERIFIED_BADGE"


class SubscriptionPlan(str, enum.Enum):
    MONTHLY = "MONTHLY"
    YEARLY = "YEARLY"


class PaymentStatus(str, enum.Enum):
    """Payment status enumeration."""
    INITIATED = "INITIATED"
    PAID = "PAID"
    FAILED = "FAILED"
    CANCELED = "CANCELED"


class Payment(BaseModel):
    """A single premium purchase attempt."""
    __tablename__ = "payments"

    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    transaction_id = Column(String(64), unique=True, nullable=False, index=True)
    gateway = Column(SQLEnum(PaymentGateway), default=PaymentGateway.SSLCOMMERZ, nullable=False)
    purpose = Column(SQLEnum(PaymentPurpose), nullable=False, index=True)
    plan_type = Column(SQLEnum(SubscriptionPlan), nullable=True)  # subscriptions only
    amount = Column(Numeric(12, 2), nullable=False)
    currency = Column(String(3), nullable=False, default="BDT")
    status = Column(SQLEnum(PaymentStatus), default=PaymentStatus.INITIATED, nullable=False, index=True)
    gateway_data = Column(JSON, nullable=True)

    # Relationships
    user = relationship("User", back_populates="payments")
