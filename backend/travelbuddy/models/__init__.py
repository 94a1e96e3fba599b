"""Models package - Import all models for SQLAlchemy registration."""
from travelbuddy.models.user import User, UserRole, UserStatus
from travelbuddy.models.travel_plan import TravelPlan, TravelType, PlanVisibility, PlanStatus
from travelbuddy.models.join_request import JoinRequest, JoinRequestStatus
from travelbuddy.models.review import Review
from travelbuddy.models.payment import (
    Payment, PaymentGateway, PaymentPurpose, PaymentStatus, SubscriptionPlan
)

__all__ = [
    "User",
    "UserRole",
    "UserStatus",
    "TravelPlan",
    "TravelType",
    "PlanVisibility",
    "PlanStatus",
    "JoinRequest",
    "JoinRequestStatus",
    "Review",
    "Payment",
    "PaymentGateway",
    "PaymentPurpose",
    "PaymentStatus",
    "SubscriptionPlan",
]
