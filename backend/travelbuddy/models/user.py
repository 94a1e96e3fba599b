"""
User model: the profile fields the matching and review engine reads.
"""
from sqlalchemy import Column, String, Boolean, Float, Integer, DateTime, JSON, Enum as SQLEnum
from sqlalchemy.orm import relationship
from travelbuddy.db.base import BaseModel
import enum


class UserRole(str, enum.Enum):
    """User role enumeration."""
    USER = "USER"
    ADMIN = "ADMIN"


class UserStatus(str, enum.Enum):
    """Account status enumeration."""
    ACTIVE = "ACTIVE"
    BLOCKED = "BLOCKED"


class User(BaseModel):
    """User model with travel profile and derived rating summary."""
    __tablename__ = "users"

    email = Column(String(100), unique=True, nullable=False, index=True)
    full_name = Column(String(120), nullable=False)
    image_url = Column(String(500), nullable=True)
    current_location = Column(String(120), nullable=True)
    travel_interests = Column(JSON, nullable=False, default=list)

    role = Column(SQLEnum(UserRole), default=UserRole.USER, nullable=False)
    status = Column(SQLEnum(UserStatus), default=UserStatus.ACTIVE, nullable=False)
    is_deleted = Column(Boolean, default=False, nullable=False, index=True)

    # Premium state, written only by the payment flow
    is_subscribed = Column(Boolean, default=False, nullable=False)
    subscription_expires_at = Column(DateTime, nullable=True)
    has_verified_badge = Column(Boolean, default=False, nullable=False)

    # Derived from reviews; always recomputed, never patched
    rating_average = Column(Float, default=0, nullable=False)
    rating_count = Column(Integer, default=0, nullable=False)

    # Relationships
    travel_plans = relationship("TravelPlan", back_populates="host")
    payments = relationship("Payment", back_populates="user")

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @property
    def rating_summary(self) -> dict:
        return {"average": self.rating_average or 0, "count": self.rating_count or 0}
