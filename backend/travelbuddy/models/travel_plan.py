"""
Travel plan model for hosted itineraries.
"""
from sqlalchemy import Column, String, Date, Boolean, Integer, Text, Numeric, ForeignKey, Index, Enum as SQLEnum
from sqlalchemy.orm import relationship
from travelbuddy.db.base import BaseModel
import enum


class TravelType(str, enum.Enum):
    """Travel type enumeration."""
    SOLO = "SOLO"
    FAMILY = "FAMILY"
    FRIENDS = "FRIENDS"


class PlanVisibility(str, enum.Enum):
    PUBLIC = "PUBLIC"
    PRIVATE = "PRIVATE"


class PlanStatus(str, enum.Enum):
    """Plan lifecycle enumeration."""
    UPCOMING = "UPCOMING"
    ONGOING = "ONGOING"
    COMPLETED = "COMPLETED"
    CANCELED = "CANCELED"


class TravelPlan(BaseModel):
    """A hosted travel itinerary other users can request to join."""
    __tablename__ = "travel_plans"
    __table_args__ = (
        Index("ix_travel_plans_destination", "country", "city"),
        Index("ix_travel_plans_visibility_deleted", "visibility", "is_deleted"),
    )

    host_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    country = Column(String(80), nullable=False)
    city = Column(String(80), nullable=False)
    start_date = Column(Date, nullable=False, index=True)
    end_date = Column(Date, nullable=False, index=True)
    budget_min = Column(Numeric(12, 2), nullable=True)
    budget_max = Column(Numeric(12, 2), nullable=True)
    travel_type = Column(SQLEnum(TravelType), nullable=False, index=True)
    description = Column(Text, nullable=True)
    visibility = Column(SQLEnum(PlanVisibility), default=PlanVisibility.PUBLIC, nullable=False)
    status = Column(SQLEnum(PlanStatus), default=PlanStatus.UPCOMING, nullable=False, index=True)
    max_participants = Column(Integer, nullable=True)  # None = unlimited, host counts as one
    is_deleted = Column(Boolean, default=False, nullable=False)

    # Relationships
    host = relationship("User", back_populates="travel_plans")
    join_requests = relationship("JoinRequest", back_populates="plan")
    reviews = relationship("Review", back_populates="plan")
