"""
Join request model: a requester's petition to join a travel plan.
"""
from sqlalchemy import Column, String, Integer, ForeignKey, UniqueConstraint, Enum as SQLEnum
from sqlalchemy.orm import relationship
from travelbuddy.db.base import BaseModel
import enum


class JoinRequestStatus(str, enum.Enum):
    """PENDING is the only non-terminal status."""
    PENDING = "PENDING"
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"
    CANCELED = "CANCELED"


class JoinRequest(BaseModel):
    """Join request; never physically deleted."""
    __tablename__ = "join_requests"
    __table_args__ = (
        UniqueConstraint("plan_id", "requester_id", name="uq_join_request_plan_requester"),
    )

    plan_id = Column(Integer, ForeignKey("travel_plans.id"), nullable=False, index=True)
    # Copied from the plan at creation; not re-synced if the plan changes hands
    host_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    requester_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    message = Column(String(500), nullable=True)
    status = Column(SQLEnum(JoinRequestStatus), default=JoinRequestStatus.PENDING, nullable=False, index=True)

    # Relationships
    plan = relationship("TravelPlan", back_populates="join_requests")
    host = relationship("User", foreign_keys=[host_id])
    requester = relationship("User", foreign_keys=[requester_id])
