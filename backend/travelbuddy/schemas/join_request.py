"""
Pydantic schemas for JoinRequest entity.
"""
from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import date, datetime
from travelbuddy.models.join_request import JoinRequestStatus
from travelbuddy.models.travel_plan import TravelType, PlanStatus, PlanVisibility
from travelbuddy.schemas.user import HostSummary


class JoinRequestCreate(BaseModel):
    """Schema for join request creation."""
    plan_id: int
    message: Optional[str] = Field(None, max_length=500)

    @field_validator("message")
    @classmethod
    def strip_message(cls, v):
        return v.strip() if v is not None else v


class JoinRequestStatusUpdate(BaseModel):
    """Host decision on a pending request."""
    status: JoinRequestStatus

    @field_validator("status")
    @classmethod
    def check_decision(cls, v):
        if v not in (JoinRequestStatus.ACCEPTED, JoinRequestStatus.REJECTED):
            raise ValueError("Status must be ACCEPTED or REJECTED.")
        return v


class PlanSummary(BaseModel):
    id: int
    country: str
    city: str
    start_date: date
    end_date: date
    travel_type: TravelType
    status: PlanStatus
    visibility: PlanVisibility
    max_participants: Optional[int] = None

    class Config:
        from_attributes = True


class JoinRequestResponse(BaseModel):
    """Schema for join request response."""
    id: int
    plan_id: int
    host_id: int
    requester_id: int
    message: Optional[str] = None
    status: JoinRequestStatus
    plan: Optional[PlanSummary] = None
    host: Optional[HostSummary] = None
    requester: Optional[HostSummary] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
