"""
Pydantic schemas for TravelPlan entity.
"""
from pydantic import BaseModel, Field, model_validator
from typing import Optional
from datetime import date, datetime
from decimal import Decimal
from travelbuddy.models.travel_plan import TravelType, PlanVisibility, PlanStatus
from travelbuddy.schemas.user import HostSummary

# Plan fields that may be omitted from an update but never cleared
REQUIRED_PLAN_FIELDS = (
    "destination", "start_date", "end_date", "travel_type", "visibility", "status"
)


class Destination(BaseModel):
    country: str = Field(..., min_length=1, max_length=80)
    city: str = Field(..., min_length=1, max_length=80)


class TravelPlanBase(BaseModel):
    """Base travel plan schema."""
    destination: Destination
    start_date: date
    end_date: date
    budget_min: Optional[Decimal] = Field(None, ge=0)
    budget_max: Optional[Decimal] = Field(None, ge=0)
    travel_type: TravelType
    description: Optional[str] = Field(None, max_length=2000)
    visibility: PlanVisibility = PlanVisibility.PUBLIC
    max_participants: Optional[int] = Field(None, ge=1, le=50)


class TravelPlanCreate(TravelPlanBase):
    """Schema for travel plan creation."""
    status: PlanStatus = PlanStatus.UPCOMING

    @model_validator(mode="after")
    def check_ranges(self):
        if self.start_date > self.end_date:
            raise ValueError("Start date cannot be greater than end date.")
        if self.budget_min is not None and self.budget_max is not None and self.budget_min > self.budget_max:
            raise ValueError("budgetMin cannot be greater than budgetMax.")
        return self


class TravelPlanUpdate(BaseModel):
    """Schema for travel plan update. Host and deletion flag are not editable."""
    destination: Optional[Destination] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    budget_min: Optional[Decimal] = Field(None, ge=0)
    budget_max: Optional[Decimal] = Field(None, ge=0)
    travel_type: Optional[TravelType] = None
    description: Optional[str] = Field(None, max_length=2000)
    visibility: Optional[PlanVisibility] = None
    status: Optional[PlanStatus] = None
    max_participants: Optional[int] = Field(None, ge=1, le=50)

    class Config:
        extra = "forbid"

    @model_validator(mode="after")
    def reject_null_required(self):
        nulls = sorted(f for f in REQUIRED_PLAN_FIELDS if f in self.model_fields_set and getattr(self, f) is None)
        if nulls:
            raise ValueError(f"{', '.join(nulls)} cannot be null.")
        return self


class TravelPlanResponse(BaseModel):
    """Schema for travel plan response."""
    id: int
    host_id: int
    country: str
    city: str
    start_date: date
    end_date: date
    budget_min: Optional[Decimal] = None
    budget_max: Optional[Decimal] = None
    travel_type: TravelType
    description: Optional[str] = None
    visibility: PlanVisibility
    status: PlanStatus
    max_participants: Optional[int] = None
    host: Optional[HostSummary] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
