"""
Pydantic schemas for plan matching.
"""
from pydantic import BaseModel, field_validator
from typing import List, Optional
from datetime import date
from travelbuddy.models.travel_plan import TravelType
from travelbuddy.schemas.travel_plan import TravelPlanResponse


class MatchQuery(BaseModel):
    """What a traveller is looking for."""
    country: Optional[str] = None
    city: Optional[str] = None
    date_from: Optional[date] = None
    date_to: Optional[date] = None
    travel_type: Optional[TravelType] = None
    interests: List[str] = []
    requester_id: Optional[int] = None
    exclude_self: bool = True
    page: int = 1
    limit: int = 10

    @field_validator("interests", mode="before")
    @classmethod
    def parse_interests(cls, v):
        """Accept "Beach,Food" as well as a list."""
        if v is None:
            return []
        if isinstance(v, str):
            return [item.strip() for item in v.split(",") if item.strip()]
        return v


class MatchMeta(BaseModel):
    interest_match: int
    overlap_days: int


class MatchedPlanResponse(TravelPlanResponse):
    """Plan with its match score."""
    match_score: int
    match_meta: MatchMeta


class PageMeta(BaseModel):
    page: int
    limit: int
    total: int


class MatchPage(BaseModel):
    meta: PageMeta
    data: List[MatchedPlanResponse] = []


class TravelPlanPage(BaseModel):
    meta: PageMeta
    data: List[TravelPlanResponse] = []
