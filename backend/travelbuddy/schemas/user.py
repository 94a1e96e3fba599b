"""
Pydantic schemas for User entity.
"""
from pydantic import BaseModel
from typing import List, Optional
from travelbuddy.models.user import UserRole


class RatingSummary(BaseModel):
    """Derived rating aggregate."""
    average: float = 0
    count: int = 0


class HostSummary(BaseModel):
    """Public profile fields shown next to plans and requests."""
    id: int
    full_name: str
    image_url: Optional[str] = None
    current_location: Optional[str] = None
    travel_interests: List[str] = []
    has_verified_badge: bool = False
    rating_summary: RatingSummary

    class Config:
        from_attributes = True


class UserResponse(HostSummary):
    """Schema for user profile response."""
    role: UserRole
    is_subscribed: bool
