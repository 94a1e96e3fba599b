"""
Capacity accounting for travel plans.

Occupancy is the host plus every ACCEPTED join request. It is counted from
live rows on every call; there is no stored counter to drift.
"""
from typing import Optional
from sqlalchemy.orm import Session
from travelbuddy.core.exceptions import CapacityError
from travelbuddy.models.travel_plan import TravelPlan
from travelbuddy.models.join_request import JoinRequest, JoinRequestStatus


def count_accepted(plan_id: int, db: Session) -> int:
    """Count accepted join requests for a plan."""
    return db.query(JoinRequest).filter(
        JoinRequest.plan_id == plan_id,
        JoinRequest.status == JoinRequestStatus.ACCEPTED
    ).count()


def get_occupancy(plan_id: int, db: Session) -> int:
    return 1 + count_accepted(plan_id, db)


def is_full(occupancy: int, max_participants: Optional[int]) -> bool:
    if not max_participants:
        return False
    return occupancy >= max_participants


def is_plan_full(plan: TravelPlan, db: Session) -> bool:
    if not plan.max_participants:
        return False
    return is_full(get_occupancy(plan.id, db), plan.max_participants)


def remaining_slots(plan: TravelPlan, db: Session) -> Optional[int]:
    """Free places left on a plan, or None when it is unlimited."""
    if not plan.max_participants:
        return None
    return max(plan.max_participants - get_occupancy(plan.id, db), 0)


def assert_capacity_available(plan_id: int, max_participants: Optional[int], db: Session) -> None:
    """Raise CapacityError if the plan has no free place right now."""
    if not max_participants:
        return
    if is_full(get_occupancy(plan_id, db), max_participants):
        raise CapacityError("This travel plan is already full.")
