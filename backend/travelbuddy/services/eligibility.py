"""
Eligibility guards shared by plans, join requests and reviews.

Every guard only reads. A guard either raises an AppError or returns the
record it loaded so callers do not query it twice.
"""
from datetime import date
from typing import Optional
from sqlalchemy.orm import Session
from travelbuddy.core.exceptions import (
    NotFoundError, ForbiddenError, BadRequestError, InvalidStateError, ValidationError
)
from travelbuddy.models.user import User, UserStatus
from travelbuddy.models.travel_plan import TravelPlan, PlanStatus, PlanVisibility
from travelbuddy.models.join_request import JoinRequest, JoinRequestStatus
from travelbuddy.services.capacity_service import assert_capacity_available  # noqa: F401  re-exported guard


CLOSED_PLAN_STATUSES = (PlanStatus.CANCELED, PlanStatus.COMPLETED)


def assert_user_active(user_id: int, db: Session) -> User:
    """Load a user that exists, is not deleted and is not blocked."""
    user = db.query(User).filter(User.id == user_id).first()
    if not user or user.is_deleted:
        raise NotFoundError("User not found!!")
    if user.status == UserStatus.BLOCKED:
        raise ForbiddenError("User is blocked!!")
    return user


def get_live_plan(plan_id: int, db: Session) -> TravelPlan:
    """Load a plan that exists and is not soft-deleted."""
    plan = db.query(TravelPlan).filter(TravelPlan.id == plan_id).first()
    if not plan or plan.is_deleted:
        raise NotFoundError("Travel plan not found!!")
    return plan


def assert_plan_joinable(plan_id: int, db: Session) -> TravelPlan:
    """Load a plan that is public and still open for requests."""
    plan = get_live_plan(plan_id, db)
    if plan.visibility != PlanVisibility.PUBLIC:
        raise ForbiddenError("You cannot request a private plan.")
    if plan.status in CLOSED_PLAN_STATUSES:
        raise InvalidStateError("You cannot request to join this plan.")
    return plan


def assert_can_mutate_plan(host_id: int, actor: User) -> None:
    """Only the plan host or an administrator may change a plan."""
    if not actor.is_admin and actor.id != host_id:
        raise ForbiddenError("You are unauthorized!!")


def assert_valid_date_range(start_date: Optional[date], end_date: Optional[date]) -> None:
    if start_date and end_date and start_date > end_date:
        raise ValidationError("Start date cannot be greater than end date.")


def is_trip_completed(plan: TravelPlan, today: Optional[date] = None) -> bool:
    """A trip counts as completed once marked so or once its end date has passed."""
    if plan.status == PlanStatus.COMPLETED:
        return True
    today = today or date.today()
    return plan.end_date is not None and plan.end_date < today


def has_accepted_request(plan_id: int, user_id: int, db: Session) -> bool:
    return db.query(JoinRequest.id).filter(
        JoinRequest.plan_id == plan_id,
        JoinRequest.requester_id == user_id,
        JoinRequest.status == JoinRequestStatus.ACCEPTED
    ).first() is not None


def assert_review_eligible(
    plan_id: int,
    reviewer_id: int,
    reviewee_id: int,
    db: Session,
    today: Optional[date] = None
) -> TravelPlan:
    """
    Check that reviewer may review reviewee for a plan.

    Only two relationships qualify: the host reviewing an accepted
    participant, and an accepted participant reviewing the host.
    Participants cannot review each other.
    """
    if reviewer_id == reviewee_id:
        raise BadRequestError("You cannot review yourself.")

    plan = get_live_plan(plan_id, db)

    if not is_trip_completed(plan, today):
        raise InvalidStateError("You can review only after the trip is completed.")

    if reviewer_id == plan.host_id:
        if not has_accepted_request(plan.id, reviewee_id, db):
            raise ForbiddenError("You can review only accepted participants of your plan.")
        return plan

    if reviewee_id == plan.host_id:
        if not has_accepted_request(plan.id, reviewer_id, db):
            raise ForbiddenError("Only accepted participants can review the host.")
        return plan

    raise ForbiddenError(
        "You can review only between host and accepted participant for this plan."
    )
