"""
Travel plan service for hosting, browsing and editing plans.
"""
import logging
from datetime import date
from typing import Any, Dict, List, Optional
from sqlalchemy.orm import Session, joinedload
from travelbuddy.core.exceptions import ForbiddenError, ValidationError
from travelbuddy.models.user import User
from travelbuddy.models.travel_plan import TravelPlan, TravelType, PlanStatus, PlanVisibility
from travelbuddy.schemas.travel_plan import TravelPlanCreate, TravelPlanUpdate, REQUIRED_PLAN_FIELDS
from travelbuddy.services.eligibility import (
    assert_user_active, assert_can_mutate_plan, assert_valid_date_range, get_live_plan
)
from travelbuddy.services.matching_service import apply_plan_filters, clamp_pagination

logger = logging.getLogger(__name__)


def _assert_valid_budget(budget_min, budget_max) -> None:
    if budget_min is not None and budget_max is not None and budget_min > budget_max:
        raise ValidationError("budgetMin cannot be greater than budgetMax.")


def create_travel_plan(plan_data: TravelPlanCreate, current_user: User, db: Session) -> TravelPlan:
    """Create a plan hosted by the current user."""
    assert_user_active(current_user.id, db)
    assert_valid_date_range(plan_data.start_date, plan_data.end_date)
    _assert_valid_budget(plan_data.budget_min, plan_data.budget_max)

    plan = TravelPlan(
        host_id=current_user.id,
        country=plan_data.destination.country.strip(),
        city=plan_data.destination.city.strip(),
        start_date=plan_data.start_date,
        end_date=plan_data.end_date,
        budget_min=plan_data.budget_min,
        budget_max=plan_data.budget_max,
        travel_type=plan_data.travel_type,
        description=plan_data.description,
        visibility=plan_data.visibility,
        status=plan_data.status,
        max_participants=plan_data.max_participants,
        is_deleted=False
    )
    db.add(plan)
    db.commit()
    db.refresh(plan)

    logger.info(f"Travel plan {plan.id} created by user {current_user.id}")
    return plan


def get_my_travel_plans(current_user: User, db: Session) -> List[TravelPlan]:
    assert_user_active(current_user.id, db)
    return db.query(TravelPlan).filter(
        TravelPlan.host_id == current_user.id,
        TravelPlan.is_deleted.is_(False)
    ).order_by(TravelPlan.created_at.desc(), TravelPlan.id.desc()).all()


def get_public_travel_plans(
    db: Session,
    country: Optional[str] = None,
    city: Optional[str] = None,
    travel_type: Optional[TravelType] = None,
    plan_status: Optional[PlanStatus] = None,
    date_from: Optional[date] = None,
    date_to: Optional[date] = None,
    page: Optional[int] = None,
    limit: Optional[int] = None
) -> Dict[str, Any]:
    """Explore listing: public plans, newest first, paginated in the database."""
    page, limit = clamp_pagination(page, limit)

    query = apply_plan_filters(
        db.query(TravelPlan),
        country=country,
        city=city,
        travel_type=travel_type,
        date_from=date_from,
        date_to=date_to
    )
    if plan_status:
        query = query.filter(TravelPlan.status == plan_status)

    total = query.count()
    plans = query.options(joinedload(TravelPlan.host)).order_by(
        TravelPlan.created_at.desc(), TravelPlan.id.desc()
    ).offset((page - 1) * limit).limit(limit).all()

    return {"meta": {"page": page, "limit": limit, "total": total}, "data": plans}


def get_travel_plan(plan_id: int, db: Session, current_user: Optional[User] = None) -> TravelPlan:
    """Get a plan; private plans are visible to their host and administrators only."""
    plan = get_live_plan(plan_id, db)

    if plan.visibility == PlanVisibility.PRIVATE:
        if current_user is None:
            raise ForbiddenError("This travel plan is private.")
        assert_can_mutate_plan(plan.host_id, current_user)

    return plan


def update_travel_plan(
    plan_id: int,
    plan_data: TravelPlanUpdate,
    current_user: User,
    db: Session
) -> TravelPlan:
    """Update a plan as its host or an administrator."""
    assert_user_active(current_user.id, db)
    plan = get_live_plan(plan_id, db)
    assert_can_mutate_plan(plan.host_id, current_user)

    changes = plan_data.model_dump(exclude_unset=True)
    nulls = sorted(f for f in REQUIRED_PLAN_FIELDS if f in changes and changes[f] is None)
    if nulls:
        raise ValidationError(f"{', '.join(nulls)} cannot be null.")
    destination = changes.pop("destination", None)

    start = changes.get("start_date", plan.start_date)
    end = changes.get("end_date", plan.end_date)
    assert_valid_date_range(start, end)
    _assert_valid_budget(
        changes.get("budget_min", plan.budget_min),
        changes.get("budget_max", plan.budget_max)
    )

    if destination:
        plan.country = destination["country"].strip()
        plan.city = destination["city"].strip()
    for field, value in changes.items():
        setattr(plan, field, value)

    db.commit()
    db.refresh(plan)

    logger.info(f"Travel plan {plan.id} updated by user {current_user.id}")
    return plan


def delete_travel_plan(plan_id: int, current_user: User, db: Session) -> None:
    """Soft-delete a plan; plans are never removed from storage."""
    assert_user_active(current_user.id, db)
    plan = get_live_plan(plan_id, db)
    assert_can_mutate_plan(plan.host_id, current_user)

    plan.is_deleted = True
    db.commit()

    logger.info(f"Travel plan {plan_id} deleted by user {current_user.id}")
