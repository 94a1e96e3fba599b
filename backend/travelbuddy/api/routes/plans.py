"""
Travel plan routes: explore, match, and host management.
"""
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional
from datetime import date
from travelbuddy.db.session import get_db
from travelbuddy.models.user import User
from travelbuddy.models.travel_plan import TravelType, PlanStatus
from travelbuddy.schemas.travel_plan import TravelPlanCreate, TravelPlanUpdate, TravelPlanResponse
from travelbuddy.schemas.match import MatchQuery, MatchPage, MatchedPlanResponse, TravelPlanPage
from travelbuddy.api.dependencies import get_current_user, get_optional_user
from travelbuddy.services import travel_plan_service
from travelbuddy.services.matching_service import match_travel_plans

router = APIRouter(prefix="/plans", tags=["plans"])


@router.get("", response_model=TravelPlanPage)
async def list_public_plans(
    country: Optional[str] = None,
    city: Optional[str] = None,
    type: Optional[TravelType] = None,
    plan_status: Optional[PlanStatus] = Query(None, alias="status"),
    date_from: Optional[date] = Query(None, alias="from"),
    date_to: Optional[date] = Query(None, alias="to"),
    page: int = 1,
    limit: int = 10,
    db: Session = Depends(get_db)
):
    """Explore public plans, newest first."""
    return travel_plan_service.get_public_travel_plans(
        db,
        country=country,
        city=city,
        travel_type=type,
        plan_status=plan_status,
        date_from=date_from,
        date_to=date_to,
        page=page,
        limit=limit
    )


@router.get("/match", response_model=MatchPage)
async def match_plans(
    country: Optional[str] = None,
    city: Optional[str] = None,
    type: Optional[TravelType] = None,
    date_from: Optional[date] = Query(None, alias="from"),
    date_to: Optional[date] = Query(None, alias="to"),
    interests: Optional[str] = None,
    exclude_self: bool = Query(True, alias="excludeSelf"),
    page: int = 1,
    limit: int = 10,
    current_user: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db)
):
    """Rank public plans for the caller."""
    query = MatchQuery(
        country=country,
        city=city,
        travel_type=type,
        date_from=date_from,
        date_to=date_to,
        interests=interests,
        requester_id=current_user.id if current_user else None,
        exclude_self=exclude_self,
        page=page,
        limit=limit
    )
    result = match_travel_plans(query, db)

    data = [
        MatchedPlanResponse(
            **TravelPlanResponse.model_validate(scored.plan).model_dump(),
            match_score=scored.match_score,
            match_meta=scored.match_meta
        )
        for scored in result["data"]
    ]
    return {"meta": result["meta"], "data": data}


@router.get("/mine", response_model=List[TravelPlanResponse])
async def list_my_plans(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List plans hosted by the current user."""
    return travel_plan_service.get_my_travel_plans(current_user, db)


@router.post("", response_model=TravelPlanResponse, status_code=status.HTTP_201_CREATED)
async def create_plan(
    plan_data: TravelPlanCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Create a new travel plan."""
    return travel_plan_service.create_travel_plan(plan_data, current_user, db)


@router.get("/{plan_id}", response_model=TravelPlanResponse)
async def get_plan(
    plan_id: int,
    current_user: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db)
):
    """Get plan details."""
    return travel_plan_service.get_travel_plan(plan_id, db, current_user)


@router.patch("/{plan_id}", response_model=TravelPlanResponse)
async def update_plan(
    plan_id: int,
    plan_data: TravelPlanUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Update a plan (host or admin)."""
    return travel_plan_service.update_travel_plan(plan_id, plan_data, current_user, db)


@router.delete("/{plan_id}")
async def delete_plan(
    plan_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Soft-delete a plan (host or admin)."""
    travel_plan_service.delete_travel_plan(plan_id, current_user, db)
    return {"message": "Travel plan deleted successfully"}
