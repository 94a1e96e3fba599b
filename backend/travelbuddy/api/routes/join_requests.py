"""
Join request routes.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List
from travelbuddy.db.session import get_db
from travelbuddy.models.user import User
from travelbuddy.schemas.join_request import (
    JoinRequestCreate, JoinRequestStatusUpdate, JoinRequestResponse
)
from travelbuddy.api.dependencies import get_current_user
from travelbuddy.services import join_request_service

router = APIRouter(prefix="/join-requests", tags=["join-requests"])


@router.post("", response_model=JoinRequestResponse, status_code=status.HTTP_201_CREATED)
async def create_join_request(
    request_data: JoinRequestCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Ask to join a public plan."""
    return join_request_service.create_join_request(
        request_data.plan_id, current_user, db, message=request_data.message
    )


@router.get("/incoming", response_model=List[JoinRequestResponse])
async def list_incoming(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Requests on plans I host."""
    return join_request_service.get_incoming_requests(current_user, db)


@router.get("/outgoing", response_model=List[JoinRequestResponse])
async def list_outgoing(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Requests I made."""
    return join_request_service.get_outgoing_requests(current_user, db)


@router.patch("/{request_id}/status", response_model=JoinRequestResponse)
async def decide_request(
    request_id: int,
    decision: JoinRequestStatusUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Accept or reject a pending request (host or admin)."""
    return join_request_service.update_request_status(request_id, decision.status, current_user, db)


@router.patch("/{request_id}/cancel")
async def cancel_request(
    request_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Cancel my pending request."""
    join_request_service.cancel_request(request_id, current_user, db)
    return {"message": "Join request canceled successfully"}
