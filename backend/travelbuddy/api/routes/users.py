"""
User profile routes.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from travelbuddy.db.session import get_db
from travelbuddy.schemas.user import UserResponse
from travelbuddy.models.user import User
from travelbuddy.api.dependencies import get_current_user
from travelbuddy.services.eligibility import assert_user_active

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(current_user: User = Depends(get_current_user)):
    """Get current user information."""
    return current_user


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: int, db: Session = Depends(get_db)):
    """Get a public profile with its rating summary."""
    return assert_user_active(user_id, db)
