"""
Review routes.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List
from travelbuddy.db.session import get_db
from travelbuddy.models.user import User
from travelbuddy.schemas.review import ReviewCreate, ReviewUpdate, ReviewResponse
from travelbuddy.api.dependencies import get_current_user
from travelbuddy.services import review_service

router = APIRouter(prefix="/reviews", tags=["reviews"])


@router.post("", response_model=ReviewResponse, status_code=status.HTTP_201_CREATED)
async def create_review(
    review_data: ReviewCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Review the host or a participant of a completed trip."""
    return review_service.create_review(
        review_data.plan_id,
        review_data.reviewee_id,
        review_data.rating,
        current_user,
        db,
        comment=review_data.comment
    )


@router.get("/user/{user_id}", response_model=List[ReviewResponse])
async def list_user_reviews(user_id: int, db: Session = Depends(get_db)):
    """Public list of reviews a user received."""
    return review_service.get_reviews_for_user(user_id, db)


@router.patch("/{review_id}", response_model=ReviewResponse)
async def update_review(
    review_id: int,
    review_data: ReviewUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Edit my review."""
    return review_service.update_review(
        review_id, current_user, db, rating=review_data.rating, comment=review_data.comment
    )


@router.delete("/{review_id}")
async def delete_review(
    review_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Delete my review."""
    review_service.delete_review(review_id, current_user, db)
    return {"message": "Review deleted successfully"}
