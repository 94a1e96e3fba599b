"""
Review service for post-trip reviews between host and participants.
"""
import logging
from typing import List, Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from travelbuddy.core.exceptions import NotFoundError, ForbiddenError, DuplicateError, ValidationError
from travelbuddy.db.errors import is_unique_violation
from travelbuddy.models.review import Review
from travelbuddy.models.user import User
from travelbuddy.services.eligibility import assert_user_active, assert_review_eligible
from travelbuddy.services.rating_service import recalculate_rating_summary

logger = logging.getLogger(__name__)

MIN_RATING = 1
MAX_RATING = 5


def _assert_valid_rating(rating: int) -> None:
    if not MIN_RATING <= rating <= MAX_RATING:
        raise ValidationError(f"Rating must be between {MIN_RATING} and {MAX_RATING}.")


def create_review(
    plan_id: int,
    reviewee_id: int,
    rating: int,
    current_user: User,
    db: Session,
    comment: Optional[str] = None
) -> Review:
    """Create a review and refresh the reviewee's rating summary."""
    _assert_valid_rating(rating)
    assert_user_active(current_user.id, db)
    assert_user_active(reviewee_id, db)
    assert_review_eligible(plan_id, current_user.id, reviewee_id, db)

    review = Review(
        plan_id=plan_id,
        reviewer_id=current_user.id,
        reviewee_id=reviewee_id,
        rating=rating,
        comment=comment,
        is_deleted=False
    )
    db.add(review)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        if is_unique_violation(exc):
            logger.warning(f"User {current_user.id} already reviewed user {reviewee_id} for plan {plan_id}")
            raise DuplicateError("You already reviewed this user for this trip.") from exc
        raise
    db.refresh(review)

    recalculate_rating_summary(reviewee_id, db)
    return review


def get_reviews_for_user(user_id: int, db: Session) -> List[Review]:
    """Live reviews a user received, newest first."""
    return db.query(Review).filter(
        Review.reviewee_id == user_id,
        Review.is_deleted.is_(False)
    ).order_by(Review.created_at.desc(), Review.id.desc()).all()


def get_own_review(review_id: int, current_user: User, db: Session) -> Review:
    """Load a live review written by the current user."""
    review = db.query(Review).filter(Review.id == review_id).first()
    if not review or review.is_deleted:
        raise NotFoundError("Review not found!!")
    if review.reviewer_id != current_user.id:
        raise ForbiddenError("You are unauthorized!!")
    return review


def update_review(
    review_id: int,
    current_user: User,
    db: Session,
    rating: Optional[int] = None,
    comment: Optional[str] = None
) -> Review:
    """Change rating and/or comment of the current user's review."""
    assert_user_active(current_user.id, db)
    review = get_own_review(review_id, current_user, db)

    if rating is not None:
        _assert_valid_rating(rating)
        review.rating = rating
    if comment is not None:
        review.comment = comment
    db.commit()
    db.refresh(review)

    recalculate_rating_summary(review.reviewee_id, db)
    return review


def delete_review(review_id: int, current_user: User, db: Session) -> None:
    """Soft-delete the current user's review."""
    assert_user_active(current_user.id, db)
    review = get_own_review(review_id, current_user, db)

    review.is_deleted = True
    reviewee_id = review.reviewee_id
    db.commit()

    logger.info(f"Review {review_id} deleted by user {current_user.id}")
    recalculate_rating_summary(reviewee_id, db)
