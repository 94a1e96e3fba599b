"""
Rating aggregation for users.
"""
import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Optional, Union
from sqlalchemy import func
from sqlalchemy.orm import Session
from travelbuddy.models.review import Review
from travelbuddy.models.user import User

logger = logging.getLogger(__name__)


def round_average(value: Optional[Union[float, Decimal]]) -> float:
    """Round to 2 decimal places, halves away from zero."""
    if value is None:
        return 0.0
    return float(Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def compute_rating_summary(user_id: int, db: Session) -> Dict[str, Union[float, int]]:
    """Average and count over all non-deleted reviews the user received."""
    avg, count = db.query(
        func.avg(Review.rating),
        func.count(Review.id)
    ).filter(
        Review.reviewee_id == user_id,
        Review.is_deleted.is_(False)
    ).one()

    if not count:
        return {"average": 0.0, "count": 0}
    return {"average": round_average(avg), "count": count}


def recalculate_rating_summary(user_id: int, db: Session) -> Dict[str, Union[float, int]]:
    """
    Recompute a user's rating summary from scratch and store it.

    Runs after every review create, update and soft delete. It is not part
    of the review's transaction: if it fails, the summary stays stale until
    the next review change for the same user rewrites it.
    """
    summary = compute_rating_summary(user_id, db)

    db.query(User).filter(User.id == user_id).update(
        {User.rating_average: summary["average"], User.rating_count: summary["count"]},
        synchronize_session="fetch"
    )
    db.commit()

    logger.info(f"Rating summary for user {user_id}: {summary['average']} over {summary['count']} reviews")
    return summary
