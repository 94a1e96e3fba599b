"""
Review model for post-trip ratings between host and participants.
"""
from sqlalchemy import Column, Integer, Text, Boolean, ForeignKey, Index, CheckConstraint, false
from sqlalchemy.orm import relationship
from travelbuddy.db.base import BaseModel


class Review(BaseModel):
    """A rating left by one trip member for another; soft-deleted only."""
    __tablename__ = "reviews"
    __table_args__ = (
        CheckConstraint("rating >= 1 AND rating <= 5", name="ck_review_rating_range"),
    )

    plan_id = Column(Integer, ForeignKey("travel_plans.id"), nullable=False, index=True)
    reviewer_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    reviewee_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    rating = Column(Integer, nullable=False)
    comment = Column(Text, nullable=True)
    is_deleted = Column(Boolean, default=False, nullable=False, index=True)

    # Relationships
    plan = relationship("TravelPlan", back_populates="reviews")
    reviewer = relationship("User", foreign_keys=[reviewer_id])
    reviewee = relationship("User", foreign_keys=[reviewee_id])


# One live review per reviewer -> reviewee per plan. Backends without partial
# indexes fall back to a plain unique index over the triple.
Index(
    "uq_review_plan_reviewer_reviewee",
    Review.plan_id,
    Review.reviewer_id,
    Review.reviewee_id,
    unique=True,
    sqlite_where=Review.is_deleted == false(),
    postgresql_where=Review.is_deleted == false(),
)
