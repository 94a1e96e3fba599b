"""
Tests for review creation, editing and deletion.
"""
import pytest
from travelbuddy.core.exceptions import DuplicateError, ForbiddenError, NotFoundError, ValidationError
from travelbuddy.models.user import UserStatus
from travelbuddy.services import review_service


def test_host_reviews_participant(db, completed_trip):
    plan, host, first, _ = completed_trip

    review = review_service.create_review(plan.id, first.id, 5, host, db, comment="Great company")

    assert review.reviewer_id == host.id
    assert review.reviewee_id == first.id
    assert review.comment == "Great company"
    assert review.is_deleted is False


def test_second_live_review_is_duplicate(db, completed_trip):
    plan, host, first, _ = completed_trip
    review_service.create_review(plan.id, host.id, 4, first, db)

    with pytest.raises(DuplicateError):
        review_service.create_review(plan.id, host.id, 2, first, db)


def test_review_again_after_soft_delete(db, completed_trip):
    plan, host, first, _ = completed_trip
    review = review_service.create_review(plan.id, host.id, 1, first, db)
    review_service.delete_review(review.id, first, db)

    again = review_service.create_review(plan.id, host.id, 5, first, db)

    assert again.id != review.id
    assert [r.id for r in review_service.get_reviews_for_user(host.id, db)] == [again.id]


def test_participants_cannot_review_each_other(db, completed_trip):
    plan, _, first, second = completed_trip
    with pytest.raises(ForbiddenError):
        review_service.create_review(plan.id, second.id, 3, first, db)


def test_blocked_reviewee_cannot_be_reviewed(db, completed_trip):
    plan, host, first, _ = completed_trip
    first.status = UserStatus.BLOCKED
    db.commit()

    with pytest.raises(ForbiddenError):
        review_service.create_review(plan.id, first.id, 3, host, db)


def test_only_reviewer_can_edit_or_delete(db, completed_trip):
    plan, host, first, second = completed_trip
    review = review_service.create_review(plan.id, host.id, 3, first, db)

    with pytest.raises(ForbiddenError):
        review_service.update_review(review.id, second, db, rating=1)
    with pytest.raises(ForbiddenError):
        review_service.delete_review(review.id, host, db)

    updated = review_service.update_review(review.id, first, db, comment="Changed my mind")
    assert updated.rating == 3
    assert updated.comment == "Changed my mind"


def test_deleted_review_is_gone(db, completed_trip):
    plan, host, first, _ = completed_trip
    review = review_service.create_review(plan.id, host.id, 3, first, db)
    review_service.delete_review(review.id, first, db)

    with pytest.raises(NotFoundError):
        review_service.update_review(review.id, first, db, rating=5)
    with pytest.raises(NotFoundError):
        review_service.delete_review(review.id, first, db)
    assert review_service.get_reviews_for_user(host.id, db) == []


def test_reviews_for_user_are_newest_first(db, completed_trip):
    plan, host, first, second = completed_trip
    older = review_service.create_review(plan.id, host.id, 4, first, db)
    newer = review_service.create_review(plan.id, host.id, 5, second, db)

    assert [r.id for r in review_service.get_reviews_for_user(host.id, db)] == [newer.id, older.id]


@pytest.mark.parametrize("rating", [0, 6, 7, -1])
def test_rating_out_of_range_is_rejected(db, completed_trip, rating):
    plan, host, first, _ = completed_trip

    with pytest.raises(ValidationError):
        review_service.create_review(plan.id, host.id, rating, first, db)
    assert review_service.get_reviews_for_user(host.id, db) == []


def test_rating_edit_out_of_range_is_rejected(db, completed_trip):
    plan, host, first, _ = completed_trip
    review = review_service.create_review(plan.id, host.id, 4, first, db)

    with pytest.raises(ValidationError):
        review_service.update_review(review.id, first, db, rating=7)

    db.refresh(review)
    assert review.rating == 4
