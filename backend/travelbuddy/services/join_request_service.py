"""
Join request service: the PENDING -> ACCEPTED/REJECTED/CANCELED lifecycle.

Each transition runs its guards first and then performs a single status
write conditioned on the request still being PENDING.
"""
import logging
from typing import List, Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload
from travelbuddy.core.exceptions import (
    NotFoundError, ForbiddenError, BadRequestError, InvalidStateError,
    DuplicateError, CapacityError, ValidationError
)
from travelbuddy.db.errors import is_unique_violation
from travelbuddy.models.user import User
from travelbuddy.models.join_request import JoinRequest, JoinRequestStatus
from travelbuddy.services.capacity_service import assert_capacity_available, get_occupancy
from travelbuddy.services.eligibility import assert_user_active, assert_plan_joinable

logger = logging.getLogger(__name__)

DECISION_STATUSES = (JoinRequestStatus.ACCEPTED, JoinRequestStatus.REJECTED)


def create_join_request(
    plan_id: int,
    current_user: User,
    db: Session,
    message: Optional[str] = None
) -> JoinRequest:
    """Create a PENDING join request for a public, open plan."""
    assert_user_active(current_user.id, db)
    plan = assert_plan_joinable(plan_id, db)

    if plan.host_id == current_user.id:
        raise BadRequestError("You cannot request your own plan.")

    assert_capacity_available(plan.id, plan.max_participants, db)

    join_request = JoinRequest(
        plan_id=plan.id,
        host_id=plan.host_id,
        requester_id=current_user.id,
        message=message,
        status=JoinRequestStatus.PENDING
    )
    db.add(join_request)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        if is_unique_violation(exc):
            logger.warning(f"User {current_user.id} already requested plan {plan.id}")
            raise DuplicateError("You already requested to join this plan.") from exc
        raise
    db.refresh(join_request)

    logger.info(f"Join request {join_request.id} created by user {current_user.id} for plan {plan.id}")
    return join_request


def _load_requests(db: Session):
    return db.query(JoinRequest).options(
        joinedload(JoinRequest.plan),
        joinedload(JoinRequest.host),
        joinedload(JoinRequest.requester)
    )


def get_incoming_requests(current_user: User, db: Session) -> List[JoinRequest]:
    """Requests made on plans the current user hosts, newest first."""
    assert_user_active(current_user.id, db)
    return _load_requests(db).filter(
        JoinRequest.host_id == current_user.id
    ).order_by(JoinRequest.created_at.desc(), JoinRequest.id.desc()).all()


def get_outgoing_requests(current_user: User, db: Session) -> List[JoinRequest]:
    """Requests the current user made, newest first."""
    assert_user_active(current_user.id, db)
    return _load_requests(db).filter(
        JoinRequest.requester_id == current_user.id
    ).order_by(JoinRequest.created_at.desc(), JoinRequest.id.desc()).all()


def get_join_request(request_id: int, db: Session) -> JoinRequest:
    join_request = _load_requests(db).filter(JoinRequest.id == request_id).first()
    if not join_request:
        raise NotFoundError("Join request not found!!")
    return join_request


def _write_status(
    join_request: JoinRequest,
    new_status: JoinRequestStatus,
    db: Session,
    pending_message: str
) -> int:
    """Move a request out of PENDING; returns the affected row count."""
    updated = db.query(JoinRequest).filter(
        JoinRequest.id == join_request.id,
        JoinRequest.status == JoinRequestStatus.PENDING
    ).update({JoinRequest.status: new_status}, synchronize_session=False)
    if not updated:
        db.rollback()
        raise InvalidStateError(pending_message)
    return updated


def update_request_status(
    request_id: int,
    new_status: JoinRequestStatus,
    current_user: User,
    db: Session
) -> JoinRequest:
    """
    Accept or reject a pending join request as the host or an administrator.

    Accepting re-checks the plan and its capacity against live data, since
    the plan may have filled up or closed since the request was made. After
    the conditional write the occupancy is counted again inside the same
    transaction; if a concurrent accept took the last place first, the write
    is rolled back and a CapacityError is raised.
    """
    if new_status not in DECISION_STATUSES:
        raise ValidationError("Status must be ACCEPTED or REJECTED.")

    assert_user_active(current_user.id, db)
    join_request = get_join_request(request_id, db)

    if not current_user.is_admin and join_request.host_id != current_user.id:
        raise ForbiddenError("You are unauthorized!!")

    not_pending = "This request is not pending anymore."
    if join_request.status != JoinRequestStatus.PENDING:
        raise InvalidStateError(not_pending)

    if new_status == JoinRequestStatus.ACCEPTED:
        plan = assert_plan_joinable(join_request.plan_id, db)
        assert_capacity_available(plan.id, plan.max_participants, db)

        _write_status(join_request, new_status, db, not_pending)

        if plan.max_participants and get_occupancy(plan.id, db) > plan.max_participants:
            db.rollback()
            logger.warning(f"Lost race for last place on plan {plan.id}; request {request_id} not accepted")
            raise CapacityError("This travel plan is already full.")
    else:
        _write_status(join_request, new_status, db, not_pending)

    db.commit()
    db.refresh(join_request)

    logger.info(f"Join request {request_id} set to {new_status.value} by user {current_user.id}")
    return join_request


def cancel_request(request_id: int, current_user: User, db: Session) -> None:
    """Cancel a pending request as its requester or an administrator."""
    assert_user_active(current_user.id, db)
    join_request = get_join_request(request_id, db)

    if not current_user.is_admin and join_request.requester_id != current_user.id:
        raise ForbiddenError("You are unauthorized!!")

    only_pending = "Only pending requests can be canceled."
    if join_request.status != JoinRequestStatus.PENDING:
        raise InvalidStateError(only_pending)

    _write_status(join_request, JoinRequestStatus.CANCELED, db, only_pending)
    db.commit()

    logger.info(f"Join request {request_id} canceled by user {current_user.id}")
