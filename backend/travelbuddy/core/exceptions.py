"""
Domain errors raised by the service layer.

Every error carries the HTTP status code the API layer answers with and a
stable, user-facing message.
"""
from fastapi import status


class AppError(Exception):
    """Base class for expected, user-facing failures."""
    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class NotFoundError(AppError):
    """Referenced entity does not exist or is soft-deleted."""
    status_code = status.HTTP_404_NOT_FOUND


class ForbiddenError(AppError):
    """Actor is not allowed to perform the action."""
    status_code = status.HTTP_403_FORBIDDEN


class BadRequestError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST


class ValidationError(BadRequestError):
    """Malformed input, detected before any write."""


class InvalidStateError(BadRequestError):
    """Entity is not in the state the action requires."""


class CapacityError(BadRequestError):
    """Plan is already at its participant limit."""


class DuplicateError(AppError):
    """A storage-level uniqueness constraint was violated."""
    status_code = status.HTTP_409_CONFLICT


class PaymentGatewayError(AppError):
    status_code = status.HTTP_502_BAD_GATEWAY
