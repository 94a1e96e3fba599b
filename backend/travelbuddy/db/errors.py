"""
Helpers for recognising storage-level constraint violations.
"""
from sqlalchemy.exc import IntegrityError

# SQLSTATE 23505 (PostgreSQL), errno 1062 (MySQL), message text (SQLite)
_UNIQUE_MARKERS = (
    "unique constraint failed",
    "duplicate key value violates unique constraint",
    "duplicate entry",
)


def is_unique_violation(exc: IntegrityError) -> bool:
    """Return True if the integrity error is a duplicate-key violation."""
    orig = getattr(exc, "orig", None)
    if getattr(orig, "pgcode", None) == "23505":
        return True
    args = getattr(orig, "args", None) or ()
    if args and args[0] == 1062:
        return True
    message = str(orig if orig is not None else exc).lower()
    return any(marker in message for marker in _UNIQUE_MARKERS)
