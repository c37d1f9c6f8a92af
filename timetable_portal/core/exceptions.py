from fastapi import status
from sqlalchemy.exc import IntegrityError


class ServiceError(Exception):
    """Base exception for service layer errors."""

    def __init__(self, message: str, status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


UNIQUE_VIOLATION_SQLSTATE = "23505"


def is_unique_violation(exc: IntegrityError) -> bool:
    """True when the integrity error is a duplicate-key violation (Postgres 23505 or SQLite UNIQUE)."""
    orig = getattr(exc, "orig", None)
    code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if code == UNIQUE_VIOLATION_SQLSTATE:
        return True
    err_msg = str(orig) if orig is not None else str(exc)
    return "unique constraint" in err_msg.lower() or "duplicate key" in err_msg.lower()
