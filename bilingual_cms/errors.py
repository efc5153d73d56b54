"""Application error types.

Every failure a service can report is one of the classes below. Each carries
the HTTP status the API answers with and renders its own JSON body, so the
routers never build error responses by hand.
"""

from collections.abc import Mapping, Sequence
from typing import Any

from fastapi import status
from sqlalchemy.exc import IntegrityError

FieldErrors = Mapping[str, Sequence[str]]

# Unique-violation markers reported by the PostgreSQL and SQLite drivers.
UNIQUE_VIOLATION_PGCODE = "23505"
UNIQUE_VIOLATION_SQLITE = "UNIQUE constraint failed"


class AppError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Internal server error"

    def __init__(self, message: str | None = None, errors: FieldErrors | None = None):
        self.message = message or self.message
        self.errors = {field: list(msgs) for field, msgs in (errors or {}).items()}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"message": self.message}
        if self.errors:
            payload["errors"] = self.errors
        return payload


class InvalidInputError(AppError):
    """Malformed, missing or disallowed input."""

    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid input"


class ValidationError(InvalidInputError):
    """Field-level validation failures, one entry per invalid field."""

    message = "Validation failed"


class InvalidOperationError(InvalidInputError):
    """The request asks for a change that is not supported."""

    message = "Operation not allowed"


class UnauthorizedError(AppError):
    """Bad credentials or a missing/invalid session."""

    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Invalid authentication credentials"


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Not found"


class ConflictError(AppError):
    status_code = status.HTTP_409_CONFLICT
    message = "Resource already exists"


class InternalError(AppError):
    """Store or unexpected failure. The message never carries internals."""


def is_unique_violation(exc: IntegrityError) -> bool:
    """Check whether a driver error is a unique-constraint violation."""
    orig = exc.orig
    code = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if code == UNIQUE_VIOLATION_PGCODE:
        return True
    return UNIQUE_VIOLATION_SQLITE in str(orig)


def flatten_validation_errors(errors: Sequence[Mapping[str, Any]]) -> dict[str, list[str]]:
    """Group pydantic error entries by the field they refer to.

    Location prefixes added by FastAPI ("body", "query", "path") are dropped.
    Errors not tied to a field are collected under "_".
    """
    grouped: dict[str, list[str]] = {}
    for error in errors:
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        field = ".".join(loc) or "_"
        grouped.setdefault(field, []).append(error.get("msg", "Invalid value"))
    return grouped
