"""
Domain error taxonomy shared by services, pipelines and routes.

Every error carries a stable ``code`` and the HTTP status it maps to so the
JSON error handler can translate it without knowing the concrete type.
"""

from __future__ import annotations

from http import HTTPStatus


class WeldLogError(Exception):
    """Base class for errors surfaced to API callers."""

    code = "weldlog_error"
    status_code = HTTPStatus.INTERNAL_SERVER_ERROR

    def __init__(self, message: str, *, code: str | None = None, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self) -> dict[str, str]:
        return {"error": self.message, "code": self.code}


class ValidationError(WeldLogError):
    """Raised when caller input fails validation."""

    code = "validation_error"
    status_code = HTTPStatus.BAD_REQUEST


class NotFoundError(WeldLogError):
    """Raised when a requested resource does not exist."""

    code = "not_found"
    status_code = HTTPStatus.NOT_FOUND


class ConflictError(WeldLogError):
    """Raised when a write would violate a uniqueness rule."""

    code = "conflict"
    status_code = HTTPStatus.CONFLICT


class UpstreamStoreError(WeldLogError):
    """Raised when the relational store fails for reasons other than validation."""

    code = "store_error"
    status_code = HTTPStatus.INTERNAL_SERVER_ERROR
