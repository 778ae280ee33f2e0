"""
Service error taxonomy.

Services raise these; the application shell maps each one to an error
envelope with the matching HTTP status.
"""

from __future__ import annotations

from typing import Any


class ServiceError(Exception):
    """Base class for expected, user-visible failures."""

    status_code = 500
    default_code = "error"

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        details: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.details = details

    def to_dict(self) -> dict[str, Any]:
        return {"code": self.code, "message": self.message, "details": self.details}


class ValidationFailed(ServiceError):
    status_code = 400
    default_code = "validation_error"


class Unauthenticated(ServiceError):
    status_code = 401
    default_code = "unauthenticated"


class Forbidden(ServiceError):
    status_code = 403
    default_code = "forbidden"


class NotFound(ServiceError):
    status_code = 404
    default_code = "not_found"


class Conflict(ServiceError):
    status_code = 409
    default_code = "conflict"


class Internal(ServiceError):
    status_code = 500
    default_code = "internal_error"
