"""Server-side error taxonomy.

Every error raised by the logic layer derives from ``DashboardError`` and
carries the HTTP status it maps to. Route handlers never build error
responses by hand; the global handlers in ``dashboard.http.errors`` convert
these exceptions into the JSON error envelope.
"""

from __future__ import annotations

from typing import Any


class DashboardError(Exception):
    status_code: int = 500
    code: str = "INTERNAL_ERROR"
    default_message: str = "Something went wrong. Please try again."

    def __init__(self, message: str | None = None, *, detail: Any = None) -> None:
        self.message = message or self.default_message
        self.detail = detail
        super().__init__(self.message)


class InvalidRequest(DashboardError):
    """Malformed or missing payload; rejected before any database access."""

    status_code = 400
    code = "INVALID_REQUEST"
    default_message = "Invalid request payload"


class PartialUpdate(DashboardError):
    """A reorder batch did not update every requested row; nothing persisted."""

    status_code = 500
    code = "PARTIAL_UPDATE"
    default_message = "Failed to update order"

    def __init__(self, requested: int, updated: int, missing_ids: list[int] | None = None) -> None:
        self.requested = requested
        self.updated = updated
        self.missing_ids = list(missing_ids or [])
        super().__init__(
            self.default_message,
            detail=f"updated {updated} of {requested} rows; missing ids: {self.missing_ids}",
        )


class AuthenticationRequired(DashboardError):
    status_code = 401
    code = "AUTHENTICATION_REQUIRED"
    default_message = "Not authenticated"


class InvalidCredentials(DashboardError):
    status_code = 401
    code = "INVALID_CREDENTIALS"
    default_message = "Invalid email or password"


class EmailAlreadyRegistered(DashboardError):
    status_code = 400
    code = "EMAIL_ALREADY_REGISTERED"
    default_message = "Email is already registered."


class NotFound(DashboardError):
    status_code = 404
    code = "NOT_FOUND"
    default_message = "Resource not found"


__all__ = [
    "DashboardError",
    "InvalidRequest",
    "PartialUpdate",
    "AuthenticationRequired",
    "InvalidCredentials",
    "EmailAlreadyRegistered",
    "NotFound",
]
