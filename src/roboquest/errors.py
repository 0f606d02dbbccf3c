"""Typed failures surfaced by the ledger, catalog and identity services.

Each error carries the HTTP status it maps to; the global handlers in
``roboquest.middleware.error_handler`` render them as ``{"detail": ...}``.
"""

from __future__ import annotations


class RoboQuestError(Exception):
    """Base class for all domain errors."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class AuthenticationError(RoboQuestError):
    """Missing, malformed, expired or unknown bearer token / credentials."""

    status_code = 401


class ForbiddenError(RoboQuestError, PermissionError):
    """Authenticated, but not allowed to perform the operation."""

    status_code = 403


class AccountLockedError(ForbiddenError):
    """Too many failed login attempts inside the lockout window."""

    status_code = 423


class NotFoundError(RoboQuestError, LookupError):
    """Referenced content, course, project or module does not exist."""

    status_code = 404


class ValidationFailure(RoboQuestError, ValueError):
    """Malformed signup/login payload or a rejected field value."""

    status_code = 400


class BackendUnavailableError(RoboQuestError):
    """The key-value store could not be reached or kept conflicting."""

    status_code = 503
