"""
Custom exceptions for the issue tracker.
"""

from typing import Any, Optional


class TrackerError(Exception):
    """Base exception for the issue tracker."""

    def __init__(self, message: str, details: Optional[Any] = None):
        self.message = message
        self.details = details
        super().__init__(message)


class NotFoundError(TrackerError):
    """Resource not found."""

    pass


class BadRequestError(TrackerError):
    """Malformed request (e.g. an identifier with the wrong shape)."""

    pass


class DuplicateError(TrackerError):
    """Duplicate resource detected."""

    pass


class ValidationError(TrackerError):
    """Field constraint violation, with one message per failing field."""

    def __init__(self, message: str = "Validation failed", errors: Optional[list[str]] = None):
        super().__init__(message, details={"errors": list(errors or [])})
        self.errors = list(errors or [])


class AuthenticationError(TrackerError):
    """Authentication failed."""

    pass


class AuthorizationError(TrackerError):
    """Authorization failed."""

    pass


class ForbiddenError(AuthorizationError):
    """Forbidden operation (authorization denied)."""

    pass


class InfrastructureError(TrackerError):
    """Infrastructure-related error (DB, external services, etc.)."""

    pass
