"""
Base exception classes for the dashboard backend.

Each module should define its own exceptions that inherit from these bases.
The API layer maps each base to an HTTP status code, so a module only has to
pick the right parent.
"""

from typing import Optional, Any


class DashboardError(Exception):
    """
    Base exception for all dashboard errors.

    All custom exceptions should inherit from this class.
    """

    status_code: int = 500

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to the JSON error envelope."""
        return {
            "error": self.message,
            "code": self.code,
        }


class NotFoundError(DashboardError):
    """Resource not found."""

    status_code = 404


class ValidationError(DashboardError):
    """Input validation failed."""

    status_code = 400


class AuthenticationError(DashboardError):
    """Authentication failed (invalid or missing credentials)."""

    status_code = 400


class ConfigurationError(DashboardError):
    """A required setting (secret, API key) is missing."""

    status_code = 500


class ExternalServiceError(DashboardError):
    """Error communicating with an external service."""

    status_code = 500

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.service = service
        self.details["service"] = service
