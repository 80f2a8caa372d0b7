"""
Authentication module exceptions.

These exceptions are raised by the auth module and can be caught
by API error handlers to return appropriate HTTP responses.
"""

from shared.exceptions import AuthenticationError, ConfigurationError


class InvalidTokenError(AuthenticationError):
    """Raised when a session token is invalid, expired or malformed."""

    def __init__(self, message: str = "Invalid or expired token"):
        super().__init__(message, code="INVALID_TOKEN")


class MissingTokenError(AuthenticationError):
    """Raised when no session cookie is provided."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, code="MISSING_TOKEN")


class TokenConfigurationError(ConfigurationError):
    """Raised when a token must be issued but no signing secret is set."""

    def __init__(self):
        super().__init__(
            "Token signing secret is not configured",
            code="TOKEN_SECRET_MISSING",
        )
