"""
Authentication module.

Handles session token issuing/verification and page route protection.

Public API:
- TokenService: Issue and verify session tokens
- decide / is_public_route: Route protection rules
- TokenPayload, RouteDecision, RouteAction: Models
- Auth exceptions: InvalidTokenError, MissingTokenError, TokenConfigurationError
"""

from .models import TokenPayload, RouteDecision, RouteAction
from .interfaces import ITokenService
from .tokens import TokenService
from .routing import decide, is_public_route
from .exceptions import (
    InvalidTokenError,
    MissingTokenError,
    TokenConfigurationError,
)

__all__ = [
    # Services
    "ITokenService",
    "TokenService",
    "decide",
    "is_public_route",
    # Models
    "TokenPayload",
    "RouteDecision",
    "RouteAction",
    # Exceptions
    "InvalidTokenError",
    "MissingTokenError",
    "TokenConfigurationError",
]
