"""
Authentication module interface.

Other modules should depend on ITokenService, not the concrete implementation.
This enables testing with fakes that control the clock or the verdict.
"""

from typing import Protocol, Optional, runtime_checkable

from .models import TokenPayload


@runtime_checkable
class ITokenService(Protocol):
    """
    Interface for session token operations.

    This protocol defines the contract that the auth module exposes
    to other modules.
    """

    def issue(self, user_id: str, username: str) -> str:
        """
        Sign a session token for a user.

        Args:
            user_id: Stable user ID
            username: Username to embed in the token

        Returns:
            Encoded token, valid for the configured lifetime

        Raises:
            TokenConfigurationError: If no signing secret is configured
        """
        ...

    def verify(self, token: Optional[str]) -> Optional[TokenPayload]:
        """
        Verify a session token.

        Args:
            token: Encoded token, possibly empty

        Returns:
            TokenPayload if the signature verifies and the token has not
            expired, None otherwise. Never raises.
        """
        ...
