"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations.
"""

from datetime import timedelta
from typing import TYPE_CHECKING

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from modules.auth.interfaces import ITokenService
    from modules.users.interfaces import IUserService
    from modules.users.repository import UserRepository
    from modules.feeds.interfaces import IFeedsService


class ServiceContainer:
    """
    Container for all service instances.

    This class manages the lifecycle of service instances and their
    dependencies. Services are created lazily on first access.

    All services are cached as singletons within the container.
    Use reset() to clear all cached services for testing.
    """

    def __init__(self) -> None:
        self._token_service: "ITokenService | None" = None
        self._user_repository: "UserRepository | None" = None
        self._user_service: "IUserService | None" = None
        self._feeds_service: "IFeedsService | None" = None

    @property
    def tokens(self) -> "ITokenService":
        """Get the token service instance."""
        if self._token_service is None:
            from modules.auth.tokens import TokenService
            from shared.config import get_settings
            settings = get_settings()
            self._token_service = TokenService(
                secret=settings.token_secret,
                ttl=timedelta(hours=settings.token_ttl_hours),
            )
        return self._token_service

    @property
    def user_repository(self) -> "UserRepository":
        """Get the user repository instance."""
        if self._user_repository is None:
            from modules.users.repository import UserRepository
            from shared.database import get_supabase_client
            self._user_repository = UserRepository(get_supabase_client())
        return self._user_repository

    @property
    def users(self) -> "IUserService":
        """Get the user service instance."""
        if self._user_service is None:
            from modules.users.service import UserService
            self._user_service = UserService(
                repository=self.user_repository,
                tokens=self.tokens,
            )
        return self._user_service

    @property
    def feeds(self) -> "IFeedsService":
        """Get the feeds service instance."""
        if self._feeds_service is None:
            from modules.feeds.service import FeedsService
            self._feeds_service = FeedsService.from_settings()
        return self._feeds_service

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        self._token_service = None
        self._user_repository = None
        self._user_service = None
        self._feeds_service = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    This clears the cached container, so the next call to get_container()
    will create a fresh container with new service instances.

    Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_token_service() -> "ITokenService":
    """FastAPI dependency for token service."""
    return get_container().tokens


def get_user_service() -> "IUserService":
    """FastAPI dependency for user service."""
    return get_container().users


def get_feeds_service() -> "IFeedsService":
    """FastAPI dependency for feeds service."""
    return get_container().feeds
