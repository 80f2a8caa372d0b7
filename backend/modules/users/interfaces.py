"""
Users module interface.

Routes depend on IUserService, not the concrete implementation.
"""

from typing import Protocol, runtime_checkable

from .models import (
    LoginRequest,
    LoginResult,
    ProfileUpdateRequest,
    PublicUser,
    SignupRequest,
)


@runtime_checkable
class IUserService(Protocol):
    """
    Interface for account and profile operations.
    """

    async def signup(self, request: SignupRequest) -> PublicUser:
        """
        Create an account.

        Raises:
            MissingFieldsError: If any field is blank
            UserAlreadyExistsError: If the username or email is taken
        """
        ...

    async def login(self, request: LoginRequest) -> LoginResult:
        """
        Check credentials and issue a session token.

        Raises:
            MissingFieldsError: If username or password is missing
            UnknownUserError: If no account has this username
            InvalidPasswordError: If the password does not match
        """
        ...

    async def get_profile(self, user_id: str) -> PublicUser:
        """
        Load a user's profile.

        Raises:
            UserNotFoundError: If the user no longer exists
        """
        ...

    async def update_profile(
        self,
        user_id: str,
        request: ProfileUpdateRequest,
    ) -> PublicUser:
        """
        Apply allow-listed profile changes.

        Raises:
            EmptyEmailError: If the email is explicitly blanked
            UserNotFoundError: If the user no longer exists
        """
        ...
