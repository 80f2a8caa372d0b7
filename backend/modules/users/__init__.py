"""
Users module.

Accounts and profiles: signup, login, profile read/update.

Public API:
- IUserService: Interface for account operations
- UserRepository: Credential store adapter over the users table
- User, PublicUser: Stored record and client-facing profile
- Users exceptions: UserAlreadyExistsError, UserNotFoundError, etc.
"""

from .interfaces import IUserService
from .repository import UserRepository
from .models import (
    User,
    PublicUser,
    Theme,
    SignupRequest,
    LoginRequest,
    LoginResult,
    ProfileUpdateRequest,
)
from .exceptions import (
    UserNotFoundError,
    UserAlreadyExistsError,
    MissingFieldsError,
    PasswordTooLongError,
    EmptyEmailError,
    UnknownUserError,
    InvalidPasswordError,
)

__all__ = [
    # Interface
    "IUserService",
    "UserRepository",
    # Models
    "User",
    "PublicUser",
    "Theme",
    "SignupRequest",
    "LoginRequest",
    "LoginResult",
    "ProfileUpdateRequest",
    # Exceptions
    "UserNotFoundError",
    "UserAlreadyExistsError",
    "MissingFieldsError",
    "PasswordTooLongError",
    "EmptyEmailError",
    "UnknownUserError",
    "InvalidPasswordError",
]
