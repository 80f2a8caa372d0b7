"""
User service implementation.

Signup, login and profile management on top of the user repository and the
token service.
"""

import logging

from modules.auth.interfaces import ITokenService

from .interfaces import IUserService
from .models import (
    LoginRequest,
    LoginResult,
    ProfileUpdateRequest,
    PublicUser,
    SignupRequest,
)
from .passwords import MAX_PASSWORD_BYTES, hash_password, verify_password
from .repository import UserRepository
from .exceptions import (
    EmptyEmailError,
    InvalidPasswordError,
    MissingFieldsError,
    PasswordTooLongError,
    UnknownUserError,
    UserAlreadyExistsError,
    UserNotFoundError,
)

logger = logging.getLogger(__name__)


class UserService(IUserService):
    """
    Account service backed by the user store.
    """

    def __init__(self, repository: UserRepository, tokens: ITokenService):
        self._repository = repository
        self._tokens = tokens

    async def signup(self, request: SignupRequest) -> PublicUser:
        """Create an account after checking both unique fields."""
        username = request.username.strip()
        email = request.email.strip()

        if not username or not email or not request.password.strip():
            raise MissingFieldsError("Username, email and password are required")
        if len(request.password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise PasswordTooLongError(MAX_PASSWORD_BYTES)

        if self._repository.find_by_username(username):
            raise UserAlreadyExistsError("username")
        if self._repository.find_by_email(email):
            raise UserAlreadyExistsError("email")

        user = self._repository.insert({
            "username": username,
            "email": email,
            "password": hash_password(request.password),
        })
        logger.info(f"Created user {user.username} ({user.id})")
        return user.to_public()

    async def login(self, request: LoginRequest) -> LoginResult:
        """Verify credentials and issue a session token."""
        if not request.username or not request.password:
            raise MissingFieldsError("Username and password are required")

        user = self._repository.find_by_username(request.username)
        if user is None:
            raise UnknownUserError(request.username)

        if not verify_password(request.password, user.password):
            logger.info(f"Failed login for {user.username}")
            raise InvalidPasswordError()

        token = self._tokens.issue(user.id, user.username)
        return LoginResult(token=token, user=user.to_public())

    async def get_profile(self, user_id: str) -> PublicUser:
        """Load a profile without the password hash."""
        user = self._repository.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user.to_public()

    async def update_profile(
        self,
        user_id: str,
        request: ProfileUpdateRequest,
    ) -> PublicUser:
        """Write only the allow-listed fields the client actually sent."""
        changes = request.changes()

        # Checked before any write so a rejected update leaves the record as is
        if "email" in changes and not (changes["email"] or "").strip():
            raise EmptyEmailError()

        if not changes:
            return await self.get_profile(user_id)

        user = self._repository.update_by_id(user_id, changes)
        if user is None:
            raise UserNotFoundError(user_id)

        logger.debug(f"Updated profile of {user.username}: {sorted(changes)}")
        return user.to_public()
