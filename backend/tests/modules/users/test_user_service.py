"""Tests for the user service."""

import pytest
from unittest.mock import MagicMock

from modules.auth.tokens import TokenService
from modules.users.interfaces import IUserService
from modules.users.models import (
    LoginRequest,
    ProfileUpdateRequest,
    SignupRequest,
    User,
)
from modules.users.passwords import hash_password, verify_password
from modules.users.service import UserService
from modules.users.exceptions import (
    EmptyEmailError,
    InvalidPasswordError,
    MissingFieldsError,
    PasswordTooLongError,
    UnknownUserError,
    UserAlreadyExistsError,
    UserNotFoundError,
)

from tests.conftest import TEST_TOKEN_SECRET, create_user_row


def make_user(**fields) -> User:
    return User(**create_user_row(**fields))


@pytest.fixture
def repository() -> MagicMock:
    repo = MagicMock()
    repo.find_by_username.return_value = None
    repo.find_by_email.return_value = None
    repo.find_by_id.return_value = None
    return repo


@pytest.fixture
def tokens() -> TokenService:
    return TokenService(secret=TEST_TOKEN_SECRET)


@pytest.fixture
def service(repository, tokens) -> UserService:
    return UserService(repository=repository, tokens=tokens)


class TestSignup:
    def test_implements_interface(self, service):
        assert isinstance(service, IUserService)

    @pytest.mark.asyncio
    async def test_creates_user_with_hashed_password(self, service, repository):
        repository.insert.side_effect = lambda data: make_user(**data)

        user = await service.signup(
            SignupRequest(username=" alice ", email="alice@example.com", password="secret")
        )

        data = repository.insert.call_args[0][0]
        assert data["username"] == "alice"
        assert data["email"] == "alice@example.com"
        assert data["password"] != "secret"
        assert verify_password("secret", data["password"])
        assert user.username == "alice"
        assert not hasattr(user, "password")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("username,email,password", [
        ("", "a@example.com", "secret"),
        ("alice", "   ", "secret"),
        ("alice", "a@example.com", ""),
    ])
    async def test_blank_fields(self, service, repository, username, email, password):
        with pytest.raises(MissingFieldsError) as exc_info:
            await service.signup(SignupRequest(username=username, email=email, password=password))

        assert exc_info.value.message == "Username, email and password are required"
        repository.insert.assert_not_called()

    @pytest.mark.asyncio
    async def test_duplicate_username(self, service, repository):
        repository.find_by_username.return_value = make_user()

        with pytest.raises(UserAlreadyExistsError) as exc_info:
            await service.signup(SignupRequest(username="alice", email="new@example.com", password="x"))

        assert exc_info.value.message == "Username already exists"
        repository.insert.assert_not_called()

    @pytest.mark.asyncio
    async def test_duplicate_email(self, service, repository):
        repository.find_by_email.return_value = make_user()

        with pytest.raises(UserAlreadyExistsError) as exc_info:
            await service.signup(SignupRequest(username="bob", email="alice@example.com", password="x"))

        assert exc_info.value.message == "Email already exists"
        assert exc_info.value.status_code == 400

    @pytest.mark.asyncio
    async def test_password_over_bcrypt_limit(self, service, repository):
        with pytest.raises(PasswordTooLongError) as exc_info:
            await service.signup(SignupRequest(username="bob", email="bob@example.com", password="p" * 80))

        assert exc_info.value.status_code == 400
        assert exc_info.value.message == "Password must be at most 72 bytes"
        repository.insert.assert_not_called()

    @pytest.mark.asyncio
    async def test_password_at_bcrypt_limit(self, service, repository):
        repository.insert.side_effect = lambda data: User(**create_user_row(**data))

        await service.signup(SignupRequest(username="bob", email="bob@example.com", password="p" * 72))

        repository.insert.assert_called_once()


class TestLogin:
    @pytest.mark.asyncio
    async def test_success_issues_token(self, service, repository, tokens):
        repository.find_by_username.return_value = make_user(password=hash_password("secret"))

        result = await service.login(LoginRequest(username="alice", password="secret"))

        payload = tokens.verify(result.token)
        assert payload.id == "user-123"
        assert payload.username == "alice"
        assert result.user.email == "alice@example.com"

    @pytest.mark.asyncio
    async def test_missing_fields(self, service):
        with pytest.raises(MissingFieldsError) as exc_info:
            await service.login(LoginRequest(username="alice"))
        assert exc_info.value.message == "Username and password are required"

    @pytest.mark.asyncio
    async def test_unknown_user(self, service):
        with pytest.raises(UnknownUserError) as exc_info:
            await service.login(LoginRequest(username="ghost", password="secret"))
        assert exc_info.value.message == "User does not exist"

    @pytest.mark.asyncio
    async def test_wrong_password(self, service, repository):
        repository.find_by_username.return_value = make_user(password=hash_password("secret"))

        with pytest.raises(InvalidPasswordError) as exc_info:
            await service.login(LoginRequest(username="alice", password="wrong"))
        assert exc_info.value.message == "Invalid password"


class TestProfile:
    @pytest.mark.asyncio
    async def test_get_profile(self, service, repository):
        repository.find_by_id.return_value = make_user(bio="hello")

        user = await service.get_profile("user-123")

        repository.find_by_id.assert_called_once_with("user-123")
        assert user.bio == "hello"

    @pytest.mark.asyncio
    async def test_get_profile_not_found(self, service):
        with pytest.raises(UserNotFoundError) as exc_info:
            await service.get_profile("missing")
        assert exc_info.value.message == "User not found"
        assert exc_info.value.status_code == 404

    @pytest.mark.asyncio
    async def test_update_only_sent_fields(self, service, repository):
        repository.update_by_id.return_value = make_user(location="Paris")

        user = await service.update_profile("user-123", ProfileUpdateRequest(location="Paris"))

        repository.update_by_id.assert_called_once_with("user-123", {"location": "Paris"})
        assert user.location == "Paris"

    @pytest.mark.asyncio
    async def test_empty_email_rejected_before_write(self, service, repository):
        with pytest.raises(EmptyEmailError) as exc_info:
            await service.update_profile("user-123", ProfileUpdateRequest(email=""))

        assert exc_info.value.message == "Email cannot be empty"
        repository.update_by_id.assert_not_called()

    @pytest.mark.asyncio
    async def test_disallowed_fields_are_dropped(self, service, repository):
        repository.find_by_id.return_value = make_user()
        request = ProfileUpdateRequest.model_validate({"is_admin": True, "password": "x"})

        await service.update_profile("user-123", request)

        repository.update_by_id.assert_not_called()
        repository.find_by_id.assert_called_once_with("user-123")

    @pytest.mark.asyncio
    async def test_update_missing_user(self, service, repository):
        repository.update_by_id.return_value = None

        with pytest.raises(UserNotFoundError):
            await service.update_profile("missing", ProfileUpdateRequest(bio="hi"))
