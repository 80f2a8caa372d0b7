"""
Users module exceptions.
"""

from shared.exceptions import (
    AuthenticationError,
    NotFoundError,
    ValidationError,
)


class UserNotFoundError(NotFoundError):
    """Raised when a verified token points at a user that no longer exists."""

    def __init__(self, user_id: str):
        super().__init__(
            "User not found",
            code="USER_NOT_FOUND",
            details={"user_id": user_id},
        )


class MissingFieldsError(ValidationError):
    """Raised when a required request field is blank."""

    def __init__(self, message: str):
        super().__init__(message, code="MISSING_FIELDS")


class PasswordTooLongError(ValidationError):
    """Raised on signup when the password exceeds what bcrypt can hash."""

    def __init__(self, limit: int):
        super().__init__(
            f"Password must be at most {limit} bytes",
            code="PASSWORD_TOO_LONG",
            details={"limit": limit},
        )


class UserAlreadyExistsError(ValidationError):
    """Raised on signup when the username or email is taken."""

    def __init__(self, field: str):
        super().__init__(
            f"{field.capitalize()} already exists",
            code=f"{field.upper()}_TAKEN",
            details={"field": field},
        )
        self.field = field


class EmptyEmailError(ValidationError):
    """Raised when a profile update blanks the email."""

    def __init__(self):
        super().__init__("Email cannot be empty", code="EMAIL_EMPTY")


class UnknownUserError(AuthenticationError):
    """Raised on login for a username with no account."""

    def __init__(self, username: str):
        super().__init__(
            "User does not exist",
            code="UNKNOWN_USER",
            details={"username": username},
        )


class InvalidPasswordError(AuthenticationError):
    """Raised on login when the password does not match."""

    def __init__(self):
        super().__init__("Invalid password", code="INVALID_PASSWORD")
