"""
Users module data models.

User is the stored record (including the password hash). PublicUser is what
leaves the server: the hash is not a field on it, so it cannot be serialized
by accident.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


BIO_MAX_LENGTH = 500

# Fields a user may change through PUT /profile
UPDATABLE_FIELDS = ("email", "github", "bio", "location", "website", "phone", "theme")


class Theme(str, Enum):
    """UI theme preference."""

    LIGHT = "light"
    DARK = "dark"


class PublicUser(BaseModel):
    """User profile as returned to clients."""

    id: str = Field(..., description="User ID")
    username: str = Field(..., description="Unique username")
    email: str = Field(..., description="Unique email address")

    github: Optional[str] = Field(None, description="GitHub profile URL")
    website: Optional[str] = Field(None, description="Personal website URL")
    bio: Optional[str] = Field(None, max_length=BIO_MAX_LENGTH)
    location: Optional[str] = None
    phone: Optional[str] = None
    theme: Theme = Field(default=Theme.DARK)

    is_verified: bool = False
    is_admin: bool = False

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class User(PublicUser):
    """Stored user record."""

    password: str = Field(..., description="bcrypt hash")

    def to_public(self) -> PublicUser:
        return PublicUser(**self.model_dump(exclude={"password"}))


class SignupRequest(BaseModel):
    """Request body for POST /signup. Blank checks happen in the service."""

    username: str = ""
    email: str = ""
    password: str = ""


class LoginRequest(BaseModel):
    """Request body for POST /login."""

    username: str = ""
    password: str = ""


class ProfileUpdateRequest(BaseModel):
    """
    Request body for PUT /profile.

    Only the allow-listed fields exist on the model; anything else in the
    body (password, is_admin, username...) is dropped.
    """

    model_config = {"extra": "ignore"}

    email: Optional[str] = None
    github: Optional[str] = None
    bio: Optional[str] = Field(None, max_length=BIO_MAX_LENGTH)
    location: Optional[str] = None
    website: Optional[str] = None
    phone: Optional[str] = None
    theme: Optional[Theme] = None

    def changes(self) -> dict:
        """Fields explicitly sent by the client."""
        return self.model_dump(include=set(UPDATABLE_FIELDS), exclude_unset=True, mode="json")


class LoginResult(BaseModel):
    """Outcome of a successful login."""

    token: str
    user: PublicUser
