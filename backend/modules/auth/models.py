"""
Authentication module data models.

These models define the data structures used by the auth module
and exposed to other modules through the interface.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class TokenPayload(BaseModel):
    """
    Decoded session token payload.

    Carries just enough identity for downstream authorization; the full
    profile is always loaded from the user store.
    """

    id: str = Field(..., description="User ID")
    username: str = Field(..., description="Username at issue time")
    iat: int = Field(..., description="Issued at timestamp")
    exp: int = Field(..., description="Expiration timestamp")

    model_config = {"frozen": True}

    @property
    def expires_at(self) -> datetime:
        return datetime.fromtimestamp(self.exp, tz=timezone.utc)


class RouteAction(str, Enum):
    """Outcome of the route-protection check for a page request."""

    ALLOW = "allow"
    REDIRECT = "redirect"


class RouteDecision(BaseModel):
    """What the middleware should do with a page request."""

    action: RouteAction
    location: Optional[str] = Field(None, description="Redirect target")
    clear_cookie: bool = Field(default=False, description="Expire the session cookie")

    model_config = {"frozen": True}

    @classmethod
    def allow(cls) -> "RouteDecision":
        return cls(action=RouteAction.ALLOW)

    @classmethod
    def redirect(cls, location: str, clear_cookie: bool = False) -> "RouteDecision":
        return cls(action=RouteAction.REDIRECT, location=location, clear_cookie=clear_cookie)
