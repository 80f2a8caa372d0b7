"""
Cookie session authentication for API routes.

Reads the session cookie, verifies it, and exposes the token payload to
route handlers via dependency injection. Also owns setting and clearing the
cookie so every route uses the same attributes.
"""

from typing import Optional
from fastapi import Depends, Request, Response

from shared.config import get_settings
from modules.auth.interfaces import ITokenService
from modules.auth.models import TokenPayload
from modules.auth.exceptions import InvalidTokenError, MissingTokenError

from ..dependencies import get_token_service


def get_session_token(request: Request) -> Optional[str]:
    """Read the raw session token from the request cookies."""
    return request.cookies.get(get_settings().cookie_name) or None


async def get_current_user(
    request: Request,
    tokens: ITokenService = Depends(get_token_service),
) -> TokenPayload:
    """
    Dependency that requires a valid session cookie.

    Usage:
        @router.get("/protected")
        async def protected_route(user: TokenPayload = Depends(get_current_user)):
            return {"user_id": user.id}

    Raises:
        MissingTokenError: If no cookie is present
        InvalidTokenError: If the token fails verification
    """
    token = get_session_token(request)
    if token is None:
        raise MissingTokenError()

    payload = tokens.verify(token)
    if payload is None:
        raise InvalidTokenError()
    return payload


def set_session_cookie(response: Response, token: str) -> None:
    """Attach the session cookie to a response."""
    settings = get_settings()
    response.set_cookie(
        key=settings.cookie_name,
        value=token,
        max_age=settings.token_ttl_hours * 3600,
        httponly=True,
        secure=settings.cookie_secure,
        samesite=settings.cookie_samesite,
        path="/",
    )


def clear_session_cookie(response: Response) -> None:
    """Blank and expire the session cookie."""
    settings = get_settings()
    response.set_cookie(
        key=settings.cookie_name,
        value="",
        max_age=0,
        expires=0,
        httponly=True,
        secure=settings.cookie_secure,
        samesite=settings.cookie_samesite,
        path="/",
    )
