"""
Page route protection.

Runs before any page handler and applies the decision table from
modules.auth.routing: unauthenticated visitors are sent to /login, signed-in
users are bounced off the public pages, and a bad cookie is cleared.

API routes are skipped; they check the cookie themselves and answer with
JSON errors instead of redirects.
"""

import logging
from typing import Awaitable, Callable

from fastapi import FastAPI, Request, Response
from fastapi.responses import RedirectResponse

from shared.config import get_settings
from modules.auth.models import RouteAction
from modules.auth.routing import decide

from ..dependencies import get_container
from .auth import clear_session_cookie, get_session_token

logger = logging.getLogger(__name__)

API_PREFIX = "/api"


def is_api_path(path: str) -> bool:
    """Check whether a path belongs to the JSON API."""
    return path == API_PREFIX or path.startswith(API_PREFIX + "/")


async def route_protection_middleware(
    request: Request,
    call_next: Callable[[Request], Awaitable[Response]],
) -> Response:
    path = request.url.path
    if is_api_path(path):
        return await call_next(request)

    token = get_session_token(request)
    decision = decide(path, token, get_container().tokens.verify)

    if decision.action == RouteAction.ALLOW:
        return await call_next(request)

    logger.debug(f"Redirecting {path} to {decision.location}")
    response = RedirectResponse(url=decision.location, status_code=307)
    if decision.clear_cookie:
        clear_session_cookie(response)
    return response


def setup_route_protection(app: FastAPI) -> None:
    """Install the page route-protection middleware."""
    app.middleware("http")(route_protection_middleware)
    logger.debug(f"Route protection enabled (cookie: {get_settings().cookie_name})")
