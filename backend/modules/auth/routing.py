"""
Route protection rules.

Maps {token present, token valid, route public} to an allow/redirect
decision. Kept free of any web framework so the table can be tested
directly; api.middleware.routes wires it into Starlette.
"""

import logging
from typing import Callable, Optional

from .models import RouteDecision, TokenPayload

logger = logging.getLogger(__name__)

LOGIN_PATH = "/login"
DASHBOARD_PATH = "/dashboard"

# Root only matches exactly; the others also cover nested paths
PUBLIC_ROOT = "/"
PUBLIC_PREFIXES = ("/login", "/signup")

Verifier = Callable[[str], Optional[TokenPayload]]


def is_public_route(path: str) -> bool:
    """Check whether a path is reachable without authentication."""
    if path == PUBLIC_ROOT:
        return True
    for prefix in PUBLIC_PREFIXES:
        if path == prefix or path.startswith(prefix + "/"):
            return True
    return False


def decide(path: str, token: Optional[str], verify: Verifier) -> RouteDecision:
    """
    Decide what to do with a page request.

    | token   | valid | public | action                          |
    |---------|-------|--------|---------------------------------|
    | absent  |   -   | no     | redirect to /login              |
    | absent  |   -   | yes    | allow                           |
    | present | no    | any    | clear cookie, redirect to /login|
    | present | yes   | yes    | redirect to /dashboard          |
    | present | yes   | no     | allow                           |

    A verifier that raises is treated as a failed verification.
    """
    public = is_public_route(path)

    if not token:
        return RouteDecision.allow() if public else RouteDecision.redirect(LOGIN_PATH)

    try:
        payload = verify(token)
    except Exception:
        logger.exception(f"Token verification raised for {path}, failing closed")
        payload = None

    if payload is None:
        return RouteDecision.redirect(LOGIN_PATH, clear_cookie=True)

    if public:
        return RouteDecision.redirect(DASHBOARD_PATH)

    return RouteDecision.allow()
