"""
Page shells.

The browser UI is rendered client-side; the server only returns a minimal
document per page. Access to these paths is gated by the route-protection
middleware, not here.
"""

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

from shared.config import get_settings

router = APIRouter(include_in_schema=False)


def render_shell(page: str, title: str) -> HTMLResponse:
    """Minimal HTML document the client app mounts into."""
    app_name = get_settings().app_name
    return HTMLResponse(
        "<!DOCTYPE html>\n"
        "<html lang=\"en\">\n"
        "<head>\n"
        "  <meta charset=\"utf-8\">\n"
        f"  <title>{title} | {app_name}</title>\n"
        "</head>\n"
        f"<body><div id=\"root\" data-page=\"{page}\"></div></body>\n"
        "</html>\n"
    )


@router.get("/", response_class=HTMLResponse)
async def home() -> HTMLResponse:
    return render_shell("home", "Home")


@router.get("/login", response_class=HTMLResponse)
async def login_page() -> HTMLResponse:
    return render_shell("login", "Log in")


@router.get("/signup", response_class=HTMLResponse)
async def signup_page() -> HTMLResponse:
    return render_shell("signup", "Sign up")


@router.get("/dashboard", response_class=HTMLResponse)
async def dashboard_page() -> HTMLResponse:
    return render_shell("dashboard", "Dashboard")


@router.get("/profile", response_class=HTMLResponse)
async def profile_page() -> HTMLResponse:
    return render_shell("profile", "Profile")
