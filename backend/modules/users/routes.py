"""
Account API endpoints.

Login, signup, logout and profile read/update. Errors raised by the service
are turned into JSON envelopes by the application's exception handlers.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from api.middleware.auth import (
    clear_session_cookie,
    get_current_user,
    set_session_cookie,
)
from api.dependencies import get_user_service
from modules.auth.models import TokenPayload

from .interfaces import IUserService
from .models import LoginRequest, ProfileUpdateRequest, SignupRequest

router = APIRouter()


@router.post("/login")
async def login(
    request: LoginRequest,
    service: IUserService = Depends(get_user_service),
) -> JSONResponse:
    """
    Log in with username and password.

    Returns the token and user, and sets the http-only session cookie.
    """
    result = await service.login(request)
    response = JSONResponse({
        "message": "Login successful",
        "success": True,
        "token": result.token,
        "user": result.user.model_dump(mode="json"),
    })
    set_session_cookie(response, result.token)
    return response


@router.post("/signup")
async def signup(
    request: SignupRequest,
    service: IUserService = Depends(get_user_service),
) -> dict:
    """
    Create an account. Does not log the user in.
    """
    user = await service.signup(request)
    return {
        "message": "User created successfully!",
        "success": True,
        "user": user.model_dump(mode="json"),
    }


@router.post("/logout")
async def logout() -> JSONResponse:
    """
    Clear the session cookie.
    """
    response = JSONResponse({"message": "Logout successful", "success": True})
    clear_session_cookie(response)
    return response


@router.get("/profile")
async def get_profile(
    user: TokenPayload = Depends(get_current_user),
    service: IUserService = Depends(get_user_service),
) -> dict:
    """
    Get the current user's profile.

    Requires a valid session cookie.
    """
    profile = await service.get_profile(user.id)
    return {"message": "User found", "data": profile.model_dump(mode="json")}


@router.put("/profile")
async def update_profile(
    request: ProfileUpdateRequest,
    user: TokenPayload = Depends(get_current_user),
    service: IUserService = Depends(get_user_service),
) -> dict:
    """
    Update the current user's profile.

    Only email, github, bio, location, website, phone and theme are writable.
    """
    profile = await service.update_profile(user.id, request)
    return {
        "message": "Profile updated successfully",
        "data": profile.model_dump(mode="json"),
    }
