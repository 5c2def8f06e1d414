"""
Auth API endpoints.

Password login against the backend, logout, the current-user lookup and
password changes.
"""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import JSONResponse, RedirectResponse
from pydantic import BaseModel

from pokeadmin.api.collection import passthrough
from pokeadmin.api.schemas import AppUser, CamelModel
from pokeadmin.api.session import OptionalToken, RequiredToken
from pokeadmin.config import (
    ID_TOKEN_COOKIE,
    OIDC_TRANSIENT_COOKIES,
    PASSWORD_TOKEN_COOKIE,
    PASSWORD_TOKEN_MAX_AGE,
    SESSION_COOKIE,
    settings,
)
from pokeadmin.models.failure import FailureKind, KnownError
from pokeadmin.services.backend_client import BackendClient, get_backend_client

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])

Backend = Annotated[BackendClient, Depends(get_backend_client)]


class PasswordLoginRequest(BaseModel):
    """Request model for password login."""

    email: str | None = None
    password: str | None = None


class ChangePasswordRequest(CamelModel):
    """Request model for changing the signed-in user's password."""

    current_password: str | None = None
    new_password: str | None = None


def to_app_user(payload: Any) -> AppUser | None:
    """
    Map the backend's /user/me response to the frontend user.

    Returns None when the body carries no user id.
    """
    if not isinstance(payload, dict):
        return None
    user = payload.get("data")
    if not isinstance(user, dict) or not user.get("id"):
        return None
    return AppUser(
        id=str(user["id"]),
        name=user.get("name") or user.get("preferredUsername"),
        email=user.get("email"),
        avatar_url=user.get("avatarUrl"),
        is_admin=user.get("isAdmin"),
        auth_source=payload.get("authSource"),
    )


@router.post("/password-login")
async def password_login(request: PasswordLoginRequest, backend: Backend) -> JSONResponse:
    """
    Log in with email and password.

    On success the backend's access token is stored in an HttpOnly cookie
    used by every later proxied call.
    """
    if not request.email or not request.password:
        raise KnownError(
            kind=FailureKind.INVALID_INPUT,
            message="Email and password are required.",
            detail="Missing credentials in request.",
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    payload = await backend.password_login(request.email, request.password)

    token = payload.get("accessToken") if isinstance(payload, dict) else None
    if not token:
        logger.error("[API /auth/password-login] Token not found in external API response")
        raise KnownError(
            kind=FailureKind.MALFORMED_RESPONSE,
            message="Authentication service did not provide a token.",
            detail='The response did not contain an "accessToken" field.',
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    user = payload.get("user") or payload.get("data")
    response = JSONResponse(content={"message": "Login successful", "user": user})
    response.set_cookie(
        PASSWORD_TOKEN_COOKIE,
        token,
        max_age=PASSWORD_TOKEN_MAX_AGE,
        path="/",
        secure=settings.secure_cookies,
        httponly=True,
        samesite="lax",
    )
    return response


@router.get("/logout")
async def logout() -> RedirectResponse:
    """Clear every session cookie and redirect to the post-logout page."""
    response = RedirectResponse(settings.logout_redirect_url or settings.app_url)
    for name in (ID_TOKEN_COOKIE, SESSION_COOKIE, PASSWORD_TOKEN_COOKIE, *OIDC_TRANSIENT_COOKIES):
        response.delete_cookie(name, path="/")
    return response


@router.get("/user", response_model=AppUser | None)
async def current_user(token: OptionalToken, backend: Backend) -> AppUser | None:
    """
    Get the signed-in user.

    Returns null when there is no session, or when the backend answers
    without a user id.
    """
    if not token:
        logger.info("[API /auth/user] No session token found. Returning null.")
        return None

    user = to_app_user(await backend.get_current_user(token))
    if user is None:
        logger.warning("[API /auth/user] Backend returned no user id. Treating as unauthenticated.")
    return user


@router.post("/change-password")
async def change_password(
    request: ChangePasswordRequest, token: RequiredToken, backend: Backend
) -> Response:
    """
    Change the signed-in user's password.

    The backend answers 204 on success, which is passed through.
    """
    if not request.current_password or not request.new_password:
        raise KnownError(
            kind=FailureKind.INVALID_INPUT,
            message="Current password and new password are required.",
            status_code=status.HTTP_400_BAD_REQUEST,
        )
    return passthrough(
        await backend.change_password(token, request.current_password, request.new_password)
    )
