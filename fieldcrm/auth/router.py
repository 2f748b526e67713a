"""
Auth router with sign-in, sign-out and current-user endpoints.
"""

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import JSONResponse

from fieldcrm.auth import schemas
from fieldcrm.auth.config import get_auth_settings
from fieldcrm.auth.constants import CookieNames
from fieldcrm.auth.dataclasses import EffectiveIdentity
from fieldcrm.auth.dependencies import (
    get_auth_provider_dependency,
    get_current_user,
    get_effective_identity,
)
from fieldcrm.auth.service import AuthProvider
from fieldcrm.db.dependencies import get_user_repository
from fieldcrm.db.users.repository import UserRepository

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/login", response_model=schemas.AuthResponse)
async def login(
    request: schemas.LoginRequest,
    auth_provider: AuthProvider = Depends(get_auth_provider_dependency),
    users: UserRepository = Depends(get_user_repository),
) -> JSONResponse:
    """
    Sign in with username and password.

    Returns the session (including a bearer token for API clients) and sets
    an HTTP-only session cookie for web clients.
    """
    result = await auth_provider.sign_in(users, request.username, request.password)

    if not result.success or not result.session:
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content=schemas.AuthResponse(success=False, error=result.error).model_dump(),
        )

    body = schemas.AuthResponse(
        success=True, session=result.session.model_dump(mode="json")
    )
    response = JSONResponse(content=body.model_dump())

    # Get auth settings for cookie configuration
    auth_settings = get_auth_settings()
    response.set_cookie(
        key=CookieNames.SESSION_TOKEN.value,
        value=result.session.access_token,
        httponly=auth_settings.cookie_httponly,
        secure=auth_settings.cookie_secure,
        samesite=auth_settings.cookie_samesite.value,
        max_age=auth_settings.session_timeout_hours * 3600,
        domain=auth_settings.cookie_domain,
    )
    return response


@router.post("/signout")
async def sign_out(
    request: Request,
    auth_provider: AuthProvider = Depends(get_auth_provider_dependency),
    current_user: schemas.User = Depends(get_current_user),
) -> Response:
    """
    Sign out the current user.

    Invalidates the current user's session and clears cookies.
    """
    session_token = request.cookies.get(CookieNames.SESSION_TOKEN.value)
    if session_token:
        await auth_provider.sign_out(session_token)

    # Return 204 No Content (no redirect)
    response = Response(status_code=status.HTTP_204_NO_CONTENT)
    response.delete_cookie(CookieNames.SESSION_TOKEN.value)
    return response


@router.get("/me", response_model=schemas.EffectiveUserResponse)
async def get_current_user_info(
    identity: EffectiveIdentity = Depends(get_effective_identity),
) -> schemas.EffectiveUserResponse:
    """
    Get current user information.

    When an admin is acting as another user, ``user`` is that user and
    ``real_user`` is the admin.
    """
    return schemas.EffectiveUserResponse(
        user=identity.user,
        real_user=identity.real,
        impersonating=identity.is_impersonating,
    )
