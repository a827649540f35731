"""
Auth API endpoints.

Local registration and login, the caller's own profile, and the
browser-facing OAuth callback.
"""

import logging
from typing import Optional
from urllib.parse import quote

from fastapi import APIRouter, Depends, Query
from fastapi.responses import RedirectResponse

from api.dependencies import get_auth_service
from api.middleware.auth import get_current_user
from shared.config import get_settings
from shared.exceptions import ExternalServiceError, KeystoneError
from shared.models import ApiResponse, AuthenticatedUser

from .interfaces import IAuthService
from .models import (
    AuthResult,
    LoginRequest,
    OAuthProviderConfig,
    ProfileUpdateRequest,
    RegisterRequest,
    UserPublic,
)

logger = logging.getLogger(__name__)

router = APIRouter()

OAUTH_FALLBACK_MESSAGE = "Something went wrong while signing you in"


@router.post("/register", response_model=ApiResponse[AuthResult])
async def register(
    request: RegisterRequest,
    service: IAuthService = Depends(get_auth_service),
) -> ApiResponse[AuthResult]:
    """
    Create a local account.

    Returns a bearer token and the new user.
    """
    return ApiResponse.ok(await service.register(request))


@router.post("/login", response_model=ApiResponse[AuthResult])
async def login(
    request: LoginRequest,
    service: IAuthService = Depends(get_auth_service),
) -> ApiResponse[AuthResult]:
    """Sign in with username and password."""
    return ApiResponse.ok(await service.login(request))


@router.get("/me", response_model=ApiResponse[UserPublic])
async def get_me(
    user: AuthenticatedUser = Depends(get_current_user),
    service: IAuthService = Depends(get_auth_service),
) -> ApiResponse[UserPublic]:
    """
    Get the current user's profile.

    Requires authentication.
    """
    return ApiResponse.ok(await service.get_profile(user.id))


@router.put("/profile", response_model=ApiResponse[UserPublic])
async def update_profile(
    request: ProfileUpdateRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IAuthService = Depends(get_auth_service),
) -> ApiResponse[UserPublic]:
    """
    Update the current user's profile.

    Only fields present in the body are changed.
    """
    return ApiResponse.ok(await service.update_profile(user.id, request))


@router.get("/{provider}/config", response_model=ApiResponse[OAuthProviderConfig])
async def get_provider_config(
    provider: str,
    service: IAuthService = Depends(get_auth_service),
) -> ApiResponse[OAuthProviderConfig]:
    """
    Public settings for starting a federated login.

    Returns enabled=false when the provider has no credentials configured.
    """
    return ApiResponse.ok(await service.get_provider_config(provider))


@router.get("/{provider}/callback")
async def oauth_callback(
    provider: str,
    code: Optional[str] = Query(default=None),
    service: IAuthService = Depends(get_auth_service),
) -> RedirectResponse:
    """
    Provider redirect target.

    Reached by full-page browser navigation, so every outcome is a
    redirect: to the frontend callback route with the token on success,
    or to the login route with a readable message on failure.
    """
    frontend_url = get_settings().frontend_url.rstrip("/")

    try:
        result = await service.complete_oauth_callback(provider, code)
    except ExternalServiceError as e:
        logger.warning(f"{provider} login failed: {e.to_dict()}")
        return _login_error_redirect(frontend_url, e.message)
    except KeystoneError as e:
        logger.error(f"{provider} login failed: {e.to_dict()}")
        return _login_error_redirect(frontend_url, OAUTH_FALLBACK_MESSAGE)
    except Exception:
        logger.exception(f"{provider} callback crashed")
        return _login_error_redirect(frontend_url, OAUTH_FALLBACK_MESSAGE)

    return RedirectResponse(
        f"{frontend_url}/#/{quote(provider)}-callback?token={quote(result.token)}",
        status_code=302,
    )


def _login_error_redirect(frontend_url: str, message: str) -> RedirectResponse:
    return RedirectResponse(
        f"{frontend_url}/#/login?error={quote(message)}",
        status_code=302,
    )
