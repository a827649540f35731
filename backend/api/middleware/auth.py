"""
Bearer authentication dependencies.

The gate for every protected route: extracts the bearer token, verifies
it, and hands the decoded identity to the handler. It performs no
resource-level checks; handlers compare ``user.id`` with the owner of
whatever they touch.
"""

from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from modules.auth.exceptions import MissingTokenError
from modules.auth.interfaces import IAuthService
from shared.models import AuthenticatedUser

from ..dependencies import get_auth_service

# Bearer token extractor. Missing headers and non-Bearer schemes both
# come back as None instead of a 403 so we can answer 401 ourselves.
bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth: IAuthService = Depends(get_auth_service),
) -> AuthenticatedUser:
    """
    Dependency that requires authentication.

    Use this for endpoints that require a logged-in user, or attach it to a
    whole router with ``APIRouter(dependencies=[RequireAuth])``.

    Usage:
        @router.get("/protected")
        async def protected_route(user: AuthenticatedUser = Depends(get_current_user)):
            return {"user_id": user.id}
    """
    if credentials is None:
        raise MissingTokenError()

    return await auth.validate_token(credentials.credentials)


# Alias for cleaner route definitions
RequireAuth = Depends(get_current_user)
