"""
Authentication module.

Handles local credentials, JWT issuing and validation, federated login
and the caller's own profile.

Public API:
- IAuthService: Interface for auth operations
- TokenService: Bearer token signer/verifier
- User, UserPublic: Stored and sanitized user records
- Auth exceptions: InvalidTokenError, ExpiredTokenError, etc.
"""

from .interfaces import IAuthService, IUserRepository
from .models import (
    AuthProvider,
    AuthResult,
    LoginRequest,
    OAuthProviderConfig,
    ProfileUpdateRequest,
    RegisterRequest,
    TokenClaims,
    User,
    UserPublic,
)
from .tokens import TokenService
from .exceptions import (
    InvalidTokenError,
    ExpiredTokenError,
    MissingTokenError,
    InvalidCredentialsError,
    UsernameTakenError,
    UserNotFoundError,
    AuthConfigurationError,
    OAuthLoginError,
)

__all__ = [
    # Interfaces
    "IAuthService",
    "IUserRepository",
    # Models
    "AuthProvider",
    "AuthResult",
    "LoginRequest",
    "OAuthProviderConfig",
    "ProfileUpdateRequest",
    "RegisterRequest",
    "TokenClaims",
    "User",
    "UserPublic",
    # Tokens
    "TokenService",
    # Exceptions
    "InvalidTokenError",
    "ExpiredTokenError",
    "MissingTokenError",
    "InvalidCredentialsError",
    "UsernameTakenError",
    "UserNotFoundError",
    "AuthConfigurationError",
    "OAuthLoginError",
]
