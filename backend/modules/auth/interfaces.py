"""
Authentication module interfaces.

Other modules should depend on IAuthService, not the concrete implementation.
This enables testing with mocks and future extraction to a microservice.
"""

from typing import Any, Optional, Protocol, runtime_checkable

from shared.models import AuthenticatedUser

from .models import (
    AuthProvider,
    AuthResult,
    LoginRequest,
    OAuthProviderConfig,
    ProfileUpdateRequest,
    RegisterRequest,
    User,
    UserPublic,
)


@runtime_checkable
class IUserRepository(Protocol):
    """Credential store contract used by the auth service."""

    def create(self, data: dict[str, Any]) -> User: ...

    def find_by_username(
        self, username: str, provider: AuthProvider = AuthProvider.LOCAL
    ) -> Optional[User]: ...

    def find_by_provider_id(self, provider: str, provider_id: str) -> Optional[User]: ...

    def find_by_id(self, user_id: int) -> Optional[User]: ...

    def update(self, user_id: int, fields: dict[str, Any]) -> Optional[User]: ...


@runtime_checkable
class IAuthService(Protocol):
    """
    Interface for authentication operations.

    This protocol defines the contract that the auth module exposes
    to other modules. Implementations must provide all these methods.
    """

    async def validate_token(self, token: str) -> AuthenticatedUser:
        """
        Validate a bearer token and return the authenticated user.

        Args:
            token: JWT access token issued by this service

        Returns:
            AuthenticatedUser with the user ID and identity claims

        Raises:
            AuthenticationError: If token is missing, invalid or expired
        """
        ...

    async def register(self, request: RegisterRequest) -> AuthResult:
        """
        Create a local account and sign the user in.

        Raises:
            ValidationError: If required fields are missing or the password is too short
            UsernameTakenError: If the username already exists
        """
        ...

    async def login(self, request: LoginRequest) -> AuthResult:
        """
        Sign in with a local username and password.

        Raises:
            ValidationError: If username or password is missing
            InvalidCredentialsError: If the credentials do not match
        """
        ...

    async def complete_oauth_callback(self, provider: str, code: Optional[str]) -> AuthResult:
        """
        Finish a federated login from the provider's redirect.

        Exchanges the code, fetches the profile and links it to a local
        user, creating one on first login.

        Raises:
            ExternalServiceError: If any step of the flow fails
        """
        ...

    async def get_profile(self, user_id: int) -> UserPublic:
        """
        Get the caller's own profile.

        Raises:
            UserNotFoundError: If the user no longer exists
        """
        ...

    async def update_profile(self, user_id: int, request: ProfileUpdateRequest) -> UserPublic:
        """
        Update the caller's own profile. Null fields are left unchanged.

        Raises:
            ValidationError: If nickname is blank
            UserNotFoundError: If the user no longer exists
        """
        ...

    async def get_provider_config(self, provider: str) -> OAuthProviderConfig:
        """
        Get the public settings needed to start a federated login.

        Raises:
            NotFoundError: If the provider is not supported
        """
        ...
