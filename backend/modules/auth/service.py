"""
Authentication service implementation.

Local registration and login, bearer token validation, federated login
with account linking, and the caller's own profile.
"""

import asyncio
import logging
from typing import Callable, Optional

import httpx

from providers.base import OAuthProfile, OAuthProvider
from shared.config import Settings, get_settings
from shared.exceptions import NotFoundError, ValidationError
from shared.models import AuthenticatedUser
from shared.repository import DuplicateKeyError

from .exceptions import (
    InvalidCredentialsError,
    OAuthLoginError,
    UsernameTakenError,
    UserNotFoundError,
)
from .interfaces import IAuthService, IUserRepository
from .models import (
    EMAIL_MAX_LENGTH,
    NICKNAME_MAX_LENGTH,
    AuthProvider,
    AuthResult,
    LoginRequest,
    OAuthProviderConfig,
    ProfileUpdateRequest,
    RegisterRequest,
    User,
    UserPublic,
)
from .security import BCRYPT_MAX_BYTES, hash_password, verify_password
from .tokens import TokenService

logger = logging.getLogger(__name__)

HttpClientFactory = Callable[[], httpx.AsyncClient]


class AuthService(IAuthService):
    """
    Implementation of the authentication service.

    Uses TokenService for bearer tokens, a user repository for
    persistence and OAuth providers for federated login.
    """

    def __init__(
        self,
        repository: IUserRepository,
        tokens: TokenService,
        providers: Optional[dict[str, OAuthProvider]] = None,
        settings: Optional[Settings] = None,
        http_client_factory: Optional[HttpClientFactory] = None,
    ):
        self._repository = repository
        self._tokens = tokens
        self._providers = providers or {}
        self._settings = settings or get_settings()
        self._http_client_factory = http_client_factory or self._default_http_client

    async def validate_token(self, token: str) -> AuthenticatedUser:
        """
        Validate a bearer token and return the authenticated user.

        Pure computation: the database is not consulted.
        """
        claims = self._tokens.verify(token)
        return AuthenticatedUser(
            id=claims.user_id,
            username=claims.username,
            nickname=claims.nickname,
            provider=claims.provider.value,
        )

    # -------------------------------------------------------------------------
    # Local credentials
    # -------------------------------------------------------------------------

    async def register(self, request: RegisterRequest) -> AuthResult:
        username = (request.username or "").strip()
        nickname = (request.nickname or "").strip()
        password = request.password or ""

        if not username or not password or not nickname:
            raise ValidationError(
                "Username, password and nickname are required",
                code="MISSING_FIELDS",
            )
        self._check_password_policy(password)

        # bcrypt and the driver both block; keep them off the event loop.
        password_hash = await asyncio.to_thread(
            hash_password, password, self._settings.bcrypt_rounds
        )
        try:
            user = await asyncio.to_thread(self._repository.create, {
                "username": username,
                "password_hash": password_hash,
                "nickname": nickname,
                "email": request.email,
                "phone": request.phone,
                "location": request.location,
                "provider": AuthProvider.LOCAL,
            })
        except DuplicateKeyError:
            raise UsernameTakenError(username)

        logger.info(f"Registered local user {user.id}")
        return self._sign_in(user)

    async def login(self, request: LoginRequest) -> AuthResult:
        if not request.username or not request.password:
            raise ValidationError(
                "Username and password are required",
                code="MISSING_FIELDS",
            )

        user = await asyncio.to_thread(
            self._repository.find_by_username, request.username.strip()
        )
        if user is None or not await asyncio.to_thread(
            verify_password, request.password, user.password_hash
        ):
            logger.info("Rejected login attempt")
            raise InvalidCredentialsError()

        return self._sign_in(user)

    def _check_password_policy(self, password: str) -> None:
        min_length = self._settings.password_min_length
        if len(password) < min_length:
            raise ValidationError(
                f"Password must be at least {min_length} characters",
                code="WEAK_PASSWORD",
            )
        if len(password.encode("utf-8")) > BCRYPT_MAX_BYTES:
            raise ValidationError(
                f"Password must be at most {BCRYPT_MAX_BYTES} bytes",
                code="PASSWORD_TOO_LONG",
            )

    # -------------------------------------------------------------------------
    # Federated login
    # -------------------------------------------------------------------------

    async def complete_oauth_callback(self, provider: str, code: Optional[str]) -> AuthResult:
        oauth = self._providers.get(provider)
        if oauth is None:
            raise OAuthLoginError(provider, "Unsupported login provider")
        if not oauth.is_configured:
            raise OAuthLoginError(provider, f"{oauth.display_name} login is not configured")
        if not code:
            raise OAuthLoginError(provider, f"{oauth.display_name} authentication failed")

        # Two sequential upstream calls; any failure aborts the flow.
        async with self._http_client_factory() as client:
            access_token = await oauth.exchange_code(client, code)
            profile = await oauth.fetch_profile(client, access_token)

        user = await asyncio.to_thread(self._link_federated_user, oauth, profile)
        return self._sign_in(user)

    def _link_federated_user(self, oauth: OAuthProvider, profile: OAuthProfile) -> User:
        """Find the user for a provider identity, refreshing or creating it."""
        nickname, email = self._fit_profile(profile)
        existing = self._repository.find_by_provider_id(oauth.name, profile.provider_id)
        if existing is not None:
            refreshed = self._repository.update(existing.id, {
                "nickname": nickname,
                "profile_image": profile.profile_image,
                "email": email,
            })
            logger.info(f"{oauth.name} login for existing user {existing.id}")
            return refreshed or existing

        try:
            user = self._repository.create({
                "nickname": nickname or oauth.default_nickname,
                "email": email,
                "profile_image": profile.profile_image,
                "provider": AuthProvider(oauth.name),
                "provider_id": profile.provider_id,
            })
        except DuplicateKeyError:
            # A concurrent first login for the same identity won the insert.
            winner = self._repository.find_by_provider_id(oauth.name, profile.provider_id)
            if winner is None:
                raise
            return winner

        logger.info(f"Created {oauth.name} user {user.id}")
        return user

    @staticmethod
    def _fit_profile(profile: OAuthProfile) -> tuple[Optional[str], Optional[str]]:
        """
        Make provider-supplied values fit the users table.

        Long display names are truncated; an email that cannot be stored
        is dropped rather than blocking the login.
        """
        nickname = (profile.nickname or "").strip()[:NICKNAME_MAX_LENGTH] or None
        email = profile.email
        if email and len(email) > EMAIL_MAX_LENGTH:
            logger.warning(f"Dropping {profile.provider} email longer than {EMAIL_MAX_LENGTH} characters")
            email = None
        return nickname, email

    async def get_provider_config(self, provider: str) -> OAuthProviderConfig:
        oauth = self._providers.get(provider)
        if oauth is None:
            raise NotFoundError("Unsupported login provider", code="PROVIDER_NOT_FOUND")
        if not oauth.is_configured:
            return OAuthProviderConfig(provider=provider, enabled=False)
        return OAuthProviderConfig(
            provider=provider,
            enabled=True,
            client_id=oauth.client_id,
            redirect_uri=oauth.redirect_uri,
            authorize_url=oauth.build_authorization_url(),
        )

    # -------------------------------------------------------------------------
    # Profile
    # -------------------------------------------------------------------------

    async def get_profile(self, user_id: int) -> UserPublic:
        user = await asyncio.to_thread(self._repository.find_by_id, user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return UserPublic.from_user(user)

    async def update_profile(self, user_id: int, request: ProfileUpdateRequest) -> UserPublic:
        fields = request.model_dump(exclude_none=True)
        if "nickname" in fields:
            fields["nickname"] = fields["nickname"].strip()
            if not fields["nickname"]:
                raise ValidationError("Nickname cannot be empty", code="INVALID_NICKNAME")

        user = await asyncio.to_thread(self._repository.update, user_id, fields)
        if user is None:
            raise UserNotFoundError(user_id)
        return UserPublic.from_user(user)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _sign_in(self, user: User) -> AuthResult:
        return AuthResult(token=self._tokens.issue(user), user=UserPublic.from_user(user))

    def _default_http_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self._settings.oauth_timeout_seconds)
