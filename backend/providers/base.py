"""Base classes and models for OAuth identity providers."""

import logging
from abc import ABC, abstractmethod
from typing import Any, Optional
from urllib.parse import urlencode

import httpx
from pydantic import BaseModel

from shared.exceptions import ExternalServiceError

logger = logging.getLogger(__name__)


class OAuthProviderError(ExternalServiceError):
    """Raised when a code exchange or profile fetch fails.

    The message is safe to show to the end user; upstream detail goes
    into ``details`` and the log.
    """

    def __init__(self, provider: str, message: str, reason: Optional[str] = None):
        super().__init__(
            message,
            service=provider,
            code="OAUTH_PROVIDER_ERROR",
            details={"reason": reason} if reason else None,
        )


class OAuthProfile(BaseModel):
    """Normalized identity returned by a provider's profile endpoint.

    Attributes:
        provider: Provider tag (e.g., "kakao")
        provider_id: Provider's stable user ID, always a string
        nickname: Display name, if the user consented to share it
        email: Email address, if the user consented to share it
        profile_image: Avatar URL, if any
    """

    model_config = {"frozen": True}

    provider: str
    provider_id: str
    nickname: Optional[str] = None
    email: Optional[str] = None
    profile_image: Optional[str] = None


class OAuthProvider(ABC):
    """Abstract base class for OAuth identity providers.

    Every provider follows the same authorization-code flow: the browser
    is sent to ``authorize_url``, the provider redirects back with a code,
    and the server exchanges that code for an access token and then reads
    the user's profile. Subclasses supply endpoints and profile parsing.
    """

    name: str = ""
    display_name: str = ""
    authorize_url: str = ""
    token_url: str = ""
    profile_url: str = ""
    default_scopes: tuple[str, ...] = ()

    def __init__(self, client_id: str, client_secret: str = "", redirect_uri: str = ""):
        self.client_id = client_id.strip()
        self.client_secret = client_secret.strip()
        self.redirect_uri = redirect_uri.strip()

    @property
    def is_configured(self) -> bool:
        return bool(self.client_id and self.redirect_uri)

    @property
    def default_nickname(self) -> str:
        """Nickname given to new accounts when the provider shares none."""
        return f"{self.display_name} user"

    def build_authorization_url(self, state: Optional[str] = None) -> str:
        params = {
            "client_id": self.client_id,
            "redirect_uri": self.redirect_uri,
            "response_type": "code",
        }
        if self.default_scopes:
            params["scope"] = " ".join(self.default_scopes)
        if state:
            params["state"] = state
        return f"{self.authorize_url}?{urlencode(params)}"

    async def exchange_code(self, client: httpx.AsyncClient, code: str) -> str:
        """Exchange an authorization code for an access token.

        Args:
            client: HTTP client used for the server-to-server call
            code: Authorization code from the provider redirect

        Returns:
            The provider access token

        Raises:
            OAuthProviderError: If the request fails or no token is returned
        """
        data = {
            "grant_type": "authorization_code",
            "client_id": self.client_id,
            "redirect_uri": self.redirect_uri,
            "code": code,
        }
        if self.client_secret:
            data["client_secret"] = self.client_secret

        payload = await self._request_json(
            client,
            "POST",
            self.token_url,
            failure_message=f"{self.display_name} token request failed",
            data=data,
        )

        access_token = payload.get("access_token")
        if not access_token:
            reason = payload.get("error_description") or payload.get("error")
            logger.warning(f"{self.name} token exchange rejected: {reason}")
            raise OAuthProviderError(
                self.name,
                reason or f"Could not obtain a {self.display_name} access token",
                reason=payload.get("error"),
            )
        return access_token

    async def fetch_profile(self, client: httpx.AsyncClient, access_token: str) -> OAuthProfile:
        """Fetch and normalize the profile behind an access token.

        Raises:
            OAuthProviderError: If the request fails or the payload has no user ID
        """
        payload = await self._request_json(
            client,
            "GET",
            self.profile_url,
            failure_message=f"Could not load your {self.display_name} profile",
            headers={"Authorization": f"Bearer {access_token}"},
            require_success=True,
        )
        profile = self.parse_profile(payload)
        if not profile.provider_id or profile.provider_id == "None":
            raise OAuthProviderError(
                self.name,
                f"Could not load your {self.display_name} profile",
                reason="missing user id",
            )
        return profile

    @abstractmethod
    def parse_profile(self, payload: dict[str, Any]) -> OAuthProfile:
        """Map the provider's profile JSON onto an OAuthProfile."""
        pass

    async def _request_json(
        self,
        client: httpx.AsyncClient,
        method: str,
        url: str,
        failure_message: str,
        require_success: bool = False,
        **kwargs: Any,
    ) -> dict[str, Any]:
        try:
            response = await client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"{self.name} request to {url} failed: {e}")
            raise OAuthProviderError(self.name, failure_message, reason=str(e)) from e

        if require_success and response.is_error:
            logger.error(f"{self.name} request to {url} returned {response.status_code}")
            raise OAuthProviderError(
                self.name, failure_message, reason=f"HTTP {response.status_code}"
            )

        try:
            payload = response.json()
        except ValueError as e:
            logger.error(f"{self.name} returned non-JSON body from {url}")
            raise OAuthProviderError(self.name, failure_message, reason="invalid JSON") from e

        if not isinstance(payload, dict):
            raise OAuthProviderError(self.name, failure_message, reason="unexpected payload")
        return payload
