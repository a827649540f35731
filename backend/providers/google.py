"""Google identity provider."""

from typing import Any

from .base import OAuthProfile, OAuthProvider

GOOGLE_AUTH_URL = "https://accounts.google.com/o/oauth2/v2/auth"
GOOGLE_TOKEN_URL = "https://oauth2.googleapis.com/token"
GOOGLE_PROFILE_URL = "https://openidconnect.googleapis.com/v1/userinfo"


class GoogleOAuthProvider(OAuthProvider):
    """Google sign-in via the OpenID Connect userinfo endpoint."""

    name = "google"
    display_name = "Google"
    authorize_url = GOOGLE_AUTH_URL
    token_url = GOOGLE_TOKEN_URL
    profile_url = GOOGLE_PROFILE_URL
    default_scopes = ("openid", "email", "profile")

    def parse_profile(self, payload: dict[str, Any]) -> OAuthProfile:
        return OAuthProfile(
            provider=self.name,
            provider_id=str(payload.get("sub")),
            nickname=payload.get("name") or payload.get("given_name"),
            email=payload.get("email"),
            profile_image=payload.get("picture"),
        )
