"""Kakao identity provider."""

from typing import Any

from .base import OAuthProfile, OAuthProvider

KAKAO_AUTH_URL = "https://kauth.kakao.com/oauth/authorize"
KAKAO_TOKEN_URL = "https://kauth.kakao.com/oauth/token"
KAKAO_PROFILE_URL = "https://kapi.kakao.com/v2/user/me"


class KakaoOAuthProvider(OAuthProvider):
    """Kakao Login.

    Kakao configures consent items in its developer console, so no scope
    is sent. Nickname and image live under ``properties`` for older apps
    and under ``kakao_account.profile`` for newer ones.
    """

    name = "kakao"
    display_name = "Kakao"
    authorize_url = KAKAO_AUTH_URL
    token_url = KAKAO_TOKEN_URL
    profile_url = KAKAO_PROFILE_URL

    def parse_profile(self, payload: dict[str, Any]) -> OAuthProfile:
        properties = payload.get("properties") or {}
        account = payload.get("kakao_account") or {}
        account_profile = account.get("profile") or {}

        return OAuthProfile(
            provider=self.name,
            provider_id=str(payload.get("id")),
            nickname=properties.get("nickname") or account_profile.get("nickname"),
            email=account.get("email"),
            profile_image=(
                properties.get("profile_image")
                or account_profile.get("profile_image_url")
            ),
        )
