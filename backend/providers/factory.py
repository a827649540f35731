"""Factory functions for creating OAuth identity providers."""

from typing import Optional

from shared.config import Settings, get_settings

from .base import OAuthProvider
from .google import GoogleOAuthProvider
from .kakao import KakaoOAuthProvider


def get_providers(settings: Optional[Settings] = None) -> dict[str, OAuthProvider]:
    """Build one instance of each supported provider from settings.

    Providers without credentials are still returned; callers check
    ``is_configured`` before starting a flow.

    Returns:
        Dictionary mapping provider tags to provider instances.
        Keys are: "kakao", "google"
    """
    settings = settings or get_settings()
    return {
        "kakao": KakaoOAuthProvider(
            settings.kakao_client_id,
            settings.kakao_client_secret,
            settings.kakao_redirect_uri,
        ),
        "google": GoogleOAuthProvider(
            settings.google_client_id,
            settings.google_client_secret,
            settings.google_redirect_uri,
        ),
    }
