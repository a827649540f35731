"""OAuth identity provider implementations."""

from .base import OAuthProfile, OAuthProvider, OAuthProviderError
from .factory import get_providers
from .google import GoogleOAuthProvider
from .kakao import KakaoOAuthProvider

__all__ = [
    "OAuthProfile",
    "OAuthProvider",
    "OAuthProviderError",
    "GoogleOAuthProvider",
    "KakaoOAuthProvider",
    "get_providers",
]
