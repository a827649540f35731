"""
Centralized configuration for the Keystone backend.

All settings are loaded from environment variables with sensible defaults.
Module-specific settings are namespaced (e.g., JWT_*, KAKAO_*, GOOGLE_*).

JWT_SECRET has no usable default: the application refuses to start and
refuses to sign or verify tokens until it is set.
"""

from functools import lru_cache
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Application
    app_name: str = "Keystone API"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False

    # CORS settings
    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:3000"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # PostgreSQL
    database_url: str = ""
    database_pool_min: int = 1
    database_pool_max: int = 10
    database_auto_init: bool = True

    # Tokens
    jwt_secret: str = ""
    jwt_algorithm: str = "HS256"
    jwt_expires_days: int = 7

    # Local credentials
    password_min_length: int = 6
    bcrypt_rounds: int = 10

    # Frontend URL (for OAuth redirects; empty means same origin)
    frontend_url: str = ""

    # Kakao OAuth
    kakao_client_id: str = Field(
        default="",
        validation_alias=AliasChoices("kakao_client_id", "kakao_rest_api_key"),
    )
    kakao_client_secret: str = ""
    kakao_redirect_uri: str = ""

    # Google OAuth
    google_client_id: str = ""
    google_client_secret: str = ""
    google_redirect_uri: str = ""

    oauth_timeout_seconds: float = 10.0


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
