"""
Authentication module exceptions.

These exceptions are raised by the auth module and caught by the API
error handlers to return appropriate HTTP responses.
"""

from shared.exceptions import (
    AuthenticationError,
    ConfigurationError,
    ConflictError,
    ExternalServiceError,
    NotFoundError,
)


class InvalidTokenError(AuthenticationError):
    """Raised when a JWT token is invalid or malformed."""

    def __init__(self, message: str = "Invalid authentication token"):
        super().__init__(message, code="INVALID_TOKEN")


class ExpiredTokenError(AuthenticationError):
    """Raised when a JWT token has expired."""

    def __init__(self, message: str = "Authentication token has expired"):
        super().__init__(message, code="TOKEN_EXPIRED")


class MissingTokenError(AuthenticationError):
    """Raised when no authentication token is provided."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, code="MISSING_TOKEN")


class InvalidCredentialsError(AuthenticationError):
    """
    Raised when a login attempt fails.

    The same message is used for an unknown username and for a wrong
    password so that responses do not reveal which accounts exist.
    """

    def __init__(self):
        super().__init__("Invalid username or password", code="INVALID_CREDENTIALS")


class UsernameTakenError(ConflictError):
    """Raised when registering a username that already exists."""

    def __init__(self, username: str):
        super().__init__(
            "Username already exists",
            code="USERNAME_TAKEN",
            details={"username": username},
        )


class UserNotFoundError(NotFoundError):
    """Raised when the authenticated user no longer exists in the database."""

    def __init__(self, user_id: int):
        super().__init__(
            "User not found",
            code="USER_NOT_FOUND",
            details={"user_id": user_id},
        )


class AuthConfigurationError(ConfigurationError):
    """Raised when token signing is attempted without a configured secret."""

    def __init__(self):
        super().__init__(
            "Server authentication not configured",
            code="AUTH_NOT_CONFIGURED",
        )


class OAuthLoginError(ExternalServiceError):
    """Raised when a federated login cannot be completed."""

    def __init__(self, provider: str, message: str):
        super().__init__(message, service=provider, code="OAUTH_LOGIN_FAILED")
