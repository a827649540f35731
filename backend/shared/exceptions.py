"""
Base exception classes for the Keystone backend.

Each module should define its own exceptions that inherit from these bases.
The API layer maps every base class to one HTTP status, so a module
exception only has to pick the right parent.
"""

from typing import Optional, Any


class KeystoneError(Exception):
    """
    Base exception for all Keystone errors.

    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for logging and API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class NotFoundError(KeystoneError):
    """Resource not found."""

    pass


class ValidationError(KeystoneError):
    """Input validation failed."""

    pass


class ConflictError(KeystoneError):
    """A uniqueness constraint would be violated."""

    pass


class AuthenticationError(KeystoneError):
    """Authentication failed (invalid or missing credentials)."""

    pass


class AuthorizationError(KeystoneError):
    """Authorization failed (authenticated, but not allowed)."""

    pass


class ConfigurationError(KeystoneError):
    """Required server configuration is missing."""

    pass


class DatabaseError(KeystoneError):
    """The relational store failed. The driver detail is logged, never returned."""

    def __init__(self, message: str = "Database error", code: Optional[str] = None):
        super().__init__(message, code=code or "DATABASE_ERROR")


class ExternalServiceError(KeystoneError):
    """Error communicating with an external service."""

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.service = service
        self.details["service"] = service
