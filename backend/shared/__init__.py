"""
Shared infrastructure for Keystone backend.

This package contains cross-cutting concerns that are used by multiple modules:
- config: Centralized settings management
- database: PostgreSQL pool and schema lifecycle
- repository: Base repository with driver error translation
- exceptions: Base exception classes

Note: Business logic should NOT go here. This is for infrastructure only.
"""

from .config import Settings, get_settings
from .database import Database, get_database, reset_database
from .exceptions import (
    KeystoneError,
    NotFoundError,
    ValidationError,
    ConflictError,
    AuthenticationError,
    AuthorizationError,
    ConfigurationError,
    DatabaseError,
    ExternalServiceError,
)
from .models import ApiResponse, AuthenticatedUser
from .repository import BaseRepository, DuplicateKeyError

__all__ = [
    "Settings",
    "get_settings",
    "Database",
    "get_database",
    "reset_database",
    "KeystoneError",
    "NotFoundError",
    "ValidationError",
    "ConflictError",
    "AuthenticationError",
    "AuthorizationError",
    "ConfigurationError",
    "DatabaseError",
    "ExternalServiceError",
    "ApiResponse",
    "AuthenticatedUser",
    "BaseRepository",
    "DuplicateKeyError",
]
