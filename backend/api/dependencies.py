"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations.

The database pool is the only shared mutable resource; it is created
lazily by shared.database and handed to every repository from here.
"""

from typing import TYPE_CHECKING

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from modules.auth.interfaces import IAuthService
    from modules.auth.repository import UserRepository
    from modules.auth.tokens import TokenService
    from modules.todos.interfaces import ITodoService
    from modules.todos.repository import TodoRepository
    from providers.base import OAuthProvider
    from shared.database import Database


class ServiceContainer:
    """
    Container for all service instances.

    This class manages the lifecycle of service instances and their
    dependencies. Services are created lazily on first access.

    All services are cached as singletons within the container.
    Use reset() to clear all cached services for testing.
    """

    def __init__(self) -> None:
        self._database: "Database | None" = None
        self._token_service: "TokenService | None" = None
        self._oauth_providers: "dict[str, OAuthProvider] | None" = None
        self._user_repository: "UserRepository | None" = None
        self._auth_service: "IAuthService | None" = None
        self._todo_repository: "TodoRepository | None" = None
        self._todo_service: "ITodoService | None" = None

    @property
    def database(self) -> "Database":
        """Get the shared database (pool is opened on first query)."""
        if self._database is None:
            from shared.database import get_database
            self._database = get_database()
        return self._database

    @property
    def tokens(self) -> "TokenService":
        """Get the token issuer/verifier."""
        if self._token_service is None:
            from modules.auth.tokens import TokenService
            from shared.config import get_settings
            settings = get_settings()
            self._token_service = TokenService(
                settings.jwt_secret,
                algorithm=settings.jwt_algorithm,
                expires_days=settings.jwt_expires_days,
            )
        return self._token_service

    @property
    def oauth_providers(self) -> "dict[str, OAuthProvider]":
        """Get the configured OAuth identity providers."""
        if self._oauth_providers is None:
            from providers.factory import get_providers
            self._oauth_providers = get_providers()
        return self._oauth_providers

    @property
    def user_repository(self) -> "UserRepository":
        """Get the user repository instance."""
        if self._user_repository is None:
            from modules.auth.repository import UserRepository
            self._user_repository = UserRepository(self.database)
        return self._user_repository

    @property
    def auth(self) -> "IAuthService":
        """Get the auth service instance."""
        if self._auth_service is None:
            from modules.auth.service import AuthService
            self._auth_service = AuthService(
                repository=self.user_repository,
                tokens=self.tokens,
                providers=self.oauth_providers,
            )
        return self._auth_service

    @property
    def todo_repository(self) -> "TodoRepository":
        """Get the todo repository instance."""
        if self._todo_repository is None:
            from modules.todos.repository import TodoRepository
            self._todo_repository = TodoRepository(self.database)
        return self._todo_repository

    @property
    def todos(self) -> "ITodoService":
        """Get the todo service instance."""
        if self._todo_service is None:
            from modules.todos.service import TodoService
            self._todo_service = TodoService(repository=self.todo_repository)
        return self._todo_service

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        self._database = None
        self._token_service = None
        self._oauth_providers = None
        self._user_repository = None
        self._auth_service = None
        self._todo_repository = None
        self._todo_service = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    This clears the cached container, so the next call to get_container()
    will create a fresh container with new service instances.

    Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_auth_service() -> "IAuthService":
    """FastAPI dependency for auth service."""
    return get_container().auth


def get_todo_service() -> "ITodoService":
    """FastAPI dependency for todo service."""
    return get_container().todos


def get_database() -> "Database":
    """FastAPI dependency for the shared database."""
    return get_container().database
