"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
"""

import os
import threading

# Test JWT secret (only for testing). Set before the app reads its settings.
TEST_JWT_SECRET = "test-secret-key-for-testing-only"
os.environ.setdefault("JWT_SECRET", TEST_JWT_SECRET)

import pytest
from datetime import datetime, timezone, timedelta
from typing import Any, Optional
import httpx
import jwt  # PyJWT

from api.app import create_app
from api.dependencies import get_auth_service, get_todo_service, reset_container
from modules.auth.models import AuthProvider, User
from modules.auth.repository import UPDATABLE_COLUMNS
from modules.auth.service import AuthService
from modules.auth.tokens import TokenService
from modules.todos.models import Todo
from modules.todos.service import TodoService
from providers.factory import get_providers
from shared.config import Settings
from shared.repository import DuplicateKeyError


KAKAO_REDIRECT_URI = "http://localhost:8000/api/auth/kakao/callback"


def create_test_token(
    user_id: int = 1,
    username: Optional[str] = "alice",
    nickname: str = "Alice",
    provider: str = "local",
    expired: bool = False,
    secret: str = TEST_JWT_SECRET,
) -> str:
    """
    Create a test JWT token for authentication.

    Args:
        user_id: User ID to put in the sub claim
        username: Username claim
        nickname: Nickname claim
        provider: Provider claim
        expired: If True, creates an expired token
        secret: Signing secret

    Returns:
        JWT token string
    """
    now = datetime.now(timezone.utc)
    exp = now - timedelta(hours=1) if expired else now + timedelta(days=7)

    payload = {
        "sub": str(user_id),
        "username": username,
        "nickname": nickname,
        "provider": provider,
        "exp": int(exp.timestamp()),
        "iat": int((now - timedelta(days=8) if expired else now).timestamp()),
    }
    return jwt.encode(payload, secret, algorithm="HS256")


class InMemoryUserRepository:
    """
    Dict-backed stand-in for UserRepository.

    Enforces the same unique keys as the users table. Services call it
    from worker threads, so inserts are serialized like the real index.
    """

    def __init__(self) -> None:
        self.users: dict[int, User] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def create(self, data: dict[str, Any]) -> User:
        with self._lock:
            return self._insert(data)

    def _insert(self, data: dict[str, Any]) -> User:
        provider = AuthProvider(data.get("provider", AuthProvider.LOCAL))
        username = data.get("username")
        provider_id = data.get("provider_id")

        for existing in self.users.values():
            if username is not None and existing.username == username:
                raise DuplicateKeyError("users_username_key")
            if (
                provider_id is not None
                and existing.provider == provider
                and existing.provider_id == provider_id
            ):
                raise DuplicateKeyError("users_provider_identity_key")

        fields = {k: v for k, v in data.items() if k in User.model_fields}
        fields["provider"] = provider
        user = User(id=self._next_id, created_at=datetime.now(timezone.utc), **fields)
        self.users[user.id] = user
        self._next_id += 1
        return user

    def find_by_username(
        self, username: str, provider: AuthProvider = AuthProvider.LOCAL
    ) -> Optional[User]:
        for user in self.users.values():
            if user.username == username and user.provider == provider:
                return user
        return None

    def find_by_provider_id(self, provider: str, provider_id: str) -> Optional[User]:
        for user in self.users.values():
            if user.provider.value == provider and user.provider_id == provider_id:
                return user
        return None

    def find_by_id(self, user_id: int) -> Optional[User]:
        return self.users.get(user_id)

    def update(self, user_id: int, fields: dict[str, Any]) -> Optional[User]:
        user = self.users.get(user_id)
        if user is None:
            return None
        changes = {c: fields[c] for c in UPDATABLE_COLUMNS if fields.get(c) is not None}
        updated = user.model_copy(update=changes)
        self.users[user_id] = updated
        return updated


class InMemoryTodoRepository:
    """Dict-backed stand-in for TodoRepository with the same owner scoping."""

    def __init__(self) -> None:
        self.todos: dict[int, Todo] = {}
        self._next_id = 1

    def list_for_user(self, user_id: int) -> list[Todo]:
        owned = [t for t in self.todos.values() if t.user_id == user_id]
        return sorted(owned, key=lambda t: t.id, reverse=True)

    def get_by_id(self, todo_id: int) -> Optional[Todo]:
        return self.todos.get(todo_id)

    def create(self, user_id: int, title: str) -> Todo:
        todo = Todo(
            id=self._next_id,
            user_id=user_id,
            title=title,
            created_at=datetime.now(timezone.utc),
        )
        self.todos[todo.id] = todo
        self._next_id += 1
        return todo

    def update(
        self,
        todo_id: int,
        user_id: int,
        title: Optional[str] = None,
        completed: Optional[bool] = None,
    ) -> Optional[Todo]:
        todo = self.todos.get(todo_id)
        if todo is None or todo.user_id != user_id:
            return None
        changes = {k: v for k, v in {"title": title, "completed": completed}.items() if v is not None}
        updated = todo.model_copy(update=changes)
        self.todos[todo_id] = updated
        return updated

    def delete(self, todo_id: int, user_id: int) -> Optional[Todo]:
        todo = self.todos.get(todo_id)
        if todo is None or todo.user_id != user_id:
            return None
        return self.todos.pop(todo_id)


@pytest.fixture(autouse=True)
def reset_service_container():
    """Reset the service container before and after each test."""
    reset_container()
    yield
    reset_container()


@pytest.fixture
def test_settings() -> Settings:
    """Settings with a known secret, cheap bcrypt and Kakao configured."""
    return Settings(
        _env_file=None,
        jwt_secret=TEST_JWT_SECRET,
        bcrypt_rounds=4,
        frontend_url="",
        kakao_client_id="kakao-client-id",
        kakao_client_secret="kakao-client-secret",
        kakao_redirect_uri=KAKAO_REDIRECT_URI,
        google_client_id="",
        google_redirect_uri="",
    )


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def token_service() -> TokenService:
    return TokenService(TEST_JWT_SECRET)


@pytest.fixture
def oauth_transport_handler():
    """
    Replace with a function(request) -> httpx.Response to script the
    identity provider. Defaults to failing every call.
    """
    return lambda request: httpx.Response(500, json={"error": "not scripted"})


@pytest.fixture
def auth_service(
    user_repository: InMemoryUserRepository,
    token_service: TokenService,
    test_settings: Settings,
    oauth_transport_handler,
) -> AuthService:
    """Auth service over the in-memory repository and a mocked HTTP transport."""
    return AuthService(
        repository=user_repository,
        tokens=token_service,
        providers=get_providers(test_settings),
        settings=test_settings,
        http_client_factory=lambda: httpx.AsyncClient(
            transport=httpx.MockTransport(oauth_transport_handler)
        ),
    )


@pytest.fixture
def todo_repository() -> InMemoryTodoRepository:
    return InMemoryTodoRepository()


@pytest.fixture
def todo_service(todo_repository: InMemoryTodoRepository) -> TodoService:
    return TodoService(repository=todo_repository)


@pytest.fixture
def app(auth_service: AuthService, todo_service: TodoService):
    """A fresh app whose services use the in-memory repositories."""
    application = create_app()
    application.dependency_overrides[get_auth_service] = lambda: auth_service
    application.dependency_overrides[get_todo_service] = lambda: todo_service
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def auth_token() -> str:
    """Create a valid auth token for user 1."""
    return create_test_token()


@pytest.fixture
def auth_headers(auth_token: str) -> dict[str, str]:
    """Create authorization headers with a valid token."""
    return {"Authorization": f"Bearer {auth_token}"}
