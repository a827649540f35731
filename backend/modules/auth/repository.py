"""
User repository (credential store).

Encapsulates all SQL for the users table. Uniqueness of local usernames
and of (provider, provider_id) is enforced by the table constraints and
surfaces here as DuplicateKeyError.
"""

from typing import Any, Optional

from psycopg2 import sql

from shared.repository import BaseRepository
from .models import AuthProvider, User

INSERTABLE_COLUMNS = (
    "username",
    "password_hash",
    "nickname",
    "email",
    "phone",
    "location",
    "profile_image",
    "provider",
    "provider_id",
)

UPDATABLE_COLUMNS = ("nickname", "email", "phone", "location", "profile_image")


class UserRepository(BaseRepository[User]):
    """
    Repository for user records.

    All methods return User models (including the password hash).
    Callers are responsible for sanitizing before anything leaves the
    service layer.
    """

    def create(self, data: dict[str, Any]) -> User:
        """
        Insert a new user.

        Args:
            data: Column values; unknown keys are ignored.

        Returns:
            The created User with generated ID and timestamp.

        Raises:
            DuplicateKeyError: If the username or provider identity is taken.
        """
        values = {
            column: self._to_db(data[column])
            for column in INSERTABLE_COLUMNS
            if column in data
        }
        query = sql.SQL("INSERT INTO users ({columns}) VALUES ({values}) RETURNING *").format(
            columns=sql.SQL(", ").join(sql.Identifier(c) for c in values),
            values=sql.SQL(", ").join(sql.Placeholder() for _ in values),
        )
        row = self._fetch_one(query, list(values.values()))
        return self._map_to_user(row)

    def find_by_username(
        self,
        username: str,
        provider: AuthProvider = AuthProvider.LOCAL,
    ) -> Optional[User]:
        row = self._fetch_one(
            "SELECT * FROM users WHERE username = %s AND provider = %s",
            (username, provider.value),
        )
        return self._map_to_user(row) if row else None

    def find_by_provider_id(self, provider: str, provider_id: str) -> Optional[User]:
        row = self._fetch_one(
            "SELECT * FROM users WHERE provider = %s AND provider_id = %s",
            (provider, provider_id),
        )
        return self._map_to_user(row) if row else None

    def find_by_id(self, user_id: int) -> Optional[User]:
        row = self._fetch_one("SELECT * FROM users WHERE id = %s", (user_id,))
        return self._map_to_user(row) if row else None

    def update(self, user_id: int, fields: dict[str, Any]) -> Optional[User]:
        """
        Apply a partial update.

        Only updatable columns with non-None values are written; everything
        else keeps its stored value.

        Returns:
            The updated User, or None if no row has this ID.
        """
        changes = {
            column: fields[column]
            for column in UPDATABLE_COLUMNS
            if fields.get(column) is not None
        }
        if not changes:
            return self.find_by_id(user_id)

        query = sql.SQL("UPDATE users SET {assignments} WHERE id = {id} RETURNING *").format(
            assignments=sql.SQL(", ").join(
                sql.SQL("{} = {}").format(sql.Identifier(c), sql.Placeholder()) for c in changes
            ),
            id=sql.Placeholder(),
        )
        row = self._fetch_one(query, [*changes.values(), user_id])
        return self._map_to_user(row) if row else None

    @staticmethod
    def _to_db(value: Any) -> Any:
        if isinstance(value, AuthProvider):
            return value.value
        return value

    @staticmethod
    def _map_to_user(row: dict[str, Any]) -> User:
        return User(
            id=row["id"],
            username=row.get("username"),
            password_hash=row.get("password_hash"),
            nickname=row["nickname"],
            email=row.get("email"),
            phone=row.get("phone"),
            location=row.get("location"),
            profile_image=row.get("profile_image"),
            provider=row.get("provider") or AuthProvider.LOCAL,
            provider_id=row.get("provider_id"),
            created_at=row.get("created_at"),
        )
