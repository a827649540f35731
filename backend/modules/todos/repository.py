"""
Todo repository for database access.

Note: This repository does NOT decide authorization. Writes are scoped
by owner in SQL, but the service layer is responsible for telling
"missing" apart from "someone else's".
"""

from typing import Any, Optional

from shared.repository import BaseRepository
from .models import Todo


class TodoRepository(BaseRepository[Todo]):
    """Repository for todo data access."""

    def list_for_user(self, user_id: int) -> list[Todo]:
        rows = self._fetch_all(
            "SELECT * FROM todos WHERE user_id = %s ORDER BY created_at DESC, id DESC",
            (user_id,),
        )
        return [self._map_to_todo(row) for row in rows]

    def get_by_id(self, todo_id: int) -> Optional[Todo]:
        row = self._fetch_one("SELECT * FROM todos WHERE id = %s", (todo_id,))
        return self._map_to_todo(row) if row else None

    def create(self, user_id: int, title: str) -> Todo:
        row = self._fetch_one(
            "INSERT INTO todos (user_id, title) VALUES (%s, %s) RETURNING *",
            (user_id, title),
        )
        return self._map_to_todo(row)

    def update(
        self,
        todo_id: int,
        user_id: int,
        title: Optional[str] = None,
        completed: Optional[bool] = None,
    ) -> Optional[Todo]:
        """
        Apply a partial update to an owned todo.

        Returns:
            The updated Todo, or None if no row matched both IDs.
        """
        row = self._fetch_one(
            """
            UPDATE todos SET
                title = COALESCE(%s, title),
                completed = COALESCE(%s, completed)
            WHERE id = %s AND user_id = %s
            RETURNING *
            """,
            (title, completed, todo_id, user_id),
        )
        return self._map_to_todo(row) if row else None

    def delete(self, todo_id: int, user_id: int) -> Optional[Todo]:
        row = self._fetch_one(
            "DELETE FROM todos WHERE id = %s AND user_id = %s RETURNING *",
            (todo_id, user_id),
        )
        return self._map_to_todo(row) if row else None

    @staticmethod
    def _map_to_todo(row: dict[str, Any]) -> Todo:
        return Todo(
            id=row["id"],
            user_id=row["user_id"],
            title=row["title"],
            completed=row.get("completed", False),
            created_at=row.get("created_at"),
        )
