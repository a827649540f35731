"""
Base repository class for database access.

Provides a common abstraction layer for all repositories, encapsulating
pooled connection access and translating driver errors into the
Keystone exception hierarchy.
"""

import logging
from typing import Any, Generic, Optional, Sequence, TypeVar, Union

import psycopg2
from psycopg2 import errors as pg_errors
from psycopg2 import sql
from psycopg2.extras import RealDictCursor

from .database import Database
from .exceptions import ConflictError, DatabaseError

logger = logging.getLogger(__name__)


T = TypeVar("T")
Query = Union[str, sql.Composable]


class DuplicateKeyError(ConflictError):
    """A unique constraint rejected an insert or update."""

    def __init__(self, constraint: Optional[str] = None):
        super().__init__(
            "Duplicate key",
            code="DUPLICATE_KEY",
            details={"constraint": constraint},
        )
        self.constraint = constraint


class BaseRepository(Generic[T]):
    """
    Base class for all repositories.

    Provides common functionality for database operations:
    - Pooled connection access via self._db
    - Row fetch helpers returning plain dicts
    - Driver error translation (unique violations become DuplicateKeyError,
      everything else DatabaseError with the detail logged)

    Subclasses implement domain-specific queries and handle dict-to-Pydantic
    model mapping internally.

    Example:
        class TodoRepository(BaseRepository[Todo]):
            def get_by_id(self, todo_id: int) -> Optional[Todo]:
                row = self._fetch_one("SELECT * FROM todos WHERE id = %s", (todo_id,))
                return self._map_to_todo(row) if row else None
    """

    def __init__(self, db: Database) -> None:
        """
        Initialize the repository with a Database.

        Args:
            db: Database owning the shared connection pool.
        """
        self._db = db

    def _fetch_one(self, query: Query, params: Sequence[Any] = ()) -> Optional[dict[str, Any]]:
        rows = self._run(query, params)
        return rows[0] if rows else None

    def _fetch_all(self, query: Query, params: Sequence[Any] = ()) -> list[dict[str, Any]]:
        return self._run(query, params)

    def _run(self, query: Query, params: Sequence[Any]) -> list[dict[str, Any]]:
        try:
            with self._db.connection() as conn:
                with conn.cursor(cursor_factory=RealDictCursor) as cur:
                    cur.execute(query, params)
                    if cur.description is None:
                        return []
                    return [dict(row) for row in cur.fetchall()]
        except pg_errors.UniqueViolation as e:
            raise DuplicateKeyError(e.diag.constraint_name) from e
        except psycopg2.Error as e:
            logger.error(f"Query failed in {self.__class__.__name__}: {e}")
            raise DatabaseError() from e
