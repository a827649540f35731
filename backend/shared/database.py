"""
PostgreSQL connection pool and schema lifecycle.

A single Database instance owns the process-wide psycopg2 pool. The pool
and the table initialization are both created lazily on first use and
guarded by a lock, so concurrent first requests cannot initialize twice.
Services receive the Database through the service container.
"""

import logging
import threading
from contextlib import contextmanager
from typing import Iterator, Optional, Sequence

import psycopg2
from psycopg2.extensions import connection as PGConnection
from psycopg2.pool import ThreadedConnectionPool

from .config import get_settings
from .exceptions import ConfigurationError, DatabaseError
from .schema import SCHEMA_STATEMENTS

logger = logging.getLogger(__name__)


class Database:
    """
    Lazily-initialized connection pool with one-time schema setup.

    Example:
        db = Database("postgresql://localhost/keystone")
        with db.connection() as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT 1")
    """

    def __init__(
        self,
        dsn: str,
        min_connections: int = 1,
        max_connections: int = 10,
        schema: Sequence[str] = SCHEMA_STATEMENTS,
        auto_init: bool = True,
    ) -> None:
        self._dsn = dsn
        self._min_connections = min_connections
        self._max_connections = max_connections
        self._schema = tuple(schema)
        self._auto_init = auto_init

        self._pool: Optional[ThreadedConnectionPool] = None
        self._schema_ready = False
        self._lock = threading.Lock()

    @property
    def pool(self) -> ThreadedConnectionPool:
        """Get the connection pool, creating it on first access."""
        if self._pool is None:
            with self._lock:
                if self._pool is None:
                    if not self._dsn:
                        raise ConfigurationError(
                            "Database configuration missing. Set the DATABASE_URL environment variable.",
                            code="DATABASE_NOT_CONFIGURED",
                        )
                    try:
                        self._pool = ThreadedConnectionPool(
                            self._min_connections,
                            self._max_connections,
                            self._dsn,
                        )
                    except psycopg2.Error as e:
                        logger.error(f"Failed to create database pool: {e}")
                        raise DatabaseError("Database unavailable") from e
        return self._pool

    @property
    def schema_ready(self) -> bool:
        return self._schema_ready

    def ensure_schema(self) -> None:
        """Create the tables once per process."""
        if self._schema_ready:
            return
        pool = self.pool
        with self._lock:
            if self._schema_ready:
                return
            conn = pool.getconn()
            try:
                with conn.cursor() as cur:
                    for statement in self._schema:
                        cur.execute(statement)
                conn.commit()
            except psycopg2.Error as e:
                conn.rollback()
                logger.error(f"Database initialization failed: {e}")
                raise DatabaseError("Database initialization failed") from e
            finally:
                pool.putconn(conn)
            self._schema_ready = True
            logger.info("Database tables ready")

    @contextmanager
    def connection(self) -> Iterator[PGConnection]:
        """
        Borrow a connection from the pool for one unit of work.

        Commits when the block exits normally and rolls back otherwise.
        The connection is always returned to the pool.
        """
        if self._auto_init:
            self.ensure_schema()
        pool = self.pool
        conn = pool.getconn()
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            pool.putconn(conn)

    def ping(self) -> bool:
        """Return True if a trivial query succeeds."""
        try:
            with self.connection() as conn:
                with conn.cursor() as cur:
                    cur.execute("SELECT 1")
            return True
        except (psycopg2.Error, DatabaseError, ConfigurationError) as e:
            logger.warning(f"Database ping failed: {e}")
            return False

    def close(self) -> None:
        """Close every pooled connection."""
        with self._lock:
            if self._pool is not None:
                self._pool.closeall()
                self._pool = None
            self._schema_ready = False


# Module-level database cache
_database: Optional[Database] = None
_database_lock = threading.Lock()


def get_database() -> Database:
    """Get the process-wide Database, built from settings on first call."""
    global _database

    if _database is None:
        with _database_lock:
            if _database is None:
                settings = get_settings()
                _database = Database(
                    settings.database_url,
                    min_connections=settings.database_pool_min,
                    max_connections=settings.database_pool_max,
                    auto_init=settings.database_auto_init,
                )
    return _database


def reset_database() -> None:
    """
    Close and forget the cached Database.

    Useful for testing or when configuration changes.
    """
    global _database
    with _database_lock:
        if _database is not None:
            _database.close()
        _database = None
