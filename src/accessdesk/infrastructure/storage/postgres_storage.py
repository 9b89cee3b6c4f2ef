"""PostgreSQL key-value storage on the ``kv_store`` table."""

import logging

import psycopg
from psycopg_pool import ConnectionPool

from accessdesk.domain.exceptions import StorageError

logger = logging.getLogger(__name__)


def create_pool(conninfo: str, min_size: int = 1, max_size: int = 4) -> ConnectionPool:
    """Create connection pool.

    Pool is created with open=False. Caller must call open() on the storage
    (e.g. via RoleStoreLifespanMiddleware) before use.
    """
    return ConnectionPool(
        conninfo=conninfo,
        min_size=min_size,
        max_size=max_size,
        open=False,
    )


class PostgresStorage:
    """Key-value storage backed by one row per key."""

    def __init__(self, pool: ConnectionPool) -> None:
        self._pool = pool

    def open(self) -> None:
        self._pool.open()

    def close(self) -> None:
        self._pool.close()

    def get(self, key: str) -> str | None:
        try:
            with self._pool.connection() as conn:
                row = conn.execute(
                    "SELECT value FROM kv_store WHERE key = %s",
                    (key,),
                ).fetchone()
        except psycopg.Error as e:
            raise StorageError(f"Cannot read key {key!r}: {e}") from e
        return row[0] if row else None

    def set(self, key: str, value: str) -> None:
        try:
            with self._pool.connection() as conn:
                conn.execute(
                    "INSERT INTO kv_store (key, value, updated_at) VALUES (%s, %s, now()) "
                    "ON CONFLICT (key) DO UPDATE SET value = EXCLUDED.value, updated_at = now()",
                    (key, value),
                )
        except psycopg.Error as e:
            raise StorageError(f"Cannot write key {key!r}: {e}") from e
        logger.debug("Upserted key %s (%d bytes)", key, len(value))
