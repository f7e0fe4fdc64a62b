"""
Database connection factory utilities for englitune.

Provides the PostgreSQL async connection pool used by the HTTP app, the
psycopg-backed row store the query executor runs against, and a one-off
synchronous connection for maintenance scripts.

Connection setup retries transient failures using tenacity. Queries issued
through the row store are never retried.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

import psycopg
from psycopg import Connection
from psycopg.rows import dict_row
from psycopg_pool import AsyncConnectionPool
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from englitune.config import Settings, get_settings
from englitune.domain.errors import StoreError
from englitune.utils.logging import get_logger

log = get_logger(__name__)

POOL_OPEN_TIMEOUT_SECONDS = 10.0


def build_dsn(settings: Optional[Settings] = None) -> str:
    """Compose a DSN string from settings."""
    settings = settings or get_settings()
    return (
        f"postgresql://{settings.db_user}:{settings.db_password}"
        f"@{settings.db_host}:{settings.db_port}/{settings.db_name}"
    )


@retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=1, max=10),
    retry=retry_if_exception_type((psycopg.OperationalError, psycopg.InterfaceError)),
    reraise=True,
)
async def _open_async_pool(dsn: str, min_size: int, max_size: int) -> AsyncConnectionPool:
    pool = AsyncConnectionPool(conninfo=dsn, min_size=min_size, max_size=max_size, open=False)
    try:
        await pool.open(wait=True, timeout=POOL_OPEN_TIMEOUT_SECONDS)
    except psycopg.Error:
        await pool.close()
        raise
    return pool


class PoolManager:
    """
    Owns the async connection pool for the lifetime of the HTTP app.

    ``open`` and ``close`` are idempotent; the app lifespan calls them on
    startup and shutdown.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        dsn: Optional[str] = None,
        min_size: Optional[int] = None,
        max_size: Optional[int] = None,
    ) -> None:
        settings = settings or get_settings()
        self._dsn = dsn or build_dsn(settings)
        self.min_size = settings.db_pool_min_size if min_size is None else min_size
        self.max_size = settings.db_pool_max_size if max_size is None else max_size
        self._pool: Optional[AsyncConnectionPool] = None

    @property
    def pool(self) -> AsyncConnectionPool:
        if self._pool is None:
            raise RuntimeError("Connection pool is not open")
        return self._pool

    async def open(self) -> AsyncConnectionPool:
        """
        Open the pool, retrying up to 3 times with exponential backoff.

        Raises
        ------
        psycopg.OperationalError
            If the database stays unreachable after all attempts.
        """
        if self._pool is None:
            self._pool = await _open_async_pool(self._dsn, self.min_size, self.max_size)
            log.info(
                "Connection pool opened",
                extra={"pool_min_size": self.min_size, "pool_max_size": self.max_size},
            )
        return self._pool

    async def close(self) -> None:
        """Close the pool and release its connections."""
        if self._pool is not None:
            pool, self._pool = self._pool, None
            await pool.close()
            log.info("Connection pool closed")

    def row_store(self) -> "PsycopgRowStore":
        return PsycopgRowStore(self.pool)


class PsycopgRowStore:
    """
    Row store backed by a psycopg async pool.

    Each call borrows one connection, runs the query with a ``dict_row``
    cursor and returns all rows. Driver errors surface as ``StoreError``.
    """

    def __init__(self, pool: AsyncConnectionPool) -> None:
        self._pool = pool

    async def fetch_all(self, query: str, params: Sequence[Any]) -> List[Dict[str, Any]]:
        try:
            async with self._pool.connection() as conn:
                async with conn.cursor(row_factory=dict_row) as cur:
                    await cur.execute(query, params)
                    return await cur.fetchall()
        except psycopg.Error as exc:
            raise StoreError("Row store query failed") from exc


@retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=1, max=10),
    retry=retry_if_exception_type((psycopg.OperationalError, psycopg.InterfaceError)),
    reraise=True,
)
def get_sync_connection(dsn: Optional[str] = None) -> Connection:
    """
    Acquire a dedicated synchronous connection with automatic retry.

    Retries up to 3 times with exponential backoff for transient connection errors.
    Used by maintenance scripts (schema setup, corpus loading).

    Returns
    -------
    Connection
        A new psycopg connection instance.

    Raises
    ------
    psycopg.OperationalError
        If connection fails after all retry attempts.
    """
    return psycopg.connect(dsn or build_dsn())


__all__ = [
    "PoolManager",
    "PsycopgRowStore",
    "build_dsn",
    "get_sync_connection",
]
