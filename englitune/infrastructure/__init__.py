"""
Infrastructure package for englitune.

Centralizes database connectivity concerns (DSN, async pool, row store).
Keep this layer focused on I/O and resource management, decoupled from
validation and query-building logic.
"""

from englitune.infrastructure.db_factory import (
    PoolManager,
    PsycopgRowStore,
    build_dsn,
    get_sync_connection,
)

__all__ = [
    "PoolManager",
    "PsycopgRowStore",
    "build_dsn",
    "get_sync_connection",
]
