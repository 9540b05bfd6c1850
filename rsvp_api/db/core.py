"""Core database connection pool management for the event catalog."""

import logging
from contextlib import asynccontextmanager

import psycopg
from psycopg_pool import AsyncConnectionPool

from rsvp_api.config import get_settings

_logger = logging.getLogger(__name__)

# Global connection pool, owned by the application lifespan
_pool: AsyncConnectionPool | None = None


def _get_dsn() -> str:
    """Get DSN from settings."""
    return get_settings().postgres.get_dsn()


async def init_pool() -> None:
    global _pool
    if _pool is not None:
        return
    settings = get_settings().postgres
    pool = AsyncConnectionPool(
        _get_dsn(),
        min_size=settings.pool_min_size,
        max_size=settings.pool_max_size,
        timeout=settings.pool_timeout,
        max_idle=settings.pool_max_idle,
        check=AsyncConnectionPool.check_connection,
        open=False,
    )
    await pool.open()
    _pool = pool
    _logger.info(
        "Database connection pool initialized (min=%d, max=%d, timeout=%ss)",
        settings.pool_min_size,
        settings.pool_max_size,
        settings.pool_timeout,
    )


async def close_pool() -> None:
    global _pool
    if _pool is not None:
        await _pool.close()
        _pool = None
        _logger.info("Database connection pool closed")


@asynccontextmanager
async def _get_connection():
    """Connection scoped to one call; returned to the pool (or closed) on every exit path."""
    if _pool is not None:
        async with _pool.connection() as conn:
            yield conn
    else:
        async with await psycopg.AsyncConnection.connect(_get_dsn(), autocommit=True) as conn:
            yield conn


__all__ = [
    "_get_connection",
    "_get_dsn",
    "close_pool",
    "init_pool",
]
