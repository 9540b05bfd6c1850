"""Application startup and shutdown.

Owns the Redis connection pool and the optional event catalog pool. Request
handlers never touch these directly; they receive stores built per request
through rsvp_api.dependencies.
"""

import logging
from dataclasses import dataclass

import redis.asyncio as redis
from redis.asyncio import BlockingConnectionPool as RedisConnectionPool
from redis.commands.core import AsyncScript

from rsvp_api import db, state
from rsvp_api.config import get_settings
from rsvp_api.store import register_transact_script

logger = logging.getLogger(__name__)


@dataclass
class LifespanResources:
    """Container for resources initialized during lifespan."""

    redis_client: redis.Redis | None = None
    transact_script: AsyncScript | None = None
    db_enabled: bool = False


async def init_redis() -> redis.Redis:
    """Initialize Redis connection with connection pool.

    Returns:
        Configured Redis client.
    """
    settings = get_settings()

    redis_pool = RedisConnectionPool(
        host=settings.redis.host,
        port=settings.redis.port,
        password=settings.redis.password if settings.redis.password else None,
        max_connections=settings.redis.max_connections,
        timeout=settings.redis.pool_timeout_sec,
        health_check_interval=settings.redis.health_check_interval,
        socket_timeout=settings.redis.socket_timeout,
        socket_connect_timeout=settings.redis.socket_connect_timeout,
        decode_responses=True,
    )

    candidate_client = redis.Redis(connection_pool=redis_pool, decode_responses=True)
    if hasattr(candidate_client, "__await__"):
        redis_client = await candidate_client
    else:
        redis_client = candidate_client
    logger.info("Redis client ready host=%s port=%d", settings.redis.host, settings.redis.port)
    return redis_client


async def init_database() -> bool:
    """Open the event catalog pool.

    Returns:
        True if the pool was opened. When it cannot be opened, catalog queries
        fall back to one connection per call.
    """
    if not get_settings().features.events_db:
        return False
    try:
        await db.init_pool()
        return True
    except Exception as e:
        logger.warning("Failed to initialize event catalog pool: %s", e)
    return False


async def setup_resources(enable_db: bool = True) -> LifespanResources:
    """Set up all shared resources.

    Args:
        enable_db: Whether to open the event catalog pool.

    Returns:
        LifespanResources containing all initialized resources.
    """
    resources = LifespanResources()
    resources.redis_client = await init_redis()
    resources.transact_script = register_transact_script(resources.redis_client)
    if enable_db:
        resources.db_enabled = await init_database()

    state.redis_client = resources.redis_client
    state.transact_script = resources.transact_script
    return resources


async def cleanup_resources(resources: LifespanResources) -> None:
    """Clean up all resources on shutdown.

    Args:
        resources: The resources to clean up.
    """
    if resources.db_enabled:
        try:
            await db.close_pool()
        except Exception as e:
            logger.warning("Failed to close event catalog pool: %s", e)

    if resources.redis_client:
        aclose = getattr(resources.redis_client, "aclose", None)
        if callable(aclose):
            await aclose()
        else:
            close = getattr(resources.redis_client, "close", None)
            if callable(close):
                await close()

    state.redis_client = None
    state.transact_script = None
