"""Dependency injection for FastAPI endpoints.

The pooled Redis client lives for the whole application; everything built on
top of it (the keyed store and the RSVP components) is constructed per request
and handed to the endpoint explicitly. Stores share the transaction script the
lifespan registered on that client.

Usage in controllers:
    from rsvp_api.dependencies import Recorder

    @router.post("/rsvp")
    async def create_rsvp(req: RsvpRequest, recorder: Recorder):
        await recorder.record(...)
"""

from typing import Annotated

import redis.asyncio as redis
from fastapi import Depends

from rsvp_api import state
from rsvp_api.config import get_settings
from rsvp_api.errors import ServiceUnavailableError
from rsvp_api.rsvp import AttendeeReader, RsvpRecorder, StatsReader
from rsvp_api.store import KeyedStore, RedisKeyedStore


def get_redis() -> redis.Redis:
    """Get the Redis client.

    Raises:
        ServiceUnavailableError: If Redis is not connected.

    Returns:
        The Redis client instance.
    """
    if state.redis_client is None:
        raise ServiceUnavailableError(detail="Redis not connected")
    return state.redis_client


def get_optional_redis() -> redis.Redis | None:
    """Get the Redis client if available, or None."""
    return state.redis_client


def get_store(client: Annotated[redis.Redis, Depends(get_redis)]) -> KeyedStore:
    """Build the keyed store for one request."""
    settings = get_settings().rsvp
    return RedisKeyedStore(
        client,
        namespace=settings.key_namespace,
        scan_count=settings.scan_count,
        transact_script=state.transact_script,
    )


def get_recorder(store: Annotated[KeyedStore, Depends(get_store)]) -> RsvpRecorder:
    return RsvpRecorder(store)


def get_stats_reader(store: Annotated[KeyedStore, Depends(get_store)]) -> StatsReader:
    return StatsReader(store)


def get_attendee_reader(store: Annotated[KeyedStore, Depends(get_store)]) -> AttendeeReader:
    return AttendeeReader(store)


Redis = Annotated[redis.Redis, Depends(get_redis)]
OptionalRedis = Annotated[redis.Redis | None, Depends(get_optional_redis)]
Store = Annotated[KeyedStore, Depends(get_store)]
Recorder = Annotated[RsvpRecorder, Depends(get_recorder)]
Stats = Annotated[StatsReader, Depends(get_stats_reader)]
Attendees = Annotated[AttendeeReader, Depends(get_attendee_reader)]
