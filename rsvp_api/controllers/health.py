from fastapi import APIRouter
from typing import Dict
from redis.exceptions import RedisError

from rsvp_api.dependencies import OptionalRedis

router = APIRouter()


@router.get("/health")
async def health(client: OptionalRedis) -> Dict[str, str]:
    redis_status = "disconnected"
    if client:
        try:
            await client.ping()
            redis_status = "healthy"
        except RedisError:
            redis_status = "unhealthy"

    return {"status": "ok", "redis": redis_status}
