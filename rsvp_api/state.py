from typing import Optional
import redis.asyncio as redis
from redis.commands.core import AsyncScript

# Pooled Redis client owned by the application lifespan (rsvp_api.lifespan)
redis_client: Optional[redis.Redis] = None

# Transaction script registered once on redis_client and shared by every store
transact_script: Optional[AsyncScript] = None
