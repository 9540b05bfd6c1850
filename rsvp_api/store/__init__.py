from rsvp_api.store.base import (
    MAX_TRANSACT_ITEMS,
    Increment,
    ItemKey,
    KeyedStore,
    Operation,
    PutIfAbsent,
    TransactResult,
    TransactStatus,
)
from rsvp_api.store.redis_store import RedisKeyedStore, register_transact_script

__all__ = [
    "MAX_TRANSACT_ITEMS",
    "Increment",
    "ItemKey",
    "KeyedStore",
    "Operation",
    "PutIfAbsent",
    "RedisKeyedStore",
    "TransactResult",
    "TransactStatus",
    "register_transact_script",
]
