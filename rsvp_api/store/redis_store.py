"""Redis implementation of the keyed store.

Each partition is one Redis hash named ``<namespace><partition>``; sort keys
are hash fields and values are JSON. Counters are stored as bare integers so
HINCRBY can update them in place while they still decode as JSON.

Transactions run as a single Lua script: every precondition is checked before
the first write, and Redis executes scripts atomically, so a rejected
transaction leaves no trace.
"""

import json
import logging
import re
from collections import defaultdict
from typing import Any, Mapping, Sequence

import redis.asyncio as redis
from redis.exceptions import RedisError

from rsvp_api.errors import StoreError
from rsvp_api.store.base import (
    Increment,
    ItemKey,
    Operation,
    PutIfAbsent,
    TransactResult,
    validate_operations,
)

logger = logging.getLogger("rsvp_api.store")

OP_PUT_IF_ABSENT = "put_if_absent"
OP_INCREMENT = "increment"

# KEYS[i] is the partition hash of operation i; ARGV holds (op, field, value) triples.
# Returns 0 on success, i when the precondition of operation i fails and -i when
# the counter targeted by operation i does not hold an integer.
_TRANSACT_LUA = """
local n = #KEYS
for i = 1, n do
  local op = ARGV[3 * i - 2]
  local current = redis.call('HGET', KEYS[i], ARGV[3 * i - 1])
  if op == 'put_if_absent' then
    if current then
      return i
    end
  elseif op == 'increment' then
    if current and not string.match(current, '^%-?%d+$') then
      return -i
    end
  end
end
for i = 1, n do
  local op = ARGV[3 * i - 2]
  if op == 'put_if_absent' then
    redis.call('HSET', KEYS[i], ARGV[3 * i - 1], ARGV[3 * i])
  else
    redis.call('HINCRBY', KEYS[i], ARGV[3 * i - 1], ARGV[3 * i])
  end
end
return 0
"""

_GLOB_SPECIAL = re.compile(r"([*?\[\]\\])")


def _decode(raw: str | bytes | None) -> Any | None:
    if raw is None:
        return None
    return json.loads(raw)


def register_transact_script(client: redis.Redis):
    """Register the transaction script once; every store on ``client`` can share the result."""
    return client.register_script(_TRANSACT_LUA)


class RedisKeyedStore:
    """Keyed store backed by one Redis hash per partition."""

    def __init__(
        self,
        client: redis.Redis,
        namespace: str = "rsvp:",
        scan_count: int = 500,
        transact_script=None,
    ):
        self._client = client
        self._namespace = namespace
        self._scan_count = scan_count
        if transact_script is None:
            transact_script = register_transact_script(client)
        self._transact_script = transact_script

    def hash_name(self, partition: str) -> str:
        return f"{self._namespace}{partition}"

    async def get(self, key: ItemKey) -> Any | None:
        try:
            raw = await self._client.hget(self.hash_name(key.partition), key.sort)
            return _decode(raw)
        except (RedisError, ValueError) as e:
            logger.warning("store.get failed partition=%s err=%r", key.partition, e)
            raise StoreError() from e

    async def batch_get(self, keys: Sequence[ItemKey]) -> dict[ItemKey, Any]:
        by_partition: dict[str, list[ItemKey]] = defaultdict(list)
        for key in keys:
            if key not in by_partition[key.partition]:
                by_partition[key.partition].append(key)
        if not by_partition:
            return {}
        try:
            async with self._client.pipeline(transaction=False) as pipe:
                for partition, part_keys in by_partition.items():
                    pipe.hmget(self.hash_name(partition), [k.sort for k in part_keys])
                replies = await pipe.execute()
            found: dict[ItemKey, Any] = {}
            for part_keys, values in zip(by_partition.values(), replies):
                for key, raw in zip(part_keys, values):
                    if raw is not None:
                        found[key] = _decode(raw)
            return found
        except (RedisError, ValueError) as e:
            logger.warning("store.batch_get failed keys=%d err=%r", len(keys), e)
            raise StoreError() from e

    async def query(
        self,
        partition: str,
        prefix: str,
        where: Mapping[str, Any] | None = None,
    ) -> list[Any]:
        match = _GLOB_SPECIAL.sub(r"\\\1", prefix) + "*"
        # HSCAN may return a field more than once while the hash is rehashed.
        items: dict[str, Any] = {}
        try:
            async for field_name, raw in self._client.hscan_iter(
                self.hash_name(partition), match=match, count=self._scan_count
            ):
                if isinstance(field_name, bytes):
                    field_name = field_name.decode()
                if not field_name.startswith(prefix) or field_name in items:
                    continue
                item = _decode(raw)
                if where and not _matches(item, where):
                    continue
                items[field_name] = item
        except (RedisError, ValueError) as e:
            logger.warning("store.query failed partition=%s err=%r", partition, e)
            raise StoreError() from e
        return list(items.values())

    async def transact(self, operations: Sequence[Operation]) -> TransactResult:
        validate_operations(operations)
        keys: list[str] = []
        args: list[str] = []
        for op in operations:
            keys.append(self.hash_name(op.key.partition))
            if isinstance(op, PutIfAbsent):
                args.extend([OP_PUT_IF_ABSENT, op.key.sort, json.dumps(dict(op.item), separators=(",", ":"))])
            elif isinstance(op, Increment):
                args.extend([OP_INCREMENT, op.key.sort, str(int(op.amount))])
            else:
                raise TypeError(f"unsupported operation: {op!r}")
        try:
            code = int(await self._transact_script(keys=keys, args=args))
        except RedisError as e:
            logger.warning("store.transact failed ops=%d err=%r", len(operations), e)
            return TransactResult.failed(e)
        if code == 0:
            return TransactResult.success()
        if code > 0:
            return TransactResult.precondition_failed(code - 1)
        return TransactResult.failed(
            ValueError(f"counter at {operations[-code - 1].key} does not hold an integer")
        )


def _matches(item: Any, where: Mapping[str, Any]) -> bool:
    if not isinstance(item, dict):
        return False
    return all(item.get(name) == value for name, value in where.items())
