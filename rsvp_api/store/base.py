"""Keyed store abstraction for co-located partition/sort-key items.

Items are addressed by an ``ItemKey`` (partition, sort). Every item of a
partition can be read back with a single prefix query, and several items can
be written in one conditional transaction that either applies completely or
not at all.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Protocol, Sequence, Union

MAX_TRANSACT_ITEMS = 25


@dataclass(frozen=True)
class ItemKey:
    partition: str
    sort: str


@dataclass(frozen=True)
class PutIfAbsent:
    """Insert ``item`` at ``key``; the whole transaction fails if the key exists."""

    key: ItemKey
    item: Mapping[str, Any]


@dataclass(frozen=True)
class Increment:
    """Add ``amount`` to the counter at ``key``, starting from zero when absent."""

    key: ItemKey
    amount: int = 1


Operation = Union[PutIfAbsent, Increment]


class TransactStatus(str, Enum):
    OK = "ok"
    PRECONDITION_FAILED = "precondition_failed"
    FAILED = "failed"


@dataclass(frozen=True)
class TransactResult:
    """Outcome of ``KeyedStore.transact``.

    ``failed_index`` points at the operation whose precondition did not hold;
    ``cause`` carries the underlying exception of a ``FAILED`` transaction.
    """

    status: TransactStatus
    failed_index: int | None = None
    cause: BaseException | None = field(default=None, compare=False)

    @property
    def ok(self) -> bool:
        return self.status is TransactStatus.OK

    @classmethod
    def success(cls) -> "TransactResult":
        return cls(TransactStatus.OK)

    @classmethod
    def precondition_failed(cls, index: int) -> "TransactResult":
        return cls(TransactStatus.PRECONDITION_FAILED, failed_index=index)

    @classmethod
    def failed(cls, cause: BaseException) -> "TransactResult":
        return cls(TransactStatus.FAILED, cause=cause)


class KeyedStore(Protocol):
    """Storage substrate for the RSVP ledger and counters.

    Reads raise ``rsvp_api.errors.StoreError`` on infrastructure failure;
    ``transact`` reports every outcome through ``TransactResult`` instead.
    """

    async def get(self, key: ItemKey) -> Any | None:
        ...

    async def batch_get(self, keys: Sequence[ItemKey]) -> dict[ItemKey, Any]:
        """Fetch several items at once. Absent keys are left out of the result."""
        ...

    async def query(
        self,
        partition: str,
        prefix: str,
        where: Mapping[str, Any] | None = None,
    ) -> list[Any]:
        """Return items of ``partition`` whose sort key starts with ``prefix``.

        ``where`` restricts the result to items whose attributes equal the
        given values. No ordering is guaranteed.
        """
        ...

    async def transact(self, operations: Sequence[Operation]) -> TransactResult:
        ...


def validate_operations(operations: Sequence[Operation]) -> None:
    if not operations:
        raise ValueError("transaction needs at least one operation")
    if len(operations) > MAX_TRANSACT_ITEMS:
        raise ValueError(f"transaction exceeds {MAX_TRANSACT_ITEMS} operations")
    seen: set[ItemKey] = set()
    for op in operations:
        if op.key in seen:
            raise ValueError(f"duplicate key in transaction: {op.key}")
        seen.add(op.key)
