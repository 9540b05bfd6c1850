"""Read-only queries against the relational event catalog."""

from datetime import UTC, datetime
from typing import Any

from rsvp_api.db.core import _get_connection

_EVENT_COLUMNS = "event_id, title, description, start_at, venue, banner_url, created_at"


def _iso(value: datetime | None) -> str | None:
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).isoformat()


def _row_to_event(row: tuple) -> dict[str, Any]:
    return {
        "event_id": str(row[0]),
        "title": row[1],
        "description": row[2],
        "start_at": _iso(row[3]),
        "venue": row[4],
        "banner_url": row[5],
        "created_at": _iso(row[6]),
    }


async def get_event(event_id: str) -> dict[str, Any] | None:
    async with _get_connection() as conn:
        rows = await conn.execute(
            f"SELECT {_EVENT_COLUMNS} FROM events WHERE event_id = %s",
            (event_id,),
        )
        row = await rows.fetchone()
        if not row:
            return None
        return _row_to_event(row)


async def list_events() -> list[dict[str, Any]]:
    async with _get_connection() as conn:
        rows = await conn.execute(
            f"SELECT {_EVENT_COLUMNS} FROM events ORDER BY start_at ASC"
        )
        out: list[dict[str, Any]] = []
        async for row in rows:
            out.append(_row_to_event(row))
        return out
