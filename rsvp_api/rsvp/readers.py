import logging

from rsvp_api.errors import BadRequestError
from rsvp_api.models.rsvp import RESPONSES, Attendee, RsvpStats, attendee_from_item
from rsvp_api.rsvp.keys import RESPONDENT_PREFIX, counter_key, event_partition
from rsvp_api.store import KeyedStore

logger = logging.getLogger("rsvp_api.rsvp.readers")


class StatsReader:
    def __init__(self, store: KeyedStore):
        self._store = store

    async def get_stats(self, event_id: str) -> RsvpStats:
        """Both counters in one batched lookup; counters never written read as zero."""
        keys = {response: counter_key(event_id, response) for response in RESPONSES}
        found = await self._store.batch_get(list(keys.values()))
        counts = {response: int(found.get(key) or 0) for response, key in keys.items()}
        logger.debug("Stats event_id=%s counts=%s", event_id, counts)
        return RsvpStats(**counts)


class AttendeeReader:
    def __init__(self, store: KeyedStore):
        self._store = store

    async def list_attendees(self, event_id: str, response: str | None = None) -> list[Attendee]:
        """Ledger entries of an event, optionally only those with ``response``.

        An empty ``response`` means no filter. The result has no defined order.
        """
        if response and response not in RESPONSES:
            raise BadRequestError(detail=f"Invalid response filter. Expected one of: {', '.join(RESPONSES)}")
        where = {"response": response} if response else None
        items = await self._store.query(event_partition(event_id), RESPONDENT_PREFIX, where=where)
        logger.debug("Attendees event_id=%s filter=%s count=%d", event_id, response, len(items))
        return [attendee_from_item(item) for item in items]
