import logging
from datetime import datetime
from typing import Callable

from rsvp_api.errors import DuplicateRsvpError, RsvpValidationError, StoreError
from rsvp_api.models.rsvp import RESPONSES, RespondentEntry, utc_now
from rsvp_api.rsvp.keys import counter_key, ledger_key, respondent_key
from rsvp_api.store import Increment, KeyedStore, PutIfAbsent, TransactStatus

logger = logging.getLogger("rsvp_api.rsvp.recorder")


def validate_rsvp(event_id, full_name, email, response) -> None:
    """Reject missing, empty or non-string fields and unknown responses."""
    fields = {"event_id": event_id, "full_name": full_name, "email": email, "response": response}
    missing = [name for name, value in fields.items() if not isinstance(value, str) or not value]
    if missing:
        raise RsvpValidationError(fields=missing)
    if response not in RESPONSES:
        raise RsvpValidationError(
            detail=f"Invalid response. Expected one of: {', '.join(RESPONSES)}",
            fields=["response"],
        )


class RsvpRecorder:
    """Records one RSVP per (event, email) and bumps the matching counter.

    Both writes go to the store as a single conditional transaction: the
    ledger insert only succeeds when no entry exists for the respondent, and
    when it fails the counter increment is discarded with it. Concurrent
    submissions for the same respondent are therefore resolved by the store,
    with exactly one of them succeeding.
    """

    def __init__(self, store: KeyedStore, clock: Callable[[], datetime] = utc_now):
        self._store = store
        self._clock = clock

    async def record(self, event_id: str, full_name: str, email: str, response: str) -> RespondentEntry:
        validate_rsvp(event_id, full_name, email, response)
        entry = RespondentEntry(
            event_id=event_id,
            respondent_key=respondent_key(email),
            full_name=full_name,
            email=email,
            response=response,
            recorded_at=self._clock(),
        )
        result = await self._store.transact([
            PutIfAbsent(ledger_key(event_id, email), entry.to_item()),
            Increment(counter_key(event_id, response), 1),
        ])
        if result.status is TransactStatus.PRECONDITION_FAILED:
            logger.info("Duplicate RSVP rejected event_id=%s", event_id)
            raise DuplicateRsvpError()
        if not result.ok:
            raise StoreError() from result.cause
        logger.info("Recorded RSVP event_id=%s response=%s", event_id, response)
        return entry
