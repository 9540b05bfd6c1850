"""Key layout of the respondent ledger and the counter store.

All items of one event share the partition ``EVENT#<event_id>``; ledger
entries sit under ``RESPONDENT#<email>`` and counters under
``RESPONSE#<Yes|No>``, so one prefix query returns an event's whole roster.
"""

from typing import Final

from rsvp_api.store import ItemKey

EVENT_PREFIX: Final[str] = "EVENT#"
RESPONDENT_PREFIX: Final[str] = "RESPONDENT#"
COUNTER_PREFIX: Final[str] = "RESPONSE#"


def event_partition(event_id: str) -> str:
    return f"{EVENT_PREFIX}{event_id}"


def respondent_key(email: str) -> str:
    # Case-sensitive: A@x.com and a@x.com are different respondents.
    return f"{RESPONDENT_PREFIX}{email}"


def ledger_key(event_id: str, email: str) -> ItemKey:
    return ItemKey(event_partition(event_id), respondent_key(email))


def counter_key(event_id: str, response: str) -> ItemKey:
    return ItemKey(event_partition(event_id), f"{COUNTER_PREFIX}{response}")
