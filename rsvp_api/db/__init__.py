from rsvp_api.db.core import close_pool, init_pool
from rsvp_api.db.events import get_event, list_events

__all__ = [
    "close_pool",
    "get_event",
    "init_pool",
    "list_events",
]
