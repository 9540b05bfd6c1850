import logging
from typing import List

import psycopg
from fastapi import APIRouter

from rsvp_api import db
from rsvp_api.errors import DatabaseError, NotFoundError
from rsvp_api.models.events import Event

logger = logging.getLogger("rsvp_api.events")
router = APIRouter()


@router.get("/events", response_model=List[Event])
async def list_events() -> List[Event]:
    try:
        events = await db.list_events()
    except psycopg.Error as e:
        raise DatabaseError() from e
    logger.info("GET /events count=%d", len(events))
    return [Event(**row) for row in events]


@router.get("/event/{event_id}", response_model=Event)
async def get_event(event_id: str) -> Event:
    try:
        event = await db.get_event(event_id)
    except psycopg.Error as e:
        raise DatabaseError() from e
    if not event:
        logger.warning("Event not found: %s", event_id)
        raise NotFoundError(detail="Event not found")
    return Event(**event)
