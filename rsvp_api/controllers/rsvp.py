import logging
from typing import List, Optional

from fastapi import APIRouter, Query

from rsvp_api.dependencies import Attendees, Recorder, Stats
from rsvp_api.models.rsvp import Attendee, RsvpRecorded, RsvpRequest, RsvpStats

logger = logging.getLogger("rsvp_api.rsvp")
router = APIRouter()


@router.post("/rsvp", response_model=RsvpRecorded)
async def create_rsvp(req: RsvpRequest, recorder: Recorder) -> RsvpRecorded:
    logger.info("POST /rsvp event_id=%s response=%s", req.event_id, req.response)
    await recorder.record(req.event_id, req.full_name, req.email, req.response)
    return RsvpRecorded()


@router.get("/stats/{event_id}", response_model=RsvpStats)
async def get_stats(event_id: str, reader: Stats) -> RsvpStats:
    return await reader.get_stats(event_id)


@router.get("/attendees/{event_id}", response_model=List[Attendee])
async def list_attendees(
    event_id: str,
    reader: Attendees,
    response: Optional[str] = Query(None, description="Only attendees who answered Yes or No; empty means everyone"),
) -> List[Attendee]:
    return await reader.list_attendees(event_id, response or None)
