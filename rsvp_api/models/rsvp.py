"""Pydantic models for the RSVP ledger, counters and their HTTP payloads."""

from datetime import UTC, datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

Response = Literal["Yes", "No"]
RESPONSES: tuple[str, ...] = ("Yes", "No")


class RsvpRequest(BaseModel):
    """Body of ``POST /rsvp``. Unknown fields and non-string values are rejected."""

    model_config = ConfigDict(extra="forbid", strict=True)

    event_id: str = Field(min_length=1)
    full_name: str = Field(min_length=1)
    email: str = Field(min_length=1)
    response: Response


class RsvpRecorded(BaseModel):
    message: str = "RSVP recorded!"


class RsvpStats(BaseModel):
    """Running Yes/No totals for one event."""

    Yes: int = 0
    No: int = 0


class Attendee(BaseModel):
    full_name: str
    email: str
    response: str
    timestamp: int


class RespondentEntry(BaseModel):
    """One ledger row: a respondent's single RSVP for an event."""

    event_id: str
    respondent_key: str
    full_name: str
    email: str
    response: Response
    recorded_at: datetime

    @property
    def timestamp_ms(self) -> int:
        return int(self.recorded_at.timestamp() * 1000)

    def to_item(self) -> dict[str, Any]:
        """Attributes stored in the ledger. Keys are implied by the item's position."""
        return {
            "full_name": self.full_name,
            "email": self.email,
            "response": self.response,
            "timestamp": self.timestamp_ms,
        }


def attendee_from_item(item: dict[str, Any]) -> Attendee:
    return Attendee(
        full_name=item.get("full_name", ""),
        email=item.get("email", ""),
        response=item.get("response", ""),
        timestamp=int(item.get("timestamp") or 0),
    )


def utc_now() -> datetime:
    return datetime.now(UTC)
