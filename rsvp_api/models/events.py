from pydantic import BaseModel


class Event(BaseModel):
    event_id: str
    title: str
    description: str | None = None
    start_at: str | None = None
    venue: str | None = None
    banner_url: str | None = None
    created_at: str | None = None
