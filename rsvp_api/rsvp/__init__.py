from rsvp_api.rsvp.readers import AttendeeReader, StatsReader
from rsvp_api.rsvp.recorder import RsvpRecorder, validate_rsvp

__all__ = ["AttendeeReader", "RsvpRecorder", "StatsReader", "validate_rsvp"]
