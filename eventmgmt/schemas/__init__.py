"""
Pydantic schemas for payload validation and responses
"""

from eventmgmt.schemas.base import validate_payload, PHONE_PATTERN
from eventmgmt.schemas.venue import VenueCreate, VenueUpdate, VenueResponse
from eventmgmt.schemas.organizer import OrganizerCreate, OrganizerUpdate, OrganizerResponse
from eventmgmt.schemas.event import (
    EventCreate,
    EventUpdate,
    EventStatusChange,
    EventResponse,
    EventAvailability
)
from eventmgmt.schemas.registration import RegistrationCreate, RegistrationResponse

__all__ = [
    "validate_payload",
    "PHONE_PATTERN",
    "VenueCreate",
    "VenueUpdate",
    "VenueResponse",
    "OrganizerCreate",
    "OrganizerUpdate",
    "OrganizerResponse",
    "EventCreate",
    "EventUpdate",
    "EventStatusChange",
    "EventResponse",
    "EventAvailability",
    "RegistrationCreate",
    "RegistrationResponse"
]
