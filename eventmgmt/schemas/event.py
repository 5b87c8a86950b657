"""
Event schemas
"""

from datetime import datetime
from decimal import Decimal
from typing import Annotated, Optional

from pydantic import Field

from eventmgmt.models.event import EventStatus, EventType
from eventmgmt.schemas.base import (
    BaseSchema, CreateSchema, IDSchema, TimestampSchema,
    after_field, at_least, at_most, defaulted, in_future, length_between, naive_utc, required,
)

END_BEFORE_START_MESSAGE = "End date and time must be after start date and time"


class EventFields(BaseSchema):
    name: Annotated[
        Optional[str],
        required("Event name is required"),
        length_between(2, 150, "Event name must be between 2 and 150 characters"),
    ] = None
    description: Annotated[Optional[str], at_most(2000, "Description")] = None
    starts_at: Annotated[
        Optional[datetime],
        required("Start date and time is required"),
        naive_utc(),
        in_future("Start date must be in the future"),
    ] = None
    ends_at: Annotated[
        Optional[datetime],
        required("End date and time is required"),
        naive_utc(),
        after_field("starts_at", END_BEFORE_START_MESSAGE),
    ] = None
    category: Annotated[Optional[str], required("Category is required"), at_most(255, "Category")] = None
    event_type: Optional[EventType] = None
    max_attendees: Annotated[
        Optional[int],
        required("Maximum attendees is required"),
        at_least(1, "Maximum attendees must be at least 1"),
    ] = None
    ticket_price: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    is_free_event: Annotated[Optional[bool], required("Free event flag is required")] = defaulted()
    registration_deadline: Annotated[Optional[datetime], naive_utc()] = None
    status: Annotated[Optional[EventStatus], required("Status is required")] = defaulted()
    image_url: Annotated[Optional[str], at_most(255, "Image URL")] = None
    event_url: Annotated[Optional[str], at_most(255, "Event URL")] = None
    special_instructions: Annotated[Optional[str], at_most(1000, "Special instructions")] = None
    dress_code: Annotated[Optional[str], at_most(255, "Dress code")] = None
    age_restriction: Annotated[Optional[str], at_most(255, "Age restriction")] = None
    venue_id: Annotated[Optional[int], required("Venue is required")] = None
    organizer_id: Annotated[Optional[int], required("Organizer is required")] = None


class EventCreate(CreateSchema, EventFields):
    """Event creation schema"""

    model_config = {
        "json_schema_extra": {
            "example": {
                "name": "Jazz Night at the Blue Note",
                "description": "An intimate evening of smooth jazz featuring local artists",
                "starts_at": "2030-10-15T20:00:00Z",
                "ends_at": "2030-10-15T23:00:00Z",
                "category": "Music",
                "event_type": "CONCERT",
                "max_attendees": 150,
                "venue_id": 1,
                "organizer_id": 1
            }
        }
    }


class EventUpdate(EventFields):
    """Partial update; ordering is re-checked against the stored record"""


class EventStatusChange(BaseSchema):
    status: Annotated[Optional[EventStatus], required("Status is required")] = None


class EventResponse(IDSchema, TimestampSchema):
    """Event response schema"""
    name: str
    description: Optional[str] = None
    starts_at: datetime
    ends_at: datetime
    category: str
    event_type: Optional[EventType] = None
    max_attendees: int
    current_attendees: int
    ticket_price: Optional[Decimal] = None
    is_free_event: bool
    registration_deadline: Optional[datetime] = None
    status: EventStatus
    image_url: Optional[str] = None
    event_url: Optional[str] = None
    special_instructions: Optional[str] = None
    dress_code: Optional[str] = None
    age_restriction: Optional[str] = None
    venue_id: int
    organizer_id: int


class EventAvailability(BaseSchema):
    """Derived state of an event at a single instant"""
    event_id: int
    as_of: datetime
    max_attendees: int
    current_attendees: int
    available_spots: int
    has_available_spots: bool
    is_registration_open: bool
    is_ongoing: bool
    is_completed: bool
