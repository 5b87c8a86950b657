"""
Database models
"""

from eventmgmt.models.venue import Venue, VenueStatus
from eventmgmt.models.organizer import Organizer, OrganizerStatus, OrganizationType
from eventmgmt.models.event import Event, EventStatus, EventType
from eventmgmt.models.registration import Registration, RegistrationStatus

__all__ = [
    "Venue",
    "VenueStatus",
    "Organizer",
    "OrganizerStatus",
    "OrganizationType",
    "Event",
    "EventStatus",
    "EventType",
    "Registration",
    "RegistrationStatus",
]
