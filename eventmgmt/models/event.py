"""
Event model
"""

from datetime import datetime
import enum

from sqlalchemy import (
    Boolean, CheckConstraint, Column, DateTime, Enum, ForeignKey, Integer, Numeric, String
)

from eventmgmt.models.base import BaseModel


class EventType(str, enum.Enum):
    CONFERENCE = "CONFERENCE"
    WORKSHOP = "WORKSHOP"
    SEMINAR = "SEMINAR"
    CONCERT = "CONCERT"
    EXHIBITION = "EXHIBITION"
    SPORTS = "SPORTS"
    SOCIAL = "SOCIAL"
    CORPORATE = "CORPORATE"
    WEDDING = "WEDDING"
    BIRTHDAY = "BIRTHDAY"


class EventStatus(str, enum.Enum):
    DRAFT = "DRAFT"
    PUBLISHED = "PUBLISHED"
    ONGOING = "ONGOING"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"
    POSTPONED = "POSTPONED"


class Event(BaseModel):
    """
    Event hosted at one venue and run by one organizer.

    Related venue, organizer and registrations are resolved through the
    service layer by id; no relationship is loaded implicitly.
    """
    __tablename__ = "events"

    name = Column("event_name", String(150), nullable=False, index=True)
    description = Column(String(2000))
    starts_at = Column("start_date_time", DateTime, nullable=False, index=True)
    ends_at = Column("end_date_time", DateTime, nullable=False)
    category = Column(String(255), nullable=False)
    event_type = Column(Enum(EventType, native_enum=False, length=32))
    max_attendees = Column(Integer, nullable=False)
    current_attendees = Column(Integer, nullable=False)
    ticket_price = Column(Numeric(10, 2))
    is_free_event = Column(Boolean, nullable=False)
    registration_deadline = Column(DateTime)
    status = Column(
        Enum(EventStatus, native_enum=False, length=32),
        nullable=False,
        index=True
    )
    image_url = Column(String(255))
    event_url = Column(String(255))
    special_instructions = Column(String(1000))
    dress_code = Column(String(255))
    age_restriction = Column(String(255))

    venue_id = Column(Integer, ForeignKey("venues.id"), nullable=False, index=True)
    organizer_id = Column(Integer, ForeignKey("organizers.id"), nullable=False, index=True)

    __table_args__ = (
        CheckConstraint("max_attendees >= 1", name="ck_events_max_attendees_positive"),
        CheckConstraint(
            "current_attendees >= 0 AND current_attendees <= max_attendees",
            name="ck_events_attendee_bounds"
        ),
    )

    def apply_defaults(self) -> None:
        if self.status is None:
            self.status = EventStatus.DRAFT
        if self.current_attendees is None:
            self.current_attendees = 0
        if self.is_free_event is None:
            self.is_free_event = False

    def has_available_spots(self) -> bool:
        return self.current_attendees < self.max_attendees

    def available_spots(self) -> int:
        return max(self.max_attendees - self.current_attendees, 0)

    def is_registration_open(self, now: datetime) -> bool:
        """Published, before the deadline (if any) and not full, as of ``now``"""
        return (
            self.status == EventStatus.PUBLISHED
            and (self.registration_deadline is None or now < self.registration_deadline)
            and self.has_available_spots()
        )

    def is_ongoing(self, now: datetime) -> bool:
        return self.starts_at < now < self.ends_at

    def is_completed(self, now: datetime) -> bool:
        return now > self.ends_at

    def __repr__(self):
        return (
            f"<Event(id={self.id}, name={self.name}, status={self.status}, "
            f"attendees={self.current_attendees}/{self.max_attendees})>"
        )
