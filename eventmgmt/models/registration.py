"""
Registration model
"""

import enum

from sqlalchemy import Column, Enum, ForeignKey, Integer, String, UniqueConstraint

from eventmgmt.models.base import BaseModel


class RegistrationStatus(str, enum.Enum):
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"


class Registration(BaseModel):
    """
    One attendee's place at an event; confirmed rows are what
    ``Event.current_attendees`` counts
    """
    __tablename__ = "registrations"

    event_id = Column(Integer, ForeignKey("events.id"), nullable=False, index=True)
    attendee_name = Column(String(100), nullable=False)
    attendee_email = Column(String(255), nullable=False)
    attendee_phone = Column(String(16))
    status = Column(
        Enum(RegistrationStatus, native_enum=False, length=32),
        nullable=False,
        index=True
    )

    __table_args__ = (
        UniqueConstraint("event_id", "attendee_email", name="uq_registrations_event_email"),
    )

    def apply_defaults(self) -> None:
        if self.status is None:
            self.status = RegistrationStatus.CONFIRMED

    def __repr__(self):
        return f"<Registration(id={self.id}, event_id={self.event_id}, status={self.status})>"
