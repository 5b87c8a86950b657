"""
Registration schemas
"""

from typing import Annotated, Optional

from eventmgmt.models.registration import RegistrationStatus
from eventmgmt.schemas.base import (
    CreateSchema, IDSchema, TimestampSchema, length_between, required, valid_email, valid_phone,
)


class RegistrationCreate(CreateSchema):
    attendee_name: Annotated[
        Optional[str],
        required("Attendee name is required"),
        length_between(2, 100, "Attendee name must be between 2 and 100 characters"),
    ] = None
    attendee_email: Annotated[Optional[str], required("Email is required"), valid_email()] = None
    attendee_phone: Annotated[Optional[str], valid_phone()] = None


class RegistrationResponse(IDSchema, TimestampSchema):
    event_id: int
    attendee_name: str
    attendee_email: str
    attendee_phone: Optional[str] = None
    status: RegistrationStatus
