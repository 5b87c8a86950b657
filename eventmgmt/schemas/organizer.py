"""
Organizer schemas
"""

from typing import Annotated, Optional

from eventmgmt.models.organizer import OrganizationType, OrganizerStatus
from eventmgmt.schemas.base import (
    BaseSchema, CreateSchema, IDSchema, TimestampSchema,
    at_most, defaulted, length_between, required, valid_email, valid_phone,
)


class OrganizerFields(BaseSchema):
    organization_name: Annotated[
        Optional[str],
        required("Organization name is required"),
        length_between(2, 100, "Organization name must be between 2 and 100 characters"),
    ] = None
    contact_person: Annotated[
        Optional[str], required("Contact person name is required"), at_most(255, "Contact person name")
    ] = None
    email: Annotated[Optional[str], required("Email is required"), valid_email()] = None
    phone_number: Annotated[Optional[str], required("Phone number is required"), valid_phone()] = None
    address: Annotated[Optional[str], required("Address is required"), at_most(500, "Address")] = None
    city: Annotated[Optional[str], at_most(255, "City")] = None
    state: Annotated[Optional[str], at_most(255, "State")] = None
    postal_code: Annotated[Optional[str], at_most(255, "Postal code")] = None
    country: Annotated[Optional[str], at_most(255, "Country")] = None
    description: Annotated[Optional[str], at_most(1000, "Description")] = None
    website_url: Annotated[Optional[str], at_most(255, "Website URL")] = None
    social_media_links: Annotated[Optional[str], at_most(500, "Social media links")] = None
    organization_type: Optional[OrganizationType] = None
    registration_number: Annotated[Optional[str], at_most(255, "Registration number")] = None
    status: Annotated[Optional[OrganizerStatus], required("Status is required")] = defaulted()


class OrganizerCreate(CreateSchema, OrganizerFields):
    """Organizer creation payload"""


class OrganizerUpdate(OrganizerFields):
    """Partial update; only fields present in the payload are applied"""


class OrganizerResponse(IDSchema, TimestampSchema):
    organization_name: str
    contact_person: str
    email: str
    phone_number: str
    address: str
    city: Optional[str] = None
    state: Optional[str] = None
    postal_code: Optional[str] = None
    country: Optional[str] = None
    description: Optional[str] = None
    website_url: Optional[str] = None
    social_media_links: Optional[str] = None
    organization_type: Optional[OrganizationType] = None
    registration_number: Optional[str] = None
    status: OrganizerStatus
