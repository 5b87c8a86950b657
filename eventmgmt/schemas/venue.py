"""
Venue schemas for create/update validation and responses
"""

from decimal import Decimal
from typing import Annotated, Optional

from pydantic import Field

from eventmgmt.models.venue import VenueStatus
from eventmgmt.schemas.base import (
    BaseSchema, CreateSchema, IDSchema, TimestampSchema,
    at_least, at_most, defaulted, length_between, required, valid_email, valid_phone,
)

VenueName = Annotated[
    Optional[str],
    required("Venue name is required"),
    length_between(2, 100, "Venue name must be between 2 and 100 characters"),
]
Address = Annotated[Optional[str], required("Address is required"), at_most(500, "Address")]
City = Annotated[Optional[str], required("City is required"), at_most(255, "City")]
Capacity = Annotated[Optional[int], required("Capacity is required"), at_least(1, "Capacity must be at least 1")]


class VenueFields(BaseSchema):
    name: VenueName = None
    address: Address = None
    city: City = None
    state: Annotated[Optional[str], at_most(255, "State")] = None
    postal_code: Annotated[Optional[str], at_most(255, "Postal code")] = None
    country: Annotated[Optional[str], at_most(255, "Country")] = None
    capacity: Capacity = None
    description: Annotated[Optional[str], at_most(1000, "Description")] = None
    contact_person: Annotated[Optional[str], at_most(255, "Contact person")] = None
    contact_phone: Annotated[Optional[str], valid_phone()] = None
    contact_email: Annotated[Optional[str], valid_email()] = None
    rental_cost: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    amenities: Annotated[Optional[str], at_most(1000, "Amenities")] = None
    parking_available: Annotated[Optional[bool], required("Parking availability is required")] = defaulted()
    wifi_available: Annotated[Optional[bool], required("WiFi availability is required")] = defaulted()
    catering_available: Annotated[Optional[bool], required("Catering availability is required")] = defaulted()
    av_equipment_available: Annotated[
        Optional[bool], required("AV equipment availability is required")
    ] = defaulted()
    status: Annotated[Optional[VenueStatus], required("Status is required")] = defaulted()
    image_url: Annotated[Optional[str], at_most(255, "Image URL")] = None


class VenueCreate(CreateSchema, VenueFields):
    """Venue creation payload"""

    model_config = {
        "json_schema_extra": {
            "example": {
                "name": "Music Hall",
                "address": "789 Arts District",
                "city": "Chicago",
                "state": "IL",
                "postal_code": "60601",
                "country": "USA",
                "capacity": 800,
                "contact_phone": "+13125550100",
                "wifi_available": True
            }
        }
    }


class VenueUpdate(VenueFields):
    """Partial update; only fields present in the payload are applied"""


class VenueResponse(IDSchema, TimestampSchema):
    name: str
    address: str
    city: str
    state: Optional[str] = None
    postal_code: Optional[str] = None
    country: Optional[str] = None
    full_address: str
    capacity: int
    description: Optional[str] = None
    contact_person: Optional[str] = None
    contact_phone: Optional[str] = None
    contact_email: Optional[str] = None
    rental_cost: Optional[Decimal] = None
    amenities: Optional[str] = None
    parking_available: bool
    wifi_available: bool
    catering_available: bool
    av_equipment_available: bool
    status: VenueStatus
    image_url: Optional[str] = None
