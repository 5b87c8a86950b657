"""
Venue model
"""

import enum

from sqlalchemy import Boolean, Column, Enum, Integer, Numeric, String

from eventmgmt.models.base import BaseModel


class VenueStatus(str, enum.Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    MAINTENANCE = "MAINTENANCE"
    UNAVAILABLE = "UNAVAILABLE"


class Venue(BaseModel):
    """
    Venue model for event locations
    """
    __tablename__ = "venues"

    name = Column("venue_name", String(100), nullable=False, index=True)
    address = Column(String(500), nullable=False)
    city = Column(String(255), nullable=False, index=True)
    state = Column(String(255))
    postal_code = Column(String(255))
    country = Column(String(255))
    capacity = Column(Integer, nullable=False)
    description = Column(String(1000))

    contact_person = Column(String(255))
    contact_phone = Column(String(16))
    contact_email = Column(String(255))

    rental_cost = Column(Numeric(10, 2))
    amenities = Column(String(1000))
    parking_available = Column(Boolean, nullable=False)
    wifi_available = Column(Boolean, nullable=False)
    catering_available = Column(Boolean, nullable=False)
    av_equipment_available = Column(Boolean, nullable=False)

    status = Column(
        Enum(VenueStatus, native_enum=False, length=32),
        nullable=False,
        index=True
    )
    image_url = Column(String(255))

    def apply_defaults(self) -> None:
        if self.status is None:
            self.status = VenueStatus.ACTIVE
        for flag in ("parking_available", "wifi_available",
                     "catering_available", "av_equipment_available"):
            if getattr(self, flag) is None:
                setattr(self, flag, False)

    def get_full_address(self) -> str:
        """Address joined with whichever of city/state/postal/country are set"""
        full_address = self.address or ""
        if self.city is not None:
            full_address += f", {self.city}"
        if self.state is not None:
            full_address += f", {self.state}"
        if self.postal_code is not None:
            full_address += f" {self.postal_code}"
        if self.country is not None:
            full_address += f", {self.country}"
        return full_address

    @property
    def full_address(self) -> str:
        return self.get_full_address()

    def __repr__(self):
        return f"<Venue(id={self.id}, name={self.name}, city={self.city}, capacity={self.capacity})>"
