"""
Organizer model
"""

import enum

from sqlalchemy import Column, Enum, String

from eventmgmt.models.base import BaseModel


class OrganizationType(str, enum.Enum):
    CORPORATE = "CORPORATE"
    NON_PROFIT = "NON_PROFIT"
    INDIVIDUAL = "INDIVIDUAL"
    GOVERNMENT = "GOVERNMENT"
    EDUCATIONAL = "EDUCATIONAL"


class OrganizerStatus(str, enum.Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    SUSPENDED = "SUSPENDED"
    PENDING_VERIFICATION = "PENDING_VERIFICATION"


class Organizer(BaseModel):
    """
    Organization or individual responsible for running events
    """
    __tablename__ = "organizers"

    organization_name = Column(String(100), nullable=False, index=True)
    contact_person = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, unique=True)
    phone_number = Column(String(16), nullable=False)
    address = Column(String(500), nullable=False)
    city = Column(String(255))
    state = Column(String(255))
    postal_code = Column(String(255))
    country = Column(String(255))
    description = Column(String(1000))
    website_url = Column(String(255))
    social_media_links = Column(String(500))
    organization_type = Column(Enum(OrganizationType, native_enum=False, length=32))
    registration_number = Column(String(255))
    status = Column(
        Enum(OrganizerStatus, native_enum=False, length=32),
        nullable=False,
        index=True
    )

    def apply_defaults(self) -> None:
        if self.status is None:
            self.status = OrganizerStatus.PENDING_VERIFICATION

    def __repr__(self):
        return f"<Organizer(id={self.id}, organization_name={self.organization_name}, email={self.email})>"
