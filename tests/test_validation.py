"""
Tests for payload validation and its user-facing messages
"""

import pytest
from datetime import datetime, timedelta, timezone

from eventmgmt.core.exceptions import ValidationError
from eventmgmt.models.event import EventType
from eventmgmt.models.venue import VenueStatus
from eventmgmt.schemas import (
    EventCreate,
    EventUpdate,
    OrganizerCreate,
    OrganizerUpdate,
    RegistrationCreate,
    VenueCreate,
    VenueUpdate,
    validate_payload,
)

NOW = datetime(2030, 1, 15, 9, 0, 0)


def errors_of(schema, payload, now=NOW):
    with pytest.raises(ValidationError) as exc_info:
        validate_payload(schema, payload, now=now)
    return {(e.field, e.message) for e in exc_info.value.errors}


@pytest.fixture
def venue_payload():
    return {"name": "Hall", "address": "1 Main St", "city": "Springfield", "capacity": 10}


@pytest.fixture
def event_payload():
    return {
        "name": "Meetup",
        "starts_at": NOW + timedelta(days=1),
        "ends_at": NOW + timedelta(days=1, hours=2),
        "category": "Tech",
        "max_attendees": 5,
        "venue_id": 1,
        "organizer_id": 1,
    }


@pytest.mark.unit
class TestVenueValidation:

    def test_valid_payload(self, venue_payload):
        venue = validate_payload(VenueCreate, venue_payload, now=NOW)
        assert venue.name == "Hall"
        assert venue.status is None

    def test_all_missing_fields_reported_together(self):
        errors = errors_of(VenueCreate, {})
        assert errors == {
            ("name", "Venue name is required"),
            ("address", "Address is required"),
            ("city", "City is required"),
            ("capacity", "Capacity is required"),
        }

    def test_several_violations_across_fields(self, venue_payload):
        venue_payload.update(name="H", capacity=0, contact_phone="12345", contact_email="not-an-email")
        errors = errors_of(VenueCreate, venue_payload)
        assert errors == {
            ("name", "Venue name must be between 2 and 100 characters"),
            ("capacity", "Capacity must be at least 1"),
            ("contact_phone", "Phone number should be valid"),
            ("contact_email", "Email should be valid"),
        }

    @pytest.mark.parametrize("name", ["ab", "x" * 100])
    def test_name_length_bounds_are_inclusive(self, venue_payload, name):
        venue_payload["name"] = name
        assert validate_payload(VenueCreate, venue_payload, now=NOW).name == name

    def test_name_too_long(self, venue_payload):
        venue_payload["name"] = "x" * 101
        assert errors_of(VenueCreate, venue_payload) == {
            ("name", "Venue name must be between 2 and 100 characters")
        }

    @pytest.mark.parametrize("name", ["", " ", "   "])
    def test_blank_name_reports_every_rule(self, venue_payload, name):
        # Blank values shorter than two characters also break the length rule
        expected = {("name", "Venue name is required")}
        if len(name) < 2:
            expected.add(("name", "Venue name must be between 2 and 100 characters"))
        assert errors_of(VenueCreate, venue_payload | {"name": name}) == expected

    def test_short_name_with_trailing_space_is_valid(self, venue_payload):
        venue_payload["name"] = "a "
        assert validate_payload(VenueCreate, venue_payload, now=NOW).name == "a "

    def test_both_messages_listed_for_field(self, venue_payload):
        venue_payload["name"] = ""
        with pytest.raises(ValidationError) as exc_info:
            validate_payload(VenueCreate, venue_payload, now=NOW)
        assert exc_info.value.messages_for("name") == [
            "Venue name is required",
            "Venue name must be between 2 and 100 characters",
        ]

    def test_empty_contact_email_accepted(self, venue_payload):
        venue_payload["contact_email"] = ""
        assert validate_payload(VenueCreate, venue_payload, now=NOW).contact_email == ""

    def test_display_name_email_rejected(self, venue_payload):
        venue_payload["contact_email"] = "Front Desk <desk@example.com>"
        assert errors_of(VenueCreate, venue_payload) == {("contact_email", "Email should be valid")}

    def test_address_length_limit(self, venue_payload):
        venue_payload["address"] = "a" * 500
        validate_payload(VenueCreate, venue_payload, now=NOW)
        venue_payload["address"] = "a" * 501
        assert errors_of(VenueCreate, venue_payload) == {
            ("address", "Address must be at most 500 characters")
        }

    @pytest.mark.parametrize("phone", ["+15551234567", "5551234567", "123456789012345"])
    def test_phone_accepted(self, venue_payload, phone):
        venue_payload["contact_phone"] = phone
        assert validate_payload(VenueCreate, venue_payload, now=NOW).contact_phone == phone

    @pytest.mark.parametrize("phone", ["12345", "1234567890123456", "555-123-4567", "++15551234567", "5551234567\n"])
    def test_phone_rejected(self, venue_payload, phone):
        venue_payload["contact_phone"] = phone
        assert errors_of(VenueCreate, venue_payload) == {("contact_phone", "Phone number should be valid")}

    def test_status_accepts_member_name(self, venue_payload):
        venue_payload["status"] = "MAINTENANCE"
        assert validate_payload(VenueCreate, venue_payload, now=NOW).status == VenueStatus.MAINTENANCE

    def test_update_only_checks_given_fields(self):
        update = validate_payload(VenueUpdate, {"capacity": 50}, now=NOW)
        assert update.model_dump(exclude_unset=True) == {"capacity": 50}

    def test_update_cannot_clear_required_field(self):
        assert errors_of(VenueUpdate, {"city": None}) == {("city", "City is required")}

    def test_update_cannot_null_defaulted_columns(self):
        assert errors_of(VenueUpdate, {"wifi_available": None, "status": None}) == {
            ("wifi_available", "WiFi availability is required"),
            ("status", "Status is required"),
        }

    def test_defaulted_columns_may_be_omitted_on_create(self, venue_payload):
        venue = validate_payload(VenueCreate, venue_payload, now=NOW)
        assert venue.parking_available is None
        assert "status" not in venue.model_dump(exclude_unset=True)


@pytest.mark.unit
class TestOrganizerValidation:

    def test_missing_required_fields(self):
        errors = errors_of(OrganizerCreate, {})
        assert errors == {
            ("organization_name", "Organization name is required"),
            ("contact_person", "Contact person name is required"),
            ("email", "Email is required"),
            ("phone_number", "Phone number is required"),
            ("address", "Address is required"),
        }

    def test_invalid_email_and_phone(self):
        errors = errors_of(OrganizerCreate, {
            "organization_name": "Org",
            "contact_person": "Pat",
            "email": "dup@",
            "phone_number": "12345",
            "address": "1 Road",
        })
        assert errors == {
            ("email", "Email should be valid"),
            ("phone_number", "Phone number should be valid"),
        }

    @pytest.fixture
    def organizer_payload(self):
        return {
            "organization_name": "Org",
            "contact_person": "Pat",
            "email": "pat@example.com",
            "phone_number": "+15551234567",
            "address": "1 Road",
        }

    def test_empty_phone_reports_both_rules(self, organizer_payload):
        organizer_payload["phone_number"] = ""
        assert errors_of(OrganizerCreate, organizer_payload) == {
            ("phone_number", "Phone number is required"),
            ("phone_number", "Phone number should be valid"),
        }

    def test_empty_email_is_only_missing(self, organizer_payload):
        organizer_payload["email"] = ""
        assert errors_of(OrganizerCreate, organizer_payload) == {("email", "Email is required")}

    def test_blank_organization_name(self, organizer_payload):
        organizer_payload["organization_name"] = " "
        assert errors_of(OrganizerCreate, organizer_payload) == {
            ("organization_name", "Organization name is required"),
            ("organization_name", "Organization name must be between 2 and 100 characters"),
        }

    @pytest.mark.parametrize("email", [
        "Bob Smith <bob@example.com>",
        "bob smith@example.com",
    ])
    def test_email_must_be_a_bare_address(self, organizer_payload, email):
        organizer_payload["email"] = email
        assert errors_of(OrganizerCreate, organizer_payload) == {("email", "Email should be valid")}

    def test_update_cannot_null_status(self):
        assert errors_of(OrganizerUpdate, {"status": None}) == {("status", "Status is required")}

    def test_organization_type(self):
        organizer = validate_payload(OrganizerCreate, {
            "organization_name": "Org",
            "contact_person": "Pat",
            "email": "pat@example.com",
            "phone_number": "+15551234567",
            "address": "1 Road",
            "organization_type": "NON_PROFIT",
        }, now=NOW)
        assert organizer.organization_type.value == "NON_PROFIT"


@pytest.mark.unit
class TestEventValidation:

    def test_valid_payload(self, event_payload):
        event_payload["event_type"] = "WORKSHOP"
        event = validate_payload(EventCreate, event_payload, now=NOW)
        assert event.event_type == EventType.WORKSHOP

    def test_missing_required_fields(self):
        errors = errors_of(EventCreate, {})
        assert errors == {
            ("name", "Event name is required"),
            ("starts_at", "Start date and time is required"),
            ("ends_at", "End date and time is required"),
            ("category", "Category is required"),
            ("max_attendees", "Maximum attendees is required"),
            ("venue_id", "Venue is required"),
            ("organizer_id", "Organizer is required"),
        }

    def test_start_must_be_in_the_future(self, event_payload):
        event_payload["starts_at"] = NOW
        assert ("starts_at", "Start date must be in the future") in errors_of(EventCreate, event_payload)

    def test_future_check_uses_validation_time(self, event_payload):
        # Valid when submitted; persisting later is not re-checked here
        event_payload["starts_at"] = NOW + timedelta(seconds=1)
        validate_payload(EventCreate, event_payload, now=NOW)
        with pytest.raises(ValidationError):
            validate_payload(EventCreate, event_payload, now=NOW + timedelta(seconds=1))

    def test_end_must_follow_start(self, event_payload):
        event_payload["ends_at"] = event_payload["starts_at"]
        assert errors_of(EventCreate, event_payload) == {
            ("ends_at", "End date and time must be after start date and time")
        }

    def test_aware_datetimes_normalised_to_utc(self, event_payload):
        event_payload["starts_at"] = datetime(2030, 2, 1, 12, 0, tzinfo=timezone(timedelta(hours=2)))
        event_payload["ends_at"] = "2030-02-01T14:00:00+02:00"
        event = validate_payload(EventCreate, event_payload, now=NOW)
        assert event.starts_at == datetime(2030, 2, 1, 10, 0)
        assert event.ends_at == datetime(2030, 2, 1, 12, 0)

    def test_limits(self, event_payload):
        event_payload.update(name="E", max_attendees=0, description="d" * 2001,
                             special_instructions="s" * 1001)
        assert errors_of(EventCreate, event_payload) == {
            ("name", "Event name must be between 2 and 150 characters"),
            ("max_attendees", "Maximum attendees must be at least 1"),
            ("description", "Description must be at most 2000 characters"),
            ("special_instructions", "Special instructions must be at most 1000 characters"),
        }

    def test_update_checks_start_in_future(self):
        assert errors_of(EventUpdate, {"starts_at": NOW - timedelta(days=1)}) == {
            ("starts_at", "Start date must be in the future")
        }

    def test_update_cannot_null_defaulted_columns(self):
        assert errors_of(EventUpdate, {"is_free_event": None, "status": None}) == {
            ("is_free_event", "Free event flag is required"),
            ("status", "Status is required"),
        }

    def test_blank_name_and_past_start_reported_together(self, event_payload):
        event_payload.update(name="", starts_at=NOW - timedelta(hours=1))
        assert errors_of(EventCreate, event_payload) == {
            ("name", "Event name is required"),
            ("name", "Event name must be between 2 and 150 characters"),
            ("starts_at", "Start date must be in the future"),
        }


@pytest.mark.unit
class TestRegistrationValidation:

    def test_valid(self):
        registration = validate_payload(
            RegistrationCreate,
            {"attendee_name": "Ann", "attendee_email": "ann@example.com", "attendee_phone": "+15551234567"},
            now=NOW,
        )
        assert registration.attendee_email == "ann@example.com"

    def test_errors(self):
        assert errors_of(RegistrationCreate, {"attendee_name": "A", "attendee_phone": "12"}) == {
            ("attendee_name", "Attendee name must be between 2 and 100 characters"),
            ("attendee_email", "Email is required"),
            ("attendee_phone", "Phone number should be valid"),
        }

    def test_display_name_email_rejected(self):
        assert errors_of(
            RegistrationCreate,
            {"attendee_name": "Bob", "attendee_email": "Bob <bob@example.com>"},
        ) == {("attendee_email", "Email should be valid")}
