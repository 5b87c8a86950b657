"""
Test configuration and fixtures
Each test gets a fresh in-memory SQLite database and a frozen clock
"""

import os
from datetime import datetime, timedelta
from uuid import uuid4

import pytest
import pytest_asyncio

# Set test environment before anything reads settings
os.environ["APP_ENV"] = "testing"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"

from eventmgmt.core.database import build_engine, build_session_factory, init_db
from eventmgmt.services.event_service import EventService
from eventmgmt.services.organizer_service import OrganizerService
from eventmgmt.services.registration_service import RegistrationService
from eventmgmt.services.venue_service import VenueService

MEMORY_URL = "sqlite+aiosqlite:///:memory:"


class FrozenClock:
    """Callable clock that only moves when told to"""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now += timedelta(**kwargs)
        return self.now


@pytest.fixture
def clock():
    return FrozenClock(datetime(2030, 1, 15, 9, 0, 0))


@pytest_asyncio.fixture
async def test_db():
    """Create async database engine for tests"""
    engine = build_engine(MEMORY_URL, echo=False)
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(test_db):
    """Create database session for tests"""
    async with build_session_factory(test_db)() as session:
        try:
            yield session
        finally:
            if session.in_transaction():
                await session.rollback()


@pytest.fixture
def venue_service(db_session, clock):
    return VenueService(db_session, clock=clock)


@pytest.fixture
def organizer_service(db_session, clock):
    return OrganizerService(db_session, clock=clock)


@pytest.fixture
def event_service(db_session, clock):
    return EventService(db_session, clock=clock)


@pytest.fixture
def registration_service(db_session, clock):
    return RegistrationService(db_session, clock=clock)


# Payload fixtures
@pytest.fixture
def venue_data():
    return {
        "name": "Test Arena",
        "address": "1 Main St",
        "city": "Springfield",
        "postal_code": "12345",
        "country": "USA",
        "capacity": 1000,
        "contact_phone": "+15551234567",
        "contact_email": "arena@example.com",
    }


@pytest.fixture
def organizer_data():
    return {
        "organization_name": "Test Org",
        "contact_person": "Jordan Lee",
        "email": f"org_{uuid4().hex[:8]}@example.com",
        "phone_number": "+15551234567",
        "address": "2 Side St",
    }


@pytest.fixture
def event_data_factory(clock):
    def factory(venue_id, organizer_id, **overrides):
        data = {
            "name": "Test Concert",
            "description": "Test concert description",
            "starts_at": clock() + timedelta(days=30),
            "ends_at": clock() + timedelta(days=30, hours=3),
            "category": "Music",
            "max_attendees": 100,
            "venue_id": venue_id,
            "organizer_id": organizer_id,
        }
        data.update(overrides)
        return data
    return factory


@pytest_asyncio.fixture
async def test_venue(venue_service, venue_data):
    return await venue_service.create(venue_data)


@pytest_asyncio.fixture
async def test_organizer(organizer_service, organizer_data):
    return await organizer_service.create(organizer_data)


@pytest_asyncio.fixture
async def test_event(event_service, event_data_factory, test_venue, test_organizer):
    return await event_service.create(event_data_factory(test_venue.id, test_organizer.id))


@pytest_asyncio.fixture
async def published_event_factory(event_service, event_data_factory, test_venue, test_organizer):
    """Create and publish an event with the given overrides"""
    async def factory(**overrides):
        event = await event_service.create(
            event_data_factory(test_venue.id, test_organizer.id, **overrides)
        )
        return await event_service.change_status(event.id, "PUBLISHED")
    return factory


@pytest.fixture
def attendee_data():
    """Build a distinct attendee payload per index"""
    def factory(n: int = 0):
        return {"attendee_name": f"Attendee {n}", "attendee_email": f"attendee{n}@example.com"}
    return factory
