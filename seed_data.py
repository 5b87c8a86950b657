#!/usr/bin/env python3
"""
Seed database with demo venues, organizers and events
"""
import asyncio
from datetime import timedelta
from decimal import Decimal

from eventmgmt.core.clock import utcnow
from eventmgmt.core.database import async_session, close_db, init_db
from eventmgmt.core.logging import setup_logging
from eventmgmt.models.event import EventStatus, EventType
from eventmgmt.services.event_service import EventService
from eventmgmt.services.organizer_service import OrganizerService
from eventmgmt.services.registration_service import RegistrationService
from eventmgmt.services.venue_service import VenueService


async def create_demo_venues(session):
    """Create demo venues"""
    service = VenueService(session)
    venues = [
        await service.create({
            "name": "Grand Theater",
            "address": "123 Main St",
            "city": "New York",
            "state": "NY",
            "postal_code": "10001",
            "country": "USA",
            "capacity": 500,
            "description": "A beautiful historic theater in the heart of Manhattan",
            "contact_phone": "+12125550100",
            "parking_available": True,
        }),
        await service.create({
            "name": "Convention Center",
            "address": "456 Convention Ave",
            "city": "San Francisco",
            "state": "CA",
            "postal_code": "94102",
            "country": "USA",
            "capacity": 1000,
            "description": "Modern convention center perfect for large events",
            "wifi_available": True,
            "av_equipment_available": True,
            "rental_cost": Decimal("2500.00"),
        }),
    ]
    print("✅ Created demo venues")
    return [v.id for v in venues]


async def create_demo_organizers(session):
    """Create demo organizers"""
    service = OrganizerService(session)
    organizers = [
        await service.create({
            "organization_name": "Bright Lights Productions",
            "contact_person": "Dana Reyes",
            "email": "events@brightlights.example.com",
            "phone_number": "+12125550111",
            "address": "77 Stage Door Ln",
            "city": "New York",
            "organization_type": "CORPORATE",
        }),
        await service.create({
            "organization_name": "Open Source Collective",
            "contact_person": "Sam Okafor",
            "email": "hello@osc.example.org",
            "phone_number": "+14155550122",
            "address": "9 Commit Way",
            "city": "San Francisco",
            "organization_type": "NON_PROFIT",
        }),
    ]
    print("✅ Created demo organizers")
    return [o.id for o in organizers]


async def create_demo_events(session, venue_ids, organizer_ids):
    """Create demo events and publish them"""
    service = EventService(session)
    now = utcnow()
    events = [
        await service.create({
            "name": "Broadway Musical Night",
            "description": "An evening of classic Broadway hits performed by renowned artists",
            "starts_at": now + timedelta(days=30),
            "ends_at": now + timedelta(days=30, hours=3),
            "category": "Theater",
            "event_type": EventType.CONCERT,
            "max_attendees": 500,
            "ticket_price": Decimal("75.00"),
            "venue_id": venue_ids[0],
            "organizer_id": organizer_ids[0],
        }),
        await service.create({
            "name": "Open Source Summit",
            "description": "Talks and workshops from maintainers and contributors",
            "starts_at": now + timedelta(days=45),
            "ends_at": now + timedelta(days=47),
            "category": "Technology",
            "event_type": EventType.CONFERENCE,
            "max_attendees": 1000,
            "is_free_event": True,
            "registration_deadline": now + timedelta(days=40),
            "venue_id": venue_ids[1],
            "organizer_id": organizer_ids[1],
        }),
    ]
    for event in events:
        await service.change_status(event.id, EventStatus.PUBLISHED)
    print("✅ Created demo events")
    return [e.id for e in events]


async def create_demo_registrations(session, event_ids):
    """Register a couple of attendees"""
    service = RegistrationService(session)
    await service.register(event_ids[1], {"attendee_name": "Alex Kim", "attendee_email": "alex@example.com"})
    await service.register(event_ids[1], {"attendee_name": "Priya Nair", "attendee_email": "priya@example.com"})
    print("✅ Created demo registrations")


async def main():
    """Main seeding function"""
    setup_logging()
    print("🌱 Starting database seeding...")

    await init_db()

    try:
        async with async_session() as session:
            venue_ids = await create_demo_venues(session)
            organizer_ids = await create_demo_organizers(session)
            event_ids = await create_demo_events(session, venue_ids, organizer_ids)
            await create_demo_registrations(session, event_ids)

        print("\n🎉 Database seeding completed successfully!")

    except Exception as e:
        print(f"❌ Error seeding database: {e}")
        raise
    finally:
        await close_db()


if __name__ == "__main__":
    asyncio.run(main())
