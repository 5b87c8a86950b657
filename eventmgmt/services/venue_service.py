"""
Venue service
Create, read, update and delete venues, with an explicit cascade policy
"""

import logging
from typing import Any, List, Optional

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from eventmgmt.config import settings
from eventmgmt.core.clock import Clock, utcnow
from eventmgmt.core.database import DatabaseManager
from eventmgmt.core.exceptions import ConflictError, NotFoundError
from eventmgmt.models.event import Event
from eventmgmt.models.registration import Registration
from eventmgmt.models.venue import Venue, VenueStatus
from eventmgmt.schemas.base import validate_payload
from eventmgmt.schemas.venue import VenueCreate, VenueUpdate

logger = logging.getLogger(__name__)


class VenueService:
    """Service for venue records"""

    def __init__(
        self,
        session: AsyncSession,
        clock: Clock = utcnow,
        db_manager: Optional[DatabaseManager] = None
    ):
        self.session = session
        self.clock = clock
        self.db_manager = db_manager or DatabaseManager()

    async def create(self, payload: Any) -> Venue:
        """
        Validate and persist a new venue

        Raises:
            ValidationError: if any field constraint is violated.
        """
        data = validate_payload(VenueCreate, payload, now=self.clock())

        async with self.db_manager.transaction(self.session):
            venue = Venue(**data.model_dump())
            venue.on_create(self.clock())
            self.session.add(venue)
            await self.session.flush()

        logger.info(f"Venue created: {venue.id} ({venue.name})")
        return venue

    async def get(self, venue_id: int) -> Venue:
        venue = await self.session.get(Venue, venue_id, populate_existing=True)
        if venue is None:
            raise NotFoundError("Venue", venue_id)
        return venue

    async def list(
        self,
        skip: int = 0,
        limit: Optional[int] = None,
        status: Optional[VenueStatus] = None,
        city: Optional[str] = None
    ) -> List[Venue]:
        limit = min(limit or settings.DEFAULT_PAGE_SIZE, settings.MAX_PAGE_SIZE)
        stmt = select(Venue)
        if status is not None:
            stmt = stmt.where(Venue.status == status)
        if city is not None:
            stmt = stmt.where(Venue.city == city)
        stmt = stmt.order_by(Venue.name, Venue.id).offset(skip).limit(limit)

        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def update(self, venue_id: int, payload: Any) -> Venue:
        """
        Apply the fields present in ``payload`` and refresh ``updated_at``
        """
        data = validate_payload(VenueUpdate, payload, now=self.clock())
        changes = data.model_dump(exclude_unset=True)

        async with self.db_manager.transaction(self.session):
            venue = await self.get(venue_id)
            for field, value in changes.items():
                setattr(venue, field, value)
            venue.on_update(self.clock())
            await self.session.flush()

        logger.info(f"Venue updated: {venue_id} fields={sorted(changes)}")
        return venue

    async def count_events(self, venue_id: int) -> int:
        result = await self.session.execute(
            select(func.count(Event.id)).where(Event.venue_id == venue_id)
        )
        return result.scalar_one()

    async def delete(self, venue_id: int) -> None:
        """
        Delete a venue that hosts no events

        Raises:
            ConflictError: if events still reference the venue.
        """
        async with self.db_manager.transaction(self.session):
            venue = await self.get(venue_id)
            event_count = await self.count_events(venue_id)
            if event_count:
                raise ConflictError(
                    f"Venue has {event_count} event(s); use delete_cascade to remove them too",
                    code="HAS_DEPENDENTS",
                    details={"venue_id": venue_id, "events": event_count}
                )
            await self.session.delete(venue)

        logger.info(f"Venue deleted: {venue_id}")

    async def delete_cascade(self, venue_id: int) -> int:
        """
        Delete a venue together with its events and their registrations.

        Returns the number of events removed.
        """
        async with self.db_manager.transaction(self.session):
            venue = await self.get(venue_id)
            event_count = await self.count_events(venue_id)
            event_ids = select(Event.id).where(Event.venue_id == venue_id)

            await self.session.execute(
                delete(Registration)
                .where(Registration.event_id.in_(event_ids))
                .execution_options(synchronize_session="fetch")
            )
            await self.session.execute(
                delete(Event)
                .where(Event.venue_id == venue_id)
                .execution_options(synchronize_session="fetch")
            )
            await self.session.delete(venue)

        logger.warning(f"Venue {venue_id} deleted with cascade: {event_count} event(s) removed")
        return event_count

    async def get_events(self, venue_id: int) -> List[Event]:
        """Events hosted at a venue, earliest first"""
        await self.get(venue_id)
        result = await self.session.execute(
            select(Event)
            .where(Event.venue_id == venue_id)
            .order_by(Event.starts_at, Event.id)
        )
        return list(result.scalars().all())
