"""
Event service
Event lifecycle, reference checks and derived availability
"""

import logging
from typing import Any, List, Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from eventmgmt.config import settings
from eventmgmt.core.clock import Clock, utcnow
from eventmgmt.core.database import DatabaseManager
from eventmgmt.core.exceptions import FieldError, NotFoundError, ValidationError
from eventmgmt.models.event import Event, EventStatus
from eventmgmt.models.organizer import Organizer
from eventmgmt.models.registration import Registration
from eventmgmt.models.venue import Venue
from eventmgmt.schemas.base import validate_payload
from eventmgmt.schemas.event import (
    END_BEFORE_START_MESSAGE,
    EventAvailability,
    EventCreate,
    EventStatusChange,
    EventUpdate,
)

logger = logging.getLogger(__name__)

MAX_BELOW_CURRENT_MESSAGE = "Maximum attendees cannot be less than current attendees"


class EventService:
    """Service for event records"""

    def __init__(
        self,
        session: AsyncSession,
        clock: Clock = utcnow,
        db_manager: Optional[DatabaseManager] = None
    ):
        self.session = session
        self.clock = clock
        self.db_manager = db_manager or DatabaseManager()

    async def _check_references(self, venue_id: Optional[int], organizer_id: Optional[int]) -> None:
        errors = []
        if venue_id is not None and await self.session.get(Venue, venue_id) is None:
            errors.append(FieldError("venue_id", "Venue not found"))
        if organizer_id is not None and await self.session.get(Organizer, organizer_id) is None:
            errors.append(FieldError("organizer_id", "Organizer not found"))
        if errors:
            raise ValidationError(errors)

    @staticmethod
    def _check_invariants(event: Event) -> None:
        errors = []
        if event.ends_at <= event.starts_at:
            errors.append(FieldError("ends_at", END_BEFORE_START_MESSAGE))
        if event.current_attendees is not None and event.max_attendees < event.current_attendees:
            errors.append(FieldError("max_attendees", MAX_BELOW_CURRENT_MESSAGE))
        if errors:
            raise ValidationError(errors)

    async def create(self, payload: Any) -> Event:
        """
        Validate and persist a new event.

        The start time must be in the future as of validation, and the
        referenced venue and organizer must exist.

        Raises:
            ValidationError: on any violated field constraint or unknown reference.
        """
        data = validate_payload(EventCreate, payload, now=self.clock())

        async with self.db_manager.transaction(self.session):
            await self._check_references(data.venue_id, data.organizer_id)
            event = Event(**data.model_dump())
            event.on_create(self.clock())
            self.session.add(event)
            await self.session.flush()

        logger.info(f"Event created: {event.id} ({event.name}) venue={event.venue_id} organizer={event.organizer_id}")
        return event

    async def get(self, event_id: int) -> Event:
        event = await self.session.get(Event, event_id, populate_existing=True)
        if event is None:
            raise NotFoundError("Event", event_id)
        return event

    async def list(
        self,
        skip: int = 0,
        limit: Optional[int] = None,
        status: Optional[EventStatus] = None,
        venue_id: Optional[int] = None,
        organizer_id: Optional[int] = None
    ) -> List[Event]:
        limit = min(limit or settings.DEFAULT_PAGE_SIZE, settings.MAX_PAGE_SIZE)
        stmt = select(Event)
        if status is not None:
            stmt = stmt.where(Event.status == status)
        if venue_id is not None:
            stmt = stmt.where(Event.venue_id == venue_id)
        if organizer_id is not None:
            stmt = stmt.where(Event.organizer_id == organizer_id)
        stmt = stmt.order_by(Event.starts_at, Event.id).offset(skip).limit(limit)

        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def update(self, event_id: int, payload: Any) -> Event:
        """
        Apply the fields present in ``payload``.

        Start/end ordering and the attendee ceiling are checked against the
        merged record, so a partial update cannot break them.
        """
        data = validate_payload(EventUpdate, payload, now=self.clock())
        changes = data.model_dump(exclude_unset=True)

        async with self.db_manager.transaction(self.session):
            event = await self.get(event_id)
            await self._check_references(changes.get("venue_id"), changes.get("organizer_id"))
            for field, value in changes.items():
                setattr(event, field, value)
            self._check_invariants(event)
            event.on_update(self.clock())
            await self.session.flush()

        logger.info(f"Event updated: {event_id} fields={sorted(changes)}")
        return event

    async def change_status(self, event_id: int, status: Any) -> Event:
        data = validate_payload(EventStatusChange, {"status": status}, now=self.clock())

        async with self.db_manager.transaction(self.session):
            event = await self.get(event_id)
            previous = event.status
            event.status = data.status
            event.on_update(self.clock())
            await self.session.flush()

        logger.info(f"Event {event_id} status {previous.value} -> {data.status.value}")
        return event

    async def delete(self, event_id: int) -> None:
        """Delete an event and its registrations"""
        async with self.db_manager.transaction(self.session):
            event = await self.get(event_id)
            await self.session.execute(
                delete(Registration)
                .where(Registration.event_id == event_id)
                .execution_options(synchronize_session="fetch")
            )
            await self.session.delete(event)

        logger.info(f"Event deleted: {event_id}")

    async def availability(self, event_id: int) -> EventAvailability:
        """
        Evaluate every derived predicate against a single instant.

        This is a snapshot; a concurrent registration may change the answer
        before the caller acts on it.
        """
        event = await self.get(event_id)
        now = self.clock()
        return EventAvailability(
            event_id=event.id,
            as_of=now,
            max_attendees=event.max_attendees,
            current_attendees=event.current_attendees,
            available_spots=event.available_spots(),
            has_available_spots=event.has_available_spots(),
            is_registration_open=event.is_registration_open(now),
            is_ongoing=event.is_ongoing(now),
            is_completed=event.is_completed(now),
        )
