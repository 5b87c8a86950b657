"""
Registration service

Owns ``Event.current_attendees``. Every change to the counter is a single
conditional UPDATE, so two concurrent registrations can never push an
event past ``max_attendees``.
"""

import logging
from datetime import datetime
from typing import Any, List, Optional

from sqlalchemy import or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from eventmgmt.core.clock import Clock, utcnow
from eventmgmt.core.database import DatabaseManager, is_unique_violation
from eventmgmt.core.exceptions import (
    CapacityExceededError,
    ConflictError,
    DuplicateError,
    NotFoundError,
    RegistrationClosedError,
)
from eventmgmt.models.event import Event, EventStatus
from eventmgmt.models.registration import Registration, RegistrationStatus
from eventmgmt.schemas.base import validate_payload
from eventmgmt.schemas.registration import RegistrationCreate

logger = logging.getLogger(__name__)


class RegistrationService:
    """Service for event registrations"""

    def __init__(
        self,
        session: AsyncSession,
        clock: Clock = utcnow,
        db_manager: Optional[DatabaseManager] = None
    ):
        self.session = session
        self.clock = clock
        self.db_manager = db_manager or DatabaseManager()

    async def _claim_spot(self, event_id: int, now: datetime) -> bool:
        """Atomically take one spot if the event is open; False if refused"""
        result = await self.session.execute(
            update(Event)
            .where(
                Event.id == event_id,
                Event.status == EventStatus.PUBLISHED,
                Event.current_attendees < Event.max_attendees,
                or_(Event.registration_deadline.is_(None), Event.registration_deadline > now),
            )
            .values(current_attendees=Event.current_attendees + 1)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    async def _release_spot(self, event_id: int) -> bool:
        result = await self.session.execute(
            update(Event)
            .where(Event.id == event_id, Event.current_attendees > 0)
            .values(current_attendees=Event.current_attendees - 1)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    async def _touch_event(self, event_id: int, now: datetime) -> Event:
        event = await self.session.get(Event, event_id, populate_existing=True)
        event.on_update(now)
        return event

    async def _refusal(self, event_id: int, now: datetime) -> Exception:
        """Work out why a claim matched no row"""
        event = await self.session.get(Event, event_id, populate_existing=True)
        if event is None:
            return NotFoundError("Event", event_id)
        if event.status != EventStatus.PUBLISHED:
            return RegistrationClosedError(event_id, "Event is not open for registration")
        if event.registration_deadline is not None and now >= event.registration_deadline:
            return RegistrationClosedError(event_id, "Registration deadline has passed")
        return CapacityExceededError(event_id)

    async def _find(self, event_id: int, email: str) -> Optional[Registration]:
        result = await self.session.execute(
            select(Registration).where(
                Registration.event_id == event_id,
                Registration.attendee_email == email,
            )
        )
        return result.scalar_one_or_none()

    async def register(self, event_id: int, payload: Any) -> Registration:
        """
        Register an attendee for an event.

        A previously cancelled registration for the same email is confirmed
        again rather than duplicated.

        Raises:
            ValidationError: on invalid attendee details.
            NotFoundError: if the event does not exist.
            RegistrationClosedError: if the event is not published or the deadline passed.
            CapacityExceededError: if the event is full.
            DuplicateError: if the email already holds a confirmed registration.
        """
        data = validate_payload(RegistrationCreate, payload, now=self.clock())
        now = self.clock()

        async with self.db_manager.transaction(self.session):
            if not await self._claim_spot(event_id, now):
                refusal = await self._refusal(event_id, now)
                logger.info(f"Registration refused for event {event_id}: {refusal}")
                raise refusal

            registration = await self._find(event_id, data.attendee_email)
            if registration is not None:
                if registration.status == RegistrationStatus.CONFIRMED:
                    raise DuplicateError("Registration", "attendee_email", data.attendee_email)
                registration.attendee_name = data.attendee_name
                registration.attendee_phone = data.attendee_phone
                registration.status = RegistrationStatus.CONFIRMED
                registration.on_update(now)
            else:
                registration = Registration(event_id=event_id, **data.model_dump())
                registration.on_create(now)
                self.session.add(registration)

            await self._touch_event(event_id, now)
            try:
                await self.session.flush()
            except IntegrityError as exc:
                if not is_unique_violation(exc, "attendee_email"):
                    raise
                raise DuplicateError("Registration", "attendee_email", data.attendee_email) from exc

        logger.info(f"Registration {registration.id} confirmed for event {event_id}")
        return registration

    async def cancel(self, registration_id: int) -> Registration:
        """
        Cancel a confirmed registration and give its spot back

        Raises:
            NotFoundError: if the registration does not exist.
            ConflictError: if it is already cancelled.
        """
        now = self.clock()

        async with self.db_manager.transaction(self.session):
            registration = await self.get(registration_id)
            if registration.status == RegistrationStatus.CANCELLED:
                raise ConflictError(
                    "Registration is already cancelled",
                    code="ALREADY_CANCELLED",
                    details={"registration_id": registration_id}
                )
            registration.status = RegistrationStatus.CANCELLED
            registration.on_update(now)

            if not await self._release_spot(registration.event_id):
                logger.warning(f"Event {registration.event_id} counter already at zero on cancel")
            await self._touch_event(registration.event_id, now)
            await self.session.flush()

        logger.info(f"Registration {registration_id} cancelled for event {registration.event_id}")
        return registration

    async def get(self, registration_id: int) -> Registration:
        registration = await self.session.get(Registration, registration_id, populate_existing=True)
        if registration is None:
            raise NotFoundError("Registration", registration_id)
        return registration

    async def list_for_event(
        self,
        event_id: int,
        status: Optional[RegistrationStatus] = None
    ) -> List[Registration]:
        """Registrations for an event in the order they were made"""
        if await self.session.get(Event, event_id) is None:
            raise NotFoundError("Event", event_id)

        stmt = select(Registration).where(Registration.event_id == event_id)
        if status is not None:
            stmt = stmt.where(Registration.status == status)
        result = await self.session.execute(stmt.order_by(Registration.created_at, Registration.id))
        return list(result.scalars().all())
