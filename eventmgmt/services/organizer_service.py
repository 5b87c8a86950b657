"""
Organizer service
"""

import logging
from typing import Any, List, Optional

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from eventmgmt.config import settings
from eventmgmt.core.clock import Clock, utcnow
from eventmgmt.core.database import DatabaseManager, is_unique_violation
from eventmgmt.core.exceptions import ConflictError, DuplicateError, NotFoundError
from eventmgmt.models.event import Event
from eventmgmt.models.organizer import Organizer, OrganizerStatus
from eventmgmt.models.registration import Registration
from eventmgmt.schemas.base import validate_payload
from eventmgmt.schemas.organizer import OrganizerCreate, OrganizerUpdate

logger = logging.getLogger(__name__)


class OrganizerService:
    """Service for organizer records"""

    def __init__(
        self,
        session: AsyncSession,
        clock: Clock = utcnow,
        db_manager: Optional[DatabaseManager] = None
    ):
        self.session = session
        self.clock = clock
        self.db_manager = db_manager or DatabaseManager()

    async def _flush_unique_email(self, email: Optional[str]) -> None:
        # The unique index on organizers.email is the only arbiter of duplicates;
        # any other integrity failure propagates unchanged
        try:
            await self.session.flush()
        except IntegrityError as exc:
            if not is_unique_violation(exc, "email"):
                raise
            raise DuplicateError("Organizer", "email", email) from exc

    async def create(self, payload: Any) -> Organizer:
        """
        Validate and persist a new organizer

        Raises:
            ValidationError: if any field constraint is violated.
            DuplicateError: if another organizer already uses the email.
        """
        data = validate_payload(OrganizerCreate, payload, now=self.clock())

        async with self.db_manager.transaction(self.session):
            organizer = Organizer(**data.model_dump())
            organizer.on_create(self.clock())
            self.session.add(organizer)
            await self._flush_unique_email(organizer.email)

        logger.info(f"Organizer created: {organizer.id} ({organizer.organization_name})")
        return organizer

    async def get(self, organizer_id: int) -> Organizer:
        organizer = await self.session.get(Organizer, organizer_id, populate_existing=True)
        if organizer is None:
            raise NotFoundError("Organizer", organizer_id)
        return organizer

    async def get_by_email(self, email: str) -> Organizer:
        result = await self.session.execute(
            select(Organizer).where(Organizer.email == email)
        )
        organizer = result.scalar_one_or_none()
        if organizer is None:
            raise NotFoundError("Organizer", email)
        return organizer

    async def list(
        self,
        skip: int = 0,
        limit: Optional[int] = None,
        status: Optional[OrganizerStatus] = None
    ) -> List[Organizer]:
        limit = min(limit or settings.DEFAULT_PAGE_SIZE, settings.MAX_PAGE_SIZE)
        stmt = select(Organizer)
        if status is not None:
            stmt = stmt.where(Organizer.status == status)
        stmt = stmt.order_by(Organizer.organization_name, Organizer.id).offset(skip).limit(limit)

        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def update(self, organizer_id: int, payload: Any) -> Organizer:
        data = validate_payload(OrganizerUpdate, payload, now=self.clock())
        changes = data.model_dump(exclude_unset=True)

        async with self.db_manager.transaction(self.session):
            organizer = await self.get(organizer_id)
            for field, value in changes.items():
                setattr(organizer, field, value)
            organizer.on_update(self.clock())
            await self._flush_unique_email(organizer.email)

        logger.info(f"Organizer updated: {organizer_id} fields={sorted(changes)}")
        return organizer

    async def count_events(self, organizer_id: int) -> int:
        result = await self.session.execute(
            select(func.count(Event.id)).where(Event.organizer_id == organizer_id)
        )
        return result.scalar_one()

    async def delete(self, organizer_id: int) -> None:
        """
        Delete an organizer that runs no events

        Raises:
            ConflictError: if events still reference the organizer.
        """
        async with self.db_manager.transaction(self.session):
            organizer = await self.get(organizer_id)
            event_count = await self.count_events(organizer_id)
            if event_count:
                raise ConflictError(
                    f"Organizer has {event_count} event(s); use delete_cascade to remove them too",
                    code="HAS_DEPENDENTS",
                    details={"organizer_id": organizer_id, "events": event_count}
                )
            await self.session.delete(organizer)

        logger.info(f"Organizer deleted: {organizer_id}")

    async def delete_cascade(self, organizer_id: int) -> int:
        """
        Delete an organizer together with its events and their registrations.

        Returns the number of events removed.
        """
        async with self.db_manager.transaction(self.session):
            organizer = await self.get(organizer_id)
            event_count = await self.count_events(organizer_id)
            event_ids = select(Event.id).where(Event.organizer_id == organizer_id)

            await self.session.execute(
                delete(Registration)
                .where(Registration.event_id.in_(event_ids))
                .execution_options(synchronize_session="fetch")
            )
            await self.session.execute(
                delete(Event)
                .where(Event.organizer_id == organizer_id)
                .execution_options(synchronize_session="fetch")
            )
            await self.session.delete(organizer)

        logger.warning(f"Organizer {organizer_id} deleted with cascade: {event_count} event(s) removed")
        return event_count

    async def get_events(self, organizer_id: int) -> List[Event]:
        """Events run by an organizer, earliest first"""
        await self.get(organizer_id)
        result = await self.session.execute(
            select(Event)
            .where(Event.organizer_id == organizer_id)
            .order_by(Event.starts_at, Event.id)
        )
        return list(result.scalars().all())
