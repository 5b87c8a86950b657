"""
Tests for OrganizerService
"""

import pytest
from sqlalchemy.exc import IntegrityError

from eventmgmt.core.exceptions import (
    ConflictError, DuplicateError, NotFoundError, ValidationError
)
from eventmgmt.models.organizer import OrganizationType, Organizer, OrganizerStatus
from eventmgmt.schemas import OrganizerResponse


class TestOrganizerService:
    """Test suite for organizer operations"""

    @pytest.mark.asyncio
    async def test_create_organizer(self, organizer_service, organizer_data, clock):
        organizer = await organizer_service.create({**organizer_data, "organization_type": "EDUCATIONAL"})

        assert organizer.id is not None
        assert organizer.status == OrganizerStatus.PENDING_VERIFICATION
        assert organizer.organization_type == OrganizationType.EDUCATIONAL
        assert organizer.created_at == organizer.updated_at == clock()

    @pytest.mark.asyncio
    async def test_duplicate_email_is_a_uniqueness_error(self, organizer_service, organizer_data):
        organizer_data["email"] = "dup@x.com"
        first = await organizer_service.create(organizer_data)
        first_id = first.id

        with pytest.raises(DuplicateError) as exc_info:
            await organizer_service.create({**organizer_data, "organization_name": "Copycat"})

        assert not isinstance(exc_info.value, ValidationError)
        assert exc_info.value.field == "email"
        assert exc_info.value.status_code == 409

        # The session is usable again after the rollback
        survivors = await organizer_service.list()
        assert [o.id for o in survivors] == [first_id]

    @pytest.mark.asyncio
    async def test_update_to_taken_email(self, organizer_service, organizer_data):
        await organizer_service.create({**organizer_data, "email": "taken@example.com"})
        other = await organizer_service.create({**organizer_data, "email": "free@example.com"})
        other_id = other.id

        with pytest.raises(DuplicateError):
            await organizer_service.update(other_id, {"email": "taken@example.com"})

        assert (await organizer_service.get(other_id)).email == "free@example.com"

    @pytest.mark.asyncio
    async def test_update_cannot_null_status(self, organizer_service, test_organizer):
        organizer_id = test_organizer.id

        with pytest.raises(ValidationError) as exc_info:
            await organizer_service.update(organizer_id, {"status": None})

        assert not isinstance(exc_info.value, DuplicateError)
        assert exc_info.value.messages_for("status") == ["Status is required"]
        assert (await organizer_service.get(organizer_id)).status == OrganizerStatus.PENDING_VERIFICATION

    @pytest.mark.asyncio
    async def test_other_integrity_failures_are_not_duplicates(self, organizer_service, db_session, clock):
        organizer = Organizer(
            organization_name="No Status Org",
            contact_person="Sam",
            email="nostatus@example.com",
            phone_number="+15551234567",
            address="4 Lane",
        )
        organizer.on_create(clock())
        organizer.status = None
        db_session.add(organizer)

        with pytest.raises(IntegrityError):
            await organizer_service._flush_unique_email(organizer.email)

        await db_session.rollback()

    @pytest.mark.asyncio
    async def test_invalid_phone(self, organizer_service, organizer_data):
        organizer_data["phone_number"] = "12345"
        with pytest.raises(ValidationError) as exc_info:
            await organizer_service.create(organizer_data)

        assert exc_info.value.messages_for("phone_number") == ["Phone number should be valid"]

    @pytest.mark.asyncio
    async def test_update_and_verify(self, organizer_service, test_organizer, clock):
        created_at = test_organizer.created_at
        clock.advance(hours=1)

        organizer = await organizer_service.update(test_organizer.id, {"status": "ACTIVE", "city": "Austin"})

        assert organizer.status == OrganizerStatus.ACTIVE
        assert organizer.city == "Austin"
        assert organizer.created_at == created_at
        assert organizer.updated_at == clock()

    @pytest.mark.asyncio
    async def test_get_by_email(self, organizer_service, test_organizer):
        found = await organizer_service.get_by_email(test_organizer.email)
        assert found.id == test_organizer.id

        with pytest.raises(NotFoundError):
            await organizer_service.get_by_email("nobody@example.com")

    @pytest.mark.asyncio
    async def test_response_schema(self, test_organizer):
        response = OrganizerResponse.model_validate(test_organizer)
        assert response.email == test_organizer.email
        assert response.status == OrganizerStatus.PENDING_VERIFICATION


class TestOrganizerDeletion:

    @pytest.mark.asyncio
    async def test_delete_refuses_when_events_exist(self, organizer_service, test_event):
        organizer_id = test_event.organizer_id
        with pytest.raises(ConflictError):
            await organizer_service.delete(organizer_id)

        assert len(await organizer_service.get_events(organizer_id)) == 1

    @pytest.mark.asyncio
    async def test_delete_cascade(self, organizer_service, event_service, test_event):
        organizer_id = test_event.organizer_id
        event_id = test_event.id

        assert await organizer_service.delete_cascade(organizer_id) == 1

        with pytest.raises(NotFoundError):
            await event_service.get(event_id)
        with pytest.raises(NotFoundError):
            await organizer_service.get(organizer_id)

    @pytest.mark.asyncio
    async def test_delete_unused(self, organizer_service, test_organizer):
        organizer_id = test_organizer.id
        await organizer_service.delete(organizer_id)

        assert await organizer_service.list() == []
