"""Tests for the shared CRUD repository."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from fieldcrm.db.calls.model import Call
from fieldcrm.db.calls.repository import CallRepository


class CallNotesUpdate(BaseModel):
    notes: str | None = None
    address: str | None = None


@pytest.fixture
def session():
    return AsyncMock(spec=AsyncSession)


def returning(session, instance):
    result = MagicMock()
    result.scalar_one_or_none.return_value = instance
    session.execute.return_value = result


class TestCrudRepository:
    @pytest.mark.asyncio
    async def test_create_from_dict(self, session):
        repository = CallRepository(session)

        call = await repository.create({"caller_phone": "773-555-0123"})

        assert isinstance(call, Call)
        session.add.assert_called_once_with(call)
        session.flush.assert_awaited_once()
        session.refresh.assert_awaited_once_with(call)

    @pytest.mark.asyncio
    async def test_update_applies_only_set_fields(self, session):
        call = Call(id="call-1", caller_phone="773-555-0123", address="1 Main St")
        returning(session, call)
        repository = CallRepository(session)

        updated = await repository.update("call-1", CallNotesUpdate(notes="Callback at 5"))

        assert updated.notes == "Callback at 5"
        assert updated.address == "1 Main St"

    @pytest.mark.asyncio
    async def test_update_missing_returns_none(self, session):
        returning(session, None)
        repository = CallRepository(session)

        assert await repository.update("missing", {"notes": "x"}) is None
        session.flush.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delete(self, session):
        call = Call(id="call-1", caller_phone="773-555-0123")
        returning(session, call)
        repository = CallRepository(session)

        assert await repository.delete("call-1") is True
        session.delete.assert_awaited_once_with(call)

    @pytest.mark.asyncio
    async def test_delete_missing(self, session):
        returning(session, None)

        assert await CallRepository(session).delete("missing") is False
