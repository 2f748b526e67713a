"""Tests for lead creation, duplicate detection and first contact."""

from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from fieldcrm.config import AppSettings
from fieldcrm.db.leads.constants import LeadPriority
from fieldcrm.db.leads.model import Lead
from fieldcrm.db.leads.schemas import LeadCreate
from fieldcrm.db.leads.service import LeadService
from fieldcrm.db.users.model import User
from fieldcrm.exceptions import NotFoundError

NOW = datetime(2026, 4, 2, 14, 0, tzinfo=UTC)


def _assign_id(lead):
    lead.id = lead.id or "lead-new"
    return lead


@pytest.fixture
def mock_session():
    return AsyncMock(spec=AsyncSession)


@pytest.fixture
def service(mock_session):
    service = LeadService(mock_session, settings=AppSettings())
    service.leads = AsyncMock()
    service.leads.add.side_effect = _assign_id
    service.leads.save.side_effect = lambda lead: lead
    service.leads.find_by_phone.return_value = []
    service.notifications = AsyncMock()
    service.users = AsyncMock()
    service.users.list_by_role.return_value = []
    return service


def lead_data(**overrides) -> LeadCreate:
    values = {
        "source": "eLocal",
        "customer_name": "Priya Shah",
        "customer_phone": "773-555-0142",
        "zip_code": "60614",
        "service_type": "Hydro Jetting",
    }
    values.update(overrides)
    return LeadCreate(**values)


class TestCreateLead:
    @pytest.mark.asyncio
    async def test_scores_and_sets_sla(self, service):
        lead, was_duplicate = await service.create_lead(
            lead_data(priority=LeadPriority.URGENT), now=NOW
        )

        assert was_duplicate is False
        assert lead.status == "new"
        assert lead.priority == "urgent"
        # 50 base + 15 medium service + 10 eLocal + 20 urgent + 10 service area
        assert lead.lead_score == 100
        assert lead.sla_deadline == NOW + timedelta(minutes=15)
        assert lead.is_duplicate is False

    @pytest.mark.asyncio
    async def test_normal_priority_gets_default_sla(self, service):
        lead, _ = await service.create_lead(lead_data(), now=NOW)

        assert lead.sla_deadline == NOW + timedelta(minutes=60)
        assert lead.lead_score == 85

    @pytest.mark.asyncio
    async def test_new_lead_notifies_admins_and_dispatchers(self, service):
        admin = User(id="admin-1", username="admin", password_hash="x", role="admin")
        dispatcher = User(
            id="disp-1", username="dispatch", password_hash="x", role="dispatcher"
        )
        service.users.list_by_role.side_effect = [[admin], [dispatcher]]

        await service.create_lead(lead_data(), now=NOW)

        recipients = [
            call.args[0].user_id for call in service.notifications.add.await_args_list
        ]
        assert recipients == ["admin-1", "disp-1"]
        assert "Priya Shah from eLocal" in (
            service.notifications.add.await_args_list[0].args[0].message
        )

    @pytest.mark.asyncio
    async def test_duplicate_points_at_oldest_original(self, service):
        original = Lead(id="lead-1", customer_phone="773-555-0142", is_duplicate=False)
        earlier_dup = Lead(id="lead-2", customer_phone="773-555-0142", is_duplicate=True)
        newer = Lead(id="lead-3", customer_phone="773-555-0142", is_duplicate=False)
        service.leads.find_by_phone.return_value = [original, earlier_dup, newer]

        lead, was_duplicate = await service.create_lead(lead_data(), now=NOW)

        assert was_duplicate is True
        assert lead.status == "duplicate"
        assert lead.is_duplicate is True
        assert lead.duplicate_of_id == "lead-1"
        service.notifications.add.assert_not_awaited()


class TestMarkContacted:
    @pytest.mark.asyncio
    async def test_within_sla(self, service):
        lead = Lead(
            id="lead-1",
            status="new",
            created_at=NOW - timedelta(minutes=10),
            sla_deadline=NOW + timedelta(minutes=50),
        )
        service.leads.get_by_id.return_value = lead

        result = await service.mark_contacted("lead-1", now=NOW)

        assert result.sla_breached is False
        assert result.response_time_minutes == 10
        assert result.lead.status == "contacted"
        assert result.lead.contacted_at == NOW

    @pytest.mark.asyncio
    async def test_after_deadline_is_breached(self, service):
        lead = Lead(
            id="lead-1",
            status="qualified",
            created_at=NOW - timedelta(minutes=90),
            sla_deadline=NOW - timedelta(minutes=30),
        )
        service.leads.get_by_id.return_value = lead

        result = await service.mark_contacted("lead-1", now=NOW)

        assert result.sla_breached is True
        assert result.lead.sla_breach is True
        assert result.lead.status == "qualified"

    @pytest.mark.asyncio
    async def test_missing_lead(self, service):
        service.leads.get_by_id.return_value = None

        with pytest.raises(NotFoundError):
            await service.mark_contacted("missing", now=NOW)


class TestRecalculateScores:
    @pytest.mark.asyncio
    async def test_rescored_in_place(self, service, mock_session):
        lead = Lead(
            id="lead-1",
            source="Referral",
            priority="normal",
            service_type=None,
            zip_code=None,
            lead_score=0,
        )
        service.leads.list_leads.return_value = [lead]

        count = await service.recalculate_scores()

        assert count == 1
        assert lead.lead_score == 65
        mock_session.flush.assert_awaited_once()
