"""Tests for the job workflow service with mocked repositories."""

from datetime import UTC, datetime
from decimal import Decimal
from http import HTTPStatus
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from fieldcrm.config import AppSettings
from fieldcrm.db.jobs.model import Job
from fieldcrm.db.jobs.service import JobService
from fieldcrm.db.technicians.model import Technician
from fieldcrm.exceptions import (
    FieldCRMError,
    InvalidTransitionError,
    JobUnavailableError,
    NotApprovedForJobTypeError,
    NotFoundError,
)

NOW = datetime(2026, 3, 4, 10, 0, tzinfo=UTC)
JOB_LAT = Decimal("41.8781000")
JOB_LNG = Decimal("-87.6298000")


def _returns_argument(instance):
    return instance


def make_job(**overrides) -> Job:
    values = {
        "id": "job-1",
        "customer_name": "Dana Ruiz",
        "customer_phone": "312-555-0101",
        "address": "100 W Randolph St",
        "service_type": "Drain Cleaning",
        "status": "pending",
        "priority": "normal",
        "assigned_technician_id": None,
        "latitude": JOB_LAT,
        "longitude": JOB_LNG,
        "labor_hours": Decimal("0"),
        "labor_rate": Decimal("25.00"),
        "materials_cost": Decimal("0"),
        "travel_expense": Decimal("0"),
        "equipment_cost": Decimal("0"),
        "other_expenses": Decimal("0"),
        "total_revenue": Decimal("0"),
    }
    values.update(overrides)
    return Job(**values)


def make_technician(**overrides) -> Technician:
    values = {
        "id": "tech-1",
        "user_id": "user-tech-1",
        "full_name": "Marcus Bell",
        "phone": "312-555-0199",
        "status": "available",
        "approved_job_types": [],
        "completed_jobs_today": 0,
    }
    values.update(overrides)
    return Technician(**values)


@pytest.fixture
def mock_session():
    return AsyncMock(spec=AsyncSession)


@pytest.fixture
def service(mock_session):
    service = JobService(mock_session, settings=AppSettings())
    service.jobs = AsyncMock()
    service.jobs.save.side_effect = _returns_argument
    service.timeline = AsyncMock()
    service.timeline.add.side_effect = _returns_argument
    service.technicians = AsyncMock()
    service.technicians.save.side_effect = _returns_argument
    service.notifications = AsyncMock()
    service.revenue_events = AsyncMock()
    return service


def recorded_events(service) -> list:
    return [call.args[0] for call in service.timeline.add.await_args_list]


class TestAssign:
    @pytest.mark.asyncio
    async def test_assign_pending_job(self, service):
        job = make_job()
        service.jobs.get_by_id.return_value = job
        service.technicians.get_by_id.return_value = make_technician()

        result = await service.assign("job-1", "tech-1", dispatcher_id="disp-1", now=NOW)

        assert result.status == "assigned"
        assert result.assigned_technician_id == "tech-1"
        assert result.assigned_at == NOW
        assert result.dispatcher_id == "disp-1"
        notification = service.notifications.add.await_args.args[0]
        assert notification.user_id == "user-tech-1"
        assert notification.job_id == "job-1"
        assert recorded_events(service)[0].event_type == "assigned"

    @pytest.mark.asyncio
    async def test_reassign_before_confirmation(self, service):
        service.jobs.get_by_id.return_value = make_job(
            status="assigned", assigned_technician_id="tech-1"
        )
        service.technicians.get_by_id.return_value = make_technician(
            id="tech-2", user_id=None
        )

        result = await service.assign("job-1", "tech-2", now=NOW)

        assert result.assigned_technician_id == "tech-2"
        service.notifications.add.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_assign_confirmed_job_is_rejected(self, service):
        service.jobs.get_by_id.return_value = make_job(status="confirmed")
        service.technicians.get_by_id.return_value = make_technician()

        with pytest.raises(InvalidTransitionError):
            await service.assign("job-1", "tech-1", now=NOW)

        service.jobs.save.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_job(self, service):
        service.jobs.get_by_id.return_value = None

        with pytest.raises(NotFoundError):
            await service.assign("nope", "tech-1")


class TestClaim:
    @pytest.mark.asyncio
    async def test_claim_wins(self, service, mock_session):
        service.jobs.get_by_id.return_value = make_job()
        service.technicians.get_by_id.return_value = make_technician()
        service.jobs.claim.return_value = True

        await service.claim("job-1", "tech-1", now=NOW)

        service.jobs.claim.assert_awaited_once_with("job-1", "tech-1", NOW)
        mock_session.refresh.assert_awaited_once()
        assert "Claimed by Marcus Bell" in recorded_events(service)[0].description

    @pytest.mark.asyncio
    async def test_claim_lost_race(self, service):
        service.jobs.get_by_id.return_value = make_job()
        service.technicians.get_by_id.return_value = make_technician()
        service.jobs.claim.return_value = False

        with pytest.raises(JobUnavailableError) as exc_info:
            await service.claim("job-1", "tech-1", now=NOW)

        assert exc_info.value.status_code == HTTPStatus.CONFLICT

    @pytest.mark.asyncio
    async def test_claim_already_assigned(self, service):
        service.jobs.get_by_id.return_value = make_job(
            status="assigned", assigned_technician_id="tech-2"
        )
        service.technicians.get_by_id.return_value = make_technician()

        with pytest.raises(JobUnavailableError):
            await service.claim("job-1", "tech-1", now=NOW)

        service.jobs.claim.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_claim_requires_approval(self, service):
        service.jobs.get_by_id.return_value = make_job(service_type="Sewer Main - Replace")
        service.technicians.get_by_id.return_value = make_technician(
            approved_job_types=["Drain Cleaning"]
        )

        with pytest.raises(NotApprovedForJobTypeError) as exc_info:
            await service.claim("job-1", "tech-1", now=NOW)

        assert exc_info.value.status_code == HTTPStatus.FORBIDDEN

    @pytest.mark.asyncio
    async def test_pool_is_filtered_by_approved_types(self, service):
        service.technicians.get_by_id.return_value = make_technician(
            approved_job_types=["Drain Cleaning"]
        )
        service.jobs.list_pool.return_value = [
            make_job(id="job-1"),
            make_job(id="job-2", service_type="Sewer Main - Replace"),
        ]

        pool = await service.list_pool("tech-1")

        assert [job.id for job in pool] == ["job-1"]


class TestArrive:
    @pytest.mark.asyncio
    async def test_verified_within_radius(self, service):
        service.jobs.get_by_id.return_value = make_job(
            status="en_route", assigned_technician_id="tech-1"
        )

        job = await service.arrive(
            "job-1", latitude=41.8785, longitude=-87.6298, technician_id="tech-1", now=NOW
        )

        assert job.status == "on_site"
        assert job.arrived_at == NOW
        assert job.arrival_verified is True
        assert 0 < job.arrival_distance < 150
        event = recorded_events(service)[0]
        assert event.event_metadata["arrival_verified"] is True
        assert "Location verified" in event.description

    @pytest.mark.asyncio
    async def test_outside_radius_is_not_verified(self, service):
        service.jobs.get_by_id.return_value = make_job(status="en_route")

        job = await service.arrive("job-1", latitude=41.89, longitude=-87.6298, now=NOW)

        assert job.status == "on_site"
        assert job.arrival_verified is False
        assert job.arrival_distance > 1000

    @pytest.mark.asyncio
    async def test_no_fix_leaves_verification_unknown(self, service):
        service.jobs.get_by_id.return_value = make_job(status="en_route")

        job = await service.arrive("job-1", latitude=41.8785, longitude=None, now=NOW)

        assert job.status == "on_site"
        assert job.arrival_verified is None
        assert job.arrival_distance is None
        assert job.arrival_lat is None
        assert recorded_events(service)[0].description == "Technician arrived at job site"

    @pytest.mark.asyncio
    async def test_other_technician_cannot_arrive(self, service):
        service.jobs.get_by_id.return_value = make_job(
            status="en_route", assigned_technician_id="tech-2"
        )

        with pytest.raises(FieldCRMError) as exc_info:
            await service.arrive("job-1", technician_id="tech-1", now=NOW)

        assert exc_info.value.status_code == HTTPStatus.FORBIDDEN


class TestComplete:
    @pytest.mark.asyncio
    async def test_complete_records_revenue_and_frees_technician(self, service):
        technician = make_technician(status="busy", current_job_id="job-1")
        service.jobs.get_by_id.return_value = make_job(
            status="in_progress", assigned_technician_id="tech-1"
        )
        service.technicians.get_by_id.return_value = technician
        service.revenue_events.exists_for_job.return_value = False

        job = await service.complete(
            "job-1",
            {
                "labor_hours": Decimal("2"),
                "materials_cost": Decimal("40"),
                "total_revenue": Decimal("400"),
            },
            technician_id="tech-1",
            now=NOW,
        )

        assert job.status == "completed"
        assert job.completed_at == NOW
        assert job.labor_cost == Decimal("50.00")
        assert job.total_cost == Decimal("90.00")
        assert job.profit == Decimal("310.00")
        revenue_event = service.revenue_events.add.await_args.args[0]
        assert revenue_event.gross_revenue == Decimal("400")
        assert revenue_event.net_profit == Decimal("310.00")
        assert revenue_event.technician_id == "tech-1"
        assert technician.status == "available"
        assert technician.current_job_id is None
        assert technician.completed_jobs_today == 1

    @pytest.mark.asyncio
    async def test_existing_revenue_event_is_not_duplicated(self, service):
        service.jobs.get_by_id.return_value = make_job(status="in_progress")
        service.revenue_events.exists_for_job.return_value = True

        await service.complete("job-1", {"total_revenue": Decimal("100")}, now=NOW)

        service.revenue_events.add.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_complete_before_start_changes_nothing(self, service):
        job = make_job(status="on_site")
        service.jobs.get_by_id.return_value = job

        with pytest.raises(InvalidTransitionError):
            await service.complete("job-1", {"total_revenue": Decimal("100")}, now=NOW)

        assert job.total_revenue == Decimal("0")
        service.jobs.save.assert_not_awaited()


class TestCancel:
    @pytest.mark.asyncio
    async def test_cancel_releases_current_technician(self, service):
        technician = make_technician(status="busy", current_job_id="job-1")
        service.jobs.get_by_id.return_value = make_job(
            status="en_route", assigned_technician_id="tech-1"
        )
        service.technicians.get_by_id.return_value = technician

        job = await service.cancel("job-1", reason="Customer rescheduled", cancelled_by="disp-1", now=NOW)

        assert job.status == "cancelled"
        assert job.cancellation_reason == "Customer rescheduled"
        assert technician.status == "available"
        assert recorded_events(service)[0].description == "Job cancelled: Customer rescheduled"

    @pytest.mark.asyncio
    async def test_cannot_cancel_completed_job(self, service):
        service.jobs.get_by_id.return_value = make_job(status="completed")

        with pytest.raises(InvalidTransitionError):
            await service.cancel("job-1", now=NOW)


class TestUpdateCosts:
    @pytest.mark.asyncio
    async def test_recomputes_totals(self, service):
        service.jobs.get_by_id.return_value = make_job(
            status="in_progress", total_revenue=Decimal("500")
        )

        job = await service.update_costs("job-1", {"travel_expense": Decimal("35")})

        assert job.total_cost == Decimal("35.00")
        assert job.profit == Decimal("465.00")
        assert recorded_events(service)[0].event_type == "costs_updated"


def test_job_service_builds_its_repositories():
    service = JobService(MagicMock(spec=AsyncSession), settings=AppSettings())

    assert service.jobs.session is service.session
    assert service.revenue_events.session is service.session
