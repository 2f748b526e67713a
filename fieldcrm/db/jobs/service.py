"""
Job workflow service.

Every status change goes through ``lifecycle.apply_transition`` so an action
taken from the wrong state is rejected, the matching timestamp is stamped and
a timeline event is written. Cost and revenue inputs go through
``costs.apply_cost_update`` so derived totals always match their inputs.
"""

from datetime import UTC, datetime
from decimal import Decimal
from http import HTTPStatus
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from fieldcrm.config import AppSettings, get_app_settings
from fieldcrm.db.jobs.constants import JobAction, JobStatus
from fieldcrm.db.jobs.costs import apply_cost_update, recompute_job_financials
from fieldcrm.db.jobs.lifecycle import apply_transition, next_status
from fieldcrm.db.jobs.model import Job, JobTimelineEvent
from fieldcrm.db.jobs.repository import JobRepository, JobTimelineRepository
from fieldcrm.db.jobs.schemas import JobCreate, JobUpdate
from fieldcrm.db.ledger.model import JobRevenueEvent
from fieldcrm.db.ledger.repository import JobRevenueEventRepository
from fieldcrm.db.notifications.constants import NotificationType
from fieldcrm.db.notifications.model import Notification
from fieldcrm.db.notifications.repository import NotificationRepository
from fieldcrm.db.technicians.constants import TechnicianStatus
from fieldcrm.db.technicians.model import Technician
from fieldcrm.db.technicians.repository import TechnicianRepository
from fieldcrm.exceptions import (
    FieldCRMError,
    JobUnavailableError,
    NotApprovedForJobTypeError,
    NotFoundError,
)
from fieldcrm.utils.geo import is_within_radius
from fieldcrm.utils.logger import logger
from fieldcrm.utils.money import ZERO, to_decimal


class JobService:
    """Service for the job lifecycle, costs and timeline."""

    def __init__(self, session: AsyncSession, settings: AppSettings | None = None):
        self.session = session
        self.settings = settings or get_app_settings()
        self.jobs = JobRepository(session)
        self.timeline = JobTimelineRepository(session)
        self.technicians = TechnicianRepository(session)
        self.notifications = NotificationRepository(session)
        self.revenue_events = JobRevenueEventRepository(session)

    async def get_job(self, job_id: str) -> Job:
        job = await self.jobs.get_by_id(job_id)
        if not job:
            raise NotFoundError(f"Job {job_id} not found")
        return job

    async def get_technician(self, technician_id: str) -> Technician:
        technician = await self.technicians.get_by_id(technician_id)
        if not technician:
            raise NotFoundError(f"Technician {technician_id} not found")
        return technician

    async def record_event(
        self,
        job_id: str,
        event_type: str,
        description: str,
        created_by: str | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> JobTimelineEvent:
        return await self.timeline.add(
            JobTimelineEvent(
                job_id=job_id,
                event_type=event_type,
                description=description,
                created_by=created_by,
                event_metadata=metadata or None,
            )
        )

    @staticmethod
    def _ensure_assigned_to(job: Job, technician_id: str | None) -> None:
        """Technicians may only act on their own jobs. None means unrestricted."""
        if technician_id and job.assigned_technician_id != technician_id:
            raise FieldCRMError(
                "Job is assigned to another technician", HTTPStatus.FORBIDDEN
            )

    async def create_job(self, data: JobCreate, created_by: str | None = None) -> Job:
        job = Job(**data.model_dump(exclude_none=True))
        job.priority = data.priority.value
        job.status = JobStatus.PENDING.value
        job.labor_rate = self.settings.default_hourly_rate
        recompute_job_financials(job, self.settings.default_hourly_rate)
        job = await self.jobs.add(job)
        await self.record_event(job.id, "created", "Job created", created_by)
        return job

    async def update_job(self, job_id: str, data: JobUpdate) -> Job:
        job = await self.get_job(job_id)
        for field, value in data.model_dump(exclude_unset=True).items():
            setattr(job, field, value)
        return await self.jobs.save(job)

    async def assign(
        self,
        job_id: str,
        technician_id: str,
        dispatcher_id: str | None = None,
        now: datetime | None = None,
    ) -> Job:
        """
        Assign a job to a technician and notify them.

        A job that is already assigned but not yet confirmed may be reassigned.

        Raises:
            NotFoundError: If the job or technician does not exist
            InvalidTransitionError: If the job is past the assigned state
        """
        now = now or datetime.now(UTC)
        job = await self.get_job(job_id)
        technician = await self.get_technician(technician_id)

        apply_transition(job, JobAction.ASSIGN, now)
        job.assigned_technician_id = technician.id
        job.dispatcher_id = dispatcher_id
        job = await self.jobs.save(job)

        await self.record_event(
            job.id, "assigned", f"Assigned to {technician.full_name}", dispatcher_id
        )
        if technician.user_id:
            await self.notifications.add(
                Notification(
                    user_id=technician.user_id,
                    type=NotificationType.JOB_ASSIGNED.value,
                    title="New Job Assigned",
                    message=(
                        f"You have been assigned to {job.service_type} at {job.address}"
                    ),
                    job_id=job.id,
                    action_url=f"/technician/jobs/{job.id}",
                )
            )

        logger.info("Job assigned", job_id=job.id, technician_id=technician.id)
        return job

    async def list_pool(self, technician_id: str) -> list[Job]:
        """Claimable jobs this technician is approved for, most urgent first."""
        technician = await self.get_technician(technician_id)
        jobs = await self.jobs.list_pool()
        return [job for job in jobs if technician.is_approved_for(job.service_type)]

    async def claim(
        self, job_id: str, technician_id: str, now: datetime | None = None
    ) -> Job:
        """
        Claim a pool job for a technician.

        Raises:
            NotFoundError: If the job or technician does not exist
            NotApprovedForJobTypeError: If the technician may not take this service type
            JobUnavailableError: If the job is no longer pending and unassigned,
                including when another technician claimed it first
        """
        now = now or datetime.now(UTC)
        job = await self.get_job(job_id)
        technician = await self.get_technician(technician_id)

        if not technician.is_approved_for(job.service_type):
            raise NotApprovedForJobTypeError(job.service_type)
        if job.status != JobStatus.PENDING.value or job.assigned_technician_id:
            raise JobUnavailableError()

        if not await self.jobs.claim(job.id, technician.id, now):
            raise JobUnavailableError()

        await self.session.refresh(job)
        await self.record_event(
            job.id, "assigned", f"Claimed by {technician.full_name}", technician.id
        )
        return job

    async def _advance(
        self,
        job_id: str,
        action: JobAction,
        description: str,
        technician_id: str | None,
        now: datetime | None,
    ) -> Job:
        now = now or datetime.now(UTC)
        job = await self.get_job(job_id)
        self._ensure_assigned_to(job, technician_id)
        target = apply_transition(job, action, now)
        job = await self.jobs.save(job)
        await self.record_event(
            job.id, target.value, description, technician_id or job.assigned_technician_id
        )
        return job

    async def confirm(
        self, job_id: str, technician_id: str | None = None, now: datetime | None = None
    ) -> Job:
        return await self._advance(
            job_id, JobAction.CONFIRM, "Technician confirmed assignment", technician_id, now
        )

    async def en_route(
        self, job_id: str, technician_id: str | None = None, now: datetime | None = None
    ) -> Job:
        job = await self._advance(
            job_id, JobAction.EN_ROUTE, "Technician en route to job", technician_id, now
        )
        if job.assigned_technician_id:
            technician = await self.get_technician(job.assigned_technician_id)
            technician.status = TechnicianStatus.BUSY.value
            technician.current_job_id = job.id
            await self.technicians.save(technician)
        return job

    async def arrive(
        self,
        job_id: str,
        latitude: float | None = None,
        longitude: float | None = None,
        technician_id: str | None = None,
        now: datetime | None = None,
    ) -> Job:
        """
        Mark arrival on site and verify the technician's position if possible.

        When both the technician's fix and the job's coordinates are known the
        distance between them is stored and the arrival is verified if it is
        within the configured radius. Otherwise the job still moves on site
        with ``arrival_verified`` left as None.
        """
        now = now or datetime.now(UTC)
        job = await self.get_job(job_id)
        self._ensure_assigned_to(job, technician_id)

        has_fix = latitude is not None and longitude is not None
        has_site = job.latitude is not None and job.longitude is not None

        verified = None
        distance = None
        if has_fix and has_site:
            verified, meters = is_within_radius(
                latitude,
                longitude,
                float(job.latitude),
                float(job.longitude),
                self.settings.arrival_radius_meters,
            )
            distance = round(meters)

        apply_transition(job, JobAction.ARRIVE, now)
        job.arrival_lat = Decimal(str(latitude)) if has_fix else None
        job.arrival_lng = Decimal(str(longitude)) if has_fix else None
        job.arrival_verified = verified
        job.arrival_distance = distance
        job = await self.jobs.save(job)

        metadata: dict[str, Any] = {}
        if has_fix:
            metadata["latitude"] = latitude
            metadata["longitude"] = longitude
        if verified is not None:
            metadata["arrival_verified"] = verified
            metadata["arrival_distance"] = distance
            state = "Location verified" if verified else "Location not verified"
            description = f"Technician arrived at job site ({state} - {distance}m from job site)"
        else:
            description = "Technician arrived at job site"

        await self.record_event(
            job.id,
            JobStatus.ON_SITE.value,
            description,
            technician_id or job.assigned_technician_id,
            metadata,
        )
        logger.info(
            "Job arrival recorded",
            job_id=job.id,
            arrival_verified=verified,
            arrival_distance=distance,
        )
        return job

    async def start(
        self, job_id: str, technician_id: str | None = None, now: datetime | None = None
    ) -> Job:
        return await self._advance(
            job_id, JobAction.START, "Work started", technician_id, now
        )

    async def complete(
        self,
        job_id: str,
        costs: dict[str, Any],
        technician_id: str | None = None,
        now: datetime | None = None,
    ) -> Job:
        """
        Complete a job with its final costs and revenue.

        Derived totals are recomputed, a revenue event is recorded when the
        job earned revenue and none exists yet, and the technician is freed.
        """
        now = now or datetime.now(UTC)
        job = await self.get_job(job_id)
        self._ensure_assigned_to(job, technician_id)
        next_status(job.status, JobAction.COMPLETE)

        apply_cost_update(job, costs, self.settings.default_hourly_rate)
        apply_transition(job, JobAction.COMPLETE, now)
        job = await self.jobs.save(job)

        has_revenue = to_decimal(job.total_revenue) > ZERO
        if has_revenue and not await self.revenue_events.exists_for_job(job.id):
            await self.revenue_events.add(
                JobRevenueEvent(
                    job_id=job.id,
                    technician_id=job.assigned_technician_id,
                    gross_revenue=job.total_revenue,
                    total_costs=job.total_cost,
                    net_profit=job.profit,
                    notes="Recorded at job completion",
                    recorded_at=now,
                )
            )

        await self.record_event(
            job.id,
            JobStatus.COMPLETED.value,
            "Job completed",
            technician_id or job.assigned_technician_id,
            {
                "total_revenue": str(job.total_revenue),
                "total_cost": str(job.total_cost),
                "profit": str(job.profit),
            },
        )

        if job.assigned_technician_id:
            technician = await self.get_technician(job.assigned_technician_id)
            technician.status = TechnicianStatus.AVAILABLE.value
            technician.current_job_id = None
            technician.completed_jobs_today = (technician.completed_jobs_today or 0) + 1
            await self.technicians.save(technician)

        logger.info("Job completed", job_id=job.id, profit=str(job.profit))
        return job

    async def cancel(
        self,
        job_id: str,
        reason: str | None = None,
        cancelled_by: str | None = None,
        now: datetime | None = None,
    ) -> Job:
        now = now or datetime.now(UTC)
        job = await self.get_job(job_id)
        apply_transition(job, JobAction.CANCEL, now)
        job.cancellation_reason = reason
        job.cancelled_by = cancelled_by
        job = await self.jobs.save(job)

        if job.assigned_technician_id:
            technician = await self.get_technician(job.assigned_technician_id)
            if technician.current_job_id == job.id:
                technician.status = TechnicianStatus.AVAILABLE.value
                technician.current_job_id = None
                await self.technicians.save(technician)

        await self.record_event(
            job.id,
            JobStatus.CANCELLED.value,
            f"Job cancelled{f': {reason}' if reason else ''}",
            cancelled_by,
        )
        return job

    async def update_costs(
        self,
        job_id: str,
        changes: dict[str, Any],
        technician_id: str | None = None,
        updated_by: str | None = None,
    ) -> Job:
        job = await self.get_job(job_id)
        self._ensure_assigned_to(job, technician_id)
        apply_cost_update(job, changes, self.settings.default_hourly_rate)
        job = await self.jobs.save(job)
        await self.record_event(
            job.id,
            "costs_updated",
            f"Costs updated (total cost {job.total_cost}, profit {job.profit})",
            updated_by,
        )
        return job
