"""
Repositories for jobs and their timeline.

``JobRepository.claim`` is the only at-most-one operation in the system: it
assigns a pool job with a single conditional UPDATE so two technicians racing
for the same job cannot both win.
"""

from datetime import datetime

from sqlalchemy import case, select, update

from fieldcrm.db.jobs.constants import PRIORITY_ORDER, JobStatus
from fieldcrm.db.jobs.model import Job, JobTimelineEvent
from fieldcrm.db.repository import CrudRepository
from fieldcrm.utils.logger import logger


class JobRepository(CrudRepository[Job]):
    """Repository for managing jobs in the database."""

    model = Job

    async def list_jobs(
        self,
        status: str | None = None,
        technician_id: str | None = None,
        salesperson_id: str | None = None,
    ) -> list[Job]:
        stmt = select(Job).order_by(Job.created_at.desc())
        if status:
            stmt = stmt.where(Job.status == status)
        if technician_id:
            stmt = stmt.where(Job.assigned_technician_id == technician_id)
        if salesperson_id:
            stmt = stmt.where(Job.assigned_salesperson_id == salesperson_id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_pool(self) -> list[Job]:
        """
        Pending, unassigned jobs, most urgent first then oldest first.

        Returns:
            list[Job]: Claimable jobs
        """
        priority_rank = case(PRIORITY_ORDER, value=Job.priority, else_=len(PRIORITY_ORDER))
        stmt = (
            select(Job)
            .where(Job.status == JobStatus.PENDING.value)
            .where(Job.assigned_technician_id.is_(None))
            .order_by(priority_rank, Job.created_at.asc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def claim(self, job_id: str, technician_id: str, now: datetime) -> bool:
        """
        Assign a pool job to a technician if it is still unclaimed.

        Args:
            job_id: Job to claim
            technician_id: Claiming technician
            now: Assignment timestamp

        Returns:
            bool: True if this call won the job, False if it was already taken
        """
        stmt = (
            update(Job)
            .where(Job.id == job_id)
            .where(Job.status == JobStatus.PENDING.value)
            .where(Job.assigned_technician_id.is_(None))
            .values(
                assigned_technician_id=technician_id,
                status=JobStatus.ASSIGNED.value,
                assigned_at=now,
                updated_at=now,
            )
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        claimed = result.rowcount == 1
        logger.info(
            "[JobRepository] Claim attempt",
            job_id=job_id,
            technician_id=technician_id,
            claimed=claimed,
        )
        return claimed

    async def list_completed_between(
        self, start: datetime, end: datetime, technician_id: str | None = None
    ) -> list[Job]:
        stmt = (
            select(Job)
            .where(Job.status == JobStatus.COMPLETED.value)
            .where(Job.completed_at >= start)
            .where(Job.completed_at <= end)
            .order_by(Job.completed_at.asc())
        )
        if technician_id:
            stmt = stmt.where(Job.assigned_technician_id == technician_id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_created_between(
        self, start: datetime | None = None, end: datetime | None = None
    ) -> list[Job]:
        stmt = select(Job).order_by(Job.created_at.asc())
        if start:
            stmt = stmt.where(Job.created_at >= start)
        if end:
            stmt = stmt.where(Job.created_at <= end)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())


class JobTimelineRepository(CrudRepository[JobTimelineEvent]):
    model = JobTimelineEvent

    async def list_for_job(self, job_id: str) -> list[JobTimelineEvent]:
        result = await self.session.execute(
            select(JobTimelineEvent)
            .where(JobTimelineEvent.job_id == job_id)
            .order_by(JobTimelineEvent.created_at.asc())
        )
        return list(result.scalars().all())
