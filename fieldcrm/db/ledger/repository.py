"""Repositories for job lead fees and revenue events."""

from sqlalchemy import select

from fieldcrm.db.ledger.model import JobLeadFee, JobRevenueEvent
from fieldcrm.db.repository import CrudRepository


class JobLeadFeeRepository(CrudRepository[JobLeadFee]):
    model = JobLeadFee

    async def list_fees(
        self, job_id: str | None = None, technician_id: str | None = None
    ) -> list[JobLeadFee]:
        stmt = select(JobLeadFee).order_by(JobLeadFee.accepted_at.desc())
        if job_id:
            stmt = stmt.where(JobLeadFee.job_id == job_id)
        if technician_id:
            stmt = stmt.where(JobLeadFee.technician_id == technician_id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())


class JobRevenueEventRepository(CrudRepository[JobRevenueEvent]):
    model = JobRevenueEvent

    async def list_events(
        self, job_id: str | None = None, technician_id: str | None = None
    ) -> list[JobRevenueEvent]:
        stmt = select(JobRevenueEvent).order_by(JobRevenueEvent.recorded_at.desc())
        if job_id:
            stmt = stmt.where(JobRevenueEvent.job_id == job_id)
        if technician_id:
            stmt = stmt.where(JobRevenueEvent.technician_id == technician_id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def exists_for_job(self, job_id: str) -> bool:
        result = await self.session.execute(
            select(JobRevenueEvent.id).where(JobRevenueEvent.job_id == job_id).limit(1)
        )
        return result.scalar_one_or_none() is not None
