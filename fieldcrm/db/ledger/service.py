"""
Lead fees and revenue events recorded against jobs.

Revenue events are the authoritative revenue record for reporting; their
``net_profit`` is always ``gross_revenue - total_costs``.
"""

from datetime import UTC, datetime

from sqlalchemy.ext.asyncio import AsyncSession

from fieldcrm.config import AppSettings, get_app_settings
from fieldcrm.db.jobs.model import Job, JobTimelineEvent
from fieldcrm.db.jobs.repository import JobRepository, JobTimelineRepository
from fieldcrm.db.ledger.model import JobLeadFee, JobRevenueEvent
from fieldcrm.db.ledger.repository import (
    JobLeadFeeRepository,
    JobRevenueEventRepository,
)
from fieldcrm.db.ledger.schemas import (
    LeadFeeCreate,
    LeadFeeUpdate,
    RevenueEventCreate,
    RevenueEventUpdate,
)
from fieldcrm.exceptions import NotFoundError
from fieldcrm.utils.money import round_money, to_decimal


class LedgerService:
    def __init__(self, session: AsyncSession, settings: AppSettings | None = None):
        self.session = session
        self.settings = settings or get_app_settings()
        self.lead_fees = JobLeadFeeRepository(session)
        self.revenue_events = JobRevenueEventRepository(session)
        self.jobs = JobRepository(session)
        self.timeline = JobTimelineRepository(session)

    async def _get_job(self, job_id: str) -> Job:
        job = await self.jobs.get_by_id(job_id)
        if not job:
            raise NotFoundError(f"Job {job_id} not found")
        return job

    async def create_lead_fee(
        self, data: LeadFeeCreate, created_by: str | None = None
    ) -> JobLeadFee:
        """Charge a lead fee for a job and note it on the job timeline."""
        job = await self._get_job(data.job_id)
        fee = await self.lead_fees.add(
            JobLeadFee(
                job_id=job.id,
                technician_id=data.technician_id,
                amount=data.amount
                if data.amount is not None
                else self.settings.lead_fee_per_job,
                accepted_at=data.accepted_at or datetime.now(UTC),
                notes=data.notes,
            )
        )
        await self.timeline.add(
            JobTimelineEvent(
                job_id=job.id,
                event_type="lead_fee",
                description=f"Lead fee of ${fee.amount} charged",
                created_by=created_by,
            )
        )
        return fee

    async def update_lead_fee(self, fee_id: str, data: LeadFeeUpdate) -> JobLeadFee:
        fee = await self.lead_fees.update(fee_id, data)
        if not fee:
            raise NotFoundError(f"Lead fee {fee_id} not found")
        return fee

    async def create_revenue_event(self, data: RevenueEventCreate) -> JobRevenueEvent:
        job = await self._get_job(data.job_id)
        gross = round_money(to_decimal(data.gross_revenue))
        costs = round_money(to_decimal(data.total_costs))
        return await self.revenue_events.add(
            JobRevenueEvent(
                job_id=job.id,
                technician_id=data.technician_id or job.assigned_technician_id,
                gross_revenue=gross,
                total_costs=costs,
                net_profit=gross - costs,
                notes=data.notes,
                recorded_at=data.recorded_at or datetime.now(UTC),
            )
        )

    async def update_revenue_event(
        self, event_id: str, data: RevenueEventUpdate
    ) -> JobRevenueEvent:
        event = await self.revenue_events.get_by_id(event_id)
        if not event:
            raise NotFoundError(f"Revenue event {event_id} not found")
        for field, value in data.model_dump(exclude_unset=True).items():
            setattr(event, field, value)
        event.net_profit = round_money(
            to_decimal(event.gross_revenue) - to_decimal(event.total_costs)
        )
        return await self.revenue_events.save(event)
