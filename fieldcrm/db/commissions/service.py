"""
Salesperson commission calculation and approval.

A commission is calculated at most once per job and salesperson. Its rate is
copied from the salesperson when calculated, and its status only moves
pending -> approved -> paid.
"""

from datetime import UTC, datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from fieldcrm.analytics.sales import calculate_commission
from fieldcrm.db.commissions.constants import COMMISSION_TRANSITIONS, CommissionStatus
from fieldcrm.db.commissions.model import SalesCommission
from fieldcrm.db.commissions.repository import SalesCommissionRepository
from fieldcrm.db.commissions.schemas import CommissionUpdate
from fieldcrm.db.jobs.repository import JobRepository
from fieldcrm.db.salespersons.repository import SalespersonRepository
from fieldcrm.exceptions import InvalidTransitionError, NotFoundError
from fieldcrm.utils.logger import logger


class CommissionService:
    """Service for calculating and settling salesperson commissions."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.commissions = SalesCommissionRepository(session)
        self.jobs = JobRepository(session)
        self.salespersons = SalespersonRepository(session)

    async def get_commission(self, commission_id: str) -> SalesCommission:
        commission = await self.commissions.get_by_id(commission_id)
        if not commission:
            raise NotFoundError(f"Commission {commission_id} not found")
        return commission

    async def calculate(
        self, job_id: str, salesperson_id: str, now: datetime | None = None
    ) -> tuple[SalesCommission, bool]:
        """
        Calculate the commission for a completed job.

        Returns:
            tuple[SalesCommission, bool]: The commission and whether it was
                newly created (False when one already existed)

        Raises:
            NotFoundError: If the job or salesperson does not exist
            CommissionNotApplicableError: If the job is not completed or made no profit
        """
        existing = await self.commissions.get_for_job_and_salesperson(
            job_id, salesperson_id
        )
        if existing:
            return existing, False

        job = await self.jobs.get_by_id(job_id)
        if not job:
            raise NotFoundError(f"Job {job_id} not found")
        salesperson = await self.salespersons.get_by_id(salesperson_id)
        if not salesperson:
            raise NotFoundError(f"Salesperson {salesperson_id} not found")

        figures = calculate_commission(job, salesperson.commission_rate)
        try:
            commission = await self.commissions.add(
                SalesCommission(
                    salesperson_id=salesperson.id,
                    job_id=job.id,
                    lead_id=job.lead_id,
                    job_revenue=figures.job_revenue,
                    labor_cost=figures.labor_cost,
                    materials_cost=figures.materials_cost,
                    travel_expense=figures.travel_expense,
                    equipment_cost=figures.equipment_cost,
                    other_expenses=figures.other_expenses,
                    total_costs=figures.total_costs,
                    net_profit=figures.net_profit,
                    commission_rate=figures.commission_rate,
                    commission_amount=figures.commission_amount,
                    status=CommissionStatus.PENDING.value,
                    calculated_at=now or datetime.now(UTC),
                )
            )
        except IntegrityError:
            # Another request calculated it between the lookup and the insert
            logger.info(
                "Commission calculation race detected, retrying lookup",
                job_id=job_id,
                salesperson_id=salesperson_id,
            )
            await self.session.rollback()
            existing = await self.commissions.get_for_job_and_salesperson(
                job_id, salesperson_id
            )
            if existing:
                return existing, False
            logger.error(
                "Commission still not found after IntegrityError", job_id=job_id
            )
            raise

        logger.info(
            "Commission calculated",
            commission_id=commission.id,
            job_id=job.id,
            salesperson_id=salesperson.id,
            amount=str(commission.commission_amount),
        )
        return commission, True

    async def update(
        self,
        commission_id: str,
        data: CommissionUpdate,
        updated_by: str | None = None,
        now: datetime | None = None,
    ) -> SalesCommission:
        """
        Update a commission, stamping approval and payment times.

        Raises:
            NotFoundError: If the commission does not exist
            InvalidTransitionError: If the status change skips or reverses a step
        """
        now = now or datetime.now(UTC)
        commission = await self.get_commission(commission_id)

        if data.status is not None and data.status.value != commission.status:
            current = CommissionStatus(commission.status)
            if data.status not in COMMISSION_TRANSITIONS[current]:
                raise InvalidTransitionError(
                    "commission", current.value, data.status.value
                )
            commission.status = data.status.value
            if data.status == CommissionStatus.APPROVED:
                commission.approved_at = now
                commission.approved_by = updated_by
            elif data.status == CommissionStatus.PAID:
                commission.paid_at = now

        for field, value in data.model_dump(
            exclude_unset=True, exclude={"status"}
        ).items():
            setattr(commission, field, value)

        return await self.commissions.save(commission)
