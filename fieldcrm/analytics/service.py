"""
Loads the rows each report needs and hands them to the pure report functions.

Reports are computed on every request from current data and never stored.
"""

from datetime import UTC, datetime

from sqlalchemy.ext.asyncio import AsyncSession

from fieldcrm.analytics.earnings import EarningsReport, compute_earnings
from fieldcrm.analytics.marketing import MarketingROIReport, compute_marketing_roi
from fieldcrm.analytics.payroll import PayrollRates, PayrollReport, compute_payroll
from fieldcrm.analytics.periods import (
    EarningsRange,
    PayPeriod,
    earnings_range_bounds,
    pay_period_bounds,
)
from fieldcrm.analytics.revenue import (
    RevenueReconciliation,
    reconcile_revenue_by_technician,
)
from fieldcrm.analytics.roi import ROISummary, aggregate_roi
from fieldcrm.analytics.sales import SalesSummary, summarize_salesperson
from fieldcrm.config import AppSettings, get_app_settings
from fieldcrm.db.commissions.repository import SalesCommissionRepository
from fieldcrm.db.jobs.constants import JobStatus
from fieldcrm.db.jobs.repository import JobRepository
from fieldcrm.db.leads.repository import LeadRepository
from fieldcrm.db.ledger.repository import (
    JobLeadFeeRepository,
    JobRevenueEventRepository,
)
from fieldcrm.db.marketing.repository import MarketingSpendRepository
from fieldcrm.db.quotes.repository import QuoteRepository
from fieldcrm.db.salespersons.repository import SalespersonRepository
from fieldcrm.db.technicians.repository import TechnicianRepository
from fieldcrm.exceptions import NotFoundError
from fieldcrm.utils.logger import logger


class AnalyticsService:
    """Service for payroll, earnings, revenue, sales and marketing reports."""

    def __init__(self, session: AsyncSession, settings: AppSettings | None = None):
        self.session = session
        self.settings = settings or get_app_settings()
        self.jobs = JobRepository(session)
        self.technicians = TechnicianRepository(session)
        self.salespersons = SalespersonRepository(session)
        self.quotes = QuoteRepository(session)
        self.commissions = SalesCommissionRepository(session)
        self.lead_fees = JobLeadFeeRepository(session)
        self.revenue_events = JobRevenueEventRepository(session)
        self.leads = LeadRepository(session)
        self.spend = MarketingSpendRepository(session)

    def payroll_rates(self) -> PayrollRates:
        return PayrollRates(
            hourly_rate=self.settings.default_hourly_rate,
            commission_rate=self.settings.default_commission_rate,
            emergency_rate=self.settings.default_emergency_rate,
            estimated_tax_rate=self.settings.estimated_tax_rate,
            lead_fee_per_job=self.settings.lead_fee_per_job,
        )

    async def payroll(
        self,
        period: PayPeriod,
        search: str | None = None,
        now: datetime | None = None,
    ) -> PayrollReport:
        start, end = pay_period_bounds(period, now or datetime.now(UTC))
        technicians = await self.technicians.list_all()
        jobs = await self.jobs.list_completed_between(start, end)
        fees = await self.lead_fees.list_fees()
        report = compute_payroll(
            technicians,
            jobs,
            self.payroll_rates(),
            start,
            end,
            lead_fees=fees,
            search=search,
        )
        logger.info(
            "Payroll computed",
            period=period.value,
            technicians=len(report.technicians),
            jobs=report.totals.jobs_completed,
        )
        return report

    async def earnings(
        self,
        range_: EarningsRange,
        technician_id: str | None = None,
        salesperson_id: str | None = None,
        now: datetime | None = None,
    ) -> EarningsReport:
        start, end = earnings_range_bounds(range_, now or datetime.now(UTC))
        jobs = await self.jobs.list_jobs(
            technician_id=technician_id, salesperson_id=salesperson_id
        )
        quotes = await self.quotes.list_quotes()
        commissions = (
            await self.commissions.list_commissions(salesperson_id=salesperson_id)
            if salesperson_id
            else None
        )
        return compute_earnings(
            jobs,
            quotes,
            start,
            end,
            technician_id=technician_id,
            salesperson_id=salesperson_id,
            commissions=commissions,
        )

    async def revenue_by_technician(self) -> RevenueReconciliation:
        jobs = await self.jobs.list_jobs(status=JobStatus.COMPLETED.value)
        events = await self.revenue_events.list_events()
        reconciliation = reconcile_revenue_by_technician(jobs, events)
        if reconciliation.ignored_event_ids:
            logger.warning(
                "Revenue events ignored",
                count=len(reconciliation.ignored_event_ids),
            )
        return reconciliation

    async def technician_names(self) -> dict[str, str]:
        return {t.id: t.full_name for t in await self.technicians.list_all()}

    async def sales_summary(self, salesperson_id: str) -> SalesSummary:
        salesperson = await self.salespersons.get_by_id(salesperson_id)
        if not salesperson:
            raise NotFoundError(f"Salesperson {salesperson_id} not found")
        commissions = await self.commissions.list_commissions(
            salesperson_id=salesperson_id
        )
        jobs = await self.jobs.list_jobs(salesperson_id=salesperson_id)
        quotes = await self.quotes.list_for_jobs([job.id for job in jobs])
        return summarize_salesperson(salesperson_id, commissions, jobs, quotes)

    async def marketing_roi(self, period: str | None = None) -> MarketingROIReport:
        spend = await self.spend.list_spend(period=period)
        leads = await self.leads.list_leads()
        return compute_marketing_roi(spend, leads, period=period)

    async def roi(
        self,
        start: datetime | None = None,
        end: datetime | None = None,
        include_completed: bool = True,
        include_cancelled: bool = True,
    ) -> ROISummary:
        jobs = await self.jobs.list_created_between(start, end)
        return aggregate_roi(
            jobs,
            start=start,
            end=end,
            include_completed=include_completed,
            include_cancelled=include_cancelled,
        )
