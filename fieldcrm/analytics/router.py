"""
Reporting endpoints: payroll, earnings, revenue, sales and marketing ROI.

Technicians and salespersons only ever see their own figures; the profile
id is taken from the effective user rather than the query string.
"""

from datetime import datetime
from http import HTTPStatus

from fastapi import APIRouter, Depends, HTTPException, Query

from fieldcrm.analytics.dependencies import get_analytics_service
from fieldcrm.analytics.periods import EarningsRange, PayPeriod
from fieldcrm.analytics.schemas import (
    EarningsResponse,
    MarketingROIResponse,
    PayrollResponse,
    PayrollTotalsResponse,
    RevenueByTechnicianResponse,
    ROISummaryResponse,
    SalesAnalyticsResponse,
    SourceROIResponse,
    TechnicianPayrollResponse,
    TechnicianRevenueResponse,
)
from fieldcrm.analytics.service import AnalyticsService
from fieldcrm.auth.constants import Role
from fieldcrm.auth.dataclasses import EffectiveIdentity
from fieldcrm.auth.dependencies import (
    require_admin,
    require_dispatcher,
    require_salesperson,
    require_staff,
)
from fieldcrm.db.decorators import handle_db_errors
from fieldcrm.db.marketing.schemas import PERIOD_PATTERN

router = APIRouter(tags=["Analytics"])


async def _own_profile_ids(
    identity: EffectiveIdentity, service: AnalyticsService
) -> tuple[str | None, str | None]:
    """(technician_id, salesperson_id) forced by the effective user's role."""
    role = identity.user.role
    if role == Role.TECHNICIAN:
        technician = await service.technicians.get_by_user_id(identity.user.id)
        if not technician:
            raise HTTPException(
                status_code=HTTPStatus.FORBIDDEN, detail="No technician profile for user"
            )
        return technician.id, None
    if role == Role.SALESPERSON:
        salesperson = await service.salespersons.get_by_user_id(identity.user.id)
        if not salesperson:
            raise HTTPException(
                status_code=HTTPStatus.FORBIDDEN,
                detail="No salesperson profile for user",
            )
        return None, salesperson.id
    return None, None


@router.get("/payroll", response_model=PayrollResponse)
@handle_db_errors("compute payroll")
async def get_payroll(
    period: PayPeriod = PayPeriod.CURRENT,
    search: str | None = None,
    identity: EffectiveIdentity = Depends(require_admin),
    service: AnalyticsService = Depends(get_analytics_service),
) -> PayrollResponse:
    """
    Payroll for every technician over a pay period.

    Computed from current job data on each request.
    """
    report = await service.payroll(period, search=search)
    return PayrollResponse(
        period=period.value,
        period_start=report.period_start,
        period_end=report.period_end,
        technicians=[
            TechnicianPayrollResponse.model_validate(line) for line in report.technicians
        ],
        totals=PayrollTotalsResponse.model_validate(report.totals),
    )


@router.get("/earnings", response_model=EarningsResponse)
@handle_db_errors("compute earnings")
async def get_earnings(
    technician_id: str | None = None,
    salesperson_id: str | None = None,
    range: EarningsRange = EarningsRange.THIRTY_DAYS,
    identity: EffectiveIdentity = Depends(require_staff),
    service: AnalyticsService = Depends(get_analytics_service),
) -> EarningsResponse:
    own_technician_id, own_salesperson_id = await _own_profile_ids(identity, service)
    if own_technician_id or own_salesperson_id:
        technician_id, salesperson_id = own_technician_id, own_salesperson_id

    report = await service.earnings(
        range, technician_id=technician_id, salesperson_id=salesperson_id
    )
    return EarningsResponse.model_validate(report)


@router.get(
    "/analytics/revenue-by-technician", response_model=RevenueByTechnicianResponse
)
@handle_db_errors("compute revenue by technician")
async def get_revenue_by_technician(
    identity: EffectiveIdentity = Depends(require_dispatcher),
    service: AnalyticsService = Depends(get_analytics_service),
) -> RevenueByTechnicianResponse:
    """
    Revenue, cost and profit per technician.

    Revenue events are used where they exist; other completed jobs fall
    back to the figures stored on the job.
    """
    reconciliation = await service.revenue_by_technician()
    names = await service.technician_names()
    return RevenueByTechnicianResponse(
        technicians=[
            TechnicianRevenueResponse(
                technician_id=entry.technician_id,
                technician_name=names.get(entry.technician_id),
                revenue=entry.revenue,
                costs=entry.costs,
                profit=entry.profit,
                job_count=entry.job_count,
                event_job_ids=sorted(entry.event_job_ids),
                fallback_job_ids=sorted(entry.fallback_job_ids),
            )
            for entry in sorted(
                reconciliation.technicians.values(),
                key=lambda e: e.revenue,
                reverse=True,
            )
        ],
        total_revenue=reconciliation.total_revenue,
        total_profit=reconciliation.total_profit,
        event_job_count=len(reconciliation.event_job_ids),
        fallback_job_count=len(reconciliation.fallback_job_ids),
        ignored_event_ids=reconciliation.ignored_event_ids,
    )


@router.get("/sales-analytics/{salesperson_id}", response_model=SalesAnalyticsResponse)
@handle_db_errors("compute sales analytics")
async def get_sales_analytics(
    salesperson_id: str,
    identity: EffectiveIdentity = Depends(require_salesperson),
    service: AnalyticsService = Depends(get_analytics_service),
) -> SalesAnalyticsResponse:
    _, own_salesperson_id = await _own_profile_ids(identity, service)
    if own_salesperson_id and own_salesperson_id != salesperson_id:
        raise HTTPException(
            status_code=HTTPStatus.FORBIDDEN,
            detail="Salespersons may only view their own analytics",
        )
    summary = await service.sales_summary(salesperson_id)
    return SalesAnalyticsResponse(
        salesperson_id=salesperson_id,
        total_commission_earned=summary.total_commission_earned,
        pending_commission=summary.pending_commission,
        total_jobs_handled=summary.total_jobs_handled,
        completed_jobs=summary.completed_jobs,
        total_quotes_sent=summary.total_quotes_sent,
        accepted_quotes=summary.accepted_quotes,
        conversion_rate=summary.conversion_rate,
        total_revenue=summary.total_revenue,
    )


@router.get("/marketing/roi", response_model=MarketingROIResponse)
@handle_db_errors("compute marketing ROI")
async def get_marketing_roi(
    period: str | None = Query(None, pattern=PERIOD_PATTERN),
    identity: EffectiveIdentity = Depends(require_admin),
    service: AnalyticsService = Depends(get_analytics_service),
) -> MarketingROIResponse:
    """ROI per lead source. A source with no spend reports an ROI of 0."""
    report = await service.marketing_roi(period)
    return MarketingROIResponse(
        period=period,
        sources=[SourceROIResponse.model_validate(row) for row in report.sources],
        total_spend=report.total_spend,
        total_revenue=report.total_revenue,
        total_leads=report.total_leads,
        total_converted=report.total_converted,
        overall_roi=report.overall_roi,
    )


@router.get("/analytics/roi", response_model=ROISummaryResponse)
@handle_db_errors("compute job ROI")
async def get_roi(
    start: datetime | None = None,
    end: datetime | None = None,
    include_completed: bool = True,
    include_cancelled: bool = True,
    identity: EffectiveIdentity = Depends(require_dispatcher),
    service: AnalyticsService = Depends(get_analytics_service),
) -> ROISummaryResponse:
    summary = await service.roi(
        start=start,
        end=end,
        include_completed=include_completed,
        include_cancelled=include_cancelled,
    )
    return ROISummaryResponse.model_validate(summary)
