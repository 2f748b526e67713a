"""
Earnings dashboard figures for a technician, a salesperson, or the business.

Jobs are dated by ``completed_at`` (falling back to ``created_at``) and only
completed jobs contribute money.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from decimal import Decimal

from fieldcrm.db.commissions.constants import CommissionStatus
from fieldcrm.db.jobs.constants import JobStatus
from fieldcrm.db.quotes.constants import QuoteStatus
from fieldcrm.utils.money import ZERO, percentage, round_money, to_decimal

SENT_OR_LATER = frozenset(
    {
        QuoteStatus.SENT.value,
        QuoteStatus.VIEWED.value,
        QuoteStatus.ACCEPTED.value,
        QuoteStatus.DECLINED.value,
    }
)
TOP_SERVICES = 6


@dataclass
class DailyRevenue:
    day: date
    revenue: Decimal
    profit: Decimal
    jobs: int


@dataclass
class ServiceRevenue:
    service_type: str
    revenue: Decimal
    count: int


@dataclass
class QuoteFunnel:
    sent: int = 0
    viewed: int = 0
    accepted: int = 0
    declined: int = 0
    conversion_rate: Decimal = ZERO


@dataclass
class Upsell:
    original_quote_total: Decimal = ZERO
    final_revenue: Decimal = ZERO
    upsell_amount: Decimal = ZERO
    upsell_percentage: Decimal = ZERO
    upsell_jobs: int = 0


@dataclass
class CommissionSummary:
    pending: Decimal = ZERO
    approved: Decimal = ZERO
    paid: Decimal = ZERO
    total: Decimal = ZERO


@dataclass
class EarningsReport:
    range_start: datetime
    range_end: datetime
    completed_jobs: int
    total_revenue: Decimal
    total_profit: Decimal
    total_labor: Decimal
    total_materials: Decimal
    avg_job_value: Decimal
    profit_margin: Decimal
    quotes: QuoteFunnel
    upsell: Upsell
    revenue_by_day: list[DailyRevenue] = field(default_factory=list)
    top_services: list[ServiceRevenue] = field(default_factory=list)
    commissions: CommissionSummary | None = None


def _job_date(job) -> datetime | None:
    return job.completed_at or job.created_at


def _quote_funnel(quotes: list) -> QuoteFunnel:
    funnel = QuoteFunnel()
    sent_or_later = 0
    for quote in quotes:
        if quote.status in SENT_OR_LATER:
            sent_or_later += 1
        if quote.status == QuoteStatus.SENT.value:
            funnel.sent += 1
        elif quote.status == QuoteStatus.VIEWED.value:
            funnel.viewed += 1
        elif quote.status == QuoteStatus.ACCEPTED.value:
            funnel.accepted += 1
        elif quote.status == QuoteStatus.DECLINED.value:
            funnel.declined += 1
    funnel.conversion_rate = round_money(
        percentage(Decimal(funnel.accepted), Decimal(sent_or_later))
    )
    return funnel


def _upsell(completed: list, quotes: Iterable) -> Upsell:
    first_quote_by_job: dict[str, object] = {}
    for quote in quotes:
        if quote.job_id and quote.job_id not in first_quote_by_job:
            first_quote_by_job[quote.job_id] = quote

    result = Upsell()
    for job in completed:
        quote = first_quote_by_job.get(job.id)
        if quote is None:
            continue
        quote_total = to_decimal(quote.total)
        revenue = to_decimal(job.total_revenue)
        result.original_quote_total += quote_total
        result.final_revenue += revenue
        if revenue > quote_total:
            result.upsell_jobs += 1

    amount = result.final_revenue - result.original_quote_total
    result.upsell_amount = round_money(max(ZERO, amount))
    result.upsell_percentage = round_money(
        max(ZERO, percentage(amount, result.original_quote_total))
    )
    result.original_quote_total = round_money(result.original_quote_total)
    result.final_revenue = round_money(result.final_revenue)
    return result


def _revenue_by_day(completed: list, start: datetime, end: datetime) -> list[DailyRevenue]:
    by_day: dict[date, DailyRevenue] = {}
    current = start.date()
    while current <= end.date():
        by_day[current] = DailyRevenue(day=current, revenue=ZERO, profit=ZERO, jobs=0)
        current += timedelta(days=1)

    for job in completed:
        if not job.completed_at:
            continue
        entry = by_day.get(job.completed_at.date())
        if entry is None:
            continue
        entry.revenue += to_decimal(job.total_revenue)
        entry.profit += to_decimal(job.profit)
        entry.jobs += 1
    return list(by_day.values())


def _top_services(completed: list) -> list[ServiceRevenue]:
    breakdown: dict[str, ServiceRevenue] = {}
    for job in completed:
        name = job.service_type or "Other"
        entry = breakdown.setdefault(
            name, ServiceRevenue(service_type=name, revenue=ZERO, count=0)
        )
        entry.revenue += to_decimal(job.total_revenue)
        entry.count += 1
    ranked = sorted(breakdown.values(), key=lambda s: s.revenue, reverse=True)
    return ranked[:TOP_SERVICES]


def summarize_commissions(commissions: Iterable) -> CommissionSummary:
    """Commission amounts grouped by payment status."""
    summary = CommissionSummary()
    for commission in commissions:
        amount = to_decimal(commission.commission_amount)
        if commission.status == CommissionStatus.PENDING.value:
            summary.pending += amount
        elif commission.status == CommissionStatus.APPROVED.value:
            summary.approved += amount
        elif commission.status == CommissionStatus.PAID.value:
            summary.paid += amount
    summary.total = summary.pending + summary.approved + summary.paid
    return summary


def compute_earnings(
    jobs: Iterable,
    quotes: Iterable,
    range_start: datetime,
    range_end: datetime,
    technician_id: str | None = None,
    salesperson_id: str | None = None,
    commissions: Iterable | None = None,
) -> EarningsReport:
    """
    Fold jobs, quotes and commissions into the earnings dashboard.

    Quotes count toward the funnel when they belong to a completed job in
    range, or always when no technician or salesperson filter is applied.
    """
    in_range = []
    for job in jobs:
        if technician_id and job.assigned_technician_id != technician_id:
            continue
        if salesperson_id and job.assigned_salesperson_id != salesperson_id:
            continue
        job_date = _job_date(job)
        if job_date is None or not (range_start <= job_date <= range_end):
            continue
        in_range.append(job)

    completed = [job for job in in_range if job.status == JobStatus.COMPLETED.value]
    completed_ids = {job.id for job in completed}

    all_quotes = list(quotes)
    unfiltered = not technician_id and not salesperson_id
    funnel_quotes = [
        q for q in all_quotes if (q.job_id in completed_ids) or unfiltered
    ]

    total_revenue = sum((to_decimal(j.total_revenue) for j in completed), ZERO)
    total_profit = sum((to_decimal(j.profit) for j in completed), ZERO)
    total_labor = sum((to_decimal(j.labor_cost) for j in completed), ZERO)
    total_materials = sum((to_decimal(j.materials_cost) for j in completed), ZERO)
    avg_job_value = total_revenue / len(completed) if completed else ZERO

    return EarningsReport(
        range_start=range_start,
        range_end=range_end,
        completed_jobs=len(completed),
        total_revenue=round_money(total_revenue),
        total_profit=round_money(total_profit),
        total_labor=round_money(total_labor),
        total_materials=round_money(total_materials),
        avg_job_value=round_money(avg_job_value),
        profit_margin=round_money(percentage(total_profit, total_revenue)),
        quotes=_quote_funnel(funnel_quotes),
        upsell=_upsell(completed, all_quotes),
        revenue_by_day=_revenue_by_day(completed, range_start, range_end),
        top_services=_top_services(completed),
        commissions=(
            summarize_commissions(commissions)
            if salesperson_id and commissions is not None
            else None
        ),
    )
