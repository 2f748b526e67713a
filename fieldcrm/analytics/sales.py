"""
Salesperson commission and performance figures.

Salesperson commission is ``net_profit * commission_rate`` where the rate is
the salesperson's rate at calculation time. Technician payroll commission is
computed on revenue instead; the two bases are reported side by side rather
than reconciled.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal

from fieldcrm.analytics.earnings import summarize_commissions
from fieldcrm.db.jobs.constants import JobStatus
from fieldcrm.db.jobs.costs import sum_costs
from fieldcrm.db.quotes.constants import QuoteStatus
from fieldcrm.exceptions import CommissionNotApplicableError
from fieldcrm.utils.money import ZERO, percentage, round_money, to_decimal


@dataclass
class CommissionFigures:
    job_revenue: Decimal
    labor_cost: Decimal
    materials_cost: Decimal
    travel_expense: Decimal
    equipment_cost: Decimal
    other_expenses: Decimal
    total_costs: Decimal
    net_profit: Decimal
    commission_rate: Decimal
    commission_amount: Decimal


@dataclass
class SalesSummary:
    total_commission_earned: Decimal
    pending_commission: Decimal
    total_jobs_handled: int
    completed_jobs: int
    total_quotes_sent: int
    accepted_quotes: int
    conversion_rate: Decimal
    total_revenue: Decimal


def commission_amount(net_profit: Decimal, commission_rate: Decimal) -> Decimal:
    return round_money(to_decimal(net_profit) * to_decimal(commission_rate))


def calculate_commission(job, commission_rate: Decimal) -> CommissionFigures:
    """
    Derive commission figures for a completed job.

    Args:
        job: Job model instance
        commission_rate: The salesperson's current rate, copied onto the result

    Returns:
        CommissionFigures: Figures to store on the commission record

    Raises:
        CommissionNotApplicableError: If the job is not completed or made no profit
    """
    if job.status != JobStatus.COMPLETED.value:
        raise CommissionNotApplicableError(
            "Could not calculate commission - job is not completed"
        )

    revenue = to_decimal(job.total_revenue)
    labor = to_decimal(job.labor_cost)
    materials = to_decimal(job.materials_cost)
    travel = to_decimal(job.travel_expense)
    equipment = to_decimal(job.equipment_cost)
    other = to_decimal(job.other_expenses)
    total_costs = round_money(sum_costs(labor, materials, travel, equipment, other))
    net_profit = round_money(revenue - total_costs)

    if net_profit <= ZERO:
        raise CommissionNotApplicableError(
            "Could not calculate commission - job has no profit"
        )

    rate = to_decimal(commission_rate)
    return CommissionFigures(
        job_revenue=round_money(revenue),
        labor_cost=labor,
        materials_cost=materials,
        travel_expense=travel,
        equipment_cost=equipment,
        other_expenses=other,
        total_costs=total_costs,
        net_profit=net_profit,
        commission_rate=rate,
        commission_amount=commission_amount(net_profit, rate),
    )


def summarize_salesperson(
    salesperson_id: str,
    commissions: Iterable,
    jobs: Iterable,
    quotes: Iterable,
) -> SalesSummary:
    """Commission totals, job counts and quote conversion for one salesperson."""
    by_status = summarize_commissions(commissions)

    own_jobs = [job for job in jobs if job.assigned_salesperson_id == salesperson_id]
    own_job_ids = {job.id for job in own_jobs}
    completed = [job for job in own_jobs if job.status == JobStatus.COMPLETED.value]

    own_quotes = [quote for quote in quotes if quote.job_id in own_job_ids]
    sent = [quote for quote in own_quotes if quote.status != QuoteStatus.DRAFT.value]
    accepted = [q for q in own_quotes if q.status == QuoteStatus.ACCEPTED.value]

    return SalesSummary(
        total_commission_earned=round_money(by_status.paid),
        pending_commission=round_money(by_status.pending + by_status.approved),
        total_jobs_handled=len(own_jobs),
        completed_jobs=len(completed),
        total_quotes_sent=len(sent),
        accepted_quotes=len(accepted),
        conversion_rate=round_money(
            percentage(Decimal(len(accepted)), Decimal(len(sent)))
        ),
        total_revenue=round_money(
            sum((to_decimal(job.total_revenue) for job in completed), ZERO)
        ),
    )
