"""Aggregate job cost and profit figures."""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from fieldcrm.db.jobs.constants import JobStatus
from fieldcrm.db.jobs.costs import calculate_job_roi
from fieldcrm.utils.money import ZERO, percentage, round_money


@dataclass
class ROISummary:
    total_jobs: int = 0
    completed_jobs: int = 0
    cancelled_jobs: int = 0
    total_revenue: Decimal = ZERO
    total_cost: Decimal = ZERO
    total_labor_cost: Decimal = ZERO
    total_materials_cost: Decimal = ZERO
    total_travel_expense: Decimal = ZERO
    total_equipment_cost: Decimal = ZERO
    total_other_expenses: Decimal = ZERO
    total_profit: Decimal = ZERO
    average_profit_margin: Decimal = ZERO


def aggregate_roi(
    jobs: Iterable,
    start: datetime | None = None,
    end: datetime | None = None,
    include_completed: bool = True,
    include_cancelled: bool = True,
) -> ROISummary:
    """Sum cost breakdowns over jobs created within [start, end]."""
    summary = ROISummary()
    for job in jobs:
        if start and job.created_at < start:
            continue
        if end and job.created_at > end:
            continue
        if not include_completed and job.status == JobStatus.COMPLETED.value:
            continue
        if not include_cancelled and job.status == JobStatus.CANCELLED.value:
            continue

        roi = calculate_job_roi(job)
        summary.total_jobs += 1
        if job.status == JobStatus.COMPLETED.value:
            summary.completed_jobs += 1
        elif job.status == JobStatus.CANCELLED.value:
            summary.cancelled_jobs += 1
        summary.total_revenue += roi.total_revenue
        summary.total_cost += roi.total_cost
        summary.total_labor_cost += roi.labor_cost
        summary.total_materials_cost += roi.materials_cost
        summary.total_travel_expense += roi.travel_expense
        summary.total_equipment_cost += roi.equipment_cost
        summary.total_other_expenses += roi.other_expenses
        summary.total_profit += roi.profit

    summary.average_profit_margin = round_money(
        percentage(summary.total_profit, summary.total_revenue)
    )
    return summary
