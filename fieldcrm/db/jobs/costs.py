"""
Job cost and profit derivations.

``labor_cost``, ``total_cost`` and ``profit`` are never written directly; they
are recomputed here from their inputs on every write path.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from fieldcrm.utils.money import ZERO, percentage, round_money, to_decimal

COST_INPUT_FIELDS = (
    "labor_hours",
    "labor_rate",
    "materials_cost",
    "travel_expense",
    "equipment_cost",
    "other_expenses",
)


@dataclass
class JobCostBreakdown:
    total_revenue: Decimal
    labor_cost: Decimal
    materials_cost: Decimal
    travel_expense: Decimal
    equipment_cost: Decimal
    other_expenses: Decimal
    total_cost: Decimal
    profit: Decimal
    profit_margin: Decimal


def sum_costs(
    labor_cost: Any,
    materials_cost: Any,
    travel_expense: Any,
    equipment_cost: Any,
    other_expenses: Any,
) -> Decimal:
    return (
        to_decimal(labor_cost)
        + to_decimal(materials_cost)
        + to_decimal(travel_expense)
        + to_decimal(equipment_cost)
        + to_decimal(other_expenses)
    )


def recompute_job_financials(job, default_labor_rate: Decimal) -> None:
    """
    Refresh the derived money fields on a job from its inputs.

    Args:
        job: Job model instance, mutated in place
        default_labor_rate: Rate used when the job has none
    """
    if not job.labor_rate:
        job.labor_rate = default_labor_rate
    job.labor_cost = round_money(to_decimal(job.labor_hours) * to_decimal(job.labor_rate))
    job.total_cost = round_money(
        sum_costs(
            job.labor_cost,
            job.materials_cost,
            job.travel_expense,
            job.equipment_cost,
            job.other_expenses,
        )
    )
    job.profit = round_money(to_decimal(job.total_revenue) - job.total_cost)


def apply_cost_update(job, changes: dict[str, Any], default_labor_rate: Decimal) -> None:
    """
    Apply cost and revenue inputs to a job and recompute derived fields.

    Only keys present in ``changes`` with a non-None value are written.
    """
    for field in (*COST_INPUT_FIELDS, "total_revenue"):
        value = changes.get(field)
        if value is not None:
            setattr(job, field, to_decimal(value))
    if changes.get("expense_notes") is not None:
        job.expense_notes = changes["expense_notes"]
    recompute_job_financials(job, default_labor_rate)


def calculate_job_roi(job) -> JobCostBreakdown:
    """Cost breakdown and profit margin for one job."""
    revenue = to_decimal(job.total_revenue)
    labor = to_decimal(job.labor_cost)
    materials = to_decimal(job.materials_cost)
    travel = to_decimal(job.travel_expense)
    equipment = to_decimal(job.equipment_cost)
    other = to_decimal(job.other_expenses)
    total_cost = sum_costs(labor, materials, travel, equipment, other)
    profit = revenue - total_cost
    margin = percentage(profit, revenue) if revenue > ZERO else ZERO
    return JobCostBreakdown(
        total_revenue=revenue,
        labor_cost=labor,
        materials_cost=materials,
        travel_expense=travel,
        equipment_cost=equipment,
        other_expenses=other,
        total_cost=total_cost,
        profit=profit,
        profit_margin=margin,
    )
