"""
Technician payroll computation.

Payroll is computed on demand from completed jobs in the pay period and is
never persisted. Figures for a past period will move if its jobs are edited.

For each technician:

- hours per job come from ``completed_at - started_at`` when both are set,
  otherwise from ``estimated_duration`` minutes; estimated hours always count
  as regular hours
- emergency hours are timestamp-derived hours on ``urgent``/``high`` jobs
- ``commission_earned`` is ``commission_rate`` times job revenue. Salesperson
  commissions use net profit instead (see ``analytics.sales``)
- ``gross_pay = regular_pay + emergency_pay + commission_earned``
- ``net_pay = gross_pay - estimated_tax - lead_fees``
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from fieldcrm.db.jobs.constants import EMERGENCY_PRIORITIES, JobStatus
from fieldcrm.utils.money import (
    ZERO,
    round_hours,
    round_money,
    round_whole,
    to_decimal,
)

_SECONDS_PER_HOUR = Decimal(3600)
_MINUTES_PER_HOUR = Decimal(60)


@dataclass
class PayrollRates:
    """Fallback rates and flat charges applied to every technician."""

    hourly_rate: Decimal
    commission_rate: Decimal
    emergency_rate: Decimal
    estimated_tax_rate: Decimal
    lead_fee_per_job: Decimal


@dataclass
class TechnicianPayroll:
    technician_id: str
    technician_name: str
    classification: str
    hourly_rate: Decimal
    commission_rate: Decimal
    emergency_rate: Decimal
    jobs_completed: int
    regular_hours: Decimal
    emergency_hours: Decimal
    total_hours: Decimal
    total_revenue: Decimal
    regular_pay: Decimal
    emergency_pay: Decimal
    commission_earned: Decimal
    gross_pay: Decimal
    estimated_tax: Decimal
    lead_fees: Decimal
    net_pay: Decimal
    avg_job_duration_minutes: int
    efficiency: int
    commission_basis: str = "revenue"
    job_ids: list[str] = field(default_factory=list)


@dataclass
class PayrollTotals:
    jobs_completed: int = 0
    total_hours: Decimal = ZERO
    gross_pay: Decimal = ZERO
    estimated_tax: Decimal = ZERO
    lead_fees: Decimal = ZERO
    net_pay: Decimal = ZERO


@dataclass
class PayrollReport:
    period_start: datetime
    period_end: datetime
    technicians: list[TechnicianPayroll]
    totals: PayrollTotals


def job_hours(job) -> tuple[Decimal, bool]:
    """
    Hours worked on a job.

    Returns:
        tuple[Decimal, bool]: Hours, and whether they came from real timestamps
    """
    if job.started_at and job.completed_at:
        seconds = Decimal(str((job.completed_at - job.started_at).total_seconds()))
        return max(seconds, ZERO) / _SECONDS_PER_HOUR, True
    if job.estimated_duration:
        return Decimal(job.estimated_duration) / _MINUTES_PER_HOUR, False
    return ZERO, False


def _rate(value, fallback: Decimal) -> Decimal:
    rate = to_decimal(value)
    return rate if rate > ZERO else fallback


def compute_technician_payroll(
    technician,
    jobs: Iterable,
    rates: PayrollRates,
    lead_fees_by_job: Mapping[str, Decimal] | None = None,
) -> TechnicianPayroll:
    """
    Fold one technician's completed jobs into a payroll line.

    Args:
        technician: Technician model (or any object with the same attributes)
        jobs: Completed jobs in the period assigned to this technician
        rates: Fallback rates and flat charges
        lead_fees_by_job: Recorded lead fee per job id; missing jobs use the flat fee

    Returns:
        TechnicianPayroll: Rounded payroll line
    """
    lead_fees_by_job = lead_fees_by_job or {}
    hourly_rate = _rate(technician.hourly_rate, rates.hourly_rate)
    commission_rate = _rate(technician.commission_rate, rates.commission_rate)
    emergency_rate = _rate(technician.emergency_rate, rates.emergency_rate)

    total_hours = ZERO
    emergency_hours = ZERO
    total_revenue = ZERO
    lead_fees = ZERO
    job_ids: list[str] = []

    for job in jobs:
        hours, from_timestamps = job_hours(job)
        total_hours += hours
        if from_timestamps and job.priority in EMERGENCY_PRIORITIES:
            emergency_hours += hours
        total_revenue += to_decimal(job.total_revenue)
        lead_fees += lead_fees_by_job.get(job.id, rates.lead_fee_per_job)
        job_ids.append(job.id)

    jobs_completed = len(job_ids)
    regular_hours = total_hours - emergency_hours

    regular_pay = round_money(regular_hours * hourly_rate)
    emergency_pay = round_money(emergency_hours * hourly_rate * emergency_rate)
    commission_earned = round_money(total_revenue * commission_rate)
    gross_pay = regular_pay + emergency_pay + commission_earned
    estimated_tax = round_money(gross_pay * rates.estimated_tax_rate)
    lead_fees = round_money(lead_fees)
    net_pay = gross_pay - estimated_tax - lead_fees

    if jobs_completed:
        avg_minutes = round_whole(total_hours / jobs_completed * _MINUTES_PER_HOUR)
        efficiency = min(
            100, int(round(jobs_completed / max(1.0, float(total_hours)) * 100))
        )
    else:
        avg_minutes = 0
        efficiency = 0

    return TechnicianPayroll(
        technician_id=technician.id,
        technician_name=technician.full_name,
        classification=technician.classification or "junior",
        hourly_rate=hourly_rate,
        commission_rate=commission_rate,
        emergency_rate=emergency_rate,
        jobs_completed=jobs_completed,
        regular_hours=round_hours(regular_hours),
        emergency_hours=round_hours(emergency_hours),
        total_hours=round_hours(total_hours),
        total_revenue=round_money(total_revenue),
        regular_pay=regular_pay,
        emergency_pay=emergency_pay,
        commission_earned=commission_earned,
        gross_pay=gross_pay,
        estimated_tax=estimated_tax,
        lead_fees=lead_fees,
        net_pay=net_pay,
        avg_job_duration_minutes=avg_minutes,
        efficiency=efficiency,
        job_ids=job_ids,
    )


def _in_period(job, start: datetime, end: datetime) -> bool:
    return (
        job.status == JobStatus.COMPLETED.value
        and job.completed_at is not None
        and start <= job.completed_at <= end
    )


def compute_payroll(
    technicians: Iterable,
    jobs: Iterable,
    rates: PayrollRates,
    period_start: datetime,
    period_end: datetime,
    lead_fees: Iterable = (),
    search: str | None = None,
) -> PayrollReport:
    """
    Build the payroll report for every technician over a period.

    Args:
        technicians: All technicians
        jobs: Candidate jobs; only completed jobs inside the period count
        rates: Fallback rates and flat charges
        period_start: Inclusive window start
        period_end: Inclusive window end
        lead_fees: Recorded lead fee rows (``job_id``, ``technician_id``, ``amount``)
        search: Case-insensitive technician name filter

    Returns:
        PayrollReport: One line per technician plus totals
    """
    jobs_by_technician: dict[str, list] = {}
    for job in jobs:
        if job.assigned_technician_id and _in_period(job, period_start, period_end):
            jobs_by_technician.setdefault(job.assigned_technician_id, []).append(job)

    fees_by_technician: dict[str, dict[str, Decimal]] = {}
    for fee in lead_fees:
        per_job = fees_by_technician.setdefault(fee.technician_id, {})
        per_job[fee.job_id] = per_job.get(fee.job_id, ZERO) + to_decimal(fee.amount)

    needle = search.lower() if search else None
    lines: list[TechnicianPayroll] = []
    totals = PayrollTotals()

    for technician in technicians:
        if needle and needle not in (technician.full_name or "").lower():
            continue
        line = compute_technician_payroll(
            technician,
            jobs_by_technician.get(technician.id, []),
            rates,
            fees_by_technician.get(technician.id),
        )
        lines.append(line)
        totals.jobs_completed += line.jobs_completed
        totals.total_hours += line.total_hours
        totals.gross_pay += line.gross_pay
        totals.estimated_tax += line.estimated_tax
        totals.lead_fees += line.lead_fees
        totals.net_pay += line.net_pay

    return PayrollReport(
        period_start=period_start,
        period_end=period_end,
        technicians=lines,
        totals=totals,
    )
