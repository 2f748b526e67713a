"""
Revenue-by-technician reconciliation.

Revenue events are the authoritative record of what a job earned. Completed
jobs that have no event fall back to the revenue and cost fields stored on the
job itself. A job id that has at least one event is never counted through the
fallback, so for every job exactly one of these holds: counted via events,
counted via fallback, or not completed.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from decimal import Decimal

from fieldcrm.db.jobs.constants import JobStatus
from fieldcrm.utils.money import ZERO, round_money, to_decimal

UNASSIGNED = "unassigned"


@dataclass
class TechnicianRevenue:
    technician_id: str
    revenue: Decimal = ZERO
    costs: Decimal = ZERO
    profit: Decimal = ZERO
    event_job_ids: set[str] = field(default_factory=set)
    fallback_job_ids: set[str] = field(default_factory=set)

    @property
    def job_count(self) -> int:
        return len(self.event_job_ids) + len(self.fallback_job_ids)


@dataclass
class RevenueReconciliation:
    technicians: dict[str, TechnicianRevenue]
    event_job_ids: set[str]
    fallback_job_ids: set[str]
    ignored_event_ids: list[str]

    @property
    def total_revenue(self) -> Decimal:
        return round_money(sum((t.revenue for t in self.technicians.values()), ZERO))

    @property
    def total_profit(self) -> Decimal:
        return round_money(sum((t.profit for t in self.technicians.values()), ZERO))


def reconcile_revenue_by_technician(
    jobs: Iterable, revenue_events: Iterable
) -> RevenueReconciliation:
    """
    Attribute revenue, cost and profit to technicians.

    An event is attributed to its own ``technician_id``, else to the job's
    assigned technician. Events whose job is unknown or not completed are
    ignored and reported by id.

    Args:
        jobs: Jobs to consider
        revenue_events: Revenue event rows

    Returns:
        RevenueReconciliation: Per-technician totals and the two disjoint job id sets
    """
    completed = {
        job.id: job for job in jobs if job.status == JobStatus.COMPLETED.value
    }
    technicians: dict[str, TechnicianRevenue] = {}

    def bucket(technician_id: str | None) -> TechnicianRevenue:
        key = technician_id or UNASSIGNED
        if key not in technicians:
            technicians[key] = TechnicianRevenue(technician_id=key)
        return technicians[key]

    event_job_ids: set[str] = set()
    ignored_event_ids: list[str] = []

    for event in revenue_events:
        job = completed.get(event.job_id)
        if job is None:
            ignored_event_ids.append(event.id)
            continue
        entry = bucket(event.technician_id or job.assigned_technician_id)
        entry.revenue += to_decimal(event.gross_revenue)
        entry.costs += to_decimal(event.total_costs)
        entry.profit += to_decimal(event.net_profit)
        entry.event_job_ids.add(job.id)
        event_job_ids.add(job.id)

    fallback_job_ids: set[str] = set()
    for job_id, job in completed.items():
        if job_id in event_job_ids:
            continue
        entry = bucket(job.assigned_technician_id)
        entry.revenue += to_decimal(job.total_revenue)
        entry.costs += to_decimal(job.total_cost)
        entry.profit += to_decimal(job.profit)
        entry.fallback_job_ids.add(job_id)
        fallback_job_ids.add(job_id)

    for entry in technicians.values():
        entry.revenue = round_money(entry.revenue)
        entry.costs = round_money(entry.costs)
        entry.profit = round_money(entry.profit)

    return RevenueReconciliation(
        technicians=technicians,
        event_job_ids=event_job_ids,
        fallback_job_ids=fallback_job_ids,
        ignored_event_ids=ignored_event_ids,
    )
