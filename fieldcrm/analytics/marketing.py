"""Marketing return on investment per lead source."""

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal

from fieldcrm.db.leads.constants import LeadStatus
from fieldcrm.utils.money import ZERO, percentage, round_money, to_decimal


@dataclass
class SourceROI:
    source: str
    spend: Decimal
    leads: int
    converted: int
    revenue: Decimal
    roi: Decimal
    cost_per_lead: Decimal
    conversion_rate: Decimal


@dataclass
class MarketingROIReport:
    sources: list[SourceROI]
    total_spend: Decimal
    total_revenue: Decimal
    total_leads: int
    total_converted: int
    overall_roi: Decimal


def roi_percentage(revenue: Decimal, spend: Decimal) -> Decimal:
    """(revenue - spend) / spend * 100, or 0 when nothing was spent."""
    if spend <= ZERO:
        return ZERO
    return round_money((revenue - spend) / spend * 100)


def compute_marketing_roi(
    spend_records: Iterable, leads: Iterable, period: str | None = None
) -> MarketingROIReport:
    """
    Join spend records and leads on source.

    Args:
        spend_records: Marketing spend rows (``source``, ``period``, ``amount``)
        leads: Lead rows (``source``, ``status``, ``revenue``, ``created_at``)
        period: Optional ``YYYY-MM`` month restricting both sides

    Returns:
        MarketingROIReport: One row per source seen in either input, sorted by source
    """
    spend: dict[str, Decimal] = {}
    for record in spend_records:
        if period and record.period != period:
            continue
        spend[record.source] = spend.get(record.source, ZERO) + to_decimal(record.amount)

    counts: dict[str, list] = {}
    for lead in leads:
        if period and (
            lead.created_at is None or lead.created_at.strftime("%Y-%m") != period
        ):
            continue
        entry = counts.setdefault(lead.source, [0, 0, ZERO])
        entry[0] += 1
        if lead.status == LeadStatus.CONVERTED.value:
            entry[1] += 1
        entry[2] += to_decimal(lead.revenue)

    rows: list[SourceROI] = []
    for source in sorted(set(spend) | set(counts)):
        source_spend = spend.get(source, ZERO)
        lead_count, converted, revenue = counts.get(source, [0, 0, ZERO])
        rows.append(
            SourceROI(
                source=source,
                spend=round_money(source_spend),
                leads=lead_count,
                converted=converted,
                revenue=round_money(revenue),
                roi=roi_percentage(revenue, source_spend),
                cost_per_lead=(
                    round_money(source_spend / lead_count) if lead_count else ZERO
                ),
                conversion_rate=round_money(
                    percentage(Decimal(converted), Decimal(lead_count))
                ),
            )
        )

    total_spend = sum((row.spend for row in rows), ZERO)
    total_revenue = sum((row.revenue for row in rows), ZERO)
    return MarketingROIReport(
        sources=rows,
        total_spend=total_spend,
        total_revenue=total_revenue,
        total_leads=sum(row.leads for row in rows),
        total_converted=sum(row.converted for row in rows),
        overall_roi=roi_percentage(total_revenue, total_spend),
    )
