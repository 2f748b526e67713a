"""
Lead scoring and response-time (SLA) rules.

Scores start at 50 and are adjusted for service value, source quality,
priority and whether the job is inside the core service area, then clamped
to 0..100.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta

from fieldcrm.db.leads.constants import (
    HIGH_QUALITY_SOURCES,
    HIGH_VALUE_SERVICES,
    LOW_QUALITY_SOURCES,
    LOW_VALUE_SERVICES,
    MEDIUM_QUALITY_SOURCES,
    MEDIUM_VALUE_SERVICES,
    LeadPriority,
    SlaState,
)

BASE_SCORE = 50
MIN_SCORE = 0
MAX_SCORE = 100


def _mentions_any(service_type: str, services: tuple[str, ...]) -> bool:
    return any(service in service_type for service in services)


def calculate_lead_score(
    service_type: str | None,
    source: str | None,
    priority: str | None,
    zip_code: str | None,
    service_area_zip_codes: set[str],
) -> int:
    """
    Score a lead between 0 and 100.

    Args:
        service_type: Requested service, matched by substring against service tiers
        source: Lead source name
        priority: Lead priority
        zip_code: Customer zip code
        service_area_zip_codes: Zip codes inside the core service area

    Returns:
        int: Clamped score
    """
    score = BASE_SCORE

    if service_type:
        if _mentions_any(service_type, HIGH_VALUE_SERVICES):
            score += 25
        elif _mentions_any(service_type, MEDIUM_VALUE_SERVICES):
            score += 15
        elif _mentions_any(service_type, LOW_VALUE_SERVICES):
            score += 5

    if source in HIGH_QUALITY_SOURCES:
        score += 15
    elif source in MEDIUM_QUALITY_SOURCES:
        score += 10
    elif source in LOW_QUALITY_SOURCES:
        score += 5

    if priority == LeadPriority.URGENT.value:
        score += 20
    elif priority == LeadPriority.HIGH.value:
        score += 10
    elif priority == LeadPriority.LOW.value:
        score -= 10

    if zip_code and zip_code in service_area_zip_codes:
        score += 10

    return max(MIN_SCORE, min(MAX_SCORE, score))


def sla_minutes_for(
    priority: str | None, urgent_minutes: int, high_minutes: int, default_minutes: int
) -> int:
    if priority == LeadPriority.URGENT.value:
        return urgent_minutes
    if priority == LeadPriority.HIGH.value:
        return high_minutes
    return default_minutes


def sla_deadline(created_at: datetime, minutes: int) -> datetime:
    return created_at + timedelta(minutes=minutes)


@dataclass
class SlaStatus:
    lead_id: str
    state: SlaState
    remaining_minutes: int | None
    sla_deadline: datetime | None
    contacted_at: datetime | None


def evaluate_sla(lead, now: datetime, warning_minutes: int) -> SlaStatus:
    """Classify a lead's response-time state at ``now``."""
    remaining = None
    if lead.contacted_at:
        state = SlaState.CONTACTED
    elif lead.sla_deadline:
        remaining = round((lead.sla_deadline - now).total_seconds() / 60)
        if remaining <= 0:
            state = SlaState.BREACHED
        elif remaining <= warning_minutes:
            state = SlaState.WARNING
        else:
            state = SlaState.OK
    else:
        state = SlaState.OK

    return SlaStatus(
        lead_id=lead.id,
        state=state,
        remaining_minutes=remaining,
        sla_deadline=lead.sla_deadline,
        contacted_at=lead.contacted_at,
    )
