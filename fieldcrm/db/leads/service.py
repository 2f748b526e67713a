"""
Lead intake and response tracking.

Every lead, whether typed in by staff or delivered by a lead-source webhook,
is created through ``LeadService.create_lead`` so it is scored, given an SLA
deadline and checked for duplicates the same way.
"""

from dataclasses import dataclass
from datetime import UTC, datetime

from sqlalchemy.ext.asyncio import AsyncSession

from fieldcrm.auth.constants import Role
from fieldcrm.config import AppSettings, get_app_settings
from fieldcrm.db.leads.constants import LeadStatus
from fieldcrm.db.leads.model import Lead
from fieldcrm.db.leads.repository import LeadRepository
from fieldcrm.db.leads.schemas import LeadCreate
from fieldcrm.db.leads.scoring import (
    SlaStatus,
    calculate_lead_score,
    evaluate_sla,
    sla_deadline,
    sla_minutes_for,
)
from fieldcrm.db.notifications.constants import NotificationType
from fieldcrm.db.notifications.model import Notification
from fieldcrm.db.notifications.repository import NotificationRepository
from fieldcrm.db.users.repository import UserRepository
from fieldcrm.exceptions import NotFoundError
from fieldcrm.utils.logger import logger


@dataclass
class DuplicateCheck:
    original: Lead | None
    match_count: int

    @property
    def is_duplicate(self) -> bool:
        return self.original is not None


@dataclass
class ContactResult:
    lead: Lead
    sla_breached: bool
    response_time_minutes: int | None


class LeadService:
    """Service for creating leads and tracking first contact."""

    def __init__(self, session: AsyncSession, settings: AppSettings | None = None):
        self.session = session
        self.settings = settings or get_app_settings()
        self.leads = LeadRepository(session)
        self.notifications = NotificationRepository(session)
        self.users = UserRepository(session)

    def score(self, lead) -> int:
        return calculate_lead_score(
            service_type=lead.service_type,
            source=lead.source,
            priority=lead.priority,
            zip_code=lead.zip_code,
            service_area_zip_codes=self.settings.get_service_area_zip_codes(),
        )

    async def check_duplicate(self, phone: str) -> DuplicateCheck:
        """
        Find the original lead for a phone number.

        The original is the oldest lead with this phone that is not itself
        marked as a duplicate.
        """
        matches = await self.leads.find_by_phone(phone)
        originals = [lead for lead in matches if not lead.is_duplicate]
        return DuplicateCheck(
            original=originals[0] if originals else None, match_count=len(matches)
        )

    async def create_lead(
        self, data: LeadCreate, now: datetime | None = None
    ) -> tuple[Lead, bool]:
        """
        Create a scored lead with an SLA deadline, flagging duplicates.

        Args:
            data: Lead fields
            now: Creation time, defaults to the current time

        Returns:
            tuple[Lead, bool]: The created lead and whether it was a duplicate
        """
        now = now or datetime.now(UTC)
        priority = data.priority.value
        minutes = sla_minutes_for(
            priority,
            self.settings.sla_minutes_urgent,
            self.settings.sla_minutes_high,
            self.settings.sla_minutes_default,
        )

        duplicate = await self.check_duplicate(data.customer_phone)

        lead = Lead(**data.model_dump())
        lead.priority = priority
        lead.status = (
            LeadStatus.DUPLICATE.value if duplicate.is_duplicate else data.status.value
        )
        lead.lead_score = self.score(lead)
        lead.is_duplicate = duplicate.is_duplicate
        lead.duplicate_of_id = duplicate.original.id if duplicate.original else None
        lead.created_at = now
        lead.updated_at = now
        lead.sla_deadline = sla_deadline(now, minutes)

        lead = await self.leads.add(lead)
        logger.info(
            "Lead created",
            lead_id=lead.id,
            source=lead.source,
            score=lead.lead_score,
            duplicate_of=lead.duplicate_of_id,
        )

        if not duplicate.is_duplicate:
            await self._notify_new_lead(lead)

        return lead, duplicate.is_duplicate

    async def _notify_new_lead(self, lead: Lead) -> None:
        recipients = [
            *await self.users.list_by_role(Role.ADMIN.value),
            *await self.users.list_by_role(Role.DISPATCHER.value),
        ]
        for user in recipients:
            await self.notifications.add(
                Notification(
                    user_id=user.id,
                    type=NotificationType.NEW_LEAD.value,
                    title="New Lead",
                    message=(
                        f"{lead.customer_name} from {lead.source}"
                        f"{f' needs {lead.service_type}' if lead.service_type else ''}"
                    ),
                    action_url=f"/leads/{lead.id}",
                )
            )

    async def mark_contacted(
        self, lead_id: str, now: datetime | None = None
    ) -> ContactResult:
        """
        Record first contact with a lead and whether its SLA was met.

        Raises:
            NotFoundError: If the lead does not exist
        """
        lead = await self.leads.get_by_id(lead_id)
        if not lead:
            raise NotFoundError(f"Lead {lead_id} not found")

        now = now or datetime.now(UTC)
        breached = bool(lead.sla_deadline and now > lead.sla_deadline)

        lead.contacted_at = now
        lead.sla_breach = breached
        if lead.status == LeadStatus.NEW.value:
            lead.status = LeadStatus.CONTACTED.value
        lead = await self.leads.save(lead)

        response_minutes = (
            round((now - lead.created_at).total_seconds() / 60)
            if lead.created_at
            else None
        )
        logger.info(
            "Lead contacted",
            lead_id=lead.id,
            sla_breached=breached,
            response_time_minutes=response_minutes,
        )
        return ContactResult(
            lead=lead, sla_breached=breached, response_time_minutes=response_minutes
        )

    async def sla_report(self, now: datetime | None = None) -> list[SlaStatus]:
        now = now or datetime.now(UTC)
        leads = await self.leads.list_leads()
        return [
            evaluate_sla(lead, now, self.settings.sla_warning_minutes) for lead in leads
        ]

    async def recalculate_scores(self) -> int:
        """Re-score every lead with the current rules. Returns the count."""
        leads = await self.leads.list_leads()
        for lead in leads:
            lead.lead_score = self.score(lead)
        await self.session.flush()
        logger.info("Lead scores recalculated", count=len(leads))
        return len(leads)
