"""
Quote pricing, public links and customer acceptance.

Totals are recomputed by ``totals.apply_quote_contents`` whenever the line
items, labor entries or tax rate change, and status changes go through
``lifecycle.ensure_transition``.
"""

import secrets
from dataclasses import dataclass
from datetime import UTC, datetime
from http import HTTPStatus

from sqlalchemy.ext.asyncio import AsyncSession

from fieldcrm.config import AppSettings, get_app_settings
from fieldcrm.db.jobs.constants import (
    DEFAULT_SERVICE_TYPE,
    MISSING_PHONE,
    JobPriority,
    JobStatus,
)
from fieldcrm.db.jobs.model import Job, JobTimelineEvent
from fieldcrm.db.jobs.repository import JobRepository, JobTimelineRepository
from fieldcrm.db.quotes.constants import PUBLIC_TOKEN_BYTES, QuoteStatus
from fieldcrm.db.quotes.lifecycle import ensure_transition, is_open
from fieldcrm.db.quotes.model import Quote
from fieldcrm.db.quotes.repository import QuoteRepository
from fieldcrm.db.quotes.schemas import QuoteAcceptance, QuoteCreate, QuoteUpdate
from fieldcrm.db.quotes.totals import apply_quote_contents
from fieldcrm.exceptions import FieldCRMError, NotFoundError, QuoteNotAcceptableError
from fieldcrm.integrations.email.client import ResendClient
from fieldcrm.integrations.email.exceptions import (
    EmailDeliveryError,
    EmailNotConfiguredError,
)
from fieldcrm.utils.logger import logger


@dataclass
class AcceptedQuote:
    quote: Quote
    job: Job | None


def public_quote_path(token: str) -> str:
    return f"/quote/{token}"


class QuoteService:
    """Service for quotes and their customer-facing link."""

    def __init__(self, session: AsyncSession, settings: AppSettings | None = None):
        self.session = session
        self.settings = settings or get_app_settings()
        self.quotes = QuoteRepository(session)
        self.jobs = JobRepository(session)
        self.timeline = JobTimelineRepository(session)

    async def get_quote(self, quote_id: str) -> Quote:
        quote = await self.quotes.get_by_id(quote_id)
        if not quote:
            raise NotFoundError(f"Quote {quote_id} not found")
        return quote

    async def delete_quote(self, quote_id: str) -> None:
        if not await self.quotes.delete(quote_id):
            raise NotFoundError(f"Quote {quote_id} not found")
        logger.info("Quote deleted", quote_id=quote_id)

    async def get_by_token(self, token: str) -> Quote:
        quote = await self.quotes.get_by_token(token)
        if not quote:
            raise NotFoundError("Quote not found")
        return quote

    async def create_quote(self, data: QuoteCreate) -> Quote:
        quote = Quote(
            **data.model_dump(exclude={"line_items", "labor_entries", "tax_rate"})
        )
        quote.status = QuoteStatus.DRAFT.value
        apply_quote_contents(
            quote,
            line_items=[item.model_dump(mode="json") for item in data.line_items],
            labor_entries=[entry.model_dump(mode="json") for entry in data.labor_entries],
            tax_rate=data.tax_rate,
        )
        return await self.quotes.add(quote)

    async def update_quote(
        self, quote_id: str, data: QuoteUpdate, now: datetime | None = None
    ) -> AcceptedQuote:
        """
        Apply a partial update, recomputing totals and validating any status change.

        Returns:
            AcceptedQuote: The quote, plus the job when the update accepted it

        Raises:
            NotFoundError: If the quote does not exist
            InvalidTransitionError: If the status change is not allowed
        """
        now = now or datetime.now(UTC)
        quote = await self.get_quote(quote_id)
        changes = data.model_dump(
            exclude_unset=True,
            exclude={"line_items", "labor_entries", "tax_rate", "status"},
        )
        for field, value in changes.items():
            setattr(quote, field, value)

        if (
            data.line_items is not None
            or data.labor_entries is not None
            or data.tax_rate is not None
        ):
            apply_quote_contents(
                quote,
                line_items=[item.model_dump(mode="json") for item in data.line_items]
                if data.line_items is not None
                else None,
                labor_entries=[
                    entry.model_dump(mode="json") for entry in data.labor_entries
                ]
                if data.labor_entries is not None
                else None,
                tax_rate=data.tax_rate,
            )

        if data.status is not None and data.status.value != quote.status:
            if data.status == QuoteStatus.ACCEPTED:
                return await self._accept(quote, None, now)
            self._move_to(quote, data.status, now)

        quote = await self.quotes.save(quote)
        return AcceptedQuote(quote=quote, job=None)

    @staticmethod
    def _move_to(quote: Quote, target: QuoteStatus, now: datetime) -> None:
        ensure_transition(quote.status, target)
        quote.status = target.value
        if target == QuoteStatus.SENT and quote.sent_at is None:
            quote.sent_at = now
        elif target == QuoteStatus.VIEWED and quote.viewed_at is None:
            quote.viewed_at = now
        elif target == QuoteStatus.ACCEPTED:
            quote.accepted_at = now
        elif target == QuoteStatus.DECLINED:
            quote.declined_at = now

    async def generate_link(self, quote_id: str) -> Quote:
        """Give the quote a public token, reusing the existing one if present."""
        quote = await self.get_quote(quote_id)
        if not quote.public_token:
            quote.public_token = secrets.token_hex(PUBLIC_TOKEN_BYTES)
            quote = await self.quotes.save(quote)
            logger.info("Quote link generated", quote_id=quote.id)
        return quote

    async def get_public(self, token: str, now: datetime | None = None) -> Quote:
        """
        Load a quote by its public token, recording the first view.

        The first view stamps ``viewed_at`` and moves a draft or sent quote
        to viewed.
        """
        now = now or datetime.now(UTC)
        quote = await self.get_by_token(token)
        if quote.viewed_at is None:
            quote.viewed_at = now
            if quote.status in (QuoteStatus.DRAFT.value, QuoteStatus.SENT.value):
                quote.status = QuoteStatus.VIEWED.value
            quote = await self.quotes.save(quote)
        return quote

    async def accept_public(
        self, token: str, acceptance: QuoteAcceptance, now: datetime | None = None
    ) -> AcceptedQuote:
        quote = await self.get_by_token(token)
        return await self._accept(quote, acceptance, now or datetime.now(UTC))

    async def _accept(
        self, quote: Quote, acceptance: QuoteAcceptance | None, now: datetime
    ) -> AcceptedQuote:
        """
        Accept a quote and make sure it has an active job.

        Raises:
            QuoteNotAcceptableError: If the quote expired, is already closed,
                or lacks the customer name or address a job needs
        """
        if quote.expires_at and now > quote.expires_at:
            raise QuoteNotAcceptableError("Quote has expired")
        if not is_open(quote.status):
            raise QuoteNotAcceptableError(f"Quote is {quote.status}")
        if not quote.customer_name or not quote.address:
            raise QuoteNotAcceptableError(
                "Cannot create job: quote is missing required customer name or address"
            )

        self._move_to(quote, QuoteStatus.ACCEPTED, now)
        if acceptance is not None:
            quote.sms_opt_in = acceptance.sms_opt_in
            quote.sms_ownership_confirmed = acceptance.sms_ownership_confirmed
            quote.email_opt_in = acceptance.email_opt_in
            quote.email_ownership_confirmed = acceptance.email_ownership_confirmed

        job = await self._active_job_for(quote)
        if job is None:
            job = await self._create_job_from(quote)
            quote.job_id = job.id

        quote = await self.quotes.save(quote)
        logger.info("Quote accepted", quote_id=quote.id, job_id=job.id)
        return AcceptedQuote(quote=quote, job=job)

    async def _active_job_for(self, quote: Quote) -> Job | None:
        if not quote.job_id:
            return None
        job = await self.jobs.get_by_id(quote.job_id)
        if job is None or job.status == JobStatus.CANCELLED.value:
            return None
        return job

    async def _create_job_from(self, quote: Quote) -> Job:
        line_items = quote.get_line_items()
        service_type = (
            line_items[0].get("description") if line_items else None
        ) or DEFAULT_SERVICE_TYPE

        job = await self.jobs.add(
            Job(
                customer_name=quote.customer_name,
                customer_phone=quote.customer_phone or MISSING_PHONE,
                customer_email=quote.customer_email,
                address=quote.address,
                service_type=service_type,
                description=f"Job created from accepted quote #{quote.id[:8]}",
                status=JobStatus.PENDING.value,
                priority=JobPriority.NORMAL.value,
                labor_rate=self.settings.default_hourly_rate,
            )
        )
        await self.timeline.add(
            JobTimelineEvent(
                job_id=job.id,
                event_type="job_created",
                description=f"Job created from accepted quote. Total: ${quote.total}",
            )
        )
        logger.info("Job created from quote", quote_id=quote.id, job_id=job.id)
        return job

    async def decline_public(self, token: str, now: datetime | None = None) -> Quote:
        now = now or datetime.now(UTC)
        quote = await self.get_by_token(token)
        self._move_to(quote, QuoteStatus.DECLINED, now)
        return await self.quotes.save(quote)

    async def resend_email(
        self, quote_id: str, email_client: ResendClient, now: datetime | None = None
    ) -> tuple[Quote, str]:
        """
        Email the public link to the customer.

        A draft quote becomes sent. A token is generated if the quote has none.

        Returns:
            tuple[Quote, str]: The quote and the email provider's message id

        Raises:
            FieldCRMError: 400 if the quote has no email, 503 if email is not
                configured, 502 if the provider rejected the message
        """
        now = now or datetime.now(UTC)
        quote = await self.generate_link(quote_id)
        if not quote.customer_email:
            raise FieldCRMError("Quote has no customer email")

        link = f"{self.settings.client_base_url}{public_quote_path(quote.public_token)}"
        try:
            sent = await email_client.send_email(
                to=quote.customer_email,
                subject="Your service quote",
                html=(
                    f"<p>Hi {quote.customer_name},</p>"
                    f"<p>Your quote for ${quote.total} is ready.</p>"
                    f'<p><a href="{link}">View and accept your quote</a></p>'
                ),
                text=f"Your quote for ${quote.total} is ready: {link}",
            )
        except EmailNotConfiguredError as e:
            raise FieldCRMError(e.message, HTTPStatus.SERVICE_UNAVAILABLE) from e
        except EmailDeliveryError as e:
            logger.error("Quote email failed", quote_id=quote.id, error=str(e))
            raise FieldCRMError(
                f"Failed to send quote email: {e.message}", HTTPStatus.BAD_GATEWAY
            ) from e

        if quote.status == QuoteStatus.DRAFT.value:
            self._move_to(quote, QuoteStatus.SENT, now)
        quote = await self.quotes.save(quote)
        logger.info("Quote email sent", quote_id=quote.id, message_id=sent.id)
        return quote, sent.id
