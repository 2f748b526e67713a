"""
Call records and turning a call into a draft quote.
"""

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from fieldcrm.config import AppSettings, get_app_settings
from fieldcrm.db.calls.model import Call
from fieldcrm.db.calls.repository import CallRepository
from fieldcrm.db.jobs.constants import DEFAULT_SERVICE_TYPE, JobPriority, JobStatus
from fieldcrm.db.jobs.model import Job, JobTimelineEvent
from fieldcrm.db.jobs.repository import JobRepository, JobTimelineRepository
from fieldcrm.db.quotes.constants import QuoteStatus
from fieldcrm.db.quotes.model import Quote
from fieldcrm.db.quotes.repository import QuoteRepository
from fieldcrm.db.quotes.totals import apply_quote_contents
from fieldcrm.exceptions import FieldCRMError, NotFoundError
from fieldcrm.utils.logger import logger

UNKNOWN_CALLER = "Unknown caller"


@dataclass
class ConvertedCall:
    call: Call
    quote: Quote
    job: Job


class CallService:
    def __init__(self, session: AsyncSession, settings: AppSettings | None = None):
        self.session = session
        self.settings = settings or get_app_settings()
        self.calls = CallRepository(session)
        self.jobs = JobRepository(session)
        self.timeline = JobTimelineRepository(session)
        self.quotes = QuoteRepository(session)

    async def get_call(self, call_id: str) -> Call:
        call = await self.calls.get_by_id(call_id)
        if not call:
            raise NotFoundError(f"Call {call_id} not found")
        return call

    async def convert_to_quote(
        self, call_id: str, created_by: str | None = None
    ) -> ConvertedCall:
        """
        Create a draft quote from a call.

        The quote is attached to the call's job. A call without a job gets a
        new pending job built from the caller's details first. Converting a
        call that already has a quote returns that quote.

        Raises:
            NotFoundError: If the call does not exist
            FieldCRMError: If a new job is needed but the call has no address
        """
        call = await self.get_call(call_id)

        job = await self.jobs.get_by_id(call.job_id) if call.job_id else None
        if call.quote_id:
            quote = await self.quotes.get_by_id(call.quote_id)
            if quote and job:
                return ConvertedCall(call=call, quote=quote, job=job)

        if job is None:
            job = await self._create_job_from(call, created_by)
            call.job_id = job.id

        quote = Quote(
            job_id=job.id,
            technician_id=job.assigned_technician_id,
            customer_name=job.customer_name,
            customer_phone=job.customer_phone,
            customer_email=job.customer_email,
            address=job.address,
            status=QuoteStatus.DRAFT.value,
            notes=call.notes,
        )
        apply_quote_contents(quote, line_items=[], labor_entries=[])
        quote = await self.quotes.add(quote)

        call.quote_id = quote.id
        call = await self.calls.save(call)
        logger.info(
            "Call converted to quote", call_id=call.id, quote_id=quote.id, job_id=job.id
        )
        return ConvertedCall(call=call, quote=quote, job=job)

    async def _create_job_from(self, call: Call, created_by: str | None) -> Job:
        if not call.address:
            raise FieldCRMError("Cannot create job: call has no address")

        job = await self.jobs.add(
            Job(
                lead_id=call.lead_id,
                customer_name=call.caller_name or UNKNOWN_CALLER,
                customer_phone=call.caller_phone,
                address=call.address,
                service_type=call.service_type or DEFAULT_SERVICE_TYPE,
                description=f"Job created from call #{call.id[:8]}",
                status=JobStatus.PENDING.value,
                priority=JobPriority.NORMAL.value,
                labor_rate=self.settings.default_hourly_rate,
            )
        )
        await self.timeline.add(
            JobTimelineEvent(
                job_id=job.id,
                event_type="job_created",
                description="Job created from phone call",
                created_by=created_by,
            )
        )
        return job
