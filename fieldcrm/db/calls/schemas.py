"""Pydantic schemas for call records."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from fieldcrm.db.jobs.schemas import JobResponse
from fieldcrm.db.quotes.schemas import QuoteResponse


class CallCreate(BaseModel):
    lead_id: str | None = None
    job_id: str | None = None
    caller_phone: str = Field(..., min_length=1)
    caller_name: str | None = None
    direction: str = Field("inbound", pattern="^(inbound|outbound)$")
    status: str = "completed"
    duration: int | None = Field(None, ge=0, description="Seconds")
    recording_url: str | None = None
    address: str | None = None
    service_type: str | None = None
    notes: str | None = None


class CallResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    lead_id: str | None
    job_id: str | None
    quote_id: str | None
    caller_phone: str
    caller_name: str | None
    direction: str
    status: str
    duration: int | None
    recording_url: str | None
    address: str | None
    service_type: str | None
    notes: str | None
    handled_by: str | None
    created_at: datetime


class ConvertToQuoteResponse(BaseModel):
    call: CallResponse
    quote: QuoteResponse
    job: JobResponse
