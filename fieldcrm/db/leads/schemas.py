"""Pydantic schemas for leads."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from fieldcrm.db.leads.constants import LeadPriority, LeadStatus, SlaState


class LeadCreate(BaseModel):
    """Lead as submitted by staff or mapped from a lead-source webhook."""

    source: str = Field(..., min_length=1, description="Lead source, e.g. eLocal")
    customer_name: str = Field(..., min_length=1)
    customer_phone: str = Field(..., min_length=1)
    customer_email: str | None = None
    customer_address: str | None = None
    city: str | None = None
    zip_code: str | None = None
    service_type: str | None = None
    description: str | None = None
    status: LeadStatus = LeadStatus.NEW
    priority: LeadPriority = LeadPriority.NORMAL
    cost: Decimal | None = Field(None, ge=0, description="Price paid for the lead")
    assigned_to: str | None = None
    notes: str | None = None


class LeadUpdate(BaseModel):
    customer_name: str | None = None
    customer_phone: str | None = None
    customer_email: str | None = None
    customer_address: str | None = None
    city: str | None = None
    zip_code: str | None = None
    service_type: str | None = None
    description: str | None = None
    status: LeadStatus | None = None
    priority: LeadPriority | None = None
    cost: Decimal | None = Field(None, ge=0)
    revenue: Decimal | None = Field(None, ge=0)
    assigned_to: str | None = None
    notes: str | None = None


class LeadResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    source: str
    customer_name: str
    customer_phone: str
    customer_email: str | None
    customer_address: str | None
    city: str | None
    zip_code: str | None
    service_type: str | None
    description: str | None
    status: str
    priority: str
    cost: Decimal | None
    revenue: Decimal | None
    assigned_to: str | None
    notes: str | None
    contacted_at: datetime | None
    converted_at: datetime | None
    sla_deadline: datetime | None
    sla_breach: bool
    lead_score: int
    is_duplicate: bool
    duplicate_of_id: str | None
    created_at: datetime
    updated_at: datetime


class LeadCreatedResponse(LeadResponse):
    was_duplicate_detected: bool = False


class DuplicateCheckResponse(BaseModel):
    is_duplicate: bool
    original_lead: LeadResponse | None = None
    match_count: int


class LeadContactResponse(LeadResponse):
    sla_breached: bool
    response_time_minutes: int | None


class SlaStatusResponse(BaseModel):
    lead_id: str
    status: SlaState
    remaining_minutes: int | None
    sla_deadline: datetime | None
    contacted_at: datetime | None


class RecalculateScoresResponse(BaseModel):
    message: str
    updated: int
