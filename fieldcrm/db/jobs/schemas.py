"""Pydantic schemas for jobs, job actions and the job timeline."""

from datetime import datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, computed_field

from fieldcrm.db.jobs.constants import JobPriority
from fieldcrm.db.jobs.lifecycle import allowed_actions


class JobCreate(BaseModel):
    lead_id: str | None = None
    customer_name: str = Field(..., min_length=1)
    customer_phone: str = Field(..., min_length=1)
    customer_email: str | None = None
    address: str = Field(..., min_length=1)
    city: str | None = None
    zip_code: str | None = None
    latitude: Decimal | None = Field(None, ge=-90, le=90)
    longitude: Decimal | None = Field(None, ge=-180, le=180)
    service_type: str = Field(..., min_length=1)
    description: str | None = None
    priority: JobPriority = JobPriority.NORMAL
    scheduled_date: datetime | None = None
    scheduled_time_start: str | None = None
    scheduled_time_end: str | None = None
    estimated_duration: int | None = Field(None, ge=0, description="Minutes")
    notes: str | None = None
    assigned_salesperson_id: str | None = None
    total_revenue: Decimal | None = Field(None, ge=0)


class JobUpdate(BaseModel):
    """
    Editable job details.

    Status, assignment and cost fields have dedicated endpoints and are not
    accepted here.
    """

    customer_name: str | None = None
    customer_phone: str | None = None
    customer_email: str | None = None
    address: str | None = None
    city: str | None = None
    zip_code: str | None = None
    latitude: Decimal | None = Field(None, ge=-90, le=90)
    longitude: Decimal | None = Field(None, ge=-180, le=180)
    service_type: str | None = None
    description: str | None = None
    priority: JobPriority | None = None
    scheduled_date: datetime | None = None
    scheduled_time_start: str | None = None
    scheduled_time_end: str | None = None
    estimated_duration: int | None = Field(None, ge=0)
    notes: str | None = None
    assigned_salesperson_id: str | None = None


class JobCostsUpdate(BaseModel):
    labor_hours: Decimal | None = Field(None, ge=0)
    labor_rate: Decimal | None = Field(None, ge=0)
    materials_cost: Decimal | None = Field(None, ge=0)
    travel_expense: Decimal | None = Field(None, ge=0)
    equipment_cost: Decimal | None = Field(None, ge=0)
    other_expenses: Decimal | None = Field(None, ge=0)
    expense_notes: str | None = None
    total_revenue: Decimal | None = Field(None, ge=0)


class AssignJobRequest(BaseModel):
    technician_id: str


class ClaimJobRequest(BaseModel):
    technician_id: str | None = Field(
        None, description="Defaults to the caller's own technician profile"
    )


class ArriveJobRequest(BaseModel):
    latitude: float | None = Field(None, ge=-90, le=90)
    longitude: float | None = Field(None, ge=-180, le=180)


class CompleteJobRequest(JobCostsUpdate):
    """Final costs and revenue captured when a job is completed."""


class CancelJobRequest(BaseModel):
    reason: str | None = None


class JobResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    lead_id: str | None
    customer_name: str
    customer_phone: str
    customer_email: str | None
    address: str
    city: str | None
    zip_code: str | None
    latitude: Decimal | None
    longitude: Decimal | None
    service_type: str
    description: str | None
    status: str
    priority: str
    scheduled_date: datetime | None
    scheduled_time_start: str | None
    scheduled_time_end: str | None
    estimated_duration: int | None
    notes: str | None
    assigned_technician_id: str | None
    assigned_salesperson_id: str | None
    dispatcher_id: str | None
    assigned_at: datetime | None
    confirmed_at: datetime | None
    en_route_at: datetime | None
    arrived_at: datetime | None
    started_at: datetime | None
    completed_at: datetime | None
    cancelled_at: datetime | None
    cancellation_reason: str | None
    cancelled_by: str | None
    arrival_lat: Decimal | None
    arrival_lng: Decimal | None
    arrival_verified: bool | None
    arrival_distance: int | None
    labor_hours: Decimal
    labor_rate: Decimal
    labor_cost: Decimal
    materials_cost: Decimal
    travel_expense: Decimal
    equipment_cost: Decimal
    other_expenses: Decimal
    expense_notes: str | None
    total_cost: Decimal
    total_revenue: Decimal
    profit: Decimal
    created_at: datetime
    updated_at: datetime

    @computed_field
    @property
    def available_actions(self) -> list[str]:
        """Actions the job's current status allows, for showing only valid controls."""
        return [action.value for action in allowed_actions(self.status)]


class JobTimelineEventCreate(BaseModel):
    event_type: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    metadata: dict[str, Any] | None = None


class JobTimelineEventResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    job_id: str
    event_type: str
    description: str
    created_by: str | None
    metadata: dict[str, Any] | None = Field(None, validation_alias="event_metadata")
    created_at: datetime


class JobROIResponse(BaseModel):
    job_id: str
    total_revenue: Decimal
    labor_cost: Decimal
    materials_cost: Decimal
    travel_expense: Decimal
    equipment_cost: Decimal
    other_expenses: Decimal
    total_cost: Decimal
    profit: Decimal
    profit_margin: Decimal
