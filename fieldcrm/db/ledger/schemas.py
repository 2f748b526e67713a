"""Pydantic schemas for job lead fees and revenue events."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class LeadFeeCreate(BaseModel):
    job_id: str
    technician_id: str
    amount: Decimal | None = Field(
        None, ge=0, description="Defaults to the configured flat lead fee"
    )
    accepted_at: datetime | None = None
    notes: str | None = None


class LeadFeeUpdate(BaseModel):
    amount: Decimal | None = Field(None, ge=0)
    accepted_at: datetime | None = None
    notes: str | None = None


class LeadFeeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    job_id: str
    technician_id: str
    amount: Decimal
    accepted_at: datetime
    notes: str | None
    created_at: datetime


class RevenueEventCreate(BaseModel):
    job_id: str
    technician_id: str | None = None
    gross_revenue: Decimal = Field(..., ge=0)
    total_costs: Decimal = Field(Decimal("0"), ge=0)
    notes: str | None = None
    recorded_at: datetime | None = None


class RevenueEventUpdate(BaseModel):
    technician_id: str | None = None
    gross_revenue: Decimal | None = Field(None, ge=0)
    total_costs: Decimal | None = Field(None, ge=0)
    notes: str | None = None


class RevenueEventResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    job_id: str
    technician_id: str | None
    gross_revenue: Decimal
    total_costs: Decimal
    net_profit: Decimal
    notes: str | None
    recorded_at: datetime
