"""Pydantic schemas for technician profiles."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from fieldcrm.db.technicians.constants import TechnicianClassification, TechnicianStatus


class TechnicianCreate(BaseModel):
    user_id: str | None = None
    full_name: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1)
    email: str | None = None
    status: TechnicianStatus = TechnicianStatus.AVAILABLE
    classification: TechnicianClassification = TechnicianClassification.JUNIOR
    approved_job_types: list[str] = Field(
        default_factory=list, description="Empty means every service type"
    )
    commission_rate: Decimal = Field(default=Decimal("0.10"), ge=0, le=1)
    hourly_rate: Decimal = Field(default=Decimal("25.00"), ge=0)
    emergency_rate: Decimal = Field(default=Decimal("1.5"), ge=1)
    max_daily_jobs: int = Field(default=8, ge=0)


class TechnicianUpdate(BaseModel):
    full_name: str | None = None
    phone: str | None = None
    email: str | None = None
    status: TechnicianStatus | None = None
    classification: TechnicianClassification | None = None
    approved_job_types: list[str] | None = None
    commission_rate: Decimal | None = Field(None, ge=0, le=1)
    hourly_rate: Decimal | None = Field(None, ge=0)
    emergency_rate: Decimal | None = Field(None, ge=1)
    max_daily_jobs: int | None = Field(None, ge=0)
    last_location_lat: Decimal | None = None
    last_location_lng: Decimal | None = None


class TechnicianResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str | None
    full_name: str
    phone: str
    email: str | None
    status: str
    current_job_id: str | None
    classification: str
    approved_job_types: list[str]
    commission_rate: Decimal
    hourly_rate: Decimal
    emergency_rate: Decimal
    max_daily_jobs: int
    completed_jobs_today: int
    last_location_lat: Decimal | None
    last_location_lng: Decimal | None
    last_location_updated: datetime | None
    created_at: datetime
