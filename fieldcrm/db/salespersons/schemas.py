"""Pydantic schemas for salesperson profiles."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class SalespersonCreate(BaseModel):
    user_id: str | None = None
    full_name: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1)
    email: str | None = None
    status: str = "available"
    commission_rate: Decimal = Field(
        default=Decimal("0.15"), ge=0, le=1, description="Applied to job net profit"
    )
    hourly_rate: Decimal = Field(default=Decimal("20.00"), ge=0)
    max_daily_leads: int = Field(default=20, ge=0)
    priority: int = Field(default=1, ge=1)
    coverage_zones: list[str] = Field(default_factory=list)
    specializations: list[str] = Field(default_factory=list)
    is_active: bool = True


class SalespersonUpdate(BaseModel):
    full_name: str | None = None
    phone: str | None = None
    email: str | None = None
    status: str | None = None
    commission_rate: Decimal | None = Field(None, ge=0, le=1)
    hourly_rate: Decimal | None = Field(None, ge=0)
    max_daily_leads: int | None = Field(None, ge=0)
    priority: int | None = Field(None, ge=1)
    coverage_zones: list[str] | None = None
    specializations: list[str] | None = None
    is_active: bool | None = None


class SalespersonResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str | None
    full_name: str
    phone: str
    email: str | None
    status: str
    commission_rate: Decimal
    hourly_rate: Decimal
    max_daily_leads: int
    handled_leads_today: int
    priority: int
    coverage_zones: list[str]
    specializations: list[str]
    is_active: bool
    created_at: datetime
