"""Pydantic schemas for marketing campaigns and spend."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

PERIOD_PATTERN = r"^\d{4}-(0[1-9]|1[0-2])$"


class CampaignCreate(BaseModel):
    name: str = Field(..., min_length=1)
    source: str = Field(..., min_length=1)
    type: str = "paid"
    budget: Decimal | None = Field(None, ge=0)
    notes: str | None = None
    is_active: bool = True


class CampaignUpdate(BaseModel):
    name: str | None = Field(None, min_length=1)
    source: str | None = Field(None, min_length=1)
    type: str | None = None
    budget: Decimal | None = Field(None, ge=0)
    notes: str | None = None
    is_active: bool | None = None


class CampaignResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    source: str
    type: str
    budget: Decimal | None
    notes: str | None
    is_active: bool
    created_at: datetime


class SpendCreate(BaseModel):
    campaign_id: str | None = None
    source: str = Field(..., min_length=1)
    period: str = Field(..., pattern=PERIOD_PATTERN, description="Month as YYYY-MM")
    amount: Decimal = Field(..., ge=0)
    leads_generated: int = Field(0, ge=0)
    leads_converted: int = Field(0, ge=0)
    revenue_generated: Decimal = Field(Decimal("0"), ge=0)
    notes: str | None = None


class SpendUpdate(BaseModel):
    campaign_id: str | None = None
    source: str | None = Field(None, min_length=1)
    period: str | None = Field(None, pattern=PERIOD_PATTERN)
    amount: Decimal | None = Field(None, ge=0)
    leads_generated: int | None = Field(None, ge=0)
    leads_converted: int | None = Field(None, ge=0)
    revenue_generated: Decimal | None = Field(None, ge=0)
    notes: str | None = None


class SpendResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    campaign_id: str | None
    source: str
    period: str
    amount: Decimal
    leads_generated: int
    leads_converted: int
    revenue_generated: Decimal
    notes: str | None
    created_at: datetime
