"""Pydantic schemas for the pricebook."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class CategoryCreate(BaseModel):
    name: str = Field(..., min_length=1)
    description: str | None = None
    sort_order: int = 0


class CategoryUpdate(BaseModel):
    name: str | None = Field(None, min_length=1)
    description: str | None = None
    sort_order: int | None = None


class CategoryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: str | None
    sort_order: int
    created_at: datetime


class ItemCreate(BaseModel):
    category_id: str | None = None
    name: str = Field(..., min_length=1)
    description: str | None = None
    unit_price: Decimal = Field(..., ge=0)
    unit_cost: Decimal | None = Field(None, ge=0)
    unit: str = "each"
    taxable: bool = True
    is_active: bool = True


class ItemUpdate(BaseModel):
    category_id: str | None = None
    name: str | None = Field(None, min_length=1)
    description: str | None = None
    unit_price: Decimal | None = Field(None, ge=0)
    unit_cost: Decimal | None = Field(None, ge=0)
    unit: str | None = None
    taxable: bool | None = None
    is_active: bool | None = None


class ItemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    category_id: str | None
    name: str
    description: str | None
    unit_price: Decimal
    unit_cost: Decimal | None
    unit: str
    taxable: bool
    is_active: bool
    created_at: datetime
