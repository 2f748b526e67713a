"""Pydantic schemas for salesperson commissions."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict

from fieldcrm.db.commissions.constants import CommissionStatus


class CalculateCommissionRequest(BaseModel):
    salesperson_id: str


class CommissionUpdate(BaseModel):
    status: CommissionStatus | None = None
    payroll_period: str | None = None
    notes: str | None = None


class CommissionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    salesperson_id: str
    job_id: str
    lead_id: str | None
    job_revenue: Decimal
    labor_cost: Decimal
    materials_cost: Decimal
    travel_expense: Decimal
    equipment_cost: Decimal
    other_expenses: Decimal
    total_costs: Decimal
    net_profit: Decimal
    commission_rate: Decimal
    commission_amount: Decimal
    status: str
    payroll_period: str | None
    notes: str | None
    approved_by: str | None
    calculated_at: datetime
    approved_at: datetime | None
    paid_at: datetime | None
    created_at: datetime
