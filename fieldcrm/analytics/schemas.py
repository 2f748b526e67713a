"""Response schemas for analytics reports."""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict


class _FromAttributes(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class TechnicianPayrollResponse(_FromAttributes):
    technician_id: str
    technician_name: str
    classification: str
    hourly_rate: Decimal
    commission_rate: Decimal
    emergency_rate: Decimal
    jobs_completed: int
    regular_hours: Decimal
    emergency_hours: Decimal
    total_hours: Decimal
    total_revenue: Decimal
    regular_pay: Decimal
    emergency_pay: Decimal
    commission_earned: Decimal
    gross_pay: Decimal
    estimated_tax: Decimal
    lead_fees: Decimal
    net_pay: Decimal
    avg_job_duration_minutes: int
    efficiency: int
    commission_basis: str
    job_ids: list[str]


class PayrollTotalsResponse(_FromAttributes):
    jobs_completed: int
    total_hours: Decimal
    gross_pay: Decimal
    estimated_tax: Decimal
    lead_fees: Decimal
    net_pay: Decimal


class PayrollResponse(_FromAttributes):
    period: str
    period_start: datetime
    period_end: datetime
    technicians: list[TechnicianPayrollResponse]
    totals: PayrollTotalsResponse


class DailyRevenueResponse(_FromAttributes):
    day: date
    revenue: Decimal
    profit: Decimal
    jobs: int


class ServiceRevenueResponse(_FromAttributes):
    service_type: str
    revenue: Decimal
    count: int


class QuoteFunnelResponse(_FromAttributes):
    sent: int
    viewed: int
    accepted: int
    declined: int
    conversion_rate: Decimal


class UpsellResponse(_FromAttributes):
    original_quote_total: Decimal
    final_revenue: Decimal
    upsell_amount: Decimal
    upsell_percentage: Decimal
    upsell_jobs: int


class CommissionSummaryResponse(_FromAttributes):
    pending: Decimal
    approved: Decimal
    paid: Decimal
    total: Decimal


class EarningsResponse(_FromAttributes):
    range_start: datetime
    range_end: datetime
    completed_jobs: int
    total_revenue: Decimal
    total_profit: Decimal
    total_labor: Decimal
    total_materials: Decimal
    avg_job_value: Decimal
    profit_margin: Decimal
    quotes: QuoteFunnelResponse
    upsell: UpsellResponse
    revenue_by_day: list[DailyRevenueResponse]
    top_services: list[ServiceRevenueResponse]
    commissions: CommissionSummaryResponse | None = None


class TechnicianRevenueResponse(BaseModel):
    technician_id: str
    technician_name: str | None = None
    revenue: Decimal
    costs: Decimal
    profit: Decimal
    job_count: int
    event_job_ids: list[str]
    fallback_job_ids: list[str]


class RevenueByTechnicianResponse(BaseModel):
    technicians: list[TechnicianRevenueResponse]
    total_revenue: Decimal
    total_profit: Decimal
    event_job_count: int
    fallback_job_count: int
    ignored_event_ids: list[str]


class SalesAnalyticsResponse(_FromAttributes):
    salesperson_id: str
    total_commission_earned: Decimal
    pending_commission: Decimal
    total_jobs_handled: int
    completed_jobs: int
    total_quotes_sent: int
    accepted_quotes: int
    conversion_rate: Decimal
    total_revenue: Decimal


class SourceROIResponse(_FromAttributes):
    source: str
    spend: Decimal
    leads: int
    converted: int
    revenue: Decimal
    roi: Decimal
    cost_per_lead: Decimal
    conversion_rate: Decimal


class MarketingROIResponse(_FromAttributes):
    period: str | None = None
    sources: list[SourceROIResponse]
    total_spend: Decimal
    total_revenue: Decimal
    total_leads: int
    total_converted: int
    overall_roi: Decimal


class ROISummaryResponse(_FromAttributes):
    total_jobs: int
    completed_jobs: int
    cancelled_jobs: int
    total_revenue: Decimal
    total_cost: Decimal
    total_labor_cost: Decimal
    total_materials_cost: Decimal
    total_travel_expense: Decimal
    total_equipment_cost: Decimal
    total_other_expenses: Decimal
    total_profit: Decimal
    average_profit_margin: Decimal
