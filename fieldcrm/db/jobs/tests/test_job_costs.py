"""Tests for job cost and profit derivations."""

from decimal import Decimal
from types import SimpleNamespace

from fieldcrm.db.jobs.costs import (
    apply_cost_update,
    calculate_job_roi,
    recompute_job_financials,
)

DEFAULT_RATE = Decimal("25.00")


def make_job(**overrides):
    values = {
        "labor_hours": Decimal("0"),
        "labor_rate": Decimal("25.00"),
        "labor_cost": Decimal("0"),
        "materials_cost": Decimal("0"),
        "travel_expense": Decimal("0"),
        "equipment_cost": Decimal("0"),
        "other_expenses": Decimal("0"),
        "expense_notes": None,
        "total_cost": Decimal("0"),
        "total_revenue": Decimal("0"),
        "profit": Decimal("0"),
    }
    values.update(overrides)
    return SimpleNamespace(**values)


class TestRecomputeJobFinancials:
    def test_derives_labor_total_and_profit(self):
        job = make_job(
            labor_hours=Decimal("3.5"),
            labor_rate=Decimal("40"),
            materials_cost=Decimal("120.10"),
            travel_expense=Decimal("15"),
            equipment_cost=Decimal("30"),
            other_expenses=Decimal("4.90"),
            total_revenue=Decimal("600"),
        )

        recompute_job_financials(job, DEFAULT_RATE)

        assert job.labor_cost == Decimal("140.00")
        assert job.total_cost == Decimal("310.00")
        assert job.profit == Decimal("290.00")

    def test_missing_rate_falls_back_to_default(self):
        job = make_job(labor_hours=Decimal("2"), labor_rate=None)

        recompute_job_financials(job, DEFAULT_RATE)

        assert job.labor_rate == DEFAULT_RATE
        assert job.labor_cost == Decimal("50.00")

    def test_profit_can_be_negative(self):
        job = make_job(materials_cost=Decimal("80"), total_revenue=Decimal("50"))

        recompute_job_financials(job, DEFAULT_RATE)

        assert job.profit == Decimal("-30.00")


class TestApplyCostUpdate:
    def test_only_provided_fields_change(self):
        job = make_job(materials_cost=Decimal("10"), travel_expense=Decimal("5"))

        apply_cost_update(job, {"materials_cost": "25.50", "travel_expense": None}, DEFAULT_RATE)

        assert job.materials_cost == Decimal("25.50")
        assert job.travel_expense == Decimal("5")
        assert job.total_cost == Decimal("30.50")

    def test_revenue_and_notes(self):
        job = make_job(labor_hours=Decimal("1"))

        apply_cost_update(
            job,
            {"total_revenue": Decimal("200"), "expense_notes": "Parts from supplier"},
            DEFAULT_RATE,
        )

        assert job.expense_notes == "Parts from supplier"
        assert job.profit == Decimal("175.00")


class TestCalculateJobRoi:
    def test_margin(self):
        job = make_job(
            labor_cost=Decimal("100"),
            materials_cost=Decimal("50"),
            total_revenue=Decimal("600"),
        )

        breakdown = calculate_job_roi(job)

        assert breakdown.total_cost == Decimal("150")
        assert breakdown.profit == Decimal("450")
        assert breakdown.profit_margin == Decimal("75")

    def test_zero_revenue_has_zero_margin(self):
        job = make_job(labor_cost=Decimal("100"))

        breakdown = calculate_job_roi(job)

        assert breakdown.profit == Decimal("-100")
        assert breakdown.profit_margin == Decimal("0")
