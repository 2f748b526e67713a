"""Tests for salesperson commission, marketing ROI and job ROI aggregation."""

from datetime import UTC, datetime
from decimal import Decimal
from types import SimpleNamespace

import pytest

from fieldcrm.analytics.marketing import compute_marketing_roi, roi_percentage
from fieldcrm.analytics.roi import aggregate_roi
from fieldcrm.analytics.sales import calculate_commission, summarize_salesperson
from fieldcrm.exceptions import CommissionNotApplicableError


def make_job(job_id="job-1", **overrides):
    values = {
        "id": job_id,
        "status": "completed",
        "assigned_salesperson_id": "sales-1",
        "created_at": datetime(2026, 3, 1, tzinfo=UTC),
        "total_revenue": Decimal("1000"),
        "labor_cost": Decimal("200"),
        "materials_cost": Decimal("100"),
        "travel_expense": Decimal("0"),
        "equipment_cost": Decimal("0"),
        "other_expenses": Decimal("0"),
    }
    values.update(overrides)
    return SimpleNamespace(**values)


class TestCalculateCommission:
    def test_commission_on_net_profit(self):
        figures = calculate_commission(make_job(), Decimal("0.15"))

        assert figures.total_costs == Decimal("300.00")
        assert figures.net_profit == Decimal("700.00")
        assert figures.commission_rate == Decimal("0.15")
        assert figures.commission_amount == Decimal("105.00")

    def test_job_must_be_completed(self):
        with pytest.raises(CommissionNotApplicableError, match="not completed"):
            calculate_commission(make_job(status="in_progress"), Decimal("0.15"))

    def test_job_must_be_profitable(self):
        job = make_job(total_revenue=Decimal("300"))

        with pytest.raises(CommissionNotApplicableError, match="no profit"):
            calculate_commission(job, Decimal("0.15"))


class TestSummarizeSalesperson:
    def test_summary(self):
        commissions = [
            SimpleNamespace(status="pending", commission_amount=Decimal("50")),
            SimpleNamespace(status="approved", commission_amount=Decimal("25")),
            SimpleNamespace(status="paid", commission_amount=Decimal("100")),
        ]
        jobs = [
            make_job("job-1"),
            make_job("job-2", status="in_progress"),
            make_job("job-3", assigned_salesperson_id="sales-2"),
        ]
        quotes = [
            SimpleNamespace(job_id="job-1", status="accepted"),
            SimpleNamespace(job_id="job-2", status="draft"),
            SimpleNamespace(job_id="job-2", status="sent"),
            SimpleNamespace(job_id="job-3", status="accepted"),
        ]

        summary = summarize_salesperson("sales-1", commissions, jobs, quotes)

        assert summary.total_commission_earned == Decimal("100.00")
        assert summary.pending_commission == Decimal("75.00")
        assert summary.total_jobs_handled == 2
        assert summary.completed_jobs == 1
        assert summary.total_quotes_sent == 2
        assert summary.accepted_quotes == 1
        assert summary.conversion_rate == Decimal("50.00")
        assert summary.total_revenue == Decimal("1000.00")


class TestMarketingROI:
    def test_roi_percentage(self):
        assert roi_percentage(Decimal("1500"), Decimal("500")) == Decimal("200.00")
        assert roi_percentage(Decimal("100"), Decimal("0")) == Decimal("0")

    def test_per_source_for_month(self):
        march = datetime(2026, 3, 10, tzinfo=UTC)
        spend = [
            SimpleNamespace(source="Angi", period="2026-03", amount=Decimal("500")),
            SimpleNamespace(source="Angi", period="2026-02", amount=Decimal("300")),
            SimpleNamespace(source="eLocal", period="2026-03", amount=Decimal("200")),
        ]
        leads = [
            SimpleNamespace(
                source="Angi", status="converted", revenue=Decimal("1500"), created_at=march
            ),
            SimpleNamespace(source="Angi", status="new", revenue=None, created_at=march),
            SimpleNamespace(source="eLocal", status="new", revenue=None, created_at=march),
            SimpleNamespace(source="Thumbtack", status="lost", revenue=None, created_at=march),
        ]

        report = compute_marketing_roi(spend, leads, period="2026-03")

        by_source = {row.source: row for row in report.sources}
        assert [row.source for row in report.sources] == ["Angi", "Thumbtack", "eLocal"]
        assert by_source["Angi"].spend == Decimal("500.00")
        assert by_source["Angi"].roi == Decimal("200.00")
        assert by_source["Angi"].cost_per_lead == Decimal("250.00")
        assert by_source["Angi"].conversion_rate == Decimal("50.00")
        assert by_source["eLocal"].roi == Decimal("-100.00")
        assert by_source["Thumbtack"].roi == Decimal("0")
        assert report.total_spend == Decimal("700.00")
        assert report.total_leads == 4
        assert report.overall_roi == Decimal("114.29")


class TestAggregateROI:
    def test_totals_and_filters(self):
        jobs = [
            make_job("job-1", total_revenue=Decimal("1000")),
            make_job(
                "job-2",
                status="cancelled",
                total_revenue=Decimal("0"),
                labor_cost=Decimal("50"),
                materials_cost=Decimal("0"),
            ),
            make_job("job-3", created_at=datetime(2025, 12, 1, tzinfo=UTC)),
        ]

        summary = aggregate_roi(jobs, start=datetime(2026, 1, 1, tzinfo=UTC))

        assert summary.total_jobs == 2
        assert summary.completed_jobs == 1
        assert summary.cancelled_jobs == 1
        assert summary.total_revenue == Decimal("1000")
        assert summary.total_cost == Decimal("350")
        assert summary.total_profit == Decimal("650")
        assert summary.average_profit_margin == Decimal("65.00")

    def test_exclude_cancelled(self):
        jobs = [make_job("job-1"), make_job("job-2", status="cancelled")]

        summary = aggregate_roi(jobs, include_cancelled=False)

        assert summary.total_jobs == 1
        assert summary.cancelled_jobs == 0
