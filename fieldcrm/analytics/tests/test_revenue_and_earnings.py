"""Tests for revenue reconciliation and the earnings dashboard."""

from datetime import UTC, datetime
from decimal import Decimal
from types import SimpleNamespace

from fieldcrm.analytics.earnings import compute_earnings
from fieldcrm.analytics.revenue import UNASSIGNED, reconcile_revenue_by_technician

RANGE_START = datetime(2026, 3, 1, tzinfo=UTC)
RANGE_END = datetime(2026, 3, 3, 23, 0, tzinfo=UTC)


def make_job(job_id, **overrides):
    values = {
        "id": job_id,
        "status": "completed",
        "service_type": "Drain Cleaning",
        "assigned_technician_id": "tech-1",
        "assigned_salesperson_id": None,
        "created_at": datetime(2026, 3, 1, 8, 0, tzinfo=UTC),
        "completed_at": datetime(2026, 3, 2, 10, 0, tzinfo=UTC),
        "total_revenue": Decimal("0"),
        "total_cost": Decimal("0"),
        "profit": Decimal("0"),
        "labor_cost": Decimal("0"),
        "materials_cost": Decimal("0"),
    }
    values.update(overrides)
    return SimpleNamespace(**values)


def make_event(event_id, job_id, **overrides):
    values = {
        "id": event_id,
        "job_id": job_id,
        "technician_id": None,
        "gross_revenue": Decimal("0"),
        "total_costs": Decimal("0"),
        "net_profit": Decimal("0"),
    }
    values.update(overrides)
    return SimpleNamespace(**values)


def make_quote(job_id, status, total):
    return SimpleNamespace(job_id=job_id, status=status, total=Decimal(total))


class TestReconcileRevenue:
    def test_events_take_precedence_over_job_fields(self):
        jobs = [
            make_job(
                "job-1",
                total_revenue=Decimal("500"),
                total_cost=Decimal("200"),
                profit=Decimal("300"),
            ),
            make_job(
                "job-2",
                assigned_technician_id="tech-2",
                total_revenue=Decimal("400"),
                total_cost=Decimal("100"),
                profit=Decimal("300"),
            ),
            make_job("job-3", status="in_progress"),
        ]
        events = [
            make_event(
                "ev-1",
                "job-1",
                gross_revenue=Decimal("550"),
                total_costs=Decimal("200"),
                net_profit=Decimal("350"),
            ),
            make_event("ev-2", "job-3", gross_revenue=Decimal("90")),
            make_event("ev-3", "missing-job", gross_revenue=Decimal("75")),
        ]

        result = reconcile_revenue_by_technician(jobs, events)

        assert result.technicians["tech-1"].revenue == Decimal("550.00")
        assert result.technicians["tech-1"].profit == Decimal("350.00")
        assert result.technicians["tech-2"].revenue == Decimal("400.00")
        assert result.event_job_ids == {"job-1"}
        assert result.fallback_job_ids == {"job-2"}
        assert result.event_job_ids.isdisjoint(result.fallback_job_ids)
        assert result.ignored_event_ids == ["ev-2", "ev-3"]
        assert result.total_revenue == Decimal("950.00")

    def test_event_technician_overrides_job_assignment(self):
        jobs = [make_job("job-1")]
        events = [
            make_event("ev-1", "job-1", technician_id="tech-9", gross_revenue=Decimal("80"))
        ]

        result = reconcile_revenue_by_technician(jobs, events)

        assert set(result.technicians) == {"tech-9"}
        assert result.technicians["tech-9"].job_count == 1

    def test_unassigned_jobs_are_grouped(self):
        jobs = [make_job("job-1", assigned_technician_id=None, total_revenue=Decimal("10"))]

        result = reconcile_revenue_by_technician(jobs, [])

        assert result.technicians[UNASSIGNED].revenue == Decimal("10.00")


class TestComputeEarnings:
    def _fixtures(self):
        jobs = [
            make_job(
                "job-1",
                total_revenue=Decimal("400"),
                profit=Decimal("150"),
                labor_cost=Decimal("100"),
                materials_cost=Decimal("50"),
                assigned_salesperson_id="sales-1",
            ),
            make_job(
                "job-2",
                assigned_technician_id="tech-2",
                completed_at=datetime(2026, 3, 3, 16, 0, tzinfo=UTC),
                total_revenue=Decimal("200"),
                profit=Decimal("50"),
            ),
            make_job("job-3", status="pending", completed_at=None),
            make_job(
                "job-4",
                completed_at=datetime(2026, 2, 20, tzinfo=UTC),
                total_revenue=Decimal("999"),
            ),
        ]
        quotes = [
            make_quote("job-1", "accepted", "350"),
            make_quote("job-2", "sent", "200"),
            make_quote(None, "declined", "120"),
            make_quote(None, "draft", "80"),
        ]
        return jobs, quotes

    def test_business_wide(self):
        jobs, quotes = self._fixtures()

        report = compute_earnings(jobs, quotes, RANGE_START, RANGE_END)

        assert report.completed_jobs == 2
        assert report.total_revenue == Decimal("600.00")
        assert report.total_profit == Decimal("200.00")
        assert report.avg_job_value == Decimal("300.00")
        assert report.profit_margin == Decimal("33.33")
        assert report.quotes.sent == 1
        assert report.quotes.accepted == 1
        assert report.quotes.declined == 1
        assert report.quotes.conversion_rate == Decimal("33.33")
        assert report.upsell.upsell_amount == Decimal("50.00")
        assert report.upsell.upsell_percentage == Decimal("9.09")
        assert report.upsell.upsell_jobs == 1
        assert [day.revenue for day in report.revenue_by_day] == [
            Decimal("0"),
            Decimal("400"),
            Decimal("200"),
        ]
        assert report.top_services[0].service_type == "Drain Cleaning"
        assert report.top_services[0].count == 2
        assert report.commissions is None

    def test_technician_filter(self):
        jobs, quotes = self._fixtures()

        report = compute_earnings(
            jobs, quotes, RANGE_START, RANGE_END, technician_id="tech-1"
        )

        assert report.completed_jobs == 1
        assert report.total_labor == Decimal("100.00")
        assert report.quotes.accepted == 1
        assert report.quotes.conversion_rate == Decimal("100.00")

    def test_salesperson_filter_includes_commissions(self):
        jobs, quotes = self._fixtures()
        commissions = [
            SimpleNamespace(status="pending", commission_amount=Decimal("20")),
            SimpleNamespace(status="paid", commission_amount=Decimal("30")),
        ]

        report = compute_earnings(
            jobs,
            quotes,
            RANGE_START,
            RANGE_END,
            salesperson_id="sales-1",
            commissions=commissions,
        )

        assert report.completed_jobs == 1
        assert report.commissions.pending == Decimal("20")
        assert report.commissions.total == Decimal("50")
