"""Tests for pay periods and technician payroll."""

from datetime import UTC, datetime, timedelta
from decimal import Decimal
from types import SimpleNamespace

import pytest

from fieldcrm.analytics.payroll import (
    PayrollRates,
    compute_payroll,
    compute_technician_payroll,
    job_hours,
)
from fieldcrm.analytics.periods import (
    ALL_TIME_START,
    EarningsRange,
    PayPeriod,
    earnings_range_bounds,
    pay_period_bounds,
)

# A Wednesday
NOW = datetime(2026, 3, 4, 15, 0, tzinfo=UTC)

RATES = PayrollRates(
    hourly_rate=Decimal("25.00"),
    commission_rate=Decimal("0.10"),
    emergency_rate=Decimal("1.5"),
    estimated_tax_rate=Decimal("0.22"),
    lead_fee_per_job=Decimal("125.00"),
)


def make_technician(**overrides):
    values = {
        "id": "tech-1",
        "full_name": "Marcus Bell",
        "classification": "senior",
        "hourly_rate": Decimal("30.00"),
        "commission_rate": Decimal("0.10"),
        "emergency_rate": Decimal("1.5"),
    }
    values.update(overrides)
    return SimpleNamespace(**values)


def make_job(job_id, **overrides):
    values = {
        "id": job_id,
        "status": "completed",
        "priority": "normal",
        "assigned_technician_id": "tech-1",
        "started_at": None,
        "completed_at": datetime(2026, 3, 2, 12, 0, tzinfo=UTC),
        "estimated_duration": None,
        "total_revenue": Decimal("0"),
    }
    values.update(overrides)
    return SimpleNamespace(**values)


class TestPayPeriods:
    def test_current_week_starts_sunday(self):
        start, end = pay_period_bounds(PayPeriod.CURRENT, NOW)

        assert start == datetime(2026, 3, 1, tzinfo=UTC)
        assert end.date() == NOW.date()

    def test_last_week(self):
        start, end = pay_period_bounds(PayPeriod.LAST_WEEK, NOW)

        assert start == datetime(2026, 2, 22, tzinfo=UTC)
        assert end == datetime(2026, 3, 1, tzinfo=UTC) - timedelta(microseconds=1)

    def test_last_month(self):
        start, end = pay_period_bounds(PayPeriod.LAST_MONTH, NOW)

        assert start == datetime(2026, 2, 1, tzinfo=UTC)
        assert end.date() == datetime(2026, 2, 28).date()

    def test_sunday_is_its_own_week_start(self):
        sunday = datetime(2026, 3, 8, 8, 0, tzinfo=UTC)

        start, _ = pay_period_bounds(PayPeriod.CURRENT, sunday)

        assert start == datetime(2026, 3, 8, tzinfo=UTC)

    def test_all_time(self):
        start, _ = pay_period_bounds(PayPeriod.ALL_TIME, NOW)

        assert start == ALL_TIME_START

    def test_earnings_range(self):
        start, end = earnings_range_bounds(EarningsRange.THIRTY_DAYS, NOW)

        assert end == NOW
        assert start == NOW - timedelta(days=30)


class TestJobHours:
    def test_from_timestamps(self):
        job = make_job(
            "job-1",
            started_at=datetime(2026, 3, 2, 9, 0, tzinfo=UTC),
            completed_at=datetime(2026, 3, 2, 11, 30, tzinfo=UTC),
        )

        assert job_hours(job) == (Decimal("2.5"), True)

    def test_from_estimate(self):
        job = make_job("job-1", estimated_duration=45)

        assert job_hours(job) == (Decimal("0.75"), False)

    def test_nothing_recorded(self):
        assert job_hours(make_job("job-1")) == (Decimal("0"), False)


class TestComputeTechnicianPayroll:
    @pytest.fixture
    def jobs(self):
        return [
            make_job(
                "job-a",
                priority="urgent",
                started_at=datetime(2026, 3, 2, 9, 0, tzinfo=UTC),
                completed_at=datetime(2026, 3, 2, 11, 0, tzinfo=UTC),
                total_revenue=Decimal("500"),
            ),
            make_job("job-b", estimated_duration=90, total_revenue=Decimal("300")),
            # Estimated hours never count as emergency hours
            make_job(
                "job-c",
                priority="urgent",
                estimated_duration=60,
                total_revenue=Decimal("200"),
            ),
        ]

    def test_pay_breakdown(self, jobs):
        line = compute_technician_payroll(
            make_technician(), jobs, RATES, {"job-a": Decimal("100.00")}
        )

        assert line.jobs_completed == 3
        assert line.total_hours == Decimal("4.5")
        assert line.emergency_hours == Decimal("2.0")
        assert line.regular_hours == Decimal("2.5")
        assert line.regular_pay == Decimal("75.00")
        assert line.emergency_pay == Decimal("90.00")
        assert line.commission_earned == Decimal("100.00")
        assert line.gross_pay == Decimal("265.00")
        assert line.estimated_tax == Decimal("58.30")
        assert line.lead_fees == Decimal("350.00")
        assert line.net_pay == Decimal("-143.30")
        assert line.avg_job_duration_minutes == 90
        assert line.efficiency == 67
        assert line.job_ids == ["job-a", "job-b", "job-c"]

    def test_missing_rates_use_fallbacks(self):
        technician = make_technician(
            hourly_rate=None, commission_rate=Decimal("0"), emergency_rate=None
        )

        line = compute_technician_payroll(technician, [], RATES)

        assert line.hourly_rate == RATES.hourly_rate
        assert line.commission_rate == RATES.commission_rate
        assert line.emergency_rate == RATES.emergency_rate
        assert line.jobs_completed == 0
        assert line.net_pay == Decimal("0.00")
        assert line.efficiency == 0


class TestComputePayroll:
    def test_only_completed_jobs_in_period(self):
        start, end = pay_period_bounds(PayPeriod.CURRENT, NOW)
        jobs = [
            make_job("in-period", estimated_duration=60, total_revenue=Decimal("100")),
            make_job(
                "last-month",
                completed_at=datetime(2026, 2, 10, tzinfo=UTC),
                estimated_duration=60,
            ),
            make_job("still-open", status="in_progress", completed_at=None),
            make_job("unassigned", assigned_technician_id=None),
        ]

        report = compute_payroll([make_technician()], jobs, RATES, start, end)

        assert len(report.technicians) == 1
        assert report.technicians[0].job_ids == ["in-period"]
        assert report.totals.jobs_completed == 1

    def test_recorded_lead_fees_are_summed_per_job(self):
        start, end = pay_period_bounds(PayPeriod.CURRENT, NOW)
        fees = [
            SimpleNamespace(job_id="job-1", technician_id="tech-1", amount=Decimal("60")),
            SimpleNamespace(job_id="job-1", technician_id="tech-1", amount=Decimal("40")),
        ]

        report = compute_payroll(
            [make_technician()], [make_job("job-1")], RATES, start, end, lead_fees=fees
        )

        assert report.technicians[0].lead_fees == Decimal("100.00")

    def test_search_filters_by_name(self):
        start, end = pay_period_bounds(PayPeriod.CURRENT, NOW)
        technicians = [
            make_technician(),
            make_technician(id="tech-2", full_name="Alicia Gomez"),
        ]

        report = compute_payroll(technicians, [], RATES, start, end, search="ALICIA")

        assert [line.technician_id for line in report.technicians] == ["tech-2"]
