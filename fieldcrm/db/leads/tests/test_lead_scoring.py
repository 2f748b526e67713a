"""Tests for lead scoring and SLA evaluation."""

from datetime import UTC, datetime, timedelta
from types import SimpleNamespace

import pytest

from fieldcrm.db.leads.constants import SlaState
from fieldcrm.db.leads.scoring import (
    calculate_lead_score,
    evaluate_sla,
    sla_deadline,
    sla_minutes_for,
)

SERVICE_AREA = {"60601", "60614"}
NOW = datetime(2026, 5, 1, 12, 0, tzinfo=UTC)


class TestCalculateLeadScore:
    def test_baseline(self):
        assert calculate_lead_score(None, None, "normal", None, SERVICE_AREA) == 50

    @pytest.mark.parametrize(
        "service_type, expected",
        [
            ("Sewer Main - Replace", 75),
            ("Emergency Hydro Jetting", 65),
            ("Drain Cleaning", 55),
            ("Gutter Cleaning", 50),
        ],
    )
    def test_service_value(self, service_type, expected):
        assert calculate_lead_score(service_type, None, "normal", None, SERVICE_AREA) == expected

    @pytest.mark.parametrize(
        "source, expected",
        [("Referral", 65), ("eLocal", 60), ("Angi", 55), ("Billboard", 50)],
    )
    def test_source_quality(self, source, expected):
        assert calculate_lead_score(None, source, "normal", None, SERVICE_AREA) == expected

    @pytest.mark.parametrize(
        "priority, expected", [("urgent", 70), ("high", 60), ("low", 40)]
    )
    def test_priority(self, priority, expected):
        assert calculate_lead_score(None, None, priority, None, SERVICE_AREA) == expected

    def test_service_area_bonus(self):
        inside = calculate_lead_score(None, None, "normal", "60614", SERVICE_AREA)
        outside = calculate_lead_score(None, None, "normal", "90210", SERVICE_AREA)

        assert inside == 60
        assert outside == 50

    def test_clamped_to_100(self):
        score = calculate_lead_score(
            "Sewer Main - Replace", "Direct", "urgent", "60601", SERVICE_AREA
        )

        assert score == 100


class TestSla:
    def test_minutes_by_priority(self):
        assert sla_minutes_for("urgent", 15, 30, 60) == 15
        assert sla_minutes_for("high", 15, 30, 60) == 30
        assert sla_minutes_for("normal", 15, 30, 60) == 60
        assert sla_minutes_for(None, 15, 30, 60) == 60

    def test_deadline(self):
        assert sla_deadline(NOW, 15) == NOW + timedelta(minutes=15)

    def _lead(self, deadline=None, contacted_at=None):
        return SimpleNamespace(id="lead-1", sla_deadline=deadline, contacted_at=contacted_at)

    def test_contacted_lead(self):
        status = evaluate_sla(self._lead(NOW - timedelta(minutes=5), NOW), NOW, 5)

        assert status.state == SlaState.CONTACTED
        assert status.remaining_minutes is None

    def test_ok(self):
        status = evaluate_sla(self._lead(NOW + timedelta(minutes=20)), NOW, 5)

        assert status.state == SlaState.OK
        assert status.remaining_minutes == 20

    def test_warning(self):
        status = evaluate_sla(self._lead(NOW + timedelta(minutes=4)), NOW, 5)

        assert status.state == SlaState.WARNING

    def test_breached(self):
        status = evaluate_sla(self._lead(NOW - timedelta(minutes=1)), NOW, 5)

        assert status.state == SlaState.BREACHED
        assert status.remaining_minutes == -1

    def test_no_deadline_is_ok(self):
        assert evaluate_sla(self._lead(), NOW, 5).state == SlaState.OK
