"""Tests for distance and decimal helpers."""

from decimal import Decimal

import pytest

from fieldcrm.utils.geo import haversine_distance, is_within_radius
from fieldcrm.utils.money import (
    ZERO,
    percentage,
    round_hours,
    round_money,
    round_whole,
    to_decimal,
)


class TestHaversine:
    def test_same_point(self):
        assert haversine_distance(41.8781, -87.6298, 41.8781, -87.6298) == 0

    def test_one_degree_of_latitude(self):
        distance = haversine_distance(41.0, -87.0, 42.0, -87.0)

        assert distance == pytest.approx(111_195, rel=1e-3)

    def test_within_radius(self):
        within, distance = is_within_radius(41.8781, -87.6298, 41.8785, -87.6298, 150)

        assert within is True
        assert distance == pytest.approx(44.5, abs=1)

    def test_outside_radius(self):
        within, distance = is_within_radius(41.8781, -87.6298, 41.8881, -87.6298, 150)

        assert within is False
        assert distance > 1000


class TestMoney:
    @pytest.mark.parametrize(
        "value,expected",
        [
            (None, ZERO),
            ("", ZERO),
            ("12.5", Decimal("12.5")),
            (3, Decimal("3")),
            (0.1, Decimal("0.1")),
            ("abc", ZERO),
        ],
    )
    def test_to_decimal(self, value, expected):
        assert to_decimal(value) == expected

    def test_rounding_is_half_up(self):
        assert round_money(Decimal("2.345")) == Decimal("2.35")
        assert round_hours(Decimal("7.25")) == Decimal("7.3")
        assert round_whole(Decimal("66.5")) == 67

    def test_percentage_of_zero(self):
        assert percentage(Decimal("5"), ZERO) == ZERO
        assert percentage(Decimal("1"), Decimal("4")) == Decimal("25")
