"""Tests for quote totals and status transitions."""

import json
from decimal import Decimal

import pytest

from fieldcrm.db.quotes.constants import QuoteStatus
from fieldcrm.db.quotes.lifecycle import can_transition, ensure_transition, is_open
from fieldcrm.db.quotes.model import Quote
from fieldcrm.db.quotes.totals import apply_quote_contents, compute_quote_totals
from fieldcrm.exceptions import InvalidTransitionError


class TestComputeQuoteTotals:
    def test_labor_is_not_taxed(self):
        totals = compute_quote_totals(Decimal("200"), Decimal("100"), Decimal("0.08"))

        assert totals.tax_amount == Decimal("16.00")
        assert totals.total == Decimal("316.00")

    def test_rounds_tax_to_cents(self):
        totals = compute_quote_totals(Decimal("19.99"), Decimal("0"), Decimal("0.0825"))

        assert totals.tax_amount == Decimal("1.65")
        assert totals.total == Decimal("21.64")


class TestApplyQuoteContents:
    def test_stores_json_and_refreshes_totals(self):
        quote = Quote(customer_name="Dana Ruiz", tax_rate=Decimal("0"))

        apply_quote_contents(
            quote,
            line_items=[
                {"description": "Camera Inspection", "quantity": 1, "unit_price": "150.00"},
                {"description": "Cleanout cap", "quantity": 2, "unit_price": "12.50"},
            ],
            labor_entries=[{"hours": "2", "rate": "85"}],
            tax_rate=Decimal("0.10"),
        )

        assert json.loads(quote.line_items)[0]["description"] == "Camera Inspection"
        assert quote.subtotal == Decimal("175.00")
        assert quote.labor_total == Decimal("170.00")
        assert quote.tax_amount == Decimal("17.50")
        assert quote.total == Decimal("362.50")

    def test_tax_rate_change_alone_recomputes(self):
        quote = Quote(
            customer_name="Dana Ruiz",
            line_items=json.dumps([{"description": "Snake", "unit_price": "100"}]),
            labor_entries=None,
            tax_rate=Decimal("0"),
        )

        apply_quote_contents(quote, tax_rate=Decimal("0.05"))

        assert quote.subtotal == Decimal("100.00")
        assert quote.tax_amount == Decimal("5.00")
        assert quote.total == Decimal("105.00")


class TestQuoteLifecycle:
    @pytest.mark.parametrize(
        "current, target",
        [
            ("draft", "sent"),
            ("draft", "accepted"),
            ("sent", "viewed"),
            ("viewed", "declined"),
            ("viewed", "expired"),
        ],
    )
    def test_allowed(self, current, target):
        assert can_transition(current, target)
        assert ensure_transition(current, target) == QuoteStatus(target)

    @pytest.mark.parametrize(
        "current, target",
        [("viewed", "sent"), ("accepted", "declined"), ("declined", "accepted")],
    )
    def test_rejected(self, current, target):
        with pytest.raises(InvalidTransitionError):
            ensure_transition(current, target)

    def test_open_statuses(self):
        assert is_open("draft")
        assert is_open(QuoteStatus.VIEWED)
        assert not is_open("accepted")
        assert not is_open("expired")
