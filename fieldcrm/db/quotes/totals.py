"""
Quote total derivations.

``tax_amount = subtotal * tax_rate`` and
``total = subtotal + labor_total + tax_amount``. Labor is not taxed.
"""

import json
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from fieldcrm.utils.money import ZERO, round_money, to_decimal


@dataclass
class QuoteTotals:
    subtotal: Decimal
    labor_total: Decimal
    tax_amount: Decimal
    total: Decimal


def line_items_subtotal(line_items: list[dict[str, Any]]) -> Decimal:
    return sum(
        (
            to_decimal(item.get("quantity", 1)) * to_decimal(item.get("unit_price"))
            for item in line_items
        ),
        ZERO,
    )


def labor_entries_total(labor_entries: list[dict[str, Any]]) -> Decimal:
    return sum(
        (
            to_decimal(entry.get("hours")) * to_decimal(entry.get("rate"))
            for entry in labor_entries
        ),
        ZERO,
    )


def compute_quote_totals(
    subtotal: Decimal, labor_total: Decimal, tax_rate: Decimal
) -> QuoteTotals:
    subtotal = round_money(to_decimal(subtotal))
    labor_total = round_money(to_decimal(labor_total))
    tax_amount = round_money(subtotal * to_decimal(tax_rate))
    return QuoteTotals(
        subtotal=subtotal,
        labor_total=labor_total,
        tax_amount=tax_amount,
        total=subtotal + labor_total + tax_amount,
    )


def apply_quote_contents(
    quote,
    line_items: list[dict[str, Any]] | None = None,
    labor_entries: list[dict[str, Any]] | None = None,
    tax_rate: Decimal | None = None,
) -> QuoteTotals:
    """
    Store new line items, labor entries or tax rate on a quote and refresh totals.

    Arguments left as None keep the quote's current value.
    """
    if line_items is not None:
        quote.line_items = json.dumps(line_items, default=str)
    if labor_entries is not None:
        quote.labor_entries = json.dumps(labor_entries, default=str)
    if tax_rate is not None:
        quote.tax_rate = to_decimal(tax_rate)

    totals = compute_quote_totals(
        line_items_subtotal(quote.get_line_items()),
        labor_entries_total(quote.get_labor_entries()),
        to_decimal(quote.tax_rate),
    )
    quote.subtotal = totals.subtotal
    quote.labor_total = totals.labor_total
    quote.tax_amount = totals.tax_amount
    quote.total = totals.total
    return totals
