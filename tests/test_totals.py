"""Tests for line amounts and document totals."""

from dataclasses import dataclass
from decimal import Decimal

import pytest

from services.totals import compute_totals, line_amount


@dataclass
class Line:
    quantity: Decimal
    rate: Decimal


def test_line_amount_rounds_to_cents():
    assert line_amount(Decimal("3"), Decimal("19.99")) == Decimal("59.97")
    assert line_amount(Decimal("0.33"), Decimal("10.05")) == Decimal("3.32")
    assert line_amount(Decimal("1.5"), Decimal("0.01")) == Decimal("0.02")


def test_line_amount_accepts_plain_numbers():
    assert line_amount(2, 0.1) == Decimal("0.20")
    assert line_amount("4", "12.50") == Decimal("50.00")


def test_no_items():
    totals = compute_totals([], tax_enabled=True, tax_rate=Decimal("10"))
    assert totals.subtotal == Decimal("0")
    assert totals.tax_amount == Decimal("0")
    assert totals.total == Decimal("0")


def test_single_item_with_tax():
    totals = compute_totals([Line(Decimal("2"), Decimal("100.00"))], True, Decimal("10"))
    assert totals.subtotal == Decimal("200.00")
    assert totals.tax_amount == Decimal("20.00")
    assert totals.total == Decimal("220.00")


@pytest.mark.parametrize("tax_enabled, expected_tax", [(True, Decimal("45.00")), (False, Decimal("0"))])
def test_many_items_tax_toggle(tax_enabled, expected_tax):
    items = [
        Line(Decimal("2"), Decimal("100.00")),
        Line(Decimal("1"), Decimal("50.00")),
        Line(Decimal("4"), Decimal("12.50")),
    ]
    totals = compute_totals(items, tax_enabled, Decimal("15"))

    assert totals.subtotal == Decimal("300.00")
    assert totals.tax_amount == expected_tax
    assert totals.total == totals.subtotal + expected_tax


def test_amounts_are_recomputed_not_trusted():
    """A stale amount on the item is ignored."""

    @dataclass
    class StaleLine(Line):
        amount: Decimal = Decimal("999")

    totals = compute_totals([StaleLine(Decimal("3"), Decimal("10"))], False, Decimal("10"))
    assert totals.subtotal == Decimal("30.00")


def test_tax_is_rounded_to_cents():
    totals = compute_totals([Line(Decimal("1"), Decimal("10.05"))], True, Decimal("18"))
    assert totals.tax_amount == Decimal("1.81")
    assert totals.total == Decimal("11.86")
