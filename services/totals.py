"""Line amounts and document totals."""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable

CENT = Decimal("0.01")
ZERO = Decimal("0.00")


def to_decimal(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if value is None or value == "":
        return ZERO
    # str() keeps 0.1 as 0.1 instead of the binary float expansion
    return Decimal(str(value))


def quantize(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def line_amount(quantity, rate) -> Decimal:
    """Amount of one line: quantity x rate, rounded to cents."""
    return quantize(to_decimal(quantity) * to_decimal(rate))


@dataclass(frozen=True)
class Totals:
    subtotal: Decimal
    tax_amount: Decimal
    total: Decimal


def compute_totals(items: Iterable, tax_enabled: bool, tax_rate) -> Totals:
    """
    Compute subtotal, tax and total for a set of line items.

    Each item only needs `quantity` and `rate`; amounts are recomputed here
    rather than read back from the item.
    """
    subtotal = sum((line_amount(item.quantity, item.rate) for item in items), ZERO)
    tax_amount = ZERO
    if tax_enabled:
        tax_amount = quantize(subtotal * to_decimal(tax_rate) / Decimal("100"))
    return Totals(subtotal=subtotal, tax_amount=tax_amount, total=subtotal + tax_amount)
