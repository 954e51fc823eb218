"""Money arithmetic helpers.

Prices are stored as floats on the aggregates; all sums go through Decimal
and are rounded to cents so totals are reproducible.
"""

from decimal import ROUND_HALF_UP, Decimal

CENT = Decimal("0.01")


def to_money(value) -> Decimal:
    """Convert a stored price to a two-decimal Decimal."""
    return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)


def line_total(unit_price, quantity) -> Decimal:
    return (to_money(unit_price) * quantity).quantize(CENT, rounding=ROUND_HALF_UP)


def order_total(lines) -> float:
    """Sum ``(unit_price, quantity)`` pairs into a float rounded to cents."""
    return float(sum((line_total(price, quantity) for price, quantity in lines), Decimal("0.00")))
