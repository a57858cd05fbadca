"""
Numeric coercion for record fields.

Upstream records are loosely validated, so every numeric field read by an
aggregator goes through these helpers. Missing, non-numeric and non-finite
values become zero; the result is always a finite Decimal or int.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from typing import Any

ZERO = Decimal("0")
CENT = Decimal("0.01")


def as_amount(value: Any) -> Decimal:
    """Return value as a finite Decimal, or zero."""
    if value is None or isinstance(value, bool):
        return ZERO
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        return ZERO
    if not amount.is_finite():
        return ZERO
    return amount


def as_count(value: Any) -> int:
    """Return value as a non-negative int, or zero."""
    amount = as_amount(value)
    if amount <= 0:
        return 0
    return int(amount)


def round_cents(value: Decimal) -> Decimal:
    """Round a monetary value to two decimal places.

    Precision is widened to fit the integer digits, so large finite values
    round instead of raising InvalidOperation.
    """
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, value.adjusted() + 4)
        return value.quantize(CENT, rounding=ROUND_HALF_UP)


def percentage(part: Decimal, whole: Decimal) -> Decimal:
    """Return part / whole * 100 rounded to cents, zero when whole is zero."""
    if whole == 0:
        return round_cents(ZERO)
    return round_cents(part / whole * 100)
