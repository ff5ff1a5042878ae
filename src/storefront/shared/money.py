"""Fixed-point money helpers.

Amounts are stored as canonical two-place strings ("45.00") and computed with
Decimal. The currency is implicit and configured once for the shop.
"""

from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

CENT = Decimal("0.01")


class InvalidAmount(ValueError):
    pass


def to_decimal(value) -> Decimal:
    """Parse a price into a non-negative Decimal with at most two decimal places."""
    if isinstance(value, float):
        # Go through str() so 45.1 does not become 45.0999999...
        value = str(value)
    try:
        amount = Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        raise InvalidAmount(f"'{value}' is not a valid amount") from None

    if not amount.is_finite():
        raise InvalidAmount(f"'{value}' is not a valid amount")
    if amount < 0:
        raise InvalidAmount(f"Amount cannot be negative, got '{value}'")
    if amount != amount.quantize(CENT):
        raise InvalidAmount(f"Amount '{value}' has more than two decimal places")
    return amount.quantize(CENT)


def format_amount(value) -> str:
    return str(to_decimal(value))


def to_minor_units(value) -> int:
    """Convert a major-unit amount into integer cents, rounding half up."""
    amount = Decimal(str(value)) if isinstance(value, float) else Decimal(value)
    return int((amount * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def line_total(price, quantity: int) -> Decimal:
    return to_decimal(price) * quantity


def sum_lines(lines: Iterable[tuple]) -> Decimal:
    """Sum (price, quantity) pairs."""
    total = Decimal("0.00")
    for price, quantity in lines:
        total += line_total(price, quantity)
    return total.quantize(CENT)
