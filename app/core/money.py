"""
Fixed-point money helpers.

All money in the back office is a Decimal with exactly two fraction digits.
Values arrive as strings, ints or Decimals and are normalized at the
boundary with to_money(); floats are rejected so binary rounding never
enters a balance.

Usage:
    from core.money import ZERO, to_money, is_settled, format_money

    amount = to_money("999.995")      # Decimal("1000.00")
    is_settled(Decimal("0.004"))      # True
    format_money(Decimal("12.5"))     # "12.50"
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

CENT = Decimal("0.01")
ZERO = Decimal("0.00")

# Half a currency sub-unit. Differences at or below this are treated as zero.
EPSILON = Decimal("0.005")

# Largest magnitude a money column (14 digits, 2 decimal places) can hold.
MAX_AMOUNT = Decimal("999999999999.99")


def to_money(value: Decimal | str | int) -> Decimal:
    """
    Normalize a value to a 2-digit Decimal.

    Args:
        value: Decimal, numeric string or int

    Returns:
        Decimal quantized to cents (ROUND_HALF_UP)

    Raises:
        TypeError: If value is a float
        ValueError: If value is not a number or exceeds MAX_AMOUNT
    """
    if isinstance(value, float):
        raise TypeError("Money values must not be floats")
    try:
        amount = Decimal(value)
        if not amount.is_finite():
            raise ValueError(f"Invalid money value: {value!r}")
        if abs(amount) > MAX_AMOUNT:
            raise ValueError(f"Money value out of range: {value!r}")
        return amount.quantize(CENT, rounding=ROUND_HALF_UP)
    except (InvalidOperation, TypeError) as e:
        raise ValueError(f"Invalid money value: {value!r}") from e


def is_settled(outstanding: Decimal) -> bool:
    """Return True when an outstanding amount is zero within EPSILON."""
    return outstanding <= EPSILON


def is_positive(amount: Decimal) -> bool:
    """Return True when an amount is above EPSILON."""
    return amount > EPSILON


def clamp_non_negative(amount: Decimal) -> Decimal:
    """Floor a money value at zero."""
    return amount if amount > ZERO else ZERO


def format_money(value: Decimal) -> str:
    """Render a money value as a string with exactly two fraction digits."""
    return f"{to_money(value):.2f}"
