"""
Validators for money amounts given to the services.

Usage:
    from core.validators import validate_positive_amount

    amount = validate_positive_amount(raw_amount)  # Decimal, 2 digits
"""

from __future__ import annotations

from decimal import Decimal

from core.exceptions import ValidationError
from core.money import ZERO, to_money


def validate_positive_amount(value: Decimal | str | int, field_name: str = "amount") -> Decimal:
    """
    Normalize a money input and require it to be greater than zero.

    Args:
        value: Decimal, numeric string or int
        field_name: Name reported in the error details

    Returns:
        The amount as a 2-digit Decimal

    Raises:
        ValidationError: If the value is not a number or is not positive
    """
    try:
        amount = to_money(value)
    except (TypeError, ValueError) as e:
        raise ValidationError(
            f"Invalid {field_name}",
            error_code="INVALID_AMOUNT",
            details={field_name: str(value)},
        ) from e

    if amount <= ZERO:
        raise ValidationError(
            f"{field_name.replace('_', ' ').capitalize()} must be greater than zero",
            error_code="INVALID_AMOUNT",
            details={field_name: str(value)},
        )
    return amount

