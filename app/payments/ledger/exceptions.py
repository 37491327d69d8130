"""
Ledger-specific exceptions.

Exception Hierarchy:
    core.exceptions.ValidationError
    └── InsufficientBalance - A withdrawal would overdraw a cash or bank book

Usage:
    from payments.ledger.exceptions import InsufficientBalance

    if available < amount:
        raise InsufficientBalance(partition, required=amount, available=available)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from core.exceptions import ValidationError
from core.money import format_money

if TYPE_CHECKING:
    from decimal import Decimal
    from typing import Any

    from .types import LedgerPartition


class InsufficientBalance(ValidationError):
    """
    Raised when a partition cannot cover an outgoing movement.

    Attributes:
        partition: The cashbook or bankbook partition
        required: The amount that was required
        available: The partition's balance at the time
    """

    default_error_code: str = "INSUFFICIENT_BALANCE"

    def __init__(
        self,
        partition: LedgerPartition,
        required: Decimal,
        available: Decimal,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        self.partition = partition
        self.required = required
        self.available = available

        book = "cash" if partition.is_cash else "bank account"
        message = (
            f"Insufficient {book} balance: required {format_money(required)}, "
            f"available {format_money(available)}"
        )
        error_details = {
            "partition": str(partition),
            "required": format_money(required),
            "available": format_money(available),
        }
        if details:
            error_details.update(details)

        super().__init__(message, error_code=error_code, details=error_details)
