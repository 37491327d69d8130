"""
Payment side strategies.

This module provides the registry of PaymentSide strategies used by the
payment services to handle purchase and sales flows with one engine.

Usage:
    from payments.strategies import PURCHASE, SALES, get_side

    side = get_side("sales")
    side.invoice_model  # SalesInvoice
    side.ledger_amount(Decimal("100.00"))  # Decimal("100.00"), money in
"""

from __future__ import annotations

from payments.strategies.base import PaymentSide, SettlementOutcome
from payments.strategies.purchase import PurchaseSide
from payments.strategies.sales import SalesSide

PURCHASE = PurchaseSide()
SALES = SalesSide()

SIDES: dict[str, PaymentSide] = {
    PURCHASE.key: PURCHASE,
    SALES.key: SALES,
}


def get_side(side: str | PaymentSide) -> PaymentSide:
    """
    Resolve a side key to its strategy.

    Args:
        side: "purchase", "sales" or a PaymentSide instance

    Returns:
        The registered PaymentSide

    Raises:
        ValueError: If the key is not registered
    """
    if isinstance(side, PaymentSide):
        return side
    strategy = SIDES.get(side)
    if strategy is None:
        supported = ", ".join(SIDES)
        raise ValueError(f"Unknown payment side: {side}. Supported: {supported}")
    return strategy


__all__ = [
    "PURCHASE",
    "SALES",
    "SIDES",
    "PaymentSide",
    "PurchaseSide",
    "SalesSide",
    "SettlementOutcome",
    "get_side",
]
