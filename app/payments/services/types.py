"""
Result types returned by the payment services.

Types:
    PaymentResult: Outcome of applying one payment to one invoice
    DistributionResult: Outcome of a FIFO bulk distribution

Both expose to_dict() with money rendered as 2-digit strings for callers
that serialize.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from core.money import ZERO, format_money

if TYPE_CHECKING:
    from invoices.models import Invoice
    from payments.ledger.models import LedgerEntry
    from payments.models.payment import Payment


@dataclass
class PaymentResult:
    """
    Result from applying a payment.

    Attributes:
        payment: The created payment (amount is the applied amount)
        invoice: The invoice after settlement
        party: The vendor or retailer after its aggregates moved
        ledger_entry: The cashbook or bankbook entry for the payment
        requested_amount: Amount the caller asked to apply
        applied_amount: Amount actually applied after the overpayment clamp
        shortfall_amount: Amount written off by this payment (sales only)
    """

    payment: Payment
    invoice: Invoice
    party: Any
    ledger_entry: LedgerEntry
    requested_amount: Decimal
    applied_amount: Decimal
    shortfall_amount: Decimal = ZERO

    @property
    def unapplied_amount(self) -> Decimal:
        """Excess the caller must redirect elsewhere."""
        return self.requested_amount - self.applied_amount

    def to_dict(self) -> dict[str, Any]:
        return {
            "payment_id": str(self.payment.id),
            "invoice_id": self.invoice.id,
            "invoice_status": self.invoice.status,
            "paid_amount": format_money(self.invoice.paid_amount),
            "outstanding_amount": format_money(self.invoice.outstanding),
            "requested_amount": format_money(self.requested_amount),
            "applied_amount": format_money(self.applied_amount),
            "unapplied_amount": format_money(self.unapplied_amount),
            "shortfall_amount": format_money(self.shortfall_amount),
            "party_balance": format_money(self.party.balance),
            "ledger_balance": format_money(self.ledger_entry.balance),
        }


@dataclass
class DistributionResult:
    """
    Result from a bulk distribution.

    Attributes:
        total_amount: Amount the caller asked to distribute
        distributed_amount: Amount actually applied across invoices
        remaining_amount: Amount left over once invoices ran out
        payments: One payment per invoice touched, in allocation order
        invoice_ids: Ids of the invoices touched, in allocation order
        party_balance: Party balance after the distribution
        payment_link_id: Batch id shared by every created payment
        ledger_entry: The single ledger entry for the batch
        shortfall_amount: Amount written off across the batch (sales only)
    """

    total_amount: Decimal
    distributed_amount: Decimal
    remaining_amount: Decimal
    payments: list[Payment] = field(default_factory=list)
    invoice_ids: list[int] = field(default_factory=list)
    party_balance: Decimal = ZERO
    payment_link_id: uuid.UUID | None = None
    ledger_entry: LedgerEntry | None = None
    shortfall_amount: Decimal = ZERO

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_amount": format_money(self.total_amount),
            "distributed_amount": format_money(self.distributed_amount),
            "remaining_amount": format_money(self.remaining_amount),
            "payment_ids": [str(payment.id) for payment in self.payments],
            "invoice_ids": list(self.invoice_ids),
            "party_balance": format_money(self.party_balance),
            "payment_link_id": str(self.payment_link_id) if self.payment_link_id else None,
            "shortfall_amount": format_money(self.shortfall_amount),
        }
