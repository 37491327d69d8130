"""
Abstract base strategy for the two sides of the trading business.

Purchase and sales flows are structurally symmetric: an invoice with an
outstanding amount, a counterparty with aggregate balances, payments
against the invoice, and one ledger entry per payment or batch. A
PaymentSide describes everything that differs between the two, so the
application, distribution and reversal services are written once.

The strategy pattern allows:
- One engine for both sides
- Side-specific invoice settlement (sales tracks shortfall)
- Side-specific ledger direction and party aggregates

Usage:
    from payments.strategies import get_side

    side = get_side("purchase")
    outcome = side.settle_invoice(invoice, Decimal("250.00"))
    deltas = side.party_deltas(Decimal("250.00"), outcome.shortfall_delta)
"""

from __future__ import annotations

import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING, ClassVar

from core.money import ZERO, clamp_non_negative
from invoices.status import resolve_status
from payments.ledger.types import LedgerPartition
from payments.models import PaymentMode

if TYPE_CHECKING:
    from django.db import models

    from invoices.models import Invoice
    from payments.models.payment import Payment


# =============================================================================
# Result Types
# =============================================================================


@dataclass
class SettlementOutcome:
    """
    What applying money to one invoice changed.

    Attributes:
        applied: Amount added to paid_amount
        outstanding: Outstanding amount after the allocation
        shortfall_delta: Amount newly written off (sales only)
    """

    applied: Decimal
    outstanding: Decimal
    shortfall_delta: Decimal = ZERO


# =============================================================================
# Abstract Strategy
# =============================================================================


class PaymentSide(ABC):
    """
    Abstract description of one side of the business.

    Class attributes name the models and ledger direction; abstract
    methods implement the money rules that differ between sides.

    Subclasses must set every ClassVar and implement all abstract methods.
    """

    key: ClassVar[str]
    invoice_model: ClassVar[type[Invoice]]
    payment_model: ClassVar[type[Payment]]
    party_model: ClassVar[type[models.Model]]
    reference_type: ClassVar[str]
    # +1 when money comes in, -1 when money goes out
    ledger_sign: ClassVar[Decimal]

    @property
    def party_field(self) -> str:
        return self.invoice_model.PARTY_FIELD

    @property
    def outstanding_field(self) -> str:
        return self.invoice_model.OUTSTANDING_FIELD

    def partition_for(
        self,
        tenant_id: uuid.UUID,
        payment_mode: str,
        bank_account_id: uuid.UUID | None,
    ) -> LedgerPartition:
        """Cash payments post to the cashbook, all other modes to the bankbook."""
        if payment_mode == PaymentMode.CASH:
            return LedgerPartition.cash(tenant_id)
        return LedgerPartition.bank(tenant_id, bank_account_id)

    def ledger_amount(self, amount: Decimal) -> Decimal:
        """Signed ledger amount for money applied on this side."""
        return self.ledger_sign * amount

    def describe(self, party, invoice_numbers: list[str]) -> str:
        """Ledger description for a payment or batch."""
        numbers = ", ".join(invoice_numbers)
        return f"{self.description_prefix} {party.name} ({numbers})"

    @property
    @abstractmethod
    def description_prefix(self) -> str:
        """Leading words of ledger descriptions."""

    @property
    @abstractmethod
    def invoice_update_fields(self) -> list[str]:
        """Invoice columns written by settle_invoice() and recompute_invoice()."""

    @abstractmethod
    def settle_invoice(self, invoice: Invoice, applied: Decimal) -> SettlementOutcome:
        """
        Apply money to an invoice in memory.

        Adds applied to paid_amount, reduces the outstanding amount and
        resolves the status with the epsilon rule. The caller saves the
        invoice with invoice_update_fields.

        Args:
            invoice: Invoice locked by the caller
            applied: Amount to apply (already clamped to the outstanding)

        Returns:
            SettlementOutcome describing the change
        """

    @abstractmethod
    def recompute_invoice(self, invoice: Invoice, paid: Decimal) -> None:
        """
        Rebuild an invoice's money fields from the sum of its payments.

        Args:
            invoice: Invoice locked by the caller
            paid: Sum of the invoice's remaining payments
        """

    @abstractmethod
    def party_deltas(self, applied: Decimal, shortfall: Decimal = ZERO) -> dict[str, Decimal]:
        """Party aggregate changes when money is applied."""

    @abstractmethod
    def reversal_party_deltas(self, applied: Decimal) -> dict[str, Decimal]:
        """Party aggregate changes when applied money is reversed."""

    @abstractmethod
    def invoice_created_deltas(self, invoice: Invoice) -> dict[str, Decimal]:
        """Party aggregate changes when an invoice is created."""

    @abstractmethod
    def invoice_removed_deltas(self, invoice: Invoice) -> dict[str, Decimal]:
        """Party aggregate changes when an unpaid invoice is deleted."""

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.key}>"


def resolve_outstanding(total: Decimal, paid: Decimal, written_off: Decimal = ZERO) -> Decimal:
    """Outstanding amount implied by the money fields, never negative."""
    return clamp_non_negative(total - paid - written_off)


def apply_status(invoice: Invoice) -> None:
    """Set an invoice's status from its current money fields."""
    invoice.status = resolve_status(invoice.outstanding, invoice.paid_amount)
