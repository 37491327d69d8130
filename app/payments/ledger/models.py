"""
Ledger models for running-balance cash and bank books.

This module defines the two ledgers every money movement is posted to:
- CashbookEntry: one partition per tenant (cash in hand)
- BankbookEntry: one partition per tenant bank account

Each entry carries the running balance of its partition. Ordered by
(date, id), every entry satisfies:

    balance[n] == balance[n-1] + signed_amount[n]

and the first entry's balance is its own signed amount.

Sign conventions:
    Cashbook: inflow is money in, outflow is money out
    Bankbook: debit is money into the account, credit is money out

Usage:
    from payments.ledger.models import CashbookEntry, ReferenceType

    tail = (
        CashbookEntry.objects.for_tenant(tenant.id)
        .order_by("-date", "-id")
        .first()
    )
    tail.balance  # current cash in hand
"""

from __future__ import annotations

from decimal import Decimal

from django.db import models

from core.model_mixins import TenantOwnedMixin
from core.models import BaseModel


class ReferenceType(models.TextChoices):
    """
    What created a ledger entry.

    Values:
        PAYMENT: Purchase payment (money out to a vendor)
        SALES_PAYMENT: Sales payment (money in from a retailer)
        EXPENSE: Business expense
        OPENING_BALANCE: Starting balance of a cash or bank book
        BANK_DEPOSIT: Money deposited into a bank account
        BANK_WITHDRAWAL: Money withdrawn from a bank account
    """

    PAYMENT = "Payment", "Payment"
    SALES_PAYMENT = "Sales Payment", "Sales Payment"
    EXPENSE = "Expense", "Expense"
    OPENING_BALANCE = "Opening Balance", "Opening Balance"
    BANK_DEPOSIT = "Bank Deposit", "Bank Deposit"
    BANK_WITHDRAWAL = "Bank Withdrawal", "Bank Withdrawal"


class LedgerEntry(TenantOwnedMixin, BaseModel):
    """
    Abstract running-balance ledger entry.

    Integer primary keys are kept so that id is the insertion-order
    tie-break for entries sharing a date.

    Fields:
        date: Business date of the movement
        description: Human-readable description
        balance: Partition running balance after this entry
        reference_type: What created the entry (see ReferenceType)
        reference_id: UUID of the originating payment, expense or account
    """

    date = models.DateTimeField(db_index=True)
    description = models.CharField(max_length=255, blank=True, default="")
    balance = models.DecimalField(max_digits=14, decimal_places=2)
    reference_type = models.CharField(
        max_length=30,
        choices=ReferenceType.choices,
    )
    reference_id = models.UUIDField(null=True, blank=True)

    class Meta:
        abstract = True
        ordering = ["date", "id"]

    @property
    def signed_amount(self) -> Decimal:
        raise NotImplementedError

    @property
    def amount(self) -> Decimal:
        """Unsigned amount of the movement."""
        return abs(self.signed_amount)

    @staticmethod
    def split_amount(signed_amount: Decimal) -> dict[str, Decimal]:
        """Map a signed amount onto this ledger's in/out columns."""
        raise NotImplementedError


class CashbookEntry(LedgerEntry):
    """
    A movement of cash in hand.

    Fields:
        inflow: Cash received
        outflow: Cash paid out
    """

    inflow = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        default=Decimal("0.00"),
    )
    outflow = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        default=Decimal("0.00"),
    )

    class Meta(LedgerEntry.Meta):
        verbose_name_plural = "cashbook entries"
        indexes = [
            models.Index(
                fields=["tenant", "date", "id"],
                name="cashbook_partition_idx",
            ),
            models.Index(
                fields=["reference_type", "reference_id"],
                name="cashbook_reference_idx",
            ),
        ]

    def __str__(self) -> str:
        return f"Cash {self.signed_amount:+} -> {self.balance} ({self.reference_type})"

    @property
    def signed_amount(self) -> Decimal:
        return self.inflow - self.outflow

    @staticmethod
    def split_amount(signed_amount: Decimal) -> dict[str, Decimal]:
        if signed_amount >= 0:
            return {"inflow": signed_amount, "outflow": Decimal("0.00")}
        return {"inflow": Decimal("0.00"), "outflow": -signed_amount}


class BankbookEntry(LedgerEntry):
    """
    A movement through one bank account.

    Fields:
        bank_account: The account this entry belongs to
        debit: Money into the account
        credit: Money out of the account
    """

    bank_account = models.ForeignKey(
        "banking.BankAccount",
        on_delete=models.CASCADE,
        related_name="bankbook_entries",
    )
    debit = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        default=Decimal("0.00"),
    )
    credit = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        default=Decimal("0.00"),
    )

    class Meta(LedgerEntry.Meta):
        verbose_name_plural = "bankbook entries"
        indexes = [
            models.Index(
                fields=["bank_account", "date", "id"],
                name="bankbook_partition_idx",
            ),
            models.Index(
                fields=["reference_type", "reference_id"],
                name="bankbook_reference_idx",
            ),
        ]

    def __str__(self) -> str:
        return f"Bank {self.signed_amount:+} -> {self.balance} ({self.reference_type})"

    @property
    def signed_amount(self) -> Decimal:
        return self.debit - self.credit

    @staticmethod
    def split_amount(signed_amount: Decimal) -> dict[str, Decimal]:
        if signed_amount >= 0:
            return {"debit": signed_amount, "credit": Decimal("0.00")}
        return {"debit": Decimal("0.00"), "credit": -signed_amount}
