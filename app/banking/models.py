"""
Bank account model.

Usage:
    from banking.models import BankAccount

    account = BankAccount.objects.for_tenant(tenant.id).active().get(id=account_id)
    account.balance  # tail balance of this account's bankbook
"""

from __future__ import annotations

from decimal import Decimal

from django.db import models

from core.model_mixins import TenantOwnedMixin, UUIDPrimaryKeyMixin
from core.models import BaseModel


class DepositSource(models.TextChoices):
    """Where the money for a bank deposit comes from."""

    CASH = "cash", "Cash in hand"
    EXTERNAL = "external", "External"


class BankAccount(UUIDPrimaryKeyMixin, TenantOwnedMixin, BaseModel):
    """
    A tenant's bank account.

    Fields:
        name: Display name (e.g., "HDFC Current")
        account_number: Account number
        bank_name: Name of the bank
        ifsc_code: Branch routing code
        balance: Denormalized bankbook tail balance
        is_active: Whether the account accepts new entries
    """

    name = models.CharField(max_length=200)
    account_number = models.CharField(max_length=50, blank=True, default="")
    bank_name = models.CharField(max_length=200, blank=True, default="")
    ifsc_code = models.CharField(max_length=20, blank=True, default="")
    balance = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        default=Decimal("0.00"),
        help_text="Mirror of the bankbook tail balance",
    )
    is_active = models.BooleanField(default=True, db_index=True)

    class Meta:
        ordering = ["name"]

    def __str__(self) -> str:
        if self.bank_name:
            return f"{self.name} ({self.bank_name})"
        return self.name
