"""
Counterparty models.

Vendor and Retailer are the two sides of the trading business. Their
money fields are denormalized aggregates maintained by the invoice and
payment services; they are never edited directly.

Aggregates:
    Vendor.balance: sum of purchase invoice balance_amount
    Retailer.balance: account position (+ invoice totals, - payments)
    Retailer.udhaar_balance: sum of sales invoice udhaar_amount
    Retailer.shortfall_balance: sum of sales invoice shortfall_amount
"""

from __future__ import annotations

from decimal import Decimal

from django.db import models

from core.model_mixins import TenantOwnedMixin, UUIDPrimaryKeyMixin
from core.models import BaseModel


class Party(UUIDPrimaryKeyMixin, TenantOwnedMixin, BaseModel):
    """
    Abstract counterparty.

    Fields:
        name: Display name
        phone: Contact number used for payment notifications
        balance: Denormalized aggregate, see module docstring
        is_active: Whether the party is active
    """

    name = models.CharField(max_length=200)
    phone = models.CharField(max_length=20, blank=True, default="")
    balance = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        default=Decimal("0.00"),
    )
    is_active = models.BooleanField(default=True, db_index=True)

    class Meta:
        abstract = True
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name


class Vendor(Party):
    """A supplier the tenant owes money to on purchase invoices."""


class Retailer(Party):
    """
    A customer buying on credit.

    Fields:
        udhaar_balance: Outstanding credit across sales invoices
        shortfall_balance: Amount written off across force-paid invoices
    """

    udhaar_balance = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        default=Decimal("0.00"),
    )
    shortfall_balance = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        default=Decimal("0.00"),
    )
