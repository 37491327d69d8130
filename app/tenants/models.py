"""
Tenant model.

A tenant is one trading business. All vendors, retailers, invoices,
payments and ledger entries carry a tenant foreign key.

Usage:
    from tenants.models import Tenant

    tenant = Tenant.objects.create(name="Sharma Traders", slug="sharma-traders")
    tenant.cash_balance  # Decimal("0.00") until the first cashbook entry
"""

from __future__ import annotations

from decimal import Decimal

from django.db import models

from core.model_mixins import UUIDPrimaryKeyMixin
from core.models import BaseModel


class Tenant(UUIDPrimaryKeyMixin, BaseModel):
    """
    A trading business using the back office.

    Fields:
        name: Display name
        slug: Unique short identifier
        cash_balance: Denormalized cashbook tail balance
        is_active: Whether the tenant is active
    """

    name = models.CharField(max_length=200)
    slug = models.SlugField(max_length=100, unique=True)
    cash_balance = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        default=Decimal("0.00"),
        help_text="Mirror of the cashbook tail balance",
    )
    is_active = models.BooleanField(default=True, db_index=True)

    class Meta:
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name
