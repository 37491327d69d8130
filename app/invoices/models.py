"""
Invoice models.

PurchaseInvoice and SalesInvoice share one abstract base. Each concrete
model names its counterparty and outstanding field through class
attributes so the payment engines can treat both sides uniformly.

Invariants:
    purchase: paid_amount + balance_amount == total_amount
    sales:    paid_amount + udhaar_amount + shortfall_amount == total_amount

Usage:
    from invoices.models import PurchaseInvoice

    open_invoices = (
        PurchaseInvoice.objects.for_tenant(tenant.id)
        .filter(vendor_id=vendor.id)
        .open()
        .fifo()
    )
"""

from __future__ import annotations

from decimal import Decimal

from django.db import models

from core.managers import TenantQuerySet
from core.model_mixins import TenantOwnedMixin
from core.models import BaseModel
from core.money import EPSILON

from .status import OPEN_STATUSES, InvoiceStatus


class InvoiceQuerySet(TenantQuerySet):
    """QuerySet with FIFO ordering and open-invoice filtering."""

    def open(self) -> InvoiceQuerySet:
        """Invoices that are not Paid and still have money outstanding."""
        return self.filter(
            status__in=OPEN_STATUSES,
            **{f"{self.model.OUTSTANDING_FIELD}__gt": EPSILON},
        )

    def fifo(self) -> InvoiceQuerySet:
        """Oldest obligation first: invoice date, then insertion order."""
        return self.order_by("invoice_date", "created_at", "id")


class Invoice(TenantOwnedMixin, BaseModel):
    """
    Abstract invoice.

    Fields:
        invoice_number: Number printed on the invoice, unique per tenant
        invoice_date: Calendar date used for FIFO allocation
        total_amount: Invoice total
        paid_amount: Sum of payments applied
        status: Unpaid, Partially Paid or Paid
        notes: Free text
    """

    PARTY_FIELD: str = ""
    OUTSTANDING_FIELD: str = ""

    invoice_number = models.CharField(max_length=50)
    invoice_date = models.DateField(db_index=True)
    total_amount = models.DecimalField(max_digits=14, decimal_places=2)
    paid_amount = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        default=Decimal("0.00"),
    )
    status = models.CharField(
        max_length=20,
        choices=InvoiceStatus.choices,
        default=InvoiceStatus.UNPAID,
        db_index=True,
    )
    notes = models.TextField(blank=True, default="")

    objects = InvoiceQuerySet.as_manager()

    class Meta:
        abstract = True
        ordering = ["invoice_date", "created_at", "id"]

    def __str__(self) -> str:
        return f"{self.invoice_number} ({self.status})"

    @property
    def outstanding(self) -> Decimal:
        return getattr(self, self.OUTSTANDING_FIELD)

    @property
    def party_id(self):
        return getattr(self, f"{self.PARTY_FIELD}_id")


class PurchaseInvoice(Invoice):
    """
    Invoice received from a vendor.

    Fields:
        vendor: Supplier the invoice is owed to
        balance_amount: Outstanding payable
    """

    PARTY_FIELD = "vendor"
    OUTSTANDING_FIELD = "balance_amount"

    vendor = models.ForeignKey(
        "parties.Vendor",
        on_delete=models.PROTECT,
        related_name="purchase_invoices",
    )
    balance_amount = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        default=Decimal("0.00"),
    )

    class Meta(Invoice.Meta):
        constraints = [
            models.UniqueConstraint(
                fields=["tenant", "invoice_number"],
                name="unique_purchase_invoice_number_per_tenant",
            )
        ]


class SalesInvoice(Invoice):
    """
    Invoice issued to a retailer on credit.

    Fields:
        retailer: Customer who owes the invoice
        udhaar_amount: Outstanding credit
        shortfall_amount: Amount written off when force-marked Paid
    """

    PARTY_FIELD = "retailer"
    OUTSTANDING_FIELD = "udhaar_amount"

    retailer = models.ForeignKey(
        "parties.Retailer",
        on_delete=models.PROTECT,
        related_name="sales_invoices",
    )
    udhaar_amount = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        default=Decimal("0.00"),
    )
    shortfall_amount = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        default=Decimal("0.00"),
    )

    class Meta(Invoice.Meta):
        constraints = [
            models.UniqueConstraint(
                fields=["tenant", "invoice_number"],
                name="unique_sales_invoice_number_per_tenant",
            )
        ]
