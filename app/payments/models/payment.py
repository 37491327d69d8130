"""
Payment models for purchase and sales invoices.

A payment row records money applied to exactly one invoice. Payments
created together by a bulk distribution share a payment_link_id, and the
batch is backed by a single ledger entry that references the first
payment of the batch.

Usage:
    from payments.models import PaymentMode, PurchasePayment

    batch = PurchasePayment.objects.for_tenant(tenant.id).filter(
        payment_link_id=link_id,
    )
"""

from __future__ import annotations

from django.core.exceptions import ValidationError
from django.db import models
from django.utils import timezone

from core.model_mixins import TenantOwnedMixin, UUIDPrimaryKeyMixin
from core.models import BaseModel


class PaymentMode(models.TextChoices):
    """How the money moved. Every mode except Cash goes through a bank account."""

    CASH = "Cash", "Cash"
    BANK = "Bank", "Bank Transfer"
    UPI = "UPI", "UPI"
    CHEQUE = "Cheque", "Cheque"


class Payment(UUIDPrimaryKeyMixin, TenantOwnedMixin, BaseModel):
    """
    Abstract payment.

    Fields:
        amount: Amount applied to the invoice (after overpayment clamp)
        payment_mode: Cash, Bank, UPI or Cheque
        bank_account: Required for every mode except Cash
        payment_link_id: Shared by all payments of one bulk distribution
        payment_date: When the money moved
        cheque_number: Cheque number for Cheque payments
        upi_reference: Transaction reference for UPI payments
        notes: Free text
    """

    INVOICE_FIELD: str = "invoice"
    PARTY_FIELD: str = ""

    amount = models.DecimalField(max_digits=14, decimal_places=2)
    payment_mode = models.CharField(
        max_length=10,
        choices=PaymentMode.choices,
        default=PaymentMode.CASH,
    )
    bank_account = models.ForeignKey(
        "banking.BankAccount",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="+",
    )
    payment_link_id = models.UUIDField(
        null=True,
        blank=True,
        db_index=True,
        help_text="Groups the payments of one bulk distribution",
    )
    payment_date = models.DateTimeField(default=timezone.now, db_index=True)
    cheque_number = models.CharField(max_length=50, blank=True, default="")
    upi_reference = models.CharField(max_length=100, blank=True, default="")
    notes = models.TextField(blank=True, default="")

    class Meta:
        abstract = True
        ordering = ["payment_date", "created_at"]

    def __str__(self) -> str:
        return f"{self.payment_mode} {self.amount} ({self.pk})"

    def clean(self) -> None:
        super().clean()
        if self.payment_mode != PaymentMode.CASH and self.bank_account_id is None:
            raise ValidationError(
                {"bank_account": "Bank account is required for non-cash payments."}
            )

    @property
    def party_id(self):
        return getattr(self, f"{self.PARTY_FIELD}_id")

    @property
    def is_cash(self) -> bool:
        return self.payment_mode == PaymentMode.CASH


class PurchasePayment(Payment):
    """Money paid to a vendor against a purchase invoice."""

    PARTY_FIELD = "vendor"

    invoice = models.ForeignKey(
        "invoices.PurchaseInvoice",
        on_delete=models.PROTECT,
        related_name="payments",
    )
    vendor = models.ForeignKey(
        "parties.Vendor",
        on_delete=models.PROTECT,
        related_name="payments",
    )


class SalesPayment(Payment):
    """Money received from a retailer against a sales invoice."""

    PARTY_FIELD = "retailer"

    invoice = models.ForeignKey(
        "invoices.SalesInvoice",
        on_delete=models.PROTECT,
        related_name="payments",
    )
    retailer = models.ForeignKey(
        "parties.Retailer",
        on_delete=models.PROTECT,
        related_name="payments",
    )
