"""
Invoice status derivation.

Status is never stored independently of the money fields: every write
that changes paid or outstanding amounts recomputes it here.

Rule (checked in order):
    outstanding <= 0.005  -> Paid
    paid > 0.005          -> Partially Paid
    otherwise             -> Unpaid
"""

from __future__ import annotations

from decimal import Decimal

from django.db import models

from core.money import is_positive, is_settled


class InvoiceStatus(models.TextChoices):
    """Payment status of an invoice. Values are stored verbatim."""

    UNPAID = "Unpaid", "Unpaid"
    PARTIALLY_PAID = "Partially Paid", "Partially Paid"
    PAID = "Paid", "Paid"


OPEN_STATUSES = (InvoiceStatus.UNPAID, InvoiceStatus.PARTIALLY_PAID)


def resolve_status(outstanding: Decimal, paid: Decimal) -> InvoiceStatus:
    """
    Derive an invoice status from its money fields.

    Args:
        outstanding: Amount still owed on the invoice
        paid: Amount paid so far

    Returns:
        The InvoiceStatus for these amounts
    """
    if is_settled(outstanding):
        return InvoiceStatus.PAID
    if is_positive(paid):
        return InvoiceStatus.PARTIALLY_PAID
    return InvoiceStatus.UNPAID
