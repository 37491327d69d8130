"""
Sales side: money received from retailers.

Sales payments are cash inflows or bankbook debits. Applied money
reduces the retailer's account balance and udhaar (outstanding credit).

Shortfall:
    When an allocation clears an invoice's udhaar while paid_amount plus
    the existing shortfall is still short of the total, the gap is written
    off: the invoice and the retailer's shortfall_balance grow by the gap
    and the retailer's udhaar_balance shrinks by it.
"""

from __future__ import annotations

from decimal import Decimal

from core.money import ZERO, clamp_non_negative, is_positive, is_settled
from invoices.models import SalesInvoice
from parties.models import Retailer
from payments.ledger.models import ReferenceType
from payments.models import SalesPayment

from .base import PaymentSide, SettlementOutcome, apply_status, resolve_outstanding


class SalesSide(PaymentSide):
    """
    Retailer payments against sales invoices.

    Invoice invariant: paid_amount + udhaar_amount + shortfall_amount == total_amount.
    """

    key = "sales"
    invoice_model = SalesInvoice
    payment_model = SalesPayment
    party_model = Retailer
    reference_type = ReferenceType.SALES_PAYMENT
    ledger_sign = Decimal("1")

    description_prefix = "Payment from"
    invoice_update_fields = [
        "paid_amount",
        "udhaar_amount",
        "shortfall_amount",
        "status",
        "updated_at",
    ]

    def settle_invoice(self, invoice: SalesInvoice, applied: Decimal) -> SettlementOutcome:
        invoice.paid_amount += applied
        invoice.udhaar_amount = clamp_non_negative(invoice.udhaar_amount - applied)

        shortfall_delta = ZERO
        if is_settled(invoice.udhaar_amount):
            gap = invoice.total_amount - invoice.paid_amount - invoice.shortfall_amount
            if is_positive(gap):
                shortfall_delta = gap
                invoice.shortfall_amount += gap

        apply_status(invoice)
        return SettlementOutcome(
            applied=applied,
            outstanding=invoice.udhaar_amount,
            shortfall_delta=shortfall_delta,
        )

    def recompute_invoice(self, invoice: SalesInvoice, paid: Decimal) -> None:
        invoice.paid_amount = paid
        invoice.udhaar_amount = resolve_outstanding(
            invoice.total_amount, paid, invoice.shortfall_amount
        )
        apply_status(invoice)

    def party_deltas(self, applied: Decimal, shortfall: Decimal = ZERO) -> dict[str, Decimal]:
        return {
            "balance": -applied,
            "udhaar_balance": -(applied + shortfall),
            "shortfall_balance": shortfall,
        }

    def reversal_party_deltas(self, applied: Decimal) -> dict[str, Decimal]:
        return {"balance": applied, "udhaar_balance": applied}

    def invoice_created_deltas(self, invoice: SalesInvoice) -> dict[str, Decimal]:
        return {
            "balance": invoice.total_amount,
            "udhaar_balance": invoice.udhaar_amount,
        }

    def invoice_removed_deltas(self, invoice: SalesInvoice) -> dict[str, Decimal]:
        return {
            "balance": -(invoice.total_amount - invoice.paid_amount),
            "udhaar_balance": -invoice.udhaar_amount,
            "shortfall_balance": -invoice.shortfall_amount,
        }
