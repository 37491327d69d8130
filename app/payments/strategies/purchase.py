"""
Purchase side: money paid out to vendors.

Purchase payments are cash outflows or bankbook credits, and reduce the
vendor's payable balance by the amount applied.
"""

from __future__ import annotations

from decimal import Decimal

from core.money import ZERO
from invoices.models import PurchaseInvoice
from parties.models import Vendor
from payments.ledger.models import ReferenceType
from payments.models import PurchasePayment

from .base import PaymentSide, SettlementOutcome, apply_status, resolve_outstanding


class PurchaseSide(PaymentSide):
    """
    Vendor payments against purchase invoices.

    Invoice invariant: paid_amount + balance_amount == total_amount.
    """

    key = "purchase"
    invoice_model = PurchaseInvoice
    payment_model = PurchasePayment
    party_model = Vendor
    reference_type = ReferenceType.PAYMENT
    ledger_sign = Decimal("-1")

    description_prefix = "Payment to"
    invoice_update_fields = ["paid_amount", "balance_amount", "status", "updated_at"]

    def settle_invoice(self, invoice: PurchaseInvoice, applied: Decimal) -> SettlementOutcome:
        invoice.paid_amount += applied
        invoice.balance_amount = resolve_outstanding(invoice.total_amount, invoice.paid_amount)
        apply_status(invoice)
        return SettlementOutcome(applied=applied, outstanding=invoice.balance_amount)

    def recompute_invoice(self, invoice: PurchaseInvoice, paid: Decimal) -> None:
        invoice.paid_amount = paid
        invoice.balance_amount = resolve_outstanding(invoice.total_amount, paid)
        apply_status(invoice)

    def party_deltas(self, applied: Decimal, shortfall: Decimal = ZERO) -> dict[str, Decimal]:
        return {"balance": -applied}

    def reversal_party_deltas(self, applied: Decimal) -> dict[str, Decimal]:
        return {"balance": applied}

    def invoice_created_deltas(self, invoice: PurchaseInvoice) -> dict[str, Decimal]:
        return {"balance": invoice.balance_amount}

    def invoice_removed_deltas(self, invoice: PurchaseInvoice) -> dict[str, Decimal]:
        return {"balance": -invoice.balance_amount}
