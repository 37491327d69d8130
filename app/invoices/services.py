"""
Invoice lifecycle service.

Creates and deletes purchase and sales invoices, and moves sales
invoices in and out of the force-paid state. Party aggregates move in
the same transaction as the invoice.

Usage:
    from invoices.services import InvoiceService

    invoice = InvoiceService.create_sales_invoice(
        tenant_id=tenant.id,
        retailer_id=retailer.id,
        invoice_number="S-1001",
        invoice_date=date(2024, 4, 1),
        total_amount="1000.00",
    )
    InvoiceService.mark_sales_invoice_paid(tenant.id, invoice.id)
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any

from django.db.models import DecimalField, Sum, Value
from django.db.models.functions import Coalesce

from core.exceptions import ValidationError
from core.money import ZERO, clamp_non_negative, format_money, is_positive
from core.services import BaseService
from core.validators import validate_positive_amount
from payments.ledger import BalanceSynchronizer
from payments.services.common import get_locked, lock_invoice
from payments.strategies import PURCHASE, SALES, PaymentSide, get_side

from .models import PurchaseInvoice, SalesInvoice
from .status import InvoiceStatus, resolve_status


@dataclass
class MarkPaidResult:
    """Outcome of force-marking a sales invoice Paid."""

    invoice: SalesInvoice
    written_off: Decimal

    def to_dict(self) -> dict[str, Any]:
        return {
            "invoice_id": self.invoice.id,
            "status": self.invoice.status,
            "written_off": format_money(self.written_off),
            "shortfall_amount": format_money(self.invoice.shortfall_amount),
        }


@dataclass
class RevertResult:
    """Outcome of reverting a force-paid sales invoice."""

    invoice: SalesInvoice
    restored_udhaar: Decimal
    cleared_shortfall: Decimal

    def to_dict(self) -> dict[str, Any]:
        return {
            "invoice_id": self.invoice.id,
            "status": self.invoice.status,
            "paid_amount": format_money(self.invoice.paid_amount),
            "udhaar_amount": format_money(self.invoice.udhaar_amount),
            "restored_udhaar": format_money(self.restored_udhaar),
            "cleared_shortfall": format_money(self.cleared_shortfall),
        }


class InvoiceService(BaseService):
    """Invoice creation, deletion and sales status overrides."""

    @classmethod
    def create_purchase_invoice(
        cls,
        tenant_id: uuid.UUID,
        vendor_id: uuid.UUID,
        invoice_number: str,
        invoice_date: date,
        total_amount: Decimal | str | int,
        notes: str = "",
    ) -> PurchaseInvoice:
        """
        Record an invoice received from a vendor.

        Raises:
            ValidationError: Non-positive total or duplicate invoice number
            NotFoundError: Vendor missing
        """
        total = validate_positive_amount(total_amount, "total_amount")
        return cls._create(
            PURCHASE,
            tenant_id,
            vendor_id,
            invoice_number,
            notes=notes,
            invoice_date=invoice_date,
            total_amount=total,
            balance_amount=total,
        )

    @classmethod
    def create_sales_invoice(
        cls,
        tenant_id: uuid.UUID,
        retailer_id: uuid.UUID,
        invoice_number: str,
        invoice_date: date,
        total_amount: Decimal | str | int,
        notes: str = "",
    ) -> SalesInvoice:
        """
        Record an invoice issued to a retailer on credit.

        Raises:
            ValidationError: Non-positive total or duplicate invoice number
            NotFoundError: Retailer missing
        """
        total = validate_positive_amount(total_amount, "total_amount")
        return cls._create(
            SALES,
            tenant_id,
            retailer_id,
            invoice_number,
            notes=notes,
            invoice_date=invoice_date,
            total_amount=total,
            udhaar_amount=total,
        )

    @classmethod
    def _create(cls, side: PaymentSide, tenant_id, party_id, invoice_number: str, **fields):
        with cls.atomic():
            party = get_locked(
                side.party_model, tenant_id, party_id, side.party_field.capitalize()
            )
            exists = (
                side.invoice_model.objects.for_tenant(tenant_id)
                .filter(invoice_number=invoice_number)
                .exists()
            )
            if exists:
                raise ValidationError(
                    f"Invoice number {invoice_number} already exists",
                    error_code="DUPLICATE_INVOICE_NUMBER",
                    details={"invoice_number": invoice_number},
                )

            invoice = side.invoice_model.objects.create(
                tenant_id=tenant_id,
                invoice_number=invoice_number,
                status=InvoiceStatus.UNPAID,
                **{side.party_field: party},
                **fields,
            )
            BalanceSynchronizer.apply_deltas(
                side.party_model,
                party.pk,
                side.invoice_created_deltas(invoice),
                tenant_id=tenant_id,
            )

        cls.get_logger().info(
            "Invoice created",
            extra={
                "side": side.key,
                "invoice_id": invoice.id,
                "invoice_number": invoice_number,
                "total": format_money(invoice.total_amount),
            },
        )
        return invoice

    @classmethod
    def mark_sales_invoice_paid(cls, tenant_id: uuid.UUID, invoice_id: int) -> MarkPaidResult:
        """
        Force a sales invoice to Paid, writing off what is still owed.

        The remaining udhaar moves to shortfall on the invoice and on the
        retailer. paid_amount and the retailer's account balance are left
        as they are.

        Raises:
            ValidationError: The invoice is already Paid
            NotFoundError: Invoice missing
        """
        with cls.atomic():
            invoice, _ = lock_invoice(SALES, tenant_id, invoice_id)
            if invoice.status == InvoiceStatus.PAID:
                raise ValidationError(
                    f"Invoice {invoice.invoice_number} is already Paid",
                    error_code="INVALID_STATUS_TRANSITION",
                    details={"invoice_id": invoice.id, "status": invoice.status},
                )

            written_off = invoice.udhaar_amount
            invoice.shortfall_amount += written_off
            invoice.udhaar_amount = ZERO
            invoice.status = InvoiceStatus.PAID
            invoice.save(update_fields=SALES.invoice_update_fields)

            BalanceSynchronizer.apply_deltas(
                SALES.party_model,
                invoice.retailer_id,
                {"udhaar_balance": -written_off, "shortfall_balance": written_off},
                tenant_id=tenant_id,
            )

        cls.get_logger().info(
            "Sales invoice marked paid",
            extra={"invoice_id": invoice.id, "written_off": format_money(written_off)},
        )
        return MarkPaidResult(invoice=invoice, written_off=written_off)

    @classmethod
    def revert_sales_invoice_status(cls, tenant_id: uuid.UUID, invoice_id: int) -> RevertResult:
        """
        Undo a Paid status: shortfall returns to udhaar.

        paid_amount is rebuilt from the invoice's payments and the status
        follows the epsilon rule. An invoice reopened by a payment deletion
        keeps its write-off, so it can be reverted while it still carries
        shortfall even though it is no longer Paid.

        Raises:
            ValidationError: The invoice is neither Paid nor carrying shortfall
            NotFoundError: Invoice missing
        """
        with cls.atomic():
            invoice, _ = lock_invoice(SALES, tenant_id, invoice_id)
            has_shortfall = is_positive(invoice.shortfall_amount)
            if invoice.status != InvoiceStatus.PAID and not has_shortfall:
                raise ValidationError(
                    f"Invoice {invoice.invoice_number} is not Paid and has no shortfall",
                    error_code="INVALID_STATUS_TRANSITION",
                    details={"invoice_id": invoice.id, "status": invoice.status},
                )

            paid = invoice.payments.aggregate(
                total=Coalesce(
                    Sum("amount"),
                    Value(ZERO),
                    output_field=DecimalField(max_digits=14, decimal_places=2),
                )
            )["total"]
            old_udhaar = invoice.udhaar_amount
            cleared = invoice.shortfall_amount

            invoice.paid_amount = paid
            invoice.shortfall_amount = ZERO
            invoice.udhaar_amount = clamp_non_negative(invoice.total_amount - paid)
            invoice.status = resolve_status(invoice.udhaar_amount, paid)
            invoice.save(update_fields=SALES.invoice_update_fields)

            restored = invoice.udhaar_amount - old_udhaar
            BalanceSynchronizer.apply_deltas(
                SALES.party_model,
                invoice.retailer_id,
                {"udhaar_balance": restored, "shortfall_balance": -cleared},
                tenant_id=tenant_id,
            )

        cls.get_logger().info(
            "Sales invoice status reverted",
            extra={
                "invoice_id": invoice.id,
                "invoice_status": invoice.status,
                "restored_udhaar": format_money(restored),
            },
        )
        return RevertResult(invoice=invoice, restored_udhaar=restored, cleared_shortfall=cleared)

    @classmethod
    def delete_invoice(
        cls,
        tenant_id: uuid.UUID,
        side: str | PaymentSide,
        invoice_id: int,
    ) -> bool:
        """
        Delete an invoice that has no payments.

        Returns:
            True if deleted, False if the invoice doesn't exist

        Raises:
            ValidationError: Payments still reference the invoice
        """
        side = get_side(side)
        with cls.atomic():
            invoice, party = lock_invoice(side, tenant_id, invoice_id, missing_ok=True)
            if invoice is None:
                return False
            if invoice.payments.exists():
                raise ValidationError(
                    f"Invoice {invoice.invoice_number} has payments; delete them first",
                    error_code="INVOICE_HAS_PAYMENTS",
                    details={"invoice_id": invoice.id},
                )

            BalanceSynchronizer.apply_deltas(
                side.party_model,
                party.pk,
                side.invoice_removed_deltas(invoice),
                tenant_id=tenant_id,
            )
            invoice.delete()

        cls.get_logger().info(
            "Invoice deleted",
            extra={"side": side.key, "invoice_id": invoice_id},
        )
        return True

    @staticmethod
    def outstanding_invoices(tenant_id: uuid.UUID, side: str | PaymentSide, party_id: uuid.UUID):
        """Open invoices of a party, oldest first."""
        side = get_side(side)
        return (
            side.invoice_model.objects.for_tenant(tenant_id)
            .filter(**{f"{side.party_field}_id": party_id})
            .open()
            .fifo()
        )
