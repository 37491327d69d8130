"""
Payment application service.

Applies one payment to one invoice. Within a single transaction it
settles the invoice, moves the party's aggregates, posts one ledger
entry and re-syncs the cash or bank balance to the ledger tail.

Overpayment protection:
    The amount applied is min(requested, outstanding). The excess is not
    applied to the invoice; it is reported on the result so the caller
    can redirect it (e.g. through a bulk distribution).

Usage:
    from payments.services import PaymentApplicationService

    result = PaymentApplicationService.apply_payment(
        tenant_id=tenant.id,
        side="purchase",
        invoice_id=invoice.id,
        amount="1000.00",
        payment_mode=PaymentMode.CASH,
    )
    result.invoice.status  # "Paid"
"""

from __future__ import annotations

import uuid
from datetime import date, datetime
from decimal import Decimal

from core.dates import to_aware_datetime
from core.exceptions import ValidationError
from core.money import format_money, is_settled
from core.services import BaseService
from core.validators import validate_positive_amount
from notifications.services import PaymentNotificationService
from payments.ledger import BalanceSynchronizer, LedgerService
from payments.models import PaymentMode
from payments.strategies import PaymentSide, get_side

from .common import get_bank_account, lock_invoice, validate_mode
from .types import PaymentResult


class PaymentApplicationService(BaseService):
    """Applies single payments to purchase and sales invoices."""

    @classmethod
    def apply_payment(
        cls,
        tenant_id: uuid.UUID,
        side: str | PaymentSide,
        invoice_id: int,
        amount: Decimal | str | int,
        payment_mode: str,
        bank_account_id: uuid.UUID | None = None,
        payment_date: date | datetime | None = None,
        cheque_number: str = "",
        upi_reference: str = "",
        notes: str = "",
    ) -> PaymentResult:
        """
        Apply a payment to one invoice.

        Args:
            tenant_id: Owning tenant
            side: "purchase" or "sales"
            invoice_id: Invoice to pay
            amount: Requested amount (must be positive)
            payment_mode: Cash, Bank, UPI or Cheque
            bank_account_id: Required for every mode except Cash
            payment_date: When the money moved; a date means local midnight
                and a naive datetime local time (defaults to now)
            cheque_number: Cheque number for Cheque payments
            upi_reference: Transaction reference for UPI payments
            notes: Free text stored on the payment

        Returns:
            PaymentResult with the payment, invoice, party and ledger entry

        Raises:
            ValidationError: Non-positive amount, bad mode, missing bank
                account, or nothing outstanding on the invoice
            NotFoundError: Invoice, party or bank account missing
            DatabaseError: The store failed; nothing was applied
        """
        side = get_side(side)
        requested = validate_positive_amount(amount)
        validate_mode(payment_mode, bank_account_id)
        if payment_mode == PaymentMode.CASH:
            bank_account_id = None
        payment_date = to_aware_datetime(payment_date)
        logger = cls.get_logger()

        with cls.atomic():
            invoice, party = lock_invoice(side, tenant_id, invoice_id)
            if bank_account_id is not None:
                get_bank_account(tenant_id, bank_account_id)

            outstanding = invoice.outstanding
            if is_settled(outstanding):
                raise ValidationError(
                    f"Invoice {invoice.invoice_number} has nothing outstanding",
                    error_code="NOTHING_OUTSTANDING",
                    details={"invoice_id": invoice.id, "status": invoice.status},
                )

            applied = min(requested, outstanding)
            if applied < requested:
                logger.warning(
                    "Overpayment clamped to invoice outstanding",
                    extra={
                        "invoice_id": invoice.id,
                        "requested": format_money(requested),
                        "applied": format_money(applied),
                    },
                )

            outcome = side.settle_invoice(invoice, applied)
            invoice.save(update_fields=side.invoice_update_fields)

            payment = side.payment_model.objects.create(
                tenant_id=tenant_id,
                invoice=invoice,
                amount=applied,
                payment_mode=payment_mode,
                bank_account_id=bank_account_id,
                payment_date=payment_date,
                cheque_number=cheque_number,
                upi_reference=upi_reference,
                notes=notes,
                **{side.party_field: party},
            )

            BalanceSynchronizer.apply_deltas(
                side.party_model,
                party.pk,
                side.party_deltas(applied, outcome.shortfall_delta),
                tenant_id=tenant_id,
            )

            partition = side.partition_for(tenant_id, payment_mode, bank_account_id)
            entry = LedgerService.append_entry(
                partition,
                signed_amount=side.ledger_amount(applied),
                reference_type=side.reference_type,
                reference_id=payment.id,
                date=payment_date,
                description=side.describe(party, [invoice.invoice_number]),
            )
            BalanceSynchronizer.sync_partition(
                partition, LedgerService.tail_balance(partition)
            )

            party.refresh_from_db()
            entry.refresh_from_db()
            PaymentNotificationService.queue_payment_notification(side.key, [payment.id])

        logger.info(
            "Payment applied",
            extra={
                "side": side.key,
                "payment_id": str(payment.id),
                "invoice_id": invoice.id,
                "applied": format_money(applied),
                "invoice_status": invoice.status,
                "partition": str(partition),
            },
        )
        return PaymentResult(
            payment=payment,
            invoice=invoice,
            party=party,
            ledger_entry=entry,
            requested_amount=requested,
            applied_amount=applied,
            shortfall_amount=outcome.shortfall_delta,
        )
