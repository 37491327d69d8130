"""
Bulk distribution service.

Allocates a lump sum from one vendor or retailer across that party's
open invoices, oldest first (invoice date, then insertion order).

Each touched invoice gets one payment; all payments of the batch share a
payment_link_id. The whole batch is posted as ONE ledger entry for the
distributed amount, referencing the first payment. Money left once the
open invoices are exhausted is not applied and is returned as
remaining_amount.

Usage:
    from payments.services import PaymentDistributionService

    result = PaymentDistributionService.distribute(
        tenant_id=tenant.id,
        side="sales",
        party_id=retailer.id,
        total_amount="400.00",
        payment_mode=PaymentMode.UPI,
        bank_account_id=account.id,
    )
    result.remaining_amount  # Decimal("0.00")
"""

from __future__ import annotations

import uuid
from datetime import date, datetime
from decimal import Decimal

from core.dates import to_aware_datetime
from core.exceptions import ValidationError
from core.money import ZERO, format_money
from core.services import BaseService
from core.validators import validate_positive_amount
from notifications.services import PaymentNotificationService
from payments.ledger import BalanceSynchronizer, LedgerService
from payments.models import PaymentMode
from payments.strategies import PaymentSide, get_side

from .common import get_bank_account, get_locked, validate_mode
from .types import DistributionResult


class PaymentDistributionService(BaseService):
    """FIFO distribution of a lump sum across a party's open invoices."""

    @classmethod
    def distribute(
        cls,
        tenant_id: uuid.UUID,
        side: str | PaymentSide,
        party_id: uuid.UUID,
        total_amount: Decimal | str | int,
        payment_mode: str,
        bank_account_id: uuid.UUID | None = None,
        payment_date: date | datetime | None = None,
        payment_link_id: uuid.UUID | None = None,
        cheque_number: str = "",
        upi_reference: str = "",
        notes: str = "",
    ) -> DistributionResult:
        """
        Distribute a lump sum FIFO across a party's open invoices.

        Args:
            tenant_id: Owning tenant
            side: "purchase" or "sales"
            party_id: Vendor or retailer paying / being paid
            total_amount: Lump sum (must be positive)
            payment_mode: Cash, Bank, UPI or Cheque
            bank_account_id: Required for every mode except Cash
            payment_date: When the money moved; a date means local midnight
                and a naive datetime local time (defaults to now)
            payment_link_id: Batch id to stamp on the payments (generated
                when omitted)
            cheque_number: Cheque number for Cheque payments
            upi_reference: Transaction reference for UPI payments
            notes: Free text stored on every payment

        Returns:
            DistributionResult with distributed and remaining amounts

        Raises:
            ValidationError: Bad amount or mode, or no open invoices
            NotFoundError: Party or bank account missing
            DatabaseError: The store failed; nothing was applied
        """
        side = get_side(side)
        total = validate_positive_amount(total_amount, "total_amount")
        validate_mode(payment_mode, bank_account_id)
        if payment_mode == PaymentMode.CASH:
            bank_account_id = None
        payment_date = to_aware_datetime(payment_date)
        link_id = payment_link_id or uuid.uuid4()
        logger = cls.get_logger()

        with cls.atomic():
            party = get_locked(
                side.party_model, tenant_id, party_id, side.party_field.capitalize()
            )
            if bank_account_id is not None:
                get_bank_account(tenant_id, bank_account_id)

            invoices = list(
                side.invoice_model.objects.for_tenant(tenant_id)
                .filter(**{f"{side.party_field}_id": party.pk})
                .open()
                .fifo()
                .locked()
            )
            if not invoices:
                raise ValidationError(
                    f"No outstanding invoices for {party.name}",
                    error_code="NO_OUTSTANDING_INVOICES",
                    details={f"{side.party_field}_id": str(party.pk)},
                )

            remaining = total
            distributed = ZERO
            shortfall = ZERO
            payments = []
            touched = []

            for invoice in invoices:
                if remaining <= ZERO:
                    break
                allocation = min(remaining, invoice.outstanding)

                outcome = side.settle_invoice(invoice, allocation)
                invoice.save(update_fields=side.invoice_update_fields)

                payments.append(
                    side.payment_model.objects.create(
                        tenant_id=tenant_id,
                        invoice=invoice,
                        amount=allocation,
                        payment_mode=payment_mode,
                        bank_account_id=bank_account_id,
                        payment_link_id=link_id,
                        payment_date=payment_date,
                        cheque_number=cheque_number,
                        upi_reference=upi_reference,
                        notes=notes,
                        **{side.party_field: party},
                    )
                )
                touched.append(invoice)
                remaining -= allocation
                distributed += allocation
                shortfall += outcome.shortfall_delta

            BalanceSynchronizer.apply_deltas(
                side.party_model,
                party.pk,
                side.party_deltas(distributed, shortfall),
                tenant_id=tenant_id,
            )

            partition = side.partition_for(tenant_id, payment_mode, bank_account_id)
            entry = LedgerService.append_entry(
                partition,
                signed_amount=side.ledger_amount(distributed),
                reference_type=side.reference_type,
                reference_id=payments[0].id,
                date=payment_date,
                description=side.describe(
                    party, [invoice.invoice_number for invoice in touched]
                ),
            )
            BalanceSynchronizer.sync_partition(
                partition, LedgerService.tail_balance(partition)
            )

            party.refresh_from_db()
            entry.refresh_from_db()
            PaymentNotificationService.queue_payment_notification(
                side.key, [payment.id for payment in payments]
            )

        logger.info(
            "Payment distributed",
            extra={
                "side": side.key,
                "party_id": str(party.pk),
                "payment_link_id": str(link_id),
                "total": format_money(total),
                "distributed": format_money(distributed),
                "remaining": format_money(remaining),
                "invoice_count": len(touched),
            },
        )
        return DistributionResult(
            total_amount=total,
            distributed_amount=distributed,
            remaining_amount=remaining,
            payments=payments,
            invoice_ids=[invoice.id for invoice in touched],
            party_balance=party.balance,
            payment_link_id=link_id,
            ledger_entry=entry,
            shortfall_amount=shortfall,
        )
