"""
Payment reversal service.

Deletes a payment and undoes everything it did: the invoice is rebuilt
from its remaining payments, the party's aggregates are restored, the
ledger entry is removed and the partition's running balances and cached
balance are recomputed.

Deletion unit:
    A payment that belongs to a bulk distribution is never reversed on
    its own; the whole batch goes, since the batch shares one ledger
    entry. Batches are found by payment_link_id. Payments written before
    link ids existed are matched by a fallback: same party, mode, payment
    date and bank account, no link id, and exactly one ledger entry among
    them.

Usage:
    from payments.services import PaymentReversalService

    deleted = PaymentReversalService.delete_payment(
        tenant_id=tenant.id,
        side="sales",
        payment_id=payment.id,
    )
"""

from __future__ import annotations

import uuid

from django.db.models import DecimalField, Sum, Value
from django.db.models.functions import Coalesce

from core.money import ZERO, format_money
from core.services import BaseService
from payments.ledger import BalanceSynchronizer, LedgerService
from payments.strategies import PaymentSide, get_side

from .common import get_locked, sum_amounts


class PaymentReversalService(BaseService):
    """Deletes payments and reverses their effects."""

    @classmethod
    def delete_payment(
        cls,
        tenant_id: uuid.UUID,
        side: str | PaymentSide,
        payment_id: uuid.UUID,
    ) -> bool:
        """
        Delete a payment (or the batch it belongs to) and reverse it.

        Args:
            tenant_id: Owning tenant
            side: "purchase" or "sales"
            payment_id: Any payment of the unit to delete

        Returns:
            True if payments were deleted, False if the payment doesn't exist

        Raises:
            DatabaseError: The store failed; nothing was reversed
        """
        side = get_side(side)
        logger = cls.get_logger()

        with cls.atomic():
            payments = side.payment_model.objects.for_tenant(tenant_id)
            party_id = (
                payments.filter(pk=payment_id)
                .values_list(f"{side.party_field}_id", flat=True)
                .first()
            )
            payment = None
            if party_id is not None:
                party = get_locked(
                    side.party_model, tenant_id, party_id, side.party_field.capitalize()
                )
                payment = payments.filter(pk=payment_id).first()
            if payment is None:
                logger.info(
                    "Payment to delete not found",
                    extra={"side": side.key, "payment_id": str(payment_id)},
                )
                return False

            partition = side.partition_for(
                tenant_id, payment.payment_mode, payment.bank_account_id
            )
            unit, entries = cls._resolve_unit(side, tenant_id, payment, partition)
            unit_ids = [p.id for p in unit]

            if entries:
                applied = sum_amounts(entry.amount for entry in entries)
            else:
                applied = sum_amounts(p.amount for p in unit)
                logger.warning(
                    "No ledger entry found for payment",
                    extra={"side": side.key, "payment_ids": [str(i) for i in unit_ids]},
                )

            invoice_ids = sorted({p.invoice_id for p in unit})
            invoices = list(
                side.invoice_model.objects.for_tenant(tenant_id)
                .locked()
                .filter(pk__in=invoice_ids)
                .order_by("pk")
            )
            # Payment rows lock after their invoices.
            list(payments.locked().filter(pk__in=unit_ids).order_by("pk"))

            side.payment_model.objects.filter(pk__in=unit_ids).delete()

            for invoice in invoices:
                paid = invoice.payments.aggregate(
                    total=Coalesce(
                        Sum("amount"),
                        Value(ZERO),
                        output_field=DecimalField(max_digits=14, decimal_places=2),
                    )
                )["total"]
                side.recompute_invoice(invoice, paid)
                invoice.save(update_fields=side.invoice_update_fields)

            BalanceSynchronizer.apply_deltas(
                side.party_model,
                party.pk,
                side.reversal_party_deltas(applied),
                tenant_id=tenant_id,
            )

            if entries:
                LedgerService.delete_entries_by_reference(
                    partition, side.reference_type, [entry.reference_id for entry in entries]
                )
                LedgerService.recompute_running_balances(
                    partition, since=min(entry.date for entry in entries)
                )
            BalanceSynchronizer.sync_partition(
                partition, LedgerService.tail_balance(partition)
            )

        logger.info(
            "Payment deleted",
            extra={
                "side": side.key,
                "payment_ids": [str(i) for i in unit_ids],
                "invoice_ids": invoice_ids,
                "reversed": format_money(applied),
                "partition": str(partition),
            },
        )
        return True

    @classmethod
    def _resolve_unit(cls, side: PaymentSide, tenant_id, payment, partition):
        """
        Find the payments to delete together and their ledger entries.

        Returns:
            (payments, ledger entries) of the deletion unit
        """
        qs = side.payment_model.objects.for_tenant(tenant_id)

        if payment.payment_link_id is not None:
            unit = list(qs.filter(payment_link_id=payment.payment_link_id).order_by("id"))
        else:
            unit = [payment]
            candidates = list(
                qs.filter(
                    payment_link_id__isnull=True,
                    payment_mode=payment.payment_mode,
                    payment_date=payment.payment_date,
                    bank_account_id=payment.bank_account_id,
                    **{f"{side.party_field}_id": payment.party_id},
                ).order_by("id")
            )
            if len(candidates) > 1:
                entries = LedgerService.find_entries_by_reference(
                    partition, side.reference_type, [c.id for c in candidates]
                )
                if len(entries) == 1:
                    cls.get_logger().warning(
                        "Deleting unlinked payments as one batch",
                        extra={
                            "side": side.key,
                            "payment_id": str(payment.id),
                            "batch_size": len(candidates),
                        },
                    )
                    return candidates, entries

        entries = LedgerService.find_entries_by_reference(
            partition, side.reference_type, [p.id for p in unit]
        )
        return unit, entries
