"""
Ledger service layer for running-balance cash and bank books.

This module provides the LedgerService class which encapsulates all
writes to CashbookEntry and BankbookEntry. Every append, recompute and
reference delete goes through it so the running balance of each
partition stays continuous.

Lock scope:
    Every write locks the partition's anchor row with SELECT ... FOR UPDATE
    before reading the tail:
    - cashbook partition: the Tenant row
    - bankbook partition: the BankAccount row
    Appends to one partition are therefore serialized even when the
    partition is still empty, while different partitions never block
    each other. The tail entry itself is also read FOR UPDATE.

Lock order:
    Every service that writes payments, invoices or ledgers takes its
    row locks in one global order: the party row (Vendor or Retailer),
    then its invoices, then payments, then ledger anchors, the Tenant row
    before any BankAccount row. Invoice and payment rows are only locked
    while their party row is held. Callers that start from an invoice or
    a payment read its party id without a lock first.

Usage:
    from payments.ledger.services import LedgerService
    from payments.ledger.types import LedgerPartition
    from payments.ledger.models import ReferenceType

    partition = LedgerPartition.cash(tenant.id)
    entry = LedgerService.append_entry(
        partition,
        signed_amount=Decimal("-250.00"),
        reference_type=ReferenceType.PAYMENT,
        reference_id=payment.id,
        date=payment.payment_date,
        description="Payment to Gupta Wholesale",
    )
    entry.balance  # new cash in hand
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from django.db import transaction

from banking.models import BankAccount
from core.dates import to_aware_datetime
from core.exceptions import NotFoundError, ValidationError
from core.money import ZERO, to_money
from tenants.models import Tenant

from .models import BankbookEntry, CashbookEntry
from .types import LedgerPartition

if TYPE_CHECKING:
    from collections.abc import Iterable

    from django.db.models import QuerySet

    from .models import LedgerEntry

logger = logging.getLogger(__name__)


class LedgerService:
    """
    Service class for ledger operations.

    Key features:
    - Appends serialized per partition by an anchor row lock
    - Back-dated appends repair the suffix they land in front of
    - Suffix recompute that matches a full recompute exactly

    All methods are static - no instance state is maintained.
    """

    @staticmethod
    def entry_model(partition: LedgerPartition) -> type[LedgerEntry]:
        """Return the entry model backing a partition."""
        return CashbookEntry if partition.is_cash else BankbookEntry

    @staticmethod
    def entries(partition: LedgerPartition) -> QuerySet:
        """
        Get all entries of a partition.

        Args:
            partition: The ledger partition

        Returns:
            Unordered queryset of the partition's entries
        """
        if partition.is_cash:
            return CashbookEntry.objects.filter(tenant_id=partition.tenant_id)
        return BankbookEntry.objects.filter(
            tenant_id=partition.tenant_id,
            bank_account_id=partition.bank_account_id,
        )

    @staticmethod
    def partition_of(entry: LedgerEntry) -> LedgerPartition:
        """Return the partition an entry belongs to."""
        if isinstance(entry, BankbookEntry):
            return LedgerPartition.bank(entry.tenant_id, entry.bank_account_id)
        return LedgerPartition.cash(entry.tenant_id)

    @staticmethod
    def lock_partition(partition: LedgerPartition) -> None:
        """
        Lock the partition's anchor row until the transaction ends.

        Must be called inside transaction.atomic().

        Args:
            partition: The ledger partition

        Raises:
            NotFoundError: If the tenant or bank account doesn't exist
        """
        if partition.is_cash:
            found = (
                Tenant.objects.select_for_update()
                .filter(id=partition.tenant_id)
                .values_list("id", flat=True)
                .first()
            )
            if found is None:
                raise NotFoundError(
                    f"Tenant {partition.tenant_id} not found",
                    details={"tenant_id": str(partition.tenant_id)},
                )
            return

        found = (
            BankAccount.objects.select_for_update()
            .filter(id=partition.bank_account_id, tenant_id=partition.tenant_id)
            .values_list("id", flat=True)
            .first()
        )
        if found is None:
            raise NotFoundError(
                f"Bank account {partition.bank_account_id} not found",
                details={"bank_account_id": str(partition.bank_account_id)},
            )

    @staticmethod
    def tail_entry(partition: LedgerPartition, lock: bool = False) -> LedgerEntry | None:
        """
        Get the last entry of a partition by (date, id).

        Args:
            partition: The ledger partition
            lock: Read the row FOR UPDATE (inside a transaction only)

        Returns:
            The tail entry, or None for an empty partition
        """
        qs = LedgerService.entries(partition)
        if lock:
            qs = qs.select_for_update()
        return qs.order_by("-date", "-id").first()

    @staticmethod
    def tail_balance(partition: LedgerPartition) -> Decimal:
        """Return the partition's current running balance (zero when empty)."""
        tail = LedgerService.tail_entry(partition)
        return tail.balance if tail is not None else ZERO

    @staticmethod
    def append_entry(
        partition: LedgerPartition,
        signed_amount: Decimal | str | int,
        reference_type: str,
        reference_id: uuid.UUID | None,
        date: datetime,
        description: str = "",
    ) -> LedgerEntry:
        """
        Append one entry to a partition.

        Reads the tail under the anchor lock and stores
        new_balance = tail_balance + signed_amount (or signed_amount for
        the first entry). An entry dated before the current tail is
        inserted at its (date, id) position and the suffix from its date
        is recomputed.

        Args:
            partition: Cashbook or bankbook partition
            signed_amount: Positive for money in, negative for money out
            reference_type: What created the entry (ReferenceType value)
            reference_id: UUID of the originating record
            date: Business date of the movement (a date or naive datetime
                is taken in the current time zone)
            description: Human-readable description

        Returns:
            The created entry with its running balance

        Raises:
            ValidationError: If signed_amount is zero
            NotFoundError: If the partition's tenant or bank account is missing
        """
        amount = to_money(signed_amount)
        if amount == ZERO:
            raise ValidationError(
                "Ledger entry amount must not be zero",
                details={"partition": str(partition)},
            )
        date = to_aware_datetime(date)

        model = LedgerService.entry_model(partition)
        fields = {
            "tenant_id": partition.tenant_id,
            "date": date,
            "description": description[:255],
            "reference_type": reference_type,
            "reference_id": reference_id,
            **model.split_amount(amount),
        }
        if not partition.is_cash:
            fields["bank_account_id"] = partition.bank_account_id

        with transaction.atomic():
            LedgerService.lock_partition(partition)
            tail = LedgerService.tail_entry(partition, lock=True)

            if tail is None or date >= tail.date:
                previous = tail.balance if tail is not None else ZERO
                return model.objects.create(balance=previous + amount, **fields)

            entry = model.objects.create(balance=amount, **fields)
            logger.info(
                "Back-dated ledger entry, recomputing suffix",
                extra={
                    "partition": str(partition),
                    "entry_id": entry.id,
                    "date": date.isoformat(),
                },
            )
            LedgerService.recompute_running_balances(partition, since=date)
            entry.refresh_from_db(fields=["balance"])
            return entry

    @staticmethod
    def recompute_running_balances(
        partition: LedgerPartition,
        since: datetime | None = None,
    ) -> Decimal:
        """
        Rewrite running balances of a partition.

        Walks entries ordered by (date, id) ascending and stores the
        forward-accumulating sum of signed amounts. With since, only
        entries dated at or after it are rewritten, seeded from the
        balance of the last entry before it; this yields the same
        balances as a full recompute when the prefix is continuous.

        Args:
            partition: The ledger partition
            since: Optional start of the suffix to rewrite

        Returns:
            The partition's tail balance after the recompute
        """
        with transaction.atomic():
            LedgerService.lock_partition(partition)
            qs = LedgerService.entries(partition)

            running = ZERO
            if since is not None:
                seed = qs.filter(date__lt=since).order_by("-date", "-id").first()
                if seed is not None:
                    running = seed.balance
                qs = qs.filter(date__gte=since)

            changed = []
            for entry in qs.order_by("date", "id"):
                running += entry.signed_amount
                if entry.balance != running:
                    entry.balance = running
                    changed.append(entry)

            if changed:
                LedgerService.entry_model(partition).objects.bulk_update(
                    changed, ["balance"]
                )

        logger.debug(
            "Recomputed running balances",
            extra={
                "partition": str(partition),
                "rewritten": len(changed),
                "tail_balance": str(running),
            },
        )
        return running

    @staticmethod
    def find_entries_by_reference(
        partition: LedgerPartition,
        reference_type: str,
        reference_ids: Iterable[uuid.UUID],
    ) -> list[LedgerEntry]:
        """Return a partition's entries created by the given references."""
        return list(
            LedgerService.entries(partition)
            .filter(reference_type=reference_type, reference_id__in=list(reference_ids))
            .order_by("date", "id")
        )

    @staticmethod
    def delete_entries_by_reference(
        partition: LedgerPartition,
        reference_type: str,
        reference_ids: Iterable[uuid.UUID],
    ) -> list[LedgerEntry]:
        """
        Delete a partition's entries created by the given references.

        Running balances of later entries are left as they are; callers
        follow up with recompute_running_balances().

        Args:
            partition: The ledger partition
            reference_type: ReferenceType value to match
            reference_ids: Originating record ids to match

        Returns:
            The deleted entries (with their last known field values)
        """
        with transaction.atomic():
            LedgerService.lock_partition(partition)
            entries = LedgerService.find_entries_by_reference(
                partition, reference_type, reference_ids
            )
            if entries:
                LedgerService.entry_model(partition).objects.filter(
                    id__in=[entry.id for entry in entries]
                ).delete()
        return entries
