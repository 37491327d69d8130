"""
Denormalized balance synchronization.

Tenant.cash_balance and BankAccount.balance mirror their ledger
partition's tail; vendor and retailer aggregates mirror the sum of their
invoices' outstanding amounts. BalanceSynchronizer is the only writer of
these columns.

Two write modes:
    set_balance: overwrite with an exact value (after append/recompute)
    apply_delta: single-statement ``field = field + delta`` increment

Both fail loudly with NotFoundError when the target row does not exist.

Usage:
    from payments.ledger.balances import BalanceSynchronizer
    from payments.ledger.types import BalanceTarget

    BalanceSynchronizer.apply_delta(
        BalanceTarget(Vendor, vendor.id, "balance", tenant_id=tenant.id),
        Decimal("-250.00"),
    )
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING

from django.db.models import F
from django.utils import timezone

from banking.models import BankAccount
from core.exceptions import NotFoundError
from core.money import to_money
from core.services import BaseService
from tenants.models import Tenant

from .types import BalanceTarget

if TYPE_CHECKING:
    import uuid

    from django.db import models

    from .types import LedgerPartition


class BalanceSynchronizer(BaseService):
    """
    Writes denormalized balance columns.

    All methods issue a single UPDATE statement and check the affected
    row count.
    """

    @staticmethod
    def partition_target(partition: LedgerPartition) -> BalanceTarget:
        """Return the column mirroring a ledger partition's tail."""
        if partition.is_cash:
            return BalanceTarget(Tenant, partition.tenant_id, "cash_balance")
        return BalanceTarget(
            BankAccount,
            partition.bank_account_id,
            "balance",
            tenant_id=partition.tenant_id,
        )

    @classmethod
    def set_balance(cls, target: BalanceTarget, value: Decimal | str | int) -> Decimal:
        """
        Overwrite a balance column.

        Args:
            target: Row and column to write
            value: New balance

        Returns:
            The value written

        Raises:
            NotFoundError: If the target row does not exist
        """
        amount = to_money(value)
        cls._update(target, {target.field: amount})
        return amount

    @classmethod
    def apply_delta(cls, target: BalanceTarget, delta: Decimal | str | int) -> None:
        """
        Atomically add delta to a balance column.

        Args:
            target: Row and column to increment
            delta: Signed amount to add

        Raises:
            NotFoundError: If the target row does not exist
        """
        cls.apply_deltas(
            target.model,
            target.pk,
            {target.field: delta},
            tenant_id=target.tenant_id,
        )

    @classmethod
    def apply_deltas(
        cls,
        model: type[models.Model],
        pk: uuid.UUID | int,
        deltas: dict[str, Decimal | str | int],
        tenant_id: uuid.UUID | None = None,
    ) -> None:
        """
        Atomically increment several columns of one row in one statement.

        Zero deltas are dropped; if nothing is left the row is still
        checked for existence.

        Raises:
            NotFoundError: If the target row does not exist
        """
        values = {
            field: F(field) + to_money(delta)
            for field, delta in deltas.items()
            if to_money(delta) != 0
        }
        target = BalanceTarget(model, pk, ",".join(deltas), tenant_id=tenant_id)
        if not values:
            if not cls._queryset(target).exists():
                cls._missing(target)
            return
        cls._update(target, values)

    @classmethod
    def sync_partition(cls, partition: LedgerPartition, value: Decimal) -> Decimal:
        """Set the tenant cash or bank account balance to a partition tail."""
        return cls.set_balance(cls.partition_target(partition), value)

    @staticmethod
    def _queryset(target: BalanceTarget):
        qs = target.model._default_manager.filter(pk=target.pk)
        if target.tenant_id is not None:
            qs = qs.filter(tenant_id=target.tenant_id)
        return qs

    @classmethod
    def _update(cls, target: BalanceTarget, values: dict) -> None:
        if any(f.name == "updated_at" for f in target.model._meta.get_fields()):
            values = {**values, "updated_at": timezone.now()}
        updated = cls._queryset(target).update(**values)
        if updated == 0:
            cls._missing(target)

    @classmethod
    def _missing(cls, target: BalanceTarget) -> None:
        cls.get_logger().error(
            "Balance target row missing",
            extra={"target": str(target)},
        )
        raise NotFoundError(
            f"{target.model.__name__} {target.pk} not found",
            details={"model": target.model.__name__, "pk": str(target.pk)},
        )
