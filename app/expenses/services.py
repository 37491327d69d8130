"""
Expense service.

Usage:
    from expenses.services import ExpenseService

    category = ExpenseService.create_category(tenant.id, "Rent")
    expense = ExpenseService.record_expense(
        tenant_id=tenant.id,
        category_id=category.id,
        description="April rent",
        amount="15000.00",
        payment_mode=PaymentMode.BANK,
        bank_account_id=account.id,
    )
    ExpenseService.delete_expense(tenant.id, expense.id)
"""

from __future__ import annotations

import uuid
from datetime import date, datetime
from decimal import Decimal

from core.dates import to_aware_datetime
from core.exceptions import ValidationError
from core.money import format_money
from core.services import BaseService
from core.validators import validate_positive_amount
from payments.ledger import BalanceSynchronizer, LedgerPartition, LedgerService, ReferenceType
from payments.models import PaymentMode
from payments.services.common import get_bank_account, get_locked, validate_mode

from .models import Expense, ExpenseCategory


def _partition(tenant_id, payment_mode: str, bank_account_id) -> LedgerPartition:
    if payment_mode == PaymentMode.CASH:
        return LedgerPartition.cash(tenant_id)
    return LedgerPartition.bank(tenant_id, bank_account_id)


class ExpenseService(BaseService):
    """Expense categories and expenses with their ledger entries."""

    @classmethod
    def create_category(cls, tenant_id: uuid.UUID, name: str) -> ExpenseCategory:
        """
        Create an expense category.

        Raises:
            ValidationError: A category with this name already exists
        """
        name = name.strip()
        if ExpenseCategory.objects.for_tenant(tenant_id).filter(name__iexact=name).exists():
            raise ValidationError(
                f"Expense category {name} already exists",
                error_code="DUPLICATE_CATEGORY",
                details={"name": name},
            )
        return ExpenseCategory.objects.create(tenant_id=tenant_id, name=name)

    @classmethod
    def record_expense(
        cls,
        tenant_id: uuid.UUID,
        category_id: uuid.UUID,
        description: str,
        amount: Decimal | str | int,
        payment_mode: str,
        bank_account_id: uuid.UUID | None = None,
        payment_date: date | datetime | None = None,
    ) -> Expense:
        """
        Record an expense and post it as money out.

        Raises:
            ValidationError: Bad amount or mode, or missing bank account
            NotFoundError: Category or bank account missing
        """
        value = validate_positive_amount(amount)
        validate_mode(payment_mode, bank_account_id)
        if payment_mode == PaymentMode.CASH:
            bank_account_id = None
        payment_date = to_aware_datetime(payment_date)

        with cls.atomic():
            category = get_locked(ExpenseCategory, tenant_id, category_id, "Expense category")
            if bank_account_id is not None:
                get_bank_account(tenant_id, bank_account_id)

            expense = Expense.objects.create(
                tenant_id=tenant_id,
                category=category,
                description=description,
                amount=value,
                payment_mode=payment_mode,
                bank_account_id=bank_account_id,
                payment_date=payment_date,
            )

            partition = _partition(tenant_id, payment_mode, bank_account_id)
            LedgerService.append_entry(
                partition,
                signed_amount=-value,
                reference_type=ReferenceType.EXPENSE,
                reference_id=expense.id,
                date=payment_date,
                description=f"{category.name} - {description}",
            )
            BalanceSynchronizer.sync_partition(
                partition, LedgerService.tail_balance(partition)
            )

        cls.get_logger().info(
            "Expense recorded",
            extra={
                "expense_id": str(expense.id),
                "amount": format_money(value),
                "partition": str(partition),
            },
        )
        return expense

    @classmethod
    def delete_expense(cls, tenant_id: uuid.UUID, expense_id: uuid.UUID) -> bool:
        """
        Delete an expense and its ledger entry.

        Returns:
            True if deleted, False if the expense doesn't exist
        """
        with cls.atomic():
            expense = (
                Expense.objects.for_tenant(tenant_id).locked().filter(pk=expense_id).first()
            )
            if expense is None:
                return False

            partition = _partition(tenant_id, expense.payment_mode, expense.bank_account_id)
            entries = LedgerService.delete_entries_by_reference(
                partition, ReferenceType.EXPENSE, [expense.id]
            )
            expense.delete()
            if entries:
                LedgerService.recompute_running_balances(
                    partition, since=min(entry.date for entry in entries)
                )
            BalanceSynchronizer.sync_partition(
                partition, LedgerService.tail_balance(partition)
            )

        cls.get_logger().info(
            "Expense deleted",
            extra={"expense_id": str(expense_id), "partition": str(partition)},
        )
        return True
