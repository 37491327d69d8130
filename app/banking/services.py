"""
Cash and bank movement service.

Records movements that are not payments: opening balances, deposits
into a bank account and withdrawals from it. Every movement is posted
through LedgerService and the cached balance is re-synced to the tail.

Deposits from cash post two entries sharing one reference id: a
cashbook outflow and a bankbook debit. Cash is always locked before the
bank account.

Usage:
    from banking.services import BankingService

    account = BankingService.create_bank_account(
        tenant_id=tenant.id,
        name="HDFC Current",
        opening_balance="5000.00",
    )
    BankingService.record_deposit(
        tenant_id=tenant.id,
        bank_account_id=account.id,
        amount="1000.00",
        source=DepositSource.CASH,
    )
"""

from __future__ import annotations

import uuid
from datetime import date, datetime
from decimal import Decimal

from core.dates import to_aware_datetime
from core.exceptions import ValidationError
from core.money import ZERO, format_money, to_money
from core.services import BaseService
from core.validators import validate_positive_amount
from payments.ledger import BalanceSynchronizer, LedgerPartition, LedgerService, ReferenceType
from payments.ledger.exceptions import InsufficientBalance
from payments.services.common import get_bank_account

from .models import BankAccount, DepositSource


class BankingService(BaseService):
    """Opening balances, deposits, withdrawals and balance recomputes."""

    @classmethod
    def create_bank_account(
        cls,
        tenant_id: uuid.UUID,
        name: str,
        account_number: str = "",
        bank_name: str = "",
        ifsc_code: str = "",
        opening_balance: Decimal | str | int = ZERO,
        opening_date: date | datetime | None = None,
    ) -> BankAccount:
        """
        Create a bank account, posting a positive opening balance.

        Raises:
            ValidationError: If the opening balance is negative
        """
        opening = to_money(opening_balance)
        if opening < ZERO:
            raise ValidationError(
                "Opening balance must not be negative",
                error_code="INVALID_AMOUNT",
                details={"opening_balance": str(opening_balance)},
            )

        with cls.atomic():
            account = BankAccount.objects.create(
                tenant_id=tenant_id,
                name=name,
                account_number=account_number,
                bank_name=bank_name,
                ifsc_code=ifsc_code,
            )
            if opening > ZERO:
                partition = LedgerPartition.bank(tenant_id, account.id)
                LedgerService.append_entry(
                    partition,
                    signed_amount=opening,
                    reference_type=ReferenceType.OPENING_BALANCE,
                    reference_id=account.id,
                    date=to_aware_datetime(opening_date),
                    description=f"Opening balance - {name}",
                )
                BalanceSynchronizer.sync_partition(
                    partition, LedgerService.tail_balance(partition)
                )
                account.refresh_from_db()

        cls.get_logger().info(
            "Bank account created",
            extra={
                "bank_account_id": str(account.id),
                "opening_balance": format_money(opening),
            },
        )
        return account

    @classmethod
    def record_cash_opening_balance(
        cls,
        tenant_id: uuid.UUID,
        amount: Decimal | str | int,
        date: date | datetime | None = None,
    ) -> Decimal:
        """
        Post the tenant's opening cash in hand.

        Returns:
            The cash balance after the entry
        """
        value = validate_positive_amount(amount)
        partition = LedgerPartition.cash(tenant_id)

        with cls.atomic():
            LedgerService.append_entry(
                partition,
                signed_amount=value,
                reference_type=ReferenceType.OPENING_BALANCE,
                reference_id=None,
                date=to_aware_datetime(date),
                description="Opening cash balance",
            )
            balance = BalanceSynchronizer.sync_partition(
                partition, LedgerService.tail_balance(partition)
            )
        return balance

    @classmethod
    def record_deposit(
        cls,
        tenant_id: uuid.UUID,
        bank_account_id: uuid.UUID,
        amount: Decimal | str | int,
        date: date | datetime | None = None,
        description: str = "",
        source: str = DepositSource.EXTERNAL,
    ) -> Decimal:
        """
        Deposit money into a bank account.

        Args:
            tenant_id: Owning tenant
            bank_account_id: Account receiving the money
            amount: Amount deposited (must be positive)
            date: Business date or datetime, normalized by
                to_aware_datetime() (defaults to now)
            description: Free text for the bankbook entry
            source: "cash" moves money out of the cashbook, "external"
                only credits the bank

        Returns:
            The bank account balance after the deposit

        Raises:
            ValidationError: Bad amount or source
            InsufficientBalance: A cash deposit exceeds cash in hand
            NotFoundError: Bank account missing
        """
        value = validate_positive_amount(amount)
        if source not in DepositSource.values:
            raise ValidationError(
                f"Unknown deposit source: {source}",
                error_code="INVALID_DEPOSIT_SOURCE",
                details={"source": source, "supported": DepositSource.values},
            )
        date = to_aware_datetime(date)
        transfer_id = uuid.uuid4()
        bank = LedgerPartition.bank(tenant_id, bank_account_id)

        with cls.atomic():
            account = get_bank_account(tenant_id, bank_account_id)

            if source == DepositSource.CASH:
                cash = LedgerPartition.cash(tenant_id)
                LedgerService.lock_partition(cash)
                available = LedgerService.tail_balance(cash)
                if available < value:
                    raise InsufficientBalance(cash, required=value, available=available)
                LedgerService.append_entry(
                    cash,
                    signed_amount=-value,
                    reference_type=ReferenceType.BANK_DEPOSIT,
                    reference_id=transfer_id,
                    date=date,
                    description=f"Transfer to Bank - {account.name}",
                )
                BalanceSynchronizer.sync_partition(cash, LedgerService.tail_balance(cash))
                description = f"Deposit from Cash - {description}".rstrip(" -")

            LedgerService.append_entry(
                bank,
                signed_amount=value,
                reference_type=ReferenceType.BANK_DEPOSIT,
                reference_id=transfer_id,
                date=date,
                description=description or "Deposit",
            )
            balance = BalanceSynchronizer.sync_partition(
                bank, LedgerService.tail_balance(bank)
            )

        cls.get_logger().info(
            "Bank deposit recorded",
            extra={
                "bank_account_id": str(bank_account_id),
                "amount": format_money(value),
                "source": source,
            },
        )
        return balance

    @classmethod
    def record_withdrawal(
        cls,
        tenant_id: uuid.UUID,
        bank_account_id: uuid.UUID,
        amount: Decimal | str | int,
        date: date | datetime | None = None,
        description: str = "",
    ) -> Decimal:
        """
        Withdraw money from a bank account.

        Returns:
            The bank account balance after the withdrawal

        Raises:
            InsufficientBalance: The withdrawal would overdraw the account
            NotFoundError: Bank account missing
        """
        value = validate_positive_amount(amount)
        bank = LedgerPartition.bank(tenant_id, bank_account_id)

        with cls.atomic():
            get_bank_account(tenant_id, bank_account_id)
            LedgerService.lock_partition(bank)
            available = LedgerService.tail_balance(bank)
            if available < value:
                raise InsufficientBalance(bank, required=value, available=available)

            LedgerService.append_entry(
                bank,
                signed_amount=-value,
                reference_type=ReferenceType.BANK_WITHDRAWAL,
                reference_id=uuid.uuid4(),
                date=to_aware_datetime(date),
                description=description or "Withdrawal",
            )
            balance = BalanceSynchronizer.sync_partition(
                bank, LedgerService.tail_balance(bank)
            )

        cls.get_logger().info(
            "Bank withdrawal recorded",
            extra={"bank_account_id": str(bank_account_id), "amount": format_money(value)},
        )
        return balance

    @classmethod
    def recalculate_bank_account_balance(
        cls, tenant_id: uuid.UUID, bank_account_id: uuid.UUID
    ) -> Decimal:
        """Recompute a bankbook from its first entry and resync the account."""
        partition = LedgerPartition.bank(tenant_id, bank_account_id)
        with cls.atomic():
            tail = LedgerService.recompute_running_balances(partition)
            return BalanceSynchronizer.sync_partition(partition, tail)

    @classmethod
    def recalculate_cash_balance(cls, tenant_id: uuid.UUID) -> Decimal:
        """Recompute the cashbook from its first entry and resync the tenant."""
        partition = LedgerPartition.cash(tenant_id)
        with cls.atomic():
            tail = LedgerService.recompute_running_balances(partition)
            return BalanceSynchronizer.sync_partition(partition, tail)
