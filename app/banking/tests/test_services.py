"""
Tests for BankingService.

Opening balances, deposits (external and from cash), withdrawals and
full balance recomputes.
"""

import datetime as dt
import uuid
from decimal import Decimal

import pytest

from banking.models import BankAccount, DepositSource
from banking.services import BankingService
from core.exceptions import NotFoundError, ValidationError
from payments.ledger import LedgerPartition, LedgerService, ReferenceType
from payments.ledger.exceptions import InsufficientBalance
from payments.ledger.models import BankbookEntry, CashbookEntry


class TestCreateBankAccount:
    def test_opening_balance_posted(self, tenant, at):
        account = BankingService.create_bank_account(
            tenant_id=tenant.id,
            name="SBI Savings",
            opening_balance="5000.00",
            opening_date=at(8),
        )

        entry = BankbookEntry.objects.get(bank_account=account)
        assert account.balance == Decimal("5000.00")
        assert entry.reference_type == ReferenceType.OPENING_BALANCE
        assert entry.reference_id == account.id
        assert entry.description == "Opening balance - SBI Savings"

    def test_zero_opening_balance_posts_nothing(self, tenant):
        account = BankingService.create_bank_account(tenant_id=tenant.id, name="Empty")

        assert account.balance == Decimal("0.00")
        assert not BankbookEntry.objects.exists()

    def test_negative_opening_balance(self, tenant):
        with pytest.raises(ValidationError) as exc_info:
            BankingService.create_bank_account(
                tenant_id=tenant.id, name="Broken", opening_balance="-1.00"
            )

        assert exc_info.value.error_code == "INVALID_AMOUNT"
        assert not BankAccount.objects.exists()


class TestCashOpeningBalance:
    def test_returns_cash_balance(self, tenant, at):
        balance = BankingService.record_cash_opening_balance(tenant.id, "2500.00", date=at(6))

        tenant.refresh_from_db()
        assert balance == Decimal("2500.00")
        assert tenant.cash_balance == Decimal("2500.00")
        assert CashbookEntry.objects.get().inflow == Decimal("2500.00")

    def test_accepts_plain_date(self, tenant, at):
        BankingService.record_cash_opening_balance(
            tenant.id, "2500.00", date=dt.date(2024, 4, 1)
        )
        BankingService.record_cash_opening_balance(tenant.id, "500.00", date=at(6))

        entries = list(CashbookEntry.objects.order_by("date"))
        assert entries[0].date == at(0)
        assert [e.balance for e in entries] == [Decimal("2500.00"), Decimal("3000.00")]


class TestDeposit:
    def test_external_deposit(self, tenant, bank_account, at):
        balance = BankingService.record_deposit(
            tenant.id, bank_account.id, "1000.00", date=at(10), description="Loan"
        )

        assert balance == Decimal("1000.00")
        assert BankbookEntry.objects.get().description == "Loan"
        assert not CashbookEntry.objects.exists()

    def test_cash_deposit_moves_money(self, tenant, bank_account, at):
        BankingService.record_cash_opening_balance(tenant.id, "3000.00", date=at(6))

        BankingService.record_deposit(
            tenant.id,
            bank_account.id,
            "1200.00",
            date=at(10),
            description="Counter",
            source=DepositSource.CASH,
        )

        tenant.refresh_from_db()
        bank_account.refresh_from_db()
        cash_entry = CashbookEntry.objects.get(reference_type=ReferenceType.BANK_DEPOSIT)
        bank_entry = BankbookEntry.objects.get()
        assert tenant.cash_balance == Decimal("1800.00")
        assert bank_account.balance == Decimal("1200.00")
        assert cash_entry.reference_id == bank_entry.reference_id
        assert cash_entry.description == "Transfer to Bank - HDFC Current"
        assert bank_entry.description == "Deposit from Cash - Counter"

    def test_cash_deposit_without_description(self, tenant, bank_account, at):
        BankingService.record_cash_opening_balance(tenant.id, "100.00", date=at(6))

        BankingService.record_deposit(
            tenant.id, bank_account.id, "100.00", date=at(10), source=DepositSource.CASH
        )

        assert BankbookEntry.objects.get().description == "Deposit from Cash"

    def test_cash_deposit_over_cash_in_hand(self, tenant, bank_account, at):
        BankingService.record_cash_opening_balance(tenant.id, "100.00", date=at(6))

        with pytest.raises(InsufficientBalance) as exc_info:
            BankingService.record_deposit(
                tenant.id, bank_account.id, "100.01", source=DepositSource.CASH
            )

        assert exc_info.value.error_code == "INSUFFICIENT_BALANCE"
        assert exc_info.value.details["available"] == "100.00"
        assert not BankbookEntry.objects.exists()

    def test_unknown_source(self, tenant, bank_account):
        with pytest.raises(ValidationError) as exc_info:
            BankingService.record_deposit(tenant.id, bank_account.id, "1.00", source="gift")

        assert exc_info.value.error_code == "INVALID_DEPOSIT_SOURCE"

    def test_unknown_account(self, tenant):
        with pytest.raises(NotFoundError):
            BankingService.record_deposit(tenant.id, uuid.uuid4(), "1.00")


class TestWithdrawal:
    def test_withdrawal(self, tenant, bank_account, at):
        BankingService.record_deposit(tenant.id, bank_account.id, "500.00", date=at(9))

        balance = BankingService.record_withdrawal(
            tenant.id, bank_account.id, "200.00", date=at(10)
        )

        entry = BankbookEntry.objects.get(reference_type=ReferenceType.BANK_WITHDRAWAL)
        assert balance == Decimal("300.00")
        assert entry.credit == Decimal("200.00")
        assert entry.description == "Withdrawal"

    def test_overdraw(self, tenant, bank_account):
        with pytest.raises(InsufficientBalance):
            BankingService.record_withdrawal(tenant.id, bank_account.id, "1.00")


class TestRecalculate:
    def test_bank_balance_repaired(self, tenant, bank_account, at):
        BankingService.record_deposit(tenant.id, bank_account.id, "500.00", date=at(9))
        BankAccount.objects.filter(id=bank_account.id).update(balance=Decimal("1.00"))
        BankbookEntry.objects.update(balance=Decimal("9.99"))

        balance = BankingService.recalculate_bank_account_balance(tenant.id, bank_account.id)

        bank_account.refresh_from_db()
        assert balance == Decimal("500.00")
        assert bank_account.balance == Decimal("500.00")
        assert BankbookEntry.objects.get().balance == Decimal("500.00")

    def test_cash_balance_repaired(self, tenant, at):
        BankingService.record_cash_opening_balance(tenant.id, "700.00", date=at(6))
        tenant.__class__.objects.filter(id=tenant.id).update(cash_balance=Decimal("0.00"))

        balance = BankingService.recalculate_cash_balance(tenant.id)

        assert balance == Decimal("700.00")
        assert LedgerService.tail_balance(LedgerPartition.cash(tenant.id)) == Decimal("700.00")
