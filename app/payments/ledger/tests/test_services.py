"""
Tests for LedgerService.

This module tests appends (including back-dated ones), running-balance
recomputes and reference lookups on cashbook and bankbook partitions.
"""

import uuid
from decimal import Decimal

import pytest

from core.exceptions import NotFoundError, ValidationError
from payments.ledger import LedgerPartition, LedgerService, ReferenceType
from payments.ledger.models import BankbookEntry, CashbookEntry


def balances(partition):
    return [
        entry.balance
        for entry in LedgerService.entries(partition).order_by("date", "id")
    ]


class TestAppendEntry:
    """Tests for LedgerService.append_entry()."""

    def test_first_entry_balance_is_its_amount(self, cash, append, at):
        entry = append(cash, "100.00", at(9))

        assert isinstance(entry, CashbookEntry)
        assert entry.balance == Decimal("100.00")
        assert entry.inflow == Decimal("100.00")

    def test_running_balance_accumulates(self, cash, append, at):
        append(cash, "100.00", at(9))
        append(cash, "-30.00", at(10))
        last = append(cash, "5.50", at(11))

        assert last.balance == Decimal("75.50")
        assert balances(cash) == [Decimal("100.00"), Decimal("70.00"), Decimal("75.50")]

    def test_bank_entries_use_debit_and_credit(self, bank, append, at):
        entry = append(bank, "-40.00", at(9))

        assert isinstance(entry, BankbookEntry)
        assert entry.credit == Decimal("40.00")
        assert entry.balance == Decimal("-40.00")

    def test_zero_amount_rejected(self, cash, append, at):
        with pytest.raises(ValidationError):
            append(cash, "0.00", at(9))

    def test_missing_bank_account_raises(self, tenant, append, at):
        partition = LedgerPartition.bank(tenant.id, uuid.uuid4())

        with pytest.raises(NotFoundError):
            append(partition, "10.00", at(9))

    def test_partitions_are_independent(self, cash, bank, append, at):
        append(cash, "100.00", at(9))
        append(bank, "500.00", at(9))
        append(cash, "-20.00", at(10))

        assert LedgerService.tail_balance(cash) == Decimal("80.00")
        assert LedgerService.tail_balance(bank) == Decimal("500.00")

    def test_same_date_orders_by_insertion(self, cash, append, at):
        append(cash, "10.00", at(9))
        second = append(cash, "20.00", at(9))

        assert second.balance == Decimal("30.00")
        assert LedgerService.tail_entry(cash).id == second.id


class TestBackDatedAppend:
    """An entry dated before the tail is slotted in and the suffix rewritten."""

    def test_suffix_recomputed(self, cash, append, at):
        append(cash, "100.00", at(10))
        append(cash, "-30.00", at(12))

        inserted = append(cash, "50.00", at(11))

        assert inserted.balance == Decimal("150.00")
        assert balances(cash) == [Decimal("100.00"), Decimal("150.00"), Decimal("120.00")]
        assert LedgerService.tail_balance(cash) == Decimal("120.00")

    def test_before_first_entry(self, cash, append, at):
        append(cash, "100.00", at(10))

        inserted = append(cash, "-25.00", at(8))

        assert inserted.balance == Decimal("-25.00")
        assert balances(cash) == [Decimal("-25.00"), Decimal("75.00")]


class TestRecomputeRunningBalances:
    """Tests for LedgerService.recompute_running_balances()."""

    def test_empty_partition_is_zero(self, cash):
        assert LedgerService.recompute_running_balances(cash) == Decimal("0.00")

    def test_repairs_corrupted_balances(self, cash, append, at):
        append(cash, "100.00", at(9))
        append(cash, "-40.00", at(10))
        CashbookEntry.objects.update(balance=Decimal("999.99"))

        tail = LedgerService.recompute_running_balances(cash)

        assert tail == Decimal("60.00")
        assert balances(cash) == [Decimal("100.00"), Decimal("60.00")]

    def test_suffix_recompute_matches_full_recompute(self, cash, append, at):
        amounts = ["100.00", "-20.00", "35.25", "-10.00", "7.75", "-50.00"]
        refs = [uuid.uuid4() for _ in amounts]
        for hour, (amount, ref) in enumerate(zip(amounts, refs), start=8):
            append(cash, amount, at(hour), ReferenceType.PAYMENT, ref)

        removed = LedgerService.delete_entries_by_reference(cash, ReferenceType.PAYMENT, [refs[2]])
        suffix_tail = LedgerService.recompute_running_balances(cash, since=removed[0].date)
        after_suffix = balances(cash)

        full_tail = LedgerService.recompute_running_balances(cash)

        assert suffix_tail == full_tail == Decimal("27.75")
        assert balances(cash) == after_suffix

    def test_continuity_holds_after_recompute(self, bank, append, at):
        for hour, amount in enumerate(["10.00", "20.00", "-5.00", "12.34"], start=8):
            append(bank, amount, at(hour))

        LedgerService.recompute_running_balances(bank)

        previous = Decimal("0.00")
        for entry in LedgerService.entries(bank).order_by("date", "id"):
            assert entry.balance == previous + entry.signed_amount
            previous = entry.balance


class TestReferences:
    """Tests for finding and deleting entries by their originating record."""

    def test_find_is_scoped_to_partition(self, cash, bank, append, at):
        ref = uuid.uuid4()
        append(cash, "10.00", at(9), ReferenceType.PAYMENT, ref)
        append(bank, "10.00", at(9), ReferenceType.PAYMENT, ref)

        found = LedgerService.find_entries_by_reference(cash, ReferenceType.PAYMENT, [ref])

        assert len(found) == 1
        assert isinstance(found[0], CashbookEntry)

    def test_find_matches_reference_type(self, cash, append, at):
        ref = uuid.uuid4()
        append(cash, "10.00", at(9), ReferenceType.EXPENSE, ref)

        assert LedgerService.find_entries_by_reference(cash, ReferenceType.PAYMENT, [ref]) == []

    def test_delete_returns_removed_entries(self, cash, append, at):
        ref = uuid.uuid4()
        append(cash, "10.00", at(9))
        append(cash, "15.00", at(10), ReferenceType.SALES_PAYMENT, ref)

        removed = LedgerService.delete_entries_by_reference(cash, ReferenceType.SALES_PAYMENT, [ref])

        assert [entry.reference_id for entry in removed] == [ref]
        assert CashbookEntry.objects.count() == 1

    def test_delete_unknown_reference_is_noop(self, cash, append, at):
        append(cash, "10.00", at(9))

        removed = LedgerService.delete_entries_by_reference(
            cash, ReferenceType.PAYMENT, [uuid.uuid4()]
        )

        assert removed == []
        assert CashbookEntry.objects.count() == 1

    def test_partition_of(self, cash, bank, append, at):
        assert LedgerService.partition_of(append(cash, "1.00", at(9))) == cash
        assert LedgerService.partition_of(append(bank, "1.00", at(9))) == bank
