"""Tests for cashbook and bankbook entry models."""

from decimal import Decimal

from payments.ledger.models import BankbookEntry, CashbookEntry
from payments.ledger.types import LedgerPartition


class TestSplitAmount:
    """Signed amounts map onto the in/out columns of each book."""

    def test_cash_inflow(self):
        assert CashbookEntry.split_amount(Decimal("50.00")) == {
            "inflow": Decimal("50.00"),
            "outflow": Decimal("0.00"),
        }

    def test_cash_outflow(self):
        assert CashbookEntry.split_amount(Decimal("-50.00")) == {
            "inflow": Decimal("0.00"),
            "outflow": Decimal("50.00"),
        }

    def test_bank_debit_is_money_in(self):
        assert BankbookEntry.split_amount(Decimal("75.00"))["debit"] == Decimal("75.00")
        assert BankbookEntry.split_amount(Decimal("-75.00"))["credit"] == Decimal("75.00")


class TestSignedAmount:
    def test_cashbook_signed_amount(self):
        entry = CashbookEntry(inflow=Decimal("0.00"), outflow=Decimal("20.00"))
        assert entry.signed_amount == Decimal("-20.00")
        assert entry.amount == Decimal("20.00")

    def test_bankbook_signed_amount(self):
        entry = BankbookEntry(debit=Decimal("30.00"), credit=Decimal("0.00"))
        assert entry.signed_amount == Decimal("30.00")


class TestLedgerPartition:
    def test_cash_partition(self, tenant):
        partition = LedgerPartition.cash(tenant.id)
        assert partition.is_cash
        assert str(partition) == f"cashbook:{tenant.id}"

    def test_bank_partition(self, tenant, bank_account):
        partition = LedgerPartition.bank(tenant.id, bank_account.id)
        assert not partition.is_cash
        assert str(partition).startswith("bankbook:")

    def test_partitions_are_hashable_values(self, tenant):
        assert LedgerPartition.cash(tenant.id) == LedgerPartition.cash(tenant.id)
        assert len({LedgerPartition.cash(tenant.id), LedgerPartition.cash(tenant.id)}) == 1
