"""
Tests for PaymentDistributionService.

FIFO allocation across a party's open invoices, the single ledger entry
per batch and the shared payment link id.
"""

import uuid
from decimal import Decimal

import pytest

from core.exceptions import NotFoundError, ValidationError
from invoices.status import InvoiceStatus
from payments.ledger.models import BankbookEntry, CashbookEntry
from payments.models import PaymentMode, PurchasePayment, SalesPayment
from payments.services import PaymentDistributionService
from payments.tests.assertions import assert_books_consistent


def distribute(tenant, side, party, total, mode=PaymentMode.CASH, **kwargs):
    return PaymentDistributionService.distribute(
        tenant_id=tenant.id,
        side=side,
        party_id=party.id,
        total_amount=total,
        payment_mode=mode,
        **kwargs,
    )


class TestFifoAllocation:
    """Oldest invoices are settled first."""

    def test_oldest_invoice_first(self, tenant, bank_account, retailer, sales_invoice):
        older = sales_invoice("300.00", day=1)
        newer = sales_invoice("500.00", day=2)

        result = distribute(
            tenant, "sales", retailer, "400.00", PaymentMode.UPI,
            bank_account_id=bank_account.id,
        )

        older.refresh_from_db()
        newer.refresh_from_db()
        assert result.invoice_ids == [older.id, newer.id]
        assert [p.amount for p in result.payments] == [Decimal("300.00"), Decimal("100.00")]
        assert older.status == InvoiceStatus.PAID
        assert newer.status == InvoiceStatus.PARTIALLY_PAID
        assert newer.udhaar_amount == Decimal("400.00")
        assert result.remaining_amount == Decimal("0.00")
        assert result.party_balance == Decimal("400.00")

    def test_invoice_date_beats_creation_order(self, tenant, vendor, purchase_invoice, opening_cash):
        later = purchase_invoice("200.00", day=5)
        earlier = purchase_invoice("200.00", day=2)

        result = distribute(tenant, "purchase", vendor, "200.00")

        assert result.invoice_ids == [earlier.id]
        later.refresh_from_db()
        assert later.paid_amount == Decimal("0.00")

    def test_same_date_uses_creation_order(self, tenant, vendor, purchase_invoice, opening_cash):
        first = purchase_invoice("100.00", day=3)
        second = purchase_invoice("100.00", day=3)

        result = distribute(tenant, "purchase", vendor, "150.00")

        assert result.invoice_ids == [first.id, second.id]

    def test_settled_invoices_are_skipped(self, tenant, vendor, purchase_invoice, opening_cash):
        from payments.services import PaymentApplicationService

        paid = purchase_invoice("100.00", day=1)
        open_invoice = purchase_invoice("100.00", day=2)
        PaymentApplicationService.apply_payment(
            tenant_id=tenant.id,
            side="purchase",
            invoice_id=paid.id,
            amount="100.00",
            payment_mode=PaymentMode.CASH,
        )

        result = distribute(tenant, "purchase", vendor, "50.00")

        assert result.invoice_ids == [open_invoice.id]

    def test_other_parties_untouched(self, tenant, vendor, purchase_invoice, opening_cash):
        from parties.tests.factories import VendorFactory

        other = VendorFactory(tenant=tenant)
        theirs = purchase_invoice("100.00", party=other)
        ours = purchase_invoice("100.00", day=2)

        result = distribute(tenant, "purchase", vendor, "100.00")

        assert result.invoice_ids == [ours.id]
        theirs.refresh_from_db()
        assert theirs.paid_amount == Decimal("0.00")


class TestRemainder:
    def test_excess_is_returned(self, tenant, vendor, purchase_invoice, opening_cash):
        invoice = purchase_invoice("300.00")

        result = distribute(tenant, "purchase", vendor, "1000.00")

        invoice.refresh_from_db()
        assert invoice.status == InvoiceStatus.PAID
        assert result.distributed_amount == Decimal("300.00")
        assert result.remaining_amount == Decimal("700.00")
        assert result.ledger_entry.outflow == Decimal("300.00")
        tenant.refresh_from_db()
        assert tenant.cash_balance == Decimal("4700.00")

    def test_no_open_invoices(self, tenant, vendor):
        with pytest.raises(ValidationError) as exc_info:
            distribute(tenant, "purchase", vendor, "100.00")

        assert exc_info.value.error_code == "NO_OUTSTANDING_INVOICES"


class TestBatch:
    """One batch: shared link id, one ledger entry."""

    def test_payments_share_link_id(self, tenant, vendor, purchase_invoice, opening_cash):
        purchase_invoice("100.00", day=1)
        purchase_invoice("100.00", day=2)

        result = distribute(tenant, "purchase", vendor, "200.00")

        link_ids = set(
            PurchasePayment.objects.filter(id__in=[p.id for p in result.payments])
            .values_list("payment_link_id", flat=True)
        )
        assert link_ids == {result.payment_link_id}

    def test_caller_link_id_is_used(self, tenant, vendor, purchase_invoice, opening_cash):
        purchase_invoice("100.00")
        link_id = uuid.uuid4()

        result = distribute(tenant, "purchase", vendor, "50.00", payment_link_id=link_id)

        assert result.payment_link_id == link_id
        assert result.payments[0].payment_link_id == link_id

    def test_single_ledger_entry(self, tenant, bank_account, retailer, sales_invoice):
        sales_invoice("300.00", day=1, number="S-A")
        sales_invoice("500.00", day=2, number="S-B")

        result = distribute(
            tenant, "sales", retailer, "800.00", PaymentMode.BANK,
            bank_account_id=bank_account.id,
        )

        entries = BankbookEntry.objects.filter(bank_account=bank_account)
        assert entries.count() == 1
        entry = entries.get()
        assert entry.debit == Decimal("800.00")
        assert entry.reference_id == result.payments[0].id
        assert entry.description == f"Payment from {retailer.name} (S-A, S-B)"
        assert CashbookEntry.objects.count() == 0

    def test_books_consistent(self, tenant, bank_account, retailer, sales_invoice):
        sales_invoice("300.00", day=1)
        sales_invoice("500.00", day=2)
        sales_invoice("250.00", day=3)

        distribute(tenant, "sales", retailer, "600.00", PaymentMode.BANK,
                   bank_account_id=bank_account.id)
        distribute(tenant, "sales", retailer, "100.00")

        assert_books_consistent(tenant)


class TestSalesShortfall:
    def test_gap_written_off_during_distribution(self, tenant, retailer):
        from invoices.tests.factories import SalesInvoiceFactory
        from parties.models import Retailer

        SalesInvoiceFactory(
            retailer=retailer,
            tenant=tenant,
            total_amount=Decimal("500.00"),
            udhaar_amount=Decimal("200.00"),
        )
        Retailer.objects.filter(id=retailer.id).update(
            balance=Decimal("500.00"), udhaar_balance=Decimal("500.00")
        )

        result = distribute(tenant, "sales", retailer, "200.00")

        retailer.refresh_from_db()
        assert result.shortfall_amount == Decimal("300.00")
        assert retailer.udhaar_balance == Decimal("0.00")
        assert retailer.shortfall_balance == Decimal("300.00")
        assert retailer.balance == Decimal("300.00")
        assert SalesPayment.objects.count() == 1


class TestValidation:
    def test_invalid_total(self, tenant, vendor):
        with pytest.raises(ValidationError) as exc_info:
            distribute(tenant, "purchase", vendor, "0.00")

        assert exc_info.value.error_code == "INVALID_AMOUNT"

    def test_unknown_party(self, tenant):
        from parties.tests.factories import VendorFactory

        stranger = VendorFactory()

        with pytest.raises(NotFoundError):
            distribute(tenant, "purchase", stranger, "100.00")

    def test_bank_mode_requires_account(self, tenant, vendor, purchase_invoice):
        purchase_invoice("100.00")

        with pytest.raises(ValidationError) as exc_info:
            distribute(tenant, "purchase", vendor, "100.00", PaymentMode.CHEQUE)

        assert exc_info.value.error_code == "BANK_ACCOUNT_REQUIRED"


class TestResultSerialization:
    def test_to_dict(self, tenant, vendor, purchase_invoice, opening_cash):
        purchase_invoice("100.00")

        data = distribute(tenant, "purchase", vendor, "150.00").to_dict()

        assert data["distributed_amount"] == "100.00"
        assert data["remaining_amount"] == "50.00"
        assert len(data["payment_ids"]) == 1
        assert data["payment_link_id"] is not None
