"""
Pytest fixtures for payment engine tests.

Invoices are created through InvoiceService so party aggregates start in
step with them; cash in hand is seeded through BankingService.

Sections:
    - Invoice Fixtures: builders for purchase and sales invoices
    - Money Fixtures: opening cash and bank balances
"""

import datetime as dt
from decimal import Decimal

import pytest

from banking.services import BankingService
from invoices.services import InvoiceService


# ==========================================================================
# Invoice Fixtures
# ==========================================================================


@pytest.fixture
def purchase_invoice(tenant, vendor):
    """
    Build purchase invoices for the shared vendor.

    Usage:
        invoice = purchase_invoice("1000.00")
        older = purchase_invoice("300.00", day=1, number="P-OLD")
    """
    counter = iter(range(1, 1000))

    def _create(total, day=1, number=None, party=None):
        return InvoiceService.create_purchase_invoice(
            tenant_id=tenant.id,
            vendor_id=(party or vendor).id,
            invoice_number=number or f"P-{next(counter):03d}",
            invoice_date=dt.date(2024, 4, day),
            total_amount=total,
        )

    return _create


@pytest.fixture
def sales_invoice(tenant, retailer):
    """Build sales invoices for the shared retailer."""
    counter = iter(range(1, 1000))

    def _create(total, day=1, number=None, party=None):
        return InvoiceService.create_sales_invoice(
            tenant_id=tenant.id,
            retailer_id=(party or retailer).id,
            invoice_number=number or f"S-{next(counter):03d}",
            invoice_date=dt.date(2024, 4, day),
            total_amount=total,
        )

    return _create


# ==========================================================================
# Money Fixtures
# ==========================================================================


@pytest.fixture
def opening_cash(tenant, at):
    """Tenant starts with 5000.00 cash in hand."""
    BankingService.record_cash_opening_balance(tenant.id, "5000.00", date=at(0))
    tenant.refresh_from_db()
    return Decimal("5000.00")
