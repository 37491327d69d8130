"""Unit tests for invoice status derivation."""

from decimal import Decimal

import pytest

from invoices.status import InvoiceStatus, resolve_status


class TestResolveStatus:
    @pytest.mark.parametrize(
        "outstanding,paid,expected",
        [
            ("1000.00", "0.00", InvoiceStatus.UNPAID),
            ("600.00", "400.00", InvoiceStatus.PARTIALLY_PAID),
            ("0.00", "1000.00", InvoiceStatus.PAID),
            ("0.005", "999.995", InvoiceStatus.PAID),
            ("0.01", "999.99", InvoiceStatus.PARTIALLY_PAID),
            ("100.00", "0.005", InvoiceStatus.UNPAID),
        ],
    )
    def test_rule(self, outstanding, paid, expected):
        assert resolve_status(Decimal(outstanding), Decimal(paid)) == expected

    def test_settled_wins_over_unpaid(self):
        """An invoice force-paid with nothing received is still Paid."""
        assert resolve_status(Decimal("0.00"), Decimal("0.00")) == InvoiceStatus.PAID

    def test_values_are_stored_verbatim(self):
        assert InvoiceStatus.PARTIALLY_PAID == "Partially Paid"
