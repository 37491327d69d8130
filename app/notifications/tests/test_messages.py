"""Unit tests for payment notice rendering."""

import datetime as dt
from decimal import Decimal
from types import SimpleNamespace

from notifications.messages import MAX_NAME_LENGTH, build_payment_message, truncate


def make_payment(**overrides):
    values = {
        "invoice": SimpleNamespace(invoice_number="S-1001"),
        "amount": Decimal("1250.5"),
        "payment_date": dt.datetime(2024, 4, 3, 10, 30),
        "payment_mode": "UPI",
    }
    values.update(overrides)
    return SimpleNamespace(**values)


class TestBuildPaymentMessage:
    def test_fields(self):
        party = SimpleNamespace(name="Gupta Stores", phone="9800000001")

        message = build_payment_message(make_payment(), party)

        assert message.recipient_name == "Gupta Stores"
        assert message.phone == "9800000001"
        assert message.invoice_number == "S-1001"
        assert message.amount == "1250.50"
        assert message.payment_date == "03 Apr 2024"
        assert message.payment_mode == "UPI"

    def test_body(self):
        party = SimpleNamespace(name="Gupta Stores", phone="9800000001")

        body = build_payment_message(make_payment(), party).body

        assert "Rs. 1250.50" in body
        assert "invoice S-1001" in body
        assert body.startswith("Dear Gupta Stores,")

    def test_blank_name_uses_default(self):
        party = SimpleNamespace(name="", phone="9800000001")

        message = build_payment_message(make_payment(), party, default_name="Vendor")

        assert message.recipient_name == "Vendor"


class TestTruncate:
    def test_short_text_unchanged(self):
        assert truncate("Shree Traders") == "Shree Traders"

    def test_long_text_is_cut(self):
        text = "x" * (MAX_NAME_LENGTH + 10)

        result = truncate(text)

        assert len(result) == MAX_NAME_LENGTH
        assert result.endswith("...")
