"""Tests for the payment notification Celery task."""

import datetime as dt
import uuid

import pytest

from invoices.services import InvoiceService
from notifications.backends import LocMemBackend
from notifications.tasks import send_payment_notification
from payments.models import PaymentMode
from payments.services import PaymentApplicationService


@pytest.fixture(autouse=True)
def outbox(settings):
    settings.PAYMENT_NOTIFICATION_BACKEND = "notifications.backends.LocMemBackend"
    LocMemBackend.outbox.clear()
    yield LocMemBackend.outbox
    LocMemBackend.outbox.clear()


@pytest.fixture
def purchase_payment(tenant, vendor, at):
    invoice = InvoiceService.create_purchase_invoice(
        tenant_id=tenant.id,
        vendor_id=vendor.id,
        invoice_number="P-55",
        invoice_date=dt.date(2024, 4, 1),
        total_amount="500.00",
    )
    return PaymentApplicationService.apply_payment(
        tenant_id=tenant.id,
        side="purchase",
        invoice_id=invoice.id,
        amount="200.00",
        payment_mode=PaymentMode.CASH,
        payment_date=at(10, day=5),
    ).payment


class TestSendPaymentNotification:
    def test_is_shared_task(self):
        assert hasattr(send_payment_notification, "delay")
        assert callable(send_payment_notification.delay)

    def test_delivers_message(self, purchase_payment, outbox):
        sent = send_payment_notification("purchase", str(purchase_payment.id))

        assert sent is True
        assert len(outbox) == 1
        message = outbox[0]
        assert message.recipient_name == "Shree Traders"
        assert message.invoice_number == "P-55"
        assert message.amount == "200.00"
        assert message.payment_date == "05 Apr 2024"

    def test_missing_payment_skipped(self, db, outbox):
        assert send_payment_notification("sales", str(uuid.uuid4())) is False
        assert outbox == []

    def test_party_without_phone_skipped(self, purchase_payment, vendor, outbox):
        vendor.__class__.objects.filter(id=vendor.id).update(phone="")

        assert send_payment_notification("purchase", str(purchase_payment.id)) is False
        assert outbox == []
