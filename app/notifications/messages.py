"""
Rendering of payment notices.

One message per payment: who paid or was paid, which invoice, how much,
when and how.
"""

from __future__ import annotations

from dataclasses import dataclass

from core.money import format_money

MAX_NAME_LENGTH = 50


@dataclass(frozen=True)
class PaymentMessage:
    """A rendered payment notice."""

    recipient_name: str
    phone: str
    invoice_number: str
    amount: str
    payment_date: str
    payment_mode: str

    @property
    def body(self) -> str:
        return (
            f"Dear {self.recipient_name}, payment of Rs. {self.amount} "
            f"against invoice {self.invoice_number} was recorded on "
            f"{self.payment_date} ({self.payment_mode})."
        )


def truncate(text: str, max_length: int = MAX_NAME_LENGTH) -> str:
    if len(text) <= max_length:
        return text
    return text[: max_length - 3] + "..."


def build_payment_message(payment, party, default_name: str = "Customer") -> PaymentMessage:
    """Render the notice for a payment and its vendor or retailer."""
    return PaymentMessage(
        recipient_name=truncate(party.name or default_name),
        phone=party.phone,
        invoice_number=payment.invoice.invoice_number,
        amount=format_money(payment.amount),
        payment_date=payment.payment_date.strftime("%d %b %Y"),
        payment_mode=payment.payment_mode,
    )
