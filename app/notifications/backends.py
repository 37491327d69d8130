"""
Delivery backends for payment notifications.

A backend takes a rendered PaymentMessage and hands it to a channel.
The active backend is named by the PAYMENT_NOTIFICATION_BACKEND setting
as a dotted path, the same way Django picks its EMAIL_BACKEND.

Backends:
    LoggingBackend: Writes the message to the log (development default)
    LocMemBackend: Keeps messages in memory (tests)
"""

from __future__ import annotations

import logging

from django.conf import settings
from django.utils.module_loading import import_string

from notifications.messages import PaymentMessage

logger = logging.getLogger(__name__)


class BaseNotificationBackend:
    """Base class for delivery backends."""

    def send(self, message: PaymentMessage) -> bool:
        """
        Deliver one message.

        Returns:
            True if the message was handed to the channel
        """
        raise NotImplementedError


class LoggingBackend(BaseNotificationBackend):
    """Writes messages to the log instead of sending them."""

    def send(self, message: PaymentMessage) -> bool:
        logger.info(
            "Payment notification",
            extra={
                "recipient": message.recipient_name,
                "phone": message.phone,
                "body": message.body,
            },
        )
        return True


class LocMemBackend(BaseNotificationBackend):
    """Collects messages in LocMemBackend.outbox."""

    outbox: list[PaymentMessage] = []

    def send(self, message: PaymentMessage) -> bool:
        LocMemBackend.outbox.append(message)
        return True


def get_backend() -> BaseNotificationBackend:
    """Instantiate the configured backend."""
    path = getattr(
        settings,
        "PAYMENT_NOTIFICATION_BACKEND",
        "notifications.backends.LoggingBackend",
    )
    return import_string(path)()
