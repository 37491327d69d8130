"""
Payment notification service.

Queues a notice for each payment once the payment's transaction has
committed. Queueing never fails the payment: broker errors are logged
and dropped.

Usage:
    from notifications.services import PaymentNotificationService

    with transaction.atomic():
        ...
        PaymentNotificationService.queue_payment_notification(
            "purchase", [payment.id]
        )
"""

from __future__ import annotations

import uuid
from collections.abc import Iterable

from django.conf import settings
from django.db import transaction

from core.services import BaseService


class PaymentNotificationService(BaseService):
    """Schedules payment notices after commit."""

    @classmethod
    def queue_payment_notification(
        cls,
        side_key: str,
        payment_ids: Iterable[uuid.UUID],
    ) -> bool:
        """
        Enqueue send_payment_notification for each payment on commit.

        Args:
            side_key: "purchase" or "sales"
            payment_ids: Payments to notify about

        Returns:
            True if a hook was registered, False if notifications are off
        """
        if not getattr(settings, "PAYMENT_NOTIFICATIONS_ENABLED", False):
            return False

        ids = [str(payment_id) for payment_id in payment_ids]
        if not ids:
            return False

        transaction.on_commit(lambda: cls._enqueue(side_key, ids))
        return True

    @classmethod
    def _enqueue(cls, side_key: str, payment_ids: list[str]) -> None:
        from notifications import tasks

        for payment_id in payment_ids:
            try:
                tasks.send_payment_notification.delay(side_key, payment_id)
            except Exception:
                cls.get_logger().exception(
                    "Failed to enqueue payment notification",
                    extra={"side": side_key, "payment_id": payment_id},
                )
