"""
Celery tasks for payment notification delivery.

Tasks:
    send_payment_notification: Render and deliver the notice for one payment

Design:
    - Tasks receive the payment id (UUID string), never model instances
    - A payment deleted before the task runs is skipped
    - Connection errors from the backend are retried with backoff

Usage:
    from notifications.tasks import send_payment_notification

    # Called by PaymentNotificationService after commit
    send_payment_notification.delay("sales", "uuid-string")
"""

from __future__ import annotations

import logging

from celery import shared_task

from notifications.backends import get_backend
from notifications.messages import build_payment_message

logger = logging.getLogger(__name__)


@shared_task(
    bind=True,
    autoretry_for=(ConnectionError, TimeoutError),
    retry_backoff=True,
    retry_kwargs={"max_retries": 3},
)
def send_payment_notification(self, side_key: str, payment_id: str) -> bool:
    """
    Deliver the notice for one payment.

    Args:
        side_key: "purchase" or "sales"
        payment_id: UUID string of the payment

    Returns:
        True if delivered, False if skipped
    """
    from payments.strategies import get_side

    side = get_side(side_key)
    payment = (
        side.payment_model.objects.select_related("invoice", side.party_field)
        .filter(id=payment_id)
        .first()
    )
    if payment is None:
        logger.info(f"Payment {payment_id} not found, skipping notification")
        return False

    party = getattr(payment, side.party_field)
    if not party.phone:
        logger.info(f"{party.name} has no phone number, skipping notification")
        return False

    default_name = "Vendor" if side_key == "purchase" else "Customer"
    message = build_payment_message(payment, party, default_name=default_name)
    sent = get_backend().send(message)
    logger.info(f"Payment notification for {payment_id} sent={sent}")
    return sent
