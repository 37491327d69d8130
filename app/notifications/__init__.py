"""
Notifications app for payment notices to vendors and retailers.

This app provides:
- PaymentNotificationService for queueing notices after a payment commits
- A Celery task that renders and delivers the notice
- Pluggable delivery backends selected by PAYMENT_NOTIFICATION_BACKEND

Usage:
    from notifications.services import PaymentNotificationService

    # Inside the payment transaction; the task runs after commit
    PaymentNotificationService.queue_payment_notification("sales", [payment.id])
"""
