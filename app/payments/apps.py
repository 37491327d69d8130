"""
Payments app configuration.

This app provides the payment engine:
- Single-invoice payment application
- Bulk FIFO distribution and batch reversal
- Running-balance cashbook and bankbook ledgers
"""

from django.apps import AppConfig


class PaymentsConfig(AppConfig):
    """Configuration for the payments application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "payments"
    verbose_name = "Payments"
