"""Django app configuration for banking."""

from django.apps import AppConfig


class BankingConfig(AppConfig):
    """Configuration for the banking app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "banking"
    verbose_name = "Banking"
