"""Django admin configuration for bank accounts."""

from django.contrib import admin

from .models import BankAccount


@admin.register(BankAccount)
class BankAccountAdmin(admin.ModelAdmin):
    """Balance mirrors the bankbook and is read-only here."""

    list_display = ["name", "bank_name", "account_number", "tenant", "balance", "is_active"]
    list_filter = ["is_active", "tenant"]
    search_fields = ["name", "account_number", "bank_name"]
    readonly_fields = ["id", "balance", "created_at", "updated_at"]
