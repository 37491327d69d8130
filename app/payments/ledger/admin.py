"""
Django admin configuration for cashbook and bankbook entries.

Ledger entries are read-only in the admin: running balances are only
consistent when every write goes through LedgerService.
"""

from django.contrib import admin

from .models import BankbookEntry, CashbookEntry


class ReadOnlyLedgerAdmin(admin.ModelAdmin):
    """Disables add, change and delete for ledger entries."""

    date_hierarchy = "date"
    list_filter = ["reference_type", "tenant"]
    search_fields = ["description", "reference_id"]
    ordering = ["-date", "-id"]

    def has_add_permission(self, request) -> bool:
        return False

    def has_change_permission(self, request, obj=None) -> bool:
        return False

    def has_delete_permission(self, request, obj=None) -> bool:
        return False


@admin.register(CashbookEntry)
class CashbookEntryAdmin(ReadOnlyLedgerAdmin):
    list_display = [
        "id",
        "date",
        "tenant",
        "description",
        "inflow",
        "outflow",
        "balance",
        "reference_type",
    ]


@admin.register(BankbookEntry)
class BankbookEntryAdmin(ReadOnlyLedgerAdmin):
    list_display = [
        "id",
        "date",
        "bank_account",
        "description",
        "debit",
        "credit",
        "balance",
        "reference_type",
    ]
    list_filter = ["reference_type", "bank_account"]
