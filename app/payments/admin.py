"""
Payment admin configuration.

This file imports admin configurations from the ledger submodule
and registers purchase and sales payments with the Django admin.

Payments are created and deleted through the payment services only, so
the admin is read-only.
"""

from django.contrib import admin

from payments.ledger.admin import BankbookEntryAdmin, CashbookEntryAdmin
from payments.models import PurchasePayment, SalesPayment

__all__ = [
    "BankbookEntryAdmin",
    "CashbookEntryAdmin",
    "PurchasePaymentAdmin",
    "SalesPaymentAdmin",
]


class ReadOnlyPaymentAdmin(admin.ModelAdmin):
    list_filter = ["payment_mode", "tenant"]
    search_fields = ["invoice__invoice_number", "cheque_number", "upi_reference"]
    date_hierarchy = "payment_date"

    def has_add_permission(self, request) -> bool:
        return False

    def has_change_permission(self, request, obj=None) -> bool:
        return False

    def has_delete_permission(self, request, obj=None) -> bool:
        return False


@admin.register(PurchasePayment)
class PurchasePaymentAdmin(ReadOnlyPaymentAdmin):
    list_display = [
        "id",
        "payment_date",
        "vendor",
        "invoice",
        "amount",
        "payment_mode",
        "payment_link_id",
    ]


@admin.register(SalesPayment)
class SalesPaymentAdmin(ReadOnlyPaymentAdmin):
    list_display = [
        "id",
        "payment_date",
        "retailer",
        "invoice",
        "amount",
        "payment_mode",
        "payment_link_id",
    ]
