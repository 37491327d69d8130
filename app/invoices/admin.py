"""
Django admin configuration for purchase and sales invoices.

Money fields and status are maintained by InvoiceService and the payment
services and are shown read-only.
"""

from django.contrib import admin

from .models import PurchaseInvoice, SalesInvoice

MONEY_READONLY = ["paid_amount", "status", "created_at", "updated_at"]


@admin.register(PurchaseInvoice)
class PurchaseInvoiceAdmin(admin.ModelAdmin):
    list_display = [
        "invoice_number",
        "vendor",
        "invoice_date",
        "total_amount",
        "paid_amount",
        "balance_amount",
        "status",
    ]
    list_filter = ["status", "tenant"]
    search_fields = ["invoice_number", "vendor__name"]
    date_hierarchy = "invoice_date"
    readonly_fields = [*MONEY_READONLY, "balance_amount"]


@admin.register(SalesInvoice)
class SalesInvoiceAdmin(admin.ModelAdmin):
    list_display = [
        "invoice_number",
        "retailer",
        "invoice_date",
        "total_amount",
        "paid_amount",
        "udhaar_amount",
        "shortfall_amount",
        "status",
    ]
    list_filter = ["status", "tenant"]
    search_fields = ["invoice_number", "retailer__name"]
    date_hierarchy = "invoice_date"
    readonly_fields = [*MONEY_READONLY, "udhaar_amount", "shortfall_amount"]
