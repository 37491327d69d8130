"""
Django admin configuration for vendors and retailers.

Money aggregates are maintained by the invoice and payment services and
are shown read-only.
"""

from django.contrib import admin

from .models import Retailer, Vendor


@admin.register(Vendor)
class VendorAdmin(admin.ModelAdmin):
    list_display = ["name", "tenant", "phone", "balance", "is_active"]
    list_filter = ["is_active", "tenant"]
    search_fields = ["name", "phone"]
    readonly_fields = ["id", "balance", "created_at", "updated_at"]


@admin.register(Retailer)
class RetailerAdmin(admin.ModelAdmin):
    list_display = [
        "name",
        "tenant",
        "phone",
        "balance",
        "udhaar_balance",
        "shortfall_balance",
        "is_active",
    ]
    list_filter = ["is_active", "tenant"]
    search_fields = ["name", "phone"]
    readonly_fields = [
        "id",
        "balance",
        "udhaar_balance",
        "shortfall_balance",
        "created_at",
        "updated_at",
    ]
