"""Django admin configuration for tenants."""

from django.contrib import admin

from .models import Tenant


@admin.register(Tenant)
class TenantAdmin(admin.ModelAdmin):
    """Cash balance is maintained by the ledger and is read-only here."""

    list_display = ["name", "slug", "cash_balance", "is_active", "created_at"]
    list_filter = ["is_active"]
    search_fields = ["name", "slug"]
    readonly_fields = ["id", "cash_balance", "created_at", "updated_at"]
    prepopulated_fields = {"slug": ("name",)}
