"""Django admin configuration for expenses."""

from django.contrib import admin

from .models import Expense, ExpenseCategory


@admin.register(ExpenseCategory)
class ExpenseCategoryAdmin(admin.ModelAdmin):
    list_display = ["name", "tenant", "is_active"]
    list_filter = ["is_active"]
    search_fields = ["name"]


@admin.register(Expense)
class ExpenseAdmin(admin.ModelAdmin):
    """Expenses are recorded through ExpenseService so the ledger stays in step."""

    list_display = ["description", "category", "amount", "payment_mode", "payment_date"]
    list_filter = ["payment_mode", "category"]
    search_fields = ["description"]
    readonly_fields = [
        "id",
        "tenant",
        "category",
        "amount",
        "payment_mode",
        "bank_account",
        "payment_date",
        "created_at",
        "updated_at",
    ]

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
