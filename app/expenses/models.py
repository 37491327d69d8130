"""
Expense models.

An expense is money paid out for running the business (rent, wages,
transport). Each expense posts one cashbook outflow or bankbook credit
referencing the expense id.

Usage:
    from expenses.models import Expense

    Expense.objects.for_tenant(tenant.id).filter(category__name="Rent")
"""

from __future__ import annotations

from django.core.exceptions import ValidationError
from django.db import models
from django.utils import timezone

from core.model_mixins import TenantOwnedMixin, UUIDPrimaryKeyMixin
from core.models import BaseModel
from payments.models import PaymentMode


class ExpenseCategory(UUIDPrimaryKeyMixin, TenantOwnedMixin, BaseModel):
    """Tenant-defined grouping of expenses."""

    name = models.CharField(max_length=100)
    is_active = models.BooleanField(default=True)

    class Meta:
        ordering = ["name"]
        verbose_name_plural = "expense categories"
        constraints = [
            models.UniqueConstraint(
                fields=["tenant", "name"],
                name="unique_expense_category_per_tenant",
            )
        ]

    def __str__(self) -> str:
        return self.name


class Expense(UUIDPrimaryKeyMixin, TenantOwnedMixin, BaseModel):
    """
    Money paid out for a business expense.

    Fields:
        category: Expense category
        description: What the money was spent on
        amount: Amount paid
        payment_mode: Cash, Bank, UPI or Cheque
        bank_account: Required for every mode except Cash
        payment_date: When the money moved
    """

    category = models.ForeignKey(
        ExpenseCategory,
        on_delete=models.PROTECT,
        related_name="expenses",
    )
    description = models.CharField(max_length=255)
    amount = models.DecimalField(max_digits=14, decimal_places=2)
    payment_mode = models.CharField(
        max_length=10,
        choices=PaymentMode.choices,
        default=PaymentMode.CASH,
    )
    bank_account = models.ForeignKey(
        "banking.BankAccount",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="+",
    )
    payment_date = models.DateTimeField(default=timezone.now, db_index=True)

    class Meta:
        ordering = ["-payment_date"]

    def __str__(self) -> str:
        return f"{self.description} ({self.amount})"

    def clean(self) -> None:
        super().clean()
        if self.payment_mode != PaymentMode.CASH and self.bank_account_id is None:
            raise ValidationError(
                {"bank_account": "Bank account is required for non-cash expenses."}
            )
