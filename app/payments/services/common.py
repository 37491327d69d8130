"""
Lookups and checks shared by the payment services.

Every helper must be called inside the caller's transaction; lookups that
lock use SELECT ... FOR UPDATE. Rows are locked party first, then
invoices, then payments, then ledger anchors (see LedgerService).
"""

from __future__ import annotations

import uuid
from decimal import Decimal

from banking.models import BankAccount
from core.exceptions import NotFoundError, ValidationError
from payments.models import PaymentMode


def validate_mode(payment_mode: str, bank_account_id: uuid.UUID | None) -> None:
    """
    Check the payment mode and its bank account requirement.

    Raises:
        ValidationError: If the mode is unknown, or is not Cash and no
            bank account was given
    """
    if payment_mode not in PaymentMode.values:
        raise ValidationError(
            f"Unknown payment mode: {payment_mode}",
            error_code="INVALID_PAYMENT_MODE",
            details={"payment_mode": payment_mode, "supported": PaymentMode.values},
        )
    if payment_mode != PaymentMode.CASH and bank_account_id is None:
        raise ValidationError(
            "Bank account is required for non-cash payments",
            error_code="BANK_ACCOUNT_REQUIRED",
            details={"payment_mode": payment_mode},
        )


def get_bank_account(tenant_id: uuid.UUID, bank_account_id: uuid.UUID) -> BankAccount:
    """
    Load an active bank account of a tenant.

    Raises:
        NotFoundError: If the account doesn't exist, belongs to another
            tenant, or is inactive
    """
    account = (
        BankAccount.objects.for_tenant(tenant_id)
        .active()
        .filter(id=bank_account_id)
        .first()
    )
    if account is None:
        raise NotFoundError(
            f"Bank account {bank_account_id} not found",
            error_code="BANK_ACCOUNT_NOT_FOUND",
            details={"bank_account_id": str(bank_account_id)},
        )
    return account


def get_locked(model, tenant_id: uuid.UUID, pk, label: str):
    """
    Load one tenant-owned row FOR UPDATE.

    Args:
        model: Tenant-owned model class
        tenant_id: Owning tenant
        pk: Primary key
        label: Human name used in the error message

    Raises:
        NotFoundError: If the row doesn't exist for this tenant
    """
    obj = model.objects.for_tenant(tenant_id).locked().filter(pk=pk).first()
    if obj is None:
        raise NotFoundError(
            f"{label} {pk} not found",
            details={f"{label.lower().replace(' ', '_')}_id": str(pk)},
        )
    return obj


def sum_amounts(amounts) -> Decimal:
    """Sum Decimal amounts starting from 0.00."""
    return sum(amounts, Decimal("0.00"))


def lock_invoice(side, tenant_id: uuid.UUID, invoice_id, missing_ok: bool = False):
    """
    Lock an invoice together with its party, party row first.

    The party id is read without a lock, then the party row and the
    invoice row are locked in that order.

    Args:
        side: PaymentSide naming the invoice and party models
        tenant_id: Owning tenant
        invoice_id: Invoice primary key
        missing_ok: Return (None, None) instead of raising when the
            invoice doesn't exist

    Returns:
        (invoice, party)

    Raises:
        NotFoundError: If the invoice or its party doesn't exist
    """
    invoices = side.invoice_model.objects.for_tenant(tenant_id)
    party_id = (
        invoices.filter(pk=invoice_id)
        .values_list(f"{side.party_field}_id", flat=True)
        .first()
    )
    invoice = party = None
    if party_id is not None:
        party = get_locked(
            side.party_model, tenant_id, party_id, side.party_field.capitalize()
        )
        invoice = invoices.locked().filter(pk=invoice_id).first()
    if invoice is None:
        if missing_ok:
            return None, None
        raise NotFoundError(
            f"Invoice {invoice_id} not found",
            details={"invoice_id": str(invoice_id)},
        )
    return invoice, party
