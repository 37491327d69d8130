"""
Base exception classes for application-wide error handling.

This module provides the exception hierarchy shared by every back-office
service:
- Consistent error payloads across the application
- Machine-readable error codes for callers
- Detailed error information for debugging

Exception Hierarchy:
    BaseApplicationError (base)
    ├── ValidationError - Bad input or a disallowed state transition
    ├── NotFoundError - Invoice, party, bank account or balance row missing
    └── DatabaseError - Transport or constraint failure in the store

Usage:
    from core.exceptions import ValidationError, NotFoundError

    # Raise with message only
    raise ValidationError("Amount must be greater than zero")

    # Raise with error code and details
    raise NotFoundError(
        f"Purchase invoice {invoice_id} not found",
        error_code="INVOICE_NOT_FOUND",
        details={"invoice_id": invoice_id},
    )

    # Convert to dict for a caller that serializes
    try:
        ...
    except BaseApplicationError as e:
        payload = e.to_dict()

Note:
    Engine operations never catch these locally; they abort the surrounding
    transaction and reach the caller unchanged.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import Any


class BaseApplicationError(Exception):
    """
    Base exception for all application-specific errors.

    Attributes:
        message: Human-readable error description
        error_code: Machine-readable code for caller-side handling
        details: Additional error context (ids, amounts, etc.)

    Example:
        try:
            PaymentApplicationService.apply_payment(...)
        except NotFoundError as e:
            logger.warning(f"Payment target missing: {e.error_code}")
    """

    default_error_code: str = "APPLICATION_ERROR"

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        """
        Initialize the exception.

        Args:
            message: Human-readable error description
            error_code: Machine-readable error code (defaults to class default)
            details: Additional error context
        """
        self.message = message
        self.error_code = error_code or self.default_error_code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert exception to a dictionary.

        Returns:
            Dict with error, error_code, and details keys

        Example:
            {
                "error": "Sales invoice 42 not found",
                "error_code": "NOT_FOUND",
                "details": {"invoice_id": 42}
            }
        """
        result: dict[str, Any] = {
            "error": self.message,
            "error_code": self.error_code,
        }
        if self.details:
            result["details"] = self.details
        return result

    def __str__(self) -> str:
        """Return string representation with error code."""
        return f"[{self.error_code}] {self.message}"

    def __repr__(self) -> str:
        """Return detailed representation for debugging."""
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"error_code={self.error_code!r}, "
            f"details={self.details!r})"
        )


class ValidationError(BaseApplicationError):
    """
    Raised when input validation fails.

    Use for:
    - Non-positive amounts
    - Missing bank account for a non-cash payment mode
    - Nothing outstanding to apply or distribute against
    - Status transitions that are not allowed

    Example:
        raise ValidationError(
            "Bank account is required for non-cash payments",
            error_code="BANK_ACCOUNT_REQUIRED",
            details={"payment_mode": mode},
        )
    """

    default_error_code: str = "VALIDATION_ERROR"


class NotFoundError(BaseApplicationError):
    """
    Raised when a requested resource is not found.

    Use for single-resource lookups where existence is expected: invoices,
    vendors, retailers, bank accounts, and rows targeted by a balance update.

    Example:
        vendor = Vendor.objects.for_tenant(tenant_id).filter(id=vendor_id).first()
        if not vendor:
            raise NotFoundError(
                f"Vendor {vendor_id} not found",
                details={"vendor_id": str(vendor_id)},
            )

    Note:
        Deleting a payment that does not exist is not an error; the
        reversal service returns False instead.
    """

    default_error_code: str = "NOT_FOUND"


class DatabaseError(BaseApplicationError):
    """
    Raised when the underlying store fails.

    Wraps django.db.DatabaseError (connection loss, constraint violation,
    serialization failure) raised inside BaseService.atomic(). The original
    exception is chained as __cause__.

    Example:
        try:
            with cls.atomic():
                ...
        except DatabaseError as e:
            logger.error(e.details["original_error"])
    """

    default_error_code: str = "DATABASE_ERROR"
