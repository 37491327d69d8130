"""
Base service layer patterns for business logic encapsulation.

Services encapsulate business logic separate from models and callers.
Every money-moving operation in the back office is a classmethod on a
BaseService subclass and runs inside one cls.atomic() block.

Usage:
    from core.services import BaseService

    class InvoiceService(BaseService):
        @classmethod
        def create_purchase_invoice(cls, tenant_id, vendor_id, ...):
            with cls.atomic():
                invoice = PurchaseInvoice.objects.create(...)
                BalanceSynchronizer.apply_delta(...)

            cls.get_logger().info(
                "Purchase invoice created",
                extra={"invoice_id": invoice.id},
            )
            return invoice

Related:
    - core.exceptions: Error types raised by services
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING

from django.db import DatabaseError as DjangoDatabaseError
from django.db import transaction

from core.exceptions import DatabaseError

if TYPE_CHECKING:
    from collections.abc import Generator


class BaseService:
    """
    Base class for service layer classes.

    Provides common utilities for services:
    - Logging setup per service
    - Database transaction management with store errors wrapped

    Design Notes:
        - Use @staticmethod or @classmethod (no instance state)
        - Raise core.exceptions for every failure; callers see one taxonomy
    """

    @classmethod
    def get_logger(cls) -> logging.Logger:
        """
        Get logger for this service.

        Returns a logger named after the service class for
        easy filtering in logs.

        Returns:
            Logger instance for this service
        """
        return logging.getLogger(f"{cls.__module__}.{cls.__name__}")

    @classmethod
    @contextmanager
    def atomic(cls) -> Generator[None, None, None]:
        """
        Execute operations in a database transaction.

        All database operations within this context manager are
        wrapped in a transaction. If any operation fails, all
        changes are rolled back. Nested calls become savepoints, so a
        service may call another service without splitting the unit.

        Yields:
            None

        Raises:
            DatabaseError: If the store raises django.db.DatabaseError.
                Application errors propagate unchanged.
        """
        try:
            with transaction.atomic():
                yield
        except DjangoDatabaseError as e:
            cls.get_logger().error(
                "Database error, transaction rolled back",
                extra={"error": str(e)},
                exc_info=True,
            )
            raise DatabaseError(
                "Database operation failed",
                details={"original_error": str(e)},
            ) from e
