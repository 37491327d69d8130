"""
Payment services for applying, distributing and reversing payments.

This module provides:
- PaymentApplicationService: Applies one payment to one invoice
- PaymentDistributionService: Spreads a lump sum FIFO across open invoices
- PaymentReversalService: Deletes a payment (or its batch) and reverses it

Usage:
    from payments.services import PaymentApplicationService

    result = PaymentApplicationService.apply_payment(
        tenant_id=tenant.id,
        side="purchase",
        invoice_id=invoice.id,
        amount="250.00",
        payment_mode=PaymentMode.CASH,
    )

    from payments.services import PaymentDistributionService

    result = PaymentDistributionService.distribute(
        tenant_id=tenant.id,
        side="sales",
        party_id=retailer.id,
        total_amount="1200.00",
        payment_mode=PaymentMode.BANK,
        bank_account_id=account.id,
    )

    from payments.services import PaymentReversalService

    PaymentReversalService.delete_payment(tenant.id, "sales", payment.id)
"""

from payments.services.application import PaymentApplicationService
from payments.services.distribution import PaymentDistributionService
from payments.services.reversal import PaymentReversalService
from payments.services.types import DistributionResult, PaymentResult

__all__ = [
    "DistributionResult",
    "PaymentApplicationService",
    "PaymentDistributionService",
    "PaymentResult",
    "PaymentReversalService",
]
