"""
Payment domain models.

This package contains all payment-related models:
- PurchasePayment: Money paid to a vendor against a purchase invoice
- SalesPayment: Money received from a retailer against a sales invoice
- CashbookEntry / BankbookEntry: Running-balance ledgers (payments.ledger),
  re-exported here so Django's migration system discovers them
"""

from payments.ledger.models import BankbookEntry, CashbookEntry, ReferenceType
from payments.models.payment import PaymentMode, PurchasePayment, SalesPayment

__all__ = [
    "BankbookEntry",
    "CashbookEntry",
    "PaymentMode",
    "PurchasePayment",
    "ReferenceType",
    "SalesPayment",
]
