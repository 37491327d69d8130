"""
Ledger - running-balance cash and bank books.

Every money movement in the back office is posted to exactly one ledger
partition: the tenant's cashbook, or the bankbook of one bank account.
Each entry stores the partition's running balance after it.

Public API:
    Models:
        CashbookEntry - Cash in hand movements (inflow/outflow)
        BankbookEntry - Bank account movements (debit/credit)
        ReferenceType - What created an entry

    Services:
        LedgerService - Append, recompute and delete-by-reference
        BalanceSynchronizer - Denormalized balance writes

    Types:
        LedgerPartition - Selects a cashbook or bankbook partition
        BalanceTarget - Names a balance column on one row

Usage:
    from payments.ledger import LedgerPartition, LedgerService, ReferenceType

    partition = LedgerPartition.bank(tenant.id, account.id)
    entry = LedgerService.append_entry(
        partition,
        signed_amount=Decimal("500.00"),
        reference_type=ReferenceType.SALES_PAYMENT,
        reference_id=payment.id,
        date=timezone.now(),
    )
    BalanceSynchronizer.sync_partition(partition, entry.balance)
"""

from .balances import BalanceSynchronizer
from .models import BankbookEntry, CashbookEntry, ReferenceType
from .services import LedgerService
from .types import BalanceTarget, LedgerPartition

__all__ = [
    # Models
    "CashbookEntry",
    "BankbookEntry",
    "ReferenceType",
    # Services
    "LedgerService",
    "BalanceSynchronizer",
    # Types
    "LedgerPartition",
    "BalanceTarget",
]
