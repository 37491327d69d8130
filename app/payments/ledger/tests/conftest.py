"""
Pytest fixtures for ledger tests.

Sections:
    - Partition Fixtures: the tenant cashbook and one bankbook
    - Helpers: appending a series of entries
"""

import pytest

from payments.ledger import LedgerPartition, LedgerService, ReferenceType


# ==========================================================================
# Partition Fixtures
# ==========================================================================


@pytest.fixture
def cash(tenant):
    """The tenant's cashbook partition."""
    return LedgerPartition.cash(tenant.id)


@pytest.fixture
def bank(tenant, bank_account):
    """The bankbook partition of the shared bank account."""
    return LedgerPartition.bank(tenant.id, bank_account.id)


# ==========================================================================
# Helpers
# ==========================================================================


@pytest.fixture
def append():
    """
    Append entries with a compact call.

    Usage:
        append(cash, "100.00", at(9))
    """

    def _append(partition, amount, date, reference_type=ReferenceType.OPENING_BALANCE, reference_id=None):
        return LedgerService.append_entry(
            partition,
            signed_amount=amount,
            reference_type=reference_type,
            reference_id=reference_id,
            date=date,
            description="test entry",
        )

    return _append
