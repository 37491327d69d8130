"""
Data types for ledger operations.

Types:
    LedgerPartition: Selects the tenant cashbook or one bank account's bankbook
    BalanceTarget: Names a denormalized balance column on one row

Usage:
    from payments.ledger.types import BalanceTarget, LedgerPartition

    cash = LedgerPartition.cash(tenant.id)
    bank = LedgerPartition.bank(tenant.id, account.id)

    target = BalanceTarget(Vendor, vendor.id, "balance", tenant_id=tenant.id)
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from django.db import models


@dataclass(frozen=True)
class LedgerPartition:
    """
    One independently ordered running-balance sequence.

    Attributes:
        tenant_id: Owning tenant
        bank_account_id: Bank account for a bankbook partition, None for cash
    """

    tenant_id: uuid.UUID
    bank_account_id: uuid.UUID | None = None

    @classmethod
    def cash(cls, tenant_id: uuid.UUID) -> LedgerPartition:
        return cls(tenant_id=tenant_id)

    @classmethod
    def bank(cls, tenant_id: uuid.UUID, bank_account_id: uuid.UUID) -> LedgerPartition:
        return cls(tenant_id=tenant_id, bank_account_id=bank_account_id)

    @property
    def is_cash(self) -> bool:
        return self.bank_account_id is None

    def __str__(self) -> str:
        if self.is_cash:
            return f"cashbook:{self.tenant_id}"
        return f"bankbook:{self.tenant_id}:{self.bank_account_id}"


@dataclass(frozen=True)
class BalanceTarget:
    """
    A denormalized balance column on a single row.

    Attributes:
        model: Django model class holding the column
        pk: Primary key of the row
        field: Name of the DecimalField to write
        tenant_id: When set, the row must also belong to this tenant
    """

    model: type[models.Model]
    pk: uuid.UUID | int
    field: str
    tenant_id: uuid.UUID | None = None

    def __str__(self) -> str:
        return f"{self.model.__name__}({self.pk}).{self.field}"
