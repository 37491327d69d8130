"""
Custom QuerySet classes for common patterns.

This module provides reusable queryset patterns:
- TenantQuerySet: Tenant scoping and active-record filtering

Usage:
    from core.managers import TenantQuerySet

    class Vendor(UUIDPrimaryKeyMixin, BaseModel):
        objects = TenantQuerySet.as_manager()

    Vendor.objects.for_tenant(tenant_id).active()
    Vendor.objects.for_tenant(tenant_id).locked().get(id=vendor_id)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from django.db import models

if TYPE_CHECKING:
    import uuid


class TenantQuerySet(models.QuerySet):
    """
    QuerySet that scopes records to one tenant.

    Methods:
        for_tenant(tenant_id): Filter to one tenant's rows
        active(): Filter to rows with is_active=True
        locked(): SELECT ... FOR UPDATE on the matched rows
    """

    def for_tenant(self, tenant_id: uuid.UUID) -> TenantQuerySet:
        """
        Filter records owned by a tenant.

        Args:
            tenant_id: UUID of the tenant

        Returns:
            Filtered queryset
        """
        return self.filter(tenant_id=tenant_id)

    def active(self) -> TenantQuerySet:
        """Filter to active records."""
        return self.filter(is_active=True)

    def locked(self) -> TenantQuerySet:
        """
        Lock matched rows until the surrounding transaction ends.

        Must be evaluated inside transaction.atomic(). Row locks are a
        no-op on SQLite.
        """
        return self.select_for_update()
