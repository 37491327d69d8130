"""
Model mixins providing reusable functionality for Django models.

Available Mixins:
    UUIDPrimaryKeyMixin: Use UUID as primary key
    TenantOwnedMixin: Foreign key to the owning tenant plus tenant-scoped manager

Usage:
    from core.models import BaseModel
    from core.model_mixins import TenantOwnedMixin, UUIDPrimaryKeyMixin

    class Retailer(UUIDPrimaryKeyMixin, TenantOwnedMixin, BaseModel):
        name = models.CharField(max_length=200)

    Retailer.objects.for_tenant(tenant_id).filter(is_active=True)

Note:
    - Always list mixins before BaseModel in inheritance
    - Mixins are abstract and don't create database tables
"""

from __future__ import annotations

import uuid

from django.db import models

from core.managers import TenantQuerySet


class UUIDPrimaryKeyMixin(models.Model):
    """
    Use UUID as primary key instead of auto-increment integer.

    Fields:
        id: UUIDField as primary key (auto-generated)

    Note:
        Ledger entries and invoices keep integer keys because their id is
        the insertion-order tie-break when sorting by date.
    """

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
        help_text="Unique identifier for this record",
    )

    class Meta:
        abstract = True


class TenantOwnedMixin(models.Model):
    """
    Scope a model to a tenant.

    Fields:
        tenant: The owning tenant (row isolation is enforced by callers
            through the for_tenant() queryset filter)

    Managers:
        objects: Manager built from TenantQuerySet
    """

    tenant = models.ForeignKey(
        "tenants.Tenant",
        on_delete=models.CASCADE,
        related_name="+",
        help_text="Tenant that owns this record",
    )

    objects = TenantQuerySet.as_manager()

    class Meta:
        abstract = True
