"""
Factory Boy factories for vendors and retailers.

Money aggregates start at zero; create invoices through InvoiceService
so the aggregates stay in step with them.

Usage:
    from parties.tests.factories import RetailerFactory

    retailer = RetailerFactory(tenant=tenant, phone="9800000000")
"""

import factory

from parties.models import Retailer, Vendor
from tenants.tests.factories import TenantFactory


class VendorFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Vendor
        skip_postgeneration_save = True

    tenant = factory.SubFactory(TenantFactory)
    name = factory.Sequence(lambda n: f"Vendor {n}")
    phone = factory.Sequence(lambda n: f"98{n:08d}")


class RetailerFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Retailer
        skip_postgeneration_save = True

    tenant = factory.SubFactory(TenantFactory)
    name = factory.Sequence(lambda n: f"Retailer {n}")
    phone = factory.Sequence(lambda n: f"97{n:08d}")
