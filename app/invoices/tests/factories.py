"""
Factory Boy factories for invoices.

These write invoice rows only and leave party aggregates alone; they
suit model and queryset tests. Engine tests create invoices through
InvoiceService instead.

Usage:
    from invoices.tests.factories import PurchaseInvoiceFactory

    invoice = PurchaseInvoiceFactory(vendor=vendor, total_amount=Decimal("500.00"))
"""

import datetime as dt
from decimal import Decimal

import factory

from invoices.models import PurchaseInvoice, SalesInvoice
from parties.tests.factories import RetailerFactory, VendorFactory


class PurchaseInvoiceFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = PurchaseInvoice
        skip_postgeneration_save = True

    vendor = factory.SubFactory(VendorFactory)
    tenant = factory.SelfAttribute("vendor.tenant")
    invoice_number = factory.Sequence(lambda n: f"P-{n:04d}")
    invoice_date = dt.date(2024, 4, 1)
    total_amount = Decimal("1000.00")
    balance_amount = factory.SelfAttribute("total_amount")


class SalesInvoiceFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = SalesInvoice
        skip_postgeneration_save = True

    retailer = factory.SubFactory(RetailerFactory)
    tenant = factory.SelfAttribute("retailer.tenant")
    invoice_number = factory.Sequence(lambda n: f"S-{n:04d}")
    invoice_date = dt.date(2024, 4, 1)
    total_amount = Decimal("1000.00")
    udhaar_amount = factory.SelfAttribute("total_amount")
