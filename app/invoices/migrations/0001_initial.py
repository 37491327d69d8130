from decimal import Decimal

import django.db.models.deletion
from django.db import migrations, models

STATUS_CHOICES = [
    ("Unpaid", "Unpaid"),
    ("Partially Paid", "Partially Paid"),
    ("Paid", "Paid"),
]


def _invoice_fields():
    return [
        (
            "id",
            models.BigAutoField(
                auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
            ),
        ),
        (
            "created_at",
            models.DateTimeField(
                auto_now_add=True,
                db_index=True,
                help_text="Timestamp when this record was created",
            ),
        ),
        (
            "updated_at",
            models.DateTimeField(
                auto_now=True,
                help_text="Timestamp when this record was last modified",
            ),
        ),
        ("invoice_number", models.CharField(max_length=50)),
        ("invoice_date", models.DateField(db_index=True)),
        ("total_amount", models.DecimalField(decimal_places=2, max_digits=14)),
        (
            "paid_amount",
            models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=14),
        ),
        (
            "status",
            models.CharField(
                choices=STATUS_CHOICES, db_index=True, default="Unpaid", max_length=20
            ),
        ),
        ("notes", models.TextField(blank=True, default="")),
        (
            "tenant",
            models.ForeignKey(
                help_text="Tenant that owns this record",
                on_delete=django.db.models.deletion.CASCADE,
                related_name="+",
                to="tenants.tenant",
            ),
        ),
    ]


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ("tenants", "0001_initial"),
        ("parties", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="PurchaseInvoice",
            fields=_invoice_fields()
            + [
                (
                    "balance_amount",
                    models.DecimalField(
                        decimal_places=2, default=Decimal("0.00"), max_digits=14
                    ),
                ),
                (
                    "vendor",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="purchase_invoices",
                        to="parties.vendor",
                    ),
                ),
            ],
            options={
                "ordering": ["invoice_date", "created_at", "id"],
                "abstract": False,
                "constraints": [
                    models.UniqueConstraint(
                        fields=("tenant", "invoice_number"),
                        name="unique_purchase_invoice_number_per_tenant",
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="SalesInvoice",
            fields=_invoice_fields()
            + [
                (
                    "udhaar_amount",
                    models.DecimalField(
                        decimal_places=2, default=Decimal("0.00"), max_digits=14
                    ),
                ),
                (
                    "shortfall_amount",
                    models.DecimalField(
                        decimal_places=2, default=Decimal("0.00"), max_digits=14
                    ),
                ),
                (
                    "retailer",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="sales_invoices",
                        to="parties.retailer",
                    ),
                ),
            ],
            options={
                "ordering": ["invoice_date", "created_at", "id"],
                "abstract": False,
                "constraints": [
                    models.UniqueConstraint(
                        fields=("tenant", "invoice_number"),
                        name="unique_sales_invoice_number_per_tenant",
                    )
                ],
            },
        ),
    ]
