import uuid
from decimal import Decimal

import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models

MODE_CHOICES = [
    ("Cash", "Cash"),
    ("Bank", "Bank Transfer"),
    ("UPI", "UPI"),
    ("Cheque", "Cheque"),
]

REFERENCE_CHOICES = [
    ("Payment", "Payment"),
    ("Sales Payment", "Sales Payment"),
    ("Expense", "Expense"),
    ("Opening Balance", "Opening Balance"),
    ("Bank Deposit", "Bank Deposit"),
    ("Bank Withdrawal", "Bank Withdrawal"),
]


def _timestamps():
    return [
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
    ]


def _tenant():
    return (
        "tenant",
        models.ForeignKey(
            help_text="Tenant that owns this record",
            on_delete=django.db.models.deletion.CASCADE,
            related_name="+",
            to="tenants.tenant",
        ),
    )


def _payment_fields():
    return _timestamps() + [
        (
            "id",
            models.UUIDField(
                default=uuid.uuid4,
                editable=False,
                help_text="Unique identifier for this record",
                primary_key=True,
                serialize=False,
            ),
        ),
        ("amount", models.DecimalField(decimal_places=2, max_digits=14)),
        (
            "payment_mode",
            models.CharField(choices=MODE_CHOICES, default="Cash", max_length=10),
        ),
        (
            "payment_link_id",
            models.UUIDField(
                blank=True,
                db_index=True,
                help_text="Groups the payments of one bulk distribution",
                null=True,
            ),
        ),
        (
            "payment_date",
            models.DateTimeField(db_index=True, default=django.utils.timezone.now),
        ),
        ("cheque_number", models.CharField(blank=True, default="", max_length=50)),
        ("upi_reference", models.CharField(blank=True, default="", max_length=100)),
        ("notes", models.TextField(blank=True, default="")),
        (
            "bank_account",
            models.ForeignKey(
                blank=True,
                null=True,
                on_delete=django.db.models.deletion.PROTECT,
                related_name="+",
                to="banking.bankaccount",
            ),
        ),
        _tenant(),
    ]


def _entry_fields():
    return [
        (
            "id",
            models.BigAutoField(
                auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
            ),
        ),
    ] + _timestamps() + [
        ("date", models.DateTimeField(db_index=True)),
        ("description", models.CharField(blank=True, default="", max_length=255)),
        ("balance", models.DecimalField(decimal_places=2, max_digits=14)),
        (
            "reference_type",
            models.CharField(choices=REFERENCE_CHOICES, max_length=30),
        ),
        ("reference_id", models.UUIDField(blank=True, null=True)),
        _tenant(),
    ]


def _money(name):
    return (
        name,
        models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=14),
    )


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ("tenants", "0001_initial"),
        ("parties", "0001_initial"),
        ("banking", "0001_initial"),
        ("invoices", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="PurchasePayment",
            fields=_payment_fields()
            + [
                (
                    "invoice",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="payments",
                        to="invoices.purchaseinvoice",
                    ),
                ),
                (
                    "vendor",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="payments",
                        to="parties.vendor",
                    ),
                ),
            ],
            options={
                "ordering": ["payment_date", "created_at"],
                "abstract": False,
            },
        ),
        migrations.CreateModel(
            name="SalesPayment",
            fields=_payment_fields()
            + [
                (
                    "invoice",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="payments",
                        to="invoices.salesinvoice",
                    ),
                ),
                (
                    "retailer",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="payments",
                        to="parties.retailer",
                    ),
                ),
            ],
            options={
                "ordering": ["payment_date", "created_at"],
                "abstract": False,
            },
        ),
        migrations.CreateModel(
            name="CashbookEntry",
            fields=_entry_fields() + [_money("inflow"), _money("outflow")],
            options={
                "verbose_name_plural": "cashbook entries",
                "ordering": ["date", "id"],
                "abstract": False,
                "indexes": [
                    models.Index(
                        fields=["tenant", "date", "id"],
                        name="cashbook_partition_idx",
                    ),
                    models.Index(
                        fields=["reference_type", "reference_id"],
                        name="cashbook_reference_idx",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="BankbookEntry",
            fields=_entry_fields()
            + [
                _money("debit"),
                _money("credit"),
                (
                    "bank_account",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="bankbook_entries",
                        to="banking.bankaccount",
                    ),
                ),
            ],
            options={
                "verbose_name_plural": "bankbook entries",
                "ordering": ["date", "id"],
                "abstract": False,
                "indexes": [
                    models.Index(
                        fields=["bank_account", "date", "id"],
                        name="bankbook_partition_idx",
                    ),
                    models.Index(
                        fields=["reference_type", "reference_id"],
                        name="bankbook_reference_idx",
                    ),
                ],
            },
        ),
    ]
