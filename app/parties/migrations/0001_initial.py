import uuid
from decimal import Decimal

import django.db.models.deletion
from django.db import migrations, models


def _party_fields():
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
        ("name", models.CharField(max_length=200)),
        ("phone", models.CharField(blank=True, default="", max_length=20)),
        (
            "balance",
            models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=14),
        ),
        ("is_active", models.BooleanField(db_index=True, default=True)),
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
    ]

    operations = [
        migrations.CreateModel(
            name="Vendor",
            fields=_party_fields(),
            options={
                "ordering": ["name"],
                "abstract": False,
            },
        ),
        migrations.CreateModel(
            name="Retailer",
            fields=_party_fields()
            + [
                (
                    "udhaar_balance",
                    models.DecimalField(
                        decimal_places=2, default=Decimal("0.00"), max_digits=14
                    ),
                ),
                (
                    "shortfall_balance",
                    models.DecimalField(
                        decimal_places=2, default=Decimal("0.00"), max_digits=14
                    ),
                ),
            ],
            options={
                "ordering": ["name"],
                "abstract": False,
            },
        ),
    ]
