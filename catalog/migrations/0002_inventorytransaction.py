"""Board inventory movement log."""

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ("catalog", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="InventoryTransaction",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "transaction_type",
                    models.CharField(
                        choices=[("in", "Bevételezés"), ("reserved", "Foglalás"), ("out", "Kivételezés")],
                        max_length=10,
                        verbose_name="Típus",
                    ),
                ),
                ("quantity", models.DecimalField(decimal_places=3, max_digits=12, verbose_name="Mennyiség (tábla)")),
                (
                    "unit_price",
                    models.DecimalField(
                        blank=True, decimal_places=2, max_digits=12, null=True, verbose_name="Nettó egységár"
                    ),
                ),
                (
                    "reference_type",
                    models.CharField(
                        choices=[("shipment_item", "Szállítmány tétel"), ("quote", "Megrendelés"), ("manual", "Kézi")],
                        max_length=20,
                        verbose_name="Hivatkozás",
                    ),
                ),
                ("reference_id", models.PositiveBigIntegerField(blank=True, null=True)),
                ("comment", models.CharField(blank=True, max_length=255, verbose_name="Megjegyzés")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "material",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="inventory_transactions",
                        to="catalog.material",
                        verbose_name="Lapanyag",
                    ),
                ),
            ],
            options={
                "verbose_name": "Készletmozgás",
                "verbose_name_plural": "Készletmozgások",
                "ordering": ["-created_at", "-pk"],
                "indexes": [
                    models.Index(fields=["material", "transaction_type"], name="inventory_material_type_idx"),
                    models.Index(fields=["reference_type", "reference_id"], name="inventory_reference_idx"),
                ],
            },
        ),
    ]
