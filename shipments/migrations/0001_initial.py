"""Supplier shipments and their received items."""

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("catalog", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Shipment",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "shipment_number",
                    models.CharField(blank=True, max_length=20, unique=True, verbose_name="Szállítmányszám"),
                ),
                ("year", models.PositiveSmallIntegerField(editable=False, null=True)),
                ("sequence", models.PositiveIntegerField(editable=False, null=True)),
                ("supplier_name", models.CharField(max_length=200, verbose_name="Beszállító")),
                (
                    "supplier_reference",
                    models.CharField(blank=True, max_length=50, verbose_name="Szállítólevél száma"),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[("draft", "Rögzítés alatt"), ("received", "Bevételezve")],
                        default="draft",
                        max_length=10,
                        verbose_name="Állapot",
                    ),
                ),
                ("comment", models.TextField(blank=True, verbose_name="Megjegyzés")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("received_at", models.DateTimeField(blank=True, null=True, verbose_name="Bevételezve")),
                (
                    "created_by",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="created_shipments",
                        to=settings.AUTH_USER_MODEL,
                        verbose_name="Létrehozta",
                    ),
                ),
                (
                    "received_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="received_shipments",
                        to=settings.AUTH_USER_MODEL,
                        verbose_name="Bevételezte",
                    ),
                ),
            ],
            options={
                "verbose_name": "Szállítmány",
                "verbose_name_plural": "Szállítmányok",
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="ShipmentItem",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("description", models.CharField(blank=True, max_length=200, verbose_name="Megnevezés")),
                (
                    "quantity_received",
                    models.DecimalField(decimal_places=3, max_digits=12, verbose_name="Beérkezett mennyiség"),
                ),
                (
                    "net_price",
                    models.DecimalField(decimal_places=2, max_digits=12, verbose_name="Nettó beszerzési ár"),
                ),
                ("vat_percent", models.DecimalField(decimal_places=2, default=27, max_digits=5, verbose_name="ÁFA (%)")),
                ("net_total", models.IntegerField(default=0, verbose_name="Nettó")),
                ("vat_amount", models.IntegerField(default=0, verbose_name="ÁFA")),
                ("gross_total", models.IntegerField(default=0, verbose_name="Bruttó")),
                (
                    "accessory",
                    models.ForeignKey(
                        blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, to="catalog.accessory"
                    ),
                ),
                (
                    "linear_material",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        to="catalog.linearmaterial",
                    ),
                ),
                (
                    "material",
                    models.ForeignKey(
                        blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, to="catalog.material"
                    ),
                ),
                (
                    "shipment",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE, related_name="items", to="shipments.shipment"
                    ),
                ),
            ],
            options={
                "verbose_name": "Szállítmány tétel",
                "verbose_name_plural": "Szállítmány tételek",
                "ordering": ["pk"],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(
                            models.Q(("accessory__isnull", True), ("linear_material__isnull", True), ("material__isnull", False)),
                            models.Q(("accessory__isnull", True), ("linear_material__isnull", False), ("material__isnull", True)),
                            models.Q(("accessory__isnull", False), ("linear_material__isnull", True), ("material__isnull", True)),
                            _connector="OR",
                        ),
                        name="shipment_item_single_target",
                    ),
                ],
            },
        ),
    ]
