"""VAT rates, boards, linear materials, accessories, fee types and board price history."""

import django.core.validators
import django.db.models.deletion
from decimal import Decimal
from django.conf import settings
from django.db import migrations, models


def _margin_fields():
    return [
        ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
        ("name", models.CharField(max_length=150, verbose_name="Megnevezés")),
        (
            "base_price",
            models.DecimalField(
                decimal_places=2,
                default=0,
                max_digits=12,
                validators=[django.core.validators.MinValueValidator(0)],
                verbose_name="Beszerzési nettó ár",
            ),
        ),
        (
            "multiplier",
            models.DecimalField(
                decimal_places=2,
                default=Decimal("1.38"),
                max_digits=4,
                validators=[
                    django.core.validators.MinValueValidator(Decimal("1.0")),
                    django.core.validators.MaxValueValidator(Decimal("5.0")),
                ],
                verbose_name="Árrés szorzó",
            ),
        ),
        (
            "quantity_in_stock",
            models.DecimalField(decimal_places=3, default=0, max_digits=12, verbose_name="Készlet"),
        ),
        ("is_active", models.BooleanField(default=True)),
        ("created_at", models.DateTimeField(auto_now_add=True)),
        ("updated_at", models.DateTimeField(auto_now=True)),
        (
            "vat",
            models.ForeignKey(
                on_delete=django.db.models.deletion.PROTECT, to="catalog.vatrate", verbose_name="ÁFA kulcs"
            ),
        ),
    ]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="VatRate",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=50, verbose_name="Megnevezés")),
                (
                    "percent",
                    models.DecimalField(
                        decimal_places=2,
                        max_digits=5,
                        validators=[
                            django.core.validators.MinValueValidator(0),
                            django.core.validators.MaxValueValidator(100),
                        ],
                        verbose_name="ÁFA (%)",
                    ),
                ),
                ("is_active", models.BooleanField(default=True)),
            ],
            options={
                "verbose_name": "ÁFA kulcs",
                "verbose_name_plural": "ÁFA kulcsok",
                "ordering": ["-percent"],
            },
        ),
        migrations.CreateModel(
            name="Material",
            fields=_margin_fields()
            + [
                ("length_mm", models.PositiveIntegerField(verbose_name="Tábla hossz (mm)")),
                ("width_mm", models.PositiveIntegerField(verbose_name="Tábla szélesség (mm)")),
                (
                    "thickness_mm",
                    models.DecimalField(decimal_places=1, default=18, max_digits=5, verbose_name="Vastagság (mm)"),
                ),
                (
                    "waste_multi",
                    models.DecimalField(
                        decimal_places=2,
                        default=1,
                        max_digits=4,
                        validators=[django.core.validators.MinValueValidator(1)],
                        verbose_name="Hulladék szorzó",
                    ),
                ),
                ("on_stock", models.BooleanField(default=True, verbose_name="Raktári termék")),
            ],
            options={
                "verbose_name": "Lapanyag",
                "verbose_name_plural": "Lapanyagok",
                "ordering": ["name"],
                "abstract": False,
            },
        ),
        migrations.CreateModel(
            name="LinearMaterial",
            fields=_margin_fields()
            + [
                ("length_mm", models.PositiveIntegerField(verbose_name="Hossz (mm)")),
                ("width_mm", models.PositiveIntegerField(default=0, verbose_name="Szélesség (mm)")),
                ("on_stock", models.BooleanField(default=True, verbose_name="Raktári termék")),
            ],
            options={
                "verbose_name": "Szálanyag",
                "verbose_name_plural": "Szálanyagok",
                "ordering": ["name"],
                "abstract": False,
            },
        ),
        migrations.CreateModel(
            name="Accessory",
            fields=_margin_fields()
            + [
                ("sku", models.CharField(blank=True, max_length=50, verbose_name="Cikkszám")),
                ("unit", models.CharField(default="db", max_length=20, verbose_name="Mértékegység")),
            ],
            options={
                "verbose_name": "Kiegészítő",
                "verbose_name_plural": "Kiegészítők",
                "ordering": ["name"],
                "abstract": False,
            },
        ),
        migrations.CreateModel(
            name="FeeType",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=100, verbose_name="Megnevezés")),
                (
                    "net_price",
                    models.DecimalField(decimal_places=2, default=0, max_digits=12, verbose_name="Nettó egységár"),
                ),
                ("unit", models.CharField(default="db", max_length=20, verbose_name="Mértékegység")),
                ("is_active", models.BooleanField(default=True)),
                (
                    "vat",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT, to="catalog.vatrate", verbose_name="ÁFA kulcs"
                    ),
                ),
            ],
            options={
                "verbose_name": "Díjtípus",
                "verbose_name_plural": "Díjtípusok",
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="MaterialPriceHistory",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("old_base_price", models.DecimalField(decimal_places=2, max_digits=12)),
                ("new_base_price", models.DecimalField(decimal_places=2, max_digits=12)),
                ("old_multiplier", models.DecimalField(decimal_places=2, max_digits=4)),
                ("new_multiplier", models.DecimalField(decimal_places=2, max_digits=4)),
                ("changed_at", models.DateTimeField(auto_now_add=True)),
                (
                    "changed_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        to=settings.AUTH_USER_MODEL,
                        verbose_name="Módosította",
                    ),
                ),
                (
                    "material",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="price_history",
                        to="catalog.material",
                    ),
                ),
            ],
            options={
                "verbose_name": "Árváltozás",
                "verbose_name_plural": "Árváltozások",
                "ordering": ["-changed_at", "-pk"],
            },
        ),
    ]
