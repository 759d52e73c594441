"""Quotes and orders with their cut list, priced lines and status history."""

import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models

STATUS_CHOICES = [
    ("draft", "Árajánlat"),
    ("ordered", "Megrendelve"),
    ("in_production", "Gyártásban"),
    ("ready", "Elkészült"),
    ("finished", "Átadva"),
    ("cancelled", "Törölve"),
]


def _line_total_fields():
    return [
        ("vat_percent", models.DecimalField(decimal_places=2, default=0, max_digits=5, verbose_name="ÁFA (%)")),
        ("net_total", models.IntegerField(default=0, verbose_name="Nettó")),
        ("vat_amount", models.IntegerField(default=0, verbose_name="ÁFA")),
        ("gross_total", models.IntegerField(default=0, verbose_name="Bruttó")),
    ]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("catalog", "0001_initial"),
        ("customers", "0001_initial"),
        ("production", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Quote",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("quote_number", models.CharField(blank=True, max_length=20, unique=True, verbose_name="Ajánlatszám")),
                ("quote_year", models.PositiveSmallIntegerField(editable=False, null=True)),
                ("quote_sequence", models.PositiveIntegerField(editable=False, null=True)),
                (
                    "order_number",
                    models.CharField(blank=True, db_index=True, max_length=20, verbose_name="Rendelésszám"),
                ),
                ("order_year", models.PositiveSmallIntegerField(editable=False, null=True)),
                ("order_sequence", models.PositiveIntegerField(editable=False, null=True)),
                (
                    "status",
                    models.CharField(
                        choices=STATUS_CHOICES, db_index=True, default="draft", max_length=20, verbose_name="Állapot"
                    ),
                ),
                (
                    "payment_status",
                    models.CharField(
                        choices=[
                            ("not_paid", "Nincs fizetve"),
                            ("partial", "Részben fizetve"),
                            ("paid", "Kifizetve"),
                        ],
                        default="not_paid",
                        max_length=10,
                        verbose_name="Fizetési állapot",
                    ),
                ),
                (
                    "discount_percent",
                    models.DecimalField(
                        decimal_places=2,
                        default=0,
                        max_digits=5,
                        validators=[
                            django.core.validators.MinValueValidator(0),
                            django.core.validators.MaxValueValidator(100),
                        ],
                        verbose_name="Kedvezmény (%)",
                    ),
                ),
                ("materials_net", models.IntegerField(default=0)),
                ("materials_vat", models.IntegerField(default=0)),
                ("materials_gross", models.IntegerField(default=0, verbose_name="Anyagok bruttó")),
                ("fees_net", models.IntegerField(default=0)),
                ("fees_vat", models.IntegerField(default=0)),
                ("fees_gross", models.IntegerField(default=0, verbose_name="Díjak bruttó")),
                ("accessories_net", models.IntegerField(default=0)),
                ("accessories_vat", models.IntegerField(default=0)),
                ("accessories_gross", models.IntegerField(default=0, verbose_name="Kiegészítők bruttó")),
                (
                    "subtotal",
                    models.DecimalField(decimal_places=4, default=0, max_digits=14, verbose_name="Részösszeg"),
                ),
                (
                    "discount_amount",
                    models.DecimalField(decimal_places=4, default=0, max_digits=14, verbose_name="Kedvezmény"),
                ),
                (
                    "final_total",
                    models.DecimalField(decimal_places=4, default=0, max_digits=14, verbose_name="Végösszeg"),
                ),
                ("production_date", models.DateField(blank=True, null=True, verbose_name="Gyártás napja")),
                ("barcode", models.CharField(blank=True, max_length=50, verbose_name="Vonalkód")),
                ("comment", models.TextField(blank=True, verbose_name="Megjegyzés")),
                ("ordered_at", models.DateTimeField(blank=True, null=True, verbose_name="Megrendelve")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "created_by",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="created_quotes",
                        to=settings.AUTH_USER_MODEL,
                        verbose_name="Létrehozta",
                    ),
                ),
                (
                    "customer",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="quotes",
                        to="customers.customer",
                        verbose_name="Ügyfél",
                    ),
                ),
                (
                    "production_machine",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="quotes",
                        to="production.machine",
                        verbose_name="Gép",
                    ),
                ),
            ],
            options={
                "verbose_name": "Árajánlat",
                "verbose_name_plural": "Árajánlatok",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["customer", "status"], name="quote_customer_status_idx"),
                    models.Index(fields=["quote_year", "quote_sequence"], name="quote_sequence_idx"),
                    models.Index(fields=["order_year", "order_sequence"], name="order_sequence_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="QuoteStatusHistory",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("from_status", models.CharField(choices=STATUS_CHOICES, max_length=20)),
                ("to_status", models.CharField(choices=STATUS_CHOICES, max_length=20)),
                ("note", models.TextField(blank=True)),
                ("changed_at", models.DateTimeField(auto_now_add=True)),
                (
                    "changed_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        to=settings.AUTH_USER_MODEL,
                        verbose_name="Módosította",
                    ),
                ),
                (
                    "quote",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="status_history",
                        to="quotes.quote",
                    ),
                ),
            ],
            options={
                "verbose_name": "Állapotváltozás",
                "verbose_name_plural": "Állapotváltozások",
                "ordering": ["-changed_at", "-pk"],
            },
        ),
        migrations.CreateModel(
            name="QuotePanel",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("length_mm", models.PositiveIntegerField(verbose_name="Hossz (mm)")),
                ("width_mm", models.PositiveIntegerField(verbose_name="Szélesség (mm)")),
                (
                    "quantity",
                    models.PositiveIntegerField(
                        default=1,
                        validators=[django.core.validators.MinValueValidator(1)],
                        verbose_name="Darab",
                    ),
                ),
                ("label", models.CharField(blank=True, max_length=100, verbose_name="Jelölés")),
                (
                    "material",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT, to="catalog.material", verbose_name="Anyag"
                    ),
                ),
                (
                    "quote",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE, related_name="panels", to="quotes.quote"
                    ),
                ),
            ],
            options={
                "verbose_name": "Alkatrész",
                "verbose_name_plural": "Szabásjegyzék",
                "ordering": ["pk"],
            },
        ),
        migrations.CreateModel(
            name="QuoteMaterialPricing",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
            ]
            + _line_total_fields()
            + [
                ("material_name", models.CharField(max_length=150)),
                ("board_length_mm", models.PositiveIntegerField()),
                ("board_width_mm", models.PositiveIntegerField()),
                ("boards_used", models.PositiveIntegerField(default=0, verbose_name="Teljes táblák")),
                (
                    "usage_percentage",
                    models.DecimalField(
                        decimal_places=2,
                        default=0,
                        max_digits=5,
                        validators=[
                            django.core.validators.MinValueValidator(0),
                            django.core.validators.MaxValueValidator(100),
                        ],
                        verbose_name="Kihasználtság (%)",
                    ),
                ),
                (
                    "charged_sqm",
                    models.DecimalField(decimal_places=3, default=0, max_digits=10, verbose_name="Számlázott m²"),
                ),
                ("waste_multi", models.DecimalField(decimal_places=2, default=1, max_digits=4)),
                ("price_per_sqm", models.DecimalField(decimal_places=2, max_digits=12, verbose_name="Nettó Ft/m²")),
                (
                    "cutting_length_m",
                    models.DecimalField(decimal_places=2, default=0, max_digits=10, verbose_name="Vágási hossz (m)"),
                ),
                (
                    "cutting_fee_per_m",
                    models.DecimalField(
                        decimal_places=2, default=0, max_digits=10, verbose_name="Vágási díj (Ft/m)"
                    ),
                ),
                ("material_net", models.IntegerField(default=0)),
                ("material_vat", models.IntegerField(default=0)),
                ("material_gross", models.IntegerField(default=0)),
                ("cutting_net", models.IntegerField(default=0)),
                ("cutting_vat", models.IntegerField(default=0)),
                ("cutting_gross", models.IntegerField(default=0)),
                (
                    "material",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT, to="catalog.material", verbose_name="Anyag"
                    ),
                ),
                (
                    "quote",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE, related_name="pricing_rows", to="quotes.quote"
                    ),
                ),
            ],
            options={
                "verbose_name": "Anyagár",
                "verbose_name_plural": "Anyagárak",
                "ordering": ["pk"],
                "constraints": [
                    models.UniqueConstraint(fields=("quote", "material"), name="unique_pricing_row_per_material"),
                ],
            },
        ),
        migrations.CreateModel(
            name="QuoteFee",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
            ]
            + _line_total_fields()
            + [
                ("name", models.CharField(max_length=100, verbose_name="Megnevezés")),
                (
                    "quantity",
                    models.DecimalField(
                        decimal_places=2,
                        default=1,
                        max_digits=10,
                        validators=[django.core.validators.MinValueValidator(1)],
                        verbose_name="Mennyiség",
                    ),
                ),
                (
                    "unit_price_net",
                    models.DecimalField(decimal_places=2, max_digits=12, verbose_name="Nettó egységár"),
                ),
                ("comment", models.CharField(blank=True, max_length=255, verbose_name="Megjegyzés")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "fee_type",
                    models.ForeignKey(
                        blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, to="catalog.feetype"
                    ),
                ),
                (
                    "quote",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE, related_name="fees", to="quotes.quote"
                    ),
                ),
            ],
            options={
                "verbose_name": "Díj",
                "verbose_name_plural": "Díjak",
                "ordering": ["created_at", "pk"],
            },
        ),
        migrations.CreateModel(
            name="QuoteAccessory",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
            ]
            + _line_total_fields()
            + [
                ("name", models.CharField(max_length=150, verbose_name="Megnevezés")),
                (
                    "quantity",
                    models.PositiveIntegerField(
                        default=1,
                        validators=[django.core.validators.MinValueValidator(1)],
                        verbose_name="Mennyiség",
                    ),
                ),
                (
                    "unit_price_net",
                    models.DecimalField(decimal_places=2, max_digits=12, verbose_name="Nettó egységár"),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "accessory",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        to="catalog.accessory",
                        verbose_name="Kiegészítő",
                    ),
                ),
                (
                    "quote",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE, related_name="accessories", to="quotes.quote"
                    ),
                ),
            ],
            options={
                "verbose_name": "Kiegészítő tétel",
                "verbose_name_plural": "Kiegészítő tételek",
                "ordering": ["created_at", "pk"],
            },
        ),
    ]
