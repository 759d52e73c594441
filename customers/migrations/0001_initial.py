"""Customer records."""

import django.core.validators
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Customer",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=200, verbose_name="Név / cégnév")),
                ("email", models.EmailField(blank=True, max_length=254, verbose_name="E-mail")),
                ("phone", models.CharField(blank=True, max_length=30, verbose_name="Telefonszám")),
                (
                    "tax_number",
                    models.CharField(
                        blank=True,
                        help_text="Céges vásárlónál kötelező a számlázáshoz",
                        max_length=20,
                        verbose_name="Adószám",
                    ),
                ),
                ("billing_postal_code", models.CharField(blank=True, max_length=10, verbose_name="Irányítószám")),
                ("billing_city", models.CharField(blank=True, max_length=100, verbose_name="Város")),
                ("billing_street", models.CharField(blank=True, max_length=200, verbose_name="Utca, házszám")),
                (
                    "default_discount_percent",
                    models.DecimalField(
                        decimal_places=2,
                        default=0,
                        max_digits=5,
                        validators=[
                            django.core.validators.MinValueValidator(0),
                            django.core.validators.MaxValueValidator(100),
                        ],
                        verbose_name="Alapértelmezett kedvezmény (%)",
                    ),
                ),
                ("notes", models.TextField(blank=True, verbose_name="Megjegyzés")),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Ügyfél",
                "verbose_name_plural": "Ügyfelek",
                "ordering": ["name"],
                "indexes": [
                    models.Index(fields=["name"], name="customer_name_idx"),
                    models.Index(fields=["phone"], name="customer_phone_idx"),
                ],
            },
        ),
    ]
