"""Payments and refunds recorded against orders."""

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("quotes", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="QuotePayment",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("amount", models.DecimalField(decimal_places=2, max_digits=12, verbose_name="Összeg")),
                (
                    "method",
                    models.CharField(
                        choices=[("cash", "Készpénz"), ("card", "Bankkártya"), ("transfer", "Átutalás")],
                        default="cash",
                        max_length=10,
                        verbose_name="Fizetési mód",
                    ),
                ),
                ("comment", models.CharField(blank=True, max_length=255, verbose_name="Megjegyzés")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Dátum")),
                (
                    "created_by",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        to=settings.AUTH_USER_MODEL,
                        verbose_name="Rögzítette",
                    ),
                ),
                (
                    "quote",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="payments",
                        to="quotes.quote",
                        verbose_name="Megrendelés",
                    ),
                ),
            ],
            options={
                "verbose_name": "Befizetés",
                "verbose_name_plural": "Befizetések",
                "ordering": ["-created_at", "-pk"],
            },
        ),
    ]
