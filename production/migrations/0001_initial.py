"""Production machines with an explicit role."""

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Machine",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=100, verbose_name="Gép neve")),
                ("comment", models.CharField(blank=True, max_length=255, verbose_name="Megjegyzés")),
                (
                    "role",
                    models.CharField(
                        blank=True,
                        choices=[("1", "Kis alkatrészek"), ("2", "Nagy alkatrészek"), ("3", "Kis rendelések")],
                        help_text="Üresen hagyva a név/megjegyzés alapján kerül besorolásra",
                        max_length=1,
                        verbose_name="Szerep",
                    ),
                ),
                (
                    "usage_limit_per_day",
                    models.PositiveIntegerField(default=0, verbose_name="Napi kapacitás (alkatrész)"),
                ),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "verbose_name": "Gép",
                "verbose_name_plural": "Gépek",
                "ordering": ["created_at", "pk"],
                "constraints": [
                    models.UniqueConstraint(
                        condition=models.Q(("role", ""), _negated=True),
                        fields=("role",),
                        name="unique_machine_role",
                    ),
                ],
            },
        ),
    ]
