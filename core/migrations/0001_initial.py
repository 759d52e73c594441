"""Key-value Setting store."""

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Setting",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("key", models.CharField(max_length=100, unique=True, verbose_name="Kulcs")),
                ("value", models.TextField(verbose_name="Érték")),
                ("description", models.CharField(blank=True, max_length=255, verbose_name="Leírás")),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Beállítás",
                "verbose_name_plural": "Beállítások",
                "ordering": ["key"],
            },
        ),
    ]
