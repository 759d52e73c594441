"""
Shop-wide configuration values.

Key-value rows edited from the admin. Known keys:
    machine_threshold   m² per panel cutoff for the machine suggestion (default 0.35)
"""

from django.db import models


class Setting(models.Model):
    key = models.CharField(max_length=100, unique=True, verbose_name="Kulcs")
    value = models.TextField(verbose_name="Érték")
    description = models.CharField(max_length=255, blank=True, verbose_name="Leírás")
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Beállítás"
        verbose_name_plural = "Beállítások"
        ordering = ["key"]

    def __str__(self):
        return f"{self.key} = {self.value[:50]}"

    @classmethod
    def get(cls, key, default=""):
        try:
            return cls.objects.get(key=key).value
        except cls.DoesNotExist:
            return default

    @classmethod
    def put(cls, key, value, description=""):
        defaults = {"value": str(value)}
        if description:
            defaults["description"] = description
        setting, _ = cls.objects.update_or_create(key=key, defaults=defaults)
        return setting
