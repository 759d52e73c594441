"""
Production machines.

The shop runs three panel saws. Which one cuts an order is suggested by
production.classifier from the order's material usage; the role field tells
the classifier which machine plays which part.
"""

from django.db import models


class MachineRole(models.TextChoices):
    SMALL_PANEL = "1", "Kis alkatrészek"
    LARGE_PANEL = "2", "Nagy alkatrészek"
    SMALL_ORDER = "3", "Kis rendelések"


class Machine(models.Model):
    name = models.CharField(max_length=100, verbose_name="Gép neve")
    comment = models.CharField(max_length=255, blank=True, verbose_name="Megjegyzés")
    role = models.CharField(
        max_length=1,
        choices=MachineRole.choices,
        blank=True,
        verbose_name="Szerep",
        help_text="Üresen hagyva a név/megjegyzés alapján kerül besorolásra",
    )
    usage_limit_per_day = models.PositiveIntegerField(default=0, verbose_name="Napi kapacitás (alkatrész)")
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = "Gép"
        verbose_name_plural = "Gépek"
        ordering = ["created_at", "pk"]
        constraints = [
            models.UniqueConstraint(
                fields=["role"],
                condition=~models.Q(role=""),
                name="unique_machine_role",
            ),
        ]

    def __str__(self):
        return self.name
