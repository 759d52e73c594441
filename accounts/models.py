"""
Custom User model with role-based access control.

One primary role per user keeps permission checks to a single field lookup.
Staff who cover two desks (e.g. the owner also receiving shipments) get the
higher-privilege role.
"""

from django.contrib.auth.models import AbstractUser
from django.db import models


class Role(models.TextChoices):
    OWNER = "owner", "Tulajdonos"
    SALES = "sales", "Értékesítő"
    WAREHOUSE = "warehouse", "Raktáros"
    OPERATOR = "operator", "Gépkezelő"
    ACCOUNTANT = "accountant", "Könyvelő"


class User(AbstractUser):
    """Extended user with a single primary role for RBAC."""

    role = models.CharField(
        max_length=20,
        choices=Role.choices,
        default=Role.SALES,
        verbose_name="Szerepkör",
    )
    phone = models.CharField(max_length=20, blank=True, verbose_name="Telefonszám")

    class Meta:
        verbose_name = "Felhasználó"
        verbose_name_plural = "Felhasználók"

    def __str__(self):
        return f"{self.get_full_name() or self.username} ({self.get_role_display()})"
