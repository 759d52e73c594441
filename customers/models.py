"""
Customer models.

Walk-in customers only need a name and phone; companies also carry a tax
number and billing address for invoicing. The default discount is copied onto
new quotes and can be overridden per quote.
"""

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models


class Customer(models.Model):
    name = models.CharField(max_length=200, verbose_name="Név / cégnév")
    email = models.EmailField(blank=True, verbose_name="E-mail")
    phone = models.CharField(max_length=30, blank=True, verbose_name="Telefonszám")
    tax_number = models.CharField(
        max_length=20,
        blank=True,
        verbose_name="Adószám",
        help_text="Céges vásárlónál kötelező a számlázáshoz",
    )
    billing_postal_code = models.CharField(max_length=10, blank=True, verbose_name="Irányítószám")
    billing_city = models.CharField(max_length=100, blank=True, verbose_name="Város")
    billing_street = models.CharField(max_length=200, blank=True, verbose_name="Utca, házszám")
    default_discount_percent = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        default=0,
        validators=[MinValueValidator(0), MaxValueValidator(100)],
        verbose_name="Alapértelmezett kedvezmény (%)",
    )
    notes = models.TextField(blank=True, verbose_name="Megjegyzés")
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Ügyfél"
        verbose_name_plural = "Ügyfelek"
        ordering = ["name"]
        indexes = [
            models.Index(fields=["name"], name="customer_name_idx"),
            models.Index(fields=["phone"], name="customer_phone_idx"),
        ]

    def __str__(self):
        return self.name

    @property
    def billing_address(self):
        parts = [self.billing_postal_code, self.billing_city, self.billing_street]
        return " ".join(p for p in parts if p)
