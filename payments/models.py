"""
Payment models.

An order can have multiple payments (deposit at ordering, balance at pickup).
Negative amounts are refunds. Every saved payment re-derives the quote's
payment status.
"""

from django.conf import settings
from django.db import models, transaction


class PaymentMethod(models.TextChoices):
    CASH = "cash", "Készpénz"
    CARD = "card", "Bankkártya"
    TRANSFER = "transfer", "Átutalás"


class PaymentStatus(models.TextChoices):
    NOT_PAID = "not_paid", "Nincs fizetve"
    PARTIAL = "partial", "Részben fizetve"
    PAID = "paid", "Kifizetve"


class QuotePayment(models.Model):
    quote = models.ForeignKey(
        "quotes.Quote",
        on_delete=models.PROTECT,
        related_name="payments",
        verbose_name="Megrendelés",
    )
    amount = models.DecimalField(max_digits=12, decimal_places=2, verbose_name="Összeg")
    method = models.CharField(
        max_length=10,
        choices=PaymentMethod.choices,
        default=PaymentMethod.CASH,
        verbose_name="Fizetési mód",
    )
    comment = models.CharField(max_length=255, blank=True, verbose_name="Megjegyzés")
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        verbose_name="Rögzítette",
    )
    created_at = models.DateTimeField(auto_now_add=True, verbose_name="Dátum")

    class Meta:
        verbose_name = "Befizetés"
        verbose_name_plural = "Befizetések"
        ordering = ["-created_at", "-pk"]

    def __str__(self):
        return f"{self.amount:,.0f} Ft ({self.get_method_display()}) - {self.quote}"

    def save(self, *args, **kwargs):
        super().save(*args, **kwargs)
        self.quote.refresh_payment_status()

    @classmethod
    def record(cls, quote, amount, method, created_by, comment=""):
        """
        Validate `amount` against the quote's balance and store it.

        Raises ValueError when the quote cannot take payments or the amount
        overshoots the remaining balance.
        """
        from quotes.models import QuoteStatus

        from .status import validate_payment_amount

        with transaction.atomic():
            quote = type(quote).objects.select_for_update().get(pk=quote.pk)
            if quote.status == QuoteStatus.DRAFT:
                raise ValueError("Árajánlatra nem rögzíthető befizetés, előbb rendelje meg.")
            amount = validate_payment_amount(quote.final_total, quote.total_paid, amount)
            if quote.status == QuoteStatus.CANCELLED and amount > 0:
                raise ValueError("Törölt megrendelésre csak visszatérítés rögzíthető.")
            return cls.objects.create(
                quote=quote,
                amount=amount,
                method=method,
                comment=comment,
                created_by=created_by,
            )
