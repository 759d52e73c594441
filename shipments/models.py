"""
Supplier shipments.

A shipment is built up as a draft while the goods are counted, then received
once: receiving freezes the lines, adds the quantities to catalog stock and
logs board arrivals in the inventory ledger at their purchase price.
"""

import logging

from django.conf import settings
from django.db import models, transaction
from django.db.models import F
from django.utils import timezone

from catalog.inventory import record_inbound
from catalog.models import ReferenceType
from pricing.rounding import line_total, sum_line_totals, to_decimal

logger = logging.getLogger(__name__)


class ShipmentStatus(models.TextChoices):
    DRAFT = "draft", "Rögzítés alatt"
    RECEIVED = "received", "Bevételezve"


class Shipment(models.Model):
    shipment_number = models.CharField(max_length=20, unique=True, blank=True, verbose_name="Szállítmányszám")
    year = models.PositiveSmallIntegerField(null=True, editable=False)
    sequence = models.PositiveIntegerField(null=True, editable=False)
    supplier_name = models.CharField(max_length=200, verbose_name="Beszállító")
    supplier_reference = models.CharField(max_length=50, blank=True, verbose_name="Szállítólevél száma")
    status = models.CharField(
        max_length=10,
        choices=ShipmentStatus.choices,
        default=ShipmentStatus.DRAFT,
        verbose_name="Állapot",
    )
    comment = models.TextField(blank=True, verbose_name="Megjegyzés")
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="created_shipments",
        verbose_name="Létrehozta",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    received_at = models.DateTimeField(null=True, blank=True, verbose_name="Bevételezve")
    received_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="received_shipments",
        verbose_name="Bevételezte",
    )

    class Meta:
        verbose_name = "Szállítmány"
        verbose_name_plural = "Szállítmányok"
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.shipment_number} ({self.supplier_name})"

    def save(self, *args, **kwargs):
        if not self.shipment_number:
            self._assign_shipment_number()
        super().save(*args, **kwargs)

    def _assign_shipment_number(self):
        current_year = timezone.now().year
        with transaction.atomic():
            last = (
                Shipment.objects.select_for_update()
                .filter(year=current_year)
                .order_by("-sequence")
                .first()
            )
            self.sequence = (last.sequence + 1) if last else 1
            self.year = current_year
            self.shipment_number = f"SH-{current_year}-{self.sequence:05d}"

    @property
    def is_received(self):
        return self.status == ShipmentStatus.RECEIVED

    @property
    def totals(self):
        return sum_line_totals(item.total for item in self.items.all())

    def receive(self, user):
        """Mark as received and add every line to stock. Allowed once."""
        with transaction.atomic():
            locked = Shipment.objects.select_for_update().get(pk=self.pk)
            if locked.is_received:
                raise ValueError(f"A(z) {self.shipment_number} szállítmány már be van vételezve.")
            items = list(self.items.all())
            if not items:
                raise ValueError("Üres szállítmány nem vételezhető be.")
            for item in items:
                stock_item = item.stock_item
                type(stock_item).objects.filter(pk=stock_item.pk).update(
                    quantity_in_stock=F("quantity_in_stock") + item.quantity_received
                )
                if item.material_id:
                    record_inbound(
                        item.material,
                        item.quantity_received,
                        item.net_price,
                        reference_type=ReferenceType.SHIPMENT_ITEM,
                        reference_id=item.pk,
                        comment=f"Bevételezés: {self.shipment_number}",
                    )
            self.status = ShipmentStatus.RECEIVED
            self.received_at = timezone.now()
            self.received_by = user
            self.save(update_fields=["status", "received_at", "received_by"])

        logger.info("Shipment %s received by %s (%d lines)", self.shipment_number, user, len(items))


class ShipmentItem(models.Model):
    """One delivered catalog item. Exactly one of the three item links is set."""

    shipment = models.ForeignKey(Shipment, on_delete=models.CASCADE, related_name="items")
    material = models.ForeignKey("catalog.Material", on_delete=models.PROTECT, null=True, blank=True)
    linear_material = models.ForeignKey("catalog.LinearMaterial", on_delete=models.PROTECT, null=True, blank=True)
    accessory = models.ForeignKey("catalog.Accessory", on_delete=models.PROTECT, null=True, blank=True)
    description = models.CharField(max_length=200, blank=True, verbose_name="Megnevezés")
    quantity_received = models.DecimalField(max_digits=12, decimal_places=3, verbose_name="Beérkezett mennyiség")
    net_price = models.DecimalField(max_digits=12, decimal_places=2, verbose_name="Nettó beszerzési ár")
    vat_percent = models.DecimalField(max_digits=5, decimal_places=2, default=27, verbose_name="ÁFA (%)")
    net_total = models.IntegerField(default=0, verbose_name="Nettó")
    vat_amount = models.IntegerField(default=0, verbose_name="ÁFA")
    gross_total = models.IntegerField(default=0, verbose_name="Bruttó")

    class Meta:
        verbose_name = "Szállítmány tétel"
        verbose_name_plural = "Szállítmány tételek"
        ordering = ["pk"]
        constraints = [
            models.CheckConstraint(
                condition=(
                    models.Q(material__isnull=False, linear_material__isnull=True, accessory__isnull=True)
                    | models.Q(material__isnull=True, linear_material__isnull=False, accessory__isnull=True)
                    | models.Q(material__isnull=True, linear_material__isnull=True, accessory__isnull=False)
                ),
                name="shipment_item_single_target",
            ),
        ]

    def __str__(self):
        return f"{self.description or self.stock_item} × {self.quantity_received}"

    @property
    def stock_item(self):
        return self.material or self.linear_material or self.accessory

    @property
    def total(self):
        return line_total(self.quantity_received, self.net_price, self.vat_percent)

    def save(self, *args, **kwargs):
        if self.shipment.is_received:
            raise ValueError("Bevételezett szállítmány tételei nem módosíthatók.")
        if to_decimal(self.quantity_received) < 0:
            raise ValueError("A mennyiség nem lehet negatív.")
        if not self.description and self.stock_item is not None:
            self.description = self.stock_item.name
        total = self.total
        self.net_total, self.vat_amount, self.gross_total = total.net_total, total.vat_amount, total.gross_total
        super().save(*args, **kwargs)
