"""
Catalog models: VAT rates and everything that can be sold or cut.

Boards (Material) and linear materials (edge banding, worktop strips) are
priced per m² / per m internally. Staff think in whole pieces, so the
set_*_price helpers convert piece prices back to unit prices and multipliers.
"""

from decimal import Decimal

from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from core.templatetags.money_filters import percent
from pricing.margin import (
    DEFAULT_MULTIPLIER,
    MAX_MULTIPLIER,
    MIN_MULTIPLIER,
    board_area_m2,
    gross_price_from_net,
    is_valid_multiplier,
    length_m,
    multiplier_from_gross_price,
    net_price_from_multiplier,
    per_unit_price_from_piece,
    piece_price_from_per_unit,
)
from pricing.rounding import gross_to_net_preserving_gross, round_half_up, to_decimal

_CENT = Decimal("0.01")


class VatRate(models.Model):
    name = models.CharField(max_length=50, verbose_name="Megnevezés")
    percent = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        validators=[MinValueValidator(0), MaxValueValidator(100)],
        verbose_name="ÁFA (%)",
    )
    is_active = models.BooleanField(default=True)

    class Meta:
        verbose_name = "ÁFA kulcs"
        verbose_name_plural = "ÁFA kulcsok"
        ordering = ["-percent"]

    def __str__(self):
        return f"{self.name} ({percent(self.percent)})"


class MarginPricedItem(models.Model):
    """Purchase price × multiplier = net selling price."""

    name = models.CharField(max_length=150, verbose_name="Megnevezés")
    base_price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=0,
        validators=[MinValueValidator(0)],
        verbose_name="Beszerzési nettó ár",
    )
    multiplier = models.DecimalField(
        max_digits=4,
        decimal_places=2,
        default=DEFAULT_MULTIPLIER,
        validators=[MinValueValidator(MIN_MULTIPLIER), MaxValueValidator(MAX_MULTIPLIER)],
        verbose_name="Árrés szorzó",
    )
    vat = models.ForeignKey(VatRate, on_delete=models.PROTECT, verbose_name="ÁFA kulcs")
    quantity_in_stock = models.DecimalField(
        max_digits=12,
        decimal_places=3,
        default=0,
        verbose_name="Készlet",
    )
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True
        ordering = ["name"]

    def __str__(self):
        return self.name

    @property
    def vat_percent(self):
        return self.vat.percent if self.vat_id else Decimal("0")

    def _checked_multiplier(self, multiplier):
        if multiplier is None:
            raise ValueError("Beszerzési ár nélkül a szorzó nem számolható.")
        if not is_valid_multiplier(multiplier):
            raise ValueError(
                f"A szorzó ({multiplier}) a megengedett {MIN_MULTIPLIER}–{MAX_MULTIPLIER} tartományon kívül esik."
            )
        return multiplier


class Material(MarginPricedItem):
    """
    Sheet material (chipboard, MDF, plywood).

    base_price is the net purchase price per m². Cutting charges a material by
    full boards plus charged m² of offcuts; waste_multi inflates the used area
    to cover what cannot be reused.
    """

    length_mm = models.PositiveIntegerField(verbose_name="Tábla hossz (mm)")
    width_mm = models.PositiveIntegerField(verbose_name="Tábla szélesség (mm)")
    thickness_mm = models.DecimalField(
        max_digits=5, decimal_places=1, default=18, verbose_name="Vastagság (mm)"
    )
    waste_multi = models.DecimalField(
        max_digits=4,
        decimal_places=2,
        default=1,
        validators=[MinValueValidator(1)],
        verbose_name="Hulladék szorzó",
    )
    on_stock = models.BooleanField(default=True, verbose_name="Raktári termék")

    class Meta(MarginPricedItem.Meta):
        verbose_name = "Lapanyag"
        verbose_name_plural = "Lapanyagok"

    def __str__(self):
        return f"{self.name} {self.length_mm}×{self.width_mm} ({self.thickness_mm} mm)"

    def save(self, *args, changed_by=None, **kwargs):
        previous = None
        if self.pk:
            previous = Material.objects.filter(pk=self.pk).values("base_price", "multiplier").first()
        super().save(*args, **kwargs)
        if previous and (
            previous["base_price"] != to_decimal(self.base_price)
            or previous["multiplier"] != to_decimal(self.multiplier)
        ):
            MaterialPriceHistory.objects.create(
                material=self,
                old_base_price=previous["base_price"],
                new_base_price=self.base_price,
                old_multiplier=previous["multiplier"],
                new_multiplier=self.multiplier,
                changed_by=changed_by,
            )

    @property
    def board_area_m2(self):
        return board_area_m2(self.length_mm, self.width_mm)

    @property
    def price_per_sqm(self):
        return net_price_from_multiplier(self.base_price, self.multiplier)

    @property
    def gross_price_per_sqm(self):
        return gross_price_from_net(self.price_per_sqm, self.vat_percent)

    @property
    def board_purchase_price(self):
        return round_half_up(piece_price_from_per_unit(self.base_price, self.board_area_m2))

    @property
    def board_selling_price(self):
        """Gross price of one full board."""
        net = net_price_from_multiplier(
            piece_price_from_per_unit(self.base_price, self.board_area_m2), self.multiplier
        )
        return gross_price_from_net(net, self.vat_percent)

    def set_board_selling_price(self, gross_price):
        """Derive the multiplier from a gross price for the whole board."""
        piece_base = piece_price_from_per_unit(self.base_price, self.board_area_m2)
        multiplier = multiplier_from_gross_price(gross_price, self.vat_percent, piece_base)
        self.multiplier = self._checked_multiplier(multiplier)
        return self.multiplier

    def set_board_purchase_price(self, net_price):
        per_sqm = per_unit_price_from_piece(net_price, self.board_area_m2)
        if per_sqm is None:
            raise ValueError("A tábla méretei hiányoznak.")
        self.base_price = per_sqm.quantize(_CENT)
        return self.base_price


class LinearMaterial(MarginPricedItem):
    """Length-priced stock (edge banding, worktops). base_price is per m."""

    length_mm = models.PositiveIntegerField(verbose_name="Hossz (mm)")
    width_mm = models.PositiveIntegerField(default=0, verbose_name="Szélesség (mm)")
    on_stock = models.BooleanField(default=True, verbose_name="Raktári termék")

    class Meta(MarginPricedItem.Meta):
        verbose_name = "Szálanyag"
        verbose_name_plural = "Szálanyagok"

    @property
    def length_m(self):
        return length_m(self.length_mm)

    @property
    def price_per_m(self):
        return net_price_from_multiplier(self.base_price, self.multiplier)

    @property
    def piece_purchase_price(self):
        return round_half_up(piece_price_from_per_unit(self.base_price, self.length_m))

    @property
    def piece_selling_price(self):
        net = net_price_from_multiplier(
            piece_price_from_per_unit(self.base_price, self.length_m), self.multiplier
        )
        return gross_price_from_net(net, self.vat_percent)

    def set_piece_selling_price(self, gross_price):
        piece_base = piece_price_from_per_unit(self.base_price, self.length_m)
        multiplier = multiplier_from_gross_price(gross_price, self.vat_percent, piece_base)
        self.multiplier = self._checked_multiplier(multiplier)
        return self.multiplier

    def set_piece_purchase_price(self, net_price):
        per_m = per_unit_price_from_piece(net_price, self.length_m)
        if per_m is None:
            raise ValueError("A hossz hiányzik.")
        self.base_price = per_m.quantize(_CENT)
        return self.base_price


class Accessory(MarginPricedItem):
    """Hardware sold per piece: hinges, handles, drawer slides."""

    sku = models.CharField(max_length=50, blank=True, verbose_name="Cikkszám")
    unit = models.CharField(max_length=20, default="db", verbose_name="Mértékegység")

    class Meta(MarginPricedItem.Meta):
        verbose_name = "Kiegészítő"
        verbose_name_plural = "Kiegészítők"

    @property
    def net_price(self):
        return net_price_from_multiplier(self.base_price, self.multiplier)

    @property
    def gross_price(self):
        return gross_price_from_net(self.net_price, self.vat_percent)

    def set_gross_price(self, gross_price):
        multiplier = multiplier_from_gross_price(gross_price, self.vat_percent, self.base_price)
        self.multiplier = self._checked_multiplier(multiplier)
        return self.multiplier


class FeeType(models.Model):
    """Service fees added to a quote: cutting, edge banding, delivery, design."""

    name = models.CharField(max_length=100, verbose_name="Megnevezés")
    net_price = models.DecimalField(max_digits=12, decimal_places=2, default=0, verbose_name="Nettó egységár")
    vat = models.ForeignKey(VatRate, on_delete=models.PROTECT, verbose_name="ÁFA kulcs")
    unit = models.CharField(max_length=20, default="db", verbose_name="Mértékegység")
    is_active = models.BooleanField(default=True)

    class Meta:
        verbose_name = "Díjtípus"
        verbose_name_plural = "Díjtípusok"
        ordering = ["name"]

    def __str__(self):
        return self.name

    @property
    def vat_percent(self):
        return self.vat.percent if self.vat_id else Decimal("0")

    @property
    def gross_price(self):
        return gross_price_from_net(round_half_up(self.net_price), self.vat_percent)

    def set_gross_price(self, gross_price):
        """Store the integer net that grosses back to exactly `gross_price`."""
        self.net_price = Decimal(gross_to_net_preserving_gross(gross_price, self.vat_percent))
        return self.net_price


class MaterialPriceHistory(models.Model):
    """Append-only log of purchase price and multiplier changes on boards."""

    material = models.ForeignKey(Material, on_delete=models.CASCADE, related_name="price_history")
    old_base_price = models.DecimalField(max_digits=12, decimal_places=2)
    new_base_price = models.DecimalField(max_digits=12, decimal_places=2)
    old_multiplier = models.DecimalField(max_digits=4, decimal_places=2)
    new_multiplier = models.DecimalField(max_digits=4, decimal_places=2)
    changed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        verbose_name="Módosította",
    )
    changed_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = "Árváltozás"
        verbose_name_plural = "Árváltozások"
        ordering = ["-changed_at", "-pk"]

    def __str__(self):
        return f"{self.material.name}: {self.old_base_price} → {self.new_base_price}"


class TransactionType(models.TextChoices):
    IN = "in", "Bevételezés"
    RESERVED = "reserved", "Foglalás"
    OUT = "out", "Kivételezés"


class ReferenceType(models.TextChoices):
    SHIPMENT_ITEM = "shipment_item", "Szállítmány tétel"
    QUOTE = "quote", "Megrendelés"
    MANUAL = "manual", "Kézi"


class InventoryTransaction(models.Model):
    """
    Board movement log. Quantities are in boards and always positive; the
    type gives the direction. 'in' and 'out' rows carry a per-board net price,
    reservations do not.
    """

    material = models.ForeignKey(
        Material,
        on_delete=models.PROTECT,
        related_name="inventory_transactions",
        verbose_name="Lapanyag",
    )
    transaction_type = models.CharField(max_length=10, choices=TransactionType.choices, verbose_name="Típus")
    quantity = models.DecimalField(max_digits=12, decimal_places=3, verbose_name="Mennyiség (tábla)")
    unit_price = models.DecimalField(
        max_digits=12, decimal_places=2, null=True, blank=True, verbose_name="Nettó egységár"
    )
    reference_type = models.CharField(max_length=20, choices=ReferenceType.choices, verbose_name="Hivatkozás")
    reference_id = models.PositiveBigIntegerField(null=True, blank=True)
    comment = models.CharField(max_length=255, blank=True, verbose_name="Megjegyzés")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = "Készletmozgás"
        verbose_name_plural = "Készletmozgások"
        ordering = ["-created_at", "-pk"]
        indexes = [
            models.Index(fields=["material", "transaction_type"], name="inventory_material_type_idx"),
            models.Index(fields=["reference_type", "reference_id"], name="inventory_reference_idx"),
        ]

    def __str__(self):
        return f"{self.get_transaction_type_display()}: {self.material.name} × {self.quantity}"
