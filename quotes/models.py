"""
Quote / order models, the core of the cutting workflow.

A Quote starts as a draft, becomes an order (own order number) and then moves
through production. Every status change is recorded in QuoteStatusHistory.
Line totals are whole forints computed by pricing.rounding.line_total; the
quote level totals are rebuilt from the lines by recalculate_totals().
"""

import logging
from decimal import Decimal

from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models, transaction
from django.utils import timezone

from catalog.inventory import consume_for_quote, release_for_quote, reserve_for_quote
from payments.models import PaymentMethod, PaymentStatus
from payments.status import payment_status_after, remaining_balance
from pricing.margin import board_area_m2
from pricing.rounding import LineTotal, line_total, round_half_up, sum_line_totals, to_decimal
from pricing.totals import quote_totals

logger = logging.getLogger(__name__)


class QuoteStatus(models.TextChoices):
    DRAFT = "draft", "Árajánlat"
    ORDERED = "ordered", "Megrendelve"
    IN_PRODUCTION = "in_production", "Gyártásban"
    READY = "ready", "Elkészült"
    FINISHED = "finished", "Átadva"
    CANCELLED = "cancelled", "Törölve"


# Valid status transitions, enforced in transition_to()
ALLOWED_TRANSITIONS = {
    QuoteStatus.DRAFT: {QuoteStatus.ORDERED, QuoteStatus.CANCELLED},
    QuoteStatus.ORDERED: {QuoteStatus.IN_PRODUCTION, QuoteStatus.CANCELLED},
    QuoteStatus.IN_PRODUCTION: {QuoteStatus.READY, QuoteStatus.ORDERED},
    QuoteStatus.READY: {QuoteStatus.FINISHED, QuoteStatus.IN_PRODUCTION},
    QuoteStatus.FINISHED: set(),
    QuoteStatus.CANCELLED: set(),
}

LOCKED_STATUSES = {QuoteStatus.READY, QuoteStatus.FINISHED}


class Quote(models.Model):
    """One customer request. Becomes an order once the customer confirms it."""

    quote_number = models.CharField(max_length=20, unique=True, blank=True, verbose_name="Ajánlatszám")
    quote_year = models.PositiveSmallIntegerField(null=True, editable=False)
    quote_sequence = models.PositiveIntegerField(null=True, editable=False)
    order_number = models.CharField(max_length=20, blank=True, db_index=True, verbose_name="Rendelésszám")
    order_year = models.PositiveSmallIntegerField(null=True, editable=False)
    order_sequence = models.PositiveIntegerField(null=True, editable=False)

    customer = models.ForeignKey(
        "customers.Customer",
        on_delete=models.PROTECT,
        related_name="quotes",
        verbose_name="Ügyfél",
    )
    status = models.CharField(
        max_length=20,
        choices=QuoteStatus.choices,
        default=QuoteStatus.DRAFT,
        verbose_name="Állapot",
        db_index=True,
    )
    payment_status = models.CharField(
        max_length=10,
        choices=PaymentStatus.choices,
        default=PaymentStatus.NOT_PAID,
        verbose_name="Fizetési állapot",
    )
    discount_percent = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        default=0,
        validators=[MinValueValidator(0), MaxValueValidator(100)],
        verbose_name="Kedvezmény (%)",
    )

    # Totals, rebuilt by recalculate_totals()
    materials_net = models.IntegerField(default=0)
    materials_vat = models.IntegerField(default=0)
    materials_gross = models.IntegerField(default=0, verbose_name="Anyagok bruttó")
    fees_net = models.IntegerField(default=0)
    fees_vat = models.IntegerField(default=0)
    fees_gross = models.IntegerField(default=0, verbose_name="Díjak bruttó")
    accessories_net = models.IntegerField(default=0)
    accessories_vat = models.IntegerField(default=0)
    accessories_gross = models.IntegerField(default=0, verbose_name="Kiegészítők bruttó")
    subtotal = models.DecimalField(max_digits=14, decimal_places=4, default=0, verbose_name="Részösszeg")
    discount_amount = models.DecimalField(max_digits=14, decimal_places=4, default=0, verbose_name="Kedvezmény")
    final_total = models.DecimalField(max_digits=14, decimal_places=4, default=0, verbose_name="Végösszeg")

    # Production
    production_machine = models.ForeignKey(
        "production.Machine",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="quotes",
        verbose_name="Gép",
    )
    production_date = models.DateField(null=True, blank=True, verbose_name="Gyártás napja")
    barcode = models.CharField(max_length=50, blank=True, verbose_name="Vonalkód")

    comment = models.TextField(blank=True, verbose_name="Megjegyzés")
    ordered_at = models.DateTimeField(null=True, blank=True, verbose_name="Megrendelve")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="created_quotes",
        verbose_name="Létrehozta",
    )

    class Meta:
        verbose_name = "Árajánlat"
        verbose_name_plural = "Árajánlatok"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["customer", "status"], name="quote_customer_status_idx"),
            models.Index(fields=["quote_year", "quote_sequence"], name="quote_sequence_idx"),
            models.Index(fields=["order_year", "order_sequence"], name="order_sequence_idx"),
        ]

    def __str__(self):
        return self.order_number or self.quote_number or f"#{self.pk}"

    def save(self, *args, **kwargs):
        if not self.quote_number:
            self._assign_quote_number()
        super().save(*args, **kwargs)

    def _assign_quote_number(self):
        """Next Q-YYYY-NNNNN, sequential per year."""
        current_year = timezone.now().year
        with transaction.atomic():
            last = (
                Quote.objects.select_for_update()
                .filter(quote_year=current_year)
                .order_by("-quote_sequence")
                .first()
            )
            self.quote_sequence = (last.quote_sequence + 1) if last else 1
            self.quote_year = current_year
            self.quote_number = f"Q-{current_year}-{self.quote_sequence:05d}"

    def _assign_order_number(self):
        current_year = timezone.now().year
        with transaction.atomic():
            last = (
                Quote.objects.select_for_update()
                .filter(order_year=current_year)
                .order_by("-order_sequence")
                .first()
            )
            self.order_sequence = (last.order_sequence + 1) if last else 1
            self.order_year = current_year
            self.order_number = f"ORD-{current_year}-{self.order_sequence:05d}"

    # -- money -------------------------------------------------------------

    @property
    def final_total_rounded(self):
        return round_half_up(self.final_total)

    @property
    def total_paid(self):
        return self.payments.aggregate(total=models.Sum("amount"))["total"] or Decimal("0")

    @property
    def remaining_balance(self):
        return remaining_balance(self.final_total, self.total_paid)

    def refresh_payment_status(self):
        new_status = payment_status_after(self.final_total, self.total_paid)
        if self.payment_status != new_status:
            self.payment_status = new_status
            self.save(update_fields=["payment_status", "updated_at"])

    def recalculate_totals(self):
        """Rebuild every stored total from the current lines."""
        materials = sum_line_totals(row.total for row in self.pricing_rows.all())
        fees = sum_line_totals(fee.total for fee in self.fees.all())
        accessories = sum_line_totals(acc.total for acc in self.accessories.all())
        totals = quote_totals(
            materials.gross_total, fees.gross_total, accessories.gross_total, self.discount_percent
        )

        self.materials_net, self.materials_vat, self.materials_gross = (
            materials.net_total, materials.vat_amount, materials.gross_total
        )
        self.fees_net, self.fees_vat, self.fees_gross = fees.net_total, fees.vat_amount, fees.gross_total
        self.accessories_net, self.accessories_vat, self.accessories_gross = (
            accessories.net_total, accessories.vat_amount, accessories.gross_total
        )
        self.subtotal = totals.subtotal
        self.discount_amount = totals.discount_amount
        self.final_total = totals.final_total
        self.payment_status = payment_status_after(self.final_total, self.total_paid)
        self.save()
        return totals

    # -- editing -----------------------------------------------------------

    @property
    def is_locked(self):
        return self.status in LOCKED_STATUSES

    def ensure_editable(self):
        if self.is_locked:
            raise ValueError(f"A(z) {self} {self.get_status_display().lower()} állapotban nem módosítható.")

    def set_discount(self, discount_percent):
        self.ensure_editable()
        discount_percent = to_decimal(discount_percent)
        if not 0 <= discount_percent <= 100:
            raise ValueError("A kedvezmény 0 és 100% között lehet.")
        self.discount_percent = discount_percent
        return self.recalculate_totals()

    def add_fee(self, fee_type, quantity=1, unit_price_net=None, comment=""):
        self.ensure_editable()
        fee = QuoteFee.objects.create(
            quote=self,
            fee_type=fee_type,
            name=fee_type.name,
            quantity=quantity,
            unit_price_net=fee_type.net_price if unit_price_net is None else unit_price_net,
            vat_percent=fee_type.vat_percent,
            comment=comment,
        )
        self.recalculate_totals()
        return fee

    def add_accessory(self, accessory, quantity=1):
        self.ensure_editable()
        line = QuoteAccessory.objects.create(
            quote=self,
            accessory=accessory,
            name=accessory.name,
            quantity=quantity,
            unit_price_net=accessory.net_price,
            vat_percent=accessory.vat_percent,
        )
        self.recalculate_totals()
        return line

    def remove_line(self, line):
        self.ensure_editable()
        line.delete()
        self.recalculate_totals()

    def add_panel(self, material, length_mm, width_mm, quantity=1, label=""):
        """Append a line to the cutting list. Panels feed the machine suggestion, not the totals."""
        return QuotePanel.objects.create(
            quote=self,
            material=material,
            length_mm=length_mm,
            width_mm=width_mm,
            quantity=quantity,
            label=label,
        )

    def remove_panel(self, panel):
        self.ensure_editable()
        panel.delete()

    def price_material(self, material, boards_used=0, usage_percentage=0, charged_sqm=0,
                       cutting_length_m=0, cutting_fee_per_m=0):
        """Create or replace the pricing row for `material`, snapshotting its current prices."""
        self.ensure_editable()
        row, _ = QuoteMaterialPricing.objects.update_or_create(
            quote=self,
            material=material,
            defaults={
                "material_name": material.name,
                "board_length_mm": material.length_mm,
                "board_width_mm": material.width_mm,
                "boards_used": boards_used,
                "usage_percentage": usage_percentage,
                "charged_sqm": charged_sqm,
                "waste_multi": material.waste_multi,
                "price_per_sqm": material.price_per_sqm,
                "vat_percent": material.vat_percent,
                "cutting_length_m": cutting_length_m,
                "cutting_fee_per_m": cutting_fee_per_m,
            },
        )
        self.recalculate_totals()
        return row

    # -- lifecycle ---------------------------------------------------------

    def transition_to(self, new_status, changed_by=None, note=""):
        """
        Move the quote to new_status, enforcing allowed transitions.
        Records a history entry for every change.
        """
        allowed = ALLOWED_TRANSITIONS.get(self.status, set())
        if new_status not in allowed:
            raise ValueError(
                f"Cannot transition from '{self.status}' to '{new_status}'. "
                f"Allowed: {sorted(allowed)}"
            )
        old_status = self.status
        with transaction.atomic():
            self.status = new_status
            self.save(update_fields=["status", "updated_at"])

            QuoteStatusHistory.objects.create(
                quote=self,
                from_status=old_status,
                to_status=new_status,
                changed_by=changed_by,
                note=note,
            )
            if new_status == QuoteStatus.FINISHED:
                consume_for_quote(self)

    def create_order(self, user, initial_payment=None, payment_method=PaymentMethod.CASH, comment=""):
        """
        Turn a draft quote into an order, optionally taking a deposit.

        The deposit goes through the same validation as any payment; if it is
        rejected the quote stays a draft.
        """
        from payments.models import QuotePayment

        if self.status != QuoteStatus.DRAFT:
            raise ValueError(f"Csak árajánlatból lehet megrendelés (jelenleg: {self.get_status_display()}).")

        try:
            with transaction.atomic():
                self.recalculate_totals()
                self.transition_to(QuoteStatus.ORDERED, changed_by=user, note="Megrendelés létrehozva")
                self._assign_order_number()
                self.ordered_at = timezone.now()
                self.save(update_fields=["order_number", "order_year", "order_sequence", "ordered_at", "updated_at"])
                if initial_payment is not None and round_half_up(initial_payment) != 0:
                    QuotePayment.record(self, initial_payment, payment_method, created_by=user, comment=comment)
        except ValueError:
            self.refresh_from_db()
            raise
        self.refresh_from_db()

        logger.info("Quote %s ordered as %s by %s", self.quote_number, self.order_number, user)
        return self

    def assign_production(self, machine, production_date, barcode, changed_by=None):
        if not machine or not production_date or not barcode:
            raise ValueError("Hiányzó adatok: gép, dátum és vonalkód kötelező.")
        if self.status not in (QuoteStatus.ORDERED, QuoteStatus.IN_PRODUCTION):
            raise ValueError(f"{self.get_status_display()} állapotú rendelés nem adható gyártásba.")

        with transaction.atomic():
            self.production_machine = machine
            self.production_date = production_date
            self.barcode = barcode
            self.save(update_fields=["production_machine", "production_date", "barcode", "updated_at"])
            if self.status == QuoteStatus.ORDERED:
                self.transition_to(QuoteStatus.IN_PRODUCTION, changed_by=changed_by, note=f"Gép: {machine}")
            reserve_for_quote(self)

        logger.info("%s assigned to %s for %s", self, machine, production_date)

    def clear_production(self, changed_by=None):
        if self.status != QuoteStatus.IN_PRODUCTION:
            raise ValueError("Csak gyártásban lévő rendelés vehető vissza.")
        with transaction.atomic():
            self.production_machine = None
            self.production_date = None
            self.barcode = ""
            self.save(update_fields=["production_machine", "production_date", "barcode", "updated_at"])
            self.transition_to(QuoteStatus.ORDERED, changed_by=changed_by, note="Gyártásból visszavéve")
            release_for_quote(self)
        logger.info("%s removed from production", self)


class QuoteStatusHistory(models.Model):
    """Immutable audit log of every status change on a quote."""

    quote = models.ForeignKey(Quote, on_delete=models.CASCADE, related_name="status_history")
    from_status = models.CharField(max_length=20, choices=QuoteStatus.choices)
    to_status = models.CharField(max_length=20, choices=QuoteStatus.choices)
    changed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        verbose_name="Módosította",
    )
    note = models.TextField(blank=True)
    changed_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = "Állapotváltozás"
        verbose_name_plural = "Állapotváltozások"
        ordering = ["-changed_at", "-pk"]

    def __str__(self):
        return f"{self.quote}: {self.from_status} → {self.to_status}"


class QuotePanel(models.Model):
    """One line of the cutting list."""

    quote = models.ForeignKey(Quote, on_delete=models.CASCADE, related_name="panels")
    material = models.ForeignKey("catalog.Material", on_delete=models.PROTECT, verbose_name="Anyag")
    length_mm = models.PositiveIntegerField(verbose_name="Hossz (mm)")
    width_mm = models.PositiveIntegerField(verbose_name="Szélesség (mm)")
    quantity = models.PositiveIntegerField(default=1, validators=[MinValueValidator(1)], verbose_name="Darab")
    label = models.CharField(max_length=100, blank=True, verbose_name="Jelölés")

    class Meta:
        verbose_name = "Alkatrész"
        verbose_name_plural = "Szabásjegyzék"
        ordering = ["pk"]

    def __str__(self):
        return f"{self.length_mm}×{self.width_mm} × {self.quantity}"

    def save(self, *args, **kwargs):
        self.quote.ensure_editable()
        super().save(*args, **kwargs)


class PricedLine(models.Model):
    """Stores whole-forint net/VAT/gross computed on every save."""

    vat_percent = models.DecimalField(max_digits=5, decimal_places=2, default=0, verbose_name="ÁFA (%)")
    net_total = models.IntegerField(default=0, verbose_name="Nettó")
    vat_amount = models.IntegerField(default=0, verbose_name="ÁFA")
    gross_total = models.IntegerField(default=0, verbose_name="Bruttó")

    class Meta:
        abstract = True

    @property
    def total(self):
        return LineTotal(self.net_total, self.vat_amount, self.gross_total)

    def compute_total(self):
        raise NotImplementedError

    def save(self, *args, **kwargs):
        self.quote.ensure_editable()
        line = self.compute_total()
        self.net_total, self.vat_amount, self.gross_total = line.net_total, line.vat_amount, line.gross_total
        super().save(*args, **kwargs)


class QuoteMaterialPricing(PricedLine):
    """
    Material charge for one board type: full boards plus charged m² of a
    partly used board, and optionally the cutting length on that material.

    Board data and prices are snapshots taken when the row was priced.
    """

    quote = models.ForeignKey(Quote, on_delete=models.CASCADE, related_name="pricing_rows")
    material = models.ForeignKey("catalog.Material", on_delete=models.PROTECT, verbose_name="Anyag")
    material_name = models.CharField(max_length=150)
    board_length_mm = models.PositiveIntegerField()
    board_width_mm = models.PositiveIntegerField()
    boards_used = models.PositiveIntegerField(default=0, verbose_name="Teljes táblák")
    usage_percentage = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        default=0,
        validators=[MinValueValidator(0), MaxValueValidator(100)],
        verbose_name="Kihasználtság (%)",
    )
    charged_sqm = models.DecimalField(max_digits=10, decimal_places=3, default=0, verbose_name="Számlázott m²")
    waste_multi = models.DecimalField(max_digits=4, decimal_places=2, default=1)
    price_per_sqm = models.DecimalField(max_digits=12, decimal_places=2, verbose_name="Nettó Ft/m²")
    cutting_length_m = models.DecimalField(max_digits=10, decimal_places=2, default=0, verbose_name="Vágási hossz (m)")
    cutting_fee_per_m = models.DecimalField(max_digits=10, decimal_places=2, default=0, verbose_name="Vágási díj (Ft/m)")
    material_net = models.IntegerField(default=0)
    material_vat = models.IntegerField(default=0)
    material_gross = models.IntegerField(default=0)
    cutting_net = models.IntegerField(default=0)
    cutting_vat = models.IntegerField(default=0)
    cutting_gross = models.IntegerField(default=0)

    class Meta:
        verbose_name = "Anyagár"
        verbose_name_plural = "Anyagárak"
        ordering = ["pk"]
        constraints = [
            models.UniqueConstraint(fields=["quote", "material"], name="unique_pricing_row_per_material"),
        ]

    def __str__(self):
        return f"{self.material_name}: {self.gross_total} Ft"

    def take_snapshot(self):
        """Copy board size and current prices from the catalog material."""
        material = self.material
        self.material_name = material.name
        self.board_length_mm = material.length_mm
        self.board_width_mm = material.width_mm
        self.waste_multi = material.waste_multi
        self.price_per_sqm = material.price_per_sqm
        self.vat_percent = material.vat_percent

    def save(self, *args, **kwargs):
        # Rows added without a snapshot (admin inline) are priced from the catalog
        if self._state.adding and not self.material_name:
            self.take_snapshot()
        super().save(*args, **kwargs)

    @property
    def board_area_m2(self):
        return board_area_m2(self.board_length_mm, self.board_width_mm)

    @property
    def billed_sqm(self):
        return self.board_area_m2 * self.boards_used + to_decimal(self.charged_sqm)

    @property
    def material_line(self):
        return line_total(self.billed_sqm, self.price_per_sqm, self.vat_percent)

    @property
    def cutting_line(self):
        return line_total(self.cutting_length_m, self.cutting_fee_per_m, self.vat_percent)

    def compute_total(self):
        material, cutting = self.material_line, self.cutting_line
        self.material_net, self.material_vat, self.material_gross = (
            material.net_total, material.vat_amount, material.gross_total
        )
        self.cutting_net, self.cutting_vat, self.cutting_gross = (
            cutting.net_total, cutting.vat_amount, cutting.gross_total
        )
        return material + cutting


class QuoteFee(PricedLine):
    quote = models.ForeignKey(Quote, on_delete=models.CASCADE, related_name="fees")
    fee_type = models.ForeignKey("catalog.FeeType", on_delete=models.SET_NULL, null=True, blank=True)
    name = models.CharField(max_length=100, verbose_name="Megnevezés")
    quantity = models.DecimalField(
        max_digits=10, decimal_places=2, default=1, validators=[MinValueValidator(1)], verbose_name="Mennyiség"
    )
    unit_price_net = models.DecimalField(max_digits=12, decimal_places=2, verbose_name="Nettó egységár")
    comment = models.CharField(max_length=255, blank=True, verbose_name="Megjegyzés")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = "Díj"
        verbose_name_plural = "Díjak"
        ordering = ["created_at", "pk"]

    def __str__(self):
        return f"{self.name} × {self.quantity}"

    def compute_total(self):
        return line_total(self.quantity, self.unit_price_net, self.vat_percent)


class QuoteAccessory(PricedLine):
    quote = models.ForeignKey(Quote, on_delete=models.CASCADE, related_name="accessories")
    accessory = models.ForeignKey("catalog.Accessory", on_delete=models.PROTECT, verbose_name="Kiegészítő")
    name = models.CharField(max_length=150, verbose_name="Megnevezés")
    quantity = models.PositiveIntegerField(default=1, validators=[MinValueValidator(1)], verbose_name="Mennyiség")
    unit_price_net = models.DecimalField(max_digits=12, decimal_places=2, verbose_name="Nettó egységár")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = "Kiegészítő tétel"
        verbose_name_plural = "Kiegészítő tételek"
        ordering = ["created_at", "pk"]

    def __str__(self):
        return f"{self.name} × {self.quantity}"

    def compute_total(self):
        return line_total(self.quantity, self.unit_price_net, self.vat_percent)
