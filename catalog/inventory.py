"""
Board inventory: movement log and average cost valuation.

Receiving a shipment logs 'in' rows at the per-board purchase price.
Assigning an order to production reserves its boards; taking it back
releases them. Handing the order over turns the reservations into 'out'
rows at the current average cost and takes the boards off stock.
"""

import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from django.db import transaction
from django.db.models import F, Sum

from pricing.rounding import round_half_up, to_decimal

from .models import InventoryTransaction, Material, ReferenceType, TransactionType

logger = logging.getLogger(__name__)

_CENT = Decimal("0.01")
_BOARD_PRECISION = Decimal("0.001")


@dataclass(frozen=True)
class StockSummary:
    on_hand: Decimal
    reserved: Decimal
    available: Decimal
    average_cost: Decimal
    stock_value: int

    def as_dict(self):
        return {
            "on_hand": float(self.on_hand),
            "reserved": float(self.reserved),
            "available": float(self.available),
            "average_cost": float(self.average_cost),
            "stock_value": self.stock_value,
        }


def record_inbound(material, quantity, unit_price, reference_type=ReferenceType.MANUAL, reference_id=None,
                   comment=""):
    """Log received boards. Returns None when quantity or price is not positive."""
    quantity, unit_price = to_decimal(quantity), to_decimal(unit_price)
    if quantity <= 0 or unit_price <= 0:
        logger.warning("Skipping inbound for %s: quantity %s, price %s", material, quantity, unit_price)
        return None
    return InventoryTransaction.objects.create(
        material=material,
        transaction_type=TransactionType.IN,
        quantity=quantity,
        unit_price=unit_price,
        reference_type=reference_type,
        reference_id=reference_id,
        comment=comment,
    )


def average_cost(material):
    """Weighted average per-board net price of everything received, else the catalog purchase price."""
    rows = list(
        material.inventory_transactions.filter(transaction_type=TransactionType.IN).values_list(
            "quantity", "unit_price"
        )
    )
    quantity = sum((q for q, _ in rows), Decimal("0"))
    if not quantity:
        return to_decimal(material.board_purchase_price).quantize(_CENT)
    value = sum((q * p for q, p in rows), Decimal("0"))
    return (value / quantity).quantize(_CENT, rounding=ROUND_HALF_UP)


def reserved_quantity(material):
    total = material.inventory_transactions.filter(transaction_type=TransactionType.RESERVED).aggregate(
        total=Sum("quantity")
    )["total"]
    return to_decimal(total)


def stock_summary(material):
    on_hand = to_decimal(material.quantity_in_stock)
    reserved = reserved_quantity(material)
    cost = average_cost(material)
    return StockSummary(
        on_hand=on_hand,
        reserved=reserved,
        available=on_hand - reserved,
        average_cost=cost,
        stock_value=round_half_up(on_hand * cost),
    )


def boards_needed(row):
    """Full boards plus the charged part of a board, in boards."""
    boards = Decimal(row.boards_used or 0)
    area = row.board_area_m2
    if area > 0:
        boards += to_decimal(row.charged_sqm) / area
    return boards.quantize(_BOARD_PRECISION)


def reserve_for_quote(quote):
    """Reserve the boards of every pricing row. Existing reservations are replaced."""
    with transaction.atomic():
        release_for_quote(quote)
        created = 0
        for row in quote.pricing_rows.select_related("material"):
            quantity = boards_needed(row)
            if quantity <= 0:
                continue
            InventoryTransaction.objects.create(
                material=row.material,
                transaction_type=TransactionType.RESERVED,
                quantity=quantity,
                reference_type=ReferenceType.QUOTE,
                reference_id=quote.pk,
                comment=f"Foglalás: {quote}",
            )
            created += 1
    logger.info("Reserved %d material(s) for %s", created, quote)
    return created


def _reservations(quote):
    return InventoryTransaction.objects.filter(
        transaction_type=TransactionType.RESERVED,
        reference_type=ReferenceType.QUOTE,
        reference_id=quote.pk,
    )


def release_for_quote(quote):
    deleted, _ = _reservations(quote).delete()
    return deleted


def consume_for_quote(quote):
    """Turn the order's reservations into 'out' rows and take the boards off stock."""
    with transaction.atomic():
        reservations = list(_reservations(quote).select_related("material"))
        for reservation in reservations:
            material = reservation.material
            InventoryTransaction.objects.create(
                material=material,
                transaction_type=TransactionType.OUT,
                quantity=reservation.quantity,
                unit_price=average_cost(material),
                reference_type=ReferenceType.QUOTE,
                reference_id=quote.pk,
                comment=f"Kivételezés: {quote}",
            )
            Material.objects.filter(pk=material.pk).update(
                quantity_in_stock=F("quantity_in_stock") - reservation.quantity
            )
        _reservations(quote).delete()
    logger.info("Consumed %d material(s) for %s", len(reservations), quote)
    return len(reservations)
