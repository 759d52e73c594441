"""
Margin (multiplier) pricing for catalog items.

    net   = round(base_price × multiplier)
    gross = round(net × (1 + VAT% / 100))

Boards and linear materials are priced per m² / per m internally, while staff
enter purchase and selling prices for the whole piece. The helpers below do the
piece <-> unit conversion.
"""

from decimal import ROUND_HALF_UP, Decimal

from .rounding import HUNDRED, round_half_up, to_decimal

DEFAULT_MULTIPLIER = Decimal("1.38")
MIN_MULTIPLIER = Decimal("1.0")
MAX_MULTIPLIER = Decimal("5.0")

_MM2_PER_M2 = Decimal("1000000")
_MM_PER_M = Decimal("1000")
_CENT = Decimal("0.01")


def net_price_from_multiplier(base_price, multiplier):
    return round_half_up(to_decimal(base_price) * to_decimal(multiplier))


def gross_price_from_net(net_price, vat_percent):
    return round_half_up(to_decimal(net_price) * (1 + to_decimal(vat_percent) / HUNDRED))


def multiplier_from_gross_price(gross_selling_price, vat_percent, base_price):
    """
    Back-derive the multiplier that produces a target gross selling price.

    Returns the multiplier rounded to 2 decimals, or None when there is no
    base price to divide by.
    """
    base_price = to_decimal(base_price)
    if base_price <= 0:
        return None
    net_selling_price = to_decimal(gross_selling_price) / (1 + to_decimal(vat_percent) / HUNDRED)
    return (net_selling_price / base_price).quantize(_CENT, rounding=ROUND_HALF_UP)


def is_valid_multiplier(multiplier):
    return MIN_MULTIPLIER <= to_decimal(multiplier) <= MAX_MULTIPLIER


def board_area_m2(length_mm, width_mm):
    return to_decimal(length_mm) * to_decimal(width_mm) / _MM2_PER_M2


def length_m(length_mm):
    return to_decimal(length_mm) / _MM_PER_M


def per_unit_price_from_piece(piece_price, units_per_piece):
    """Piece price -> price per m² (or per m). None if the piece has no size."""
    units_per_piece = to_decimal(units_per_piece)
    if units_per_piece <= 0:
        return None
    return to_decimal(piece_price) / units_per_piece


def piece_price_from_per_unit(per_unit_price, units_per_piece):
    return to_decimal(per_unit_price) * to_decimal(units_per_piece)
