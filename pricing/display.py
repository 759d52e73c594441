"""
Display-side unit prices for printed/exported cost breakdowns.

A unit price shown next to a total is rounded to 2 decimals, and the total shown
is rebuilt from that rounded unit price, so unit price × quantity always equals
the printed total. The printed total may drift a few forints from the stored one.
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from .rounding import to_decimal

_CENT = Decimal("0.01")


@dataclass(frozen=True)
class DisplayLine:
    quantity: Decimal
    unit_price: Decimal
    total_gross: Decimal
    total_net: Decimal


def display_unit_price(total_gross, total_net, quantity):
    total_gross = to_decimal(total_gross)
    total_net = to_decimal(total_net)
    quantity = to_decimal(quantity)

    if quantity <= 0:
        return DisplayLine(quantity, Decimal("0"), total_gross, total_net)

    unit_price = (total_gross / quantity).quantize(_CENT, rounding=ROUND_HALF_UP)
    recalculated_gross = unit_price * quantity
    if total_gross > 0:
        recalculated_net = total_net * (recalculated_gross / total_gross)
    else:
        recalculated_net = total_net

    return DisplayLine(quantity, unit_price, recalculated_gross, recalculated_net)
