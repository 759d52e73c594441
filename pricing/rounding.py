"""
Integer-forint rounding rules shared by every priced line.

The invoicing system accepts a line only when:
    net   = round(quantity × unit net price)
    VAT   = round(net × VAT% / 100)     <- from the *rounded* net
    gross = net + VAT                   <- exact, no further rounding

All arithmetic runs on Decimal so that inputs coming from DecimalFields,
form strings and plain floats round the same way.
"""

from dataclasses import dataclass
from decimal import ROUND_FLOOR, Decimal

HUNDRED = Decimal("100")
_HALF = Decimal("0.5")

# How far gross_to_net_preserving_gross searches around the approximate net
GROSS_SEARCH_RADIUS = 5


def to_decimal(value):
    """Coerce a numeric input to Decimal. Missing values count as zero."""
    if value is None or value == "":
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        # str() keeps the shortest repr, so 0.1 stays 0.1 and not 0.1000000000000000055...
        return Decimal(str(value))
    return Decimal(value)


def round_half_up(value):
    """
    Round to the nearest whole forint, ties toward +infinity.

    2.5 -> 3, -2.5 -> -2 (same tie behaviour as the browser-side Math.round
    the stored totals were produced with).
    """
    return int((to_decimal(value) + _HALF).to_integral_value(rounding=ROUND_FLOOR))


@dataclass(frozen=True)
class LineTotal:
    net_total: int
    vat_amount: int
    gross_total: int

    def __add__(self, other):
        return LineTotal(
            self.net_total + other.net_total,
            self.vat_amount + other.vat_amount,
            self.gross_total + other.gross_total,
        )

    def as_dict(self):
        return {
            "net_total": self.net_total,
            "vat_amount": self.vat_amount,
            "gross_total": self.gross_total,
        }


ZERO_LINE = LineTotal(0, 0, 0)


def vat_from_net(net, vat_percent):
    """VAT on an already-rounded net amount."""
    return round_half_up(Decimal(round_half_up(net)) * to_decimal(vat_percent) / HUNDRED)


def line_total(quantity, unit_price_net, vat_percent=0):
    """
    Net, VAT and gross for one line (fee, accessory, shipment item, material row).

    Quantity may be fractional (m², m). The order of rounding is fixed: net first,
    then VAT from that integer net.
    """
    net_total = round_half_up(to_decimal(quantity) * to_decimal(unit_price_net))
    vat_amount = vat_from_net(net_total, vat_percent)
    return LineTotal(net_total, vat_amount, net_total + vat_amount)


def sum_line_totals(lines):
    total = ZERO_LINE
    for line in lines:
        total = total + line
    return total


def net_to_gross(net, vat_percent):
    net = round_half_up(net)
    return net + vat_from_net(net, vat_percent)


def gross_to_net_preserving_gross(gross, vat_percent):
    """
    Integer net whose gross (under net_to_gross) is exactly `gross`.

    Needed when staff type a gross price: 26000 / 1.27 rounds to 20472, but
    20472 grosses back up to 25999. Nearby nets are tried in the order
    +1, -1, +2, -2, ... up to GROSS_SEARCH_RADIUS. If nothing matches, the
    rounded approximation is returned.
    """
    gross = to_decimal(gross)
    factor = 1 + to_decimal(vat_percent) / HUNDRED
    approx = round_half_up(gross / factor)
    if net_to_gross(approx, vat_percent) == gross:
        return approx

    for offset in range(1, GROSS_SEARCH_RADIUS + 1):
        candidate = approx + offset
        if net_to_gross(candidate, vat_percent) == gross:
            return candidate
        candidate = approx - offset
        if candidate >= 0 and net_to_gross(candidate, vat_percent) == gross:
            return candidate

    return approx
