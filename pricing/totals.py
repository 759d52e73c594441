"""
Quote/order level totals.

Discount applies to billable amounts only: materials plus the positive part of
fees and accessories. Negative fee/accessory totals (credits, refunds) are added
after the discount, undiscounted.
"""

from dataclasses import dataclass
from decimal import Decimal

from .rounding import HUNDRED, round_half_up, to_decimal


@dataclass(frozen=True)
class QuoteTotals:
    materials_gross: Decimal
    fees_gross: Decimal
    accessories_gross: Decimal
    discount_percent: Decimal
    subtotal: Decimal
    discount_amount: Decimal
    final_total: Decimal

    @property
    def final_total_rounded(self):
        return round_half_up(self.final_total)

    def as_dict(self):
        return {
            "materials_gross": self.materials_gross,
            "fees_gross": self.fees_gross,
            "accessories_gross": self.accessories_gross,
            "discount_percent": self.discount_percent,
            "subtotal": self.subtotal,
            "discount_amount": self.discount_amount,
            "final_total": self.final_total,
        }


def quote_totals(materials_gross, fees_gross, accessories_gross, discount_percent):
    materials_gross = to_decimal(materials_gross)
    fees_gross = to_decimal(fees_gross)
    accessories_gross = to_decimal(accessories_gross)
    discount_percent = to_decimal(discount_percent)

    zero = Decimal("0")
    fees_positive = max(zero, fees_gross)
    fees_negative = min(zero, fees_gross)
    accessories_positive = max(zero, accessories_gross)
    accessories_negative = min(zero, accessories_gross)

    subtotal = materials_gross + fees_positive + accessories_positive
    # Left fractional: stored final totals were produced this way.
    discount_amount = subtotal * discount_percent / HUNDRED
    final_total = subtotal - discount_amount + fees_negative + accessories_negative

    return QuoteTotals(
        materials_gross=materials_gross,
        fees_gross=fees_gross,
        accessories_gross=accessories_gross,
        discount_percent=discount_percent,
        subtotal=subtotal,
        discount_amount=discount_amount,
        final_total=final_total,
    )
