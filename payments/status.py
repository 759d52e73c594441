"""
Payment status rules.

All comparisons are in whole forints with a 1 Ft tolerance, so an order whose
final total carries a fractional discount can still be paid off exactly.
"""

from dataclasses import dataclass

from pricing.rounding import round_half_up

from .models import PaymentStatus

TOLERANCE = 1


@dataclass(frozen=True)
class PaymentPreview:
    remaining_balance: int
    new_status: str
    is_valid: bool
    error: str = ""

    def as_dict(self):
        return {
            "remaining_balance": self.remaining_balance,
            "new_status": self.new_status,
            "is_valid": self.is_valid,
            "error": self.error,
        }


def remaining_balance(final_total, total_paid):
    return round_half_up(final_total) - round_half_up(total_paid)


def payment_status_after(final_total, total_paid, amount=0):
    new_total = round_half_up(total_paid) + round_half_up(amount)
    if new_total == 0:
        return PaymentStatus.NOT_PAID
    if new_total >= round_half_up(final_total) - TOLERANCE:
        return PaymentStatus.PAID
    return PaymentStatus.PARTIAL


def validate_payment_amount(final_total, total_paid, amount):
    """
    Return `amount` rounded to whole forints or raise ValueError.

    Payments may overshoot the remaining balance by at most TOLERANCE.
    Refunds may not take back more than was paid.
    """
    amount = round_half_up(amount)
    if amount == 0:
        raise ValueError("Az összeg nem lehet nulla.")
    remaining = remaining_balance(final_total, total_paid)
    if amount > 0 and amount > remaining + TOLERANCE:
        raise ValueError(f"Az összeg meghaladja a hátralékot ({remaining} Ft).")
    if amount < 0 and round_half_up(total_paid) + amount < 0:
        raise ValueError(f"A visszatérítés nem lehet több a befizetettnél ({round_half_up(total_paid)} Ft).")
    return amount


def preview_payment(final_total, total_paid, amount):
    """What the order would look like after paying `amount`."""
    remaining = remaining_balance(final_total, total_paid)
    new_status = payment_status_after(final_total, total_paid, amount)
    try:
        validate_payment_amount(final_total, total_paid, amount)
    except ValueError as e:
        return PaymentPreview(remaining, new_status, False, str(e))
    return PaymentPreview(remaining, new_status, True)
