"""Tests for the integer-forint rounding rules."""

from decimal import Decimal

import pytest

from pricing.rounding import (
    LineTotal,
    gross_to_net_preserving_gross,
    line_total,
    net_to_gross,
    round_half_up,
    sum_line_totals,
)


class TestRoundHalfUp:
    def test_ties_round_up(self):
        assert round_half_up(2.5) == 3
        assert round_half_up(Decimal("1380.5")) == 1381

    def test_negative_ties_round_toward_positive(self):
        assert round_half_up(-2.5) == -2
        assert round_half_up(-2.51) == -3

    def test_float_artefacts_do_not_leak(self):
        # 1.005 * 1000 is 1004.9999999999999 in binary floating point
        assert round_half_up(Decimal("1.005") * 1000) == 1005

    def test_none_counts_as_zero(self):
        assert round_half_up(None) == 0


class TestLineTotal:
    @pytest.mark.parametrize(
        "quantity, unit_price, vat",
        [
            (1, 1000, 27),
            (2.5, 1333.33, 27),
            (0.37, 8420, 5),
            (3, 0, 27),
            (1.75, 999.99, 0),
        ],
    )
    def test_gross_is_net_plus_vat(self, quantity, unit_price, vat):
        line = line_total(quantity, unit_price, vat)
        assert isinstance(line.net_total, int)
        assert isinstance(line.vat_amount, int)
        assert line.gross_total == line.net_total + line.vat_amount

    def test_vat_is_computed_from_rounded_net(self):
        line = line_total(1, Decimal("1.6"), 27)
        assert line == LineTotal(2, 1, 3)
        # VAT from the raw product would have been round(0.432) == 0
        assert round_half_up(Decimal("1.6") * Decimal("0.27")) == 0

    def test_fractional_quantity(self):
        line = line_total("2.345", "10000", 27)
        assert line.net_total == 23450
        assert line.vat_amount == 6332  # 23450 * 0.27 = 6331.5
        assert line.gross_total == 29782

    def test_idempotent_on_own_output(self):
        first = line_total("3.3", "1234.56", 27)
        again = line_total(1, first.net_total, 27)
        assert again.net_total == first.net_total
        assert again.vat_amount == first.vat_amount

    def test_missing_fields_default_to_zero(self):
        assert line_total(None, None, None) == LineTotal(0, 0, 0)

    def test_negative_credit_line(self):
        line = line_total(1, -5000, 27)
        assert line == LineTotal(-5000, -1350, -6350)


class TestSumLineTotals:
    def test_sums_componentwise(self):
        lines = [line_total(1, 1000, 27), line_total(2, 500, 27)]
        assert sum_line_totals(lines) == LineTotal(2000, 540, 2540)

    def test_empty(self):
        assert sum_line_totals([]) == LineTotal(0, 0, 0)


class TestGrossToNet:
    def test_net_to_gross(self):
        assert net_to_gross(20472, 27) == 25999

    def test_entered_gross_is_preserved(self):
        assert gross_to_net_preserving_gross(25999, 27) == 20472
        assert gross_to_net_preserving_gross(1270, 27) == 1000
        assert net_to_gross(gross_to_net_preserving_gross(1753, 27), 27) == 1753

    def test_zero_vat(self):
        assert gross_to_net_preserving_gross(1500, 0) == 1500

    def test_unreachable_gross_falls_back_to_approximation(self):
        # With 27% VAT consecutive nets step the gross by 1 or 2, some grosses are skipped
        reachable = {net_to_gross(n, 27) for n in range(0, 200)}
        unreachable = next(g for g in range(1, 250) if g not in reachable)
        assert gross_to_net_preserving_gross(unreachable, 27) == round_half_up(
            Decimal(unreachable) / Decimal("1.27")
        )
