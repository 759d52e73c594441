"""Tests for the percent formatting filter."""

from decimal import Decimal

import pytest

from core.templatetags.money_filters import percent


class TestPercent:
    def test_whole_percent(self):
        assert percent(Decimal("27.00")) == "27%"

    def test_fractional_percent(self):
        assert percent("7.5") == "7,5%"

    @pytest.mark.parametrize("value", [None, ""])
    def test_empty_returns_empty_string(self, value):
        assert percent(value) == ""

    def test_non_numeric_is_passed_through(self):
        assert percent("n/a") == "n/a"
