from decimal import Decimal

from pricing.margin import (
    board_area_m2,
    gross_price_from_net,
    is_valid_multiplier,
    length_m,
    multiplier_from_gross_price,
    net_price_from_multiplier,
    per_unit_price_from_piece,
    piece_price_from_per_unit,
)


class TestMultiplierPricing:
    def test_net_and_gross(self):
        net = net_price_from_multiplier(1000, Decimal("1.38"))
        assert net == 1380
        assert gross_price_from_net(net, 27) == 1753

    def test_multiplier_round_trip(self):
        assert multiplier_from_gross_price(1753, 27, 1000) == Decimal("1.38")

    def test_multiplier_without_base_price(self):
        assert multiplier_from_gross_price(1753, 27, 0) is None

    def test_multiplier_bounds(self):
        assert is_valid_multiplier("1.0")
        assert is_valid_multiplier(5)
        assert not is_valid_multiplier("0.99")
        assert not is_valid_multiplier("5.01")


class TestPieceConversion:
    def test_board_area(self):
        assert board_area_m2(2800, 2070) == Decimal("5.796")

    def test_length(self):
        assert length_m(4100) == Decimal("4.1")

    def test_board_price_round_trip(self):
        area = board_area_m2(2800, 2070)
        per_sqm = per_unit_price_from_piece(28980, area)
        assert per_sqm == Decimal("5000")
        assert piece_price_from_per_unit(per_sqm, area) == Decimal("28980")

    def test_zero_sized_piece(self):
        assert per_unit_price_from_piece(1000, 0) is None

    def test_selling_price_for_whole_board(self):
        # Staff enter the gross selling price of the whole board; base price is per m²
        area = board_area_m2(2800, 2070)
        base_per_sqm = Decimal("5000")
        multiplier = multiplier_from_gross_price(
            Decimal("50600"), 27, piece_price_from_per_unit(base_per_sqm, area)
        )
        assert multiplier == Decimal("1.37")
