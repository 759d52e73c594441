"""Tests for catalog pricing: piece <-> unit conversions and price history."""

from decimal import Decimal

import pytest

from catalog.models import FeeType, MaterialPriceHistory


@pytest.mark.django_db
class TestMaterialPricing:
    def test_derived_prices(self, material):
        assert material.board_area_m2 == Decimal("5.796")
        assert material.price_per_sqm == 6900
        assert material.gross_price_per_sqm == 8763
        assert material.board_purchase_price == 28980
        # round(28980 × 1.38) = 39992, round(39992 × 1.27) = 50790
        assert material.board_selling_price == 50790

    def test_set_board_selling_price_derives_multiplier(self, material):
        assert material.set_board_selling_price(50600) == Decimal("1.37")
        assert material.multiplier == Decimal("1.37")

    def test_set_board_selling_price_out_of_range(self, material):
        with pytest.raises(ValueError, match="szorzó"):
            material.set_board_selling_price(200000)
        assert material.multiplier == Decimal("1.38")

    def test_set_board_purchase_price(self, material):
        assert material.set_board_purchase_price(30000) == Decimal("5175.98")

    def test_zero_base_price_cannot_derive_multiplier(self, material):
        material.base_price = Decimal("0")
        with pytest.raises(ValueError):
            material.set_board_selling_price(50000)


@pytest.mark.django_db
class TestMaterialPriceHistory:
    def test_price_change_is_recorded(self, material, warehouse_user):
        material.base_price = Decimal("5200")
        material.save(changed_by=warehouse_user)

        entry = material.price_history.get()
        assert entry.old_base_price == Decimal("5000")
        assert entry.new_base_price == Decimal("5200")
        assert entry.old_multiplier == entry.new_multiplier == Decimal("1.38")
        assert entry.changed_by == warehouse_user

    def test_unrelated_change_is_not_recorded(self, material):
        material.quantity_in_stock = 12
        material.save()
        assert not MaterialPriceHistory.objects.exists()

    def test_creation_is_not_recorded(self, material):
        assert material.price_history.count() == 0


@pytest.mark.django_db
class TestLinearMaterialPricing:
    def test_piece_prices(self, linear_material):
        assert linear_material.length_m == Decimal("4.1")
        assert linear_material.price_per_m == 1380
        assert linear_material.piece_purchase_price == 4100
        assert linear_material.piece_selling_price == 7186

    def test_set_piece_purchase_price(self, linear_material):
        assert linear_material.set_piece_purchase_price(8200) == Decimal("2000.00")

    def test_set_piece_selling_price_derives_multiplier(self, linear_material):
        # Piece base is 1000/m × 4.1 m = 4100; 7186 / 1.27 / 4100 = 1.38
        linear_material.multiplier = Decimal("2.00")
        assert linear_material.set_piece_selling_price(7186) == Decimal("1.38")
        assert linear_material.piece_selling_price == 7186

    def test_set_piece_selling_price_reprices_piece(self, linear_material):
        # 8000 / 1.27 / 4100 = 1.536 → 1.54; round(4100 × 1.54) = 6314, round(6314 × 1.27) = 8019
        assert linear_material.set_piece_selling_price(8000) == Decimal("1.54")
        assert linear_material.price_per_m == 1540
        assert linear_material.piece_selling_price == 8019

    def test_set_piece_selling_price_out_of_range(self, linear_material):
        with pytest.raises(ValueError, match="szorzó"):
            linear_material.set_piece_selling_price(100000)
        assert linear_material.multiplier == Decimal("1.38")

    def test_set_piece_selling_price_needs_base_price(self, linear_material):
        linear_material.base_price = Decimal("0")
        with pytest.raises(ValueError):
            linear_material.set_piece_selling_price(7186)


@pytest.mark.django_db
class TestAccessoryAndFeePricing:
    def test_accessory_prices(self, accessory):
        assert accessory.net_price == 1380
        assert accessory.gross_price == 1753

    def test_accessory_gross_round_trip(self, accessory):
        assert accessory.set_gross_price(1753) == Decimal("1.38")

    def test_fee_gross_price(self, fee_type):
        assert fee_type.gross_price == 6350

    def test_fee_set_gross_price_preserves_entered_gross(self, fee_type):
        fee_type.set_gross_price(25999)
        fee_type.save()
        fee_type = FeeType.objects.get(pk=fee_type.pk)
        assert fee_type.net_price == Decimal("20472")
        assert fee_type.gross_price == 25999

    def test_vat_rate_str(self, vat_rate):
        assert str(vat_rate) == "Általános (27%)"
