"""Tests for the board movement log and average cost valuation."""

from datetime import date
from decimal import Decimal

import pytest

from catalog.inventory import (
    average_cost,
    boards_needed,
    record_inbound,
    reserve_for_quote,
    reserved_quantity,
    stock_summary,
)
from catalog.models import InventoryTransaction, ReferenceType, TransactionType
from production.models import MachineRole
from quotes.models import QuoteStatus


@pytest.mark.django_db
class TestInbound:
    def test_records_in_row(self, material):
        row = record_inbound(material, 2, 28980, reference_type=ReferenceType.SHIPMENT_ITEM, reference_id=7)
        assert row.transaction_type == TransactionType.IN
        assert row.quantity == Decimal("2")
        assert row.unit_price == Decimal("28980")
        assert row.reference_id == 7

    @pytest.mark.parametrize("quantity, price", [(0, 28980), (2, 0), (-1, 28980)])
    def test_non_positive_is_skipped(self, material, quantity, price):
        assert record_inbound(material, quantity, price) is None
        assert not InventoryTransaction.objects.exists()


@pytest.mark.django_db
class TestValuation:
    def test_average_cost_falls_back_to_catalog_price(self, material):
        assert average_cost(material) == Decimal("28980.00")

    def test_average_cost_is_weighted(self, material):
        record_inbound(material, 2, 28980)
        record_inbound(material, 2, 30000)
        assert average_cost(material) == Decimal("29490.00")

    def test_average_cost_rounds_half_up(self, material):
        record_inbound(material, 1, 100)
        record_inbound(material, 1, Decimal("100.01"))
        assert average_cost(material) == Decimal("100.01")

    def test_stock_summary(self, material):
        record_inbound(material, 5, 28000)
        record_inbound(material, 15, 30000)
        summary = stock_summary(material)
        assert summary.on_hand == Decimal("10")
        assert summary.reserved == Decimal("0")
        assert summary.available == Decimal("10")
        assert summary.average_cost == Decimal("29500.00")
        assert summary.stock_value == 295000
        assert summary.as_dict()["average_cost"] == 29500.0


@pytest.mark.django_db
class TestReservations:
    @pytest.fixture
    def order(self, quote, material, sales_user):
        quote.price_material(material, boards_used=2, charged_sqm=Decimal("1.449"))
        quote.create_order(sales_user)
        return quote

    def test_boards_needed_counts_charged_area(self, order):
        row = order.pricing_rows.get()
        assert boards_needed(row) == Decimal("2.250")

    def test_assignment_reserves_boards(self, order, material, machines, operator_user):
        order.assign_production(machines[MachineRole.LARGE_PANEL], date(2026, 10, 20), "B1",
                                changed_by=operator_user)
        assert reserved_quantity(material) == Decimal("2.250")
        summary = stock_summary(material)
        assert summary.available == Decimal("7.750")
        assert summary.on_hand == Decimal("10")

    def test_reassignment_replaces_reservation(self, order, material, machines, operator_user):
        order.assign_production(machines[MachineRole.LARGE_PANEL], date(2026, 10, 20), "B1",
                                changed_by=operator_user)
        order.assign_production(machines[MachineRole.SMALL_PANEL], date(2026, 10, 21), "B1",
                                changed_by=operator_user)
        assert reserved_quantity(material) == Decimal("2.250")
        assert reserve_for_quote(order) == 1
        assert InventoryTransaction.objects.filter(transaction_type=TransactionType.RESERVED).count() == 1

    def test_clearing_production_releases(self, order, material, machines, operator_user):
        order.assign_production(machines[MachineRole.LARGE_PANEL], date(2026, 10, 20), "B1",
                                changed_by=operator_user)
        order.clear_production(changed_by=operator_user)
        assert reserved_quantity(material) == Decimal("0")

    def test_finishing_consumes_stock(self, order, material, machines, operator_user):
        record_inbound(material, 4, 30000)
        order.assign_production(machines[MachineRole.LARGE_PANEL], date(2026, 10, 20), "B1",
                                changed_by=operator_user)
        order.transition_to(QuoteStatus.READY, changed_by=operator_user)
        order.transition_to(QuoteStatus.FINISHED, changed_by=operator_user)

        material.refresh_from_db()
        assert material.quantity_in_stock == Decimal("7.75")
        out = InventoryTransaction.objects.get(transaction_type=TransactionType.OUT)
        assert out.quantity == Decimal("2.250")
        assert out.unit_price == Decimal("30000.00")
        assert (out.reference_type, out.reference_id) == (ReferenceType.QUOTE, order.pk)
        assert reserved_quantity(material) == Decimal("0")

    def test_back_to_production_keeps_reservation(self, order, material, machines, operator_user):
        order.assign_production(machines[MachineRole.LARGE_PANEL], date(2026, 10, 20), "B1",
                                changed_by=operator_user)
        order.transition_to(QuoteStatus.READY, changed_by=operator_user)
        order.transition_to(QuoteStatus.IN_PRODUCTION, changed_by=operator_user)
        assert reserved_quantity(material) == Decimal("2.250")
