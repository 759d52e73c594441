"""Tests for shipment line totals and receiving."""

from decimal import Decimal

import pytest

from catalog.inventory import average_cost
from catalog.models import InventoryTransaction, ReferenceType, TransactionType
from pricing.rounding import LineTotal
from shipments.models import Shipment, ShipmentItem, ShipmentStatus


@pytest.fixture
def shipment(db, warehouse_user):
    return Shipment.objects.create(supplier_name="Falco Zrt.", created_by=warehouse_user)


@pytest.mark.django_db
class TestShipmentItems:
    def test_numbering(self, shipment, warehouse_user):
        second = Shipment.objects.create(supplier_name="Egger", created_by=warehouse_user)
        assert shipment.shipment_number.startswith("SH-")
        assert shipment.shipment_number.endswith("-00001")
        assert second.sequence == shipment.sequence + 1

    def test_line_totals_use_rounded_net(self, shipment, material):
        item = ShipmentItem.objects.create(
            shipment=shipment,
            material=material,
            quantity_received=Decimal("2.345"),
            net_price=Decimal("10000"),
            vat_percent=27,
        )
        assert (item.net_total, item.vat_amount, item.gross_total) == (23450, 6332, 29782)
        assert item.description == material.name

    def test_shipment_totals(self, shipment, material, accessory):
        ShipmentItem.objects.create(shipment=shipment, material=material, quantity_received=2,
                                    net_price=28980, vat_percent=27)
        ShipmentItem.objects.create(shipment=shipment, accessory=accessory, quantity_received=50,
                                    net_price=1000, vat_percent=27)
        assert shipment.totals == LineTotal(107960, 29149, 137109)

    def test_negative_quantity_rejected(self, shipment, material):
        with pytest.raises(ValueError):
            ShipmentItem.objects.create(shipment=shipment, material=material, quantity_received=-1,
                                        net_price=1000, vat_percent=27)


@pytest.mark.django_db
class TestShipmentReceive:
    def test_receive_increments_stock(self, shipment, material, accessory, warehouse_user):
        ShipmentItem.objects.create(shipment=shipment, material=material, quantity_received=5,
                                    net_price=28980, vat_percent=27)
        ShipmentItem.objects.create(shipment=shipment, accessory=accessory, quantity_received=20,
                                    net_price=1000, vat_percent=27)

        shipment.receive(warehouse_user)

        material.refresh_from_db()
        accessory.refresh_from_db()
        assert material.quantity_in_stock == Decimal("15")
        assert accessory.quantity_in_stock == Decimal("120")
        shipment.refresh_from_db()
        assert shipment.status == ShipmentStatus.RECEIVED
        assert shipment.received_by == warehouse_user
        assert shipment.received_at is not None

    def test_receive_twice_raises(self, shipment, material, warehouse_user):
        ShipmentItem.objects.create(shipment=shipment, material=material, quantity_received=1,
                                    net_price=1000, vat_percent=27)
        shipment.receive(warehouse_user)
        with pytest.raises(ValueError, match="már be van vételezve"):
            shipment.receive(warehouse_user)
        material.refresh_from_db()
        assert material.quantity_in_stock == Decimal("11")

    def test_empty_shipment_cannot_be_received(self, shipment, warehouse_user):
        with pytest.raises(ValueError):
            shipment.receive(warehouse_user)

    def test_received_items_are_frozen(self, shipment, material, warehouse_user):
        item = ShipmentItem.objects.create(shipment=shipment, material=material, quantity_received=1,
                                           net_price=1000, vat_percent=27)
        shipment.receive(warehouse_user)
        item.refresh_from_db()
        item.quantity_received = 3
        with pytest.raises(ValueError):
            item.save()

    def test_receive_logs_board_inbound(self, shipment, material, accessory, warehouse_user):
        item = ShipmentItem.objects.create(shipment=shipment, material=material, quantity_received=4,
                                           net_price=30000, vat_percent=27)
        ShipmentItem.objects.create(shipment=shipment, accessory=accessory, quantity_received=20,
                                    net_price=1000, vat_percent=27)

        shipment.receive(warehouse_user)

        row = InventoryTransaction.objects.get()
        assert row.material == material
        assert row.transaction_type == TransactionType.IN
        assert row.quantity == Decimal("4")
        assert row.unit_price == Decimal("30000")
        assert (row.reference_type, row.reference_id) == (ReferenceType.SHIPMENT_ITEM, item.pk)
        assert average_cost(material) == Decimal("30000.00")
