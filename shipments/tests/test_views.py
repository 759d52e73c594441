import pytest
from django.urls import reverse

from shipments.models import Shipment


@pytest.mark.django_db
class TestShipmentEndpoints:
    def test_create_add_item_and_receive(self, client, warehouse_user, material):
        client.force_login(warehouse_user)
        resp = client.post(reverse("shipments:create"), {"supplier_name": "Falco Zrt."})
        assert resp.status_code == 201
        pk = resp.json()["id"]

        resp = client.post(
            reverse("shipments:item_add", args=[pk]),
            {"material": material.pk, "quantity_received": "3", "net_price": "28980", "vat_percent": "27"},
        )
        assert resp.status_code == 201
        assert resp.json()["totals"] == {"net_total": 86940, "vat_amount": 23474, "gross_total": 110414}

        resp = client.post(reverse("shipments:receive", args=[pk]))
        assert resp.status_code == 200
        assert resp.json()["status"] == "received"
        material.refresh_from_db()
        assert material.quantity_in_stock == 13

    def test_item_needs_exactly_one_target(self, client, warehouse_user, material, accessory):
        client.force_login(warehouse_user)
        shipment = Shipment.objects.create(supplier_name="Egger", created_by=warehouse_user)
        resp = client.post(
            reverse("shipments:item_add", args=[shipment.pk]),
            {"material": material.pk, "accessory": accessory.pk, "quantity_received": "1",
             "net_price": "100", "vat_percent": "27"},
        )
        assert resp.status_code == 400

    def test_second_receive_is_rejected(self, client, warehouse_user, material):
        client.force_login(warehouse_user)
        shipment = Shipment.objects.create(supplier_name="Egger", created_by=warehouse_user)
        shipment.items.create(material=material, quantity_received=1, net_price=100, vat_percent=27)
        assert client.post(reverse("shipments:receive", args=[shipment.pk])).status_code == 200
        resp = client.post(reverse("shipments:receive", args=[shipment.pk]))
        assert resp.status_code == 400
        assert "error" in resp.json()

    def test_sales_cannot_receive(self, client, sales_user, warehouse_user):
        client.force_login(sales_user)
        shipment = Shipment.objects.create(supplier_name="Egger", created_by=warehouse_user)
        assert client.post(reverse("shipments:receive", args=[shipment.pk])).status_code == 403
