from decimal import Decimal

import pytest
from django.urls import reverse

from catalog.inventory import record_inbound


@pytest.mark.django_db
class TestMaterialPriceEndpoint:
    def test_selling_price_updates_multiplier(self, client, warehouse_user, material):
        client.force_login(warehouse_user)
        resp = client.post(reverse("catalog:material_prices", args=[material.pk]), {"selling_price": "50600"})
        assert resp.status_code == 200
        assert resp.json()["multiplier"] == "1.37"
        material.refresh_from_db()
        assert material.multiplier == Decimal("1.37")
        assert material.price_history.get().changed_by == warehouse_user

    def test_multiplier_out_of_range_is_rejected(self, client, warehouse_user, material):
        client.force_login(warehouse_user)
        resp = client.post(reverse("catalog:material_prices", args=[material.pk]), {"selling_price": "500000"})
        assert resp.status_code == 400
        material.refresh_from_db()
        assert material.multiplier == Decimal("1.38")

    def test_empty_form_is_rejected(self, client, warehouse_user, material):
        client.force_login(warehouse_user)
        resp = client.post(reverse("catalog:material_prices", args=[material.pk]), {})
        assert resp.status_code == 400
        assert "errors" in resp.json()

    def test_sales_cannot_reprice(self, client, sales_user, material):
        client.force_login(sales_user)
        resp = client.post(reverse("catalog:material_prices", args=[material.pk]), {"selling_price": "50600"})
        assert resp.status_code == 403


@pytest.mark.django_db
class TestLookups:
    def test_accessory_search(self, client, sales_user, accessory):
        client.force_login(sales_user)
        resp = client.get(reverse("catalog:accessory_search"), {"q": "pánt"})
        assert resp.json() == [
            {"id": accessory.pk, "name": "Blum pánt", "net_price": 1380, "gross_price": 1753, "vat_percent": "27.00"}
        ]

    def test_fee_types(self, client, sales_user, fee_type):
        client.force_login(sales_user)
        resp = client.get(reverse("catalog:fee_types"))
        assert resp.json()[0]["gross_price"] == 6350


@pytest.mark.django_db
class TestStockEndpoints:
    def test_material_stock(self, client, sales_user, material):
        record_inbound(material, 2, 30000, comment="Nyitó készlet")
        client.force_login(sales_user)
        resp = client.get(reverse("catalog:material_stock", args=[material.pk]))
        assert resp.status_code == 200
        data = resp.json()
        assert data["on_hand"] == 10.0
        assert data["average_cost"] == 30000.0
        assert data["stock_value"] == 300000
        assert data["transactions"][0]["type"] == "in"
        assert data["transactions"][0]["comment"] == "Nyitó készlet"

    def test_valuation_totals_active_materials(self, client, warehouse_user, material):
        client.force_login(warehouse_user)
        resp = client.get(reverse("catalog:stock_valuation"))
        assert resp.status_code == 200
        data = resp.json()
        assert [row["name"] for row in data["materials"]] == [material.name]
        assert data["total_value"] == 289800

    def test_valuation_is_forbidden_for_sales(self, client, sales_user):
        client.force_login(sales_user)
        assert client.get(reverse("catalog:stock_valuation")).status_code == 403
