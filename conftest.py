"""
Pytest configuration and shared fixtures.
"""

from datetime import timedelta
from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model
from django.utils import timezone

User = get_user_model()


@pytest.fixture
def owner_user(db):
    from accounts.models import Role

    return User.objects.create_user(
        username="owner",
        password="testpass123",
        role=Role.OWNER,
        first_name="Tulajdonos",
        last_name="Teszt",
    )


@pytest.fixture
def sales_user(db):
    from accounts.models import Role

    return User.objects.create_user(
        username="sales",
        password="testpass123",
        role=Role.SALES,
    )


@pytest.fixture
def warehouse_user(db):
    from accounts.models import Role

    return User.objects.create_user(
        username="warehouse",
        password="testpass123",
        role=Role.WAREHOUSE,
    )


@pytest.fixture
def operator_user(db):
    from accounts.models import Role

    return User.objects.create_user(
        username="operator",
        password="testpass123",
        role=Role.OPERATOR,
    )


@pytest.fixture
def customer(db):
    from customers.models import Customer

    return Customer.objects.create(
        name="Asztalos Kft.",
        phone="06301234567",
        email="iroda@asztalos.hu",
        tax_number="12345678-2-13",
    )


@pytest.fixture
def vat_rate(db):
    from catalog.models import VatRate

    return VatRate.objects.create(name="Általános", percent=Decimal("27"))


@pytest.fixture
def material(db, vat_rate):
    from catalog.models import Material

    return Material.objects.create(
        name="Egger W1000 fehér",
        length_mm=2800,
        width_mm=2070,
        base_price=Decimal("5000"),
        multiplier=Decimal("1.38"),
        vat=vat_rate,
        quantity_in_stock=10,
    )


@pytest.fixture
def linear_material(db, vat_rate):
    from catalog.models import LinearMaterial

    return LinearMaterial.objects.create(
        name="ABS élzáró 22×2",
        length_mm=4100,
        width_mm=22,
        base_price=Decimal("1000"),
        multiplier=Decimal("1.38"),
        vat=vat_rate,
    )


@pytest.fixture
def accessory(db, vat_rate):
    from catalog.models import Accessory

    return Accessory.objects.create(
        name="Blum pánt",
        sku="71B3550",
        base_price=Decimal("1000"),
        multiplier=Decimal("1.38"),
        vat=vat_rate,
        quantity_in_stock=100,
    )


@pytest.fixture
def fee_type(db, vat_rate):
    from catalog.models import FeeType

    return FeeType.objects.create(name="Kiszállítás", net_price=Decimal("5000"), vat=vat_rate)


@pytest.fixture
def quote(db, customer, sales_user):
    from quotes.models import Quote

    return Quote.objects.create(customer=customer, created_by=sales_user)


@pytest.fixture
def machines(db):
    """Three cutting machines, oldest first, with explicit roles."""
    from production.models import Machine, MachineRole

    now = timezone.now()
    small = Machine.objects.create(name="Holzma HPP 1", role=MachineRole.SMALL_PANEL)
    large = Machine.objects.create(name="Holzma HPP 2", role=MachineRole.LARGE_PANEL)
    small_order = Machine.objects.create(name="Altendorf", comment="kis rendelés", role=MachineRole.SMALL_ORDER)
    # created_at is auto_now_add, spread them out explicitly
    for offset, machine in enumerate([small, large, small_order]):
        Machine.objects.filter(pk=machine.pk).update(created_at=now - timedelta(days=30 - offset))
    return {
        MachineRole.SMALL_PANEL: small,
        MachineRole.LARGE_PANEL: large,
        MachineRole.SMALL_ORDER: small_order,
    }
