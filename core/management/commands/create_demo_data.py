"""
Management command: create_demo_data

Seeds the database with a small cut shop: catalog, three panel saws,
customers and orders in every status, so the admin and the JSON views have
something to show.

Usage:
    python manage.py create_demo_data          # add demo data
    python manage.py create_demo_data --reset  # wipe demo quotes/customers first, then add
"""

from datetime import timedelta
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.utils import timezone

User = get_user_model()


class Command(BaseCommand):
    help = "Seed database with demo catalog, machines, customers, orders and payments"

    def add_arguments(self, parser):
        parser.add_argument(
            "--reset",
            action="store_true",
            help="Delete demo quotes, payments and customers before seeding",
        )

    def handle(self, *args, **options):
        if options["reset"]:
            self._reset()

        users = self._get_or_create_staff()
        catalog = self._create_catalog()
        machines = self._create_machines()
        customers = self._create_customers()
        self._create_quotes(customers, catalog, machines, users)
        self.stdout.write(self.style.SUCCESS("Demo data created successfully."))

    # -------------------------------------------------------------------------

    def _reset(self):
        from payments.models import QuotePayment
        from quotes.models import Quote

        demo_quotes = Quote.objects.filter(customer__name__startswith="[Demo]")
        QuotePayment.objects.filter(quote__in=demo_quotes).delete()
        demo_quotes.delete()
        from customers.models import Customer
        Customer.objects.filter(name__startswith="[Demo]").delete()
        self.stdout.write("  Reset: cleared demo quotes, payments, customers.")

    def _get_or_create_staff(self):
        """Return (or create) one staff user per role."""
        from accounts.models import Role

        users = {}
        specs = [
            ("owner", "Kovács", "Péter", Role.OWNER),
            ("sales1", "Nagy", "Anna", Role.SALES),
            ("warehouse1", "Tóth", "Gábor", Role.WAREHOUSE),
            ("operator1", "Szabó", "Márk", Role.OPERATOR),
        ]
        for username, last, first, role in specs:
            u, created = User.objects.get_or_create(
                username=username,
                defaults=dict(first_name=first, last_name=last, role=role),
            )
            if created:
                u.set_password("demo1234")
                u.save()
                self.stdout.write(f"  Created user: {username}")
            users[username] = u
        return users

    def _create_catalog(self):
        from catalog.models import Accessory, FeeType, LinearMaterial, Material, VatRate

        vat, _ = VatRate.objects.get_or_create(name="Általános", defaults=dict(percent=27))

        materials = []
        for name, base_price, thickness in [
            ("Egger W1000 ST9 Prémium fehér", "5000", 18),
            ("Egger H1145 ST10 Natúr Bardolino tölgy", "6200", 18),
            ("Kronospan 0190 Fekete", "5400", 18),
            ("Hátfal HDF fehér", "1800", 3),
        ]:
            m, _ = Material.objects.get_or_create(
                name=name,
                defaults=dict(
                    length_mm=2800,
                    width_mm=2070,
                    thickness_mm=thickness,
                    base_price=Decimal(base_price),
                    vat=vat,
                    quantity_in_stock=10,
                ),
            )
            materials.append(m)

        LinearMaterial.objects.get_or_create(
            name="ABS élzáró 2 mm fehér",
            defaults=dict(length_mm=100000, width_mm=22, base_price=Decimal("180"), vat=vat),
        )
        LinearMaterial.objects.get_or_create(
            name="Munkalap 38 mm Sonoma tölgy",
            defaults=dict(length_mm=4100, width_mm=600, base_price=Decimal("6500"), vat=vat),
        )

        accessories = []
        for name, sku, base_price in [
            ("Blum Clip top pánt 110°", "71B3550", "1000"),
            ("Blum Tandembox fiókoldal 500 mm", "378N5002SA", "9800"),
            ("Fogantyú 128 mm matt fekete", "FG128MF", "650"),
        ]:
            a, _ = Accessory.objects.get_or_create(
                name=name,
                defaults=dict(sku=sku, base_price=Decimal(base_price), vat=vat, quantity_in_stock=200),
            )
            accessories.append(a)

        fees = {}
        for key, name, net, unit in [
            ("edge", "Élzárás", "450", "fm"),
            ("drill", "Pántfúrás", "150", "db"),
            ("delivery", "Kiszállítás Budapesten belül", "8000", "alkalom"),
        ]:
            f, _ = FeeType.objects.get_or_create(
                name=name, defaults=dict(net_price=Decimal(net), vat=vat, unit=unit)
            )
            fees[key] = f

        self.stdout.write(f"  Catalog: {len(materials)} boards, {len(accessories)} accessories, {len(fees)} fees")
        return {"materials": materials, "accessories": accessories, "fees": fees}

    def _create_machines(self):
        from production.models import Machine

        machines = []
        for name, comment in [
            ("Holzma HPP 1", "Kis alkatrészek"),
            ("Holzma HPP 2", "Nagy táblák"),
            ("Altendorf F45", "kis rendelés"),
        ]:
            m, _ = Machine.objects.get_or_create(name=name, defaults=dict(comment=comment))
            machines.append(m)
        self.stdout.write(f"  Machines: {len(machines)}")
        return machines

    def _create_customers(self):
        from customers.models import Customer

        specs = [
            # (name, phone, tax_number, city, default discount)
            ("[Demo] Asztalos Bútor Kft.", "06301234567", "12345678-2-13", "Budaörs", 10),
            ("[Demo] Kiss János", "06209876543", "", "Budapest", 0),
            ("[Demo] Konyhastúdió Bt.", "06705554433", "23456789-1-41", "Érd", 5),
            ("[Demo] Horváth Éva", "06301112222", "", "Szentendre", 0),
        ]
        customers = []
        for name, phone, tax, city, discount in specs:
            c, _ = Customer.objects.get_or_create(
                name=name,
                defaults=dict(
                    phone=phone,
                    tax_number=tax,
                    billing_city=city,
                    default_discount_percent=discount,
                ),
            )
            customers.append(c)
        self.stdout.write(f"  Customers: {len(customers)}")
        return customers

    def _create_quotes(self, customers, catalog, machines, users):
        from quotes.models import Quote, QuoteStatus

        sales = users["sales1"]
        operator = users["operator1"]
        materials = catalog["materials"]
        accessories = catalog["accessories"]
        fees = catalog["fees"]

        now = timezone.now()
        today = timezone.localdate()

        # Each tuple: (customer_idx, material_idx, boards, usage %, charged m², cut m, hinges, target status,
        #              deposit share, machine_idx, days_ago)
        quote_specs = [
            (0, 0, 3, 72, "2.4", 48, 24, QuoteStatus.FINISHED, 1, 1, 20),
            (0, 1, 1, 85, "0.0", 22, 8, QuoteStatus.READY, Decimal("0.5"), 1, 6),
            (1, 2, 0, 40, "1.9", 9, 4, QuoteStatus.IN_PRODUCTION, Decimal("0.3"), 2, 3),
            (2, 0, 2, 66, "1.2", 35, 16, QuoteStatus.IN_PRODUCTION, 0, 0, 2),
            (2, 3, 1, 90, "0.0", 6, 0, QuoteStatus.ORDERED, Decimal("0.5"), None, 1),
            (3, 1, 0, 55, "3.1", 14, 6, QuoteStatus.DRAFT, 0, None, 0),
            (1, 0, 0, 20, "1.2", 5, 2, QuoteStatus.CANCELLED, 0, None, 9),
        ]

        created_count = 0
        for (ci, mi, boards, usage, charged, cut_m, hinges,
             target_status, deposit_share, machine_idx, days_ago) in quote_specs:
            customer = customers[ci % len(customers)]
            quote = Quote.objects.create(
                customer=customer,
                created_by=sales,
                discount_percent=customer.default_discount_percent,
            )
            quote.price_material(
                materials[mi],
                boards_used=boards,
                usage_percentage=usage,
                charged_sqm=Decimal(charged),
                cutting_length_m=cut_m,
                cutting_fee_per_m=Decimal("250"),
            )
            quote.add_fee(fees["edge"], quantity=cut_m)
            if hinges:
                quote.add_fee(fees["drill"], quantity=hinges)
                quote.add_accessory(accessories[0], quantity=hinges)
            if target_status == QuoteStatus.FINISHED:
                quote.add_fee(fees["delivery"])

            # Backdate created_at (can't set auto_now_add via create)
            created_at = now - timedelta(days=days_ago)
            Quote.objects.filter(pk=quote.pk).update(created_at=created_at)
            quote.refresh_from_db()

            self._advance_to(quote, target_status, deposit_share, machines, machine_idx, today, sales, operator)
            created_count += 1

        self.stdout.write(f"  Quotes: {created_count} created")

    def _advance_to(self, quote, target_status, deposit_share, machines, machine_idx, today, sales, operator):
        """Drive a fresh draft through the real lifecycle up to target_status."""
        from payments.models import PaymentMethod, QuotePayment
        from pricing.rounding import round_half_up
        from quotes.models import QuoteStatus

        if target_status == QuoteStatus.DRAFT:
            return

        deposit = round_half_up(quote.final_total * Decimal(deposit_share)) if deposit_share else None
        quote.create_order(sales, initial_payment=deposit, payment_method=PaymentMethod.CASH, comment="Előleg")

        if target_status == QuoteStatus.CANCELLED:
            quote.transition_to(QuoteStatus.CANCELLED, changed_by=sales, note="Ügyfél lemondta")
            return
        if target_status == QuoteStatus.ORDERED:
            return

        quote.assign_production(
            machines[machine_idx],
            today + timedelta(days=1),
            f"DEMO{quote.pk:06d}",
            changed_by=operator,
        )
        if target_status == QuoteStatus.IN_PRODUCTION:
            return

        quote.transition_to(QuoteStatus.READY, changed_by=operator)
        if target_status == QuoteStatus.READY:
            return

        remaining = round_half_up(quote.remaining_balance)
        if remaining > 0:
            QuotePayment.record(quote, remaining, PaymentMethod.CARD, created_by=sales, comment="Átvételkor")
        quote.transition_to(QuoteStatus.FINISHED, changed_by=sales)
