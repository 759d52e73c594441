"""Tests for threshold lookup, per-quote suggestion and the role command."""

from decimal import Decimal
from io import StringIO

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError
from django.db import DatabaseError

from core.models import Setting
from production import services
from production.models import Machine, MachineRole
from quotes.models import QuotePanel


@pytest.fixture(autouse=True)
def forget_last_threshold(monkeypatch):
    monkeypatch.setattr(services, "_last_known_threshold", None)


@pytest.mark.django_db
class TestMachineThreshold:
    def test_default_when_unset(self):
        assert services.get_machine_threshold() == Decimal("0.35")

    def test_default_follows_settings(self, settings):
        settings.MACHINE_THRESHOLD_DEFAULT = 0.4
        assert services.get_machine_threshold() == Decimal("0.4")

    def test_reads_stored_value_fresh(self):
        Setting.put("machine_threshold", "0.5")
        assert services.get_machine_threshold() == Decimal("0.5")
        Setting.put("machine_threshold", "0,42")
        assert services.get_machine_threshold() == Decimal("0.42")

    def test_invalid_value_falls_back_to_last_known(self, caplog):
        Setting.put("machine_threshold", "0.5")
        services.get_machine_threshold()
        Setting.put("machine_threshold", "sok")
        assert services.get_machine_threshold() == Decimal("0.5")
        assert "Invalid machine_threshold" in caplog.text

    def test_read_failure_falls_back_to_default(self, monkeypatch):
        def broken(*args, **kwargs):
            raise DatabaseError("connection lost")

        monkeypatch.setattr(Setting, "get", broken)
        assert services.get_machine_threshold() == Decimal("0.35")

    def test_set_threshold(self):
        assert services.set_machine_threshold("0.45") == Decimal("0.45")
        assert Setting.get("machine_threshold") == "0.45"

    @pytest.mark.parametrize("value", ["0", "-1", "abc", "Infinity"])
    def test_set_threshold_rejects_nonsense(self, value):
        with pytest.raises(ValueError):
            services.set_machine_threshold(value)


@pytest.mark.django_db
class TestSuggestForQuote:
    def test_suggestion_from_quote_lines(self, quote, material, machines):
        QuotePanel.objects.create(quote=quote, material=material, length_mm=720, width_mm=560, quantity=12)
        quote.price_material(material, boards_used=1, usage_percentage=80)

        suggestion = services.suggest_for_quote(quote, threshold="0.483")
        assert suggestion.machine_id == machines[MachineRole.SMALL_PANEL].pk

        Setting.put("machine_threshold", "0.4")
        suggestion = services.suggest_for_quote(quote)
        assert suggestion.machine_id == machines[MachineRole.LARGE_PANEL].pk

    def test_inactive_machines_are_ignored(self, quote, material, machines):
        QuotePanel.objects.create(quote=quote, material=material, length_mm=720, width_mm=560, quantity=2)
        quote.price_material(material, boards_used=0, usage_percentage=20, charged_sqm=1)
        Machine.objects.filter(pk=machines[MachineRole.SMALL_ORDER].pk).update(is_active=False)
        assert services.suggest_for_quote(quote) is None

    def test_empty_quote(self, quote, machines):
        assert services.suggest_for_quote(quote) is None


@pytest.mark.django_db
class TestAssignMachineRolesCommand:
    def test_assigns_roles_from_names(self):
        first = Machine.objects.create(name="Holzma 1")
        second = Machine.objects.create(name="Holzma 2")
        small = Machine.objects.create(name="Kis gép", comment="Gyuri")
        out = StringIO()
        call_command("assign_machine_roles", stdout=out)

        for m in (first, second, small):
            m.refresh_from_db()
        assert (first.role, second.role, small.role) == ("1", "2", "3")
        assert "3 machine role(s) saved" in out.getvalue()

    def test_keeps_existing_roles(self, machines):
        out = StringIO()
        call_command("assign_machine_roles", stdout=out)
        assert "Nothing to assign" in out.getvalue()

    def test_dry_run_saves_nothing(self):
        for name in ("A", "B", "C"):
            Machine.objects.create(name=name)
        call_command("assign_machine_roles", "--dry-run", stdout=StringIO())
        assert not Machine.objects.exclude(role="").exists()

    def test_needs_three_machines(self):
        Machine.objects.create(name="A")
        with pytest.raises(CommandError):
            call_command("assign_machine_roles", stdout=StringIO())
