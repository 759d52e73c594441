"""Tests for the machine suggestion heuristic (no database)."""

from datetime import datetime, timedelta
from decimal import Decimal

import pytest

from production.classifier import (
    aggregate_panel_counts,
    legacy_machine_roles,
    material_metrics,
    resolve_machine_roles,
    suggest_machine,
)
from production.models import MachineRole

T0 = datetime(2024, 1, 1, 8, 0)


def machine(pk, name, comment="", role="", days=0):
    return {"id": pk, "name": name, "comment": comment, "role": role, "created_at": T0 + timedelta(days=days)}


def board_row(material_id=1, boards_used=1, usage=80, charged_sqm=0, waste_multi=1):
    return {
        "material_id": material_id,
        "board_length_mm": 2800,
        "board_width_mm": 2070,
        "boards_used": boards_used,
        "usage_percentage": usage,
        "charged_sqm": charged_sqm,
        "waste_multi": waste_multi,
    }


@pytest.fixture
def shop_machines():
    return [
        machine(10, "Holzma HPP 380", days=0),
        machine(11, "Holzma HPP 300", days=1),
        machine(12, "Gyuri gépe", days=2),
    ]


class TestAggregation:
    def test_panel_counts_are_summed_per_material(self):
        panels = [
            {"material_id": 1, "quantity": 4},
            {"material_id": 2, "quantity": 1},
            {"material_id": 1, "quantity": 6},
        ]
        assert aggregate_panel_counts(panels) == {1: 10, 2: 1}

    def test_metrics(self):
        (m,) = material_metrics([board_row(boards_used=2, charged_sqm="1.204", waste_multi="1.25")], {1: 8})
        assert m.board_area_m2 == Decimal("5.796")
        assert m.total_material_area_m2 == Decimal("12.796")
        assert m.actual_material_used_m2 == Decimal("12.796") / Decimal("1.25")
        assert m.panel_count == 8

    def test_missing_waste_multi_counts_as_one(self):
        (m,) = material_metrics([board_row(waste_multi=0)], {})
        assert m.actual_material_used_m2 == m.total_material_area_m2
        assert m.panel_count == 0


class TestMachineRoles:
    def test_marker_in_name_or_comment(self, shop_machines):
        roles = legacy_machine_roles(shop_machines)
        assert roles[MachineRole.SMALL_ORDER]["id"] == 12
        assert roles[MachineRole.SMALL_PANEL]["id"] == 10
        assert roles[MachineRole.LARGE_PANEL]["id"] == 11

    def test_marker_is_case_insensitive_and_wins_over_age(self):
        machines = [
            machine(1, "Régi fűrész", comment="KIS RENDELÉS", days=0),
            machine(2, "Holzma A", days=1),
            machine(3, "Holzma B", days=2),
        ]
        roles = resolve_machine_roles(machines)
        assert roles[MachineRole.SMALL_ORDER]["id"] == 1
        assert roles[MachineRole.SMALL_PANEL]["id"] == 2
        assert roles[MachineRole.LARGE_PANEL]["id"] == 3

    def test_without_marker_third_machine_takes_small_orders(self):
        machines = [machine(3, "C", days=2), machine(1, "A", days=0), machine(2, "B", days=1)]
        roles = resolve_machine_roles(machines)
        assert [roles[r]["id"] for r in MachineRole] == [1, 2, 3]

    def test_explicit_roles_override_names(self, shop_machines):
        shop_machines[0]["role"] = MachineRole.SMALL_ORDER
        shop_machines[2]["role"] = MachineRole.LARGE_PANEL
        roles = resolve_machine_roles(shop_machines)
        assert roles[MachineRole.SMALL_ORDER]["id"] == 10
        assert roles[MachineRole.LARGE_PANEL]["id"] == 12
        assert roles[MachineRole.SMALL_PANEL]["id"] == 11

    def test_fewer_than_three_machines(self, shop_machines):
        assert resolve_machine_roles(shop_machines[:2]) is None


class TestSuggestMachine:
    def test_single_material_offcut_goes_to_small_order_machine(self, shop_machines):
        suggestion = suggest_machine(
            [{"material_id": 1, "quantity": 2}],
            [board_row(boards_used=0, usage=40, charged_sqm="1.5")],
            shop_machines,
            "0.35",
        )
        assert suggestion.role == MachineRole.SMALL_ORDER
        assert suggestion.machine_id == 12
        assert suggestion.m2_per_panel is None
        assert suggestion.as_dict()["m2_per_panel"] is None
        assert "40%" in suggestion.rationale

    def test_single_material_offcut_ignores_geometry(self, shop_machines):
        suggestion = suggest_machine(
            [{"material_id": 1, "quantity": 1}],
            [board_row(boards_used=0, usage="64.99", charged_sqm="5")],
            shop_machines,
            "0.01",
        )
        assert suggestion.role == MachineRole.SMALL_ORDER

    def test_threshold_boundary(self, shop_machines):
        # 5.796 m² over 12 panels is exactly 0.483
        rows = [board_row(boards_used=1)]
        at_threshold = suggest_machine([{"material_id": 1, "quantity": 12}], rows, shop_machines, "0.483")
        assert at_threshold.m2_per_panel == Decimal("0.483")
        assert at_threshold.role == MachineRole.SMALL_PANEL
        assert at_threshold.machine_id == 10

        above = suggest_machine([{"material_id": 1, "quantity": 11}], rows, shop_machines, "0.483")
        assert above.role == MachineRole.LARGE_PANEL
        assert above.machine_id == 11

    def test_high_usage_single_material_uses_threshold(self, shop_machines):
        suggestion = suggest_machine(
            [{"material_id": 1, "quantity": 4}],
            [board_row(boards_used=0, usage=70, charged_sqm=2)],
            shop_machines,
            "0.35",
        )
        assert suggestion.m2_per_panel == Decimal("0.5")
        assert suggestion.as_dict()["m2_per_panel"] == 0.5
        assert suggestion.role == MachineRole.LARGE_PANEL

    def test_multiple_materials_pool_area_and_panels(self, shop_machines):
        panels = [{"material_id": 1, "quantity": 10}, {"material_id": 2, "quantity": 20}]
        rows = [
            board_row(material_id=1, boards_used=1),
            board_row(material_id=2, boards_used=0, usage=30, charged_sqm=2, waste_multi="1.25"),
        ]
        suggestion = suggest_machine(panels, rows, shop_machines, "0.35")
        # (5.796 + 2 / 1.25) / 30
        assert suggestion.m2_per_panel == Decimal("7.396") / 30
        assert suggestion.role == MachineRole.SMALL_PANEL

    def test_no_panels_for_priced_material_falls_back_to_default(self, shop_machines):
        suggestion = suggest_machine(
            [{"material_id": 2, "quantity": 3}], [board_row(material_id=1)], shop_machines, "0.35"
        )
        assert suggestion.role == MachineRole.SMALL_PANEL
        assert suggestion.m2_per_panel is None
        assert suggestion.rationale == "Alapértelmezett javaslat"

    def test_two_machines_give_no_suggestion(self, shop_machines):
        assert suggest_machine(
            [{"material_id": 1, "quantity": 2}], [board_row(boards_used=0, usage=40)], shop_machines[:2], "0.35"
        ) is None

    def test_missing_data_gives_no_suggestion(self, shop_machines):
        assert suggest_machine([], [board_row()], shop_machines, "0.35") is None
        assert suggest_machine([{"material_id": 1, "quantity": 1}], [], shop_machines, "0.35") is None
