"""
Machine suggestion for an order.

Given the cutting list (panels), the per-material pricing rows and the
machines, pick the saw that should cut the order:

    one material, no full board, usage < 65%  -> small-order machine ("3")
    m² of material per panel > threshold       -> large-panel machine ("2")
    otherwise                                  -> small-panel machine ("1")

Inputs may be model instances or plain dicts with the same field names.
Nothing here touches the database; the threshold is passed in.
"""

from dataclasses import dataclass
from decimal import Decimal

from pricing.margin import board_area_m2
from pricing.rounding import to_decimal

from .models import MachineRole

# Operator nickname and marker text used before machines had explicit roles
SMALL_ORDER_MARKERS = ("gyuri", "kis rendelés")
SMALL_ORDER_USAGE_LIMIT = Decimal("65")
REQUIRED_MACHINES = 3


@dataclass(frozen=True)
class MaterialMetrics:
    material_id: int
    panel_count: int
    boards_used: int
    usage_percentage: Decimal
    board_area_m2: Decimal
    total_material_area_m2: Decimal
    actual_material_used_m2: Decimal


@dataclass(frozen=True)
class MachineSuggestion:
    machine_id: int
    role: str
    rationale: str
    m2_per_panel: Decimal | None = None

    def as_dict(self):
        return {
            "machine_id": self.machine_id,
            "role": self.role,
            "rationale": self.rationale,
            "m2_per_panel": float(self.m2_per_panel) if self.m2_per_panel is not None else None,
        }


def _field(obj, name, default=None):
    if isinstance(obj, dict):
        return obj.get(name, default)
    return getattr(obj, name, default)


def _material_id(obj):
    material_id = _field(obj, "material_id")
    if material_id is None:
        material = _field(obj, "material")
        material_id = _field(material, "id") if material is not None else None
    return material_id


def aggregate_panel_counts(panels):
    counts = {}
    for panel in panels:
        material_id = _material_id(panel)
        counts[material_id] = counts.get(material_id, 0) + int(_field(panel, "quantity", 0) or 0)
    return counts


def material_metrics(pricing_rows, panel_counts):
    metrics = []
    for row in pricing_rows:
        material_id = _material_id(row)
        area = board_area_m2(_field(row, "board_length_mm", 0), _field(row, "board_width_mm", 0))
        boards_used = int(_field(row, "boards_used", 0) or 0)
        total_area = area * boards_used + to_decimal(_field(row, "charged_sqm"))
        waste_multi = to_decimal(_field(row, "waste_multi"))
        if waste_multi <= 0:
            waste_multi = Decimal("1")
        metrics.append(MaterialMetrics(
            material_id=material_id,
            panel_count=panel_counts.get(material_id, 0),
            boards_used=boards_used,
            usage_percentage=to_decimal(_field(row, "usage_percentage")),
            board_area_m2=area,
            total_material_area_m2=total_area,
            actual_material_used_m2=total_area / waste_multi,
        ))
    return metrics


def _is_small_order_machine(machine):
    text = f"{_field(machine, 'name', '') or ''} {_field(machine, 'comment', '') or ''}".lower()
    return any(marker in text for marker in SMALL_ORDER_MARKERS)


def legacy_machine_roles(machines):
    """
    Roles from machine names alone: the small-order marker picks "3", the
    rest in creation order fill "1" then "2" (and "3" if nothing matched).
    """
    roles = {}
    remaining = []
    for machine in machines:
        if MachineRole.SMALL_ORDER not in roles and _is_small_order_machine(machine):
            roles[MachineRole.SMALL_ORDER] = machine
        else:
            remaining.append(machine)
    remaining.sort(key=lambda m: (_field(m, "created_at") is None, _field(m, "created_at"), _field(m, "id")))
    for role in (MachineRole.SMALL_PANEL, MachineRole.LARGE_PANEL, MachineRole.SMALL_ORDER):
        if role not in roles and remaining:
            roles[role] = remaining.pop(0)
    return roles


def resolve_machine_roles(machines):
    """
    Map each MachineRole to a machine, or None when the shop has fewer than
    three machines. Explicit roles win; unconfigured machines fill the gaps
    through legacy_machine_roles.
    """
    machines = list(machines)
    if len(machines) < REQUIRED_MACHINES:
        return None

    roles = {}
    unassigned = []
    for machine in machines:
        role = _field(machine, "role", "") or ""
        if role in MachineRole.values and role not in roles:
            roles[MachineRole(role)] = machine
        else:
            unassigned.append(machine)

    for role, machine in legacy_machine_roles(unassigned).items():
        if role not in roles:
            roles[role] = machine

    missing = [role for role in MachineRole if role not in roles]
    for role in missing:
        taken = {id(m) for m in roles.values()}
        spare = next((m for m in unassigned if id(m) not in taken), None)
        if spare is None:
            return None
        roles[role] = spare
    return roles


def _m2_per_panel(metrics):
    if len(metrics) == 1:
        only = metrics[0]
        if only.panel_count == 0:
            return None
        return only.actual_material_used_m2 / only.panel_count
    total_panels = sum(m.panel_count for m in metrics)
    if total_panels == 0:
        return None
    return sum(m.actual_material_used_m2 for m in metrics) / total_panels


def suggest_machine(panels, pricing_rows, machines, threshold):
    """Return a MachineSuggestion, or None when there is not enough data."""
    roles = resolve_machine_roles(machines)
    if roles is None:
        return None
    panels = list(panels)
    pricing_rows = list(pricing_rows)
    if not panels or not pricing_rows:
        return None

    metrics = material_metrics(pricing_rows, aggregate_panel_counts(panels))
    threshold = to_decimal(threshold)

    def pick(role, rationale, m2_per_panel=None):
        return MachineSuggestion(_field(roles[role], "id"), role.value, rationale, m2_per_panel)

    if len(metrics) == 1:
        only = metrics[0]
        if only.boards_used == 0 and only.usage_percentage < SMALL_ORDER_USAGE_LIMIT:
            return pick(
                MachineRole.SMALL_ORDER,
                f"Egy anyag, teljes tábla nélkül, {only.usage_percentage.normalize():f}% kihasználtság",
            )

    m2_per_panel = _m2_per_panel(metrics)
    if m2_per_panel is None:
        return pick(MachineRole.SMALL_PANEL, "Alapértelmezett javaslat")
    shown = f"{m2_per_panel.quantize(Decimal('0.001'))} m²/alkatrész"
    if m2_per_panel > threshold:
        return pick(MachineRole.LARGE_PANEL, f"{shown} > {threshold} küszöb", m2_per_panel)
    return pick(MachineRole.SMALL_PANEL, f"{shown} ≤ {threshold} küszöb", m2_per_panel)
