"""Weight unit conversion and display formatting.

Weights are stored in kilograms. Pounds are derived for display with
LB_PER_KG and converted back with KG_PER_LB when the user types pounds.
"""

from __future__ import annotations

import math

from repledger.core.constants import EMPTY_DISPLAY, KG_PER_LB, LB_PER_KG, LB_PER_STONE
from repledger.core.enums import BodyweightUnit, WeightUnit


def to_kg_factor(unit: WeightUnit) -> float:
    return KG_PER_LB if unit is WeightUnit.LB else 1.0


def from_kg_factor(unit: WeightUnit) -> float:
    return LB_PER_KG if unit is WeightUnit.LB else 1.0


def from_kg(value_kg: float, unit: WeightUnit) -> float:
    """Kilograms -> display unit."""
    return value_kg * from_kg_factor(unit)


def to_kg(value: float, unit: WeightUnit) -> float:
    """User input in ``unit`` -> kilograms."""
    return value * to_kg_factor(unit)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def stone_and_pounds(value_kg: float) -> tuple[int, int]:
    """Split a kilogram value into whole stone and rounded pounds.

    Rounding the remainder can reach 14 lb; that carries into the next stone
    so the pounds part is always 0-13.
    """
    total_lb = value_kg * LB_PER_KG
    stone = math.floor(total_lb / LB_PER_STONE)
    pounds = _round_half_up(math.fmod(total_lb, LB_PER_STONE))
    if pounds >= LB_PER_STONE:
        stone += 1
        pounds = 0
    return stone, pounds


def stone_lb_to_kg(stone: int, pounds: float) -> float:
    return (stone * LB_PER_STONE + pounds) * KG_PER_LB


def format_weight(value_kg: float, unit: BodyweightUnit) -> str:
    """Bodyweight display string: ``"80.0 kg"``, ``"176.4 lb"`` or ``"12 st 8 lb"``."""
    if unit is BodyweightUnit.KG:
        return f"{value_kg:.1f} kg"
    if unit is BodyweightUnit.LB:
        return f"{value_kg * LB_PER_KG:.1f} lb"
    stone, pounds = stone_and_pounds(value_kg)
    return f"{stone} st {pounds} lb"


def format_lifting_weight(value_kg: float | None, unit: WeightUnit, decimals: int = 1) -> str:
    """Lifted weight with unit, or a dash when not recorded."""
    if value_kg is None:
        return EMPTY_DISPLAY
    return f"{from_kg(value_kg, unit):.{decimals}f} {unit.abbreviation}"
