"""Weight unit conversion and formatting."""

from enum import Enum

# 1 lb = 0.453592 kg, 1 kg = 2.20462 lb. Reciprocal approximations,
# so a KG -> LB -> KG round trip drifts slightly.
LB_TO_KG = 0.453592
KG_TO_LB = 2.20462


class WeightUnit(str, Enum):
    """Unit a weight value was recorded in."""

    KG = "KG"
    LB = "LB"

    @property
    def label(self) -> str:
        """Short display label."""
        return "kg" if self is WeightUnit.KG else "lbs"


_UNIT_ALIASES = {
    "kg": WeightUnit.KG,
    "kgs": WeightUnit.KG,
    "lb": WeightUnit.LB,
    "lbs": WeightUnit.LB,
}


def parse_unit(value: "WeightUnit | str") -> WeightUnit:
    """Parse a unit from an enum member or a case-insensitive name.

    Raises:
        ValueError: If the value is not a known weight unit.
    """
    if isinstance(value, WeightUnit):
        return value
    if isinstance(value, str):
        unit = _UNIT_ALIASES.get(value.strip().lower())
        if unit is not None:
            return unit
    raise ValueError(f"Unknown weight unit: {value!r}")


def to_kg(value: float, from_unit: WeightUnit) -> float:
    """Convert a weight to kilograms."""
    if from_unit == WeightUnit.LB:
        return value * LB_TO_KG
    return value


def from_kg(value_kg: float, to_unit: WeightUnit) -> float:
    """Convert a weight in kilograms to the target unit."""
    if to_unit == WeightUnit.LB:
        return value_kg * KG_TO_LB
    return value_kg


def convert(value: float, from_unit: WeightUnit, to_unit: WeightUnit) -> float:
    """Convert a weight between any two units."""
    if from_unit == to_unit:
        return value
    return from_kg(to_kg(value, from_unit), to_unit)


def format_weight(value: float, unit: WeightUnit) -> str:
    """Render a weight with one decimal place and its unit label."""
    return f"{value:.1f} {unit.label}"
