"""Utility functions for bodylog."""

from .units import WeightUnit, convert, format_weight, from_kg, parse_unit, to_kg

__all__ = [
    "WeightUnit",
    "convert",
    "format_weight",
    "from_kg",
    "parse_unit",
    "to_kg",
]
