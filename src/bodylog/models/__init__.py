"""Data models for bodylog."""

from .calculator import ActivityLevel, CalculatorCategory, CalculatorSession, Gender
from .weight import DailyWeightEntry, UserBodyProfile, WeightResult, WeightSource

__all__ = [
    "ActivityLevel",
    "CalculatorCategory",
    "CalculatorSession",
    "DailyWeightEntry",
    "Gender",
    "UserBodyProfile",
    "WeightResult",
    "WeightSource",
]
