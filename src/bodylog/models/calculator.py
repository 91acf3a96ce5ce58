"""Calculator session models."""

import json
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum

from .weight import _parse_date, _parse_timestamp


class CalculatorCategory(str, Enum):
    """Kind of calculator a session was logged from."""

    BMI = "BMI"
    BMR = "BMR"
    BODY_FAT = "BODY_FAT"


class Gender(str, Enum):
    """Gender used by the BMR and body fat formulas."""

    MALE = "MALE"
    FEMALE = "FEMALE"


class ActivityLevel(str, Enum):
    """Activity level for daily calorie estimates."""

    SEDENTARY = "SEDENTARY"  # Little or no exercise
    LIGHTLY_ACTIVE = "LIGHTLY_ACTIVE"  # 1-3 days/week
    MODERATELY_ACTIVE = "MODERATELY_ACTIVE"  # 3-5 days/week
    VERY_ACTIVE = "VERY_ACTIVE"  # 6-7 days/week
    EXTRA_ACTIVE = "EXTRA_ACTIVE"  # Physical job or twice-daily training


@dataclass
class CalculatorSession:
    """A logged calculator result for one user and date.

    Sessions are append-only. Several sessions of the same category may
    exist for one date.
    """

    user_id: str
    category: CalculatorCategory
    date: date
    result: float
    result_unit: str
    inputs: dict = field(default_factory=dict)
    id: str | None = None
    created_at: datetime | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "user_id": self.user_id,
            "category": self.category.value,
            "date": self.date.isoformat(),
            "inputs": self.inputs,
            "result": self.result,
            "result_unit": self.result_unit,
        }

    def to_fields(self) -> dict:
        """Convert to column values for storage."""
        return {
            "user_id": self.user_id,
            "category": self.category.value,
            "date": self.date.isoformat(),
            "inputs": json.dumps(self.inputs),
            "result": self.result,
            "result_unit": self.result_unit,
        }

    @classmethod
    def from_row(cls, row: dict) -> "CalculatorSession":
        """Create from a calculator_sessions row."""
        inputs = row.get("inputs") or "{}"
        if isinstance(inputs, str):
            inputs = json.loads(inputs)
        return cls(
            id=row.get("id"),
            user_id=row["user_id"],
            category=CalculatorCategory(row["category"]),
            date=_parse_date(row["date"]),
            inputs=inputs if isinstance(inputs, dict) else {},
            result=row["result"],
            result_unit=row["result_unit"],
            created_at=_parse_timestamp(row.get("created_at")),
        )
