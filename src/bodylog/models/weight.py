"""Daily weight and body profile models."""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum

from ..utils.units import WeightUnit, convert, format_weight


def _parse_timestamp(value) -> datetime | None:
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(value)


def _parse_date(value) -> date:
    if isinstance(value, date):
        return value
    return date.fromisoformat(value)


class WeightSource(str, Enum):
    """Where a resolved weight value came from."""

    ENTRY = "entry"  # Logged for the requested date
    PROFILE = "profile"  # Default weight from the body profile


@dataclass
class DailyWeightEntry:
    """One user's weight for one calendar date.

    At most one entry exists per (user_id, date_logged). Later writes for
    the same date update weight and unit in place.
    """

    user_id: str
    date_logged: date
    weight: float
    weight_unit: WeightUnit = WeightUnit.KG
    id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def weight_in(self, unit: WeightUnit) -> float:
        """Return the weight converted to the given unit."""
        return convert(self.weight, self.weight_unit, unit)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "user_id": self.user_id,
            "date_logged": self.date_logged.isoformat(),
            "weight": self.weight,
            "weight_unit": self.weight_unit.value,
        }

    @classmethod
    def from_row(cls, row: dict) -> "DailyWeightEntry":
        """Create from a weight_logs row."""
        return cls(
            id=row.get("id"),
            user_id=row["user_id"],
            date_logged=_parse_date(row["date_logged"]),
            weight=row["weight"],
            weight_unit=WeightUnit(row.get("weight_unit") or WeightUnit.KG.value),
            created_at=_parse_timestamp(row.get("created_at")),
            updated_at=_parse_timestamp(row.get("updated_at")),
        )


@dataclass
class UserBodyProfile:
    """A user's default body measurements.

    Only consulted as a fallback when no entry exists for a date.
    """

    id: str
    weight: float | None = None
    height: float | None = None  # in cm
    weight_unit: WeightUnit = WeightUnit.KG
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "weight": self.weight,
            "height": self.height,
            "weight_unit": self.weight_unit.value,
        }

    @classmethod
    def from_row(cls, row: dict) -> "UserBodyProfile":
        """Create from a users_profile row."""
        return cls(
            id=row["id"],
            weight=row.get("weight"),
            height=row.get("height"),
            weight_unit=WeightUnit(row.get("weight_unit") or WeightUnit.KG.value),
            created_at=_parse_timestamp(row.get("created_at")),
            updated_at=_parse_timestamp(row.get("updated_at")),
        )

    def get_summary(self) -> str:
        """Generate a summary for display."""
        lines = [f"User: {self.id}"]
        if self.weight:
            lines.append(f"Default weight: {format_weight(self.weight, self.weight_unit)}")
        else:
            lines.append("Default weight: not set")
        if self.height:
            lines.append(f"Height: {self.height:.1f} cm")
        else:
            lines.append("Height: not set")
        lines.append(f"Preferred unit: {self.weight_unit.label}")
        return "\n".join(lines)


@dataclass
class WeightResult:
    """Today's weight as resolved for display.

    ``is_locked`` is True when the value comes from an existing entry for
    the date, so it must not be offered as a fresh entry.
    """

    weight: float
    weight_unit: WeightUnit
    source: WeightSource
    is_locked: bool

    @property
    def display(self) -> str:
        return format_weight(self.weight, self.weight_unit)

    def to_dict(self) -> dict:
        return {
            "weight": self.weight,
            "weight_unit": self.weight_unit.value,
            "source": self.source.value,
            "is_locked": self.is_locked,
        }
