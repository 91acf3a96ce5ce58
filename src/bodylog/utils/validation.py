"""Input validation shared by the services."""

import math
import re
from datetime import date, datetime

from ..errors import ValidationError
from .units import WeightUnit, parse_unit

_DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def parse_client_date(value: "str | date", field: str = "client_date") -> date:
    """Parse a client-supplied calendar date in YYYY-MM-DD form.

    The value is taken as a plain calendar date. No timezone adjustment is
    made and the server clock is never used as a fallback.
    """
    if isinstance(value, date) and not isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not _DATE_PATTERN.fullmatch(value):
        raise ValidationError.for_field(field, "expected a date in YYYY-MM-DD format")
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise ValidationError.for_field(field, str(e)) from e


def require_number(
    field: str,
    value: object,
    minimum: float | None = None,
    maximum: float | None = None,
) -> float:
    """Check that a value is a finite number within the inclusive bounds."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError.for_field(field, "expected a number")
    try:
        number = float(value)
    except OverflowError as e:
        raise ValidationError.for_field(field, "expected a finite number") from e
    if not math.isfinite(number):
        raise ValidationError.for_field(field, "expected a finite number")
    if minimum is not None and number < minimum:
        raise ValidationError.for_field(field, f"must be at least {minimum:g}")
    if maximum is not None and number > maximum:
        raise ValidationError.for_field(field, f"must be at most {maximum:g}")
    return number


def optional_number(
    field: str,
    value: object,
    minimum: float | None = None,
    maximum: float | None = None,
) -> float | None:
    """Like require_number, but None passes through."""
    if value is None:
        return None
    return require_number(field, value, minimum, maximum)


def require_unit(value: object, field: str = "weight_unit") -> WeightUnit:
    """Parse a weight unit, reporting unknown units as validation errors."""
    try:
        return parse_unit(value)  # type: ignore[arg-type]
    except ValueError as e:
        raise ValidationError.for_field(field, "must be one of KG, LB") from e


def require_choice(enum_cls, value: object, field: str):
    """Parse an enum member by value or name."""
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        normalized = value.strip().upper().replace("-", "_")
        for member in enum_cls:
            if member.value.upper() == normalized or member.name == normalized:
                return member
    choices = ", ".join(member.value for member in enum_cls)
    raise ValidationError.for_field(field, f"must be one of {choices}")
