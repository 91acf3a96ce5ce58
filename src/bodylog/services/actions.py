"""Explicit success/failure results for service calls.

Request handlers call services through ``safe_action`` so that an
unauthenticated user, rejected input or a store outage reaches the caller
as a distinct failure instead of a default value.
"""

from dataclasses import dataclass
from typing import Any, Awaitable, Callable

from ..errors import BodylogError, ValidationError


@dataclass
class ActionResult:
    """Outcome of a service call: either ``data`` or an error."""

    data: Any = None
    error: str | None = None
    error_code: str | None = None
    field_errors: dict[str, list[str]] | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def failure(cls, exc: BodylogError) -> "ActionResult":
        """Create a failure result from a service error."""
        field_errors = exc.field_errors if isinstance(exc, ValidationError) else None
        return cls(error=exc.message, error_code=exc.code, field_errors=field_errors or None)

    def to_dict(self) -> dict:
        """Convert to the response payload."""
        if self.ok:
            return {"data": self.data}
        payload = {"error": self.error, "code": self.error_code}
        if self.field_errors:
            payload["field_errors"] = self.field_errors
        return payload


async def safe_action(
    operation: Callable[..., Awaitable[Any]], *args, **kwargs
) -> ActionResult:
    """Await a service operation and fold service errors into the result."""
    try:
        data = await operation(*args, **kwargs)
    except BodylogError as e:
        return ActionResult.failure(e)
    return ActionResult(data=data)
