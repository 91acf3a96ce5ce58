"""Body metric services."""

from .actions import ActionResult, safe_action
from .profiles import ProfileService
from .recorder import DailyMetricRecorder
from .sessions import CalculatorSessionService

__all__ = [
    "ActionResult",
    "CalculatorSessionService",
    "DailyMetricRecorder",
    "ProfileService",
    "safe_action",
]
