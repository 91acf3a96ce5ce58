"""Daily weight recording and "logged today" checks.

"Today" is always the calendar date the client sends as ``YYYY-MM-DD``.
The server clock is never consulted, so a client east or west of the
server still logs against its own local day.
"""

import logging
from datetime import date

from ..db.store import RecordStore
from ..errors import UnauthorizedError
from ..models.calculator import CalculatorCategory
from ..models.weight import (
    DailyWeightEntry,
    UserBodyProfile,
    WeightResult,
    WeightSource,
)
from ..utils.units import WeightUnit
from ..utils.validation import (
    parse_client_date,
    require_choice,
    require_number,
    require_unit,
)

logger = logging.getLogger(__name__)

# Plausible body weight in either unit, applied to the raw input value
MIN_WEIGHT = 20.0
MAX_WEIGHT = 500.0


def require_user(user_id: str | None) -> str:
    """Return the authenticated user id or raise UnauthorizedError."""
    if not user_id:
        raise UnauthorizedError()
    return user_id


class DailyMetricRecorder:
    """Resolves and records a user's weight for a client-supplied date."""

    def __init__(self, store: RecordStore):
        self.store = store

    async def get_todays_weight(
        self, user_id: str | None, client_date: str | date
    ) -> WeightResult:
        """Resolve the weight to show for the given date.

        An entry logged for the date wins and is reported as locked.
        Otherwise the profile default is used (0 kg when there is no
        profile), unlocked.
        """
        user_id = require_user(user_id)
        day = parse_client_date(client_date)

        row = await self.store.find_unique(
            "weight_logs", {"user_id": user_id, "date_logged": day.isoformat()}
        )
        if row is not None:
            entry = DailyWeightEntry.from_row(row)
            logger.debug("Weight for %s on %s comes from entry %s", user_id, day, entry.id)
            return WeightResult(
                weight=entry.weight,
                weight_unit=entry.weight_unit,
                source=WeightSource.ENTRY,
                is_locked=True,
            )

        profile_row = await self.store.find_unique("users_profile", {"id": user_id})
        profile = UserBodyProfile.from_row(profile_row) if profile_row else None
        return WeightResult(
            weight=(profile.weight if profile and profile.weight else 0.0),
            weight_unit=profile.weight_unit if profile else WeightUnit.KG,
            source=WeightSource.PROFILE,
            is_locked=False,
        )

    async def is_todays_weight_logged(
        self, user_id: str | None, client_date: str | date
    ) -> bool:
        """Check whether an entry exists for the given date."""
        user_id = require_user(user_id)
        day = parse_client_date(client_date)
        row = await self.store.find_first(
            "weight_logs", {"user_id": user_id, "date_logged": day.isoformat()}
        )
        return row is not None

    async def record_todays_weight(
        self,
        user_id: str | None,
        client_date: str | date,
        weight: float,
        unit: WeightUnit | str,
    ) -> bool:
        """Create or overwrite the entry for the given date.

        The weight is stored in the unit it was entered in. Validation runs
        before the store is touched, so a rejected call leaves any existing
        entry unchanged.
        """
        user_id = require_user(user_id)
        day = parse_client_date(client_date)
        weight = require_number("weight", weight, MIN_WEIGHT, MAX_WEIGHT)
        unit = require_unit(unit)

        fields = {"weight": weight, "weight_unit": unit.value}
        await self.store.upsert(
            "weight_logs",
            key={"user_id": user_id, "date_logged": day.isoformat()},
            create=fields,
            update=fields,
        )
        logger.info("Recorded weight %.1f %s for %s on %s", weight, unit.label, user_id, day)
        return True

    async def is_todays_category_logged(
        self,
        user_id: str | None,
        client_date: str | date,
        category: CalculatorCategory | str,
    ) -> bool:
        """Check whether a calculator session of this category exists for the date."""
        user_id = require_user(user_id)
        day = parse_client_date(client_date)
        category = require_choice(CalculatorCategory, category, "category")
        row = await self.store.find_first(
            "calculator_sessions",
            {"user_id": user_id, "category": category.value, "date": day.isoformat()},
        )
        return row is not None

    async def list_weight_entries(
        self, user_id: str | None, limit: int = 30
    ) -> list[DailyWeightEntry]:
        """List the most recent entries, newest first."""
        user_id = require_user(user_id)
        limit = int(require_number("limit", limit, 1, 365))
        rows = await self.store.find_many(
            "weight_logs",
            {"user_id": user_id},
            order_by="date_logged",
            limit=limit,
        )
        return [DailyWeightEntry.from_row(row) for row in rows]
