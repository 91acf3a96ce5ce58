"""Default body measurements per user."""

import logging

from ..db.store import RecordStore
from ..models.weight import UserBodyProfile
from ..utils.units import WeightUnit
from ..utils.validation import optional_number, require_unit
from .recorder import MAX_WEIGHT, MIN_WEIGHT, require_user

logger = logging.getLogger(__name__)

MIN_HEIGHT = 80.0
MAX_HEIGHT = 250.0


class ProfileService:
    """Reads and updates a user's body profile."""

    def __init__(self, store: RecordStore):
        self.store = store

    async def get_profile(self, user_id: str | None) -> UserBodyProfile | None:
        """Get the profile, or None if the user has not set one."""
        user_id = require_user(user_id)
        row = await self.store.find_unique("users_profile", {"id": user_id})
        return UserBodyProfile.from_row(row) if row else None

    async def save_profile(
        self,
        user_id: str | None,
        weight: float | None = None,
        height: float | None = None,
        weight_unit: WeightUnit | str | None = None,
    ) -> UserBodyProfile:
        """Create or update the profile. Only the given fields change."""
        user_id = require_user(user_id)
        fields = {}
        weight = optional_number("weight", weight, MIN_WEIGHT, MAX_WEIGHT)
        if weight is not None:
            fields["weight"] = weight
        height = optional_number("height", height, MIN_HEIGHT, MAX_HEIGHT)
        if height is not None:
            fields["height"] = height
        if weight_unit is not None:
            fields["weight_unit"] = require_unit(weight_unit).value

        if not fields:
            existing = await self.get_profile(user_id)
            return existing or UserBodyProfile(id=user_id)

        row = await self.store.upsert(
            "users_profile", key={"id": user_id}, create=fields, update=fields
        )
        logger.info("Updated profile for %s: %s", user_id, ", ".join(fields))
        return UserBodyProfile.from_row(row)
