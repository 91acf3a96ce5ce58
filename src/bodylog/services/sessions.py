"""Calculator sessions: log BMI, BMR and body fat results per client date."""

import logging
from datetime import date

from ..db.store import RecordStore
from ..errors import NotFoundError, ValidationError
from ..models.calculator import (
    ActivityLevel,
    CalculatorCategory,
    CalculatorSession,
    Gender,
)
from ..utils.units import WeightUnit, to_kg
from ..utils.validation import (
    optional_number,
    parse_client_date,
    require_choice,
    require_number,
    require_unit,
)
from . import calculators
from .profiles import MAX_HEIGHT, MIN_HEIGHT, ProfileService
from .recorder import MAX_WEIGHT, MIN_WEIGHT, DailyMetricRecorder, require_user

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 100

# Largest value SQLite accepts for LIMIT/OFFSET
MAX_OFFSET = 2**63 - 1


class CalculatorSessionService:
    """Runs calculators and stores their results as sessions."""

    def __init__(
        self,
        store: RecordStore,
        recorder: DailyMetricRecorder | None = None,
        profiles: ProfileService | None = None,
    ):
        self.store = store
        self.recorder = recorder or DailyMetricRecorder(store)
        self.profiles = profiles or ProfileService(store)

    async def calculate_bmi(
        self,
        user_id: str | None,
        weight: float,
        height: float,
        weight_unit: WeightUnit | str = WeightUnit.KG,
    ) -> dict:
        """Calculate BMI without logging anything."""
        require_user(user_id)
        weight = require_number("weight", weight, MIN_WEIGHT, MAX_WEIGHT)
        height = require_number("height", height, MIN_HEIGHT, MAX_HEIGHT)
        unit = require_unit(weight_unit)

        bmi = calculators.calculate_bmi(to_kg(weight, unit), height)
        return {
            "weight": weight,
            "weight_unit": unit.value,
            "height": height,
            "bmi": bmi,
            "category": calculators.bmi_category(bmi),
        }

    async def calculate_bmr(
        self,
        user_id: str | None,
        weight: float,
        height: float,
        age: float,
        gender: Gender | str,
        activity_level: ActivityLevel | str,
        weight_unit: WeightUnit | str = WeightUnit.KG,
    ) -> dict:
        """Calculate BMR and daily calories without logging anything.

        The formula runs on the weight in kilograms; ``weight`` in the
        result is that value and ``original_weight`` is the input.
        """
        require_user(user_id)
        weight = require_number("weight", weight, MIN_WEIGHT, MAX_WEIGHT)
        height = require_number("height", height, MIN_HEIGHT, MAX_HEIGHT)
        age = require_number("age", age, 10, 120)
        gender = require_choice(Gender, gender, "gender")
        activity_level = require_choice(ActivityLevel, activity_level, "activity_level")
        unit = require_unit(weight_unit)

        weight_kg = to_kg(weight, unit)
        bmr = calculators.calculate_bmr(weight_kg, height, age, gender)
        calories = calculators.daily_calories(bmr, activity_level)
        return {
            "weight": weight_kg,
            "original_weight": weight,
            "weight_unit": unit.value,
            "height": height,
            "age": age,
            "gender": gender.value,
            "activity_level": activity_level.value,
            "bmr": round(bmr, 2),
            "daily_calories": round(calories, 2),
        }

    async def calculate_body_fat(
        self,
        user_id: str | None,
        height: float,
        waist: float,
        neck: float,
        gender: Gender | str,
        hips: float | None = None,
    ) -> dict:
        """Calculate body fat (US Navy method) without logging anything."""
        require_user(user_id)
        height = require_number("height", height, 100, 250)
        waist = require_number("waist", waist, 50, 200)
        neck = require_number("neck", neck, 25, 60)
        hips = optional_number("hips", hips, 70, 200)
        gender = require_choice(Gender, gender, "gender")

        body_fat = calculators.calculate_body_fat(height, waist, neck, gender, hips)
        return {
            "height": height,
            "waist": waist,
            "neck": neck,
            "hips": hips,
            "gender": gender.value,
            "body_fat_percentage": body_fat,
            "category": calculators.body_fat_category(body_fat, gender),
        }

    async def add_bmi(
        self,
        user_id: str | None,
        client_date: str | date,
        weight: float,
        height: float,
        weight_unit: WeightUnit | str = WeightUnit.KG,
        save_new_weight: bool = False,
        update_height: bool = False,
    ) -> dict:
        """Calculate and log a BMI session.

        The weight is always recorded as the day's entry, replacing any
        entry already logged for that date. With ``save_new_weight`` it also
        becomes the profile default weight. With ``update_height`` the
        height becomes the profile default.
        """
        user_id = require_user(user_id)
        day = parse_client_date(client_date)
        data = await self.calculate_bmi(user_id, weight, height, weight_unit)
        unit = WeightUnit(data["weight_unit"])

        session = await self._log(
            CalculatorSession(
                user_id=user_id,
                category=CalculatorCategory.BMI,
                date=day,
                inputs={
                    "weight": data["weight"],
                    "weight_unit": unit.value,
                    "height": data["height"],
                },
                result=data["bmi"],
                result_unit="BMI score",
            )
        )

        await self.recorder.record_todays_weight(user_id, day, data["weight"], unit)
        if save_new_weight:
            await self.profiles.save_profile(user_id, weight=data["weight"], weight_unit=unit)
        if update_height:
            await self.profiles.save_profile(user_id, height=data["height"])

        return {"session_id": session.id, "date": day.isoformat(), **data}

    async def add_bmr(
        self,
        user_id: str | None,
        client_date: str | date,
        weight: float,
        height: float,
        age: float,
        gender: Gender | str,
        activity_level: ActivityLevel | str,
        weight_unit: WeightUnit | str = WeightUnit.KG,
        save_new_weight: bool = False,
    ) -> dict:
        """Calculate and log a BMR session.

        Both the normalised and the original weight are kept in the session
        inputs. With ``save_new_weight`` the weight is also recorded as the
        day's entry; the profile default is left alone.
        """
        user_id = require_user(user_id)
        day = parse_client_date(client_date)
        data = await self.calculate_bmr(
            user_id, weight, height, age, gender, activity_level, weight_unit
        )

        inputs = {key: value for key, value in data.items() if key not in ("bmr", "daily_calories")}
        session = await self._log(
            CalculatorSession(
                user_id=user_id,
                category=CalculatorCategory.BMR,
                date=day,
                inputs=inputs,
                result=data["bmr"],
                result_unit="calories/day",
            )
        )

        if save_new_weight:
            await self.recorder.record_todays_weight(
                user_id, day, data["original_weight"], data["weight_unit"]
            )

        return {"session_id": session.id, "date": day.isoformat(), **data}

    async def add_body_fat(
        self,
        user_id: str | None,
        client_date: str | date,
        height: float,
        waist: float,
        neck: float,
        gender: Gender | str,
        hips: float | None = None,
    ) -> dict:
        """Calculate and log a body fat session (US Navy method)."""
        user_id = require_user(user_id)
        day = parse_client_date(client_date)
        data = await self.calculate_body_fat(user_id, height, waist, neck, gender, hips)

        session = await self._log(
            CalculatorSession(
                user_id=user_id,
                category=CalculatorCategory.BODY_FAT,
                date=day,
                inputs={
                    key: data[key] for key in ("height", "waist", "neck", "hips", "gender")
                },
                result=data["body_fat_percentage"],
                result_unit="%",
            )
        )

        return {"session_id": session.id, "date": day.isoformat(), **data}

    async def get_for_date(
        self,
        user_id: str | None,
        category: CalculatorCategory | str,
        client_date: str | date,
    ) -> dict | None:
        """The most recent session of a category logged for a date, or None."""
        user_id = require_user(user_id)
        category = require_choice(CalculatorCategory, category, "category")
        day = parse_client_date(client_date)

        row = await self.store.find_first(
            "calculator_sessions",
            {"user_id": user_id, "category": category.value, "date": day.isoformat()},
            order_by="created_at",
        )
        return _history_item(CalculatorSession.from_row(row)) if row else None

    async def get_history(
        self,
        user_id: str | None,
        category: CalculatorCategory | str,
        page: int = 0,
        page_size: int = 5,
    ) -> dict:
        """Get a page of sessions for a category, newest first.

        Returns:
            Dict with ``entries``, ``total`` and ``latest`` (or None).
        """
        user_id = require_user(user_id)
        category = require_choice(CalculatorCategory, category, "category")
        page = int(require_number("page", page, 0))
        page_size = int(require_number("page_size", page_size, 1, MAX_PAGE_SIZE))
        if page * page_size > MAX_OFFSET:
            raise ValidationError.for_field("page", "is out of range")

        where = {"user_id": user_id, "category": category.value}
        total = await self.store.count("calculator_sessions", where)
        rows = await self.store.find_many(
            "calculator_sessions",
            where,
            order_by="date",
            offset=page * page_size,
            limit=page_size,
        )
        sessions = [CalculatorSession.from_row(row) for row in rows]

        if page == 0 and sessions:
            latest = sessions[0]
        else:
            latest_row = await self.store.find_first(
                "calculator_sessions", where, order_by="date"
            )
            latest = CalculatorSession.from_row(latest_row) if latest_row else None

        return {
            "entries": [_history_item(s) for s in sessions],
            "total": total,
            "latest": _history_item(latest) if latest else None,
        }

    async def get_weight_height(self, user_id: str | None, client_date: str | date) -> dict:
        """Today's weight (entry first, then profile) with the profile height."""
        user_id = require_user(user_id)
        profile = await self.profiles.get_profile(user_id)
        if profile is None:
            raise NotFoundError("User profile not found")

        todays = await self.recorder.get_todays_weight(user_id, client_date)
        return {
            "weight": todays.weight,
            "weight_unit": todays.weight_unit.value,
            "source": todays.source.value,
            "height": profile.height or 0.0,
        }

    async def _log(self, session: CalculatorSession) -> CalculatorSession:
        """Persist a session and return it with its id."""
        row = await self.store.create("calculator_sessions", session.to_fields())
        session.id = row["id"]
        logger.info(
            "Logged %s session %s for %s on %s",
            session.category.value,
            session.id,
            session.user_id,
            session.date,
        )
        return session


def _history_item(session: CalculatorSession) -> dict:
    """Flatten a session into a history entry for its category."""
    item = {
        "id": session.id,
        "date": session.date.isoformat(),
        "category": session.category.value,
        "result": session.result,
        "result_unit": session.result_unit,
        "inputs": session.inputs,
    }
    inputs = session.inputs
    if session.category == CalculatorCategory.BMI:
        item["bmi"] = session.result
        item["weight"] = inputs.get("weight")
        item["height"] = inputs.get("height")
    elif session.category == CalculatorCategory.BMR:
        try:
            level = ActivityLevel(inputs.get("activity_level"))
        except ValueError:
            level = ActivityLevel.SEDENTARY
        item["bmr"] = session.result
        item["daily_calories"] = round(calculators.daily_calories(session.result, level), 2)
    else:
        item["body_fat_percentage"] = session.result
    return item
