"""Tests for calculator sessions."""

import pytest

from bodylog.errors import NotFoundError, UnauthorizedError, ValidationError
from bodylog.models import CalculatorCategory

from .conftest import TODAY, USER_ID, YESTERDAY


class TestAddBmi:
    """Tests for BMI sessions."""

    @pytest.mark.asyncio
    async def test_add_bmi(self, sessions, recorder):
        result = await sessions.add_bmi(USER_ID, TODAY, weight=70, height=175)

        assert result["bmi"] == 22.9
        assert result["category"] == "Normal"
        assert result["date"] == TODAY
        assert result["session_id"]
        assert await recorder.is_todays_category_logged(USER_ID, TODAY, "BMI")

    @pytest.mark.asyncio
    async def test_pounds_are_converted_for_the_formula(self, sessions):
        result = await sessions.add_bmi(
            USER_ID, TODAY, weight=154.324, height=175, weight_unit="LB"
        )

        assert result["bmi"] == 22.9
        assert result["weight"] == 154.324
        assert result["weight_unit"] == "LB"

    @pytest.mark.asyncio
    async def test_always_logs_the_days_weight(self, sessions, recorder, profiles):
        await profiles.save_profile(USER_ID, weight=90, weight_unit="KG")
        await recorder.record_todays_weight(USER_ID, TODAY, 72, "KG")

        await sessions.add_bmi(USER_ID, TODAY, weight=160, height=175, weight_unit="LB")

        todays = await recorder.get_todays_weight(USER_ID, TODAY)
        assert (todays.weight, todays.weight_unit.value) == (160, "LB")
        profile = await profiles.get_profile(USER_ID)
        assert (profile.weight, profile.weight_unit.value) == (90, "KG")

    @pytest.mark.asyncio
    async def test_save_new_weight_twice_keeps_one_entry(self, sessions, store, profiles):
        await sessions.add_bmi(USER_ID, TODAY, weight=70, height=175, save_new_weight=True)
        await sessions.add_bmi(USER_ID, TODAY, weight=71, height=175, save_new_weight=True)

        rows = await store.find_many("weight_logs", {"user_id": USER_ID})
        assert len(rows) == 1
        assert rows[0]["weight"] == 71
        profile = await profiles.get_profile(USER_ID)
        assert profile.weight == 71
        assert profile.height is None

    @pytest.mark.asyncio
    async def test_update_height(self, sessions, profiles):
        await sessions.add_bmi(USER_ID, TODAY, weight=70, height=182, update_height=True)

        profile = await profiles.get_profile(USER_ID)
        assert profile.height == 182

    @pytest.mark.asyncio
    async def test_invalid_height(self, sessions, store):
        with pytest.raises(ValidationError) as exc_info:
            await sessions.add_bmi(USER_ID, TODAY, weight=70, height=40)

        assert "height" in exc_info.value.field_errors
        assert await store.count("calculator_sessions", {"user_id": USER_ID}) == 0

    @pytest.mark.asyncio
    async def test_requires_user(self, sessions):
        with pytest.raises(UnauthorizedError):
            await sessions.add_bmi(None, TODAY, weight=70, height=175)


class TestAddBmr:
    """Tests for BMR sessions."""

    @pytest.mark.asyncio
    async def test_add_bmr(self, sessions):
        result = await sessions.add_bmr(
            USER_ID,
            TODAY,
            weight=70,
            height=175,
            age=30,
            gender="MALE",
            activity_level="MODERATELY_ACTIVE",
        )

        assert result["bmr"] == pytest.approx(1648.75)
        assert result["daily_calories"] == pytest.approx(2555.56, abs=0.01)

    @pytest.mark.asyncio
    async def test_keeps_original_weight(self, sessions, store):
        result = await sessions.add_bmr(
            USER_ID,
            TODAY,
            weight=200,
            height=180,
            age=40,
            gender="female",
            activity_level="sedentary",
            weight_unit="LB",
        )

        assert result["weight"] == pytest.approx(90.7184)
        assert result["original_weight"] == 200
        history = await sessions.get_history(USER_ID, "BMR")
        inputs = history["latest"]["inputs"]
        assert inputs["original_weight"] == 200
        assert inputs["weight_unit"] == "LB"

    @pytest.mark.asyncio
    async def test_invalid_activity_level(self, sessions):
        with pytest.raises(ValidationError) as exc_info:
            await sessions.add_bmr(
                USER_ID, TODAY, weight=70, height=175, age=30,
                gender="MALE", activity_level="COUCH",
            )
        assert "activity_level" in exc_info.value.field_errors

    @pytest.mark.asyncio
    async def test_age_bounds(self, sessions):
        with pytest.raises(ValidationError):
            await sessions.add_bmr(
                USER_ID, TODAY, weight=70, height=175, age=9,
                gender="MALE", activity_level="SEDENTARY",
            )

    @pytest.mark.asyncio
    async def test_save_new_weight_logs_entry_only(self, sessions, recorder, profiles):
        await profiles.save_profile(USER_ID, weight=90, weight_unit="KG")

        await sessions.add_bmr(
            USER_ID, TODAY, weight=160, height=175, age=30,
            gender="MALE", activity_level="SEDENTARY",
            weight_unit="LB", save_new_weight=True,
        )

        todays = await recorder.get_todays_weight(USER_ID, TODAY)
        assert (todays.weight, todays.weight_unit.value, todays.is_locked) == (160, "LB", True)
        profile = await profiles.get_profile(USER_ID)
        assert (profile.weight, profile.weight_unit.value) == (90, "KG")

    @pytest.mark.asyncio
    async def test_no_weight_entry_by_default(self, sessions, recorder):
        await sessions.add_bmr(
            USER_ID, TODAY, weight=70, height=175, age=30,
            gender="MALE", activity_level="SEDENTARY",
        )

        assert await recorder.is_todays_weight_logged(USER_ID, TODAY) is False



class TestAddBodyFat:
    """Tests for body fat sessions."""

    @pytest.mark.asyncio
    async def test_male(self, sessions):
        result = await sessions.add_body_fat(
            USER_ID, TODAY, height=178, waist=85, neck=38, gender="MALE"
        )

        assert result["body_fat_percentage"] == pytest.approx(16.4, abs=0.2)
        assert result["category"] == "Fitness"

    @pytest.mark.asyncio
    async def test_female_requires_hips(self, sessions, store):
        with pytest.raises(ValidationError):
            await sessions.add_body_fat(
                USER_ID, TODAY, height=165, waist=75, neck=33, gender="FEMALE"
            )
        assert await store.count("calculator_sessions", {"user_id": USER_ID}) == 0

    @pytest.mark.asyncio
    async def test_female_with_hips(self, sessions):
        result = await sessions.add_body_fat(
            USER_ID, TODAY, height=165, waist=75, neck=33, gender="FEMALE", hips=100
        )
        assert result["category"] == "Average"


class TestHistory:
    """Tests for paginated session history."""

    async def _log_bmis(self, sessions):
        for day, weight in (("2025-03-12", 72), (YESTERDAY, 71), (TODAY, 70)):
            await sessions.add_bmi(USER_ID, day, weight=weight, height=175)

    @pytest.mark.asyncio
    async def test_first_page(self, sessions):
        await self._log_bmis(sessions)

        history = await sessions.get_history(USER_ID, "BMI", page=0, page_size=2)

        assert history["total"] == 3
        assert [e["date"] for e in history["entries"]] == [TODAY, YESTERDAY]
        assert history["entries"][0]["weight"] == 70
        assert history["latest"]["date"] == TODAY

    @pytest.mark.asyncio
    async def test_later_page_keeps_latest(self, sessions):
        await self._log_bmis(sessions)

        history = await sessions.get_history(USER_ID, "BMI", page=1, page_size=2)

        assert [e["date"] for e in history["entries"]] == ["2025-03-12"]
        assert history["latest"]["date"] == TODAY

    @pytest.mark.asyncio
    async def test_empty(self, sessions):
        history = await sessions.get_history(USER_ID, CalculatorCategory.BODY_FAT)
        assert history == {"entries": [], "total": 0, "latest": None}

    @pytest.mark.asyncio
    async def test_categories_are_separate(self, sessions):
        await self._log_bmis(sessions)
        await sessions.add_bmr(
            USER_ID, TODAY, weight=70, height=175, age=30,
            gender="MALE", activity_level="SEDENTARY",
        )

        history = await sessions.get_history(USER_ID, "BMR")

        assert history["total"] == 1
        assert history["latest"]["daily_calories"] == pytest.approx(1978.5, abs=0.01)

    @pytest.mark.asyncio
    async def test_page_size_limit(self, sessions):
        with pytest.raises(ValidationError):
            await sessions.get_history(USER_ID, "BMI", page_size=101)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("page", [10**17, 2**63, 10**400])
    async def test_page_beyond_offset_range(self, sessions, page):
        with pytest.raises(ValidationError) as exc_info:
            await sessions.get_history(USER_ID, "BMI", page=page, page_size=100)
        assert "page" in exc_info.value.field_errors


class TestWeightHeight:
    """Tests for get_weight_height."""

    @pytest.mark.asyncio
    async def test_requires_profile(self, sessions):
        with pytest.raises(NotFoundError):
            await sessions.get_weight_height(USER_ID, TODAY)

    @pytest.mark.asyncio
    async def test_prefers_todays_entry(self, sessions, profiles, recorder):
        await profiles.save_profile(USER_ID, weight=80, height=180)
        await recorder.record_todays_weight(USER_ID, TODAY, 78.5, "KG")

        result = await sessions.get_weight_height(USER_ID, TODAY)

        assert result == {"weight": 78.5, "weight_unit": "KG", "source": "entry", "height": 180}

    @pytest.mark.asyncio
    async def test_falls_back_to_profile(self, sessions, profiles):
        await profiles.save_profile(USER_ID, weight=80, height=180)

        result = await sessions.get_weight_height(USER_ID, TODAY)

        assert result["weight"] == 80
        assert result["source"] == "profile"


class TestCalculateOnly:
    """Calculators that return a result without logging a session."""

    @pytest.mark.asyncio
    async def test_bmi(self, sessions, store):
        result = await sessions.calculate_bmi(USER_ID, weight=70, height=175)

        assert result["bmi"] == 22.9
        assert result["category"] == "Normal"
        assert await store.count("calculator_sessions", {"user_id": USER_ID}) == 0
        assert await store.count("weight_logs", {"user_id": USER_ID}) == 0

    @pytest.mark.asyncio
    async def test_bmr(self, sessions, store):
        result = await sessions.calculate_bmr(
            USER_ID, weight=70, height=175, age=30,
            gender="FEMALE", activity_level="SEDENTARY",
        )

        assert result["bmr"] == pytest.approx(1482.75)
        assert result["daily_calories"] == pytest.approx(1779.3, abs=0.01)
        assert await store.count("calculator_sessions", {"user_id": USER_ID}) == 0

    @pytest.mark.asyncio
    async def test_body_fat(self, sessions, store):
        result = await sessions.calculate_body_fat(
            USER_ID, height=165, waist=75, neck=33, gender="FEMALE", hips=100
        )

        assert result["body_fat_percentage"] == pytest.approx(29.4, abs=0.2)
        assert await store.count("calculator_sessions", {"user_id": USER_ID}) == 0

    @pytest.mark.asyncio
    async def test_validation_and_auth(self, sessions):
        with pytest.raises(UnauthorizedError):
            await sessions.calculate_bmi(None, weight=70, height=175)
        with pytest.raises(ValidationError):
            await sessions.calculate_body_fat(
                USER_ID, height=165, waist=75, neck=33, gender="FEMALE"
            )


class TestGetForDate:
    """Tests for looking up a session by date."""

    @pytest.mark.asyncio
    async def test_returns_session_for_date(self, sessions):
        await sessions.add_bmi(USER_ID, YESTERDAY, weight=72, height=175)
        await sessions.add_bmi(USER_ID, TODAY, weight=70, height=175)

        item = await sessions.get_for_date(USER_ID, "BMI", YESTERDAY)

        assert item["date"] == YESTERDAY
        assert item["weight"] == 72
        assert item["bmi"] == 23.5

    @pytest.mark.asyncio
    async def test_none_when_not_logged(self, sessions):
        await sessions.add_bmi(USER_ID, YESTERDAY, weight=72, height=175)

        assert await sessions.get_for_date(USER_ID, "BMI", TODAY) is None
        assert await sessions.get_for_date(USER_ID, "BMR", YESTERDAY) is None

    @pytest.mark.asyncio
    async def test_validates_date(self, sessions):
        with pytest.raises(ValidationError):
            await sessions.get_for_date(USER_ID, "BMI", "yesterday")
