"""Tests for the record store."""

import asyncio

import pytest

from bodylog.db import RecordStore
from bodylog.errors import StoreFailure

from .conftest import TODAY, USER_ID, YESTERDAY


class TestRecordStore:
    """Tests for RecordStore."""

    @pytest.mark.asyncio
    async def test_create_and_find_unique(self, store):
        row = await store.create("users_profile", {"weight": 80.0, "height": 180.0})

        assert row["id"]
        found = await store.find_unique("users_profile", {"id": row["id"]})
        assert found["weight"] == 80.0
        assert found["weight_unit"] == "KG"

    @pytest.mark.asyncio
    async def test_find_unique_missing(self, store):
        assert await store.find_unique("users_profile", {"id": "nobody"}) is None

    @pytest.mark.asyncio
    async def test_find_unique_requires_unique_key(self, store):
        with pytest.raises(ValueError):
            await store.find_unique("weight_logs", {"user_id": USER_ID})

    @pytest.mark.asyncio
    async def test_unknown_table_and_column(self, store):
        with pytest.raises(ValueError):
            await store.find_many("users", {})
        with pytest.raises(ValueError):
            await store.find_many("weight_logs", {"email": "a@b.c"})

    @pytest.mark.asyncio
    async def test_upsert_creates_then_updates(self, store):
        key = {"user_id": USER_ID, "date_logged": TODAY}

        created = await store.upsert(
            "weight_logs", key, create={"weight": 70.0}, update={"weight": 70.0}
        )
        updated = await store.upsert(
            "weight_logs",
            key,
            create={"weight": 71.0},
            update={"weight": 71.0, "weight_unit": "LB"},
        )

        assert updated["id"] == created["id"]
        assert updated["weight"] == 71.0
        assert updated["weight_unit"] == "LB"
        assert await store.count("weight_logs", {"user_id": USER_ID}) == 1

    @pytest.mark.asyncio
    async def test_upsert_requires_update_fields(self, store):
        with pytest.raises(ValueError):
            await store.upsert("users_profile", {"id": USER_ID}, create={}, update={})

    @pytest.mark.asyncio
    async def test_concurrent_upserts_keep_one_row(self, store):
        key = {"user_id": USER_ID, "date_logged": TODAY}

        await asyncio.gather(
            *(
                store.upsert("weight_logs", key, create={"weight": w}, update={"weight": w})
                for w in (60.0, 61.0, 62.0, 63.0, 64.0)
            )
        )

        rows = await store.find_many("weight_logs", {"user_id": USER_ID})
        assert len(rows) == 1
        assert rows[0]["weight"] in (60.0, 61.0, 62.0, 63.0, 64.0)

    @pytest.mark.asyncio
    async def test_find_many_order_and_paging(self, store):
        for day, weight in (("2025-03-12", 72.0), (YESTERDAY, 71.0), (TODAY, 70.0)):
            await store.create(
                "weight_logs",
                {"user_id": USER_ID, "date_logged": day, "weight": weight},
            )

        newest_first = await store.find_many(
            "weight_logs", {"user_id": USER_ID}, order_by="date_logged"
        )
        assert [r["date_logged"] for r in newest_first] == [TODAY, YESTERDAY, "2025-03-12"]

        oldest_first = await store.find_many(
            "weight_logs", {"user_id": USER_ID}, order_by="date_logged", descending=False
        )
        assert oldest_first[0]["date_logged"] == "2025-03-12"

        page = await store.find_many(
            "weight_logs", {"user_id": USER_ID}, order_by="date_logged", offset=1, limit=1
        )
        assert [r["date_logged"] for r in page] == [YESTERDAY]

    @pytest.mark.asyncio
    async def test_uninitialized_database_raises_store_failure(self, temp_db_path):
        store = RecordStore(temp_db_path)

        with pytest.raises(StoreFailure):
            await store.find_unique("users_profile", {"id": USER_ID})
