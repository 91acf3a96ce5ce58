"""Pytest configuration and fixtures."""

import tempfile
from pathlib import Path

import pytest
import pytest_asyncio

from bodylog.db import RecordStore, init_db
from bodylog.services import CalculatorSessionService, DailyMetricRecorder, ProfileService

USER_ID = "user-123"
OTHER_USER_ID = "user-456"
TODAY = "2025-03-14"
YESTERDAY = "2025-03-13"


@pytest.fixture
def temp_db_path():
    """Create a temporary database path."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir) / "test.db"


@pytest_asyncio.fixture
async def store(temp_db_path):
    """Record store on a freshly initialized database."""
    await init_db(temp_db_path)
    return RecordStore(temp_db_path)


@pytest.fixture
def recorder(store):
    return DailyMetricRecorder(store)


@pytest.fixture
def profiles(store):
    return ProfileService(store)


@pytest.fixture
def sessions(store, recorder, profiles):
    return CalculatorSessionService(store, recorder=recorder, profiles=profiles)
