"""Pytest configuration for integration tests."""

import pytest


# Mark all tests in this directory as integration tests
def pytest_collection_modifyitems(items):
    """Add the integration marker to every test collected from this directory."""
    for item in items:
        if "integration_tests" in str(item.fspath):
            item.add_marker(pytest.mark.integration)


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    """Point the default data directory at a temporary location."""
    from bodylog.db import engine

    path = tmp_path / "data"
    monkeypatch.setattr(engine, "DATA_DIR", path)
    return path
