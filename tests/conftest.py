"""Shared fixtures: journal API records built relative to a fixed Monday."""

from datetime import date, timedelta

import pytest

from pause_insights.config import get_settings

BASE_DATE = date(2024, 1, 15)  # Monday


@pytest.fixture
def base_date():
    return BASE_DATE


@pytest.fixture
def make_entry():
    """Factory for API-shaped records (camelCase keys), dated days_ago before BASE_DATE."""
    def _make(days_ago=0, log_type="evening", **fields):
        record = {
            "date": (BASE_DATE - timedelta(days=days_ago)).isoformat(),
            "logType": log_type,
        }
        record.update(fields)
        return record
    return _make


@pytest.fixture(autouse=True)
def fresh_settings():
    """Settings are cached; clear around each test so env changes do not leak."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
