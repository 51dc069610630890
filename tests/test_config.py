"""Tests for settings and the exception hierarchy."""

from pause_insights.config import Settings, get_settings
from pause_insights.exceptions import (
    EntryValidationError,
    ErrorCode,
    InputReadError,
    PauseInsightsError,
)
from pause_insights.trends import compute_symptom_trends


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self):
        settings = Settings()
        assert settings.trend_limit == 6
        assert settings.min_correlation_entries == 7
        assert settings.effect_threshold_pct == 15
        assert "wine" in settings.alcohol_tag_keywords

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("PAUSE_TREND_LIMIT", "2")
        monkeypatch.setenv("PAUSE_ALCOHOL_TAG_KEYWORDS", '["sake"]')
        get_settings.cache_clear()
        settings = get_settings()
        assert settings.trend_limit == 2
        assert settings.alcohol_tag_keywords == ["sake"]

    def test_cached(self):
        assert get_settings() is get_settings()

    def test_trend_limit_from_env(self, monkeypatch, make_entry):
        monkeypatch.setenv("PAUSE_TREND_LIMIT", "2")
        get_settings.cache_clear()
        entry = make_entry(symptomsJson={"anxiety": 1, "fatigue": 1, "nausea": 1})
        assert len(compute_symptom_trends([entry])) == 2


class TestExceptions:
    """Tests for the exception payloads."""

    def test_base_to_dict(self):
        error = PauseInsightsError("boom")
        assert error.to_dict() == {"error": {"code": "INTERNAL_ERROR", "message": "boom"}}
        assert repr(error) == "PauseInsightsError(code=INTERNAL_ERROR, message='boom')"

    def test_entry_validation_error(self):
        error = EntryValidationError("bad entry", index=3, details={"errors": ["date: missing"]})
        assert error.code == ErrorCode.ENTRY_INVALID
        assert error.to_dict()["error"]["details"] == {"errors": ["date: missing"], "index": 3}
        assert isinstance(error, PauseInsightsError)

    def test_input_read_error(self):
        error = InputReadError("logs.json", "No such file or directory")
        assert error.message == "Could not read entries from logs.json: No such file or directory"
        assert error.code == ErrorCode.INPUT_UNREADABLE
        assert error.details == {"source": "logs.json"}
