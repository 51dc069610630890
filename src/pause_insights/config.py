"""Configuration settings for the insights library."""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Library settings loaded from environment variables (``PAUSE_`` prefix)."""

    # Logging
    log_level: str = "WARNING"

    # Symptom trends
    trend_limit: int = 6
    sparkline_buckets: int = 8
    sparkline_min_occurrences: int = 3

    # Correlation engine
    min_correlation_entries: int = 7
    correlation_limit: int = 4
    effect_threshold_pct: int = 15
    min_group_size: int = 3
    min_alcohol_entries: int = 2
    good_sleep_hours: float = 7.0
    poor_sleep_hours: float = 6.0
    high_confidence_samples: int = 20

    # Tag keywords, matched against normalized context tags
    exercise_tag_keywords: list[str] = ["exercis", "workout", "gym", "yoga", "run", "walk", "swim"]
    alcohol_tag_keywords: list[str] = ["alcohol", "wine", "beer", "cocktail", "drinks"]

    class Config:
        env_prefix = "PAUSE_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
