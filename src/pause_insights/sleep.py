"""Sleep score and the weekly sleep bar chart."""

import logging
from dataclasses import dataclass, asdict
from typing import Any, Iterable, List, Optional

from pause_insights.dates import short_day_label
from pause_insights.models import LogEntry, SleepQuality, prepare_entries
from pause_insights.utils import clamp, round_half_up

logger = logging.getLogger(__name__)

TARGET_SLEEP_HOURS = 8
GREAT_NIGHT_BONUS = 15
POOR_NIGHT_PENALTY = 3
MAX_POOR_PENALTY = 20
WEEKLY_BAR_COUNT = 7

POOR_QUALITIES = (SleepQuality.POOR, SleepQuality.TERRIBLE)


@dataclass
class SleepBar:
    """One night in the weekly sleep chart."""
    date: str
    hours: float
    day_label: str  # "Mon"

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class SleepSummary:
    """Sleep score and supporting numbers."""
    score: int  # 10-100
    avg_hours: float
    avg_disruptions: float
    weekly_bars: List[SleepBar]
    total_nights_tracked: int
    poor_nights: int

    def to_dict(self) -> dict:
        return {
            'score': self.score,
            'avg_hours': self.avg_hours,
            'avg_disruptions': self.avg_disruptions,
            'weekly_bars': [b.to_dict() for b in self.weekly_bars],
            'total_nights_tracked': self.total_nights_tracked,
            'poor_nights': self.poor_nights,
        }


def calculate_sleep_score(avg_hours: float, poor_nights: int, great_share: float = 0.0) -> int:
    """Score a run of nights.

    Formula:
    - avg_hours / 8 * 85, plus up to 15 scaled by the share of great nights
    - clamped to 10-100
    - minus 3 per poor/terrible night (capped at 20)
    - rounded, never below 10

    Args:
        avg_hours: Mean hours slept
        poor_nights: Nights rated poor or terrible
        great_share: Fraction (0-1) of nights rated great

    Returns:
        Sleep score in [10, 100]
    """
    base = clamp(avg_hours / TARGET_SLEEP_HOURS * 85 + GREAT_NIGHT_BONUS * great_share, 10, 100)
    penalty = min(MAX_POOR_PENALTY, poor_nights * POOR_NIGHT_PENALTY)
    return max(10, round_half_up(base - penalty))


def build_weekly_bars(nights: List[LogEntry]) -> List[SleepBar]:
    """Bars for the 7 most recent nights, oldest first.

    Args:
        nights: Sleep-bearing entries, newest first
    """
    recent = list(reversed(nights[:WEEKLY_BAR_COUNT]))
    return [
        SleepBar(date=n.date.isoformat(), hours=n.sleep_hours, day_label=short_day_label(n.date))
        for n in recent
    ]


def compute_sleep_score(entries: Iterable[Any]) -> Optional[SleepSummary]:
    """Sleep summary for the window, or None when no sleep was logged."""
    nights = [e for e in prepare_entries(entries) if e.sleep_hours is not None]
    if not nights:
        return None

    count = len(nights)
    avg_hours = sum(n.sleep_hours for n in nights) / count
    poor_nights = sum(1 for n in nights if n.sleep_quality in POOR_QUALITIES)
    great_nights = sum(1 for n in nights if n.sleep_quality == SleepQuality.GREAT)
    avg_disruptions = sum(n.disruptions or 0 for n in nights) / count

    score = calculate_sleep_score(avg_hours, poor_nights, great_nights / count)
    logger.debug("Sleep score %d from %d nights (avg %.2fh, %d poor)", score, count, avg_hours, poor_nights)

    return SleepSummary(
        score=score,
        avg_hours=avg_hours,
        avg_disruptions=avg_disruptions,
        weekly_bars=build_weekly_bars(nights),
        total_nights_tracked=count,
        poor_nights=poor_nights,
    )
