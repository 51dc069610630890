"""Symptom trends - which symptoms are showing up, and are they easing?

For every symptom in the window:
- how often it was logged and how severe it was on average
- trend percent: newer half of the window vs older half
- an 8-bucket sparkline of average severity, oldest to newest

Plus the per-symptom detail view (daily chart, co-occurring tags,
benchmark) and the single-day snapshot used on the home screen.
"""

import logging
import math
from dataclasses import dataclass, asdict, field
from datetime import date, timedelta
from typing import Any, Dict, Iterable, List, Optional

from pause_insights.benchmarks import Benchmark, get_benchmark, get_recommendations
from pause_insights.config import get_settings
from pause_insights.models import LogEntry, normalize_key, prepare_entries, symptom_label
from pause_insights.utils import mean, round_half_up

logger = logging.getLogger(__name__)

MAX_TRIGGERS = 5


@dataclass
class SymptomTrend:
    """Aggregated view of one symptom across the window."""
    key: str
    name: str
    average_severity: float
    occurrence_count: int
    trend_percent: int  # positive = showing up more often lately
    sparkline: List[float] = field(default_factory=list)  # 8 values, or empty when too sparse

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class DaySymptom:
    """A symptom tile for a single day."""
    key: str
    name: str
    severity: int

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class DailySeverity:
    """Worst severity of a symptom on a calendar day (0 = not logged)."""
    date: str
    severity: int

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class TagShare:
    """How often a context tag was logged alongside a symptom."""
    tag: str
    pct: int

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class SymptomDetail:
    """Everything the symptom detail view shows."""
    key: str
    name: str
    days_affected: int
    average_severity: float
    change_percent: int
    chart: List[DailySeverity]
    triggers: List[TagShare]
    benchmark: Optional[Benchmark]
    recommendations: List[str]

    def to_dict(self) -> dict:
        return {
            'key': self.key,
            'name': self.name,
            'days_affected': self.days_affected,
            'average_severity': self.average_severity,
            'change_percent': self.change_percent,
            'chart': [c.to_dict() for c in self.chart],
            'triggers': [t.to_dict() for t in self.triggers],
            'benchmark': self.benchmark.to_dict() if self.benchmark else None,
            'recommendations': list(self.recommendations),
        }


def calculate_trend_percent(older_count: int, newer_count: int) -> int:
    """Percent change in occurrences from the older half to the newer half.

    Returns 0 when the older half has no occurrences.
    """
    if older_count == 0:
        return 0
    return round_half_up((newer_count - older_count) / older_count * 100)


def _split_halves(chronological: List[LogEntry]):
    half = len(chronological) // 2
    return chronological[:half], chronological[half:]


def _count_with(entries: Iterable[LogEntry], key: str) -> int:
    return sum(1 for e in entries if e.has_symptom(key))


def _half_split_trend(chronological: List[LogEntry], key: str) -> int:
    older, newer = _split_halves(chronological)
    return calculate_trend_percent(_count_with(older, key), _count_with(newer, key))


def _sparkline(
    chronological: List[LogEntry],
    key: str,
    buckets: int,
    min_occurrences: int,
) -> List[float]:
    if _count_with(chronological, key) < min_occurrences:
        return []

    bucket_size = math.ceil(len(chronological) / buckets)
    points = []
    for index in range(buckets):
        chunk = chronological[index * bucket_size:(index + 1) * bucket_size]
        severities = [e.severity(key) for e in chunk if e.has_symptom(key)]
        points.append(mean(severities) if severities else 0.0)
    return points


def compute_sparkline(entries: Iterable[Any], symptom_key: str) -> List[float]:
    """Severity sparkline for one symptom, oldest bucket first.

    Entries are split into 8 equal buckets (``ceil(n / 8)`` entries each).
    Each point is the mean severity of the bucket's entries that logged the
    symptom, or 0 when none did.

    Returns:
        8 points, or an empty list when fewer than 3 entries logged the
        symptom (the caller draws a flat placeholder)
    """
    settings = get_settings()
    chronological = list(reversed(prepare_entries(entries)))
    return _sparkline(
        chronological,
        normalize_key(symptom_key),
        settings.sparkline_buckets,
        settings.sparkline_min_occurrences,
    )


def compute_symptom_trends(entries: Iterable[Any], limit: Optional[int] = None) -> List[SymptomTrend]:
    """Per-symptom trends, most frequent first.

    Args:
        entries: Log entries (dicts or LogEntry), any order
        limit: Maximum number of symptoms returned (default 6)

    Returns:
        List of SymptomTrend sorted by occurrence count descending
    """
    settings = get_settings()
    limit = settings.trend_limit if limit is None else limit
    ordered = prepare_entries(entries)
    if not ordered:
        return []
    chronological = list(reversed(ordered))

    totals: Dict[str, int] = {}
    counts: Dict[str, int] = {}
    for entry in ordered:
        for key, reading in entry.symptoms.items():
            totals[key] = totals.get(key, 0) + reading.severity
            counts[key] = counts.get(key, 0) + 1

    trends = []
    for key, count in counts.items():
        trends.append(SymptomTrend(
            key=key,
            name=symptom_label(key),
            average_severity=totals[key] / count,
            occurrence_count=count,
            trend_percent=_half_split_trend(chronological, key),
            sparkline=_sparkline(
                chronological, key,
                settings.sparkline_buckets, settings.sparkline_min_occurrences,
            ),
        ))

    trends.sort(key=lambda t: t.occurrence_count, reverse=True)
    logger.debug("Computed trends for %d symptoms over %d entries", len(trends), len(ordered))
    return trends[:limit]


def compute_day_symptoms(entries: Iterable[Any], limit: int = 4) -> List[DaySymptom]:
    """Top symptoms for one day's entries, merged by worst severity."""
    worst: Dict[str, int] = {}
    for entry in prepare_entries(entries):
        for key, reading in entry.symptoms.items():
            worst[key] = max(worst.get(key, 0), reading.severity)

    ranked = sorted(worst.items(), key=lambda item: item[1], reverse=True)
    return [DaySymptom(key=k, name=symptom_label(k), severity=s) for k, s in ranked[:limit]]


def compute_symptom_detail(
    entries: Iterable[Any],
    symptom_key: str,
    today: Optional[date] = None,
    days: int = 28,
) -> SymptomDetail:
    """Detail view for one symptom over the window.

    Args:
        entries: Log entries (dicts or LogEntry), any order
        symptom_key: Symptom key or display name ("Hot flash" works)
        today: Last day of the chart (defaults to today)
        days: Chart length in days

    Returns:
        SymptomDetail; a symptom that was never logged gives zero counts
        and a flat chart
    """
    key = normalize_key(symptom_key)
    today = today or date.today()
    ordered = prepare_entries(entries)
    with_symptom = [e for e in ordered if e.has_symptom(key)]

    daily_worst: Dict[date, int] = {}
    for entry in with_symptom:
        daily_worst[entry.date] = max(daily_worst.get(entry.date, 0), entry.severity(key))

    chart = []
    for offset in range(days - 1, -1, -1):
        day = today - timedelta(days=offset)
        chart.append(DailySeverity(date=day.isoformat(), severity=daily_worst.get(day, 0)))

    tag_counts: Dict[str, int] = {}
    for entry in with_symptom:
        for tag in dict.fromkeys(entry.context_tags):
            tag_counts[tag] = tag_counts.get(tag, 0) + 1
    total = len(with_symptom) or 1
    triggers = [
        TagShare(tag=tag, pct=round_half_up(count / total * 100))
        for tag, count in tag_counts.items()
    ]
    triggers.sort(key=lambda t: t.pct, reverse=True)

    # Comparison-only readings count as days affected but carry no severity.
    avg = mean(e.severity(key) for e in with_symptom if e.symptoms[key].rated)

    return SymptomDetail(
        key=key,
        name=symptom_label(key),
        days_affected=len(daily_worst),
        average_severity=avg if avg is not None else 0.0,
        change_percent=_half_split_trend(list(reversed(ordered)), key),
        chart=chart,
        triggers=triggers[:MAX_TRIGGERS],
        benchmark=get_benchmark(key),
        recommendations=get_recommendations(key),
    )
