"""Journal calendar views: the 7-day overview and monthly check-in adherence."""

import calendar
import logging
from dataclasses import dataclass, asdict
from datetime import date, timedelta
from typing import Any, Dict, Iterable, List, Optional

from pause_insights.dates import day_name, short_date_label
from pause_insights.models import LogEntry, LogType, prepare_entries
from pause_insights.utils import round_half_up

logger = logging.getLogger(__name__)


@dataclass
class WeekDay:
    """One row of the journal week view."""
    date: str
    day_label: str  # "Monday"
    date_label: str  # "Jan 5"
    is_today: bool
    has_am: bool
    has_pm: bool
    mood: Optional[int]
    top_symptom: Optional[str]
    sleep_hours: Optional[float]

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class MonthlyAdherence:
    """Morning/evening check-in counts for the elapsed part of a month."""
    year: int
    month: int
    days_elapsed: int
    morning_count: int
    evening_count: int

    @property
    def morning_pct(self) -> int:
        return round_half_up(self.morning_count / self.days_elapsed * 100) if self.days_elapsed else 0

    @property
    def evening_pct(self) -> int:
        return round_half_up(self.evening_count / self.days_elapsed * 100) if self.days_elapsed else 0

    def to_dict(self) -> dict:
        result = asdict(self)
        result['morning_pct'] = self.morning_pct
        result['evening_pct'] = self.evening_pct
        return result


def _group_by_date(entries: Iterable[LogEntry]) -> Dict[date, List[LogEntry]]:
    grouped: Dict[date, List[LogEntry]] = {}
    for entry in entries:
        grouped.setdefault(entry.date, []).append(entry)
    return grouped


def _first_of_type(day_entries: List[LogEntry], log_type: LogType) -> Optional[LogEntry]:
    return next((e for e in day_entries if e.log_type == log_type), None)


def _top_symptom(day_entries: List[LogEntry]) -> Optional[str]:
    worst: Dict[str, int] = {}
    for entry in day_entries:
        for key, reading in entry.symptoms.items():
            if reading.severity > worst.get(key, 0):
                worst[key] = reading.severity
    if not worst:
        return None
    return max(worst, key=worst.get)


def build_week_overview(entries: Iterable[Any], today: Optional[date] = None) -> List[WeekDay]:
    """The last 7 calendar days (today included), newest first.

    Mood prefers the evening check-in, then morning. Sleep hours come from
    the morning check-in only. Entries without a log type still count
    toward the day's top symptom.
    """
    today = today or date.today()
    by_date = _group_by_date(prepare_entries(entries))

    days = []
    for offset in range(7):
        day = today - timedelta(days=offset)
        day_entries = by_date.get(day, [])
        am = _first_of_type(day_entries, LogType.MORNING)
        pm = _first_of_type(day_entries, LogType.EVENING)

        mood = None
        for check_in in (pm, am):
            if check_in is not None and check_in.mood is not None:
                mood = check_in.mood
                break

        days.append(WeekDay(
            date=day.isoformat(),
            day_label=day_name(day),
            date_label=short_date_label(day),
            is_today=offset == 0,
            has_am=am is not None,
            has_pm=pm is not None,
            mood=mood,
            top_symptom=_top_symptom(day_entries),
            sleep_hours=am.sleep_hours if am is not None else None,
        ))
    return days


def compute_monthly_adherence(
    entries: Iterable[Any],
    year: int,
    month: int,
    today: Optional[date] = None,
) -> MonthlyAdherence:
    """Count morning and evening check-ins over the elapsed days of a month.

    The current month counts up to today; past months count every day;
    future months have no elapsed days.
    """
    today = today or date.today()
    total_days = calendar.monthrange(year, month)[1]
    if (year, month) == (today.year, today.month):
        days_elapsed = today.day
    elif (year, month) < (today.year, today.month):
        days_elapsed = total_days
    else:
        days_elapsed = 0

    by_date = _group_by_date(prepare_entries(entries))
    morning = evening = 0
    for day_num in range(1, days_elapsed + 1):
        day_entries = by_date.get(date(year, month, day_num), [])
        if _first_of_type(day_entries, LogType.MORNING) is not None:
            morning += 1
        if _first_of_type(day_entries, LogType.EVENING) is not None:
            evening += 1

    return MonthlyAdherence(
        year=year,
        month=month,
        days_elapsed=days_elapsed,
        morning_count=morning,
        evening_count=evening,
    )
