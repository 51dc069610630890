"""Check-in streaks - consistency is what makes the other insights work."""

import logging
from dataclasses import dataclass, asdict
from datetime import date, datetime, time, timedelta
from typing import Any, Iterable, Optional

from pause_insights.models import LogType, prepare_entries
from pause_insights.utils import round_half_up

logger = logging.getLogger(__name__)


@dataclass
class Streak:
    """A run of consecutive logged days."""
    name: str
    current_count: int
    best_count: int
    is_active: bool
    last_date: str

    def to_dict(self) -> dict:
        return asdict(self)


def compute_logging_streak(
    entries: Iterable[Any],
    today: Optional[date] = None,
    log_type: Optional[LogType] = LogType.MORNING,
) -> Streak:
    """Consecutive days with a check-in of ``log_type``, counting back from today.

    By default only morning check-ins count, so a run of evening-only days
    is not a streak. Pass ``log_type=None`` to count any entry. Several
    entries on the same date count as one day. The streak is 0 when today
    has no qualifying check-in. The best run is taken from whatever window
    of entries was supplied.
    """
    today = today or date.today()
    logged = {
        e.date for e in prepare_entries(entries)
        if log_type is None or e.log_type == log_type
    }

    current = 0
    day = today
    while day in logged:
        current += 1
        day -= timedelta(days=1)

    best = 0
    run = 0
    previous = None
    for day in sorted(logged):
        run = run + 1 if previous is not None and day - previous == timedelta(days=1) else 1
        best = max(best, run)
        previous = day

    return Streak(
        name=f'{log_type.value}_check_in' if log_type is not None else 'daily_check_in',
        current_count=current,
        best_count=max(best, current),
        is_active=current > 0,
        last_date=max(logged).isoformat() if logged else '',
    )


def hours_since_last_log(entries: Iterable[Any], now: Optional[datetime] = None) -> Optional[int]:
    """Hours from midday of the most recent logged date until now.

    Returns:
        Whole hours (negative if the last entry is dated in the future), or
        None when there are no entries
    """
    ordered = prepare_entries(entries)
    if not ordered:
        return None
    now = now or datetime.now()
    last = datetime.combine(ordered[0].date, time(12, 0), tzinfo=now.tzinfo)
    return round_half_up((now - last).total_seconds() / 3600)
