"""Weekly story - a few sentences summarizing the last 7 check-ins.

Picks the best and toughest day, says what happened with the most frequent
symptom compared to the week before, and adds a line about sleep when it
was clearly good or clearly rough.
"""

import logging
from dataclasses import dataclass, asdict
from typing import Any, Dict, Iterable, List, Optional

from pause_insights.dates import day_name
from pause_insights.models import LogEntry, prepare_entries, symptom_label
from pause_insights.utils import round_half_up

logger = logging.getLogger(__name__)

MIN_ENTRIES = 3
WINDOW = 7
DEFAULT_MOOD = 3
SYMPTOM_PENALTY = 0.5
GOOD_NIGHT_HOURS = 7
GREAT_SLEEP_NIGHTS = 5
ROUGH_SLEEP_NIGHTS = 2


@dataclass
class WeeklyNarrative:
    """Short natural-language summary of the week."""
    text: str
    best_day_label: str
    worst_day_label: str
    best_mood: Optional[int]
    worst_mood: Optional[int]
    top_symptom: Optional[str] = None

    def to_dict(self) -> dict:
        return asdict(self)


def day_score(entry: LogEntry) -> float:
    """Mood (3 if missing) minus half a point per symptom logged."""
    mood = entry.mood if entry.mood is not None else DEFAULT_MOOD
    return mood - SYMPTOM_PENALTY * entry.symptom_count


def _symptom_counts(entries: Iterable[LogEntry]) -> Dict[str, int]:
    counts: Dict[str, int] = {}
    for entry in entries:
        for key in entry.symptoms:
            counts[key] = counts.get(key, 0) + 1
    return counts


def symptom_sentence(key: str, count: int, previous_count: int, window_size: int) -> str:
    """Sentence about the week's most frequent symptom.

    - "dropped X%" when it showed up less than in the previous week
    - "showed up N of M days" when it was there on most days
    - "appeared N times" otherwise
    """
    label = symptom_label(key)
    if previous_count > 0 and count < previous_count:
        drop = round_half_up((previous_count - count) / previous_count * 100)
        return f"{label} dropped {drop}% compared to the week before."
    if count * 2 > window_size:
        return f"{label} showed up {count} of {window_size} days."
    times = "time" if count == 1 else "times"
    return f"{label} appeared {count} {times} this week."


def sleep_sentence(window: List[LogEntry]) -> Optional[str]:
    """'Great sleep' at 5+ nights of 7h+, 'rough' at 2 or fewer, else None."""
    if not any(e.sleep_hours is not None for e in window):
        return None
    good_nights = sum(1 for e in window if e.sleep_hours is not None and e.sleep_hours >= GOOD_NIGHT_HOURS)
    if good_nights >= GREAT_SLEEP_NIGHTS:
        return f"Great sleep: {good_nights} nights of 7+ hours."
    if good_nights <= ROUGH_SLEEP_NIGHTS:
        return f"Sleep was rough, with only {good_nights} nights of 7+ hours."
    return None


def compute_weekly_story(entries: Iterable[Any]) -> Optional[WeeklyNarrative]:
    """Build the weekly narrative from the most recent entries.

    The window is the 7 newest entries; the 7 before that are the comparison
    week. Best/worst day use strict comparisons while scanning newest to
    oldest, so on a tie the most recent day wins.

    Returns:
        WeeklyNarrative, or None with fewer than 3 entries
    """
    ordered = prepare_entries(entries)
    if len(ordered) < MIN_ENTRIES:
        return None

    window = ordered[:WINDOW]
    previous = ordered[WINDOW:WINDOW * 2]

    best = worst = window[0]
    best_score = worst_score = day_score(window[0])
    for entry in window[1:]:
        score = day_score(entry)
        if score > best_score:
            best, best_score = entry, score
        if score < worst_score:
            worst, worst_score = entry, score

    best_label = day_name(best.date)
    worst_label = day_name(worst.date)
    sentences = [f"Your best day was {best_label} and your toughest was {worst_label}."]

    counts = _symptom_counts(window)
    top_symptom = None
    if counts:
        top_symptom = max(counts, key=counts.get)
        previous_count = sum(1 for e in previous if e.has_symptom(top_symptom))
        sentences.append(symptom_sentence(top_symptom, counts[top_symptom], previous_count, len(window)))
    else:
        sentences.append("No symptoms logged this week.")

    sleep_line = sleep_sentence(window)
    if sleep_line:
        sentences.append(sleep_line)

    logger.debug("Weekly story over %d entries (previous window %d)", len(window), len(previous))

    return WeeklyNarrative(
        text=" ".join(sentences),
        best_day_label=best_label,
        worst_day_label=worst_label,
        best_mood=best.mood,
        worst_mood=worst.mood,
        top_symptom=top_symptom,
    )
