"""Readiness score - one number for "how ready am I for today?".

Weighted blend of four components, each on a 10-100 scale:
- Sleep (40%): last night's hours, quality and disruptions
- Mood (25%): the latest mood rating
- Symptom load (20%): how many symptoms, and how severe
- Stressors (15%): distinct context tags logged in the window

Symptoms use the worst severity seen per symptom across the window, so one
severe morning is not diluted by a calmer evening.
"""

import logging
from dataclasses import dataclass, asdict
from typing import Any, Dict, Iterable, Optional, Set

from pause_insights.models import LogEntry, SleepQuality, prepare_entries
from pause_insights.utils import clamp, round_half_up

logger = logging.getLogger(__name__)

SLEEP_WEIGHT = 0.40
MOOD_WEIGHT = 0.25
SYMPTOM_WEIGHT = 0.20
STRESSOR_WEIGHT = 0.15

DEFAULT_COMPONENT_SCORE = 50
TARGET_SLEEP_HOURS = 8
MIN_READINESS = 5
MAX_READINESS = 99

QUALITY_ADJUSTMENTS = {
    SleepQuality.GREAT: 15,
    SleepQuality.POOR: -15,
    SleepQuality.TERRIBLE: -25,
}


@dataclass
class ReadinessBreakdown:
    """Component scores behind a readiness score."""
    score: int
    sleep_score: float
    mood_score: float
    symptom_score: float
    stressor_score: float
    symptom_count: int
    avg_severity: float
    stressor_count: int

    def to_dict(self) -> dict:
        return asdict(self)


def calculate_sleep_component(
    sleep_hours: Optional[float],
    sleep_quality: Optional[SleepQuality],
    disruptions: Optional[int],
) -> float:
    """Sleep component (10-100). 8h is 85 before the quality adjustment.

    Args:
        sleep_hours: Hours slept, None if not logged
        sleep_quality: Reported quality of that night
        disruptions: Number of wake-ups that night

    Returns:
        Sleep component score, 50 when no sleep was logged
    """
    if sleep_hours is None:
        return DEFAULT_COMPONENT_SCORE

    score = clamp(sleep_hours / TARGET_SLEEP_HOURS * 85, 10, 100)
    score = min(100, score + QUALITY_ADJUSTMENTS.get(sleep_quality, 0))
    score -= min(20, (disruptions or 0) * 7)
    return clamp(score, 10, 100)


def calculate_mood_component(mood: Optional[int]) -> float:
    """Mood component: 5 -> 100, 1 -> 20, 50 when missing."""
    if mood is None:
        return DEFAULT_COMPONENT_SCORE
    return mood * 20


def calculate_symptom_component(symptom_count: int, avg_severity: float) -> float:
    """Symptom load component, fewer and milder is better."""
    return max(10, 100 - symptom_count * 10 - avg_severity * 3)


def calculate_stressor_component(stressor_count: int) -> float:
    """Stressor component, fewer distinct tags is better."""
    return max(10, 100 - stressor_count * 12)


def _max_severity_by_symptom(entries: Iterable[LogEntry]) -> Dict[str, int]:
    worst: Dict[str, int] = {}
    for entry in entries:
        for key, reading in entry.symptoms.items():
            worst[key] = max(worst.get(key, 0), reading.severity)
    return worst


def readiness_breakdown(entries: Iterable[Any]) -> Optional[ReadinessBreakdown]:
    """Compute the readiness score and its components.

    Args:
        entries: Log entries (dicts or LogEntry), any order

    Returns:
        ReadinessBreakdown, or None when there are no entries
    """
    entries = prepare_entries(entries)
    if not entries:
        return None

    mood_entry = next((e for e in entries if e.mood is not None), None)
    sleep_entry = next((e for e in entries if e.sleep_hours is not None), None)

    worst = _max_severity_by_symptom(entries)
    symptom_count = len(worst)
    avg_severity = sum(worst.values()) / symptom_count if symptom_count else 0.0

    stressors: Set[str] = set()
    for entry in entries:
        stressors.update(entry.context_tags)
    stressor_count = len(stressors)

    if sleep_entry is not None:
        sleep_score = calculate_sleep_component(
            sleep_entry.sleep_hours, sleep_entry.sleep_quality, sleep_entry.disruptions
        )
    else:
        sleep_score = DEFAULT_COMPONENT_SCORE
    mood_score = calculate_mood_component(mood_entry.mood if mood_entry is not None else None)
    symptom_score = calculate_symptom_component(symptom_count, avg_severity)
    stressor_score = calculate_stressor_component(stressor_count)

    weighted = (
        sleep_score * SLEEP_WEIGHT
        + mood_score * MOOD_WEIGHT
        + symptom_score * SYMPTOM_WEIGHT
        + stressor_score * STRESSOR_WEIGHT
    )
    score = int(clamp(round_half_up(weighted), MIN_READINESS, MAX_READINESS))

    logger.debug(
        "Readiness %d (sleep=%.1f mood=%.1f symptoms=%.1f stressors=%.1f) from %d entries",
        score, sleep_score, mood_score, symptom_score, stressor_score, len(entries),
    )

    return ReadinessBreakdown(
        score=score,
        sleep_score=sleep_score,
        mood_score=mood_score,
        symptom_score=symptom_score,
        stressor_score=stressor_score,
        symptom_count=symptom_count,
        avg_severity=avg_severity,
        stressor_count=stressor_count,
    )


def compute_readiness(entries: Iterable[Any]) -> Optional[int]:
    """Readiness score in [5, 99], or None when there is no data."""
    breakdown = readiness_breakdown(entries)
    return breakdown.score if breakdown else None
