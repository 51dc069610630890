"""Correlation engine - what seems to make YOUR symptoms better or worse.

Compares how often each symptom shows up when a contextual factor is present
versus absent:
- Sleep: nights of 7h+ vs nights under 6h (reported either way)
- Exercise: exercise-tagged entries vs the rest (reported only when
  exercise goes with fewer symptoms)
- Alcohol: alcohol-tagged entries vs the rest (reported only when alcohol
  goes with more symptoms)

Exercise and alcohol are checked in one direction only. This is a
rate-difference heuristic over small personal samples; the confidence
label comes from sample size alone and is not a statistical test.

The API can also return correlations computed server-side. Those arrive as
``RemoteCorrelation`` records and convert into the same ``Correlation``
type, so callers can use either source.
"""

import logging
from dataclasses import dataclass, asdict
from typing import Any, Iterable, List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

from pause_insights.config import Settings, get_settings
from pause_insights.models import LogEntry, normalize_key, prepare_entries, symptom_label
from pause_insights.utils import round_half_up

logger = logging.getLogger(__name__)

FACTOR_SLEEP = "sleep"
FACTOR_EXERCISE = "exercise"
FACTOR_ALCOHOL = "alcohol"

FACTOR_LABELS = {
    FACTOR_SLEEP: "Good sleep (7h+)",
    FACTOR_EXERCISE: "Exercise",
    FACTOR_ALCOHOL: "Alcohol",
}

HIGH_CONFIDENCE = "High confidence"
BUILDING_CONFIDENCE = "Building confidence"


@dataclass
class Correlation:
    """A factor/symptom association found in your entries."""
    factor: str  # 'sleep', 'exercise', 'alcohol' or a server-side factor key
    factor_label: str
    symptom: str  # symptom key
    symptom_label: str
    direction: str  # 'negative' = fewer symptom days with the factor, 'positive' = more
    effect_percent: int  # signed rate difference in percentage points
    sample_size: int
    confidence_label: str
    occurrences: int = 0  # symptom entries inside the compared groups
    lag_days: int = 0
    human_label: str = ""

    @property
    def favorable(self) -> bool:
        return self.direction == "negative"

    def to_dict(self) -> dict:
        return asdict(self)

    def to_api_dict(self) -> dict:
        """The shape the correlations API returns."""
        return {
            'factor': self.factor,
            'symptom': self.symptom,
            'direction': self.direction,
            'confidence': self.confidence_label,
            'effectSizePct': abs(self.effect_percent),
            'occurrences': self.occurrences,
            'lagDays': self.lag_days,
            'humanLabel': self.human_label,
        }


class RemoteCorrelation(BaseModel):
    """A correlation record computed by the API."""
    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel, extra="ignore")

    factor: str
    symptom: str
    direction: str
    confidence: str = BUILDING_CONFIDENCE
    effect_size_pct: float
    occurrences: int = 0
    lag_days: int = 0
    human_label: Optional[str] = None

    def to_correlation(self) -> Correlation:
        key = normalize_key(self.symptom)
        direction = "negative" if self.direction.strip().lower() == "negative" else "positive"
        magnitude = abs(round_half_up(self.effect_size_pct))
        effect = -magnitude if direction == "negative" else magnitude
        factor_label = FACTOR_LABELS.get(self.factor, symptom_label(normalize_key(self.factor)))
        return Correlation(
            factor=self.factor,
            factor_label=factor_label,
            symptom=key,
            symptom_label=symptom_label(key),
            direction=direction,
            effect_percent=effect,
            sample_size=self.occurrences,
            confidence_label=self.confidence,
            occurrences=self.occurrences,
            lag_days=self.lag_days,
            human_label=self.human_label or describe_correlation(factor_label, key, effect),
        )


def confidence_label(sample_size: int, settings: Optional[Settings] = None) -> str:
    """Coarse confidence wording based only on how many entries were compared."""
    settings = settings or get_settings()
    if sample_size > settings.high_confidence_samples:
        return HIGH_CONFIDENCE
    return BUILDING_CONFIDENCE


def describe_correlation(factor_label: str, symptom_key: str, effect_percent: int) -> str:
    """One-line summary, e.g. '40% fewer hot flashes days with exercise'."""
    amount = "fewer" if effect_percent < 0 else "more"
    return f"{abs(effect_percent)}% {amount} {symptom_label(symptom_key).lower()} days with {factor_label.lower()}"


def has_tag_matching(entry: LogEntry, keywords: Sequence[str]) -> bool:
    """True if any normalized tag has a word starting with one of the keywords."""
    for tag in entry.tag_keys:
        for word in tag.split("_"):
            if any(word.startswith(k) for k in keywords):
                return True
    return False


def _symptom_rate(entries: List[LogEntry], key: str) -> float:
    return sum(1 for e in entries if e.has_symptom(key)) / len(entries)


def _occurrences(groups: Iterable[List[LogEntry]], key: str) -> int:
    return sum(1 for group in groups for e in group if e.has_symptom(key))


def _build(
    factor: str,
    key: str,
    effect: int,
    groups: Sequence[List[LogEntry]],
    settings: Settings,
) -> Correlation:
    sample_size = sum(len(g) for g in groups)
    factor_label = FACTOR_LABELS[factor]
    return Correlation(
        factor=factor,
        factor_label=factor_label,
        symptom=key,
        symptom_label=symptom_label(key),
        direction="negative" if effect < 0 else "positive",
        effect_percent=effect,
        sample_size=sample_size,
        confidence_label=confidence_label(sample_size, settings),
        occurrences=_occurrences(groups, key),
        human_label=describe_correlation(factor_label, key, effect),
    )


def detect_sleep_correlation(
    key: str,
    good_sleep: List[LogEntry],
    poor_sleep: List[LogEntry],
    settings: Settings,
) -> Optional[Correlation]:
    """Good-sleep vs poor-sleep symptom rates, reported in either direction."""
    if len(good_sleep) < settings.min_group_size or len(poor_sleep) < settings.min_group_size:
        return None

    # Points by which poor sleep raises the rate; the factor is good sleep.
    poor_excess = round_half_up((_symptom_rate(poor_sleep, key) - _symptom_rate(good_sleep, key)) * 100)
    if abs(poor_excess) <= settings.effect_threshold_pct:
        return None
    return _build(FACTOR_SLEEP, key, -poor_excess, (good_sleep, poor_sleep), settings)


def detect_exercise_correlation(
    key: str,
    exercise: List[LogEntry],
    no_exercise: List[LogEntry],
    settings: Settings,
) -> Optional[Correlation]:
    """Reported only when exercise goes with fewer symptom days."""
    if len(exercise) < settings.min_group_size or len(no_exercise) < settings.min_group_size:
        return None

    reduction = round_half_up((_symptom_rate(no_exercise, key) - _symptom_rate(exercise, key)) * 100)
    if reduction <= settings.effect_threshold_pct:
        return None
    return _build(FACTOR_EXERCISE, key, -reduction, (exercise, no_exercise), settings)


def detect_alcohol_correlation(
    key: str,
    alcohol: List[LogEntry],
    no_alcohol: List[LogEntry],
    settings: Settings,
) -> Optional[Correlation]:
    """Reported only when alcohol goes with more symptom days."""
    if len(alcohol) < settings.min_alcohol_entries or len(no_alcohol) < settings.min_group_size:
        return None

    increase = round_half_up((_symptom_rate(alcohol, key) - _symptom_rate(no_alcohol, key)) * 100)
    if increase <= settings.effect_threshold_pct:
        return None
    return _build(FACTOR_ALCOHOL, key, increase, (alcohol, no_alcohol), settings)


def compute_correlations(entries: Iterable[Any], settings: Optional[Settings] = None) -> List[Correlation]:
    """Find the strongest factor/symptom associations in the window.

    Args:
        entries: Log entries (dicts or LogEntry), any order
        settings: Thresholds and tag keywords (defaults to get_settings())

    Returns:
        Up to 4 correlations, largest absolute effect first; empty when
        there are fewer than 7 entries
    """
    settings = settings or get_settings()
    ordered = prepare_entries(entries)
    if len(ordered) < settings.min_correlation_entries:
        logger.debug("Only %d entries, need %d for correlations", len(ordered), settings.min_correlation_entries)
        return []

    symptom_keys = list(dict.fromkeys(k for e in ordered for k in e.symptoms))

    good_sleep = [e for e in ordered if e.sleep_hours is not None and e.sleep_hours >= settings.good_sleep_hours]
    poor_sleep = [e for e in ordered if e.sleep_hours is not None and e.sleep_hours < settings.poor_sleep_hours]

    exercise, no_exercise = [], []
    alcohol, no_alcohol = [], []
    for entry in ordered:
        (exercise if has_tag_matching(entry, settings.exercise_tag_keywords) else no_exercise).append(entry)
        (alcohol if has_tag_matching(entry, settings.alcohol_tag_keywords) else no_alcohol).append(entry)

    found: List[Correlation] = []
    for key in symptom_keys:
        for correlation in (
            detect_sleep_correlation(key, good_sleep, poor_sleep, settings),
            detect_exercise_correlation(key, exercise, no_exercise, settings),
            detect_alcohol_correlation(key, alcohol, no_alcohol, settings),
        ):
            if correlation is not None:
                found.append(correlation)

    found.sort(key=lambda c: abs(c.effect_percent), reverse=True)
    logger.debug("Found %d correlations across %d symptoms", len(found), len(symptom_keys))
    return found[:settings.correlation_limit]


def parse_remote_correlations(records: Optional[Iterable[Any]]) -> List[Correlation]:
    """Convert API correlation records, skipping ones that do not validate."""
    correlations = []
    for index, record in enumerate(records or []):
        try:
            correlations.append(RemoteCorrelation.model_validate(record).to_correlation())
        except ValidationError as e:
            logger.warning("Skipping invalid remote correlation at index %d: %d errors", index, e.error_count())
    return correlations


def resolve_correlations(
    entries: Iterable[Any],
    remote: Optional[Iterable[Any]] = None,
    settings: Optional[Settings] = None,
) -> List[Correlation]:
    """Prefer server-computed correlations, fall back to the offline engine."""
    settings = settings or get_settings()
    if remote is not None:
        correlations = parse_remote_correlations(remote)
        if correlations:
            correlations.sort(key=lambda c: abs(c.effect_percent), reverse=True)
            return correlations[:settings.correlation_limit]
        logger.info("No usable remote correlations, computing locally")
    return compute_correlations(entries, settings)
