"""Log entry data model and the ingestion boundary.

Entries arrive from the journal API as JSON records (camelCase keys,
``symptomsJson`` maps, JSON-encoded ``notes``). Everything that can be
malformed is normalized here, once, so the scorers only ever see clean,
immutable ``LogEntry`` objects in a known order:

- symptom keys go through ``normalize_key`` and severities are clamped to 1-3
- mood/energy are clamped to their ranges, sleep values floored at zero
- sleep quality strings map onto ``SleepQuality`` (aliases included)
- ``notes`` is parsed into a tagged ``JournalNote`` and never raises
- ``order_newest_first`` enforces the newest-first contract
"""

import datetime as dt
import json
import logging
import re
from enum import Enum
from typing import Annotated, Any, Dict, Iterable, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator
from pydantic.alias_generators import to_camel

from pause_insights.exceptions import EntryValidationError
from pause_insights.utils import clamp, round_half_up, to_number

logger = logging.getLogger(__name__)


class LogType(str, Enum):
    """Which daily check-in an entry belongs to."""
    MORNING = "morning"
    EVENING = "evening"
    UNSPECIFIED = "unspecified"


class SleepQuality(str, Enum):
    """Self-reported sleep quality, worst to best."""
    TERRIBLE = "terrible"
    POOR = "poor"
    OK = "ok"
    GOOD = "good"
    GREAT = "great"

    @classmethod
    def parse(cls, value: Any) -> Optional["SleepQuality"]:
        """Map a raw quality string (case-insensitive, aliases allowed) to a member."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        text = value.strip().lower()
        text = SLEEP_QUALITY_ALIASES.get(text, text)
        try:
            return cls(text)
        except ValueError:
            logger.debug("Unknown sleep quality %r ignored", value)
            return None


SLEEP_QUALITY_ALIASES = {
    "fair": "ok",
    "okay": "ok",
    "amazing": "great",
}

SYMPTOM_LABELS = {
    "hot_flash": "Hot flashes",
    "night_sweats": "Night sweats",
    "brain_fog": "Brain fog",
    "irritability": "Irritability",
    "joint_pain": "Joint pain",
    "anxiety": "Anxiety",
    "fatigue": "Fatigue",
    "nausea": "Nausea",
    "heart_racing": "Heart racing",
}

COMPARISONS = ("better", "same", "worse")

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")
_SEPARATORS = re.compile(r"[\s\-]+")
_UNDERSCORES = re.compile(r"_+")


def normalize_key(text: str) -> str:
    """Turn a symptom name or tag into its storage key.

    ``"Hot Flash"``, ``"hotFlash"`` and ``"hot_flash"`` all become
    ``"hot_flash"``. Applying it to its own output is a no-op.
    """
    key = _CAMEL_BOUNDARY.sub("_", str(text).strip())
    key = _SEPARATORS.sub("_", key.lower())
    return _UNDERSCORES.sub("_", key).strip("_")


def symptom_label(key: str) -> str:
    """Display label for a symptom key."""
    if key in SYMPTOM_LABELS:
        return SYMPTOM_LABELS[key]
    text = key.replace("_", " ").strip()
    return text[:1].upper() + text[1:]


def clamp_severity(value: Any) -> Optional[int]:
    """Severity as an int in {1, 2, 3}, or None if value is not numeric."""
    number = to_number(value)
    if number is None:
        return None
    return int(clamp(round_half_up(number), 1, 3))


# ============================================================================
# Symptom readings
# ============================================================================

class SymptomReading(BaseModel):
    """One symptom as logged on an entry.

    Evening entries may carry only a comparison against the morning check-in
    ("better"/"same"/"worse"); such readings still count as the symptom being
    present, at severity 1, with ``rated`` False.
    """
    model_config = ConfigDict(frozen=True)

    severity: int = 1
    comparison: Optional[str] = None
    rated: bool = True  # False when no severity was given

    @classmethod
    def from_raw(cls, value: Any) -> Optional["SymptomReading"]:
        """Build a reading from a plain severity or a {severity, comparison} object."""
        if isinstance(value, cls):
            return value
        if isinstance(value, dict):
            severity = clamp_severity(value.get("severity"))
            comparison = value.get("comparison")
            if isinstance(comparison, str) and comparison.strip().lower() in COMPARISONS:
                comparison = comparison.strip().lower()
            else:
                comparison = None
            return cls(severity=severity or 1, comparison=comparison, rated=severity is not None)
        severity = clamp_severity(value)
        if severity is None:
            return None
        return cls(severity=severity)


# ============================================================================
# Journal notes
# ============================================================================

class MorningNote(BaseModel):
    """Notes from the morning check-in."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["morning"] = "morning"
    grateful: Optional[str] = None
    intention: Optional[str] = None


class EveningNote(BaseModel):
    """Notes from the evening check-in."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["evening"] = "evening"
    highlight: Optional[str] = None
    learned: Optional[str] = None


class PlainNote(BaseModel):
    """Free text that was not a structured note."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["plain"] = "plain"
    text: str


JournalNote = Annotated[Union[MorningNote, EveningNote, PlainNote], Field(discriminator="kind")]

_MORNING_FIELDS = ("grateful", "intention")
_EVENING_FIELDS = ("highlight", "learned")


def _note_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def parse_journal_note(raw: Optional[str], log_type: LogType = LogType.UNSPECIFIED):
    """Parse the serialized ``notes`` field into a JournalNote.

    Structured notes are JSON objects: ``{grateful, intention}`` in the
    morning, ``{highlight, learned}`` in the evening. Entries without a log
    type get the variant whose keys are present. Anything else, including
    invalid JSON, is kept as a PlainNote.

    Returns:
        MorningNote, EveningNote, PlainNote, or None for empty notes
    """
    if raw is None or not str(raw).strip():
        return None
    raw = str(raw)

    try:
        data = json.loads(raw)
    except ValueError:
        return PlainNote(text=raw.strip())

    if not isinstance(data, dict):
        return PlainNote(text=raw.strip())

    if log_type == LogType.UNSPECIFIED:
        if any(k in data for k in _MORNING_FIELDS):
            log_type = LogType.MORNING
        elif any(k in data for k in _EVENING_FIELDS):
            log_type = LogType.EVENING

    if log_type == LogType.MORNING:
        note = MorningNote(grateful=_note_text(data.get("grateful")),
                           intention=_note_text(data.get("intention")))
        if note.grateful or note.intention:
            return note
    elif log_type == LogType.EVENING:
        note = EveningNote(highlight=_note_text(data.get("highlight")),
                           learned=_note_text(data.get("learned")))
        if note.highlight or note.learned:
            return note

    return PlainNote(text=raw.strip())


# ============================================================================
# Log entry
# ============================================================================

class LogEntry(BaseModel):
    """One daily check-in as supplied by the journal API.

    Accepts the API's camelCase field names (``logType``, ``sleepHours``,
    ``symptomsJson``...) as well as snake_case. Immutable once built.
    """
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
        extra="ignore",
    )

    id: Optional[Union[int, str]] = None
    date: dt.date
    log_type: LogType = LogType.UNSPECIFIED
    logged_at: Optional[dt.datetime] = None
    symptoms: Dict[str, SymptomReading] = Field(default_factory=dict, alias="symptomsJson")
    mood: Optional[int] = None
    energy: Optional[int] = None
    sleep_hours: Optional[float] = None
    sleep_quality: Optional[SleepQuality] = None
    disruptions: Optional[int] = None
    context_tags: Tuple[str, ...] = ()
    notes: Optional[str] = None
    journal: Optional[JournalNote] = None

    @model_validator(mode="before")
    @classmethod
    def _parse_notes(cls, data: Any) -> Any:
        """Parse notes into ``journal`` once, at ingestion."""
        if not isinstance(data, dict) or data.get("journal") is not None:
            return data
        data = dict(data)
        notes = data.get("notes")
        if notes is not None and not isinstance(notes, str):
            notes = json.dumps(notes)
            data["notes"] = notes
        raw_type = data.get("logType", data.get("log_type"))
        data["journal"] = parse_journal_note(notes, _parse_log_type(raw_type))
        return data

    @field_validator("date", mode="before")
    @classmethod
    def _parse_date(cls, value: Any) -> Any:
        if isinstance(value, dt.datetime):
            return value.date()
        if isinstance(value, str) and len(value) > 10:
            return value[:10]
        return value

    @field_validator("log_type", mode="before")
    @classmethod
    def _coerce_log_type(cls, value: Any) -> LogType:
        return _parse_log_type(value)

    @field_validator("logged_at", mode="before")
    @classmethod
    def _parse_logged_at(cls, value: Any) -> Optional[dt.datetime]:
        if value is None or value == "":
            return None
        if isinstance(value, str):
            try:
                value = dt.datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
            except ValueError:
                logger.debug("Unparseable loggedAt %r ignored", value)
                return None
        if not isinstance(value, dt.datetime):
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=dt.timezone.utc)
        return value

    @field_validator("symptoms", mode="before")
    @classmethod
    def _parse_symptoms(cls, value: Any) -> Dict[str, SymptomReading]:
        if not isinstance(value, dict):
            if value is not None:
                logger.debug("Ignoring non-object symptoms payload of type %s", type(value).__name__)
            return {}
        readings: Dict[str, SymptomReading] = {}
        for raw_key, raw_value in value.items():
            key = normalize_key(raw_key)
            reading = SymptomReading.from_raw(raw_value)
            if not key or reading is None:
                continue
            existing = readings.get(key)
            if existing is None or reading.severity > existing.severity:
                readings[key] = reading
        return readings

    @field_validator("mood", mode="before")
    @classmethod
    def _clamp_mood(cls, value: Any) -> Optional[int]:
        number = to_number(value)
        return None if number is None else int(clamp(round_half_up(number), 1, 5))

    @field_validator("energy", mode="before")
    @classmethod
    def _clamp_energy(cls, value: Any) -> Optional[int]:
        number = to_number(value)
        return None if number is None else int(clamp(round_half_up(number), 1, 3))

    @field_validator("sleep_hours", mode="before")
    @classmethod
    def _floor_sleep_hours(cls, value: Any) -> Optional[float]:
        number = to_number(value)
        return None if number is None else max(0.0, number)

    @field_validator("sleep_quality", mode="before")
    @classmethod
    def _parse_sleep_quality(cls, value: Any) -> Optional[SleepQuality]:
        return SleepQuality.parse(value)

    @field_validator("disruptions", mode="before")
    @classmethod
    def _floor_disruptions(cls, value: Any) -> Optional[int]:
        if isinstance(value, (list, tuple)):
            return len(value)
        number = to_number(value)
        return None if number is None else max(0, int(number))

    @field_validator("context_tags", mode="before")
    @classmethod
    def _clean_tags(cls, value: Any) -> Tuple[str, ...]:
        if value is None:
            return ()
        if isinstance(value, str):
            value = [value]
        if not isinstance(value, (list, tuple, set, frozenset)):
            return ()
        tags = []
        for tag in value:
            if tag is None:
                continue
            text = str(tag).strip()
            if text:
                tags.append(text)
        return tuple(tags)

    @property
    def symptom_count(self) -> int:
        return len(self.symptoms)

    def has_symptom(self, key: str) -> bool:
        return key in self.symptoms

    def severity(self, key: str) -> Optional[int]:
        """Severity of a symptom on this entry, or None if absent."""
        reading = self.symptoms.get(key)
        return reading.severity if reading is not None else None

    @property
    def tag_keys(self) -> Tuple[str, ...]:
        """Context tags as normalized keys."""
        return tuple(normalize_key(t) for t in self.context_tags)


def _parse_log_type(value: Any) -> LogType:
    if isinstance(value, LogType):
        return value
    if isinstance(value, str):
        try:
            return LogType(value.strip().lower())
        except ValueError:
            pass
    return LogType.UNSPECIFIED


# ============================================================================
# Ingestion boundary
# ============================================================================

_LOG_TYPE_RANK = {
    LogType.EVENING: 2,
    LogType.UNSPECIFIED: 1,
    LogType.MORNING: 0,
}


def coerce_entries(records: Optional[Iterable[Any]], strict: bool = False) -> List[LogEntry]:
    """Turn API records (dicts) or LogEntry objects into LogEntry objects.

    Args:
        records: Iterable of dicts and/or LogEntry instances (None is empty)
        strict: Raise EntryValidationError instead of dropping bad records

    Returns:
        List of LogEntry in input order
    """
    entries: List[LogEntry] = []
    for index, record in enumerate(records or []):
        if isinstance(record, LogEntry):
            entries.append(record)
            continue
        try:
            entries.append(LogEntry.model_validate(record))
        except ValidationError as e:
            messages = [f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()]
            if strict:
                raise EntryValidationError(
                    f"Log entry at index {index} is invalid",
                    index=index,
                    details={"errors": messages},
                ) from e
            logger.warning("Dropping invalid log entry at index %d: %s", index, "; ".join(messages))
    return entries


def _recency_key(entry: LogEntry) -> Tuple[dt.date, int, float]:
    logged = entry.logged_at.timestamp() if entry.logged_at else float("-inf")
    return (entry.date, _LOG_TYPE_RANK[entry.log_type], logged)


def order_newest_first(entries: Iterable[LogEntry]) -> List[LogEntry]:
    """Sort entries newest first.

    Date descending, then evening before unspecified before morning, then
    ``logged_at`` descending. The sort is stable, so entries that tie on all
    three keep the caller's relative order.
    """
    return sorted(entries, key=_recency_key, reverse=True)


def prepare_entries(records: Optional[Iterable[Any]]) -> List[LogEntry]:
    """Coerce and order input for the compute functions."""
    return order_newest_first(coerce_entries(records))
