"""Derived wellness metrics for the symptom journal."""

from pause_insights.models import (
    LogEntry,
    LogType,
    SleepQuality,
    SymptomReading,
    MorningNote,
    EveningNote,
    PlainNote,
    normalize_key,
    symptom_label,
    parse_journal_note,
    coerce_entries,
    order_newest_first,
    prepare_entries,
)
from pause_insights.readiness import (
    ReadinessBreakdown,
    compute_readiness,
    readiness_breakdown,
)
from pause_insights.trends import (
    SymptomTrend,
    SymptomDetail,
    DaySymptom,
    compute_symptom_trends,
    compute_sparkline,
    compute_day_symptoms,
    compute_symptom_detail,
)
from pause_insights.sleep import (
    SleepBar,
    SleepSummary,
    compute_sleep_score,
)
from pause_insights.correlations import (
    Correlation,
    RemoteCorrelation,
    compute_correlations,
    parse_remote_correlations,
    resolve_correlations,
)
from pause_insights.narrative import (
    WeeklyNarrative,
    compute_weekly_story,
)
from pause_insights.streaks import (
    Streak,
    compute_logging_streak,
    hours_since_last_log,
)
from pause_insights.journal import (
    WeekDay,
    MonthlyAdherence,
    build_week_overview,
    compute_monthly_adherence,
)
from pause_insights.dates import (
    StripDay,
    build_date_strip,
    format_date_header,
)
from pause_insights.exceptions import (
    ErrorCode,
    PauseInsightsError,
    EntryValidationError,
    InputReadError,
)

__version__ = "0.1.0"

__all__ = [
    "LogEntry",
    "LogType",
    "SleepQuality",
    "SymptomReading",
    "MorningNote",
    "EveningNote",
    "PlainNote",
    "normalize_key",
    "symptom_label",
    "parse_journal_note",
    "coerce_entries",
    "order_newest_first",
    "prepare_entries",
    # Readiness
    "ReadinessBreakdown",
    "compute_readiness",
    "readiness_breakdown",
    # Symptom trends
    "SymptomTrend",
    "SymptomDetail",
    "DaySymptom",
    "compute_symptom_trends",
    "compute_sparkline",
    "compute_day_symptoms",
    "compute_symptom_detail",
    # Sleep
    "SleepBar",
    "SleepSummary",
    "compute_sleep_score",
    # Correlations
    "Correlation",
    "RemoteCorrelation",
    "compute_correlations",
    "parse_remote_correlations",
    "resolve_correlations",
    # Weekly story
    "WeeklyNarrative",
    "compute_weekly_story",
    # Streaks and calendar
    "Streak",
    "compute_logging_streak",
    "hours_since_last_log",
    "WeekDay",
    "MonthlyAdherence",
    "build_week_overview",
    "compute_monthly_adherence",
    "StripDay",
    "build_date_strip",
    "format_date_header",
    # Errors
    "ErrorCode",
    "PauseInsightsError",
    "EntryValidationError",
    "InputReadError",
]
