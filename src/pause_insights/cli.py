#!/usr/bin/env python3
"""
Pause Insights CLI.

Compute the journal's derived metrics from a JSON export of log entries
(the array returned by ``/api/logs?range=28d``).

Usage:
    pause-insights summary logs.json             # Readiness, sleep, trends, correlations, story
    pause-insights summary logs.json --json      # Same, as JSON
    pause-insights symptom logs.json hot_flash   # Detail for one symptom
    pause-insights streak logs.json              # Streak and week overview
    cat logs.json | pause-insights summary -     # Read from stdin
"""

import argparse
import json
import logging
import sys
from datetime import date
from typing import Any, List, Optional

from pause_insights.config import get_settings
from pause_insights.correlations import compute_correlations
from pause_insights.dates import parse_day
from pause_insights.exceptions import InputReadError, PauseInsightsError
from pause_insights.journal import build_week_overview
from pause_insights.models import LogEntry, prepare_entries, symptom_label
from pause_insights.narrative import compute_weekly_story
from pause_insights.readiness import readiness_breakdown
from pause_insights.sleep import compute_sleep_score
from pause_insights.streaks import compute_logging_streak
from pause_insights.trends import compute_symptom_detail, compute_symptom_trends

logger = logging.getLogger(__name__)


# ANSI color codes
class Colors:
    RED = "\033[91m"
    YELLOW = "\033[93m"
    GREEN = "\033[92m"
    BOLD = "\033[1m"
    RESET = "\033[0m"


def get_readiness_color(score: int) -> str:
    """Get ANSI color for a readiness score."""
    if score >= 67:
        return Colors.GREEN
    if score >= 34:
        return Colors.YELLOW
    return Colors.RED


def load_entries(source: str) -> List[LogEntry]:
    """Read entries from a JSON file (or '-' for stdin).

    Accepts a bare array or an object with an ``entries`` array.
    """
    try:
        if source == "-":
            payload = json.load(sys.stdin)
        else:
            with open(source, encoding="utf-8") as f:
                payload = json.load(f)
    except OSError as e:
        raise InputReadError(source, e.strerror or str(e)) from e
    except ValueError as e:
        raise InputReadError(source, f"invalid JSON ({e})") from e

    if isinstance(payload, dict):
        payload = payload.get("entries")
    if not isinstance(payload, list):
        raise InputReadError(source, "expected a JSON array of log entries")

    entries = prepare_entries(payload)
    logger.info("Loaded %d of %d entries from %s", len(entries), len(payload), source)
    return entries


def _today(args) -> date:
    return args.today or date.today()


def _print_json(data: Any) -> None:
    print(json.dumps(data, indent=2, default=str))


def cmd_summary(args) -> int:
    """Print every derived metric for the window."""
    entries = load_entries(args.source)

    readiness = readiness_breakdown(entries)
    sleep = compute_sleep_score(entries)
    trends = compute_symptom_trends(entries)
    correlations = compute_correlations(entries)
    story = compute_weekly_story(entries)

    if args.json:
        _print_json({
            'entries': len(entries),
            'readiness': readiness.to_dict() if readiness else None,
            'sleep': sleep.to_dict() if sleep else None,
            'symptom_trends': [t.to_dict() for t in trends],
            'correlations': [c.to_dict() for c in correlations],
            'weekly_story': story.to_dict() if story else None,
        })
        return 0

    print()
    print(f"  {Colors.BOLD}{len(entries)} entries{Colors.RESET}")
    print()

    if readiness:
        color = get_readiness_color(readiness.score)
        print(f"  {color}READINESS: {readiness.score}{Colors.RESET}")
        print(f"    Sleep {readiness.sleep_score:.0f} | Mood {readiness.mood_score:.0f} | "
              f"Symptoms {readiness.symptom_score:.0f} | Stressors {readiness.stressor_score:.0f}")
    else:
        print("  READINESS: not enough data")
    print()

    if sleep:
        print(f"  SLEEP: {sleep.score}  (avg {sleep.avg_hours:.1f}h over {sleep.total_nights_tracked} nights, "
              f"{sleep.avg_disruptions:.1f} disruptions)")
        print("    " + "  ".join(f"{b.day_label} {b.hours:g}h" for b in sleep.weekly_bars))
        print()

    if trends:
        print("  SYMPTOMS")
        for t in trends:
            arrow = "+" if t.trend_percent > 0 else ""
            print(f"    {t.name:<16} x{t.occurrence_count:<3} avg {t.average_severity:.1f}  {arrow}{t.trend_percent}%")
        print()

    if correlations:
        print("  PATTERNS")
        for c in correlations:
            print(f"    {c.human_label}  ({c.confidence_label}, n={c.sample_size})")
        print()

    if story:
        print(f"  THIS WEEK: {story.text}")
        print()
    return 0


def cmd_symptom(args) -> int:
    """Print the detail view for one symptom."""
    entries = load_entries(args.source)
    detail = compute_symptom_detail(entries, args.symptom, today=_today(args), days=args.days)

    if args.json:
        _print_json(detail.to_dict())
        return 0

    print()
    print(f"  {Colors.BOLD}{detail.name}{Colors.RESET}")
    print(f"    Days affected: {detail.days_affected} of {args.days}")
    print(f"    Average severity: {detail.average_severity:.1f}")
    print(f"    Change: {detail.change_percent:+d}%")
    print("    " + "".join(str(d.severity) if d.severity else "." for d in detail.chart))
    if detail.triggers:
        print("    Logged alongside: " + ", ".join(f"{t.tag} ({t.pct}%)" for t in detail.triggers))
    if detail.benchmark:
        print(f"    {detail.benchmark.badge}: {detail.benchmark.note}")
    for tip in detail.recommendations:
        print(f"    - {tip}")
    print()
    return 0


def cmd_streak(args) -> int:
    """Print the check-in streak and the week overview."""
    entries = load_entries(args.source)
    today = _today(args)
    streak = compute_logging_streak(entries, today=today)
    week = build_week_overview(entries, today=today)

    if args.json:
        _print_json({
            'streak': streak.to_dict(),
            'week': [d.to_dict() for d in week],
        })
        return 0

    print()
    print(f"  STREAK: {streak.current_count} days (best {streak.best_count})")
    for day in week:
        am = "AM" if day.has_am else "--"
        pm = "PM" if day.has_pm else "--"
        symptom = symptom_label(day.top_symptom) if day.top_symptom else ""
        mood = day.mood if day.mood is not None else "-"
        print(f"    {day.day_label[:3]} {day.date_label:<7} {am} {pm}  mood {mood}  {symptom}")
    print()
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create and return the argument parser for CLI."""
    parser = argparse.ArgumentParser(
        prog="pause-insights",
        description="Derived wellness metrics from journal log entries",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    def add_common(sub):
        sub.add_argument("source", help="JSON file with log entries, or '-' for stdin")
        sub.add_argument("--json", action="store_true", help="Output as JSON")
        sub.add_argument("--today", type=parse_day, help="Reference date (YYYY-MM-DD), defaults to today")

    summary_parser = subparsers.add_parser("summary", help="Readiness, sleep, trends, patterns and weekly story")
    add_common(summary_parser)
    summary_parser.set_defaults(func=cmd_summary)

    symptom_parser = subparsers.add_parser("symptom", help="Detail for one symptom")
    add_common(symptom_parser)
    symptom_parser.add_argument("symptom", help="Symptom key or name, e.g. hot_flash")
    symptom_parser.add_argument("--days", type=int, default=28, help="Chart length in days (default: 28)")
    symptom_parser.set_defaults(func=cmd_symptom)

    streak_parser = subparsers.add_parser("streak", help="Check-in streak and week overview")
    add_common(streak_parser)
    streak_parser.set_defaults(func=cmd_streak)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)

    level = logging.DEBUG if args.verbose else get_settings().log_level.upper()
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    if not getattr(args, "func", None):
        parser.print_help()
        return 1

    try:
        return args.func(args)
    except PauseInsightsError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
