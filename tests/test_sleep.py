"""Tests for the sleep score and weekly bars."""

from pause_insights.sleep import (
    SleepSummary,
    build_weekly_bars,
    calculate_sleep_score,
    compute_sleep_score,
)
from pause_insights.models import prepare_entries


class TestCalculateSleepScore:
    """Tests for the score formula."""

    def test_eight_hours(self):
        assert calculate_sleep_score(8, 0) == 85

    def test_great_nights_reach_100(self):
        assert calculate_sleep_score(8, 0, great_share=1.0) == 100

    def test_poor_night_penalty(self):
        assert calculate_sleep_score(8, 3) == 76
        assert calculate_sleep_score(8, 10) == 65

    def test_floor(self):
        assert calculate_sleep_score(0, 10) == 10


class TestComputeSleepScore:
    """Tests for compute_sleep_score."""

    def test_no_entries(self):
        assert compute_sleep_score([]) is None

    def test_no_sleep_logged(self, make_entry):
        assert compute_sleep_score([make_entry(mood=3), make_entry(days_ago=1)]) is None

    def test_single_great_night(self, make_entry):
        summary = compute_sleep_score([make_entry(sleepHours=8, sleepQuality="great")])
        assert summary.score == 100
        assert summary.total_nights_tracked == 1

    def test_average_hours(self, make_entry):
        entries = [make_entry(days_ago=i, sleepHours=6, sleepQuality="ok") for i in range(7)]
        summary = compute_sleep_score(entries)
        # 6 / 8 * 85 = 63.75
        assert summary.score == 64
        assert summary.avg_hours == 6

    def test_poor_nights_counted(self, make_entry):
        entries = [
            make_entry(days_ago=0, sleepHours=8, sleepQuality="poor", disruptions=2),
            make_entry(days_ago=1, sleepHours=8, sleepQuality="terrible", disruptions=1),
            make_entry(days_ago=2, sleepHours=8, sleepQuality="poor"),
            make_entry(days_ago=3, mood=4),
        ]
        summary = compute_sleep_score(entries)
        assert summary.poor_nights == 3
        assert summary.score == 76
        assert summary.avg_disruptions == 1.0
        assert summary.total_nights_tracked == 3

    def test_score_in_range(self, make_entry):
        for hours in (0, 2, 5, 8, 11, 16):
            summary = compute_sleep_score([make_entry(sleepHours=hours, sleepQuality="terrible")])
            assert 10 <= summary.score <= 100

    def test_to_dict(self, make_entry):
        summary = compute_sleep_score([make_entry(sleepHours=7)])
        assert isinstance(summary, SleepSummary)
        d = summary.to_dict()
        assert d['weekly_bars'][0]['hours'] == 7
        assert d['total_nights_tracked'] == 1


class TestWeeklyBars:
    """Tests for the weekly bar chart."""

    def test_last_seven_oldest_first(self, make_entry, base_date):
        entries = [make_entry(days_ago=i, sleepHours=5 + i * 0.5) for i in range(9)]
        bars = compute_sleep_score(entries).weekly_bars
        assert len(bars) == 7
        assert bars[-1].date == base_date.isoformat()
        assert bars[-1].day_label == "Mon"
        assert bars[0].day_label == "Tue"
        assert [b.hours for b in bars] == [8.0, 7.5, 7.0, 6.5, 6.0, 5.5, 5.0]

    def test_fewer_than_seven(self, make_entry):
        nights = prepare_entries([make_entry(days_ago=i, sleepHours=7) for i in range(3)])
        assert len(build_weekly_bars(nights)) == 3
