"""Tests for symptom trends, sparklines and the symptom detail view."""

from pause_insights.trends import (
    SymptomTrend,
    calculate_trend_percent,
    compute_day_symptoms,
    compute_sparkline,
    compute_symptom_detail,
    compute_symptom_trends,
)


class TestTrendPercent:
    """Tests for the half-vs-half change."""

    def test_no_older_occurrences(self):
        assert calculate_trend_percent(0, 5) == 0

    def test_increase_and_decrease(self):
        assert calculate_trend_percent(2, 3) == 50
        assert calculate_trend_percent(2, 1) == -50
        assert calculate_trend_percent(3, 3) == 0


class TestSymptomTrends:
    """Tests for compute_symptom_trends."""

    def test_empty(self):
        assert compute_symptom_trends([]) == []

    def test_sorted_by_count(self, make_entry):
        entries = [
            make_entry(days_ago=0, symptomsJson={"anxiety": 1, "hot_flash": 2}),
            make_entry(days_ago=1, symptomsJson={"hot_flash": 3}),
            make_entry(days_ago=2, symptomsJson={"hot_flash": 1}),
        ]
        trends = compute_symptom_trends(entries)
        assert [t.key for t in trends] == ["hot_flash", "anxiety"]
        assert trends[0].name == "Hot flashes"
        assert trends[0].occurrence_count == 3
        assert trends[0].average_severity == 2.0

    def test_at_most_six(self, make_entry):
        keys = ["hot_flash", "night_sweats", "brain_fog", "irritability",
                "joint_pain", "anxiety", "fatigue", "nausea"]
        entries = [make_entry(symptomsJson={k: 1 for k in keys})]
        assert len(compute_symptom_trends(entries)) == 6
        assert len(compute_symptom_trends(entries, limit=3)) == 3

    def test_trend_percent_uses_halves(self, make_entry):
        # Oldest two entries are the older half.
        entries = [
            make_entry(days_ago=3, symptomsJson={"hot_flash": 2}),
            make_entry(days_ago=2, symptomsJson={"hot_flash": 2}),
            make_entry(days_ago=1, symptomsJson={}),
            make_entry(days_ago=0, symptomsJson={"hot_flash": 2}),
        ]
        assert compute_symptom_trends(entries)[0].trend_percent == -50

    def test_odd_window_puts_extra_entry_in_newer_half(self, make_entry):
        entries = [
            make_entry(days_ago=4, symptomsJson={"fatigue": 1}),
            make_entry(days_ago=3, symptomsJson={}),
            make_entry(days_ago=2, symptomsJson={"fatigue": 1}),
            make_entry(days_ago=1, symptomsJson={"fatigue": 1}),
            make_entry(days_ago=0, symptomsJson={"fatigue": 1}),
        ]
        # older = 1 occurrence, newer = 3
        assert compute_symptom_trends(entries)[0].trend_percent == 200

    def test_to_dict(self):
        trend = SymptomTrend(key="fatigue", name="Fatigue", average_severity=1.5,
                             occurrence_count=4, trend_percent=-25)
        d = trend.to_dict()
        assert d['sparkline'] == []
        assert d['trend_percent'] == -25


class TestSparkline:
    """Tests for the 8-bucket severity sparkline."""

    def test_too_sparse(self, make_entry):
        entries = [make_entry(days_ago=i, symptomsJson={"hot_flash": 2} if i < 2 else {}) for i in range(10)]
        assert compute_sparkline(entries, "hot_flash") == []

    def test_one_entry_per_bucket(self, make_entry):
        severities = [1, 2, 3, 1, 2, 3, 1, 2]  # oldest first
        entries = [
            make_entry(days_ago=7 - i, symptomsJson={"hot_flash": s})
            for i, s in enumerate(severities)
        ]
        assert compute_sparkline(entries, "hot_flash") == [float(s) for s in severities]

    def test_buckets_average_present_severities(self, make_entry):
        entries = []
        for i in range(16):
            symptoms = {"hot_flash": 3 if i % 2 else 1} if i < 8 else {}
            entries.append(make_entry(days_ago=15 - i, symptomsJson=symptoms))
        assert compute_sparkline(entries, "Hot Flash") == [2.0, 2.0, 2.0, 2.0, 0.0, 0.0, 0.0, 0.0]

    def test_short_window_pads_with_zero(self, make_entry):
        entries = [make_entry(days_ago=2 - i, symptomsJson={"anxiety": 2}) for i in range(3)]
        assert compute_sparkline(entries, "anxiety") == [2.0, 2.0, 2.0, 0.0, 0.0, 0.0, 0.0, 0.0]

    def test_trend_sparkline_length(self, make_entry):
        entries = [make_entry(days_ago=i, symptomsJson={"fatigue": 1}) for i in range(5)]
        entries.append(make_entry(days_ago=5, symptomsJson={"nausea": 1}))
        by_key = {t.key: t for t in compute_symptom_trends(entries)}
        assert len(by_key["fatigue"].sparkline) == 8
        assert by_key["nausea"].sparkline == []


class TestDaySymptoms:
    """Tests for the single-day snapshot."""

    def test_worst_severity_wins(self, make_entry):
        entries = [
            make_entry(log_type="morning", symptomsJson={"hot_flash": 1, "fatigue": 2}),
            make_entry(log_type="evening", symptomsJson={"hot_flash": 3}),
        ]
        tiles = compute_day_symptoms(entries)
        assert [(t.key, t.severity) for t in tiles] == [("hot_flash", 3), ("fatigue", 2)]

    def test_limit(self, make_entry):
        entry = make_entry(symptomsJson={k: 1 for k in ("a", "b", "c", "d", "e")})
        assert len(compute_day_symptoms([entry])) == 4


class TestSymptomDetail:
    """Tests for compute_symptom_detail."""

    def test_detail(self, make_entry, base_date):
        entries = [
            make_entry(days_ago=0, symptomsJson={"hot_flash": 2}, contextTags=["coffee"]),
            make_entry(days_ago=2, log_type="morning", symptomsJson={"hot_flash": 3}, contextTags=["coffee", "work"]),
            make_entry(days_ago=2, log_type="evening", symptomsJson={"hot_flash": 1}),
            make_entry(days_ago=3, symptomsJson={"fatigue": 1}, contextTags=["wine"]),
        ]
        detail = compute_symptom_detail(entries, "Hot flash", today=base_date, days=7)

        assert detail.key == "hot_flash"
        assert detail.name == "Hot flashes"
        assert detail.days_affected == 2
        assert detail.average_severity == 2.0
        assert len(detail.chart) == 7
        assert detail.chart[-1].date == base_date.isoformat()
        assert [c.severity for c in detail.chart] == [0, 0, 0, 0, 3, 0, 2]
        assert [(t.tag, t.pct) for t in detail.triggers] == [("coffee", 67), ("work", 33)]
        assert detail.benchmark.pct == 73
        assert len(detail.recommendations) == 3

    def test_average_skips_comparison_only_readings(self, make_entry, base_date):
        entries = [
            make_entry(days_ago=0, symptomsJson={"hot_flash": {"comparison": "better"}}),
            make_entry(days_ago=1, symptomsJson={"hot_flash": 3}),
        ]
        detail = compute_symptom_detail(entries, "hot_flash", today=base_date, days=7)
        assert detail.days_affected == 2
        assert detail.average_severity == 3.0

    def test_comparison_only_average_is_zero(self, make_entry, base_date):
        entries = [make_entry(symptomsJson={"hot_flash": {"comparison": "same"}})]
        assert compute_symptom_detail(entries, "hot_flash", today=base_date).average_severity == 0.0

    def test_unknown_symptom(self, make_entry, base_date):
        detail = compute_symptom_detail([make_entry(symptomsJson={"fatigue": 2})], "headache", today=base_date)
        assert detail.days_affected == 0
        assert detail.average_severity == 0.0
        assert detail.change_percent == 0
        assert len(detail.chart) == 28
        assert all(c.severity == 0 for c in detail.chart)
        assert detail.benchmark is None
        assert detail.recommendations == []
        assert detail.to_dict()['benchmark'] is None
