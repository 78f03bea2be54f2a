"""Tests for code age and trend series."""

from conftest import DAY, T0, rev
from evolution_insight.analysis.age import age, churn_trend, complexity_trend, reference_time
from evolution_insight.analysis.models import AgeStat, ChurnTrendPoint
from evolution_insight.config import AnalysisConfig
from evolution_insight.history import ComplexityIndex, ingest


class TestAge:
    def test_relative_to_latest_revision(self, team_model):
        rows = age(team_model)
        assert [(r.entity, r.age_days) for r in rows] == [
            ("README.md", 12),
            ("tests/test_api.py", 7),
            ("src/api.py", 0),
            ("src/db.py", 0),
        ]
        assert not any(r.modified_after_reference for r in rows)

    def test_scenario(self, scenario_model):
        rows = {r.entity: r for r in age(scenario_model)}
        assert rows["fileB"].age_days == 1
        assert rows["fileA"].age_days == 0

    def test_days_are_floored(self):
        model = ingest(
            [
                rev("r1", "a", T0, [("old.py", 1, 0)]),
                rev("r2", "a", T0 + 2 * DAY - 1, [("new.py", 1, 0)]),
            ]
        )
        rows = {r.entity: r.age_days for r in age(model)}
        assert rows["old.py"] == 1

    def test_explicit_reference_time(self, team_model):
        config = AnalysisConfig(analysis_reference_time=T0 + 30 * DAY)
        rows = {r.entity: r.age_days for r in age(team_model, config)}
        assert rows["README.md"] == 28
        assert rows["src/api.py"] == 16

    def test_reference_before_last_change_clamps(self, team_model):
        config = AnalysisConfig(analysis_reference_time=T0 + 10 * DAY)
        rows = age(team_model, config)
        assert rows == [
            AgeStat("README.md", T0 + 2 * DAY, 8),
            AgeStat("tests/test_api.py", T0 + 7 * DAY, 3),
            AgeStat("src/api.py", T0 + 14 * DAY, 0, modified_after_reference=True),
            AgeStat("src/db.py", T0 + 14 * DAY, 0, modified_after_reference=True),
        ]

    def test_age_never_negative(self, team_model):
        config = AnalysisConfig(analysis_reference_time=1)
        assert all(r.age_days == 0 for r in age(team_model, config))

    def test_empty_model(self):
        model = ingest([])
        assert reference_time(model) is None
        assert age(model) == []


class TestComplexityTrend:
    def test_deltas_in_time_order(self):
        index = ComplexityIndex()
        index.add_sample("a.py", T0 + DAY, 12)
        index.add_sample("a.py", T0, 10)
        index.add_sample("a.py", T0 + 2 * DAY, 9)
        rows = complexity_trend(index)
        assert [(r.timestamp, r.complexity, r.delta) for r in rows] == [
            (T0, 10.0, 0.0),
            (T0 + DAY, 12.0, 2.0),
            (T0 + 2 * DAY, 9.0, -3.0),
        ]

    def test_grouped_by_entity(self):
        index = ComplexityIndex()
        index.add_sample("b.py", T0, 1)
        index.add_sample("a.py", T0, 5)
        index.add_sample("b.py", T0 + DAY, 4)
        rows = complexity_trend(index)
        assert [(r.entity, r.delta) for r in rows] == [
            ("a.py", 0.0),
            ("b.py", 0.0),
            ("b.py", 3.0),
        ]

    def test_snapshot_scores_have_no_trend(self):
        assert complexity_trend(ComplexityIndex(scores={"a.py": 3})) == []


class TestChurnTrend:
    def test_daily_buckets(self, team_model):
        rows = [r for r in churn_trend(team_model) if r.entity == "src/api.py"]
        assert rows == [
            ChurnTrendPoint("src/api.py", T0, 110, 5, 2),
            ChurnTrendPoint("src/api.py", T0 + DAY, 20, 10, 1),
            ChurnTrendPoint("src/api.py", T0 + 14 * DAY, 4, 4, 1),
        ]

    def test_weekly_buckets_conserve_lines(self, team_model):
        rows = churn_trend(team_model, AnalysisConfig(time_window="week"))
        assert sum(r.added for r in rows) == sum(rev.added for rev in team_model)
        assert sum(r.revisions for r in rows) == sum(len(rev.changes) for rev in team_model)
        assert all(r.bucket_start % (7 * DAY) == 0 for r in rows)

    def test_ordered_by_entity_then_bucket(self, team_model):
        rows = churn_trend(team_model)
        keys = [(r.entity, r.bucket_start) for r in rows]
        assert keys == sorted(keys)
