"""Tests for hotspot ranking."""

import math

import pytest

from conftest import T0, rev
from evolution_insight.analysis.hotspot import _dense_ranks, hotspots, unresolved_complexity
from evolution_insight.config import AnalysisConfig
from evolution_insight.exceptions import InvalidInputError, UnresolvedComplexityError
from evolution_insight.history import ComplexityIndex, ingest

MULTIPLICATIVE = AnalysisConfig(hotspot_strategy="multiplicative")
RANK_SUM = AnalysisConfig(hotspot_strategy="rank_sum")


@pytest.fixture
def team_complexity():
    return ComplexityIndex(scores={"src/api.py": 10, "src/db.py": 30, "tests/test_api.py": 5})


def ranking(rows):
    return [r.entity for r in rows]


def model_with_revisions(counts):
    """One entity per key, changed ``count`` times."""
    revisions = []
    for entity, count in counts.items():
        for i in range(count):
            revisions.append(rev(f"{entity}-{i}", "a", T0 + len(revisions), [(entity, 1, 0)]))
    return ingest(revisions)


class TestMultiplicative:
    def test_team_ranking(self, team_model, team_complexity):
        rows = hotspots(team_model, team_complexity, MULTIPLICATIVE)
        assert [(r.entity, r.score) for r in rows] == [
            ("src/db.py", 120.0),
            ("src/api.py", 40.0),
            ("tests/test_api.py", 10.0),
            ("README.md", 1.0),
        ]

    def test_is_default(self, team_model, team_complexity):
        assert hotspots(team_model, team_complexity) == hotspots(
            team_model, team_complexity, MULTIPLICATIVE
        )


class TestRankSum:
    def test_team_ranking(self, team_model, team_complexity):
        rows = hotspots(team_model, team_complexity, RANK_SUM)
        assert [(r.entity, r.score) for r in rows] == [
            ("src/db.py", 5.0),
            ("src/api.py", 4.0),
            ("tests/test_api.py", 2.0),
            ("README.md", 1.0),
        ]

    def test_dense_ranks(self):
        assert _dense_ranks({"a": 3.0, "b": 1.0, "c": 3.0, "d": 2.0}) == {
            "a": 3,
            "b": 1,
            "c": 3,
            "d": 2,
        }


class TestUnavailableComplexity:
    def test_flagged_not_dropped(self, team_model, team_complexity):
        rows = {r.entity: r for r in hotspots(team_model, team_complexity)}
        readme = rows["README.md"]
        assert readme.complexity is None
        assert readme.complexity_available is False
        assert readme.score == readme.revisions == 1

    def test_unmeasured_ranked_after_measured(self):
        model = model_with_revisions({"busy.py": 50, "calm.py": 1})
        rows = hotspots(model, ComplexityIndex(scores={"calm.py": 1}))
        assert ranking(rows) == ["calm.py", "busy.py"]

    def test_unmeasured_rows_ordered_by_churn(self):
        model = model_with_revisions({"a.py": 1, "b.py": 3, "c.py": 2})
        assert ranking(hotspots(model, ComplexityIndex())) == ["b.py", "c.py", "a.py"]

    def test_nan_is_unresolved(self):
        model = model_with_revisions({"a.py": 1})
        (row,) = hotspots(model, ComplexityIndex(scores={"a.py": math.nan}))
        assert not row.complexity_available

    def test_unresolved_errors_collected(self, team_model, team_complexity):
        errors = unresolved_complexity(team_model, team_complexity)
        assert [e.entity for e in errors] == ["README.md"]
        assert all(isinstance(e, UnresolvedComplexityError) for e in errors)

    def test_negative_complexity_rejected(self):
        model = model_with_revisions({"a.py": 1})
        with pytest.raises(InvalidInputError):
            hotspots(model, ComplexityIndex(scores={"a.py": -1}))


class TestMonotonicity:
    """Raising one factor never lowers an entity's position."""

    BASE_REVS = {"a.py": 2, "b.py": 3, "c.py": 5, "d.py": 1}
    BASE_COMPLEXITY = {"a.py": 4.0, "b.py": 2.0, "c.py": 1.0, "d.py": 8.0}

    @pytest.mark.parametrize("config", [MULTIPLICATIVE, RANK_SUM], ids=["mult", "rank"])
    @pytest.mark.parametrize("entity", ["a.py", "b.py", "c.py", "d.py"])
    @pytest.mark.parametrize("extra", [1, 2, 4, 10])
    def test_more_revisions(self, config, entity, extra):
        complexity = ComplexityIndex(scores=dict(self.BASE_COMPLEXITY))
        before = ranking(hotspots(model_with_revisions(self.BASE_REVS), complexity, config))
        revs = dict(self.BASE_REVS)
        revs[entity] += extra
        after = ranking(hotspots(model_with_revisions(revs), complexity, config))
        assert after.index(entity) <= before.index(entity)

    @pytest.mark.parametrize("config", [MULTIPLICATIVE, RANK_SUM], ids=["mult", "rank"])
    @pytest.mark.parametrize("entity", ["a.py", "b.py", "c.py", "d.py"])
    @pytest.mark.parametrize("extra", [0.5, 2.0, 4.0, 20.0])
    def test_more_complexity(self, config, entity, extra):
        model = model_with_revisions(self.BASE_REVS)
        scores = dict(self.BASE_COMPLEXITY)
        before = ranking(hotspots(model, ComplexityIndex(scores=dict(scores)), config))
        scores[entity] += extra
        after = ranking(hotspots(model, ComplexityIndex(scores=scores), config))
        assert after.index(entity) <= before.index(entity)

    def test_ties_broken_by_path(self):
        model = model_with_revisions({"b.py": 2, "a.py": 2})
        rows = hotspots(model, ComplexityIndex(scores={"a.py": 3, "b.py": 3}))
        assert ranking(rows) == ["a.py", "b.py"]
