"""Tests for churn and revision frequency."""

from conftest import DAY, T0, rev
from evolution_insight.analysis.churn import churn, revision_frequency
from evolution_insight.analysis.models import ChurnStat
from evolution_insight.history import ingest


class TestChurn:
    def test_scenario(self, scenario_model):
        by_entity = {r.entity: r for r in churn(scenario_model)}
        assert by_entity["fileA"] == ChurnStat("fileA", 12, 1, 2, T0, T0 + DAY)
        assert by_entity["fileB"] == ChurnStat("fileB", 5, 0, 1, T0, T0)
        assert by_entity["fileA"].churn == 13

    def test_sorted_by_entity(self, team_model):
        assert [r.entity for r in churn(team_model)] == [
            "README.md",
            "src/api.py",
            "src/db.py",
            "tests/test_api.py",
        ]

    def test_team_totals(self, team_model):
        by_entity = {r.entity: r for r in churn(team_model)}
        assert (by_entity["src/api.py"].added, by_entity["src/api.py"].deleted) == (134, 19)
        assert by_entity["src/db.py"].revisions == 4
        assert by_entity["tests/test_api.py"].first_timestamp == T0 + 3600
        assert by_entity["tests/test_api.py"].last_timestamp == T0 + 7 * DAY

    def test_conservation_per_revision(self, team_revisions):
        """Each revision's added lines land exactly on the entities it touched."""
        for revision in team_revisions:
            single = churn(ingest([revision]))
            assert sum(r.added for r in single) == sum(c.added for c in revision.changes)
            assert sum(r.deleted for r in single) == sum(c.deleted for c in revision.changes)

    def test_conservation_over_history(self, team_model):
        rows = churn(team_model)
        assert sum(r.added for r in rows) == sum(rev.added for rev in team_model)
        assert sum(r.revisions for r in rows) == sum(len(rev.changes) for rev in team_model)

    def test_shotgun_commit_still_counts_for_churn(self):
        wide = [(f"f{i:02d}.py", 2, 1) for i in range(60)]
        rows = churn(ingest([rev("wide", "a", T0, wide)]))
        assert len(rows) == 60
        assert all(r.revisions == 1 and r.added == 2 for r in rows)

    def test_empty_model(self):
        assert churn(ingest([])) == []


class TestRevisionFrequency:
    def test_most_changed_first(self, team_model):
        rows = revision_frequency(team_model)
        assert [(r.entity, r.revisions) for r in rows] == [
            ("src/api.py", 4),
            ("src/db.py", 4),
            ("tests/test_api.py", 2),
            ("README.md", 1),
        ]
