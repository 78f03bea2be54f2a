"""Tests for report assembly."""

import pytest

from evolution_insight.analysis import churn, hotspots, logical_coupling
from evolution_insight.exceptions import ConfigurationRangeError, UnknownFieldError
from evolution_insight.history import ComplexityIndex
from evolution_insight.report import SCHEMAS, assemble, columns_for, validate_request


class TestSchemas:
    def test_coupling_columns(self):
        assert columns_for("coupling") == [
            "entity",
            "coupled",
            "degree",
            "cochanges",
            "average-revs",
        ]
        assert columns_for("temporal-coupling") == columns_for("coupling")

    @pytest.mark.parametrize("kind", sorted(SCHEMAS))
    def test_column_names_unique(self, kind):
        names = columns_for(kind)
        assert len(names) == len(set(names))


class TestValidateRequest:
    def test_unknown_sort_field(self):
        with pytest.raises(UnknownFieldError) as exc_info:
            validate_request("churn", sort_by="complexity")
        assert exc_info.value.field == "complexity"
        assert "revisions" in exc_info.value.allowed

    def test_unknown_kind(self):
        with pytest.raises(UnknownFieldError):
            validate_request("velocity")

    def test_negative_limit(self):
        with pytest.raises(ConfigurationRangeError):
            validate_request("churn", limit=-1)

    def test_valid(self):
        validate_request("churn", sort_by="added", limit=0)


class TestAssemble:
    def test_scenario_coupling_row(self, scenario_model):
        report = assemble("coupling", logical_coupling(scenario_model))
        assert report.rows == [
            {
                "entity": "fileA",
                "coupled": "fileB",
                "degree": 100.0,
                "cochanges": 1,
                "average-revs": 1.5,
            }
        ]

    def test_keeps_analyzer_order(self, team_model):
        rows = churn(team_model)
        report = assemble("churn", rows)
        assert [r["entity"] for r in report.rows] == [r.entity for r in rows]

    def test_sort_descending(self, team_model):
        report = assemble("churn", churn(team_model), sort_by="added", descending=True)
        assert [r["added"] for r in report.rows] == [134, 58, 42, 3]

    def test_sort_is_stable(self, team_model):
        report = assemble("churn", churn(team_model), sort_by="revisions", descending=True)
        assert [r["entity"] for r in report.rows] == [
            "src/api.py",
            "src/db.py",
            "tests/test_api.py",
            "README.md",
        ]

    def test_empty_values_sort_last(self, team_model):
        complexity = ComplexityIndex(scores={"src/api.py": 10})
        rows = hotspots(team_model, complexity)
        for descending in (True, False):
            report = assemble("hotspots", rows, sort_by="complexity", descending=descending)
            assert report.rows[0]["entity"] == "src/api.py"
            assert all(r["complexity"] is None for r in report.rows[1:])

    def test_limit(self, team_model):
        rows = churn(team_model)
        assert len(assemble("churn", rows, limit=2)) == 2
        assert len(assemble("churn", rows, limit=0)) == 0
        assert len(assemble("churn", rows, limit=100)) == 4

    def test_validation_precedes_work(self):
        with pytest.raises(UnknownFieldError):
            assemble("churn", [], sort_by="nope")
