"""Tests for configuration loading and validation."""

import os

import pytest

from evolution_insight.config import (
    DEFAULT_CONFIG,
    AnalysisConfig,
    load_config,
    parse_time_window,
)
from evolution_insight.exceptions import ConfigurationError, ConfigurationRangeError


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep user and project config files out of these tests."""
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)
    for key in list(os.environ):
        if key.startswith("EVOLUTION_"):
            monkeypatch.delenv(key)


class TestDefaults:
    def test_values(self):
        assert DEFAULT_CONFIG.time_window == "day"
        assert DEFAULT_CONFIG.window_seconds == 86400
        assert DEFAULT_CONFIG.max_entities_per_commit == 50
        assert DEFAULT_CONFIG.min_coupling_count == 1
        assert DEFAULT_CONFIG.rounding_precision == 1
        assert DEFAULT_CONFIG.minor_ownership_threshold == 0.05
        assert DEFAULT_CONFIG.hotspot_strategy == "multiplicative"

    def test_frozen(self):
        with pytest.raises(AttributeError):
            DEFAULT_CONFIG.min_coupling_count = 3


class TestValidation:
    @pytest.mark.parametrize(
        "field,value",
        [
            ("max_entities_per_commit", 1),
            ("min_coupling_count", -1),
            ("min_coupling_percentage", 101.0),
            ("rounding_precision", -1),
            ("minor_ownership_threshold", 1.5),
            ("analysis_reference_time", 0),
            ("hotspot_strategy", "additive"),
            ("time_window", "fortnight"),
            ("workers", 0),
            ("verbosity", "loud"),
        ],
    )
    def test_out_of_range(self, field, value):
        with pytest.raises(ConfigurationRangeError) as exc_info:
            AnalysisConfig(**{field: value})
        assert exc_info.value.key in (field, "time_window")

    def test_after_must_precede_before(self):
        with pytest.raises(ConfigurationRangeError):
            AnalysisConfig(after=200, before=100)

    @pytest.mark.parametrize(
        "field,value",
        [
            ("max_entities_per_commit", "50"),
            ("min_coupling_count", 2.5),
            ("rounding_precision", True),
            ("min_coupling_percentage", "high"),
            ("minor_ownership_threshold", None),
            ("workers", "4"),
            ("analysis_reference_time", "2024-01-01"),
            ("message_grep", 42),
        ],
    )
    def test_wrong_type(self, field, value):
        with pytest.raises(ConfigurationRangeError) as exc_info:
            AnalysisConfig(**{field: value})
        assert exc_info.value.key == field

    def test_wrong_type_from_file(self, tmp_path):
        path = tmp_path / "typed.toml"
        path.write_text('max_entities_per_commit = "50"\n')
        with pytest.raises(ConfigurationRangeError, match="max_entities_per_commit"):
            load_config(config_file=path)


class TestTimeWindow:
    @pytest.mark.parametrize(
        "value,seconds",
        [
            ("hour", 3600),
            ("day", 86400),
            ("week", 604800),
            ("month", 2592000),
            ("WEEK", 604800),
            ("90", 90),
            (120, 120),
            ("2h", 7200),
            ("3d", 259200),
        ],
    )
    def test_parse(self, value, seconds):
        assert parse_time_window(value) == seconds

    @pytest.mark.parametrize("value", ["", "0", "-5", "soon", True])
    def test_invalid(self, value):
        with pytest.raises(ConfigurationRangeError):
            parse_time_window(value)


class TestLoadConfig:
    def test_overrides(self):
        config = load_config(min_coupling_count=3, time_window="week")
        assert config.min_coupling_count == 3
        assert config.window_seconds == 7 * 86400

    def test_none_overrides_ignored(self):
        assert load_config(min_coupling_count=None) == DEFAULT_CONFIG

    def test_verbose_and_quiet(self):
        assert load_config(verbose=True).verbosity == "verbose"
        assert load_config(quiet=True).verbosity == "quiet"

    def test_unknown_option(self):
        with pytest.raises(ConfigurationError, match="frobnicate"):
            load_config(frobnicate=1)

    def test_explicit_file(self, tmp_path):
        path = tmp_path / "custom.toml"
        path.write_text('max-entities-per-commit = 20\n\n[analysis]\ntime_window = "hour"\n')
        config = load_config(config_file=path)
        assert config.max_entities_per_commit == 20
        assert config.time_window == "hour"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="not found"):
            load_config(config_file=tmp_path / "absent.toml")

    def test_invalid_toml(self, tmp_path):
        path = tmp_path / "broken.toml"
        path.write_text("this is = = not toml")
        with pytest.raises(ConfigurationError):
            load_config(config_file=path)

    def test_project_file_discovered(self, tmp_path):
        (tmp_path / "evolution-insight.toml").write_text("min_coupling_count = 4\n")
        assert load_config().min_coupling_count == 4

    def test_env_overrides_file(self, tmp_path, monkeypatch):
        (tmp_path / "evolution-insight.toml").write_text("min_coupling_count = 4\n")
        monkeypatch.setenv("EVOLUTION_MIN_COUPLING_COUNT", "6")
        monkeypatch.setenv("EVOLUTION_MIN_COUPLING_PERCENTAGE", "12.5")
        config = load_config()
        assert config.min_coupling_count == 6
        assert config.min_coupling_percentage == 12.5

    def test_kwargs_override_env(self, monkeypatch):
        monkeypatch.setenv("EVOLUTION_TIME_WINDOW", "week")
        assert load_config(time_window="hour").time_window == "hour"

    def test_bad_env_value(self, monkeypatch):
        monkeypatch.setenv("EVOLUTION_MAX_ENTITIES_PER_COMMIT", "many")
        with pytest.raises(ConfigurationError, match="EVOLUTION_MAX_ENTITIES_PER_COMMIT"):
            load_config()

    def test_range_checked_after_merge(self):
        with pytest.raises(ConfigurationRangeError):
            load_config(min_coupling_percentage=150)
