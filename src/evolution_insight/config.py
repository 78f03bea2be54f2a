"""Configuration loading and management for Evolution Insight.

Configuration sources are merged in priority order:
    1. Defaults (defined in AnalysisConfig)
    2. Global config (~/.evolution-insight.toml)
    3. Project config (./evolution-insight.toml)
    4. Explicit config file
    5. Environment variables (EVOLUTION_* prefix)
    6. Direct overrides (passed as kwargs, typically from the CLI)

Option names may be written with hyphens (``max-entities-per-commit``) or
underscores (``max_entities_per_commit``).

Example:
    >>> config = load_config(min_coupling_count=3)
    >>> config.min_coupling_count
    3
    >>> config.window_seconds
    86400
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import ConfigurationError, ConfigurationRangeError

Verbosity = Literal["quiet", "normal", "verbose"]
HotspotStrategyName = Literal["multiplicative", "rank_sum"]

SECONDS_PER_DAY = 86400

# Named time-window granularities for temporal coupling and churn trends
TIME_WINDOWS: dict[str, int] = {
    "hour": 3600,
    "day": SECONDS_PER_DAY,
    "week": 7 * SECONDS_PER_DAY,
    "month": 30 * SECONDS_PER_DAY,
}

HOTSPOT_STRATEGIES = ("multiplicative", "rank_sum")

# Numeric options, type-checked ahead of the range checks
_INTEGER_FIELDS = ("max_entities_per_commit", "min_coupling_count", "rounding_precision", "workers")
_NUMBER_FIELDS = (
    "min_coupling_percentage",
    "minor_ownership_threshold",
    "analysis_reference_time",
    "after",
    "before",
)
_OPTIONAL_FIELDS = {"workers", "analysis_reference_time", "after", "before"}


def _check_number(key: str, value: Any, integral: bool) -> None:
    if value is None and key in _OPTIONAL_FIELDS:
        return
    if isinstance(value, bool) or not isinstance(value, int if integral else (int, float)):
        raise ConfigurationRangeError(
            key, value, "expected an integer" if integral else "expected a number"
        )


def parse_time_window(value: str | int) -> int:
    """Resolve a time-window setting to a length in seconds.

    Accepts a granularity name (``hour``, ``day``, ``week``, ``month``), a
    bare number of seconds, or a number suffixed with ``s``/``h``/``d``.

    Raises:
        ConfigurationRangeError: If the window is unknown or not positive.
    """
    if isinstance(value, bool):
        raise ConfigurationRangeError("time_window", value, "expected a name or seconds")
    if isinstance(value, int):
        seconds = value
    else:
        text = str(value).strip().lower()
        if text in TIME_WINDOWS:
            return TIME_WINDOWS[text]
        multiplier = 1
        if text[-1:] in ("s", "h", "d"):
            multiplier = {"s": 1, "h": 3600, "d": SECONDS_PER_DAY}[text[-1]]
            text = text[:-1]
        try:
            seconds = int(text) * multiplier
        except ValueError:
            raise ConfigurationRangeError(
                "time_window",
                value,
                f"expected one of {', '.join(TIME_WINDOWS)} or a number of seconds",
            ) from None
    if seconds <= 0:
        raise ConfigurationRangeError("time_window", value, "window length must be positive")
    return seconds


@dataclass(frozen=True)
class AnalysisConfig:
    """Analysis knobs. Thresholds are explicit options, never hidden policy.

    Attributes:
        Coupling:
            time_window: Bucket granularity for temporal coupling and churn trends
            max_entities_per_commit: Revisions touching more entities are not
                expanded into pairs (they still count towards churn)
            min_coupling_count: Minimum co-change count to report a pair
            min_coupling_percentage: Minimum coupling degree (0-100) to report
            rounding_precision: Decimal places for percentages and averages

        Ownership:
            minor_ownership_threshold: Share (0-1) an author needs to count
                towards knowledge fragmentation

        Age:
            analysis_reference_time: Unix timestamp ages are measured from
                (None = latest revision in the model)

        Hotspots:
            hotspot_strategy: How churn and complexity are combined

        Revision filtering:
            after: Only revisions at or after this unix timestamp
            before: Only revisions strictly before this unix timestamp
            message_grep: Only revisions whose message contains this text

        Execution:
            workers: Worker threads for co-change expansion (None = sequential)
            verbosity: Logging verbosity level
    """

    # Coupling
    time_window: str = "day"
    max_entities_per_commit: int = 50
    min_coupling_count: int = 1
    min_coupling_percentage: float = 0.0
    rounding_precision: int = 1

    # Ownership
    minor_ownership_threshold: float = 0.05

    # Age
    analysis_reference_time: Optional[int] = None

    # Hotspots
    hotspot_strategy: HotspotStrategyName = "multiplicative"

    # Revision filtering
    after: Optional[int] = None
    before: Optional[int] = None
    message_grep: Optional[str] = None

    # Execution
    workers: Optional[int] = None
    verbosity: Verbosity = "normal"

    def __post_init__(self) -> None:
        """Validate configuration; bad ranges are rejected before any analysis."""
        for key in _INTEGER_FIELDS:
            _check_number(key, getattr(self, key), integral=True)
        for key in _NUMBER_FIELDS:
            _check_number(key, getattr(self, key), integral=False)
        if self.message_grep is not None and not isinstance(self.message_grep, str):
            raise ConfigurationRangeError("message_grep", self.message_grep, "expected text")

        parse_time_window(self.time_window)

        if self.max_entities_per_commit < 2:
            raise ConfigurationRangeError(
                "max_entities_per_commit",
                self.max_entities_per_commit,
                "must be at least 2 for any pair to exist",
            )
        if self.min_coupling_count < 0:
            raise ConfigurationRangeError(
                "min_coupling_count", self.min_coupling_count, "must be non-negative"
            )
        if not 0.0 <= self.min_coupling_percentage <= 100.0:
            raise ConfigurationRangeError(
                "min_coupling_percentage",
                self.min_coupling_percentage,
                "must be between 0 and 100",
            )
        if not 0 <= self.rounding_precision <= 10:
            raise ConfigurationRangeError(
                "rounding_precision", self.rounding_precision, "must be between 0 and 10"
            )
        if not 0.0 <= self.minor_ownership_threshold <= 1.0:
            raise ConfigurationRangeError(
                "minor_ownership_threshold",
                self.minor_ownership_threshold,
                "must be between 0.0 and 1.0",
            )
        if self.analysis_reference_time is not None and self.analysis_reference_time <= 0:
            raise ConfigurationRangeError(
                "analysis_reference_time",
                self.analysis_reference_time,
                "must be a positive unix timestamp",
            )
        if self.hotspot_strategy not in HOTSPOT_STRATEGIES:
            raise ConfigurationRangeError(
                "hotspot_strategy",
                self.hotspot_strategy,
                f"expected one of {', '.join(HOTSPOT_STRATEGIES)}",
            )
        if self.after is not None and self.before is not None and self.after >= self.before:
            raise ConfigurationRangeError(
                "after", self.after, "must be earlier than 'before'"
            )
        if self.workers is not None and self.workers < 1:
            raise ConfigurationRangeError("workers", self.workers, "must be at least 1")
        if self.verbosity not in ("quiet", "normal", "verbose"):
            raise ConfigurationRangeError(
                "verbosity", self.verbosity, "expected quiet, normal or verbose"
            )

    @property
    def window_seconds(self) -> int:
        """Length of one temporal bucket in seconds."""
        return parse_time_window(self.time_window)


DEFAULT_CONFIG = AnalysisConfig()


def load_config(config_file: Optional[Path] = None, **overrides: Any) -> AnalysisConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags); ``None``
            values are ignored so unset CLI options fall through

    Returns:
        Validated AnalysisConfig instance

    Raises:
        ConfigurationError: If a config file is invalid, missing, or names an
            unknown option
        ConfigurationRangeError: If a value is outside its valid range
    """
    merged: dict[str, Any] = {}

    global_config = Path.home() / ".evolution-insight.toml"
    if global_config.exists():
        merged.update(_load_toml_file(global_config))

    project_config = Path.cwd() / "evolution-insight.toml"
    if project_config.exists():
        merged.update(_load_toml_file(project_config))

    if config_file is not None:
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        merged.update(_load_toml_file(config_file))

    merged.update(_load_env_vars())

    if overrides.pop("verbose", False):
        overrides["verbosity"] = "verbose"
    if overrides.pop("quiet", False):
        overrides["verbosity"] = "quiet"

    merged.update(_normalize_keys({k: v for k, v in overrides.items() if v is not None}))

    unknown = sorted(set(merged) - set(AnalysisConfig.__dataclass_fields__))
    if unknown:
        raise ConfigurationError(
            f"Unknown configuration option(s): {', '.join(unknown)}",
            details={"options": ", ".join(unknown)},
        )

    return AnalysisConfig(**merged)


def _normalize_keys(values: dict[str, Any]) -> dict[str, Any]:
    return {key.replace("-", "_"): value for key, value in values.items()}


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from EVOLUTION_* environment variables.

    Examples:
        EVOLUTION_TIME_WINDOW=week
        EVOLUTION_MAX_ENTITIES_PER_COMMIT=30
        EVOLUTION_MIN_COUPLING_PERCENTAGE=50
        EVOLUTION_ANALYSIS_REFERENCE_TIME=1700000000

    Returns:
        Dict of field_name -> parsed_value for any EVOLUTION_* vars found.
    """
    type_hints = get_type_hints(AnalysisConfig)

    result: dict[str, Any] = {}

    for field_name in AnalysisConfig.__dataclass_fields__:
        env_key = f"EVOLUTION_{field_name.upper()}"
        env_value = os.environ.get(env_key)

        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        if type_hint is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hint)
        except ValueError as e:
            raise ConfigurationError(
                f"Invalid {env_key}: {e}", details={"variable": env_key, "value": env_value}
            ) from e
        if parsed is not None:
            result[field_name] = parsed

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse an environment variable string to the field's type.

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    origin = getattr(type_hint, "__origin__", None)

    # Optional[X] is Union[X, None]
    args = getattr(type_hint, "__args__", ())
    if type(None) in args:
        non_none_types = [t for t in args if t is not type(None)]
        if non_none_types:
            type_hint = non_none_types[0]
            origin = getattr(type_hint, "__origin__", None)

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        if lower in ("false", "0", "no", "off"):
            return False
        raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    if type_hint is float:
        return float(value)

    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict[str, Any]:
    """Load a TOML config file.

    Options may sit at top level or under an ``[analysis]`` table.

    Raises:
        ConfigurationError: If the file cannot be parsed
    """
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        import tomli as tomllib  # type: ignore

    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigurationError(
            f"Invalid config file '{path}': {e}", details={"path": str(path)}
        ) from e

    section = data.pop("analysis", None)
    if isinstance(section, dict):
        data.update(section)
    return _normalize_keys(data)
