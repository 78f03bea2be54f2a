"""Configuration exceptions: option ranges and report fields."""

from typing import Any, Iterable

from .base import EvolutionInsightError


class ConfigurationError(EvolutionInsightError):
    """Base class for configuration-related errors."""

    kind = "configuration"


class ConfigurationRangeError(ConfigurationError):
    """Raised when a configuration value is outside its valid range."""

    kind = "configuration_range"

    def __init__(self, key: str, value: Any, reason: str):
        super().__init__(
            f"Invalid configuration for {key}: {value}",
            details={"key": key, "value": str(value), "reason": reason},
        )
        self.key = key
        self.value = value
        self.reason = reason


class UnknownFieldError(ConfigurationError):
    """Raised when a report is asked to sort by a column it does not have."""

    kind = "unknown_field"

    def __init__(self, field: str, report: str, allowed: Iterable[str]):
        self.allowed = list(allowed)
        super().__init__(
            f"Unknown field {field!r} for {report} report",
            details={"field": field, "report": report, "allowed": ", ".join(self.allowed)},
        )
        self.field = field
        self.report = report
