"""Exception hierarchy for Evolution Insight."""

from .analysis import (
    AnalysisError,
    InvalidInputError,
    MalformedRevisionError,
    UnresolvedComplexityError,
)
from .base import EvolutionInsightError
from .config import (
    ConfigurationError,
    ConfigurationRangeError,
    UnknownFieldError,
)

__all__ = [
    "EvolutionInsightError",
    "AnalysisError",
    "MalformedRevisionError",
    "UnresolvedComplexityError",
    "InvalidInputError",
    "ConfigurationError",
    "ConfigurationRangeError",
    "UnknownFieldError",
]
