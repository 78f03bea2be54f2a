"""Analysis-related exceptions: malformed history, missing complexity, bad input."""

from typing import Optional

from .base import EvolutionInsightError


class AnalysisError(EvolutionInsightError):
    """Base class for analysis-related errors."""

    kind = "analysis"


class MalformedRevisionError(AnalysisError):
    """Raised when a revision record cannot be ingested.

    Ingestion aborts on the first malformed revision; no partial model is
    ever returned.
    """

    kind = "malformed_revision"

    def __init__(self, rev_id: str, reason: str, entity: Optional[str] = None):
        details = {"revision": str(rev_id), "reason": reason}
        if entity is not None:
            details["entity"] = entity
        super().__init__(f"Malformed revision: {rev_id}", details=details)
        self.rev_id = rev_id
        self.reason = reason
        self.entity = entity


class UnresolvedComplexityError(AnalysisError):
    """An entity has no complexity score.

    Not fatal: hotspot analysis collects these and degrades the affected rows
    to churn-only ranking.
    """

    kind = "unresolved_complexity"

    def __init__(self, entity: str):
        super().__init__(
            f"No complexity data for entity: {entity}",
            details={"entity": entity},
        )
        self.entity = entity


class InvalidInputError(AnalysisError):
    """Raised when a revision log or complexity file cannot be read."""

    kind = "invalid_input"

    def __init__(self, source: str, reason: str):
        super().__init__(
            f"Invalid input: {source}",
            details={"source": str(source), "reason": reason},
        )
        self.source = source
        self.reason = reason
