"""Base exception for Evolution Insight."""

from typing import Any, Dict, Optional


class EvolutionInsightError(Exception):
    """Base exception for all Evolution Insight errors.

    Every error carries a ``kind`` tag and a ``details`` mapping naming the
    offending input (revision id, entity path, config key), so callers can
    report precisely what went wrong.
    """

    kind = "error"

    def __init__(self, message: str, details: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """Structured form for logging and CLI output."""
        return {
            "kind": self.kind,
            "message": self.message,
            "details": dict(self.details),
        }
