"""Base formatter interface for report output."""

import sys
from abc import ABC, abstractmethod
from typing import Optional, TextIO

from ..report import Report


class BaseFormatter(ABC):
    """Abstract base class for output formatters."""

    def render(self, report: Report, stream: Optional[TextIO] = None) -> None:
        """Write the formatted report to ``stream`` (stdout by default)."""
        (stream or sys.stdout).write(self.format(report))

    @abstractmethod
    def format(self, report: Report) -> str:
        """Return formatted string representation of the report."""
