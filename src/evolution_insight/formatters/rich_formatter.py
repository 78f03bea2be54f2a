"""Rich formatter: a terminal table."""

import io
from typing import Optional, TextIO

from rich.console import Console
from rich.table import Table

from .base import BaseFormatter
from ..report import Report

_NUMERIC = (int, float)


class RichFormatter(BaseFormatter):
    """Render reports as a rich table."""

    def render(self, report: Report, stream: Optional[TextIO] = None) -> None:
        console = Console(file=stream) if stream is not None else Console()
        console.print(self._table(report))

    def format(self, report: Report) -> str:
        buffer = io.StringIO()
        Console(file=buffer, width=160, color_system=None).print(self._table(report))
        return buffer.getvalue()

    def _table(self, report: Report) -> Table:
        table = Table(title=report.kind, show_header=True, header_style="bold cyan")
        first = report.rows[0] if report.rows else {}
        for column in report.columns:
            numeric = isinstance(first.get(column), _NUMERIC) and not isinstance(
                first.get(column), bool
            )
            table.add_column(column, justify="right" if numeric else "left")
        for row in report.rows:
            table.add_row(*("-" if row[c] is None else str(row[c]) for c in report.columns))
        return table
