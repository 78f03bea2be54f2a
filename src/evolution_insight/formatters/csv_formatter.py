"""CSV formatter: header line of column names, one line per row."""

import csv
import io

from .base import BaseFormatter
from ..report import Report


class CsvFormatter(BaseFormatter):
    """Render reports as CSV."""

    def format(self, report: Report) -> str:
        output = io.StringIO()
        writer = csv.writer(output, lineterminator="\n")
        writer.writerow(report.columns)
        for row in report.rows:
            writer.writerow(["" if row[c] is None else row[c] for c in report.columns])
        return output.getvalue()
