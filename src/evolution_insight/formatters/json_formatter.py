"""JSON formatter: an array of objects keyed by column name."""

import json

from .base import BaseFormatter
from ..report import Report


class JsonFormatter(BaseFormatter):
    """Render reports as pretty-printed JSON."""

    def format(self, report: Report) -> str:
        data = [{c: row[c] for c in report.columns} for row in report.rows]
        return json.dumps(data, indent=2) + "\n"
