"""Shape analyzer results into ordered rows for the formatters.

Assembly never recomputes anything: it projects rows onto the report's
columns, optionally re-sorts them by one column and truncates.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any, Optional

from ..exceptions import ConfigurationRangeError, UnknownFieldError
from .schema import SCHEMAS, columns_for


@dataclass
class Report:
    kind: str
    columns: list[str]
    rows: list[dict[str, Any]] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.rows)


def validate_request(kind: str, sort_by: Optional[str] = None, limit: Optional[int] = None) -> None:
    """Reject an unknown report, sort field or negative limit before any work runs.

    Raises:
        UnknownFieldError: If ``kind`` has no schema or ``sort_by`` is not one
            of its columns.
        ConfigurationRangeError: If ``limit`` is negative.
    """
    if kind not in SCHEMAS:
        raise UnknownFieldError(kind, "analysis", sorted(SCHEMAS))
    if sort_by is not None:
        allowed = columns_for(kind)
        if sort_by not in allowed:
            raise UnknownFieldError(sort_by, kind, allowed)
    if limit is not None and limit < 0:
        raise ConfigurationRangeError("limit", limit, "must be non-negative")


def assemble(
    kind: str,
    results: Sequence[Any],
    sort_by: Optional[str] = None,
    descending: bool = False,
    limit: Optional[int] = None,
) -> Report:
    """Project analyzer rows onto the report columns.

    Without ``sort_by`` the analyzer's own order is kept. With it, rows are
    stably sorted by that column (so ties keep the analyzer's order) and
    empty values always go last.
    """
    validate_request(kind, sort_by, limit)

    schema = SCHEMAS[kind]
    rows = [{name: get(result) for name, get in schema} for result in results]

    if sort_by is not None:
        present = [r for r in rows if r[sort_by] is not None]
        missing = [r for r in rows if r[sort_by] is None]
        present.sort(key=lambda r: r[sort_by], reverse=descending)
        rows = present + missing

    if limit is not None:
        rows = rows[:limit]

    return Report(kind=kind, columns=[name for name, _ in schema], rows=rows)
