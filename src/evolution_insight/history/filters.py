"""Revision filters applied before ingestion: date range and message text."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from datetime import datetime, timezone
from typing import Optional

from ..exceptions import ConfigurationRangeError
from .models import Revision


def parse_iso_date(value: str) -> int:
    """Convert ``YYYY-MM-DD`` to the unix timestamp of that day's UTC midnight."""
    try:
        day = datetime.strptime(value, "%Y-%m-%d")
    except ValueError:
        raise ConfigurationRangeError("date", value, "expected YYYY-MM-DD") from None
    return int(day.replace(tzinfo=timezone.utc).timestamp())


def filter_revisions(
    revisions: Iterable[Revision],
    after: Optional[int] = None,
    before: Optional[int] = None,
    grep: Optional[str] = None,
) -> Iterator[Revision]:
    """Yield revisions with ``after <= timestamp < before`` whose message contains ``grep``.

    Unset bounds do not filter. With ``grep`` set, revisions without a
    message are dropped.
    """
    for rev in revisions:
        if after is not None and rev.timestamp < after:
            continue
        if before is not None and rev.timestamp >= before:
            continue
        if grep is not None and grep not in rev.message:
            continue
        yield rev
