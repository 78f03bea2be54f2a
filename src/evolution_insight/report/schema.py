"""Stable column sets for every report kind.

Each column is a name plus a function reading it from an analyzer row.
Column names are the public contract consumed by formatters.
"""

from __future__ import annotations

from typing import Any, Callable

Column = tuple[str, Callable[[Any], Any]]

_COUPLING: list[Column] = [
    ("entity", lambda r: r.entity_a),
    ("coupled", lambda r: r.entity_b),
    ("degree", lambda r: r.percentage),
    ("cochanges", lambda r: r.cochange_count),
    ("average-revs", lambda r: r.average_revisions),
]

SCHEMAS: dict[str, list[Column]] = {
    "coupling": _COUPLING,
    "temporal-coupling": _COUPLING,
    "churn": [
        ("entity", lambda r: r.entity),
        ("added", lambda r: r.added),
        ("deleted", lambda r: r.deleted),
        ("revisions", lambda r: r.revisions),
    ],
    "revisions": [
        ("entity", lambda r: r.entity),
        ("n-revs", lambda r: r.revisions),
    ],
    "hotspots": [
        ("entity", lambda r: r.entity),
        ("revisions", lambda r: r.revisions),
        ("complexity", lambda r: r.complexity),
        ("score", lambda r: r.score),
        ("complexity-available", lambda r: r.complexity_available),
    ],
    "ownership": [
        ("entity", lambda r: r.entity),
        ("main-dev", lambda r: r.main_developer),
        ("ownership", lambda r: r.ownership_percentage),
        ("fragmentation", lambda r: r.fragmentation),
        ("total-churn", lambda r: r.total_churn),
        ("n-authors", lambda r: r.author_count),
    ],
    "authors": [
        ("author", lambda r: r.author),
        ("revisions", lambda r: r.revisions),
        ("added", lambda r: r.added),
        ("deleted", lambda r: r.deleted),
    ],
    "age": [
        ("entity", lambda r: r.entity),
        ("age-days", lambda r: r.age_days),
        ("last-modified", lambda r: r.last_timestamp),
    ],
    "trend": [
        ("entity", lambda r: r.entity),
        ("timestamp", lambda r: r.timestamp),
        ("complexity", lambda r: r.complexity),
        ("delta", lambda r: r.delta),
    ],
    "churn-trend": [
        ("entity", lambda r: r.entity),
        ("bucket", lambda r: r.bucket_start),
        ("added", lambda r: r.added),
        ("deleted", lambda r: r.deleted),
    ],
    "summary": [
        ("statistic", lambda r: r.statistic),
        ("value", lambda r: r.value),
    ],
}


def columns_for(kind: str) -> list[str]:
    """Column names of a report kind, in output order."""
    return [name for name, _ in SCHEMAS[kind]]
