"""Per-entity change volume over the full history."""

from __future__ import annotations

from collections import defaultdict

from ..history.model import RevisionModel
from .models import ChurnStat, RevisionFrequency


def churn(model: RevisionModel) -> list[ChurnStat]:
    """Added/deleted lines and revision counts per entity, sorted by path.

    Each revision's line counts are attributed entirely to the entity they
    were recorded against, so the per-entity sums over one revision equal
    that revision's input totals.
    """
    added: dict[str, int] = defaultdict(int)
    deleted: dict[str, int] = defaultdict(int)
    revisions: dict[str, int] = defaultdict(int)
    first: dict[str, int] = {}
    last: dict[str, int] = {}

    # Chronological iteration: first assignment is the earliest change
    for rev in model:
        for change in rev.changes:
            path = change.path
            added[path] += change.added
            deleted[path] += change.deleted
            revisions[path] += 1
            first.setdefault(path, rev.timestamp)
            last[path] = rev.timestamp

    return [
        ChurnStat(
            entity=path,
            added=added[path],
            deleted=deleted[path],
            revisions=revisions[path],
            first_timestamp=first[path],
            last_timestamp=last[path],
        )
        for path in sorted(revisions)
    ]


def revision_frequency(model: RevisionModel) -> list[RevisionFrequency]:
    """Number of revisions per entity, most frequently changed first."""
    rows = [RevisionFrequency(entity, len(model.revision_ids_for(entity))) for entity in model.entities]
    rows.sort(key=lambda r: (-r.revisions, r.entity))
    return rows
