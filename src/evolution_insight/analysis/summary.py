"""Repository-level summary statistics."""

from __future__ import annotations

from ..history.model import RevisionModel
from .models import SummaryStat


def summary(model: RevisionModel) -> list[SummaryStat]:
    """Headline counts over the ingested history.

    ``number-of-entities-changed`` counts entity versions: every
    (entity, revision) change recorded in the history.
    """
    changes = sum(len(rev.changes) for rev in model)
    return [
        SummaryStat("number-of-commits", len(model)),
        SummaryStat("number-of-authors", len(model.authors)),
        SummaryStat("number-of-entities", len(model.entities)),
        SummaryStat("number-of-entities-changed", changes),
        SummaryStat("first-commit", int(model.first_timestamp or 0)),
        SummaryStat("last-commit", int(model.latest_timestamp or 0)),
    ]
