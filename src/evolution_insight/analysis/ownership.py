"""Per-entity ownership and knowledge fragmentation.

An author's contribution to an entity is the added plus deleted lines of
every revision they made to it. Shares are always fractions of that entity's
own churn, never of the repository's.
"""

from __future__ import annotations

from collections import defaultdict

from ..config import DEFAULT_CONFIG, AnalysisConfig
from ..history.model import RevisionModel
from .models import AuthorStat, OwnershipStat


def ownership(
    model: RevisionModel, config: AnalysisConfig = DEFAULT_CONFIG
) -> list[OwnershipStat]:
    """Main developer, their share and the fragmentation count per entity.

    The main developer has the largest contribution; ties go to the author
    who contributed first, then to the smaller author name. Fragmentation
    counts authors whose share is at least ``minor_ownership_threshold``.
    An entity whose revisions all have zero lines reports its first
    contributor with share 0.0 and fragmentation 0.

    Rows are sorted by entity path.
    """
    threshold = config.minor_ownership_threshold
    rows = []
    for entity in model.entities:
        contributions: dict[str, int] = defaultdict(int)
        first_seen: dict[str, int] = {}
        # revisions_for is chronological, so position is first-contribution order
        for order, rev in enumerate(model.revisions_for(entity)):
            for change in rev.changes:
                if change.path == entity:
                    contributions[rev.author] += change.churn
            first_seen.setdefault(rev.author, order)

        total = sum(contributions.values())
        main = min(
            contributions,
            key=lambda author: (-contributions[author], first_seen[author], author),
        )
        if total > 0:
            share = contributions[main] / total
            fragmentation = sum(1 for lines in contributions.values() if lines / total >= threshold)
        else:
            share = 0.0
            fragmentation = 0

        rows.append(
            OwnershipStat(
                entity=entity,
                main_developer=main,
                ownership_share=share,
                ownership_percentage=round(share * 100, config.rounding_precision),
                fragmentation=fragmentation,
                total_churn=total,
                contributions=dict(contributions),
            )
        )
    return rows


def author_contributions(model: RevisionModel) -> list[AuthorStat]:
    """Revisions and line totals per author, most active first."""
    rows = []
    for author in model.authors:
        revs = model.revisions_by(author)
        rows.append(
            AuthorStat(
                author=author,
                revisions=len(revs),
                added=sum(r.added for r in revs),
                deleted=sum(r.deleted for r in revs),
            )
        )
    rows.sort(key=lambda r: (-r.revisions, r.author))
    return rows
