"""Hotspots: entities that change often and are hard to reason about.

Change frequency (revision count) is combined with an externally supplied
complexity score. Two combination strategies are available; both are
monotonic: raising an entity's revisions or its complexity, with the other
factor fixed, never lowers that entity's score relative to any other entity.

- ``multiplicative``: score = revisions * complexity. With non-negative
  inputs the product is non-decreasing in each factor, and no other
  entity's score changes.
- ``rank_sum``: score = dense rank of revisions + dense rank of complexity,
  ranks ascending from 1 over the entities that have complexity data. Raising
  one value of an entity can only keep or raise its own dense rank, and can
  only keep or lower the rank of any entity it overtakes, so the entity's
  standing never drops.

Entities without complexity data are reported with churn alone
(score = revisions) and flagged, ranked after every measured entity.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Optional

from ..config import DEFAULT_CONFIG, AnalysisConfig
from ..exceptions import InvalidInputError, UnresolvedComplexityError
from ..history.model import RevisionModel
from ..history.models import ComplexityIndex
from ..logging_config import get_logger
from .models import HotspotStat

logger = get_logger(__name__)


class HotspotStrategy(str, Enum):
    MULTIPLICATIVE = "multiplicative"
    RANK_SUM = "rank_sum"


def hotspots(
    model: RevisionModel,
    complexity: ComplexityIndex,
    config: AnalysisConfig = DEFAULT_CONFIG,
) -> list[HotspotStat]:
    """Rank entities by churn combined with complexity.

    Order: measured entities first, then score descending, revisions
    descending, entity path ascending.

    Raises:
        InvalidInputError: If a complexity score is negative.
    """
    strategy = HotspotStrategy(config.hotspot_strategy)
    revisions = {entity: len(model.revision_ids_for(entity)) for entity in model.entities}

    measured: dict[str, float] = {}
    for entity in revisions:
        score = _resolve(complexity, entity)
        if score is not None:
            measured[entity] = score

    unresolved = unresolved_complexity(model, complexity)
    if unresolved:
        logger.warning(
            f"{len(unresolved)} of {len(revisions)} entities have no complexity data; "
            "ranking them by churn only"
        )

    if strategy is HotspotStrategy.MULTIPLICATIVE:
        scores = {entity: revisions[entity] * c for entity, c in measured.items()}
    else:
        churn_rank = _dense_ranks({e: float(revisions[e]) for e in measured})
        complexity_rank = _dense_ranks(measured)
        scores = {e: float(churn_rank[e] + complexity_rank[e]) for e in measured}

    rows = []
    for entity, revs in revisions.items():
        available = entity in measured
        rows.append(
            HotspotStat(
                entity=entity,
                revisions=revs,
                complexity=measured.get(entity),
                score=round(scores[entity], config.rounding_precision)
                if available
                else float(revs),
                complexity_available=available,
            )
        )
    rows.sort(key=lambda r: (not r.complexity_available, -r.score, -r.revisions, r.entity))
    return rows


def unresolved_complexity(
    model: RevisionModel, complexity: ComplexityIndex
) -> list[UnresolvedComplexityError]:
    """One non-fatal error per entity lacking a usable complexity score."""
    return [
        UnresolvedComplexityError(entity)
        for entity in model.entities
        if _resolve(complexity, entity) is None
    ]


def _resolve(complexity: ComplexityIndex, entity: str) -> Optional[float]:
    score = complexity.score(entity)
    if score is None or math.isnan(score):
        return None
    if score < 0:
        raise InvalidInputError(entity, f"negative complexity score: {score}")
    return float(score)


def _dense_ranks(values: dict[str, float]) -> dict[str, int]:
    """Rank 1 for the smallest value; equal values share a rank."""
    distinct = sorted(set(values.values()))
    rank_of = {v: i + 1 for i, v in enumerate(distinct)}
    return {key: rank_of[v] for key, v in values.items()}
