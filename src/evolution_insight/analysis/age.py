"""Code age and longitudinal trends.

Age is measured from a reference point: by default the latest revision in
the model, or an explicit ``analysis_reference_time`` for "as of" queries.
If the reference lies before an entity's last change, the age is clamped
to 0 and the row is flagged ``modified_after_reference``.

Trends are exposed as ordered series with per-step deltas; smoothing or
regression is left to the consumer.
"""

from __future__ import annotations

from collections import defaultdict
from typing import Optional

import numpy as np

from ..config import DEFAULT_CONFIG, SECONDS_PER_DAY, AnalysisConfig
from ..history.model import RevisionModel
from ..history.models import ComplexityIndex
from ..logging_config import get_logger
from .models import AgeStat, ChurnTrendPoint, TrendPoint

logger = get_logger(__name__)


def reference_time(model: RevisionModel, config: AnalysisConfig = DEFAULT_CONFIG) -> Optional[int]:
    if config.analysis_reference_time is not None:
        return config.analysis_reference_time
    return model.latest_timestamp


def age(model: RevisionModel, config: AnalysisConfig = DEFAULT_CONFIG) -> list[AgeStat]:
    """Whole days since each entity's last change, oldest first.

    Days are floored. Ties are ordered by entity path.
    """
    reference = reference_time(model, config)
    if reference is None:
        return []

    rows = []
    clamped = 0
    for entity in model.entities:
        last = model.get(model.revision_ids_for(entity)[-1]).timestamp
        elapsed = reference - last
        if elapsed < 0:
            clamped += 1
            rows.append(AgeStat(entity, last, 0, modified_after_reference=True))
        else:
            rows.append(AgeStat(entity, last, int(elapsed // SECONDS_PER_DAY)))

    if clamped:
        logger.info(f"{clamped} entities changed after the reference time; their age is 0")

    rows.sort(key=lambda r: (-r.age_days, r.entity))
    return rows


def complexity_trend(complexity: ComplexityIndex) -> list[TrendPoint]:
    """Chronological complexity samples per entity with step deltas.

    The first sample of an entity has delta 0.0. Samples sharing a timestamp
    keep their input order. Rows are grouped by entity path.
    """
    rows = []
    for entity in sorted(complexity.samples):
        points = sorted(complexity.samples[entity], key=lambda p: p.timestamp)
        if not points:
            continue
        scores = np.array([p.score for p in points], dtype=float)
        deltas = np.concatenate(([0.0], np.diff(scores)))
        rows.extend(
            TrendPoint(entity, p.timestamp, float(p.score), float(d))
            for p, d in zip(points, deltas)
        )
    return rows


def churn_trend(
    model: RevisionModel, config: AnalysisConfig = DEFAULT_CONFIG
) -> list[ChurnTrendPoint]:
    """Added/deleted lines per entity per time window.

    Only windows in which the entity changed are listed. Rows are ordered by
    entity path, then window start.
    """
    window = config.window_seconds
    buckets: dict[tuple[str, int], list[int]] = defaultdict(lambda: [0, 0, 0])
    for rev in model:
        start = int(rev.timestamp // window) * window
        for change in rev.changes:
            acc = buckets[(change.path, start)]
            acc[0] += change.added
            acc[1] += change.deleted
            acc[2] += 1

    return [
        ChurnTrendPoint(entity, start, added, deleted, revisions)
        for (entity, start), (added, deleted, revisions) in sorted(buckets.items())
    ]
