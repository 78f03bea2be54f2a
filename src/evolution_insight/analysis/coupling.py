"""Logical and temporal coupling from co-change counts.

Two entities are coupled when they keep appearing in the same change set.
For logical coupling a change set is one revision; for temporal coupling it
is every entity touched inside one time bucket, whoever the author.

Counting is a reduction over change sets: each worker fills a private
CoChangeCounts and the partials are merged with plain counter addition.
The merge is associative and commutative, so the result does not depend
on how the work was partitioned.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from functools import partial, reduce
from itertools import combinations
from typing import Callable, Optional

from ..config import DEFAULT_CONFIG, AnalysisConfig
from ..history.model import RevisionModel
from ..logging_config import get_logger
from .models import CouplingStat

logger = get_logger(__name__)

ChangeSet = Sequence[str]
Window = tuple[frozenset, frozenset]  # (touched, pairable) entities of one bucket


@dataclass
class CoChangeCounts:
    """Partial co-change aggregate over some change sets."""

    pairs: Counter = field(default_factory=Counter)  # (a, b) with a < b -> count
    entity_totals: Counter = field(default_factory=Counter)  # entity -> change sets
    change_sets: int = 0
    skipped: int = 0  # change sets too large to expand into pairs

    def add(self, entities: Iterable[str], max_entities: int) -> None:
        unique = sorted(set(entities))
        self.change_sets += 1
        self.entity_totals.update(unique)
        if len(unique) > max_entities:
            self.skipped += 1
            return
        # sorted input yields canonical (smaller, larger) keys
        self.pairs.update(combinations(unique, 2))

    def add_window(self, touched: Iterable[str], pairable: Iterable[str]) -> None:
        """Count one time window.

        Every entity in ``touched`` counts towards its total; only ``pairable``
        entities, those changed by commits under the size cutoff, form pairs.
        """
        self.change_sets += 1
        self.entity_totals.update(set(touched))
        self.pairs.update(combinations(sorted(set(pairable)), 2))

    def merge(self, other: CoChangeCounts) -> CoChangeCounts:
        """Return the sum of two partials; neither operand is modified."""
        return CoChangeCounts(
            pairs=self.pairs + other.pairs,
            entity_totals=self.entity_totals + other.entity_totals,
            change_sets=self.change_sets + other.change_sets,
            skipped=self.skipped + other.skipped,
        )


def count_cochanges(change_sets: Iterable[ChangeSet], max_entities: int) -> CoChangeCounts:
    """Count entity pairs over change sets.

    Change sets with more than ``max_entities`` entities still add to each
    entity's total but contribute no pairs.
    """
    counts = CoChangeCounts()
    for entities in change_sets:
        counts.add(entities, max_entities)
    return counts


def logical_coupling(
    model: RevisionModel,
    config: AnalysisConfig = DEFAULT_CONFIG,
    workers: Optional[int] = None,
) -> list[CouplingStat]:
    """Coupling between entities changed in the same revision."""
    workers = workers if workers is not None else config.workers
    if workers and workers > 1:
        chunks = [[rev.entities for rev in shard] for shard in model.shards(workers)]
    else:
        chunks = [[rev.entities for rev in model]]

    counts = _reduce(
        chunks, partial(count_cochanges, max_entities=config.max_entities_per_commit), workers
    )
    logger.debug(
        f"Logical coupling: {counts.change_sets} revisions, "
        f"{counts.skipped} skipped as too large, {len(counts.pairs)} pairs"
    )
    return coupling_rows(counts, config)


def temporal_coupling(
    model: RevisionModel,
    config: AnalysisConfig = DEFAULT_CONFIG,
    workers: Optional[int] = None,
) -> list[CouplingStat]:
    """Coupling between entities changed within the same time bucket.

    The bucket key is the revision timestamp truncated to the configured
    window (``timestamp // window_seconds``, UTC). Per-entity totals count
    the buckets an entity appears in.

    The size cutoff applies to each revision, not to the bucket: a revision
    touching more than ``max_entities_per_commit`` entities still counts
    towards its entities' totals but pairs nothing. Entities from the other
    revisions of the bucket are paired without a cap.
    """
    workers = workers if workers is not None else config.workers
    windows, skipped = time_windows(
        model, config.window_seconds, config.max_entities_per_commit
    )

    if workers and workers > 1:
        chunks = _partition(windows, workers)
    else:
        chunks = [windows]

    counts = _reduce(chunks, _count_windows, workers)
    counts.skipped = skipped
    logger.debug(
        f"Temporal coupling: {counts.change_sets} buckets of {config.window_seconds}s, "
        f"{skipped} revisions skipped as too large, {len(counts.pairs)} pairs"
    )
    return coupling_rows(counts, config)


def time_windows(
    model: RevisionModel, window_seconds: int, max_entities: int
) -> tuple[list[Window], int]:
    """Group entities by truncated revision timestamp.

    Returns one ``(touched, pairable)`` pair per bucket in chronological
    order, plus the number of revisions over ``max_entities``. Entities of
    such revisions are touched but not pairable.
    """
    touched: dict[int, set[str]] = {}
    pairable: dict[int, set[str]] = {}
    skipped = 0
    for rev in model:
        key = int(rev.timestamp // window_seconds)
        entities = set(rev.entities)
        touched.setdefault(key, set()).update(entities)
        bucket = pairable.setdefault(key, set())
        if len(entities) > max_entities:
            skipped += 1
        else:
            bucket.update(entities)
    windows = [(frozenset(touched[key]), frozenset(pairable[key])) for key in sorted(touched)]
    return windows, skipped


def coupling_rows(counts: CoChangeCounts, config: AnalysisConfig) -> list[CouplingStat]:
    """Apply thresholds and the canonical order to aggregated counts.

    Order: co-change count descending, then pair key ascending.
    """
    precision = config.rounding_precision
    rows = []
    for (a, b), cochanges in counts.pairs.items():
        if cochanges < config.min_coupling_count:
            continue
        revs_a = counts.entity_totals[a]
        revs_b = counts.entity_totals[b]
        percentage = round(cochanges / min(revs_a, revs_b) * 100, precision)
        if percentage < config.min_coupling_percentage:
            continue
        rows.append(
            CouplingStat(
                entity_a=a,
                entity_b=b,
                cochange_count=cochanges,
                revisions_a=revs_a,
                revisions_b=revs_b,
                percentage=percentage,
                average_revisions=round((revs_a + revs_b) / 2, precision),
            )
        )
    rows.sort(key=lambda r: (-r.cochange_count, r.entity_a, r.entity_b))
    return rows


def _count_windows(windows: Iterable[Window]) -> CoChangeCounts:
    counts = CoChangeCounts()
    for touched, pairable in windows:
        counts.add_window(touched, pairable)
    return counts


def _reduce(
    chunks: list[list], count: Callable[[list], CoChangeCounts], workers: Optional[int]
) -> CoChangeCounts:
    if not chunks:
        return CoChangeCounts()
    if len(chunks) == 1 or not workers or workers < 2:
        partials = [count(chunk) for chunk in chunks]
    else:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = [executor.submit(count, chunk) for chunk in chunks]
            partials = [future.result() for future in futures]
    return reduce(CoChangeCounts.merge, partials, CoChangeCounts())


def _partition(items: list, count: int) -> list[list]:
    if not items:
        return []
    count = min(count, len(items))
    size, extra = divmod(len(items), count)
    chunks = []
    start = 0
    for i in range(count):
        end = start + size + (1 if i < extra else 0)
        chunks.append(items[start:end])
        start = end
    return chunks
