"""Immutable, indexed in-memory model of a revision stream.

The model is built once, in a single forward pass over the input, and is
read-only afterwards so analyzers on different threads can share it.

Entity identity is the path string exactly as it appears in the input.
Renames are not resolved here: a collaborator that wants a renamed file
counted as one entity must rewrite the paths before ingestion.
"""

from __future__ import annotations

import math
from collections import defaultdict
from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import replace
from types import MappingProxyType
from typing import Any, Optional

from ..exceptions import MalformedRevisionError
from ..logging_config import get_logger
from .models import FileChange, Revision

logger = get_logger(__name__)


class RevisionModel:
    """Chronologically indexed revisions with entity and author lookups.

    Revisions are ordered by timestamp; ties keep ingestion order.
    """

    def __init__(
        self,
        revisions: Sequence[Revision],
        by_entity: Mapping[str, tuple[str, ...]],
        by_author: Mapping[str, tuple[str, ...]],
    ):
        self._revisions = tuple(revisions)
        self._by_id = MappingProxyType({r.rev_id: r for r in self._revisions})
        self._by_entity = MappingProxyType(dict(by_entity))
        self._by_author = MappingProxyType(dict(by_author))

    # ── Construction ───────────────────────────────────────────────

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, Any]]) -> RevisionModel:
        """Build a model from plain mappings (e.g. decoded JSON).

        Each record needs ``id`` (or ``rev_id``), ``author``, ``timestamp``
        and ``changes``; a change is ``{"path", "added", "deleted"}`` or a
        ``[path, added, deleted]`` triple. ``message`` is optional.
        """
        return ingest(revision_from_record(r, i) for i, r in enumerate(records))

    # ── Read-only views ────────────────────────────────────────────

    @property
    def revisions(self) -> tuple[Revision, ...]:
        """All revisions, oldest first."""
        return self._revisions

    def __iter__(self) -> Iterator[Revision]:
        return iter(self._revisions)

    def __len__(self) -> int:
        return len(self._revisions)

    def __bool__(self) -> bool:
        return bool(self._revisions)

    @property
    def entities(self) -> list[str]:
        return sorted(self._by_entity)

    @property
    def authors(self) -> list[str]:
        return sorted(self._by_author)

    def get(self, rev_id: str) -> Revision:
        return self._by_id[rev_id]

    def revisions_for(self, entity: str) -> list[Revision]:
        """Revisions touching ``entity``, oldest first. Unknown entity → []."""
        return [self._by_id[rid] for rid in self._by_entity.get(entity, ())]

    def revision_ids_for(self, entity: str) -> tuple[str, ...]:
        return self._by_entity.get(entity, ())

    def revisions_by(self, author: str) -> list[Revision]:
        """Revisions authored by ``author``, oldest first."""
        return [self._by_id[rid] for rid in self._by_author.get(author, ())]

    @property
    def first_timestamp(self) -> Optional[int]:
        return self._revisions[0].timestamp if self._revisions else None

    @property
    def latest_timestamp(self) -> Optional[int]:
        if not self._revisions:
            return None
        # Ties keep ingestion order, so the last revision holds the maximum
        return self._revisions[-1].timestamp

    def shards(self, count: int) -> list[tuple[Revision, ...]]:
        """Split the chronology into at most ``count`` contiguous slices.

        Used to spread work across a worker pool; every revision lands in
        exactly one shard.
        """
        if count < 1:
            raise ValueError("shard count must be at least 1")
        total = len(self._revisions)
        if total == 0:
            return []
        count = min(count, total)
        size, extra = divmod(total, count)
        result = []
        start = 0
        for i in range(count):
            end = start + size + (1 if i < extra else 0)
            result.append(self._revisions[start:end])
            start = end
        return result

    def __repr__(self) -> str:
        return (
            f"RevisionModel(revisions={len(self._revisions)}, "
            f"entities={len(self._by_entity)}, authors={len(self._by_author)})"
        )


class RevisionModelBuilder:
    """Incremental, single-threaded construction of a RevisionModel.

    ``add`` validates each revision as it arrives; ``build`` sorts and
    indexes. A builder that raised is left unusable on purpose: callers
    must not build a model from a stream that contained a bad record.
    """

    def __init__(self) -> None:
        self._revisions: list[Revision] = []
        self._seen_ids: set[str] = set()
        self._failed = False

    def add(self, revision: Revision) -> None:
        if self._failed:
            raise RuntimeError("builder is unusable after a malformed revision")
        try:
            revision = _validate(revision)
            if revision.rev_id in self._seen_ids:
                raise MalformedRevisionError(revision.rev_id, "duplicate revision identifier")
        except MalformedRevisionError:
            self._failed = True
            raise
        self._seen_ids.add(revision.rev_id)
        self._revisions.append(revision)

    def extend(self, revisions: Iterable[Revision]) -> None:
        for revision in revisions:
            self.add(revision)

    def build(self) -> RevisionModel:
        if self._failed:
            raise RuntimeError("builder is unusable after a malformed revision")

        # sorted() is stable, so equal timestamps keep ingestion order
        ordered = sorted(self._revisions, key=lambda r: r.timestamp)

        by_entity: dict[str, list[str]] = defaultdict(list)
        by_author: dict[str, list[str]] = defaultdict(list)
        for rev in ordered:
            by_author[rev.author].append(rev.rev_id)
            for change in rev.changes:
                by_entity[change.path].append(rev.rev_id)

        model = RevisionModel(
            ordered,
            {k: tuple(v) for k, v in by_entity.items()},
            {k: tuple(v) for k, v in by_author.items()},
        )
        logger.debug(f"Ingested {model!r}")
        return model


def ingest(revisions: Iterable[Revision]) -> RevisionModel:
    """Validate and index a revision stream.

    Input may arrive in any order; it is sorted chronologically here.

    Raises:
        MalformedRevisionError: On the first revision with a non-positive or
            unsortable timestamp, an empty change set, a negative line delta,
            an empty path, or a duplicate identifier. No model is returned.
    """
    builder = RevisionModelBuilder()
    builder.extend(revisions)
    return builder.build()


def _validate(revision: Revision) -> Revision:
    rev_id = revision.rev_id
    ts = revision.timestamp

    if not isinstance(rev_id, str) or not rev_id:
        raise MalformedRevisionError(str(rev_id), "revision identifier must be a non-empty string")
    if not isinstance(revision.author, str):
        raise MalformedRevisionError(rev_id, "author must be a string")
    if isinstance(ts, bool) or not isinstance(ts, (int, float)):
        raise MalformedRevisionError(rev_id, f"unsortable timestamp: {ts!r}")
    if not math.isfinite(ts) or ts <= 0:
        raise MalformedRevisionError(rev_id, f"non-positive timestamp: {ts!r}")
    if not revision.changes:
        raise MalformedRevisionError(rev_id, "empty change set")

    merged: dict[str, FileChange] = {}
    for change in revision.changes:
        path = change.path
        if not isinstance(path, str) or not path:
            raise MalformedRevisionError(rev_id, "entity path must be a non-empty string")
        for label, value in (("added", change.added), ("deleted", change.deleted)):
            if isinstance(value, bool) or not isinstance(value, int):
                raise MalformedRevisionError(
                    rev_id, f"{label} lines must be an integer, got {value!r}", entity=path
                )
            if value < 0:
                raise MalformedRevisionError(
                    rev_id, f"negative {label} lines: {value}", entity=path
                )
        if path in merged:
            prev = merged[path]
            merged[path] = FileChange(path, prev.added + change.added, prev.deleted + change.deleted)
        else:
            merged[path] = change

    if len(merged) != len(revision.changes):
        logger.debug(f"Revision {rev_id}: merged repeated paths in change set")
        return replace(revision, changes=tuple(merged.values()))
    return revision


def revision_from_record(record: Mapping[str, Any], index: int = 0) -> Revision:
    """Convert one plain mapping into a Revision.

    Structural problems (missing keys, wrong shapes) raise
    MalformedRevisionError naming the record; value checks happen in ingest.
    """
    if not isinstance(record, Mapping):
        raise MalformedRevisionError(f"#{index}", "record must be a mapping")

    rev_id = record.get("id", record.get("rev_id"))
    label = str(rev_id) if rev_id is not None else f"#{index}"
    if rev_id is None:
        raise MalformedRevisionError(label, "missing revision identifier")
    if "author" not in record:
        raise MalformedRevisionError(label, "missing author")
    if "timestamp" not in record:
        raise MalformedRevisionError(label, "missing timestamp")

    timestamp = record["timestamp"]
    if isinstance(timestamp, str):
        try:
            timestamp = int(timestamp)
        except ValueError:
            raise MalformedRevisionError(label, f"unsortable timestamp: {timestamp!r}") from None

    raw_changes = record.get("changes", ())
    if not isinstance(raw_changes, (list, tuple)):
        raise MalformedRevisionError(label, "changes must be a list")

    changes = []
    for raw in raw_changes:
        if isinstance(raw, Mapping):
            try:
                changes.append(FileChange(raw["path"], raw.get("added", 0), raw.get("deleted", 0)))
            except KeyError:
                raise MalformedRevisionError(label, "change is missing 'path'") from None
        elif isinstance(raw, (list, tuple)) and len(raw) == 3:
            changes.append(FileChange(raw[0], raw[1], raw[2]))
        else:
            raise MalformedRevisionError(label, f"unrecognized change entry: {raw!r}")

    return Revision(
        rev_id=str(rev_id),
        author=str(record["author"]),
        timestamp=timestamp,
        changes=tuple(changes),
        message=str(record.get("message", "")),
    )
