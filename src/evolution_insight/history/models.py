"""Data models for the revision history."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class FileChange:
    path: str
    added: int
    deleted: int

    @property
    def churn(self) -> int:
        return self.added + self.deleted


@dataclass(frozen=True)
class Revision:
    """One commit: who changed which entities, when, and by how many lines."""

    rev_id: str
    author: str
    timestamp: int  # unix seconds
    changes: tuple[FileChange, ...]
    message: str = ""  # commit subject, used only by message filtering

    @property
    def entities(self) -> tuple[str, ...]:
        return tuple(c.path for c in self.changes)

    @property
    def added(self) -> int:
        return sum(c.added for c in self.changes)

    @property
    def deleted(self) -> int:
        return sum(c.deleted for c in self.changes)


EntityPairKey = tuple[str, str]


def pair_key(a: str, b: str) -> EntityPairKey:
    """Canonical key for an unordered entity pair.

    (a, b) and (b, a) map to the same key: the lexicographically smaller
    path always comes first.
    """
    if a == b:
        raise ValueError(f"An entity cannot be paired with itself: {a!r}")
    return (a, b) if a < b else (b, a)


@dataclass(frozen=True)
class ComplexityTrendPoint:
    timestamp: int
    score: float


@dataclass
class ComplexityIndex:
    """Externally computed complexity, joined to entities by path.

    ``scores`` holds the snapshot score used for hotspots; ``samples`` holds
    timestamped measurements for trend analysis.
    """

    scores: dict[str, float] = field(default_factory=dict)
    samples: dict[str, list[ComplexityTrendPoint]] = field(default_factory=dict)

    def score(self, entity: str) -> float | None:
        if entity in self.scores:
            return self.scores[entity]
        points = self.samples.get(entity)
        if points:
            return max(points, key=lambda p: p.timestamp).score
        return None

    def add_sample(self, entity: str, timestamp: int, score: float) -> None:
        self.samples.setdefault(entity, []).append(ComplexityTrendPoint(timestamp, score))

    def __contains__(self, entity: object) -> bool:
        return entity in self.scores or bool(self.samples.get(entity))  # type: ignore[arg-type]

    def __len__(self) -> int:
        return len(set(self.scores) | {e for e, pts in self.samples.items() if pts})
