"""Result rows produced by the analyzers.

Every analyzer returns a list of one of these dataclasses, already in the
analyzer's canonical order. Rows are plain data; the report assembler turns
them into ordered columns.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class CouplingStat:
    entity_a: str  # lexicographically smaller path
    entity_b: str
    cochange_count: int  # change sets containing both entities
    revisions_a: int  # change sets containing entity_a
    revisions_b: int
    percentage: float  # cochange_count / min(revisions_a, revisions_b) * 100
    average_revisions: float  # (revisions_a + revisions_b) / 2

    @property
    def key(self) -> tuple[str, str]:
        return (self.entity_a, self.entity_b)


@dataclass(frozen=True)
class ChurnStat:
    entity: str
    added: int
    deleted: int
    revisions: int
    first_timestamp: int
    last_timestamp: int

    @property
    def churn(self) -> int:
        return self.added + self.deleted


@dataclass(frozen=True)
class RevisionFrequency:
    entity: str
    revisions: int


@dataclass(frozen=True)
class HotspotStat:
    entity: str
    revisions: int
    complexity: Optional[float]  # None when the entity could not be measured
    score: float
    complexity_available: bool


@dataclass(frozen=True)
class OwnershipStat:
    entity: str
    main_developer: str
    ownership_share: float  # main developer's fraction of this entity's churn
    ownership_percentage: float  # ownership_share * 100, rounded
    fragmentation: int  # authors whose share >= minor threshold
    total_churn: int
    contributions: dict[str, int] = field(default_factory=dict, compare=False)

    @property
    def author_count(self) -> int:
        return len(self.contributions)

    def shares(self) -> dict[str, float]:
        """Fraction of this entity's churn per author; sums to 1.0 when churn > 0."""
        if self.total_churn == 0:
            return {author: 0.0 for author in self.contributions}
        return {author: lines / self.total_churn for author, lines in self.contributions.items()}


@dataclass(frozen=True)
class AuthorStat:
    author: str
    revisions: int
    added: int
    deleted: int


@dataclass(frozen=True)
class AgeStat:
    entity: str
    last_timestamp: int
    age_days: int
    modified_after_reference: bool = False  # age clamped to 0


@dataclass(frozen=True)
class TrendPoint:
    entity: str
    timestamp: int
    complexity: float
    delta: float  # change since the previous sample of the same entity


@dataclass(frozen=True)
class ChurnTrendPoint:
    entity: str
    bucket_start: int  # unix timestamp of the window start
    added: int
    deleted: int
    revisions: int


@dataclass(frozen=True)
class SummaryStat:
    statistic: str
    value: int
