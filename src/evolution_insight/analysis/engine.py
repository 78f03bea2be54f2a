"""Dispatch over the closed set of analysis kinds.

Each kind maps to one pure function over the shared, read-only
RevisionModel. Analyzers never read each other's output, so ``run_all``
runs them concurrently and joins before returning.
"""

from __future__ import annotations

from collections.abc import Iterable
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Optional

from ..config import DEFAULT_CONFIG, AnalysisConfig
from ..exceptions import EvolutionInsightError
from ..history.model import RevisionModel
from ..history.models import ComplexityIndex
from ..logging_config import get_logger
from .age import age, churn_trend, complexity_trend
from .churn import churn, revision_frequency
from .coupling import logical_coupling, temporal_coupling
from .hotspot import hotspots, unresolved_complexity
from .ownership import author_contributions, ownership
from .summary import summary

logger = get_logger(__name__)


class AnalysisKind(str, Enum):
    LOGICAL_COUPLING = "coupling"
    TEMPORAL_COUPLING = "temporal-coupling"
    CHURN = "churn"
    REVISIONS = "revisions"
    HOTSPOTS = "hotspots"
    OWNERSHIP = "ownership"
    AUTHORS = "authors"
    AGE = "age"
    TREND = "trend"
    CHURN_TREND = "churn-trend"
    SUMMARY = "summary"


@dataclass
class AnalysisResult:
    kind: AnalysisKind
    rows: list[Any]
    warnings: list[EvolutionInsightError] = field(default_factory=list)


_Analyzer = Callable[["AnalysisEngine"], list]

_ANALYZERS: dict[AnalysisKind, _Analyzer] = {
    AnalysisKind.LOGICAL_COUPLING: lambda e: logical_coupling(e.model, e.config),
    AnalysisKind.TEMPORAL_COUPLING: lambda e: temporal_coupling(e.model, e.config),
    AnalysisKind.CHURN: lambda e: churn(e.model),
    AnalysisKind.REVISIONS: lambda e: revision_frequency(e.model),
    AnalysisKind.HOTSPOTS: lambda e: hotspots(e.model, e.complexity, e.config),
    AnalysisKind.OWNERSHIP: lambda e: ownership(e.model, e.config),
    AnalysisKind.AUTHORS: lambda e: author_contributions(e.model),
    AnalysisKind.AGE: lambda e: age(e.model, e.config),
    AnalysisKind.TREND: lambda e: complexity_trend(e.complexity),
    AnalysisKind.CHURN_TREND: lambda e: churn_trend(e.model, e.config),
    AnalysisKind.SUMMARY: lambda e: summary(e.model),
}


class AnalysisEngine:
    """Runs analyses against one ingested model."""

    def __init__(
        self,
        model: RevisionModel,
        config: AnalysisConfig = DEFAULT_CONFIG,
        complexity: Optional[ComplexityIndex] = None,
    ):
        self.model = model
        self.config = config
        self.complexity = complexity if complexity is not None else ComplexityIndex()

    def run(self, kind: AnalysisKind | str) -> AnalysisResult:
        kind = AnalysisKind(kind)
        rows = _ANALYZERS[kind](self)
        warnings: list[EvolutionInsightError] = []
        if kind is AnalysisKind.HOTSPOTS:
            warnings.extend(unresolved_complexity(self.model, self.complexity))
        logger.debug(f"{kind.value}: {len(rows)} rows")
        return AnalysisResult(kind=kind, rows=rows, warnings=warnings)

    def run_all(
        self, kinds: Iterable[AnalysisKind | str], max_workers: Optional[int] = None
    ) -> dict[AnalysisKind, AnalysisResult]:
        """Run several analyses concurrently.

        All-or-nothing: if any analyzer fails, pending ones are cancelled and
        the first error propagates; no partial results are returned.
        """
        ordered = list(dict.fromkeys(AnalysisKind(k) for k in kinds))
        if not ordered:
            return {}

        with ThreadPoolExecutor(max_workers=max_workers or len(ordered)) as executor:
            futures = {kind: executor.submit(self.run, kind) for kind in ordered}
            done, pending = wait(futures.values(), return_when=FIRST_EXCEPTION)
            for future in done:
                error = future.exception()
                if error is not None:
                    for other in pending:
                        other.cancel()
                    raise error
            return {kind: futures[kind].result() for kind in ordered}
