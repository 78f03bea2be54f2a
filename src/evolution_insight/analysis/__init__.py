"""Analyzers over the revision model: coupling, churn, hotspots, ownership, age."""

from .age import age, churn_trend, complexity_trend, reference_time
from .churn import churn, revision_frequency
from .coupling import (
    CoChangeCounts,
    count_cochanges,
    coupling_rows,
    logical_coupling,
    temporal_coupling,
    time_windows,
)
from .engine import AnalysisEngine, AnalysisKind, AnalysisResult
from .hotspot import HotspotStrategy, hotspots, unresolved_complexity
from .models import (
    AgeStat,
    AuthorStat,
    ChurnStat,
    ChurnTrendPoint,
    CouplingStat,
    HotspotStat,
    OwnershipStat,
    RevisionFrequency,
    SummaryStat,
    TrendPoint,
)
from .ownership import author_contributions, ownership
from .summary import summary

__all__ = [
    "AgeStat",
    "AnalysisEngine",
    "AnalysisKind",
    "AnalysisResult",
    "AuthorStat",
    "ChurnStat",
    "ChurnTrendPoint",
    "CoChangeCounts",
    "CouplingStat",
    "HotspotStat",
    "HotspotStrategy",
    "OwnershipStat",
    "RevisionFrequency",
    "SummaryStat",
    "TrendPoint",
    "age",
    "author_contributions",
    "churn",
    "churn_trend",
    "complexity_trend",
    "count_cochanges",
    "coupling_rows",
    "hotspots",
    "logical_coupling",
    "ownership",
    "reference_time",
    "revision_frequency",
    "summary",
    "temporal_coupling",
    "time_windows",
    "unresolved_complexity",
]
