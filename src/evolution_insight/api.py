"""Public API for Evolution Insight.

Example:
    >>> from evolution_insight import analyze
    >>> report = analyze(revisions, "coupling", min_coupling_count=2)
    >>> report.columns
    ['entity', 'coupled', 'degree', 'cochanges', 'average-revs']
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, Optional

from .analysis.engine import AnalysisEngine, AnalysisKind
from .config import DEFAULT_CONFIG, AnalysisConfig
from .history.filters import filter_revisions
from .history.model import RevisionModel, ingest
from .history.models import ComplexityIndex, Revision
from .logging_config import get_logger, log_errors
from .report.assembler import Report, assemble, validate_request

logger = get_logger(__name__)


def build_model(
    revisions: Iterable[Revision], config: AnalysisConfig = DEFAULT_CONFIG
) -> RevisionModel:
    """Apply the configured revision filters, then ingest."""
    return ingest(
        filter_revisions(
            revisions, after=config.after, before=config.before, grep=config.message_grep
        )
    )


def analyze(
    revisions: Iterable[Revision] | RevisionModel,
    kind: AnalysisKind | str,
    complexity: Optional[ComplexityIndex] = None,
    config: Optional[AnalysisConfig] = None,
    sort_by: Optional[str] = None,
    descending: bool = False,
    limit: Optional[int] = None,
    **overrides: Any,
) -> Report:
    """Run one analysis and return its assembled report.

    The sort field and limit are validated before the history is ingested.

    Args:
        revisions: Revision records, or an already built model
        kind: Analysis kind name (see AnalysisKind)
        complexity: Complexity scores and samples (hotspots, trend)
        config: Analysis configuration (defaults if omitted)
        sort_by: Optional report column to re-sort by
        descending: Sort direction for ``sort_by``
        limit: Keep at most this many rows
        **overrides: AnalysisConfig fields overriding ``config``

    Raises:
        UnknownFieldError: Unknown analysis kind or sort field
        ConfigurationRangeError: Invalid option value
        MalformedRevisionError: A revision could not be ingested
    """
    kind_name = kind.value if isinstance(kind, AnalysisKind) else kind
    validate_request(kind_name, sort_by, limit)

    base = config or DEFAULT_CONFIG
    if overrides:
        base = AnalysisConfig(**{**_as_dict(base), **overrides})

    model = revisions if isinstance(revisions, RevisionModel) else build_model(revisions, base)
    result = AnalysisEngine(model, base, complexity).run(kind_name)
    log_errors(logger, result.warnings)
    return assemble(kind_name, result.rows, sort_by=sort_by, descending=descending, limit=limit)


def _as_dict(config: AnalysisConfig) -> dict[str, Any]:
    return {name: getattr(config, name) for name in AnalysisConfig.__dataclass_fields__}
