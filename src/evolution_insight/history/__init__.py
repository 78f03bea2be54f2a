"""Revision history: data model, ingestion, filtering and input collaborators."""

from .filters import filter_revisions, parse_iso_date
from .model import RevisionModel, RevisionModelBuilder, ingest
from .models import (
    ComplexityIndex,
    ComplexityTrendPoint,
    EntityPairKey,
    FileChange,
    Revision,
    pair_key,
)

__all__ = [
    "ComplexityIndex",
    "ComplexityTrendPoint",
    "EntityPairKey",
    "FileChange",
    "Revision",
    "RevisionModel",
    "RevisionModelBuilder",
    "filter_revisions",
    "ingest",
    "pair_key",
    "parse_iso_date",
]
