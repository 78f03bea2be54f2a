"""
Evolution Insight - socio-technical metrics from version-control history.

Turns a stream of revision records (commit, author, timestamp, per-file line
deltas) into logical and temporal coupling, churn and hotspots, ownership,
code age and complexity trends.
"""

__version__ = "0.1.0"

from .analysis import AnalysisEngine, AnalysisKind, AnalysisResult
from .api import analyze, build_model
from .config import AnalysisConfig, load_config
from .history import ComplexityIndex, FileChange, Revision, RevisionModel, ingest
from .report import Report, assemble

__all__ = [
    "analyze",  # Main entry point
    "build_model",
    "ingest",
    "assemble",
    "AnalysisConfig",
    "AnalysisEngine",
    "AnalysisKind",
    "AnalysisResult",
    "ComplexityIndex",
    "FileChange",
    "Report",
    "Revision",
    "RevisionModel",
    "load_config",
]
