from __future__ import annotations

from .analysis import AnalysisStore, DefId, SaveAnalysisStore
from .config import BuildConfig
from .errors import (
    AnalysisBuildWarning,
    AnalysisLoadError,
    BuildToolError,
    FileReadError,
    IdentifierNotIndexed,
    NotFound,
    RenamerError,
    UsageError,
)
from .locate import find_ident_range, locate_identifier
from .query import Query, parse_location, parse_query
from .report import find_references, format_reference, report_references
from .session import check_with_save_analysis, load_analysis, run_build
from .spans import SourceSpan, WordRun
from .words import word_ranges

__all__ = [
    "AnalysisBuildWarning",
    "AnalysisLoadError",
    "AnalysisStore",
    "BuildConfig",
    "BuildToolError",
    "DefId",
    "FileReadError",
    "IdentifierNotIndexed",
    "NotFound",
    "Query",
    "RenamerError",
    "SaveAnalysisStore",
    "SourceSpan",
    "UsageError",
    "WordRun",
    "check_with_save_analysis",
    "find_ident_range",
    "find_references",
    "format_reference",
    "load_analysis",
    "locate_identifier",
    "parse_location",
    "parse_query",
    "report_references",
    "run_build",
    "word_ranges",
]
