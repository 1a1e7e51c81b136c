from __future__ import annotations

import sys
from typing import TextIO

from .analysis import AnalysisStore
from .spans import SourceSpan


def find_references(store: AnalysisStore, span: SourceSpan) -> list[SourceSpan]:
    ident = store.resolve_id(span)
    return list(store.find_references(ident))


def format_reference(span: SourceSpan) -> str:
    return span.format()


def report_references(store: AnalysisStore, span: SourceSpan, out: TextIO | None = None) -> int:
    """Print one `path:line:start-end` line per reference, in store order."""
    out = sys.stdout if out is None else out
    refs = find_references(store, span)
    for ref in refs:
        print(format_reference(ref), file=out)
    return len(refs)
