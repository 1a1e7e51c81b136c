from __future__ import annotations

from pathlib import Path

from .errors import FileReadError, NotFound
from .query import Query
from .spans import SourceSpan, WordRun
from .words import word_ranges


def split_lines(text: str) -> list[str]:
    """Split on "\\n", dropping one trailing "\\r" per line.

    Unlike str.splitlines(), form feeds and unicode separators stay inside
    the line, and a final newline does not open an empty last line.
    """
    if not text:
        return []
    lines = text.split("\n")
    if text.endswith("\n"):
        lines.pop()
    return [ln[:-1] if ln.endswith("\r") else ln for ln in lines]


def find_ident_range(text: str, line: int, column: int) -> WordRun | None:
    lines = split_lines(text)
    if line < 0 or line >= len(lines):
        return None
    for run in word_ranges(lines[line]):
        # Inclusive end: a cursor right after the last letter still hits the word.
        if run.start <= column <= run.end:
            return run
    return None


def read_source(path: str | Path) -> str:
    p = Path(path)
    try:
        return p.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise FileReadError(message=f"{p}: {e}") from e


def locate_identifier(q: Query) -> SourceSpan:
    text = read_source(q.file)
    run = find_ident_range(text, q.line, q.column)
    if run is None:
        raise NotFound(
            message=f"{q.format()}: can't find identifier at this position",
            hint="point the column at a letter of the identifier",
        )
    return SourceSpan(file=q.file, line=q.line, start_column=run.start, end_column=run.end)
