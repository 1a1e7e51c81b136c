from __future__ import annotations

from collections.abc import Iterator

from .spans import WordRun


def _is_ascii_alpha(ch: str) -> bool:
    return ("a" <= ch <= "z") or ("A" <= ch <= "Z")


def word_ranges(line: str) -> Iterator[WordRun]:
    """Yield maximal runs of ASCII letters in `line`, left to right.

    Digits, underscores, punctuation, whitespace and non-ASCII letters all
    separate runs. Offsets count UTF-8 bytes so that multi-byte characters
    before a run shift it accordingly.
    """
    offset = 0
    start: int | None = None

    for ch in line:
        if _is_ascii_alpha(ch):
            if start is None:
                start = offset
            offset += 1
            continue
        if start is not None:
            yield WordRun(start=start, end=offset)
            start = None
        offset += len(ch.encode("utf-8"))

    if start is not None:
        yield WordRun(start=start, end=offset)
