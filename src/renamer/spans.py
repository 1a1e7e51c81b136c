from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class WordRun:
    """Half-open run [start, end) of ASCII letters within one line.

    Offsets are UTF-8 byte offsets, not character indices.
    """

    start: int
    end: int


@dataclass(frozen=True, slots=True)
class SourceSpan:
    """Single-line span in a file.

    line/start_column/end_column are 0-based; format() renders them 1-based.
    """

    file: str
    line: int
    start_column: int
    end_column: int

    def format(self) -> str:
        return f"{self.file}:{self.line + 1}:{self.start_column + 1}-{self.end_column + 1}"
