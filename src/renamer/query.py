from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from .errors import UsageError


USAGE = "renamer path/to/file.rs:line:column"


@dataclass(frozen=True, slots=True)
class Query:
    """A 0-based (line, column) position in `file`."""

    file: str
    line: int
    column: int

    def format(self) -> str:
        return f"{self.file}:{self.line + 1}:{self.column + 1}"


def _usage(message: str) -> UsageError:
    return UsageError(message=message, hint=f"usage: {USAGE}")


def _one_based(field: str, raw: str) -> int:
    # int() would also accept " 3", "-0" and "3_000"; only [+]digits are valid here.
    digits = raw[1:] if raw.startswith("+") else raw
    if not digits.isascii() or not digits.isdigit():
        raise _usage(f"{field} must be a positive integer, got {raw!r}")
    value = int(digits)
    if value == 0:
        raise _usage(f"{field} is 1-based, got 0")
    return value - 1


def parse_location(arg: str) -> Query:
    """Parse `path:line:column`.

    Splitting is on every ":", so paths that contain a colon (including
    Windows drive letters) are rejected.
    """
    bits = arg.split(":")
    if len(bits) != 3:
        raise _usage(f"expected path:line:column, got {arg!r}")
    file, line, column = bits
    if not file:
        raise _usage("missing file path")
    return Query(file=file, line=_one_based("line", line), column=_one_based("column", column))


def parse_query(args: Sequence[str]) -> Query:
    if len(args) != 1:
        raise _usage(f"expected exactly one location argument, got {len(args)}")
    return parse_location(args[0])
