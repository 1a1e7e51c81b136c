from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class RenamerError(Exception):
    message: str
    hint: str | None = None

    def __str__(self) -> str:
        if self.hint:
            return f"{self.message}\nhint: {self.hint}"
        return self.message


class UsageError(RenamerError):
    """Malformed or missing `path:line:column` argument."""


class FileReadError(RenamerError):
    pass


class NotFound(RenamerError):
    """No identifier covers the requested position."""


class BuildToolError(RenamerError):
    """The build tool could not be started at all."""


class AnalysisLoadError(RenamerError):
    pass


class IdentifierNotIndexed(RenamerError):
    pass


class AnalysisBuildWarning(UserWarning):
    """The build exited non-zero; analysis from it may be stale or missing."""
