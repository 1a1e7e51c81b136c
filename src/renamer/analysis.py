from __future__ import annotations

import json
import logging
from collections.abc import Hashable, Iterator, Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Protocol

from .errors import AnalysisLoadError, IdentifierNotIndexed
from .spans import SourceSpan


log = logging.getLogger(__name__)


class AnalysisStore(Protocol):
    """What the driver and reporter need from an analysis engine."""

    def reload(self, project_root: Path) -> None: ...

    def resolve_id(self, span: SourceSpan) -> Hashable: ...

    def find_references(self, ident: Hashable) -> Iterator[SourceSpan]: ...


@dataclass(frozen=True, slots=True)
class DefId:
    crate: str  # "<name>/<disambiguator>", stable across the crates of one build
    index: int


_SpanKey = tuple[str, int, int, int]


def _span_key(span: SourceSpan) -> _SpanKey:
    # span.file must already be absolute and resolved.
    return (span.file, span.line, span.start_column, span.end_column)


def _crate_key(crate_id: Mapping[str, Any]) -> str:
    dis = crate_id.get("disambiguator") or []
    return f"{crate_id['name']}/" + "-".join(f"{int(d):x}" for d in dis)


@dataclass(slots=True)
class SaveAnalysisStore:
    """Index over rustc save-analysis JSON files in `analysis_dir`.

    Artifact spans are 1-based and their file names are relative to the
    project root; the index holds 0-based spans with absolute paths.
    """

    analysis_dir: Path
    _ids: dict[_SpanKey, DefId] = field(default_factory=dict, init=False, repr=False)
    _defs: dict[DefId, SourceSpan] = field(default_factory=dict, init=False, repr=False)
    _refs: dict[DefId, dict[SourceSpan, None]] = field(default_factory=dict, init=False, repr=False)

    def reload(self, project_root: Path) -> None:
        self._ids.clear()
        self._defs.clear()
        self._refs.clear()

        root = Path(project_root).resolve()
        adir = Path(self.analysis_dir)
        if not adir.is_dir():
            raise AnalysisLoadError(
                message=f"no analysis directory at {adir}",
                hint="the build must run with save-analysis enabled",
            )
        files = sorted(adir.glob("*.json"))
        if not files:
            raise AnalysisLoadError(message=f"no save-analysis artifacts in {adir}")

        resolved: dict[str, str] = {}
        for p in files:
            try:
                data = json.loads(p.read_text(encoding="utf-8"))
            except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
                raise AnalysisLoadError(message=f"{p}: cannot read analysis data: {e}") from e
            try:
                self._index_crate(data, root, resolved, fallback_crate=p.stem)
            except (KeyError, TypeError, ValueError, AttributeError) as e:
                raise AnalysisLoadError(message=f"{p}: malformed save-analysis data ({e!r})") from e
            log.debug("indexed %s", p.name)

        log.debug("%d definitions, %d indexed spans", len(self._defs), len(self._ids))

    def _index_crate(
        self, data: Mapping[str, Any], root: Path, resolved: dict[str, str], *, fallback_crate: str
    ) -> None:
        prelude = data.get("prelude")
        crates: dict[int, str] = {0: fallback_crate}
        if prelude:
            crates[0] = _crate_key(prelude["crate_id"])
            for ext in prelude.get("external_crates") or []:
                crates[int(ext["num"])] = _crate_key(ext["id"])

        def def_id(raw: Mapping[str, Any]) -> DefId:
            krate = int(raw["krate"])
            # Ids of crates missing from the prelude still have to be distinct.
            return DefId(crate=crates.get(krate, f"{crates[0]}#{krate}"), index=int(raw["index"]))

        for d in data.get("defs") or []:
            span = _lower_span(d["span"], root, resolved)
            if span is None:
                continue
            ident = def_id(d["id"])
            self._defs.setdefault(ident, span)
            self._ids[_span_key(span)] = ident

        for r in data.get("refs") or []:
            span = _lower_span(r["span"], root, resolved)
            if span is None:
                continue
            ident = def_id(r["ref_id"])
            self._refs.setdefault(ident, {})[span] = None
            self._ids.setdefault(_span_key(span), ident)

    def resolve_id(self, span: SourceSpan) -> DefId:
        ident = self._ids.get(_span_key(replace(span, file=str(Path(span.file).resolve()))))
        if ident is None:
            raise IdentifierNotIndexed(
                message=f"{span.format()}: no indexed symbol at this span",
                hint="the analysis may be stale, or the word is not a symbol",
            )
        return ident

    def find_references(self, ident: Hashable) -> Iterator[SourceSpan]:
        if not isinstance(ident, DefId):
            return
        d = self._defs.get(ident)
        if d is not None:
            yield d
        for span in self._refs.get(ident, {}):
            if span != d:
                yield span


def _lower_span(raw: Mapping[str, Any], root: Path, resolved: dict[str, str]) -> SourceSpan | None:
    line_start = int(raw["line_start"])
    if line_start != int(raw["line_end"]):
        return None
    name = raw["file_name"]
    file = resolved.get(name)
    if file is None:
        # Artifacts repeat a handful of file names across every span.
        file = resolved[name] = str((root / name).resolve())
    return SourceSpan(
        file=file,
        line=line_start - 1,
        start_column=int(raw["column_start"]) - 1,
        end_column=int(raw["column_end"]) - 1,
    )
