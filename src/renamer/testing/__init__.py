from __future__ import annotations

from .stores import StubStore, crate_payload, def_entry, ref_entry, span_data

__all__ = ["StubStore", "crate_payload", "def_entry", "ref_entry", "span_data"]
