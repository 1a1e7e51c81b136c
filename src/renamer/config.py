from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path


DEFAULT_BUILD_TOOL = "cargo"
# Kept apart from target/ so regular builds neither clobber nor reuse it.
DEFAULT_TARGET_DIR = "target/rls"
SAVE_ANALYSIS_RUSTFLAGS = "-Zunstable-options -Zsave-analysis"


@dataclass(frozen=True, slots=True)
class BuildConfig:
    project_root: Path = Path(".")
    build_tool: str = DEFAULT_BUILD_TOOL
    target_dir: str = DEFAULT_TARGET_DIR
    profile: str = "debug"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None, *, project_root: str | Path = ".") -> "BuildConfig":
        env = os.environ if environ is None else environ
        return cls(
            project_root=Path(project_root),
            build_tool=env.get("RENAMER_CARGO") or DEFAULT_BUILD_TOOL,
            target_dir=env.get("RENAMER_TARGET_DIR") or DEFAULT_TARGET_DIR,
        )

    def build_command(self) -> list[str]:
        return [self.build_tool, "check"]

    def build_env(self, base: Mapping[str, str] | None = None) -> dict[str, str]:
        env = dict(os.environ if base is None else base)
        env["RUSTC_BOOTSTRAP"] = "1"
        env["CARGO_TARGET_DIR"] = self.target_dir
        env["RUSTFLAGS"] = SAVE_ANALYSIS_RUSTFLAGS
        return env

    def analysis_dir(self) -> Path:
        return self.project_root / self.target_dir / self.profile / "deps" / "save-analysis"
