from __future__ import annotations

import logging
import subprocess
import time
import warnings
from collections.abc import Callable
from pathlib import Path

from .analysis import AnalysisStore, SaveAnalysisStore
from .config import BuildConfig
from .errors import AnalysisBuildWarning, BuildToolError


log = logging.getLogger(__name__)


def run_build(config: BuildConfig) -> int:
    """Run the build tool with save-analysis enabled and return its exit status.

    A non-zero status only warns: artifacts from an earlier build may still
    load, and if they don't, load_analysis() fails on its own.
    """
    cmd = config.build_command()
    log.debug("running %s in %s (CARGO_TARGET_DIR=%s)", " ".join(cmd), config.project_root, config.target_dir)
    try:
        proc = subprocess.run(cmd, cwd=config.project_root, env=config.build_env(), check=False)
    except OSError as e:
        raise BuildToolError(
            message=f"cannot run {cmd[0]!r}: {e}",
            hint="set RENAMER_CARGO to the build tool to use",
        ) from e
    if proc.returncode != 0:
        warnings.warn(
            AnalysisBuildWarning(f"{' '.join(cmd)} exited with status {proc.returncode}; using whatever analysis exists"),
            stacklevel=2,
        )
    return proc.returncode


def load_analysis(
    config: BuildConfig,
    store_factory: Callable[[Path], AnalysisStore] = SaveAnalysisStore,
) -> AnalysisStore:
    store = store_factory(config.analysis_dir())
    start = time.monotonic()
    log.info("Loading analysis ...")
    store.reload(config.project_root)
    log.info("... loaded (%.3fs)!", time.monotonic() - start)
    return store


def check_with_save_analysis(
    config: BuildConfig,
    store_factory: Callable[[Path], AnalysisStore] = SaveAnalysisStore,
) -> AnalysisStore:
    run_build(config)
    return load_analysis(config, store_factory)
