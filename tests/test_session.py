from __future__ import annotations

import logging
import subprocess
from pathlib import Path

import pytest

from renamer import (
    AnalysisBuildWarning,
    AnalysisLoadError,
    BuildConfig,
    BuildToolError,
    check_with_save_analysis,
    load_analysis,
    run_build,
)
from renamer.testing import StubStore


class _Recorder:
    def __init__(self, returncode: int = 0) -> None:
        self.returncode = returncode
        self.calls: list[dict[str, object]] = []

    def __call__(self, cmd, **kwargs):
        self.calls.append({"cmd": cmd, **kwargs})
        return subprocess.CompletedProcess(cmd, self.returncode)


def test_config_from_env() -> None:
    cfg = BuildConfig.from_env({"RENAMER_CARGO": "/opt/cargo", "RENAMER_TARGET_DIR": "out/ra"}, project_root="/p")
    assert cfg.build_command() == ["/opt/cargo", "check"]
    assert cfg.analysis_dir() == Path("/p/out/ra/debug/deps/save-analysis")

    default = BuildConfig.from_env({})
    assert default.build_tool == "cargo"
    assert default.target_dir == "target/rls"


def test_build_env_enables_save_analysis() -> None:
    env = BuildConfig().build_env({"PATH": "/bin", "RUSTFLAGS": "-Copt-level=3"})
    assert env == {
        "PATH": "/bin",
        "RUSTC_BOOTSTRAP": "1",
        "CARGO_TARGET_DIR": "target/rls",
        "RUSTFLAGS": "-Zunstable-options -Zsave-analysis",
    }


def test_run_build_invokes_build_tool(monkeypatch: pytest.MonkeyPatch) -> None:
    rec = _Recorder()
    monkeypatch.setattr(subprocess, "run", rec)
    assert run_build(BuildConfig(project_root=Path("/p"))) == 0
    (call,) = rec.calls
    assert call["cmd"] == ["cargo", "check"]
    assert call["cwd"] == Path("/p")
    assert call["env"]["CARGO_TARGET_DIR"] == "target/rls"
    assert call["check"] is False


def test_failed_build_only_warns(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(subprocess, "run", _Recorder(returncode=101))
    with pytest.warns(AnalysisBuildWarning, match="status 101"):
        assert run_build(BuildConfig()) == 101


def test_missing_build_tool(monkeypatch: pytest.MonkeyPatch) -> None:
    def boom(cmd, **kwargs):
        raise FileNotFoundError(2, "No such file or directory", cmd[0])

    monkeypatch.setattr(subprocess, "run", boom)
    with pytest.raises(BuildToolError) as e:
        run_build(BuildConfig(build_tool="no-such-cargo"))
    assert "no-such-cargo" in str(e.value)


def test_load_analysis_reports_timing(caplog: pytest.LogCaptureFixture) -> None:
    store = StubStore()
    cfg = BuildConfig(project_root=Path("/p"))
    seen: list[Path] = []

    def factory(adir: Path) -> StubStore:
        seen.append(adir)
        return store

    with caplog.at_level(logging.INFO, logger="renamer.session"):
        assert load_analysis(cfg, factory) is store

    assert seen == [cfg.analysis_dir()]
    assert store.reloads == [Path("/p")]
    messages = [r.getMessage() for r in caplog.records]
    assert messages[0] == "Loading analysis ..."
    assert messages[1].startswith("... loaded (") and messages[1].endswith("s)!")


def test_failed_build_then_failed_load_is_fatal(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(subprocess, "run", _Recorder(returncode=1))
    with pytest.warns(AnalysisBuildWarning):
        with pytest.raises(AnalysisLoadError):
            check_with_save_analysis(BuildConfig(), lambda adir: StubStore(fail_reload=True))


def test_failed_build_with_loadable_analysis_succeeds(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(subprocess, "run", _Recorder(returncode=1))
    store = StubStore()
    with pytest.warns(AnalysisBuildWarning):
        assert check_with_save_analysis(BuildConfig(), lambda adir: store) is store
