"""Tests for the subprocess boundary."""

from __future__ import annotations

from pathlib import Path
from unittest import mock

import pytest
from support import proc

from difi.runner import VcsError, read_env_value, run


def test_returns_stdout() -> None:
    with mock.patch("subprocess.run", return_value=proc(["git"], stdout="ok\n")) as run_mock:
        assert run("git", ["status"], cwd=Path("/repo")) == "ok\n"
    cmd = run_mock.call_args.args[0]
    assert cmd == ["git", "status"]
    assert run_mock.call_args.kwargs["cwd"] == Path("/repo")
    assert run_mock.call_args.kwargs["capture_output"] is True
    assert run_mock.call_args.kwargs["text"] is True


def test_passes_environment() -> None:
    with mock.patch("subprocess.run", return_value=proc(["hg"])) as run_mock:
        run("hg", ["root"], env={"HGRCPATH": "/dev/null"})
    assert run_mock.call_args.kwargs["env"] == {"HGRCPATH": "/dev/null"}


def test_nonzero_exit_raises_with_stderr() -> None:
    failed = proc(["git"], returncode=128, stderr="fatal: not a git repository\n")
    with mock.patch("subprocess.run", return_value=failed):
        with pytest.raises(VcsError, match="fatal: not a git repository") as excinfo:
            run("git", ["diff"])
    assert "exit 128" in str(excinfo.value)


def test_nonzero_exit_without_output() -> None:
    with mock.patch("subprocess.run", return_value=proc(["hg"], returncode=255)):
        with pytest.raises(VcsError, match="exit 255"):
            run("hg", ["status"])


def test_missing_executable() -> None:
    with mock.patch("subprocess.run", side_effect=FileNotFoundError("hg")):
        with pytest.raises(VcsError, match="hg executable not found"):
            run("hg", ["status"])


class TestReadEnvValue:
    def test_unset(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("DIFI_SAMPLE", raising=False)
        assert read_env_value("DIFI_SAMPLE") is None

    def test_blank_is_unset(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DIFI_SAMPLE", "   ")
        assert read_env_value("DIFI_SAMPLE") is None

    def test_stripped(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DIFI_SAMPLE", "  /usr/bin/hg \n")
        assert read_env_value("DIFI_SAMPLE") == "/usr/bin/hg"
