"""Mercurial backend implementation."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from difi.backend import VcsBackend
from difi.diff_index import calculate_file_line
from difi.diff_split import HG_DIALECT, extract_file_diff, parse_files_from_diff
from difi.editor import build_editor_command, open_editor, resolve_editor
from difi.models import ChangedFile, DiffStat
from difi.runner import VcsError, read_env_value, run
from difi.stats import diffstat_totals, parse_diffstat

__all__ = ["HgBackend", "HgConfig"]

log = logging.getLogger(__name__)

_DEFAULT_EXECUTABLE = "hg"
_ENV_EXECUTABLE = "DIFI_HG_EXECUTABLE"

# Targets that mean "the working directory": no --rev is passed.
_NO_REVISION = frozenset(("", ".", "tip"))


@dataclass(frozen=True)
class HgConfig:
    """Configuration options for the Mercurial backend."""

    executable: str | None = None
    editor: str | None = None
    cwd: Path | None = None


class HgBackend(VcsBackend):
    """Backend that shells out to the Mercurial CLI.

    Every command runs with ``HGRCPATH`` pointed at the null device so user
    configuration (pagers, aliases, hooks) cannot change the output, and
    from the repository root so relative paths resolve.
    """

    name = "hg"
    default_target = "."

    def __init__(self, config: HgConfig | None = None) -> None:
        resolved = config or HgConfig()
        self._executable = (
            resolved.executable or read_env_value(_ENV_EXECUTABLE) or _DEFAULT_EXECUTABLE
        )
        self._editor = resolved.editor
        self._cwd = resolved.cwd
        self._root: Path | None = None
        self._root_checked = False

    def current_branch(self) -> str:
        try:
            return self._run(["branch"]).strip() or "default"
        except VcsError:
            return "default"

    def repo_name(self) -> str:
        root = self.repo_root()
        return root.name if root is not None and root.name else "Repo"

    def repo_root(self) -> Path | None:
        if not self._root_checked:
            self._root_checked = True
            try:
                out = run(self._executable, ["root"], cwd=self._cwd, env=_hg_env())
            except VcsError as exc:
                log.debug("hg root unavailable: %s", exc)
            else:
                top = out.strip()
                self._root = Path(top) if top else None
        return self._root

    def list_changed_files(self, target: str) -> list[ChangedFile]:
        out = self._run(["status", *_revision_args(target), "--no-status"])
        return [ChangedFile(path=line) for line in out.splitlines() if line.strip()]

    def diff(self, target: str, path: str) -> str:
        try:
            return self._run(["diff", "--color=always", *_revision_args(target), path])
        except VcsError as exc:
            return f"Error fetching diff: {exc}"

    def diff_stats(self, target: str) -> DiffStat:
        return diffstat_totals(self._stat(target))

    def diff_stats_by_file(self, target: str) -> dict[str, DiffStat]:
        return parse_diffstat(self._stat(target))

    def calculate_file_line(self, diff_text: str, visual_index: int) -> int:
        return calculate_file_line(diff_text, visual_index)

    def parse_files_from_diff(self, diff_text: str) -> list[str]:
        return parse_files_from_diff(diff_text, HG_DIALECT)

    def extract_file_diff(self, diff_text: str, path: str) -> str:
        return extract_file_diff(diff_text, path, HG_DIALECT)

    def editor_command(self, path: str, line: int) -> list[str]:
        return build_editor_command(path, line, resolve_editor(self._editor))

    def open_editor(self, path: str, line: int, target: str) -> int:
        return open_editor(
            path,
            line,
            target,
            editor=resolve_editor(self._editor),
            cwd=self.repo_root() or self._cwd,
        )

    def _stat(self, target: str) -> str:
        return self._run(["diff", *_revision_args(target), "--stat"])

    def _run(self, args: list[str]) -> str:
        return run(self._executable, args, cwd=self.repo_root() or self._cwd, env=_hg_env())


def _revision_args(target: str) -> list[str]:
    if target.strip() in _NO_REVISION:
        return []
    return ["--rev", target.strip()]


def _hg_env() -> dict[str, str]:
    env = dict(os.environ)
    env["HGRCPATH"] = os.devnull
    return env
