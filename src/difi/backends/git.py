"""git backend implementation."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from difi.backend import VcsBackend
from difi.diff_index import calculate_file_line
from difi.diff_split import GIT_DIALECT, extract_file_diff, parse_files_from_diff
from difi.editor import build_editor_command, open_editor, resolve_editor
from difi.models import ChangedFile, DiffStat
from difi.runner import VcsError, read_env_value, run
from difi.stats import numstat_totals, parse_numstat

__all__ = ["GitBackend", "GitConfig"]

log = logging.getLogger(__name__)

_DEFAULT_EXECUTABLE = "git"
_ENV_EXECUTABLE = "DIFI_GIT_EXECUTABLE"

# An empty target compares the working tree with the index.
_NO_REVISION = frozenset(("",))


@dataclass(frozen=True)
class GitConfig:
    """Configuration options for the git backend."""

    executable: str | None = None
    editor: str | None = None
    cwd: Path | None = None


class GitBackend(VcsBackend):
    """Backend that shells out to the git CLI."""

    name = "git"
    default_target = "HEAD"

    def __init__(self, config: GitConfig | None = None) -> None:
        resolved = config or GitConfig()
        self._executable = (
            resolved.executable or read_env_value(_ENV_EXECUTABLE) or _DEFAULT_EXECUTABLE
        )
        self._editor = resolved.editor
        self._cwd = resolved.cwd
        self._root: Path | None = None
        self._root_checked = False

    def current_branch(self) -> str:
        try:
            return self._run(["rev-parse", "--abbrev-ref", "HEAD"]).strip() or "HEAD"
        except VcsError:
            return "HEAD"

    def repo_name(self) -> str:
        root = self.repo_root()
        return root.name if root is not None and root.name else "Repo"

    def repo_root(self) -> Path | None:
        if not self._root_checked:
            self._root_checked = True
            try:
                out = run(self._executable, ["rev-parse", "--show-toplevel"], cwd=self._cwd)
            except VcsError as exc:
                log.debug("git root unavailable: %s", exc)
            else:
                top = out.strip()
                self._root = Path(top) if top else None
        return self._root

    def list_changed_files(self, target: str) -> list[ChangedFile]:
        out = self._run(["diff", "--name-only", *_revision_args(target)])
        return [ChangedFile(path=line) for line in out.splitlines() if line.strip()]

    def diff(self, target: str, path: str) -> str:
        try:
            return self._run(["diff", "--color=always", *_revision_args(target), "--", path])
        except VcsError as exc:
            return f"Error fetching diff: {exc}"

    def diff_stats(self, target: str) -> DiffStat:
        return numstat_totals(self._numstat(target))

    def diff_stats_by_file(self, target: str) -> dict[str, DiffStat]:
        return parse_numstat(self._numstat(target))

    def calculate_file_line(self, diff_text: str, visual_index: int) -> int:
        return calculate_file_line(diff_text, visual_index)

    def parse_files_from_diff(self, diff_text: str) -> list[str]:
        return parse_files_from_diff(diff_text, GIT_DIALECT)

    def extract_file_diff(self, diff_text: str, path: str) -> str:
        return extract_file_diff(diff_text, path, GIT_DIALECT)

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

    def _numstat(self, target: str) -> str:
        return self._run(["diff", "--numstat", *_revision_args(target)])

    def _run(self, args: list[str]) -> str:
        return run(self._executable, args, cwd=self.repo_root() or self._cwd)


def _revision_args(target: str) -> list[str]:
    if target.strip() in _NO_REVISION:
        return []
    return [target.strip()]
