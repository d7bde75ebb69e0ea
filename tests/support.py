"""Sample diffs, a CompletedProcess builder and an in-memory backend for tests."""

from __future__ import annotations

import subprocess
from pathlib import Path

from difi.diff_index import calculate_file_line
from difi.diff_split import GIT_DIALECT, extract_file_diff, parse_files_from_diff
from difi.editor import build_editor_command
from difi.models import ChangedFile, DiffStat
from difi.runner import VcsError

DIFF_A = (
    "diff --git a/a.txt b/a.txt\n"
    "index 1111111..2222222 100644\n"
    "--- a/a.txt\n"
    "+++ b/a.txt\n"
    "@@ -3,2 +3,3 @@\n"
    " keep\n"
    "-old\n"
    "+new\n"
    "+more"
)

DIFF_B = (
    "diff --git a/src/b.py b/src/b.py\n"
    "index 3333333..4444444 100644\n"
    "--- a/src/b.py\n"
    "+++ b/src/b.py\n"
    "@@ -10,3 +10,2 @@\n"
    " import os\n"
    "-import sys\n"
    " import re"
)


def proc(
    args: list[str],
    *,
    returncode: int = 0,
    stdout: str = "",
    stderr: str = "",
) -> subprocess.CompletedProcess[str]:
    return subprocess.CompletedProcess(
        args=args,
        returncode=returncode,
        stdout=stdout,
        stderr=stderr,
    )


class FakeBackend:
    """Deterministic backend that never spawns processes."""

    name = "git"
    default_target = "HEAD"

    def __init__(
        self,
        *,
        files: list[str] | None = None,
        diffs: dict[str, str] | None = None,
        stats: dict[str, DiffStat] | None = None,
        list_error: str | None = None,
        stats_error: str | None = None,
    ) -> None:
        self.files = files if files is not None else ["a.txt", "src/b.py"]
        self.diffs = diffs if diffs is not None else {"a.txt": DIFF_A, "src/b.py": DIFF_B}
        self.stats = (
            stats
            if stats is not None
            else {"a.txt": DiffStat(2, 1), "src/b.py": DiffStat(0, 1)}
        )
        self.list_error = list_error
        self.stats_error = stats_error
        self.diff_calls: list[tuple[str, str]] = []
        self.list_calls: list[str] = []
        self.opened: list[tuple[str, int, str]] = []

    def current_branch(self) -> str:
        return "feature"

    def repo_name(self) -> str:
        return "demo"

    def repo_root(self) -> Path | None:
        return None

    def list_changed_files(self, target: str) -> list[ChangedFile]:
        self.list_calls.append(target)
        if self.list_error:
            raise VcsError(self.list_error)
        return [ChangedFile(path=path) for path in self.files]

    def diff(self, target: str, path: str) -> str:
        self.diff_calls.append((target, path))
        return self.diffs.get(path, "")

    def diff_stats(self, target: str) -> DiffStat:
        total = DiffStat()
        for stat in self.diff_stats_by_file(target).values():
            total = total + stat
        return total

    def diff_stats_by_file(self, target: str) -> dict[str, DiffStat]:
        if self.stats_error:
            raise VcsError(self.stats_error)
        return dict(self.stats)

    def calculate_file_line(self, diff_text: str, visual_index: int) -> int:
        return calculate_file_line(diff_text, visual_index)

    def parse_files_from_diff(self, diff_text: str) -> list[str]:
        return parse_files_from_diff(diff_text, GIT_DIALECT)

    def extract_file_diff(self, diff_text: str, path: str) -> str:
        return extract_file_diff(diff_text, path, GIT_DIALECT)

    def editor_command(self, path: str, line: int) -> list[str]:
        return build_editor_command(path, line, ["vim"])

    def open_editor(self, path: str, line: int, target: str) -> int:
        self.opened.append((path, line, target))
        return 0

