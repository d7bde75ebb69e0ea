"""Split a multi-file diff blob into per-file pieces.

Each VCS introduces a file's diff with its own delimiter line:

- git: ``diff --git a/<old> b/<new>``
- hg:  ``diff -r <rev> [-r <rev>] <path>``

Delimiters are matched on ANSI-stripped text so that colorized output
piped from ``git diff --color`` splits the same as plain output.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from difi.ansi import strip_ansi

__all__ = [
    "GIT_DIALECT",
    "HG_DIALECT",
    "DiffDialect",
    "extract_file_diff",
    "parse_files_from_diff",
]


@dataclass(frozen=True)
class DiffDialect:
    """How one VCS marks the start of a file's diff."""

    name: str
    prefix: str
    path_of: Callable[[str], str | None]

    def delimiter_path(self, line: str) -> str | None:
        """Return the path named by a delimiter *line*, or None."""
        plain = strip_ansi(line)
        if not plain.startswith(self.prefix):
            return None
        return self.path_of(plain)


def _git_path(line: str) -> str | None:
    _, sep, path = line.rpartition(" b/")
    if not sep or not path:
        return None
    return path


def _hg_path(line: str) -> str | None:
    parts = line.split()
    if len(parts) < 3:
        return None
    return parts[-1]


GIT_DIALECT = DiffDialect(name="git", prefix="diff --git a/", path_of=_git_path)
HG_DIALECT = DiffDialect(name="hg", prefix="diff -r ", path_of=_hg_path)


def parse_files_from_diff(diff_text: str, dialect: DiffDialect) -> list[str]:
    """Return each file named in *diff_text* once, in order of appearance."""
    files: list[str] = []
    seen: set[str] = set()
    for line in diff_text.split("\n"):
        path = dialect.delimiter_path(line)
        if path is None or path in seen:
            continue
        seen.add(path)
        files.append(path)
    return files


def extract_file_diff(diff_text: str, target_path: str, dialect: DiffDialect) -> str:
    """Return the lines of *diff_text* that belong to *target_path*.

    Every delimiter line re-decides whether the following lines are kept,
    so a path whose diff appears more than once gets all of its spans
    concatenated.
    """
    if not target_path:
        return ""
    out: list[str] = []
    in_target = False
    for line in diff_text.split("\n"):
        path = dialect.delimiter_path(line)
        if path is not None:
            in_target = path == target_path
        if in_target:
            out.append(line)
    return "\n".join(out)
