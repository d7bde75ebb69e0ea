"""Parsers for the "lines changed" summaries emitted by git and hg.

git is asked for ``--numstat`` output::

    3\t5\tsrc/foo.go
    -\t-\tassets/logo.png

hg only offers the ``--stat`` histogram::

     src/a.go |  5 ++---
     1 files changed, 2 insertions(+), 3 deletions(-)

The histogram's printed count is a display value; the real magnitudes are
the numbers of ``+`` and ``-`` characters.
"""

from __future__ import annotations

import re
from collections.abc import Mapping

from difi.ansi import strip_ansi
from difi.diff_index import parse_diff_lines
from difi.models import DiffLineKind, DiffStat

__all__ = [
    "aggregate_under",
    "count_diff_lines",
    "diffstat_totals",
    "is_diffstat_summary",
    "numstat_totals",
    "parse_diffstat",
    "parse_numstat",
]

SEPARATOR = "/"

_INSERTIONS_RE = re.compile(r"(\d+) insertions?\(\+\)")
_DELETIONS_RE = re.compile(r"(\d+) deletions?\(-\)")
_RENAME_BRACES_RE = re.compile(r"\{([^{}]*) => ([^{}]*)\}")
_RENAME_ARROW = " => "
_HISTOGRAM_CHARS = frozenset("+-")


# ---------------------------------------------------------------------------
# git --numstat
# ---------------------------------------------------------------------------


def parse_numstat(text: str) -> dict[str, DiffStat]:
    """Parse ``git diff --numstat`` output into per-file counts."""
    result: dict[str, DiffStat] = {}
    for line in text.splitlines():
        parts = line.split("\t", 2)
        if len(parts) < 3:
            continue
        added = _numstat_count(parts[0])
        deleted = _numstat_count(parts[1])
        if added is None or deleted is None:
            continue
        path = _rename_target(parts[2].strip())
        if path:
            result[path] = DiffStat(added, deleted)
    return result


def numstat_totals(text: str) -> DiffStat:
    total = DiffStat()
    for stat in parse_numstat(text).values():
        total = total + stat
    return total


def _numstat_count(field: str) -> int | None:
    value = field.strip()
    # Binary files report "-" instead of a count.
    if value == "-":
        return 0
    try:
        return int(value)
    except ValueError:
        return None


def _rename_target(path: str) -> str:
    if "{" in path and _RENAME_ARROW in path:
        expanded = _RENAME_BRACES_RE.sub(lambda match: match.group(2), path)
        return expanded.replace(SEPARATOR * 2, SEPARATOR)
    if _RENAME_ARROW in path:
        return path.rsplit(_RENAME_ARROW, 1)[1].strip()
    return path


# ---------------------------------------------------------------------------
# hg --stat histogram
# ---------------------------------------------------------------------------


def is_diffstat_summary(line: str) -> bool:
    """Return True for the trailing "N files changed, ..." line."""
    return "changed" in line and ("insertion" in line or "deletion" in line)


def parse_diffstat(text: str) -> dict[str, DiffStat]:
    """Parse ``hg diff --stat`` output into per-file counts."""
    result: dict[str, DiffStat] = {}
    for raw in text.splitlines():
        line = strip_ansi(raw)
        if is_diffstat_summary(line):
            continue
        path, sep, changes = line.rpartition("|")
        if not sep:
            continue
        path = path.strip()
        if not path:
            continue
        result[path] = _histogram_counts(changes)
    return result


def diffstat_totals(text: str) -> DiffStat:
    """Read total insertions and deletions from the histogram summary line."""
    for raw in text.splitlines():
        line = strip_ansi(raw)
        if not is_diffstat_summary(line):
            continue
        added = _INSERTIONS_RE.search(line)
        deleted = _DELETIONS_RE.search(line)
        return DiffStat(
            int(added.group(1)) if added else 0,
            int(deleted.group(1)) if deleted else 0,
        )
    return DiffStat()


def _histogram_counts(changes: str) -> DiffStat:
    tokens = changes.split()
    if not tokens:
        return DiffStat()
    run = tokens[-1]
    # "Bin 0 -> 12 bytes" and bare "0" carry no histogram.
    if not set(run) <= _HISTOGRAM_CHARS:
        return DiffStat()
    return DiffStat(run.count("+"), run.count("-"))


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------


def aggregate_under(by_file: Mapping[str, DiffStat], dir_path: str) -> DiffStat:
    """Sum the stats of every file below *dir_path*.

    The prefix must be followed by a separator, so ``src/foo`` never
    matches ``src/foobar``.
    """
    prefix = dir_path.rstrip(SEPARATOR) + SEPARATOR
    total = DiffStat()
    for path, stat in by_file.items():
        if path.startswith(prefix):
            total = total + stat
    return total


def count_diff_lines(diff_text: str) -> DiffStat:
    """Count added and deleted lines in unified-diff text."""
    kinds = [line.kind for line in parse_diff_lines(diff_text)]
    return DiffStat(kinds.count(DiffLineKind.ADDITION), kinds.count(DiffLineKind.DELETION))
