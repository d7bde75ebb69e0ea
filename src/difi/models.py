"""Core data models for difi.

This module defines the typed dataclasses and enumerations shared by the
diff model:

- **Listing**: ChangedFile, TreeItem
- **Diff text**: DiffLineKind, DiffLine
- **Statistics**: DiffStat
- **Review state**: LineNumberMode, Focus
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

from difi.ansi import strip_ansi

# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class DiffLineKind(enum.Enum):
    """Classification of one line of unified-diff text."""

    HUNK_HEADER = "hunk_header"
    CONTEXT = "context"
    ADDITION = "addition"
    DELETION = "deletion"
    FILE_META = "file_meta"
    OTHER = "other"


class LineNumberMode(enum.Enum):
    """How diff lines are numbered in the gutter."""

    HIDDEN = "hidden"
    RELATIVE = "relative"
    ABSOLUTE = "absolute"
    HYBRID = "hybrid"

    @classmethod
    def parse(cls, value: str) -> LineNumberMode:
        """Return the mode named by *value* (case-insensitive)."""
        name = value.strip().lower()
        for mode in cls:
            if mode.value == name:
                return mode
        choices = ", ".join(mode.value for mode in cls)
        msg = f"Unknown line number mode '{value}'. Available modes: {choices}"
        raise ValueError(msg)


class Focus(enum.Enum):
    """Which pane of the reviewer receives navigation."""

    TREE = "tree"
    DIFF = "diff"


# ---------------------------------------------------------------------------
# Listing models
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ChangedFile:
    """A changed path relative to the repository root."""

    path: str


@dataclass(frozen=True)
class TreeItem:
    """One row of the flattened changed-file hierarchy."""

    name: str
    full_path: str
    is_dir: bool
    depth: int

    @property
    def label(self) -> str:
        suffix = "/" if self.is_dir else ""
        return f"{'  ' * self.depth}{self.name}{suffix}"


# ---------------------------------------------------------------------------
# Diff text models
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DiffLine:
    """A single line of (possibly colorized) diff output and its kind.

    ``raw`` keeps the escape sequences exactly as the tool emitted them so
    the line can be re-rendered; ``plain`` is the text a parser should
    match against.
    """

    raw: str
    kind: DiffLineKind

    @property
    def plain(self) -> str:
        return strip_ansi(self.raw)


# ---------------------------------------------------------------------------
# Statistics models
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DiffStat:
    """Added/deleted line counts for a file, a directory or a whole diff."""

    added: int = 0
    deleted: int = 0

    def __add__(self, other: DiffStat) -> DiffStat:
        return DiffStat(self.added + other.added, self.deleted + other.deleted)


# ---------------------------------------------------------------------------
# Exports
# ---------------------------------------------------------------------------

__all__ = [
    "ChangedFile",
    "DiffLine",
    "DiffLineKind",
    "DiffStat",
    "Focus",
    "LineNumberMode",
    "TreeItem",
]
