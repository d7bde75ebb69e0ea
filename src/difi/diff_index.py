"""Line classification and cursor-to-file-line mapping for unified diffs.

A rendered diff is addressed by *visual* index (the zero-based row the
cursor sits on).  Opening an editor needs the *real* line number in the new
version of the file, which is recovered by replaying the hunk headers and
counting context and added lines up to the cursor.
"""

from __future__ import annotations

import re

from difi.ansi import strip_ansi
from difi.models import DiffLine, DiffLineKind, LineNumberMode

__all__ = [
    "calculate_file_line",
    "classify_line",
    "line_number_label",
    "parse_diff_lines",
    "parse_hunk_anchor",
]

_HUNK_HEADER_RE = re.compile(r"^@@ -\d+(?:,\d+)? \+(\d+)(?:,\d+)? @@")

_FILE_META_PREFIXES = (
    "diff ",
    "index ",
    "--- ",
    "+++ ",
    "old mode ",
    "new mode ",
    "new file mode ",
    "deleted file mode ",
    "similarity index ",
    "dissimilarity index ",
    "rename from ",
    "rename to ",
    "copy from ",
    "copy to ",
    "Binary files ",
    "GIT binary patch",
)


def parse_hunk_anchor(line: str) -> int | None:
    """Return the new-file start line declared by a hunk header, if any."""
    match = _HUNK_HEADER_RE.match(strip_ansi(line))
    if match is None:
        return None
    return int(match.group(1))


def classify_line(line: str, *, in_hunk: bool = False) -> DiffLineKind:
    """Classify one diff line.

    Inside a hunk a line starting with '+++' or '---' is a change, not a file
    header, so callers walking a whole diff pass *in_hunk*.
    """
    plain = strip_ansi(line)
    if _HUNK_HEADER_RE.match(plain):
        return DiffLineKind.HUNK_HEADER
    if in_hunk and plain.startswith(("+", "-")):
        return DiffLineKind.ADDITION if plain[0] == "+" else DiffLineKind.DELETION
    if plain.startswith(_FILE_META_PREFIXES):
        return DiffLineKind.FILE_META
    if plain.startswith("+"):
        return DiffLineKind.ADDITION
    if plain.startswith("-"):
        return DiffLineKind.DELETION
    if plain.startswith(" "):
        return DiffLineKind.CONTEXT
    return DiffLineKind.OTHER


def parse_diff_lines(diff_text: str) -> list[DiffLine]:
    """Split diff output into classified lines, one per visual row."""
    result: list[DiffLine] = []
    in_hunk = False
    for line in diff_text.split("\n"):
        kind = classify_line(line, in_hunk=in_hunk)
        if kind is DiffLineKind.HUNK_HEADER:
            in_hunk = True
        elif kind is DiffLineKind.FILE_META and strip_ansi(line).startswith("diff "):
            in_hunk = False
        result.append(DiffLine(raw=line, kind=kind))
    return result


def calculate_file_line(diff_text: str, visual_index: int) -> int:
    """Map a cursor row in *diff_text* to a 1-based line in the new file.

    Returns 0 when *visual_index* is outside the diff and 1 when no hunk
    header precedes it.
    """
    lines = diff_text.split("\n")
    if visual_index < 0 or visual_index >= len(lines):
        return 0

    current = 0
    on_hunk_header = False
    for line in lines[: visual_index + 1]:
        anchor = parse_hunk_anchor(line)
        if anchor is not None:
            current = anchor
            on_hunk_header = True
            continue

        on_hunk_header = False
        plain = strip_ansi(line)
        # Deleted lines do not exist in the new file.
        if plain.startswith((" ", "+")):
            current += 1

    if current == 0:
        return 1
    # The counter has already moved past a counted cursor line; a hunk
    # header leaves it on the anchor itself.
    if on_hunk_header:
        return current
    return current - 1


def line_number_label(index: int, cursor: int, mode: LineNumberMode, diff_text: str) -> str:
    """Return the gutter label for row *index* given the cursor row."""
    if mode is LineNumberMode.HIDDEN:
        return ""
    if mode is LineNumberMode.ABSOLUTE:
        return str(index + 1)
    if mode is LineNumberMode.HYBRID and index == cursor:
        return str(calculate_file_line(diff_text, cursor))
    return str(abs(index - cursor))
