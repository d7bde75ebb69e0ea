"""UI-agnostic state of an interactive diff review.

A ReviewSession owns the changed-file tree, the selected file's diff and
the cursor inside it.  A front end drives it with selection and cursor
moves and reads back rows, gutter labels and change counts to draw.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field

from difi.backend import VcsBackend
from difi.config import Config
from difi.diff_index import line_number_label, parse_diff_lines
from difi.models import DiffLine, DiffStat, Focus, TreeItem
from difi.runner import VcsError
from difi.stats import aggregate_under, count_diff_lines
from difi.tree import build_tree

__all__ = ["ReviewSession"]

log = logging.getLogger(__name__)


@dataclass
class ReviewSession:
    """Mutable review state for one backend and target revision.

    When ``piped_diff`` is set the file list and per-file diffs come from
    that blob instead of from the VCS.
    """

    backend: VcsBackend
    target: str
    config: Config = field(default_factory=Config)
    piped_diff: str = ""
    items: list[TreeItem] = field(default_factory=list)
    selected_index: int = 0
    selected_path: str = ""
    diff_text: str = ""
    diff_lines: list[DiffLine] = field(default_factory=list)
    cursor: int = 0
    focus: Focus = Focus.TREE
    _file_stats: dict[str, DiffStat] | None = field(default=None, init=False, repr=False)
    _totals: DiffStat | None = field(default=None, init=False, repr=False)

    # -- loading -------------------------------------------------------------

    def load(self) -> None:
        """List changed files, build the tree and open the first file.

        Raises:
            VcsError: If the VCS cannot list changed files.
        """
        if self.piped_diff:
            paths = self.backend.parse_files_from_diff(self.piped_diff)
        else:
            paths = [changed.path for changed in self.backend.list_changed_files(self.target)]
        self.items = build_tree(paths)
        self._file_stats = None
        self._totals = None
        self.selected_index = 0
        self.selected_path = ""
        self._clear_diff()
        for index, item in enumerate(self.items):
            if not item.is_dir:
                self.selected_index = index
                self.select(item.full_path)
                break

    def select(self, path: str) -> None:
        """Show the diff of *path*; directories are ignored."""
        item = self._find(path)
        if item is None or item.is_dir:
            return
        self.selected_index = self.items.index(item)
        if path == self.selected_path and self.diff_text:
            return
        self.selected_path = path
        self.cursor = 0
        self.reload_diff()

    def reload_diff(self) -> None:
        """Fetch the selected file's diff again, e.g. after editing it."""
        if not self.selected_path:
            self._clear_diff()
            return
        if self.piped_diff:
            text = self.backend.extract_file_diff(self.piped_diff, self.selected_path)
        else:
            text = self.backend.diff(self.target, self.selected_path)
        self.diff_text = text
        self.diff_lines = parse_diff_lines(text)
        self.cursor = min(self.cursor, max(len(self.diff_lines) - 1, 0))

    # -- navigation ----------------------------------------------------------

    def move_selection(self, delta: int) -> None:
        """Move the tree cursor; landing on a file loads its diff."""
        if not self.items:
            return
        index = max(0, min(self.selected_index + delta, len(self.items) - 1))
        self.selected_index = index
        item = self.items[index]
        if not item.is_dir and item.full_path != self.selected_path:
            self.selected_path = item.full_path
            self.cursor = 0
            self.reload_diff()

    def move_cursor(self, delta: int) -> None:
        """Move the diff cursor by *delta* rows, clamped to the diff."""
        if not self.diff_lines:
            self.cursor = 0
            return
        self.cursor = max(0, min(self.cursor + delta, len(self.diff_lines) - 1))

    def toggle_focus(self) -> None:
        self.focus = Focus.DIFF if self.focus is Focus.TREE else Focus.TREE

    def current_file_line(self) -> int:
        """Real file line under the cursor (first hunk when the tree has focus)."""
        index = self.cursor if self.focus is Focus.DIFF else 0
        return self.backend.calculate_file_line(self.diff_text, index)

    def line_labels(self, start: int = 0, end: int | None = None) -> Iterator[tuple[str, DiffLine]]:
        """Yield ``(gutter label, line)`` for the rows in ``[start, end)``."""
        stop = len(self.diff_lines) if end is None else min(end, len(self.diff_lines))
        for index in range(max(start, 0), stop):
            label = line_number_label(index, self.cursor, self.config.line_numbers, self.diff_text)
            yield label, self.diff_lines[index]

    def edit(self) -> int:
        """Open the selected file at the cursor's line and refresh its diff."""
        if not self.selected_path:
            return 0
        status = self.backend.open_editor(self.selected_path, self.current_file_line(), self.target)
        self.reload_diff()
        return status

    # -- statistics ----------------------------------------------------------

    def file_stats(self) -> dict[str, DiffStat]:
        """Per-file change counts; empty when the VCS cannot provide them."""
        if self._file_stats is None:
            self._file_stats = self._load_file_stats()
        return self._file_stats

    def stats(self) -> DiffStat:
        """Totals for the whole change; zero when the VCS cannot provide them.

        Live totals come from the backend summary, never from summing the
        per-file counts.
        """
        if self._totals is None:
            self._totals = self._load_totals()
        return self._totals

    def stat_for(self, item: TreeItem) -> DiffStat:
        stats = self.file_stats()
        if item.is_dir:
            return aggregate_under(stats, item.full_path)
        return stats.get(item.full_path, DiffStat())

    def _load_totals(self) -> DiffStat:
        if self.piped_diff:
            total = DiffStat()
            for stat in self.file_stats().values():
                total = total + stat
            return total
        try:
            return self.backend.diff_stats(self.target)
        except VcsError as exc:
            log.warning("Change totals unavailable: %s", exc)
            return DiffStat()

    def _load_file_stats(self) -> dict[str, DiffStat]:
        if self.piped_diff:
            return {
                path: count_diff_lines(self.backend.extract_file_diff(self.piped_diff, path))
                for path in self.backend.parse_files_from_diff(self.piped_diff)
            }
        try:
            return self.backend.diff_stats_by_file(self.target)
        except VcsError as exc:
            log.warning("Change counts unavailable: %s", exc)
            return {}

    # -- helpers -------------------------------------------------------------

    def _find(self, path: str) -> TreeItem | None:
        for item in self.items:
            if item.full_path == path:
                return item
        return None

    def _clear_diff(self) -> None:
        self.diff_text = ""
        self.diff_lines = []
        self.cursor = 0
