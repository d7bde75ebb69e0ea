"""Backend protocol for version-control tools."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from difi.models import ChangedFile, DiffStat

__all__ = ["VcsBackend"]


@runtime_checkable
class VcsBackend(Protocol):
    """Capabilities difi needs from a version-control tool.

    ``target`` is always the revision the working state is compared with;
    each backend has its own value meaning "no explicit revision".
    """

    name: str
    default_target: str

    def current_branch(self) -> str:
        """Return the checked-out branch name, or a fallback label."""
        ...

    def repo_name(self) -> str:
        """Return the repository directory name, or a fallback label."""
        ...

    def repo_root(self) -> Path | None:
        """Return the repository root, resolved once and cached."""
        ...

    def list_changed_files(self, target: str) -> list[ChangedFile]:
        """List changed paths relative to the repository root."""
        ...

    def diff(self, target: str, path: str) -> str:
        """Return colorized diff text for *path*.

        Failures are reported as diff text so the caller can still display
        and navigate something.
        """
        ...

    def diff_stats(self, target: str) -> DiffStat:
        """Return total added/deleted lines."""
        ...

    def diff_stats_by_file(self, target: str) -> dict[str, DiffStat]:
        """Return added/deleted lines per changed path."""
        ...

    def calculate_file_line(self, diff_text: str, visual_index: int) -> int:
        """Map a cursor row in *diff_text* to a line in the new file."""
        ...

    def parse_files_from_diff(self, diff_text: str) -> list[str]:
        """List the files named in a multi-file diff blob."""
        ...

    def extract_file_diff(self, diff_text: str, path: str) -> str:
        """Return the part of a multi-file diff blob that belongs to *path*."""
        ...

    def editor_command(self, path: str, line: int) -> list[str]:
        """Return the argv that opens *path* at *line*."""
        ...

    def open_editor(self, path: str, line: int, target: str) -> int:
        """Open *path* at *line* in the user's editor and wait for it."""
        ...
