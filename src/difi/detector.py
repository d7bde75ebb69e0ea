"""Pick a VCS backend by looking for repository markers above a directory."""

from __future__ import annotations

import logging
from pathlib import Path

__all__ = ["DEFAULT_BACKEND", "MARKERS", "detect_backend_name", "find_marker"]

log = logging.getLogger(__name__)

DEFAULT_BACKEND = "git"

# Checked in order; an earlier marker anywhere up the tree wins over a later
# marker in a nearer directory.
MARKERS: tuple[tuple[str, str], ...] = (
    (".git", "git"),
    (".hg", "hg"),
)


def find_marker(start: Path, marker: str) -> Path | None:
    """Return the nearest directory at or above *start* containing *marker*."""
    current = start
    while True:
        if (current / marker).exists():
            return current
        parent = current.parent
        if parent == current:
            return None
        current = parent


def detect_backend_name(start: Path | None = None) -> str:
    """Return the backend name for *start* (default: the current directory).

    Each marker is searched all the way up to the filesystem root before the
    next marker is considered. Without any marker the default is git.
    """
    try:
        origin = (start or Path.cwd()).resolve()
    except OSError as exc:
        log.debug("Cannot resolve working directory (%s); defaulting to %s", exc, DEFAULT_BACKEND)
        return DEFAULT_BACKEND

    for marker, name in MARKERS:
        found = find_marker(origin, marker)
        if found is not None:
            log.debug("Found %s in %s; using %s backend", marker, found, name)
            return name
    return DEFAULT_BACKEND
