"""Backend implementations and selection helpers."""

from __future__ import annotations

import os
from pathlib import Path

from difi.backends.git import GitBackend, GitConfig
from difi.backends.hg import HgBackend, HgConfig
from difi.detector import detect_backend_name

__all__ = [
    "GitBackend",
    "GitConfig",
    "HgBackend",
    "HgConfig",
    "create_backend",
    "resolve_backend_name",
]

_BACKEND_NAMES = ("git", "hg")
_ALIASES = {"mercurial": "hg"}

_ENV_VAR = "DIFI_VCS"


def resolve_backend_name(cli_value: str | None = None, *, start: Path | None = None) -> str:
    """Return the effective backend name after applying precedence rules.

    Precedence: the CLI flag, then ``DIFI_VCS``, then marker detection.
    """
    explicit = cli_value or os.environ.get(_ENV_VAR)
    if not explicit or not explicit.strip():
        return detect_backend_name(start)
    name = explicit.strip().lower()
    name = _ALIASES.get(name, name)
    if name not in _BACKEND_NAMES:
        msg = f"Unknown VCS '{name}'. Available backends: {', '.join(_BACKEND_NAMES)}"
        raise ValueError(msg)
    return name


def create_backend(
    name: str,
    *,
    editor: str | None = None,
    cwd: Path | None = None,
    git_config: GitConfig | None = None,
    hg_config: HgConfig | None = None,
) -> GitBackend | HgBackend:
    """Instantiate a backend by its registered name."""
    if name == "git":
        return GitBackend(config=git_config or GitConfig(editor=editor, cwd=cwd))
    if name == "hg":
        return HgBackend(config=hg_config or HgConfig(editor=editor, cwd=cwd))
    msg = f"Unknown backend: {name}"
    raise ValueError(msg)
