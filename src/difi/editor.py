"""Launching an external editor positioned at a diff line."""

from __future__ import annotations

import logging
import os
import shlex
import shutil
import subprocess
from pathlib import Path

from difi.runner import read_env_value

__all__ = [
    "TARGET_ENV_VAR",
    "EditorError",
    "build_editor_command",
    "editor_env",
    "open_editor",
    "resolve_editor",
]

log = logging.getLogger(__name__)

# Exported to the editor so plugins can diff against the same revision.
TARGET_ENV_VAR = "DIFI_TARGET"

_GOTO_EDITORS = frozenset(("code", "code-insiders", "codium", "cursor"))
_COLON_EDITORS = frozenset(("hx", "helix", "subl", "zed"))


class EditorError(RuntimeError):
    """Raised when the editor command is malformed or cannot be started."""


def resolve_editor(configured: str | None = None) -> list[str]:
    """Return the editor command line as an argument list.

    Precedence: *configured*, then ``$EDITOR``, then ``nvim`` when it is on
    PATH, then ``vim``.
    """
    value = configured or read_env_value("EDITOR")
    if value:
        try:
            return shlex.split(value)
        except ValueError as exc:
            msg = f"Cannot parse editor command '{value}': {exc}"
            raise EditorError(msg) from exc
    if shutil.which("nvim") is not None:
        return ["nvim"]
    return ["vim"]


def build_editor_command(path: str, line: int, editor: list[str]) -> list[str]:
    """Build the argv that opens *path* at *line* (0 means no position)."""
    cmd = list(editor)
    program = Path(cmd[0]).name if cmd else ""
    if line <= 0:
        return [*cmd, path]
    if program in _GOTO_EDITORS:
        return [*cmd, "--goto", f"{path}:{line}"]
    if program in _COLON_EDITORS:
        return [*cmd, f"{path}:{line}"]
    return [*cmd, f"+{line}", path]


def editor_env(target: str) -> dict[str, str]:
    env = dict(os.environ)
    env[TARGET_ENV_VAR] = target
    return env


def open_editor(
    path: str,
    line: int,
    target: str,
    *,
    editor: list[str] | None = None,
    cwd: Path | None = None,
) -> int:
    """Run the editor attached to the current terminal and wait for it."""
    cmd = build_editor_command(path, line, editor or resolve_editor())
    log.debug("Opening editor: %s", " ".join(cmd))
    try:
        proc = subprocess.run(cmd, cwd=cwd, env=editor_env(target), check=False)
    except OSError as exc:
        msg = f"Could not start editor '{cmd[0]}': {exc}"
        raise EditorError(msg) from exc
    return proc.returncode
