"""Synchronous invocation of external VCS tools."""

from __future__ import annotations

import logging
import os
import subprocess
from collections.abc import Mapping, Sequence
from pathlib import Path

__all__ = ["VcsError", "read_env_value", "run"]

log = logging.getLogger(__name__)


class VcsError(RuntimeError):
    """Raised when a VCS subprocess cannot run or exits non-zero."""


def run(
    tool: str,
    args: Sequence[str],
    *,
    cwd: Path | None = None,
    env: Mapping[str, str] | None = None,
) -> str:
    """Run ``tool args...`` and return its standard output.

    There is no timeout: a hung tool blocks the caller.
    """
    cmd = [tool, *args]
    log.debug("Running: %s (cwd=%s)", " ".join(cmd), cwd or ".")
    try:
        proc = subprocess.run(
            cmd,
            cwd=cwd,
            env=dict(env) if env is not None else None,
            capture_output=True,
            text=True,
        )
    except FileNotFoundError as exc:
        msg = f"{tool} executable not found. Is {tool} installed and on PATH?"
        raise VcsError(msg) from exc
    except OSError as exc:
        msg = f"{tool} could not be started: {exc}"
        raise VcsError(msg) from exc

    if proc.returncode != 0:
        detail = proc.stderr.strip() or proc.stdout.strip() or f"exit {proc.returncode}"
        msg = f"{tool} {args[0] if args else ''} failed (exit {proc.returncode}): {detail}"
        log.debug(msg)
        raise VcsError(msg)
    return proc.stdout


def read_env_value(key: str) -> str | None:
    """Return the stripped value of environment variable *key*, or None if unset or blank."""
    value = os.environ.get(key)
    if value is None:
        return None
    return value.strip() or None
