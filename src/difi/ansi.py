"""Removal of terminal escape sequences from tool output."""

from __future__ import annotations

import re

__all__ = ["strip_ansi"]

# CSI sequences (ESC [ or the 8-bit CSI byte), BEL-terminated OSC strings and
# the short charset/keypad escapes that colorized VCS output may contain.
_ANSI_RE = re.compile(
    r"[\x1b\x9b][\[\]()#;?]*"
    r"(?:"
    r"(?:(?:[a-zA-Z\d]*(?:;[a-zA-Z\d]*)*)?\x07)"
    r"|"
    r"(?:(?:\d{1,4}(?:;\d{0,4})*)?[\dA-PRZcf-ntqry=><~])"
    r")"
)


def strip_ansi(text: str) -> str:
    """Return *text* with every ANSI escape sequence removed."""
    if "\x1b" not in text and "\x9b" not in text:
        return text
    return _ANSI_RE.sub("", text)
