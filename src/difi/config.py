"""User configuration loaded from ``config.yml``.

Lookup order for the file: ``$DIFI_CONFIG``, then
``$XDG_CONFIG_HOME/difi/config.yml``, then ``~/.config/difi/config.yml``.

Example::

    editor: nvim
    ui:
      line_numbers: relative
      show_guide: false
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from difi.models import LineNumberMode
from difi.runner import read_env_value

__all__ = ["Config", "config_path", "load_config", "parse_config"]

log = logging.getLogger(__name__)

_ENV_CONFIG = "DIFI_CONFIG"
_ENV_XDG = "XDG_CONFIG_HOME"
_CONFIG_NAME = "config.yml"


@dataclass(frozen=True)
class Config:
    """Settings that shape how a review session is presented."""

    line_numbers: LineNumberMode = LineNumberMode.HYBRID
    show_guide: bool = True
    editor: str | None = None


def config_path() -> Path:
    explicit = read_env_value(_ENV_CONFIG)
    if explicit:
        return Path(explicit).expanduser()
    xdg = read_env_value(_ENV_XDG)
    base = Path(xdg) if xdg else Path.home() / ".config"
    return base / "difi" / _CONFIG_NAME


def load_config(path: Path | None = None) -> Config:
    """Load the configuration, falling back to defaults on any problem."""
    resolved = path or config_path()
    if not resolved.is_file():
        return Config()
    try:
        raw = resolved.read_text(encoding="utf-8")
    except OSError as exc:
        log.warning("Could not read config %s: %s", resolved, exc)
        return Config()
    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        log.warning("Ignoring invalid config %s: %s", resolved, str(exc).strip())
        return Config()
    return parse_config(data, source=resolved)


def parse_config(data: Any, *, source: Path | None = None) -> Config:
    """Build a Config from decoded YAML, keeping defaults for bad fields."""
    where = source or "<config>"
    defaults = Config()
    if data is None:
        return defaults
    if not isinstance(data, dict):
        log.warning("Ignoring config %s: expected a mapping at the top level", where)
        return defaults

    ui = data.get("ui", {})
    if not isinstance(ui, dict):
        log.warning("Ignoring 'ui' in %s: expected a mapping", where)
        ui = {}

    line_numbers = defaults.line_numbers
    raw_mode = ui.get("line_numbers")
    if raw_mode is not None:
        try:
            line_numbers = LineNumberMode.parse(str(raw_mode))
        except ValueError as exc:
            log.warning("%s: %s", where, exc)

    show_guide = defaults.show_guide
    raw_guide = ui.get("show_guide")
    if isinstance(raw_guide, bool):
        show_guide = raw_guide
    elif raw_guide is not None:
        log.warning("%s: 'ui.show_guide' must be true or false", where)

    editor = data.get("editor")
    if editor is not None and not (isinstance(editor, str) and editor.strip()):
        log.warning("%s: 'editor' must be a non-empty string", where)
        editor = None

    return Config(
        line_numbers=line_numbers,
        show_guide=show_guide,
        editor=editor.strip() if editor else None,
    )
