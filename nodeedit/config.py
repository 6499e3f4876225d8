"""
Configuration management for the node editor.

Settings come from, in priority order:
1. Environment variables (NODEEDIT_*; app.py loads a .env file first)
2. config.json next to the project root
3. Built-in defaults

Recognised settings:
- indent: indentation used when re-serializing the document (default 2)
- log_level: logging level name (default INFO)
- port: NiceGUI port (default 8081)
- document_path: JSON file opened at startup (default: bundled sample)
"""

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from nodeedit.paths import get_config_path, get_sample_document_path

logger = logging.getLogger(__name__)

ENV_PREFIX = "NODEEDIT_"

DEFAULTS = {
    "indent": 2,
    "log_level": "INFO",
    "port": 8081,
    "document_path": None,
}


@dataclass
class EditorSettings:
    indent: int = 2
    log_level: str = "INFO"
    port: int = 8081
    document_path: Optional[str] = None

    @property
    def resolved_document_path(self) -> Path:
        if self.document_path:
            return Path(self.document_path)
        return get_sample_document_path()


def load_config(config_path: Optional[Path] = None) -> dict:
    """Load configuration from config.json."""
    config_path = config_path or get_config_path()
    if config_path.exists():
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                return json.load(f)
        except (json.JSONDecodeError, IOError) as e:
            logger.warning(f"Ignoring unreadable config {config_path}: {e}")
            return {}
    return {}


def _as_int(name: str, value, fallback: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        logger.warning(f"Invalid {name} {value!r}; using {fallback}")
        return fallback


def get_settings(config_path: Optional[Path] = None) -> EditorSettings:
    """
    Resolve the effective settings.

    Environment variables override config.json, which overrides defaults.
    """
    merged = dict(DEFAULTS)
    merged.update({k: v for k, v in load_config(config_path).items() if k in DEFAULTS})

    for key in DEFAULTS:
        env_value = os.environ.get(f"{ENV_PREFIX}{key.upper()}")
        if env_value:
            merged[key] = env_value

    indent = _as_int("indent", merged["indent"], DEFAULTS["indent"])
    if indent < 0:
        logger.warning(f"Negative indent {indent}; using {DEFAULTS['indent']}")
        indent = DEFAULTS["indent"]

    return EditorSettings(
        indent=indent,
        log_level=str(merged["log_level"]).upper(),
        port=_as_int("port", merged["port"], DEFAULTS["port"]),
        document_path=merged["document_path"] or None,
    )
