"""Load unipatch configuration from pyproject.toml and optional .unipatch.toml."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass
class UnipatchConfig:
    """Runtime configuration for the unipatch command."""

    # Parse stdin as raw bytes instead of UTF-8 text.  Needed for patches
    # touching files in other encodings.
    binary: bool = False

    # Print one "@@ -a,b +c,d @@" line per hunk before the summary
    show_hunks: bool = True
    # Append the function context (text after the closing "@@") to those lines
    show_function_context: bool = True

    # Level name passed to logging.basicConfig, e.g. "DEBUG"
    log_level: str = "WARNING"


def _read_toml(path: Path) -> dict:
    """Read a TOML file; return empty dict if missing or unparseable."""
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError, UnicodeDecodeError):
        return {}


def _apply(cfg: UnipatchConfig, d: dict) -> None:
    """Overlay dict values onto cfg, ignoring unknown keys."""
    valid = set(cfg.__dataclass_fields__)
    for key, val in d.items():
        if key in valid:
            setattr(cfg, key, val)


def load_config(project_root: Optional[Path] = None) -> UnipatchConfig:
    """Load config from pyproject.toml [tool.unipatch], then .unipatch.toml."""
    if project_root is None:
        project_root = Path.cwd()
    cfg = UnipatchConfig()
    pyproject = _read_toml(project_root / "pyproject.toml")
    _apply(cfg, pyproject.get("tool", {}).get("unipatch", {}))
    local = _read_toml(project_root / ".unipatch.toml")
    _apply(cfg, local)
    return cfg
