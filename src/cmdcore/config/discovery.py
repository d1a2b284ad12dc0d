"""Locate cmdcore.toml.

Lookup order: ``CMDCORE_CONFIG`` env var, then a walk up from the
starting directory to the filesystem root.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "cmdcore.toml"
CONFIG_ENV_VAR = "CMDCORE_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the nearest cmdcore.toml at or above *start* (default: cwd).

    A set ``CMDCORE_CONFIG`` wins outright; if it points at a missing
    file no config is used at all.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        path = Path(override)
        return path if path.is_file() else None

    origin = (start or Path.cwd()).resolve()
    for directory in (origin, *origin.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
