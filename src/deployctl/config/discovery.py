"""Config file discovery.

Walk-up finder locates a project's preferences file, the way git finds
``.git/``. Both ``deployctl.toml`` and the hidden ``.deployctl.toml`` are
accepted; within one directory the visible name wins. ``DEPLOYCTL_CONFIG``
short-circuits the walk.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAMES: tuple[str, ...] = ("deployctl.toml", ".deployctl.toml")
CONFIG_ENV_VAR = "DEPLOYCTL_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the nearest preferences file at or above *start* (default: cwd).

    When ``DEPLOYCTL_CONFIG`` is set it is used as-is: an existing file is
    returned, anything else yields None without walking.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        return p if p.is_file() else None

    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        for name in CONFIG_FILENAMES:
            candidate = directory / name
            if candidate.is_file():
                return candidate
    return None
