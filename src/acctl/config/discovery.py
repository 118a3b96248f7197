"""Locate the acctl.toml that holds the database path and account rules.

An operator normally runs acctl from somewhere inside a deployment checkout,
so the file is found by walking up from the working directory; the directory
that holds it becomes the root that relative database paths resolve
against.  ``ACCTL_CONFIG`` pins one file for scripts and cron jobs, and
``-c/--config`` bypasses discovery entirely (see ``AcctlSettings.from_cli``).
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "acctl.toml"
CONFIG_ENV_VAR = "ACCTL_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the acctl.toml governing *start* (default: cwd), or None.

    A set ``ACCTL_CONFIG`` wins outright; if it names a missing file the
    result is None and no walk-up happens, so acctl runs on defaults rather
    than against another deployment's database.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        if p.is_file():
            return p
        return None

    current = (start or Path.cwd()).resolve()
    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None
