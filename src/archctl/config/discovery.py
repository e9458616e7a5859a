"""Config file discovery.

Walk-up finder locates archctl.toml, similar to how git finds .git/.
Supports the ARCHCTL_CONFIG env var and the --config CLI flag.
The project root itself can be pinned with ARCHCTL_PROJECT_ROOT.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "archctl.toml"
CONFIG_ENV_VAR = "ARCHCTL_CONFIG"
PROJECT_ROOT_ENV_VAR = "ARCHCTL_PROJECT_ROOT"


def find_config(start: Path | None = None) -> Path | None:
    """Walk up from *start* (default: cwd) looking for archctl.toml.

    Returns the path to the config file, or None if not found.
    Checks ARCHCTL_CONFIG env var first.
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
