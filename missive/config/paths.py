"""Path constants and directory utilities for missive config.

Follows the XDG Base Directory specification:
- Config: ~/.config/missive/config.toml

The MISSIVE_CONFIG environment variable points at an alternative
config file (handy for tests and for keeping several setups around).
"""

import os
from pathlib import Path


# XDG-compliant config directory
CONFIG_DIR = Path.home() / ".config" / "missive"

CONFIG_FILE = Path(os.environ.get("MISSIVE_CONFIG", CONFIG_DIR / "config.toml")).expanduser()


def ensure_config_dir() -> Path:
    """Create the directory holding the config file if it doesn't exist.

    Returns the directory path.
    """
    CONFIG_FILE.parent.mkdir(parents=True, exist_ok=True)
    return CONFIG_FILE.parent
