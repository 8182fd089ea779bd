"""XDG-compliant path management for slowrm.

slowrm keeps no state of its own; the only file it reads is an
optional colour theme under the XDG config directory.
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "slowrm"


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/slowrm/ (or XDG_CONFIG_HOME/slowrm/).
    """
    base = os.environ.get("XDG_CONFIG_HOME")
    if base:
        return Path(base) / APP_NAME
    return Path.home() / ".config" / APP_NAME


def get_theme_path() -> Path:
    """Get the user theme file path.

    Returns:
        Path to ~/.config/slowrm/theme.toml.
    """
    return get_config_dir() / "theme.toml"
