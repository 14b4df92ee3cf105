"""Locations of user configuration files.

Everything lives in one directory under ``$XDG_CONFIG_HOME`` (default
``~/.config``):

- ``nodecleaner/config.json``: persisted target folder names
- ``nodecleaner/theme.toml``: optional color overrides

The config file location can also be set directly through the
``NODECLEANER_CONFIG`` environment variable.
"""

import os
from pathlib import Path

APP_NAME = "nodecleaner"
CONFIG_PATH_ENV = "NODECLEANER_CONFIG"
CONFIG_FILENAME = "config.json"
THEME_FILENAME = "theme.toml"


def get_config_dir() -> Path:
    """Return the application's config directory (it may not exist yet)."""
    xdg_config_home = os.environ.get("XDG_CONFIG_HOME")
    base = Path(xdg_config_home) if xdg_config_home else Path.home() / ".config"
    return base / APP_NAME


def get_config_path() -> Path:
    """Return the path of the target list config file.

    ``NODECLEANER_CONFIG`` wins over the XDG location when set and non-empty.
    """
    override = os.environ.get(CONFIG_PATH_ENV)
    if override:
        return Path(override).expanduser()
    return get_config_dir() / CONFIG_FILENAME


def get_user_theme_path() -> Path:
    """Return the path of the optional user theme file."""
    return get_config_dir() / THEME_FILENAME


def ensure_dir(path: Path, name: str) -> Path:
    """Create a directory and its parents if needed.

    Args:
        path: Directory to create.
        name: What the directory is for, used in error messages.

    Returns:
        The directory path.

    Raises:
        RuntimeError: If the directory cannot be created.
    """
    try:
        path.mkdir(parents=True, exist_ok=True)
    except PermissionError as e:
        msg = f"Cannot create {name} directory {path}: Permission denied"
        raise RuntimeError(msg) from e
    except OSError as e:
        msg = f"Cannot create {name} directory {path}: {e}"
        raise RuntimeError(msg) from e
    return path
