"""XDG-compliant path management for filemanip.

This module provides standardized paths following the XDG Base Directory
Specification for configuration, session state, and the trash directory.

XDG defaults:
- Config: ~/.config/filemanip/
- State: ~/.local/state/filemanip/
- Data: ~/.local/share/filemanip/ (holds the trash directory)
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "filemanip"

TRASH_DIRNAME = "trash"


def _get_xdg_dir(env_var: str, default_subdir: str) -> Path:
    """Get XDG directory respecting environment variable override.

    Args:
        env_var: XDG environment variable name (e.g., "XDG_CONFIG_HOME").
        default_subdir: Default subdirectory under home (e.g., ".config").

    Returns:
        Path to the application-specific directory.
    """
    base = os.environ.get(env_var)
    if base:
        return Path(base) / APP_NAME
    return Path.home() / default_subdir / APP_NAME


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/filemanip/ (or XDG_CONFIG_HOME/filemanip/).
    """
    return _get_xdg_dir("XDG_CONFIG_HOME", ".config")


def get_state_dir() -> Path:
    """Get the state directory path.

    Returns:
        Path to ~/.local/state/filemanip/ (or XDG_STATE_HOME/filemanip/).
    """
    return _get_xdg_dir("XDG_STATE_HOME", ".local/state")


def get_data_dir() -> Path:
    """Get the data directory path.

    Returns:
        Path to ~/.local/share/filemanip/ (or XDG_DATA_HOME/filemanip/).
    """
    return _get_xdg_dir("XDG_DATA_HOME", ".local/share")


def get_config_path() -> Path:
    """Get the configuration file path.

    Returns:
        Path to ~/.config/filemanip/config.toml.
    """
    return get_config_dir() / "config.toml"


def get_theme_path() -> Path:
    """Get the user theme file path.

    Returns:
        Path to ~/.config/filemanip/theme.toml.
    """
    return get_config_dir() / "theme.toml"


def get_session_path() -> Path:
    """Get the session file path.

    The session stores the sort key and hidden-file visibility between runs.

    Returns:
        Path to ~/.local/state/filemanip/session.toml.
    """
    return get_state_dir() / "session.toml"


def get_trash_dir() -> Path:
    """Get the default trash directory path.

    Returns:
        Path to ~/.local/share/filemanip/trash.
    """
    return get_data_dir() / TRASH_DIRNAME


def _ensure_dir(path: Path, name: str) -> Path:
    """Create directory if it doesn't exist.

    Args:
        path: Directory path to create.
        name: Human-readable name for error messages.

    Returns:
        The created/existing directory path.

    Raises:
        RuntimeError: If directory cannot be created.
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


def ensure_config_dir() -> Path:
    """Create the configuration directory if it doesn't exist.

    Raises:
        RuntimeError: If the directory cannot be created.
    """
    return _ensure_dir(get_config_dir(), "config")


def ensure_state_dir() -> Path:
    """Create the state directory if it doesn't exist.

    Raises:
        RuntimeError: If the directory cannot be created.
    """
    return _ensure_dir(get_state_dir(), "state")


def ensure_trash_dir(path: Path | None = None) -> Path:
    """Create the trash directory if it doesn't exist.

    Args:
        path: Explicit trash directory. Defaults to get_trash_dir().

    Returns:
        Path to the trash directory.

    Raises:
        RuntimeError: If the directory cannot be created.
    """
    return _ensure_dir(path if path is not None else get_trash_dir(), "trash")
