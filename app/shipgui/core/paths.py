"""Path management for shipgui.

Work files live below a configurable temporary directory:

- Work directory: <temp_directory>/shipgui-work/
- Trash root: <temp_directory>/shipgui-work/trash/

User preferences follow the XDG Base Directory Specification:

- Config: ~/.config/shipgui/
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "shipgui"

DEFAULT_CONFIG_FILENAME = "shipgui.toml"
DEFAULT_TEMP_DIRECTORY = "./shipgui-tmp"
WORK_DIR_NAME = "shipgui-work"
TRASH_DIR_NAME = "trash"


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
    """Get the user configuration directory path.

    Returns:
        Path to ~/.config/shipgui/ (or XDG_CONFIG_HOME/shipgui/).
    """
    return _get_xdg_dir("XDG_CONFIG_HOME", ".config")


def get_user_theme_path() -> Path:
    """Get the user theme override path.

    Returns:
        Path to ~/.config/shipgui/theme.toml.
    """
    return get_config_dir() / "theme.toml"


def get_default_config_path() -> Path:
    """Get the project config file looked up when none is given.

    Returns:
        Path to ./shipgui.toml in the current working directory.
    """
    return Path.cwd() / DEFAULT_CONFIG_FILENAME


def get_work_dir(temp_directory: str | None = None) -> Path:
    """Get the work directory for a packaging run.

    Args:
        temp_directory: Base temporary directory from the ``[prepare]``
            section. Defaults to ./shipgui-tmp.

    Returns:
        Path to <temp_directory>/shipgui-work.
    """
    return Path(temp_directory or DEFAULT_TEMP_DIRECTORY) / WORK_DIR_NAME


def get_trash_dir(temp_directory: str | None = None) -> Path:
    """Get the trash root receiving pruned files.

    Args:
        temp_directory: Base temporary directory from the ``[prepare]`` section.

    Returns:
        Path to <temp_directory>/shipgui-work/trash.
    """
    return get_work_dir(temp_directory) / TRASH_DIR_NAME
