"""Config file I/O operations.

This module loads the shipgui configuration from TOML (or JSON) files,
applies ``key.sub=value`` overrides and validates the result with the
Pydantic models. It also writes starter configuration files.
"""

import json
import os
import tomllib
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import tomli_w
from pydantic import ValidationError

from shipgui.core.paths import get_default_config_path
from shipgui.models.config import ShipConfig, describe_validation_error
from shipgui.prune.errors import ConfigurationError

# Top-level sections a define may address
CONFIG_ROOT_KEYS: tuple[str, ...] = ("prepare", "prune")


class ConfigError(ConfigurationError):
    """Base exception for config-file errors."""


class ConfigNotFoundError(ConfigError):
    """Raised when the config file is not found."""


class ConfigParseError(ConfigError):
    """Raised when the config file cannot be parsed."""


class ConfigValidationError(ConfigError):
    """Raised when config content is invalid."""


def parse_define(setting: str) -> tuple[list[str], str]:
    """Split a ``key.sub=value`` override.

    Args:
        setting: Override as given on the command line.

    Returns:
        Tuple of (key parts, value). A setting without ``=`` has an
        empty value.

    Raises:
        ConfigError: If the key does not address a known section.
    """
    key, _, value = setting.partition("=")
    key_parts = key.split(".")
    if key_parts[0] not in CONFIG_ROOT_KEYS:
        msg = f"Unknown config key part '{key_parts[0]}' found in key '{key}'."
        raise ConfigError(msg)
    if len(key_parts) < 2 or not all(key_parts):
        msg = f"Config key '{key}' must have the form 'section.name'."
        raise ConfigError(msg)
    return key_parts, value


def apply_defines(data: dict[str, Any], defines: Iterable[str]) -> dict[str, Any]:
    """Apply ``key.sub=value`` overrides to a raw config document.

    Values are stored as strings; the models coerce them (for example
    ``prune.skip=true``).

    Args:
        data: Raw config document, modified in place.
        defines: Overrides in command-line order; later ones win.

    Returns:
        The updated document.

    Raises:
        ConfigError: If an override key is invalid.
    """
    for setting in defines:
        key_parts, value = parse_define(setting)
        section: dict[str, Any] = data
        for part in key_parts[:-1]:
            child = section.get(part)
            if not isinstance(child, dict):
                child = {}
                section[part] = child
            section = child
        section[key_parts[-1]] = value
    return data


def read_config_data(path: Path) -> dict[str, Any]:
    """Read a raw config document.

    Files ending in ``.json`` are parsed as JSON, anything else as TOML.

    Args:
        path: Config file path.

    Returns:
        Parsed document.

    Raises:
        ConfigNotFoundError: If the file doesn't exist.
        ConfigParseError: If the syntax is invalid.
        ConfigError: If the file cannot be read.
    """
    if not path.exists():
        raise ConfigNotFoundError(f"Configuration file not found at '{path}'.")

    try:
        if path.suffix.lower() == ".json":
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        else:
            with open(path, "rb") as f:
                data = tomllib.load(f)
    except (tomllib.TOMLDecodeError, json.JSONDecodeError) as e:
        raise ConfigParseError(f"An error occurred while parsing '{path}': {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    if not isinstance(data, dict):
        raise ConfigParseError(f"Configuration file '{path}' must contain a table/object.")
    return data


def load_config(path: Path | None = None, defines: Iterable[str] = ()) -> ShipConfig:
    """Load, override and validate a config file.

    Overrides are checked before the file is read.

    Args:
        path: Config file path. If None, uses ./shipgui.toml.
        defines: ``key.sub=value`` overrides.

    Returns:
        Validated ShipConfig.

    Raises:
        ConfigError: If the file or an override is invalid.
    """
    defines = list(defines)
    for setting in defines:
        parse_define(setting)

    config_path = path or get_default_config_path()
    data = apply_defines(read_config_data(config_path), defines)

    try:
        return ShipConfig.model_validate(data)
    except ValidationError as e:
        msg = f"Invalid configuration in '{config_path}': {describe_validation_error(e)}"
        raise ConfigValidationError(msg) from e


def default_config_data() -> dict[str, Any]:
    """Build the starter configuration written by ``shipgui init``."""
    return {
        "prepare": {"temp_directory": "./shipgui-tmp"},
        "prune": {
            "skip": False,
            "post_prune": [],
            "patterns": [
                {
                    "keep": ["package.json", "LICENSE*", "README*", "dist/**/*"],
                    "delete": ["**/*.map", "**/*.d.ts"],
                },
                {"keep": ["resources/linux/**/*"], "platform": "linux"},
                {"keep": ["resources/macos/**/*"], "platform": "macos"},
                {"keep": ["resources/windows/**/*"], "platform": "windows"},
            ],
        },
    }


def save_config(data: dict[str, Any], path: Path) -> Path:
    """Write a config document as TOML.

    The file is written atomically by first writing to a temporary file
    in the same directory and then using os.replace().

    Args:
        data: Config document.
        path: Destination path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    from tempfile import NamedTemporaryFile

    path.parent.mkdir(parents=True, exist_ok=True)

    tmp_path: Path | None = None
    try:
        with NamedTemporaryFile(mode="wb", dir=path.parent, delete=False, suffix=".tmp") as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return path


def require_config(path: Path | None = None, defines: Iterable[str] = ()) -> ShipConfig:
    """Load config or exit with a helpful error message.

    Args:
        path: Optional config file path.
        defines: ``key.sub=value`` overrides.

    Returns:
        Loaded and validated ShipConfig.

    Raises:
        typer.Exit: If the config cannot be loaded.
    """
    import typer

    from shipgui.utils.formatting import print_error, print_info

    try:
        return load_config(path, defines)
    except ConfigNotFoundError as e:
        print_error(str(e))
        print_info("Run 'shipgui init' to create a starter configuration.")
        raise typer.Exit(code=1) from e
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
