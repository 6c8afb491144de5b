"""Console colors for shipgui.

The palette is a pydantic model so a user file at
``~/.config/shipgui/theme.toml`` can override single colors:

    [colors]
    kept = "#00ff00"
    pruned = "#ff00aa"

Unknown keys or malformed colors discard the whole override file.
"""

import logging
import re
import sys
import tomllib
from functools import cache
from pathlib import Path
from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, ConfigDict, ValidationError
from rich.theme import Theme

from shipgui.core.paths import get_user_theme_path

logger = logging.getLogger(__name__)

_HEX_COLOR = re.compile(r"#(?:[0-9a-fA-F]{3}){1,2}")


def _check_hex(value: str) -> str:
    color = value.strip()
    if not _HEX_COLOR.fullmatch(color):
        msg = f"'{value}' is not a #RGB or #RRGGBB color"
        raise ValueError(msg)
    return color


HexColor = Annotated[str, AfterValidator(_check_hex)]


class ThemeColors(BaseModel):
    """Palette used by the console helpers."""

    model_config = ConfigDict(extra="forbid", validate_default=True)

    text: HexColor = "#ffffff"
    muted: HexColor = "#b2bec3"
    header: HexColor = "#69B9A1"
    border: HexColor = "#29526d"

    success: HexColor = "#03b971"
    warning: HexColor = "#f5b332"
    error: HexColor = "#f53263"
    info: HexColor = "#0ec1c8"

    kept: HexColor = "#c1ff62"
    pruned: HexColor = "#d44ebc"


def _read_overrides(path: Path) -> dict[str, Any]:
    """Read the ``[colors]`` table of a theme file.

    A missing file yields no overrides; unreadable files are reported and
    ignored.
    """
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        return {}
    except (tomllib.TOMLDecodeError, OSError) as e:
        logger.warning("Ignoring theme file %s: %s", path, e)
        print(f"Warning: Ignoring theme file {path}: {e}", file=sys.stderr)
        return {}

    colors = data.get("colors", {})
    if not isinstance(colors, dict):
        logger.warning("Ignoring theme file %s: 'colors' is not a table", path)
        return {}
    return colors


def load_theme(path: Path | None = None) -> ThemeColors:
    """Load the palette, applying user overrides over the defaults.

    Args:
        path: Theme file to read. Defaults to the user theme path.

    Returns:
        Validated ThemeColors.
    """
    theme_path = path or get_user_theme_path()
    overrides = _read_overrides(theme_path)
    if not overrides:
        return ThemeColors()

    try:
        colors = ThemeColors.model_validate(overrides)
    except ValidationError as e:
        logger.warning("Invalid theme %s, using defaults: %s", theme_path, e)
        print(f"Warning: Invalid theme configuration in {theme_path}", file=sys.stderr)
        return ThemeColors()

    logger.debug("Loaded theme overrides from %s", theme_path)
    return colors


def get_rich_theme(colors: ThemeColors | None = None) -> Theme:
    """Build the Rich theme.

    Every palette entry becomes a style of the same name; ``error`` and
    ``bold_header`` are bold, ``dim`` is an alias of ``muted``.
    """
    colors = colors or load_theme()
    styles = colors.model_dump()
    styles["error"] = f"bold {colors.error}"
    styles["bold_header"] = f"bold {colors.header}"
    styles["dim"] = colors.muted
    return Theme(styles)


@cache
def get_theme() -> Theme:
    """Rich theme shared by all consoles, loaded on first use."""
    return get_rich_theme()
