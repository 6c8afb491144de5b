"""Target platform identifiers.

The platform is always passed explicitly through constructors and calls.
Only the CLI asks the host which platform it is running on.
"""

import sys
from enum import Enum


class Platform(str, Enum):
    """Target operating system of a packaging run.

    Attributes:
        LINUX: Linux desktops.
        MACOS: macOS.
        WINDOWS: Microsoft Windows.
    """

    LINUX = "linux"
    MACOS = "macos"
    WINDOWS = "windows"


VALID_PLATFORM_NAMES: tuple[str, ...] = tuple(p.value for p in Platform)


def is_valid_platform(name: str) -> bool:
    """Check whether a platform name (any case) is recognized."""
    return name.lower() in VALID_PLATFORM_NAMES


def parse_platform(name: str | Platform) -> Platform:
    """Convert a platform name to a Platform.

    Args:
        name: Platform name in any letter case, or a Platform.

    Returns:
        Matching Platform member.

    Raises:
        ValueError: If the name is not a recognized platform.
    """
    if isinstance(name, Platform):
        return name
    lowered = name.lower()
    if lowered not in VALID_PLATFORM_NAMES:
        msg = (
            f"Invalid platform value '{name}'. "
            "Valid options are 'macos', 'linux', or 'windows'."
        )
        raise ValueError(msg)
    return Platform(lowered)


def detect_platform() -> Platform:
    """Detect the platform of the running host.

    Returns:
        Platform matching sys.platform. Unknown Unix flavours map to LINUX.
    """
    if sys.platform == "win32":
        return Platform.WINDOWS
    if sys.platform == "darwin":
        return Platform.MACOS
    return Platform.LINUX
