"""Data models for shipgui.

This module exports the configuration models and platform identifiers.
"""

from shipgui.models.config import (
    CommandEntry,
    FilePattern,
    PrepareConfig,
    PruneConfig,
    ShipConfig,
)
from shipgui.models.platform import Platform, detect_platform, parse_platform

__all__ = [
    "CommandEntry",
    "FilePattern",
    "Platform",
    "PrepareConfig",
    "PruneConfig",
    "ShipConfig",
    "detect_platform",
    "parse_platform",
]
