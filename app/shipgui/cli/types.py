"""Shared types and utilities for CLI commands.

This module provides the option declarations used by several commands
to avoid code duplication.
"""

from pathlib import Path
from typing import Annotated

import typer

ConfigOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        "-c",
        help="Path to config file (default: ./shipgui.toml).",
    ),
]

DefineOption = Annotated[
    list[str] | None,
    typer.Option(
        "--define",
        "-D",
        help="Define a setting as section.key=value (overrides the config file).",
    ),
]


def is_quiet(ctx: typer.Context) -> bool:
    """Check whether the global --quiet option is set."""
    return bool(ctx.obj and ctx.obj.get("quiet"))
