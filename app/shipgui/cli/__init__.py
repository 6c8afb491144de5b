"""CLI package for shipgui.

This package contains the Typer application and all subcommands.
"""

from shipgui.cli.main import app

__all__ = ["app"]
