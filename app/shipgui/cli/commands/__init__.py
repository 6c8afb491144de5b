"""CLI commands for shipgui.

This package contains all subcommand implementations.
"""

from shipgui.cli.commands import check, init, prune

__all__ = ["check", "init", "prune"]
