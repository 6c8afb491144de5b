"""Utility modules for shipgui.

This module exports commonly used utility functions.
"""

from shipgui.utils.formatting import (
    console,
    err_console,
    print_error,
    print_info,
    print_kept,
    print_pruned,
    print_success,
    print_warning,
)
from shipgui.utils.shell import CommandResult, run_command

__all__ = [
    "CommandResult",
    "console",
    "err_console",
    "print_error",
    "print_info",
    "print_kept",
    "print_pruned",
    "print_success",
    "print_warning",
    "run_command",
]
