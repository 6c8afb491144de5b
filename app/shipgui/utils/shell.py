"""Subprocess helpers.

Commands run with captured text output. Callers pass either an argument
list or, with ``shell=True``, a command line for the system shell.
"""

import os
import subprocess
from collections.abc import Mapping
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Captured outcome of a finished process.

    Attributes:
        stdout: Standard output from the command.
        stderr: Standard error from the command.
        returncode: Exit code of the command.
    """

    stdout: str
    stderr: str
    returncode: int

    @classmethod
    def from_completed(cls, completed: subprocess.CompletedProcess[str]) -> "CommandResult":
        """Build a result from ``subprocess.run`` output."""
        return cls(
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
            returncode=completed.returncode,
        )

    @property
    def success(self) -> bool:
        """Check if command executed successfully."""
        return self.returncode == 0

    @property
    def output(self) -> str:
        """Standard output followed by standard error."""
        return self.stdout + self.stderr


def merged_environment(extra: Mapping[str, str] | None) -> dict[str, str] | None:
    """Overlay extra variables on the current environment.

    Returns None when there is nothing to add, so the child simply
    inherits the parent's environment.
    """
    if not extra:
        return None
    return {**os.environ, **extra}


def run_command(
    args: list[str] | str,
    *,
    shell: bool = False,
    check: bool = False,
    timeout: float | None = 60.0,
    cwd: str | None = None,
    env: Mapping[str, str] | None = None,
) -> CommandResult:
    """Run a command to completion.

    Args:
        args: Argument list, or a command line when ``shell`` is True.
        shell: Run the command line through the system shell.
        check: If True, raise CalledProcessError on non-zero exit.
        timeout: Seconds to wait before giving up, None to wait forever.
        cwd: Working directory for the command.
        env: Variables added to the inherited environment.

    Returns:
        CommandResult with stdout, stderr, and returncode.

    Raises:
        subprocess.CalledProcessError: If check=True and command fails.
        subprocess.TimeoutExpired: If command exceeds timeout.
        FileNotFoundError: If command executable is not found.
    """
    completed = subprocess.run(  # nosec: B602
        args,
        shell=shell,
        capture_output=True,
        text=True,
        check=check,
        timeout=timeout,
        cwd=cwd,
        env=merged_environment(env),
    )
    return CommandResult.from_completed(completed)
