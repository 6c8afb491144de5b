"""Post-step command lists.

A command list holds shell command lines from the configuration. Plain
strings run on every platform; table entries carry a ``platform`` filter.
Commands run in order through the system shell and the first failure
stops the list.
"""

import logging
import subprocess
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from shipgui.models.config import CommandEntry
from shipgui.models.platform import Platform
from shipgui.utils.shell import CommandResult, run_command

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CommandOutcome:
    """Result of running one configured command.

    Attributes:
        command: Command line that was run.
        result: Captured process result, None if it could not start.
        error: Error message if the command failed.
    """

    command: str
    result: CommandResult | None = None
    error: str | None = None

    @property
    def success(self) -> bool:
        """Check if the command ran and exited with status 0."""
        return self.error is None and self.result is not None and self.result.success


class CommandList:
    """Platform-filtered list of shell commands.

    Args:
        commands: Items from the config: strings or CommandEntry tables.
        platform: Target platform used to filter table entries.
        name: Config key of the list, used in messages.
    """

    def __init__(
        self,
        commands: Sequence[str | CommandEntry],
        platform: Platform,
        name: str = "post_prune",
    ) -> None:
        self._commands = list(commands)
        self._platform = platform
        self._name = name

    @property
    def name(self) -> str:
        """Config key of the list."""
        return self._name

    def commands(self) -> list[str]:
        """Command lines that apply to the target platform, in order."""
        selected: list[str] = []
        for item in self._commands:
            if isinstance(item, str):
                selected.append(item)
            elif item.applies_to(self._platform):
                selected.append(item.command)
        return selected

    def execute(
        self,
        variables: dict[str, str],
        cwd: Path | None = None,
    ) -> list[CommandOutcome]:
        """Run the commands, stopping at the first failure.

        Args:
            variables: Environment variables added for the commands.
            cwd: Working directory for the commands.

        Returns:
            One outcome per command that was started.
        """
        outcomes: list[CommandOutcome] = []
        for command in self.commands():
            logger.info("Running %s command '%s'", self._name, command)
            try:
                result = run_command(
                    command,
                    shell=True,
                    timeout=None,
                    cwd=str(cwd) if cwd is not None else None,
                    env=variables,
                )
            except (OSError, subprocess.SubprocessError) as e:
                outcomes.append(CommandOutcome(command=command, error=str(e)))
                logger.error("Error occurred while running '%s': %s", command, e)
                break

            if not result.success:
                error = f"Error occurred while running '{command}' (exit code {result.returncode})."
                outcomes.append(CommandOutcome(command=command, result=result, error=error))
                logger.error(error)
                break
            outcomes.append(CommandOutcome(command=command, result=result))
        return outcomes
