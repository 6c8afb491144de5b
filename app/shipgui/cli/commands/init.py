"""Init command implementation.

Writes a starter shipgui.toml with example prune rules.
"""

from pathlib import Path
from typing import Annotated

import typer

from shipgui.core.config import ConfigError, default_config_data, save_config
from shipgui.core.paths import DEFAULT_CONFIG_FILENAME
from shipgui.utils.formatting import print_error, print_info, print_success, print_warning


def init_config(
    output: Annotated[
        Path,
        typer.Argument(help="Output path for the config file."),
    ] = Path(DEFAULT_CONFIG_FILENAME),
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            "-f",
            help="Overwrite an existing config file.",
        ),
    ] = False,
) -> None:
    """Create a starter configuration file.

    Examples:
        shipgui init
        shipgui init release.toml --force
    """
    if output.exists():
        if not force:
            print_error(f"Config file already exists: {output}")
            print_info("Use --force to overwrite or pass a different path.")
            raise typer.Exit(code=1)
        print_warning(f"Overwriting existing config file: {output}")

    try:
        saved_path = save_config(default_config_data(), output)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Config created: {saved_path}")
    print_info("Edit the [[prune.patterns]] tables, then run 'shipgui check'.")
