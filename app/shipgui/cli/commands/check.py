"""Check command implementation.

Runs the preflight checks of the prune step without touching any files.
"""

import typer
from rich.markup import escape

from shipgui.cli.types import ConfigOption, DefineOption
from shipgui.core.commands import CommandList
from shipgui.core.config import require_config
from shipgui.core.paths import get_trash_dir
from shipgui.models.platform import detect_platform
from shipgui.prune.classifier import PatternLayer
from shipgui.prune.engine import PruneEngine
from shipgui.prune.errors import ConfigurationError
from shipgui.utils.formatting import (
    console,
    create_layers_table,
    print_error,
    print_info,
    print_success,
)


def _summarize(globs: list[str], limit: int = 3) -> str:
    """Shorten a glob list for table display."""
    if not globs:
        return "-"
    shown = escape(", ".join(globs[:limit]))
    if len(globs) > limit:
        shown += f" (+{len(globs) - limit} more)"
    return shown


def _print_layers(layers: list[PatternLayer]) -> None:
    """Display the active layers as a table."""
    table = create_layers_table()
    for layer in layers:
        table.add_row(
            escape(layer.name),
            _summarize([m.pattern for m in layer.accept]),
            _summarize([m.pattern for m in layer.reject]),
        )
    console.print(table)


def check(
    config_path: ConfigOption = None,
    defines: DefineOption = None,
) -> None:
    """Validate the configuration without modifying any files.

    Examples:
        shipgui check
        shipgui check --config release.toml -D prune.skip=true
    """
    config = require_config(config_path, defines or [])
    platform = detect_platform()

    if config.prune.skip:
        print_info("Prune step (skipping)")
        print_success("Configuration is valid.")
        return

    trash_root = get_trash_dir(config.prepare.temp_directory)
    engine = PruneEngine(config.prune, platform, trash_root)
    try:
        layers = engine.build_layers()
    except ConfigurationError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_info(f"Target platform: {platform.value}")
    print_info(f"Using directory '{trash_root}' to hold pruned files.")
    _print_layers(layers)

    command_list = CommandList(config.prune.post_prune, platform)
    commands = command_list.commands()
    if commands:
        print_info(f"{command_list.name} commands:")
        for command in commands:
            console.print(f"  [muted]{escape(command)}[/muted]", highlight=False)

    print_success("Configuration is valid.")
