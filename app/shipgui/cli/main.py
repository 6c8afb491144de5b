"""Main CLI application entry point.

Defines the Typer application, the global options and logging setup.
"""

import logging
from typing import Annotated

import typer

from shipgui import __version__
from shipgui.cli.commands import check, init, prune

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"

app = typer.Typer(
    name="shipgui",
    help="Prune and package built GUI applications for Linux, macOS and Windows.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"shipgui version {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool, quiet: bool) -> None:
    """Route library log records to stderr.

    Per-file decisions are logged at INFO and shown on the console by the
    commands themselves, so the log only surfaces warnings unless
    --verbose is given.
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format=LOG_FORMAT)


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log debug details to stderr."),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Hide per-file kept/pruned lines."),
    ] = False,
) -> None:
    """shipgui - reduce a built application tree to what ships.

    Files no rule keeps are moved to a trash directory before the tree is
    wrapped into an archive or installer.
    """
    configure_logging(verbose, quiet)
    ctx.ensure_object(dict)
    ctx.obj.update(verbose=verbose, quiet=quiet)


app.command(name="check")(check.check)
app.command(name="prune")(prune.prune)
app.command(name="init")(init.init_config)


if __name__ == "__main__":
    app()
