"""Prune command implementation.

Reduces a built application tree to the files its runtime needs, moving
everything else into the trash directory, then runs the configured
post-prune commands.
"""

import json
from pathlib import Path
from typing import Annotated, Any

import typer

from shipgui.cli.types import ConfigOption, DefineOption, is_quiet
from shipgui.core.commands import CommandList
from shipgui.core.config import require_config
from shipgui.core.paths import get_trash_dir, get_work_dir
from shipgui.models.platform import Platform, detect_platform
from shipgui.prune.classifier import Decision
from shipgui.prune.engine import PruneEngine, PruneResult
from shipgui.utils.formatting import (
    console,
    print_error,
    print_info,
    print_kept,
    print_pruned,
    print_success,
    print_warning,
)


def _print_decision(path: str, decision: Decision) -> None:
    """Print the log line of one classified file."""
    if decision is Decision.KEEP:
        print_kept(path)
    else:
        print_pruned(path)


def prune(
    ctx: typer.Context,
    root: Annotated[
        Path,
        typer.Argument(help="Built application directory to prune."),
    ],
    config_path: ConfigOption = None,
    defines: DefineOption = None,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", "-n", help="Show what would be pruned without moving files."),
    ] = False,
    report_path: Annotated[
        Path | None,
        typer.Option("--report", "-r", help="Write a JSON report of all decisions."),
    ] = None,
) -> None:
    """Prune a built application tree.

    Files no rule keeps are moved to the trash directory, preserving their
    relative paths, so a prune can always be undone by moving them back.

    Examples:
        shipgui prune ./build
        shipgui prune ./build --dry-run
        shipgui prune ./build -D prepare.temp_directory=/tmp/ship --report prune.json
    """
    config = require_config(config_path, defines or [])
    platform = detect_platform()
    trash_root = get_trash_dir(config.prepare.temp_directory)

    engine = PruneEngine(
        config.prune,
        platform,
        trash_root,
        on_decision=None if is_quiet(ctx) else _print_decision,
        dry_run=dry_run,
    )

    if not config.prune.skip:
        print_info(f"Pruning files in '{root}' for {platform.value}")
    result = engine.run(root)

    if result.skipped:
        print_info("Prune step (skipping)")
        return

    _print_summary(result)

    if report_path is not None:
        _export_report(result, root, platform, report_path)

    if not result.success:
        print_error(result.error or "Prune failed.")
        print_info(f"Files pruned so far are kept in '{result.trash_root}'.")
        raise typer.Exit(code=1)

    if dry_run:
        print_info("[DRY-RUN] No files were moved.")
        return

    commands = CommandList(config.prune.post_prune, platform)
    if commands.commands():
        work_dir = get_work_dir(config.prepare.temp_directory)
        work_dir.mkdir(parents=True, exist_ok=True)
        print_info(f"Running {commands.name} commands in '{work_dir}'")
        for outcome in commands.execute(engine.variables(), cwd=work_dir):
            if outcome.result is not None and outcome.result.output:
                console.print(outcome.result.output, markup=False, highlight=False, end="")
            if not outcome.success:
                print_error(outcome.error or f"Command failed: {outcome.command}")
                raise typer.Exit(code=1)

    print_success(f"Prune complete. Pruned files are in '{result.trash_root}'.")


# === Private helper functions ===


def _print_summary(result: PruneResult) -> None:
    """Display decision counts and cleanup counts."""
    console.print(
        f"\n[kept]{len(result.kept)} kept[/], [pruned]{len(result.pruned)} pruned[/]"
    )
    if not result.dry_run:
        console.print(
            f"[muted]Removed {result.empty_dirs_removed} empty directories "
            f"and {result.symlinks_removed} symlinks[/muted]"
        )


def _report_data(result: PruneResult, root: Path, platform: Platform) -> dict[str, Any]:
    """Build the JSON report document."""
    return {
        "success": result.success,
        "state": result.state.value,
        "platform": platform.value,
        "root": str(root),
        "trash_root": str(result.trash_root),
        "dry_run": result.dry_run,
        "kept": result.kept,
        "pruned": result.pruned,
        "empty_dirs_removed": result.empty_dirs_removed,
        "symlinks_removed": result.symlinks_removed,
        "error": result.error,
    }


def _export_report(result: PruneResult, root: Path, platform: Platform, report_path: Path) -> None:
    """Write the JSON report, warning instead of failing on I/O errors."""
    report_path = report_path.resolve()
    try:
        report_path.parent.mkdir(parents=True, exist_ok=True)
        report_path.write_text(json.dumps(_report_data(result, root, platform), indent=2))
        print_info(f"Report written to {report_path}")
    except OSError as e:
        print_warning(f"Failed to write report: {e}")
