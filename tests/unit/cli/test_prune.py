"""Unit tests for prune command.

Tests for the CLI prune command implementation.
"""

import json
from collections.abc import Callable, Iterator
from pathlib import Path
from unittest.mock import patch

import pytest
from shipgui.cli.main import app
from shipgui.models.platform import Platform
from shipgui.utils.shell import CommandResult
from typer.testing import CliRunner

runner = CliRunner()

RULES = """\
[[prune.patterns]]
keep = ["README.md", "logo.png"]

[[prune.patterns]]
keep = ["src/*.js"]
delete = ["src/*.test.js"]

[[prune.patterns]]
keep = ["**/info.txt"]

[[prune.patterns]]
keep = ["**/note.txt"]

[[prune.patterns]]
delete = ["**/note.txt"]
"""


@pytest.fixture
def temp_directory(tmp_path: Path) -> Path:
    """Base temporary directory for the work files."""
    return tmp_path / "tmp"


@pytest.fixture
def write_config(tmp_path: Path, temp_directory: Path) -> Callable[[str], Path]:
    """Factory writing a config file with the given prune extras."""

    def _write(extra: str = "") -> Path:
        path = tmp_path / "shipgui.toml"
        path.write_text(
            f'[prepare]\ntemp_directory = "{temp_directory.as_posix()}"\n\n'
            f"[prune]\n{extra}\n{RULES}"
        )
        return path

    return _write


@pytest.fixture(autouse=True)
def linux_host() -> Iterator[None]:
    """Run every command as if on Linux."""
    with patch("shipgui.cli.commands.prune.detect_platform", return_value=Platform.LINUX):
        yield


def _trash(temp_directory: Path) -> Path:
    return temp_directory / "shipgui-work" / "trash"


class TestPruneCommand:
    """Tests for shipgui prune command."""

    def test_prunes_tree(
        self, filetree1: Path, temp_directory: Path, write_config: Callable[[str], Path]
    ) -> None:
        """Discarded files are moved to the trash and logged."""
        config = write_config("")

        result = runner.invoke(app, ["prune", str(filetree1), "--config", str(config)])

        assert result.exit_code == 0
        assert "pruned note.txt" in result.stdout
        assert "kept   README.md" in result.stdout
        assert "5 kept" in result.stdout
        assert "3 pruned" in result.stdout
        assert (_trash(temp_directory) / "src" / "code.test.js").is_file()
        assert not (filetree1 / "note.txt").exists()

    def test_quiet(self, filetree1: Path, write_config: Callable[[str], Path]) -> None:
        """--quiet hides per-file lines but keeps the summary."""
        config = write_config("")

        result = runner.invoke(app, ["-q", "prune", str(filetree1), "--config", str(config)])

        assert result.exit_code == 0
        assert "pruned note.txt" not in result.stdout
        assert "3 pruned" in result.stdout

    def test_dry_run(
        self, filetree1: Path, temp_directory: Path, write_config: Callable[[str], Path]
    ) -> None:
        """--dry-run moves nothing."""
        config = write_config("")

        result = runner.invoke(
            app, ["prune", str(filetree1), "--config", str(config), "--dry-run"]
        )

        assert result.exit_code == 0
        assert "DRY-RUN" in result.stdout
        assert (filetree1 / "note.txt").exists()
        assert not _trash(temp_directory).exists()

    def test_report(
        self, tmp_path: Path, filetree1: Path, write_config: Callable[[str], Path]
    ) -> None:
        """--report writes all decisions as JSON."""
        config = write_config("")
        report = tmp_path / "report.json"

        result = runner.invoke(
            app, ["prune", str(filetree1), "--config", str(config), "--report", str(report)]
        )

        assert result.exit_code == 0
        data = json.loads(report.read_text())
        assert data["success"] is True
        assert data["platform"] == "linux"
        assert sorted(data["pruned"]) == [".dotfile", "note.txt", "src/code.test.js"]

    def test_report_after_move_failure(
        self, tmp_path: Path, filetree1: Path, write_config: Callable[[str], Path]
    ) -> None:
        """The report of a failed run lists the file that could not be moved."""
        config = write_config("")
        report = tmp_path / "report.json"

        with (
            patch("shipgui.prune.quarantine.os.rename", side_effect=OSError("busy")),
            patch("shipgui.prune.quarantine.shutil.move", side_effect=OSError("busy")),
        ):
            result = runner.invoke(
                app, ["prune", str(filetree1), "--config", str(config), "--report", str(report)]
            )

        assert result.exit_code == 1
        data = json.loads(report.read_text())
        assert data["success"] is False
        assert data["pruned"] == [".dotfile"]
        assert (filetree1 / ".dotfile").exists()

    def test_missing_patterns_fails(
        self, tmp_path: Path, filetree1: Path, filetree1_files: dict[str, str]
    ) -> None:
        """Without patterns the command fails and the tree is untouched."""
        config = tmp_path / "shipgui.toml"
        config.write_text("[prune]\nskip = false\n")

        result = runner.invoke(app, ["prune", str(filetree1), "--config", str(config)])

        assert result.exit_code == 1
        for rel in filetree1_files:
            assert (filetree1 / rel).exists()

    def test_skip(self, tmp_path: Path, filetree1: Path) -> None:
        """A skipped prune step leaves the tree untouched."""
        config = tmp_path / "shipgui.toml"
        config.write_text("[prune]\nskip = true\n")

        result = runner.invoke(app, ["prune", str(filetree1), "--config", str(config)])

        assert result.exit_code == 0
        assert "skipping" in result.stdout
        assert (filetree1 / "note.txt").exists()

    def test_missing_root_fails(self, tmp_path: Path, write_config: Callable[[str], Path]) -> None:
        """A missing tree fails the command."""
        config = write_config("")

        result = runner.invoke(app, ["prune", str(tmp_path / "missing"), "--config", str(config)])

        assert result.exit_code == 1

    def test_post_prune_commands(
        self, filetree1: Path, temp_directory: Path, write_config: Callable[[str], Path]
    ) -> None:
        """post_prune commands get the exported variables."""
        config = write_config(
            'post_prune = ["echo all", { command = "echo win", platform = "windows" }]'
        )

        with patch("shipgui.core.commands.run_command") as mock_run:
            mock_run.return_value = CommandResult(stdout="", stderr="", returncode=0)
            result = runner.invoke(app, ["prune", str(filetree1), "--config", str(config)])

        assert result.exit_code == 0
        mock_run.assert_called_once()
        assert "Running post_prune commands" in result.stdout
        assert mock_run.call_args.args[0] == "echo all"
        env = mock_run.call_args.kwargs["env"]
        assert env["PRUNE_TRASH_DIRECTORY"] == str(_trash(temp_directory))
        assert env["PRUNE_SOURCE_DIRECTORY"] == str(filetree1)
        assert (temp_directory / "shipgui-work").is_dir()

    def test_post_prune_failure(
        self, filetree1: Path, write_config: Callable[[str], Path]
    ) -> None:
        """A failing post_prune command fails the command."""
        config = write_config('post_prune = ["false"]')

        with patch("shipgui.core.commands.run_command") as mock_run:
            mock_run.return_value = CommandResult(stdout="", stderr="", returncode=1)
            result = runner.invoke(app, ["prune", str(filetree1), "--config", str(config)])

        assert result.exit_code == 1
