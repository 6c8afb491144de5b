"""Unit tests for shell execution utilities."""

import os
import subprocess
import sys
from pathlib import Path
from unittest.mock import patch

import pytest
from shipgui.utils.shell import CommandResult, merged_environment, run_command


class TestCommandResult:
    """Tests for CommandResult."""

    def test_success(self) -> None:
        """Exit code 0 is success."""
        assert CommandResult(stdout="", stderr="", returncode=0).success
        assert not CommandResult(stdout="", stderr="", returncode=1).success

    def test_output(self) -> None:
        """output joins stdout and stderr."""
        result = CommandResult(stdout="out\n", stderr="err\n", returncode=0)
        assert result.output == "out\nerr\n"


class TestRunCommand:
    """Tests for run_command function."""

    def test_captures_stdout(self) -> None:
        """Standard output is captured."""
        result = run_command([sys.executable, "-c", "print('hello')"])
        assert result.success
        assert result.stdout.strip() == "hello"

    def test_nonzero_exit(self) -> None:
        """A failing command reports its exit code."""
        result = run_command([sys.executable, "-c", "import sys; sys.exit(3)"])
        assert result.returncode == 3

    def test_check_raises(self) -> None:
        """check=True raises on failure."""
        with pytest.raises(subprocess.CalledProcessError):
            run_command([sys.executable, "-c", "import sys; sys.exit(1)"], check=True)

    def test_env_merged(self) -> None:
        """Extra variables are added to the inherited environment."""
        code = "import os; print(os.environ['SHIPGUI_TEST'], 'PATH' in os.environ)"
        result = run_command([sys.executable, "-c", code], env={"SHIPGUI_TEST": "value"})
        assert result.stdout.split() == ["value", "True"]

    def test_cwd(self, tmp_path: Path) -> None:
        """Commands run in the given directory."""
        code = "import os; print(os.getcwd())"
        result = run_command([sys.executable, "-c", code], cwd=str(tmp_path))
        assert Path(result.stdout.strip()).resolve() == tmp_path.resolve()

    def test_shell_command_line(self) -> None:
        """With shell=True a command line string is run by the shell."""
        result = run_command("echo shipgui", shell=True)
        assert result.success
        assert "shipgui" in result.stdout


class TestMergedEnvironment:
    """Tests for merged_environment function."""

    def test_nothing_to_add(self) -> None:
        """Without extras the environment is inherited."""
        assert merged_environment(None) is None
        assert merged_environment({}) is None

    def test_extras_override(self) -> None:
        """Extra variables win over inherited ones."""
        with patch.dict(os.environ, {"SHIPGUI_A": "old"}):
            env = merged_environment({"SHIPGUI_A": "new"})
        assert env is not None
        assert env["SHIPGUI_A"] == "new"
