"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

import os
from collections.abc import Callable
from pathlib import Path

import pytest

# Files of the reference tree used by the classifier scenarios
FILETREE1: dict[str, str] = {
    "README.md": "# Demo\n",
    "logo.png": "png",
    "src/code.js": "console.log('hi');\n",
    "src/code.test.js": "test('x', () => {});\n",
    "info.txt": "info\n",
    "src/info.txt": "more info\n",
    ".dotfile": "hidden\n",
    "note.txt": "note\n",
}


def write_tree(root: Path, files: dict[str, str]) -> Path:
    """Create files (and their parent directories) below root."""
    for rel, content in files.items():
        target = root / rel
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content)
    return root


def snapshot(root: Path) -> dict[str, bytes]:
    """Map every regular file below root to its content."""
    result: dict[str, bytes] = {}
    for dirpath, _dirnames, filenames in os.walk(root):
        for name in filenames:
            full = Path(dirpath) / name
            result[full.relative_to(root).as_posix()] = full.read_bytes()
    return result


@pytest.fixture
def filetree1(tmp_path: Path) -> Path:
    """The reference tree: docs, sources, tests, a dotfile and notes."""
    return write_tree(tmp_path / "filetree1", FILETREE1)


@pytest.fixture
def filetree1_rules() -> list[dict[str, list[str]]]:
    """Prune rules for the reference tree, as they appear in a config file."""
    return [
        {"keep": ["README.md", "logo.png"]},
        {"keep": ["src/*.js"], "delete": ["src/*.test.js"]},
        {"keep": ["**/info.txt"]},
        {"keep": ["**/note.txt"]},
        {"delete": ["**/note.txt"]},
    ]


@pytest.fixture
def symlinks_supported(tmp_path: Path) -> None:
    """Skip the test when the host cannot create symlinks."""
    check = tmp_path / "symlink-check"
    try:
        check.symlink_to(tmp_path)
    except (OSError, NotImplementedError):
        pytest.skip("symlinks are not supported on this host")
    check.unlink()


@pytest.fixture
def filetree1_files() -> dict[str, str]:
    """Relative paths and contents of the reference tree."""
    return dict(FILETREE1)


@pytest.fixture
def make_tree() -> Callable[[Path, dict[str, str]], Path]:
    """Factory creating a file tree below a root."""
    return write_tree


@pytest.fixture
def tree_snapshot() -> Callable[[Path], dict[str, bytes]]:
    """Function mapping every file below a root to its content."""
    return snapshot
