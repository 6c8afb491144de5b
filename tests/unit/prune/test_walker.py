"""Unit tests for tree enumeration.

Tests for TreeWalker and walk.
"""

from collections.abc import Callable, Iterator
from pathlib import Path

import pytest
from shipgui.prune.errors import EnumerationError
from shipgui.prune.walker import TreeWalker, walk


class TestTreeWalker:
    """Tests for TreeWalker."""

    def test_yields_relative_slash_paths(
        self, tmp_path: Path, make_tree: Callable[[Path, dict[str, str]], Path]
    ) -> None:
        """Files are yielded relative to the root, in sorted walk order."""
        make_tree(
            tmp_path,
            {"a.txt": "a", "sub/b.txt": "b", "sub/deeper/c.txt": "c"},
        )
        (tmp_path / "empty").mkdir()

        assert list(TreeWalker(tmp_path)) == ["a.txt", "sub/b.txt", "sub/deeper/c.txt"]

    def test_directories_are_not_yielded(self, tmp_path: Path) -> None:
        """Empty directories produce no entries."""
        (tmp_path / "only" / "dirs").mkdir(parents=True)
        assert list(TreeWalker(tmp_path)) == []

    def test_restartable(
        self, filetree1: Path, filetree1_files: dict[str, str]
    ) -> None:
        """Iterating twice gives the same paths."""
        walker = TreeWalker(filetree1)
        first = list(walker)
        assert first == list(walker)
        assert set(first) == set(filetree1_files)

    def test_sees_changes_between_iterations(self, tmp_path: Path) -> None:
        """Each iteration walks the current state of the tree."""
        (tmp_path / "a.txt").write_text("a")
        walker = TreeWalker(tmp_path)
        assert list(walker) == ["a.txt"]
        (tmp_path / "b.txt").write_text("b")
        assert list(walker) == ["a.txt", "b.txt"]

    def test_dotfiles_are_yielded(self, filetree1: Path) -> None:
        """Hidden files are enumerated like any other file."""
        assert ".dotfile" in list(TreeWalker(filetree1))

    def test_excluded_directory_skipped(
        self, tmp_path: Path, make_tree: Callable[[Path, dict[str, str]], Path]
    ) -> None:
        """Excluded directories are not entered."""
        make_tree(tmp_path, {"keep.txt": "k", "trash/old.txt": "o", "trash/sub/x.txt": "x"})
        assert list(TreeWalker(tmp_path, [tmp_path / "trash"])) == ["keep.txt"]

    def test_missing_root_raises(self, tmp_path: Path) -> None:
        """A missing root cannot be enumerated."""
        with pytest.raises(EnumerationError, match="does not exist"):
            list(TreeWalker(tmp_path / "missing"))

    def test_file_root_raises(self, tmp_path: Path) -> None:
        """A regular file is not a valid root."""
        target = tmp_path / "file.txt"
        target.write_text("x")
        with pytest.raises(EnumerationError):
            list(TreeWalker(target))

    def test_symlinked_directory_not_descended(
        self, tmp_path: Path, symlinks_supported: None
    ) -> None:
        """A link to a directory is yielded as an entry, not walked."""
        (tmp_path / "realdir").mkdir()
        (tmp_path / "realdir" / "f.txt").write_text("f")
        (tmp_path / "linkdir").symlink_to(tmp_path / "realdir", target_is_directory=True)

        assert list(TreeWalker(tmp_path)) == ["linkdir", "realdir/f.txt"]

    def test_symlinks_to_files_are_yielded(
        self, tmp_path: Path, symlinks_supported: None
    ) -> None:
        """File links and dangling links are yielded."""
        (tmp_path / "f.txt").write_text("f")
        (tmp_path / "link.txt").symlink_to(tmp_path / "f.txt")
        (tmp_path / "dangling").symlink_to(tmp_path / "missing")

        assert list(TreeWalker(tmp_path)) == ["dangling", "f.txt", "link.txt"]


    def test_exclusion_through_symlinked_root(
        self, tmp_path: Path, symlinks_supported: None
    ) -> None:
        """Exclusions match when the root is reached through a link."""
        real = tmp_path / "real"
        (real / "trash").mkdir(parents=True)
        (real / "keep.txt").write_text("k")
        (real / "trash" / "old.txt").write_text("o")
        link = tmp_path / "link"
        link.symlink_to(real, target_is_directory=True)

        assert list(TreeWalker(link, [real / "trash"])) == ["keep.txt"]
        assert list(TreeWalker(real, [link / "trash"])) == ["keep.txt"]

class TestWalkFunction:
    """Tests for walk function."""

    def test_returns_lazy_iterator(self, filetree1: Path) -> None:
        """walk returns an iterator, not a list."""
        result = walk(filetree1)
        assert isinstance(result, Iterator)
        assert not isinstance(result, list)

    def test_missing_root_raises_on_iteration(self, tmp_path: Path) -> None:
        """Errors surface when the iterator is consumed."""
        result = walk(tmp_path / "missing")
        with pytest.raises(EnumerationError):
            next(result)
