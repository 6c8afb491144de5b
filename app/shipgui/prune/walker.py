"""Lazy enumeration of the files in a directory tree.

Every non-directory entry is yielded as a forward-slash relative path:
regular files, symlinks to files, dangling symlinks and symlinks to
directories. Symlinked directories are never descended into. Directory
names and file names are sorted, so the order is stable for a given
tree.
"""

import logging
import os
from collections.abc import Iterable, Iterator
from pathlib import Path

from shipgui.prune.errors import EnumerationError

logger = logging.getLogger(__name__)


class TreeWalker:
    """Restartable lazy sequence of relative file paths under a root.

    Each iteration starts a fresh walk, so the same walker can be used
    again after the tree changed.

    Args:
        root: Directory to enumerate.
        exclude: Directories under root that are skipped entirely,
            such as a trash root placed inside the tree.
    """

    def __init__(self, root: Path, exclude: Iterable[Path] = ()) -> None:
        self._root = Path(root)
        self._exclude = frozenset(Path(os.path.realpath(p)) for p in exclude)

    @property
    def root(self) -> Path:
        """Directory being enumerated."""
        return self._root

    def __iter__(self) -> Iterator[str]:
        """Walk the tree, yielding relative paths.

        Raises:
            EnumerationError: If the root or a directory below it cannot be read.
        """
        if not self._root.is_dir():
            msg = f"Directory to prune does not exist or is not a directory: {self._root}"
            raise EnumerationError(msg)

        root_abs = os.path.realpath(self._root)

        def _on_error(error: OSError) -> None:
            msg = f"Cannot read directory '{error.filename}': {error.strerror}"
            raise EnumerationError(msg) from error

        for dirpath, dirnames, filenames in os.walk(root_abs, onerror=_on_error):
            kept_dirs: list[str] = []
            links: list[str] = []
            for name in sorted(dirnames):
                full = os.path.join(dirpath, name)
                if os.path.islink(full):
                    links.append(name)
                elif Path(full) in self._exclude:
                    logger.debug("Skipping excluded directory %s", full)
                else:
                    kept_dirs.append(name)
            dirnames[:] = kept_dirs

            rel_dir = os.path.relpath(dirpath, root_abs)
            for name in sorted([*filenames, *links]):
                rel = name if rel_dir == os.curdir else os.path.join(rel_dir, name)
                yield rel.replace(os.sep, "/")


def walk(root: Path, exclude: Iterable[Path] = ()) -> Iterator[str]:
    """Enumerate the files under root as relative forward-slash paths.

    Args:
        root: Directory to enumerate.
        exclude: Directories to skip.

    Returns:
        Lazy iterator of relative paths.
    """
    return iter(TreeWalker(root, exclude))
