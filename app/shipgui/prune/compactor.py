"""Post-prune cleanup of the directory tree.

Both passes walk bottom-up, so a directory is only examined after all of
its children have been handled.
"""

import logging
import os
from collections.abc import Iterable
from pathlib import Path

from shipgui.prune.errors import PruneIOError

logger = logging.getLogger(__name__)


class TreeCompactor:
    """Removes empty directories and symlinks left after pruning.

    The root itself is never removed.

    Args:
        root: Tree to compact.
        exclude: Directories under root that are left untouched.
    """

    def __init__(self, root: Path, exclude: Iterable[Path] = ()) -> None:
        self._root = Path(root)
        self._exclude = frozenset(Path(os.path.realpath(p)) for p in exclude)

    def _is_excluded(self, path: str) -> bool:
        candidate = Path(path)
        return any(candidate == e or e in candidate.parents for e in self._exclude)

    def remove_empty_dirs(self) -> int:
        """Remove every directory left without files or subdirectories.

        Removing a child can empty its parent; the bottom-up walk sees the
        parent afterwards, so a single pass reaches the fixed point.

        Returns:
            Number of directories removed.

        Raises:
            PruneIOError: If an empty directory cannot be removed.
        """
        root_abs = os.path.realpath(self._root)
        removed = 0
        for dirpath, _dirnames, _filenames in os.walk(root_abs, topdown=False):
            if dirpath == root_abs or self._is_excluded(dirpath):
                continue
            try:
                with os.scandir(dirpath) as entries:
                    if any(True for _ in entries):
                        continue
                os.rmdir(dirpath)
            except OSError as e:
                rel = os.path.relpath(dirpath, root_abs)
                msg = f"Cannot remove empty directory '{rel}': {e}"
                raise PruneIOError(msg, rel) from e
            logger.debug("Removed empty directory %s", dirpath)
            removed += 1
        return removed

    def remove_symlinks(self) -> int:
        """Remove every symbolic link in the tree.

        Links to files, links to directories and dangling links are all
        removed. Link targets are left alone.

        Returns:
            Number of links removed.

        Raises:
            PruneIOError: If a link cannot be removed.
        """
        root_abs = os.path.realpath(self._root)
        removed = 0
        for dirpath, dirnames, filenames in os.walk(root_abs, topdown=False):
            if self._is_excluded(dirpath):
                continue
            for name in sorted([*dirnames, *filenames]):
                full = os.path.join(dirpath, name)
                if not os.path.islink(full):
                    continue
                try:
                    # Windows directory links must be removed with rmdir
                    if os.name == "nt" and os.path.isdir(full):
                        os.rmdir(full)
                    else:
                        os.unlink(full)
                except OSError as e:
                    rel = os.path.relpath(full, root_abs)
                    msg = f"Cannot remove symlink '{rel}': {e}"
                    raise PruneIOError(msg, rel) from e
                logger.debug("Removed symlink %s", full)
                removed += 1
        return removed
