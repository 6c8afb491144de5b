"""Soft deletion of discarded files into a trash root.

A discarded file is moved to ``trash_root / relative_path``, so the trash
root mirrors the source tree and every prune can be undone by moving the
files back.
"""

import logging
import os
import shutil
from pathlib import Path

from shipgui.prune.classifier import Decision
from shipgui.prune.errors import PruneIOError

logger = logging.getLogger(__name__)


class QuarantineMover:
    """Applies keep/discard decisions to files of a source tree.

    Attributes:
        _source_root: Tree the relative paths are resolved against.
        _trash_root: Directory receiving discarded files. Created lazily.
        _dry_run: If True, report destinations without moving anything.
    """

    def __init__(self, source_root: Path, trash_root: Path, *, dry_run: bool = False) -> None:
        """Initialize the QuarantineMover.

        Args:
            source_root: Tree the relative paths are resolved against.
            trash_root: Directory receiving discarded files.
            dry_run: If True, report destinations without moving anything.
        """
        self._source_root = Path(source_root)
        self._trash_root = Path(trash_root)
        self._dry_run = dry_run
        self._moved = 0

    @property
    def trash_root(self) -> Path:
        """Directory receiving discarded files."""
        return self._trash_root

    @property
    def moved_count(self) -> int:
        """Number of files moved so far."""
        return self._moved

    def trash_path(self, path: str) -> Path:
        """Location a discarded relative path is moved to."""
        return self._trash_root.joinpath(*path.split("/"))

    def apply(self, path: str, decision: Decision) -> Path | None:
        """Act on one classified file.

        Args:
            path: Forward-slash path relative to the source root.
            decision: Classification of the file.

        Returns:
            Destination under the trash root for a discarded file,
            None for a kept file.

        Raises:
            PruneIOError: If the destination directory cannot be created
                or the file cannot be moved.
        """
        if decision is Decision.KEEP:
            logger.debug("Keeping %s", path)
            return None

        source = self._source_root.joinpath(*path.split("/"))
        target = self.trash_path(path)

        if self._dry_run:
            logger.info("Dry-run: would move %s to %s", source, target)
            return target

        try:
            target.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            msg = f"Cannot create directory '{target.parent}' for '{path}': {e}"
            raise PruneIOError(msg, path) from e

        try:
            # rename keeps symlinks as links; shutil.move copies across devices
            os.rename(source, target)
        except OSError:
            try:
                shutil.move(str(source), str(target))
            except OSError as e:
                msg = f"Cannot move '{path}' to '{target}': {e}"
                raise PruneIOError(msg, path) from e

        self._moved += 1
        logger.debug("Moved %s to %s", source, target)
        return target
