"""Prune engine orchestrating classification, quarantine and cleanup.

The engine turns the ``[prune]`` configuration and a target platform into
a Classifier, walks the built application tree, moves every discarded
file into the trash root and finally compacts the tree.

Run lifecycle: NOT_STARTED -> VALIDATED -> WALKING -> COMPLETED, with FAILED
reachable from validation and from any I/O error while walking.

Validation happens before any file I/O. Any failure is fatal: the run
stops, nothing is rolled back, and the trash root is left as-is so the
moved files can be inspected or moved back by hand.
"""

import logging
import os
import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from shipgui.models.config import PruneConfig, describe_validation_error
from shipgui.models.platform import Platform, parse_platform
from shipgui.prune.classifier import Classifier, Decision, PatternLayer
from shipgui.prune.compactor import TreeCompactor
from shipgui.prune.errors import ConfigurationError, PruneError
from shipgui.prune.quarantine import QuarantineMover
from shipgui.prune.runtime import runtime_layer
from shipgui.prune.walker import TreeWalker

logger = logging.getLogger(__name__)

TRASH_DIRECTORY_VARIABLE = "PRUNE_TRASH_DIRECTORY"
SOURCE_DIRECTORY_VARIABLE = "PRUNE_SOURCE_DIRECTORY"

DecisionCallback = Callable[[str, Decision], None]


class PruneState(str, Enum):
    """Lifecycle state of a prune run."""

    NOT_STARTED = "not_started"
    VALIDATED = "validated"
    WALKING = "walking"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class FileDecision:
    """Decision taken for one file.

    Attributes:
        path: Forward-slash path relative to the pruned root.
        decision: Keep or discard.
        trash_path: Location under the trash root for discarded files.
    """

    path: str
    decision: Decision
    trash_path: Path | None = None

    @property
    def kept(self) -> bool:
        """True if the file stays in the tree."""
        return self.decision is Decision.KEEP


@dataclass(slots=True)
class PruneResult:
    """Outcome of a prune run.

    Attributes:
        success: Whether the run completed.
        state: Final lifecycle state.
        trash_root: Directory holding discarded files.
        decisions: Per-file decisions, in walk order.
        empty_dirs_removed: Number of empty directories removed.
        symlinks_removed: Number of symlinks removed.
        skipped: True if pruning was disabled by configuration.
        dry_run: True if nothing was moved.
        error: Error message for a failed run.
    """

    success: bool
    state: PruneState
    trash_root: Path
    decisions: list[FileDecision] = field(default_factory=list)
    empty_dirs_removed: int = 0
    symlinks_removed: int = 0
    skipped: bool = False
    dry_run: bool = False
    error: str | None = None

    @property
    def kept(self) -> list[str]:
        """Relative paths of kept files."""
        return [d.path for d in self.decisions if d.kept]

    @property
    def pruned(self) -> list[str]:
        """Relative paths of discarded files."""
        return [d.path for d in self.decisions if not d.kept]


def _is_within(path: Path, root: Path) -> bool:
    path_abs = Path(os.path.realpath(path))
    root_abs = Path(os.path.realpath(root))
    return path_abs == root_abs or root_abs in path_abs.parents


class PruneEngine:
    """Prunes a built application tree down to its shipped files.

    Args:
        config: The ``[prune]`` section, as a model or a raw mapping.
        platform: Target platform of the run.
        trash_root: Directory receiving discarded files.
        on_decision: Optional callback invoked for every classified file
            before it is acted upon.
        dry_run: Classify and report without touching the tree.
    """

    def __init__(
        self,
        config: PruneConfig | Mapping[str, Any] | None,
        platform: Platform | str,
        trash_root: Path,
        *,
        on_decision: DecisionCallback | None = None,
        dry_run: bool = False,
    ) -> None:
        self._raw_config = config
        self._raw_platform = platform
        self._trash_root = Path(trash_root)
        self._on_decision = on_decision
        self._dry_run = dry_run

        self._state = PruneState.NOT_STARTED
        self._error: str | None = None
        self._config: PruneConfig | None = None
        self._platform: Platform | None = None
        self._classifier: Classifier | None = None
        self._source_root: Path | None = None

    @property
    def state(self) -> PruneState:
        """Current lifecycle state."""
        return self._state

    @property
    def trash_root(self) -> Path:
        """Directory receiving discarded files."""
        return self._trash_root

    @property
    def classifier(self) -> Classifier | None:
        """Classifier built by validation, None before."""
        return self._classifier

    def _parse_config(self) -> PruneConfig:
        if self._config is not None:
            return self._config
        raw = self._raw_config
        if raw is None:
            msg = "The config file doesn't contain a 'prune' section."
            raise ConfigurationError(msg)
        if isinstance(raw, PruneConfig):
            self._config = raw
        else:
            try:
                self._config = PruneConfig.model_validate(dict(raw))
            except ValidationError as e:
                msg = f"Invalid 'prune' section: {describe_validation_error(e)}"
                raise ConfigurationError(msg) from e
        return self._config

    def _parse_platform(self) -> Platform:
        if self._platform is None:
            try:
                self._platform = parse_platform(self._raw_platform)
            except ValueError as e:
                raise ConfigurationError(str(e)) from e
        return self._platform

    def is_skipped(self) -> bool:
        """Check whether the configuration disables pruning.

        Raises:
            ConfigurationError: If the section cannot be parsed.
        """
        return self._parse_config().skip

    def build_layers(self) -> list[PatternLayer]:
        """Assemble the active layers for the target platform.

        User rules come first, in declaration order; the built-in runtime
        layer is always last.

        Returns:
            Active PatternLayers in evaluation order.

        Raises:
            ConfigurationError: If ``patterns`` is missing, a platform name
                is unknown or a glob cannot be compiled.
        """
        config = self._parse_config()
        platform = self._parse_platform()

        if config.patterns is None:
            msg = "The 'prune' section in the config file doesn't contain a 'patterns' field."
            raise ConfigurationError(msg)

        layers: list[PatternLayer] = []
        for index, pattern in enumerate(config.patterns):
            if not pattern.applies_to(platform):
                logger.debug("Skipping patterns[%d]: not active on %s", index, platform.value)
                continue
            try:
                layer = PatternLayer.from_globs(
                    pattern.keep, pattern.delete, name=f"patterns[{index}]"
                )
            except (ValueError, re.error) as e:
                msg = f"Invalid glob in patterns[{index}]: {e}"
                raise ConfigurationError(msg) from e
            layers.append(layer)

        layers.append(runtime_layer(platform))
        return layers

    def validate(self) -> Classifier:
        """Validate the rules and build the classifier without touching files.

        Returns:
            Classifier for the run.

        Raises:
            ConfigurationError: If the rules are invalid. The engine moves to
                FAILED.
        """
        if self._classifier is not None:
            return self._classifier
        try:
            self._classifier = Classifier(self.build_layers())
        except ConfigurationError as e:
            self._fail(str(e))
            raise
        self._state = PruneState.VALIDATED
        logger.info(
            "Prune rules validated: %d active layer(s) for %s",
            len(self._classifier.layers),
            self._platform.value if self._platform else "?",
        )
        return self._classifier

    def run(self, root: Path) -> PruneResult:
        """Prune the tree under ``root``.

        Args:
            root: Built application directory.

        Returns:
            PruneResult. Failures are reported through ``success`` and
            ``error``, never raised.
        """
        self._source_root = Path(root)

        if self._state is PruneState.FAILED:
            return self._result(success=False)

        try:
            if self.is_skipped():
                logger.info("Prune step skipped by configuration")
                self._state = PruneState.COMPLETED
                return self._result(success=True, skipped=True)
            classifier = self.validate()
        except ConfigurationError as e:
            if self._state is not PruneState.FAILED:
                self._fail(str(e))
            return self._result(success=False)

        self._state = PruneState.WALKING
        exclude = [self._trash_root] if _is_within(self._trash_root, root) else []
        mover = QuarantineMover(root, self._trash_root, dry_run=self._dry_run)
        decisions: list[FileDecision] = []
        empty_dirs = 0
        symlinks = 0

        try:
            for path in TreeWalker(root, exclude):
                decision = classifier.classify(path)
                if decision is Decision.KEEP:
                    logger.info("kept %s", path)
                else:
                    logger.info("pruned %s", path)
                if self._on_decision is not None:
                    self._on_decision(path, decision)
                try:
                    target = mover.apply(path, decision)
                except PruneError:
                    decisions.append(FileDecision(path=path, decision=decision))
                    raise
                decisions.append(FileDecision(path=path, decision=decision, trash_path=target))

            if not self._dry_run:
                compactor = TreeCompactor(root, exclude)
                if self._platform is Platform.WINDOWS:
                    symlinks = compactor.remove_symlinks()
                empty_dirs = compactor.remove_empty_dirs()
        except (PruneError, OSError) as e:
            self._fail(str(e))
            return self._result(
                success=False,
                decisions=decisions,
                empty_dirs_removed=empty_dirs,
                symlinks_removed=symlinks,
            )

        self._state = PruneState.COMPLETED
        result = self._result(
            success=True,
            decisions=decisions,
            empty_dirs_removed=empty_dirs,
            symlinks_removed=symlinks,
        )
        logger.info(
            "Prune completed: %d kept, %d pruned (%d moved), "
            "%d empty directories and %d symlinks removed",
            len(result.kept),
            len(result.pruned),
            mover.moved_count,
            empty_dirs,
            symlinks,
        )
        return result

    def variables(self) -> dict[str, str]:
        """Variables exported to downstream steps.

        Returns:
            Mapping of environment variable name to value.
        """
        variables = {TRASH_DIRECTORY_VARIABLE: str(self._trash_root)}
        if self._source_root is not None:
            variables[SOURCE_DIRECTORY_VARIABLE] = str(self._source_root)
        return variables

    def _fail(self, message: str) -> None:
        self._state = PruneState.FAILED
        self._error = message
        logger.error("Prune failed: %s", message)

    def _result(self, *, success: bool, **kwargs: Any) -> PruneResult:
        return PruneResult(
            success=success,
            state=self._state,
            trash_root=self._trash_root,
            dry_run=self._dry_run,
            error=None if success else self._error,
            **kwargs,
        )
