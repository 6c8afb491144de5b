"""Layered keep/discard classification of relative paths.

A PatternLayer is a self-contained accept/reject filter built from one
configuration rule or one built-in rule group. The Classifier combines
the active layers of a run:

- A layer with accept patterns keeps a path when the path matches one of
  its accept patterns and none of its own reject patterns. Such layers
  are OR-ed: a reject in one accepting layer never cancels a keep from
  another.
- A layer with only reject patterns keeps nothing. It cancels a keep
  reached by the layers declared before it.
- A path no layer keeps is discarded (fail-closed).
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from enum import Enum

from shipgui.prune.matcher import PathMatcher, normalize_path


class Decision(str, Enum):
    """Outcome of classifying one file.

    Attributes:
        KEEP: The file ships with the application.
        DISCARD: The file is moved to the trash root.
    """

    KEEP = "keep"
    DISCARD = "discard"


@dataclass(frozen=True, slots=True)
class PatternLayer:
    """An ordered accept set and reject set of compiled globs.

    Attributes:
        accept: Matchers selecting files this layer keeps.
        reject: Matchers excluding files from this layer's accept set.
        name: Label used in log output.
    """

    accept: tuple[PathMatcher, ...] = ()
    reject: tuple[PathMatcher, ...] = ()
    name: str = field(default="", compare=False)

    @classmethod
    def from_globs(
        cls,
        accept: Iterable[str] = (),
        reject: Iterable[str] = (),
        *,
        name: str = "",
    ) -> "PatternLayer":
        """Build a layer from glob strings.

        Args:
            accept: Globs of files to keep.
            reject: Globs of files to exclude from the keep set.
            name: Label used in log output.

        Returns:
            A new PatternLayer.
        """
        return cls(
            accept=tuple(PathMatcher(p) for p in accept),
            reject=tuple(PathMatcher(p) for p in reject),
            name=name,
        )

    @property
    def is_reject_only(self) -> bool:
        """True for a layer that only rejects."""
        return not self.accept and bool(self.reject)

    def is_accepted(self, path: str) -> bool:
        """Check whether the path matches any accept pattern."""
        return any(m.matches(path) for m in self.accept)

    def is_rejected(self, path: str) -> bool:
        """Check whether the path matches any reject pattern."""
        return any(m.matches(path) for m in self.reject)

    def keeps(self, path: str) -> bool:
        """Check whether this layer alone keeps the path."""
        return self.is_accepted(path) and not self.is_rejected(path)


class Classifier:
    """Computes keep/discard decisions from an ordered list of layers.

    The classifier holds no per-path state; ``classify`` is a pure
    function of the path.
    """

    def __init__(self, layers: Sequence[PatternLayer] = ()) -> None:
        self._layers: tuple[PatternLayer, ...] = tuple(layers)

    @property
    def layers(self) -> tuple[PatternLayer, ...]:
        """The active layers in evaluation order."""
        return self._layers

    def add_layer(self, layer: PatternLayer) -> None:
        """Append a layer after the existing ones."""
        self._layers = (*self._layers, layer)

    def is_kept(self, path: str) -> bool:
        """Check whether the path is kept.

        Args:
            path: Relative path, with either separator convention.

        Returns:
            True if the path is kept.
        """
        candidate = normalize_path(path)
        kept = False
        for layer in self._layers:
            if layer.is_reject_only:
                if kept and layer.is_rejected(candidate):
                    kept = False
            elif not kept and layer.keeps(candidate):
                kept = True
        return kept

    def classify(self, path: str) -> Decision:
        """Classify a relative path.

        Args:
            path: Relative path, with either separator convention.

        Returns:
            Decision.KEEP or Decision.DISCARD.
        """
        return Decision.KEEP if self.is_kept(path) else Decision.DISCARD
