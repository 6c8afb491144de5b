"""Pruning of built application trees.

This package classifies every file of a built application tree against
layered glob rules, moves discarded files into a trash root and cleans
up the remaining tree.
"""

from shipgui.prune.classifier import Classifier, Decision, PatternLayer
from shipgui.prune.compactor import TreeCompactor
from shipgui.prune.engine import FileDecision, PruneEngine, PruneResult, PruneState
from shipgui.prune.errors import (
    ConfigurationError,
    EnumerationError,
    PruneError,
    PruneIOError,
)
from shipgui.prune.matcher import PathMatcher, matches
from shipgui.prune.quarantine import QuarantineMover
from shipgui.prune.runtime import RUNTIME_SHAPES, RuntimeShape, runtime_layer
from shipgui.prune.walker import TreeWalker, walk

__all__ = [
    "RUNTIME_SHAPES",
    "Classifier",
    "ConfigurationError",
    "Decision",
    "EnumerationError",
    "FileDecision",
    "PathMatcher",
    "PatternLayer",
    "PruneEngine",
    "PruneError",
    "PruneIOError",
    "PruneResult",
    "PruneState",
    "QuarantineMover",
    "RuntimeShape",
    "TreeCompactor",
    "TreeWalker",
    "matches",
    "runtime_layer",
    "walk",
]
