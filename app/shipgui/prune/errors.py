"""Exceptions raised by the prune engine.

Every error is fatal to a prune run. The engine catches them at its
boundary and reports a failed PruneResult carrying the message.
"""


class PruneError(Exception):
    """Base exception for prune-related errors."""


class ConfigurationError(PruneError):
    """Raised when prune rules are missing or invalid.

    Always raised during validation, before any file I/O.
    """


class EnumerationError(PruneError):
    """Raised when the tree to prune cannot be read."""


class PruneIOError(PruneError):
    """Raised when a discarded file cannot be moved into the trash root."""

    def __init__(self, message: str, path: str) -> None:
        super().__init__(message)
        self.path = path
