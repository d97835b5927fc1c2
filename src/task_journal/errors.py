"""Error kinds raised by the journal.

Filesystem failures are not wrapped: they surface as the ``OSError``
raised by the operating system.
"""

from pathlib import Path


class JournalError(Exception):
    """Base class for journal errors."""


class ConfigurationError(JournalError):
    """No journal file path could be resolved."""


class JournalNotFoundError(JournalError, FileNotFoundError):
    """The journal file does not exist but the operation requires it."""

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"Journal file not found: {path}")


class CorruptStoreError(JournalError):
    """A non-empty journal file does not hold a valid task list."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Corrupt journal file {path}: {reason}")


class InvalidPositionError(JournalError, IndexError):
    """A task position outside ``[1, length]`` was requested."""

    def __init__(self, position: int, length: int):
        self.position = position
        self.length = length
        if length == 0:
            message = f"Invalid task position {position}: task list is empty"
        else:
            message = f"Invalid task position {position}: expected 1-{length}"
        super().__init__(message)
