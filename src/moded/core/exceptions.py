# moded/core/exceptions.py
"""Error taxonomy for the moded editor.

- LoadFailure: a file could not be read. The session degrades to an empty buffer.
- OutOfRange: a row/column index fell outside the buffer. The editing state
  machine guards every such access, so this never reaches the user.
- SaveFailure: the buffer could not be written. Reported on the status line.
"""

from typing import Optional


class EditorError(Exception):
    """Base class for all moded errors."""


class LoadFailure(EditorError):
    """Raised when a document cannot be read from disk."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Could not open '{path}': {reason}")
        self.path = path
        self.reason = reason


class SaveFailure(EditorError):
    """Raised when the buffer cannot be written to its target path."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Could not write '{path}': {reason}")
        self.path = path
        self.reason = reason


class OutOfRange(EditorError, IndexError):
    """Raised by LineBuffer when a row or column index is out of bounds."""

    def __init__(self, what: str, index: int, limit: Optional[int] = None) -> None:
        if limit is None:
            message = f"{what} index {index} is out of range"
        else:
            message = f"{what} index {index} is out of range (limit {limit})"
        super().__init__(message)
        self.what = what
        self.index = index
        self.limit = limit
