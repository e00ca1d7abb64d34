# moded/core/EditorState.py
"""moded.core.EditorState
========================

Explicit editing state handed to the state machine on every event: the
line buffer, the active mode, the cursor and a few session flags.

Cursor invariant (holds after every dispatched event):
    - zero rows: cursor is (0, 0);
    - otherwise ``0 <= row < len(buffer)`` and
      ``0 <= column <= max_column()``, where ``max_column()`` is
      ``max(0, len(line) - 1)`` in NORMAL/COMMAND mode (cursor rests *on* a
      character) and ``len(line)`` in INSERT mode (cursor rests *between*
      characters).
"""

from enum import Enum
from typing import Optional

from moded.core.LineBuffer import LineBuffer


class Mode(Enum):
    NORMAL = "normal"
    INSERT = "insert"
    COMMAND = "command"

    @property
    def indicator(self) -> str:
        """Status-line tag for the mode."""
        if self is Mode.COMMAND:
            return ":"
        return f"-- {self.value.upper()} --"

    @property
    def cursor_style(self) -> str:
        return "bar" if self is Mode.INSERT else "block"

    @classmethod
    def from_name(cls, name: str) -> "Mode":
        """Resolve a CLI/config mode name, case-insensitively."""
        try:
            return cls(name.strip().lower())
        except ValueError:
            valid = ", ".join(m.value for m in cls)
            raise ValueError(f"Unknown mode {name!r} (expected one of: {valid})") from None


class EditorState:
    """Mutable state owned exclusively by the editing state machine.

    Attributes:
        buffer (LineBuffer): The document rows.
        mode (Mode): Active mode.
        row (int): Cursor row index.
        column (int): Cursor column index.
        status_message (str): Message shown after the mode indicator.
        modified (bool): Set when the buffer has unsaved changes.
        running (bool): Cleared by a quit input; the driver then stops.
        enter_splits_line (bool): INSERT-mode Enter splits the line at the
            cursor instead of opening an empty row below.
    """

    def __init__(
        self,
        buffer: Optional[LineBuffer] = None,
        mode: Mode = Mode.NORMAL,
        enter_splits_line: bool = False,
    ) -> None:
        self.buffer: LineBuffer = buffer if buffer is not None else LineBuffer()
        self.mode: Mode = mode
        self.row: int = 0
        self.column: int = 0
        self.status_message: str = ""
        self.modified: bool = False
        self.running: bool = True
        self.enter_splits_line: bool = enter_splits_line
        self.clamp_cursor()

    @property
    def cursor(self) -> tuple[int, int]:
        """Cursor as ``(column, row)``."""
        return self.column, self.row

    @property
    def line_count(self) -> int:
        return len(self.buffer)

    def current_line(self) -> str:
        if not self.line_count:
            return ""
        return self.buffer.row(self.row)

    def max_column(self) -> int:
        """Largest valid column on the current row for the active mode."""
        length = len(self.current_line())
        if self.mode is Mode.INSERT:
            return length
        return max(0, length - 1)

    def clamp_column(self) -> None:
        self.column = max(0, min(self.column, self.max_column()))

    def clamp_cursor(self) -> None:
        """Bring the cursor back inside the buffer for the active mode."""
        if not self.line_count:
            self.row = 0
            self.column = 0
            return
        self.row = max(0, min(self.row, self.line_count - 1))
        self.clamp_column()

    def ensure_row(self) -> None:
        """Give an empty buffer its first row so text can be typed into it."""
        if not self.line_count:
            self.buffer.insert_row(0, "")
            self.row = 0
            self.column = 0

    def __repr__(self) -> str:
        return (
            f"EditorState(mode={self.mode.name}, cursor={self.cursor}, "
            f"rows={self.line_count}, modified={self.modified})"
        )
