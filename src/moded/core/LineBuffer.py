# moded/core/LineBuffer.py
"""moded.core.LineBuffer
=======================

The editable text of a document as an ordered list of rows.

The buffer knows nothing about modes, cursors or input. It only offers
row/character access and mutation, and raises `OutOfRange` on invalid
indices instead of clamping them: keeping indices valid is the job of the
editing state machine.

Line boundaries:
    Both "\\n" and "\\r\\n" end a row, so files with mixed endings split into
    the rows a reader sees. The terminator after every row is recorded in
    `line_endings`, and the one after the last row (possibly none) in
    `final_ending`; `serialize()` writes them back, so
    ``LineBuffer.load(t).serialize() == t`` holds for every text. Rows
    created by editing use `separator`, the most frequent terminator of the
    loaded text. An empty text loads as zero rows, and zero rows always
    serialize to the empty string.
"""

import logging
import re
from typing import Iterable, Iterator, Optional

from moded.core.exceptions import OutOfRange

DEFAULT_SEPARATOR = "\n"
CRLF = "\r\n"

# capturing group keeps the terminators in re.split() output
LINE_BOUNDARY = re.compile(r"(\r?\n)")


class LineBuffer:
    """Ordered sequence of mutable text rows.

    Attributes:
        lines (list[str]): The rows, in on-screen order. Zero rows is valid.
        separator (str): Terminator used for rows created by editing.
        line_endings (list[str]): Terminator after each row but the last;
            always one entry shorter than `lines` (empty for zero rows).
        final_ending (str): Terminator after the last row, "" if none.
    """

    def __init__(
        self,
        lines: Optional[Iterable[str]] = None,
        separator: str = DEFAULT_SEPARATOR,
        trailing_separator: bool = False,
    ) -> None:
        self.lines: list[str] = list(lines) if lines is not None else []
        self.separator = separator
        self.line_endings: list[str] = [separator] * max(0, len(self.lines) - 1)
        self.final_ending: str = separator if trailing_separator else ""

    @property
    def trailing_separator(self) -> bool:
        return bool(self.final_ending)

    # --- load / serialize ---
    @classmethod
    def load(cls, text: str) -> "LineBuffer":
        """Split *text* into rows. Never raises; empty text yields zero rows."""
        if not text:
            return cls()

        parts = LINE_BOUNDARY.split(text)
        rows = parts[0::2]
        endings = parts[1::2]
        final_ending = ""
        if endings and rows[-1] == "":
            # split() leaves an empty tail after the final terminator
            rows.pop()
            final_ending = endings.pop()

        crlf_count = endings.count(CRLF) + (final_ending == CRLF)
        lf_count = len(endings) + bool(final_ending) - crlf_count
        separator = CRLF if crlf_count > lf_count else DEFAULT_SEPARATOR

        buf = cls(rows, separator=separator)
        buf.line_endings = endings
        buf.final_ending = final_ending
        logging.debug(
            "LineBuffer.load: %d rows, separator=%r, mixed=%s, trailing=%s",
            len(rows),
            separator,
            bool(crlf_count and lf_count),
            bool(final_ending),
        )
        return buf

    def serialize(self) -> str:
        """Join the rows back into text. Zero rows yield an empty string."""
        if not self.lines:
            return ""
        pieces: list[str] = []
        last = len(self.lines) - 1
        for index, line in enumerate(self.lines):
            pieces.append(line)
            if index < last:
                pieces.append(
                    self.line_endings[index] if index < len(self.line_endings) else self.separator
                )
        pieces.append(self.final_ending)
        return "".join(pieces)

    # --- access ---
    def __len__(self) -> int:
        return len(self.lines)

    def __iter__(self) -> Iterator[str]:
        return iter(self.lines)

    def __bool__(self) -> bool:
        # an empty buffer is still a buffer
        return True

    def __repr__(self) -> str:
        return f"LineBuffer({len(self.lines)} rows, separator={self.separator!r})"

    def __str__(self) -> str:
        body = "\n".join(self.lines)
        return f"--------------Buffer--------------\n{body}\n"

    def row(self, index: int) -> str:
        """Return the row at *index*."""
        self._check_row(index)
        return self.lines[index]

    def line_length(self, index: int) -> int:
        return len(self.row(index))

    # --- row mutation ---
    def insert_row(self, index: int, text: str = "") -> None:
        """Insert a new row so that it ends up at *index* (0 <= index <= len)."""
        if not 0 <= index <= len(self.lines):
            raise OutOfRange("row", index, len(self.lines))
        if self.lines:
            # the new row is followed by a break; at the end it follows one
            self.line_endings.insert(index, self.separator)
        self.lines.insert(index, text)

    def remove_row(self, index: int) -> str:
        self._check_row(index)
        if self.line_endings:
            self.line_endings.pop(min(index, len(self.line_endings) - 1))
        return self.lines.pop(index)

    def split_row(self, index: int, column: int) -> None:
        """Break row *index* at *column*; the tail becomes the next row."""
        line = self.row(index)
        if not 0 <= column <= len(line):
            raise OutOfRange("column", column, len(line))
        # the tail keeps the original terminator of the row
        self.line_endings.insert(index, self.separator)
        self.lines[index] = line[:column]
        self.lines.insert(index + 1, line[column:])

    # --- character mutation ---
    def insert_char(self, row: int, column: int, ch: str) -> None:
        """Insert *ch* before position *column* (0 <= column <= len(line))."""
        line = self.row(row)
        if not 0 <= column <= len(line):
            raise OutOfRange("column", column, len(line))
        self.lines[row] = line[:column] + ch + line[column:]

    def remove_char(self, row: int, column: int) -> str:
        """Remove and return the character at *column* (0 <= column < len(line))."""
        line = self.row(row)
        if not 0 <= column < len(line):
            raise OutOfRange("column", column, len(line) - 1)
        self.lines[row] = line[:column] + line[column + 1 :]
        return line[column]

    def _check_row(self, index: int) -> None:
        if not 0 <= index < len(self.lines):
            raise OutOfRange("row", index, len(self.lines) - 1)
