# tests/stubs.py
"""Test stubs for moded editor tests.

- `make_curses_mock()` builds a `curses` replacement with a real exception
  class and integer constants, so code under test can compare key codes and
  combine attributes without a terminal.
- `StubEditor` is the subset of the session driver DrawScreen relies on.
"""

from typing import Any, Optional
from unittest.mock import MagicMock

from wcwidth import wcswidth, wcwidth

from moded.core.EditorState import EditorState, Mode
from moded.core.LineBuffer import LineBuffer


class CursesError(Exception):
    """Minimal replacement for `curses.error` used in tests."""


CURSES_CONSTANTS: dict[str, int] = {
    "ERR": -1,
    "A_NORMAL": 0,
    "A_REVERSE": 1 << 18,
    "A_BOLD": 1 << 21,
    "A_DIM": 1 << 20,
    "ACS_HLINE": ord("-"),
    "COLOR_WHITE": 7,
    "COLOR_BLACK": 0,
    "COLORS": 256,
    "COLOR_PAIRS": 256,
    "KEY_DOWN": 258,
    "KEY_UP": 259,
    "KEY_LEFT": 260,
    "KEY_RIGHT": 261,
    "KEY_HOME": 262,
    "KEY_BACKSPACE": 263,
    "KEY_F0": 264,
    "KEY_DC": 330,
    "KEY_IC": 331,
    "KEY_NPAGE": 338,
    "KEY_PPAGE": 339,
    "KEY_ENTER": 343,
    "KEY_BTAB": 353,
    "KEY_END": 360,
    "KEY_RESIZE": 410,
}


def make_curses_mock() -> MagicMock:
    curses_mock = MagicMock()
    curses_mock.error = CursesError
    for name, value in CURSES_CONSTANTS.items():
        setattr(curses_mock, name, value)
    curses_mock.has_colors.return_value = True
    curses_mock.color_pair.side_effect = lambda n: n << 8
    return curses_mock


class StubEditor:
    """Minimal subset of the moded session driver used by DrawScreen."""

    def __init__(
        self,
        lines: Optional[list[str]] = None,
        height: int = 24,
        width: int = 80,
        config: Optional[dict[str, Any]] = None,
    ) -> None:
        self.stdscr = MagicMock()
        self.stdscr.getmaxyx.return_value = (height, width)
        self.config: dict[str, Any] = config or {}
        self.colors: dict[str, int] = {}
        self.state = EditorState(LineBuffer(lines or []), mode=Mode.NORMAL)
        self.filename: Optional[str] = "/tmp/notes.txt"
        self.encoding = "utf-8"
        self.scroll_top = 0
        self.scroll_left = 0
        self._force_full_redraw = False
        self.status_messages: list[str] = []

    def _set_status_message(self, msg: str) -> None:
        self.status_messages.append(str(msg))
        self.state.status_message = str(msg)

    def get_char_width(self, ch: str) -> int:
        w = wcwidth(ch)
        return w if w >= 0 else 1

    def get_string_width(self, text: str) -> int:
        w = wcswidth(text)
        return w if w >= 0 else sum(self.get_char_width(ch) for ch in text)
