# tests/conftest.py
"""Pytest configuration with shared fixtures for the moded editor tests.

curses is never initialised: every module that talks to curses gets the
same `make_curses_mock()` object patched in for the duration of a test.
"""

from __future__ import annotations

from typing import Any, Generator
from unittest.mock import MagicMock, patch

import pytest

from moded.core.Editor import Editor
from moded.core.EditorState import EditorState, Mode
from moded.core.LineBuffer import LineBuffer
from moded.utils.utils import DEFAULT_CONFIG, deep_merge

from stubs import make_curses_mock

CURSES_USERS = (
    "moded.core.Editor.curses",
    "moded.ui.DrawScreen.curses",
    "moded.ui.KeyBinder.curses",
)


# --- Automatic mocking of the curses module ---
@pytest.fixture(autouse=True)
def mock_curses() -> Generator[MagicMock, None, None]:
    """Patch `curses` in every moded module that uses it.

    Yields:
        MagicMock: The shared curses replacement.
    """
    curses_mock = make_curses_mock()
    patchers = [patch(target, curses_mock) for target in CURSES_USERS]
    for p in patchers:
        p.start()
    try:
        yield curses_mock
    finally:
        for p in reversed(patchers):
            p.stop()


# --- Base fixtures for curses and configuration ---
@pytest.fixture
def mock_stdscr() -> MagicMock:
    """A mocked `stdscr` with a 24x80 terminal."""
    stdscr = MagicMock()
    stdscr.getmaxyx.return_value = (24, 80)
    return stdscr


@pytest.fixture
def mock_config() -> dict[str, Any]:
    """Baseline configuration: the embedded defaults."""
    return deep_merge({}, DEFAULT_CONFIG)


# --- Editor fixtures ---
@pytest.fixture
def real_editor(mock_stdscr: MagicMock, mock_config: dict[str, Any]) -> Editor:
    """A real `Editor` driving a mocked window.

    DrawScreen and KeyBinder are real too; only curses is fake.
    """
    return Editor(mock_stdscr, mock_config, initial_mode=Mode.NORMAL)


@pytest.fixture
def make_state():
    """Factory for an `EditorState` over the given rows."""

    def _make(
        lines: list[str] | None = None,
        mode: Mode = Mode.NORMAL,
        row: int = 0,
        column: int = 0,
        enter_splits_line: bool = False,
    ) -> EditorState:
        state = EditorState(
            LineBuffer(lines or []), mode=mode, enter_splits_line=enter_splits_line
        )
        state.row = row
        state.column = column
        return state

    return _make
