# tests/ui/test_draw_screen.py
"""Unit tests for the `DrawScreen` renderer.
============================================

Validates the helpers and rendering behaviors of the screen layer:

- safe left cut and truncation of wide-character strings,
- status bar composition and error highlighting,
- single-line drawing with and without horizontal scroll,
- scroll adjustment that keeps the cursor visible,
- the small-window guard and the optional line-number gutter.

`StubEditor` provides the editor surface; `curses` is mocked by conftest.
"""

from typing import Any, Optional
from unittest.mock import call

import pytest

from moded.core.EditorState import Mode
from moded.core.RenderModel import build_render_model
from moded.ui.DrawScreen import DrawScreen

from stubs import CURSES_CONSTANTS, CursesError, StubEditor


def make_screen(
    lines: Optional[list[str]] = None,
    height: int = 24,
    width: int = 80,
    config: Optional[dict[str, Any]] = None,
) -> tuple[StubEditor, DrawScreen]:
    editor = StubEditor(lines, height=height, width=width, config=config)
    return editor, DrawScreen(editor, editor.config)


# --- String helpers ---
def test_truncate_string_respects_wide_chars() -> None:
    _, screen = make_screen()
    assert screen.truncate_string("abcdef", 3) == "abc"
    assert screen.truncate_string("日本語", 5) == "日本"
    assert screen.truncate_string("日本語", 1) == ""


def test_safe_cut_left_never_splits_wide_char() -> None:
    _, screen = make_screen()
    assert screen._safe_cut_left("abcdef", 2) == "cdef"
    assert screen._safe_cut_left("日本語", 2) == "本語"
    # boundary falls in the middle of 本: it is dropped as a whole
    assert screen._safe_cut_left("日本語", 3) == "語"


# --- Status bar ---
def test_status_text_layout() -> None:
    editor, screen = make_screen(["hello", "world"])
    editor.state.row, editor.state.column = 1, 3
    model = build_render_model(editor.state)

    text = screen.status_text(model, 60)

    assert len(text) == 60
    assert text.startswith(" -- NORMAL --")
    assert text.endswith(" notes.txt | UTF-8 | Ln 2/2 | Col 4 ")


def test_status_text_marks_modified_and_unnamed() -> None:
    editor, screen = make_screen(["x"])
    editor.filename = None
    editor.state.modified = True
    text = screen.status_text(build_render_model(editor.state), 60)
    assert "No Name* |" in text


def test_status_text_shows_command_prompt() -> None:
    editor, screen = make_screen(["x"])
    editor.state.mode = Mode.COMMAND
    editor.state.status_message = "Not an editor command: x"
    text = screen.status_text(build_render_model(editor.state), 80)
    assert text.startswith(" :Not an editor command: x")


def test_status_text_on_narrow_window_keeps_left_side() -> None:
    editor, screen = make_screen(["x"])
    text = screen.status_text(build_render_model(editor.state), 10)
    assert text == " -- NORMAL"


def test_status_bar_error_highlight() -> None:
    editor, screen = make_screen(["x"])
    editor.state.mode = Mode.COMMAND
    editor.state.status_message = "Could not write 'notes.txt': permission denied"

    screen._draw_status_bar(build_render_model(editor.state))

    editor.stdscr.chgat.assert_called_once()
    y, x, _, attr = editor.stdscr.chgat.call_args.args
    assert (y, x) == (23, 0)
    assert attr == screen.colors["status_error"]


def test_status_colors_use_configured_pairs(mock_curses) -> None:
    editor, screen = make_screen(config={"colors": {"status_fg": "#ffffff", "status_bg": "#000000"}})
    mock_curses.init_pair.assert_any_call(15, 231, 16)
    assert editor.colors["status"] == 15 << 8


def test_status_colors_fall_back_to_reverse(mock_curses) -> None:
    mock_curses.init_pair.side_effect = CursesError("no colors")
    editor, _ = make_screen()
    assert editor.colors["status"] == CURSES_CONSTANTS["A_REVERSE"]


# --- Lines ---
def test_draw_single_line_plain() -> None:
    editor, screen = make_screen()
    screen._draw_single_line(0, "hello", 80)
    editor.stdscr.addstr.assert_called_once_with(0, 0, "hello")


def test_draw_single_line_scrolled_and_clipped() -> None:
    editor, screen = make_screen()
    editor.scroll_left = 2
    screen._draw_single_line(3, "abcdefgh", 4)
    editor.stdscr.addstr.assert_called_once_with(3, 0, "cdef")


def test_draw_single_line_pads_split_wide_char() -> None:
    editor, screen = make_screen()
    editor.scroll_left = 1
    screen._draw_single_line(0, "日本", 80)
    # 日 is dropped; 本 starts one cell in
    editor.stdscr.addstr.assert_called_once_with(0, 1, "本")


def test_draw_single_line_renders_tab_as_space() -> None:
    editor, screen = make_screen()
    screen._draw_single_line(0, "a\tb", 80)
    editor.stdscr.addstr.assert_called_once_with(0, 0, "a b")


def test_empty_line_is_not_drawn() -> None:
    editor, screen = make_screen()
    screen._draw_single_line(0, "", 80)
    editor.stdscr.addstr.assert_not_called()


# --- Scrolling ---
def test_vertical_scroll_follows_cursor() -> None:
    lines = [f"line {i}" for i in range(100)]
    editor, screen = make_screen(lines, height=12)
    editor.state.row = 50
    screen._adjust_scroll(build_render_model(editor.state))
    # text area is 10 rows: row 50 is the last visible one
    assert editor.scroll_top == 41

    editor.state.row = 5
    screen._adjust_scroll(build_render_model(editor.state))
    assert editor.scroll_top == 5


def test_horizontal_scroll_follows_cursor() -> None:
    editor, screen = make_screen(["x" * 200], width=40)
    editor.state.column = 100
    screen._adjust_scroll(build_render_model(editor.state))
    assert editor.scroll_left == 61

    editor.state.column = 10
    screen._adjust_scroll(build_render_model(editor.state))
    assert editor.scroll_left == 10


# --- Frames ---
def test_draw_small_window_shows_message() -> None:
    editor, screen = make_screen(["x"], height=4, width=30)
    screen.draw(build_render_model(editor.state))
    _, _, msg = editor.stdscr.addstr.call_args.args
    assert msg.startswith("Window too small (30x4)")
    editor.stdscr.hline.assert_not_called()


def test_draw_full_frame() -> None:
    editor, screen = make_screen(["hello", "world"])
    editor._force_full_redraw = True
    editor.state.row, editor.state.column = 1, 2

    screen.draw(build_render_model(editor.state))

    editor.stdscr.erase.assert_called_once()
    assert editor._force_full_redraw is False
    editor.stdscr.addstr.assert_any_call(0, 0, "hello")
    editor.stdscr.addstr.assert_any_call(1, 0, "world")
    editor.stdscr.chgat.assert_any_call(1, 2, 1, CURSES_CONSTANTS["A_REVERSE"])
    editor.stdscr.move.assert_called_with(1, 2)
    editor.stdscr.noutrefresh.assert_called_once()


def test_draw_empty_buffer_puts_cursor_home() -> None:
    editor, screen = make_screen([])
    screen.draw(build_render_model(editor.state))
    editor.stdscr.move.assert_called_with(0, 0)


def test_draw_reports_curses_errors() -> None:
    editor, screen = make_screen(["x"])
    editor.stdscr.noutrefresh.side_effect = CursesError("boom")
    screen.draw(build_render_model(editor.state))
    assert editor.status_messages == ["Draw error: boom"]


def test_line_number_gutter() -> None:
    lines = [f"l{i}" for i in range(12)]
    editor, screen = make_screen(lines, config={"editor": {"show_line_numbers": True}})

    screen.draw(build_render_model(editor.state))

    # two digits plus a separating space
    editor.stdscr.addstr.assert_any_call(0, 0, " 1 ", CURSES_CONSTANTS["A_DIM"])
    editor.stdscr.addstr.assert_any_call(11, 0, "12 ", CURSES_CONSTANTS["A_DIM"])
    assert call(0, 3, "l0") in editor.stdscr.addstr.call_args_list
    editor.stdscr.move.assert_called_with(0, 3)


@pytest.mark.parametrize("show", [False, True])
def test_gutter_width(show: bool) -> None:
    _, screen = make_screen(config={"editor": {"show_line_numbers": show}})
    assert screen._gutter_width(999) == (4 if show else 0)
    assert screen._gutter_width(0) == (2 if show else 0)
