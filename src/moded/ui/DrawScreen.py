# moded/ui/DrawScreen.py
"""DrawScreen.py
========================
DrawScreen paints a `RenderModel` into the curses window.

It is responsible for:
- displaying the visible buffer rows with horizontal and vertical scrolling,
- an optional line-number gutter,
- highlighting the cursor cell,
- rendering the separator and the status bar,
- placing the hardware cursor,
- refusing to draw into windows smaller than the minimum size.

Wide Unicode characters are measured with wcwidth and never split in half
at the scroll edge.

Screen layout (height H)::

    rows 0 .. H-3   text area
    row  H-2        separator
    row  H-1        status bar
"""

import curses
import logging
import os
from typing import TYPE_CHECKING, Any

from wcwidth import wcwidth

from moded.core.RenderModel import RenderModel
from moded.utils.utils import CALM_BG_IDX, WHITE_FG_IDX, hex_to_xterm

if TYPE_CHECKING:
    from moded.core.Editor import Editor


## ================= class DrawScreen ==============================
class DrawScreen:
    """DrawScreen Class
    =========================
    Renders the editor frame. Scroll offsets live on the editor
    (`scroll_top`, `scroll_left`) so they survive between frames; this class
    only adjusts them to keep the cursor visible.

    Attributes:
        MIN_WINDOW_WIDTH (int): Minimum allowed width of the editor window.
        MIN_WINDOW_HEIGHT (int): Minimum allowed height of the editor window.
        editor (Editor): The session driver.
        config (dict[str, Any]): Editor configuration.
        stdscr (curses.window): The main curses window.
        colors (dict[str, int]): Named curses attributes.
        show_line_numbers (bool): Draw the line-number gutter.
    """

    MIN_WINDOW_WIDTH = 20
    MIN_WINDOW_HEIGHT = 5

    def __init__(self, editor: "Editor", config: dict[str, Any]) -> None:
        self.editor = editor
        self.config = config
        self.stdscr = editor.stdscr
        self.colors = editor.colors
        self.show_line_numbers: bool = bool(
            config.get("editor", {}).get("show_line_numbers", False)
        )
        self._text_start_x: int = 0
        self._init_status_colors()

    def get_string_width(self, text: str) -> int:
        return self.editor.get_string_width(text)

    def get_char_width(self, ch: str) -> int:
        return self.editor.get_char_width(ch)

    def _init_status_colors(self) -> None:
        """Creates status bar pairs based on terminal capabilities.
        - 256-color: configured colours (default white on xterm-236).
        - 16-color: white on black.
        - 8-color / TTY: white on terminal background.
        """
        pair_norm, pair_err = 15, 16

        try:
            curses.use_default_colors()  # allow -1 as the "default background"
        except curses.error:
            pass

        try:
            max_colors = curses.COLORS
            if max_colors >= 256:
                colors_cfg = self.config.get("colors", {})
                fg_idx = hex_to_xterm(colors_cfg.get("status_fg", ""), WHITE_FG_IDX)
                bg_idx = hex_to_xterm(colors_cfg.get("status_bg", ""), CALM_BG_IDX)
            elif max_colors >= 16:
                fg_idx, bg_idx = curses.COLOR_WHITE, curses.COLOR_BLACK
            else:
                fg_idx, bg_idx = curses.COLOR_WHITE, -1  # -1 - terminal background

            curses.init_pair(pair_norm, fg_idx, bg_idx)
            curses.init_pair(pair_err, fg_idx, bg_idx)
        except (curses.error, AttributeError) as exc:
            # AttributeError: COLORS is only defined after start_color()
            logging.warning("init_pair failed (%s); falling back to A_REVERSE", exc)
            self.colors["status"] = curses.A_REVERSE
            self.colors["status_error"] = curses.A_REVERSE | curses.A_BOLD
            self.colors["cursor"] = curses.A_REVERSE
            return

        self.colors["status"] = curses.color_pair(pair_norm)
        self.colors["status_error"] = curses.color_pair(pair_err) | curses.A_BOLD
        self.colors["cursor"] = curses.A_REVERSE

    # ---------------------  Geometry  -------------------
    def text_area_height(self) -> int:
        height, _ = self.stdscr.getmaxyx()
        return max(1, height - 2)

    def _gutter_width(self, line_count: int) -> int:
        if not self.show_line_numbers:
            return 0
        return len(str(max(1, line_count))) + 1

    def _safe_cut_left(self, s: str, cells_to_skip: int) -> str:
        """Cuts off exactly cells_to_skip screen cells (not characters!) from the left,
        ensuring that we do NOT cut a wide character in half.
        """
        skipped = 0
        res = []
        for ch in s:
            w = self.get_char_width(ch)
            if skipped + w <= cells_to_skip:
                skipped += w
                continue
            if skipped < cells_to_skip < skipped + w:
                # boundary falls inside a wide char: drop it entirely
                skipped += w
                continue
            res.append(ch)
        return "".join(res)

    def truncate_string(self, s: str, max_width: int) -> str:
        """Return `s` clipped to visual width `max_width`."""
        result: list[str] = []
        consumed = 0
        for ch in s:
            w = wcwidth(ch)
            if w < 0:
                w = 1
            if consumed + w > max_width:
                break
            result.append(ch)
            consumed += w
        return "".join(result)

    # ---------------------  Frame  -------------------
    def draw(self, model: RenderModel) -> None:
        """Render one complete frame for *model*."""
        try:
            height, width = self.stdscr.getmaxyx()

            if height < self.MIN_WINDOW_HEIGHT or width < self.MIN_WINDOW_WIDTH:
                self._show_small_window_error(height, width)
                return

            self._text_start_x = self._gutter_width(model.line_count)
            self._adjust_scroll(model)

            if self.editor._force_full_redraw:
                self.stdscr.erase()
                self.editor._force_full_redraw = False
            else:
                self._clear_invalidated_lines()

            self._draw_text(model, width)
            self._draw_line_numbers(model)
            self._draw_cursor_cell(model)

            try:
                self.stdscr.hline(height - 2, 0, curses.ACS_HLINE | curses.A_DIM, width)
            except curses.error:
                pass

            self._draw_status_bar(model)
            self._position_cursor(model)
            self.stdscr.noutrefresh()

        except curses.error as e:
            logging.error(f"Curses error in DrawScreen.draw(): {e}", exc_info=True)
            self.editor._set_status_message(f"Draw error: {str(e)[:80]}")

    def _clear_invalidated_lines(self) -> None:
        """Clears the rows redrawn in this frame instead of the whole window."""
        height, _ = self.stdscr.getmaxyx()
        for row in list(range(self.text_area_height())) + [height - 1]:
            try:
                self.stdscr.move(row, 0)
                self.stdscr.clrtoeol()
            except curses.error:
                pass

    def _show_small_window_error(self, height: int, width: int) -> None:
        msg = f"Window too small ({width}x{height}). Minimum is {self.MIN_WINDOW_WIDTH}x{self.MIN_WINDOW_HEIGHT}."
        try:
            self.stdscr.clear()
            msg = self.truncate_string(msg, max(0, width - 1))
            start_col = max(0, (width - len(msg)) // 2)
            self.stdscr.addstr(height // 2, start_col, msg)
            self.stdscr.noutrefresh()
        except curses.error:
            pass

    def _draw_text(self, model: RenderModel, window_width: int) -> None:
        top = self.editor.scroll_top
        visible = model.lines[top: top + self.text_area_height()]
        for screen_row, line in enumerate(visible):
            self._draw_single_line(screen_row, line, window_width)

    def _draw_single_line(self, screen_row: int, line: str, window_width: int) -> None:
        """Draw one buffer row, applying horizontal scroll and clipping at the right edge."""
        start_x = self._text_start_x
        avail_w = window_width - start_x
        if avail_w <= 0 or not line:
            return

        visible_part = self._safe_cut_left(line, self.editor.scroll_left)
        if not visible_part:
            return
        # A wide char dropped at the left edge leaves a blank cell
        consumed = self.get_string_width(line) - self.get_string_width(visible_part)
        draw_x = start_x + max(0, consumed - self.editor.scroll_left)

        text_to_draw = ""
        drawn_w = draw_x - start_x
        for ch in visible_part:
            char_w = self.get_char_width(ch)
            if drawn_w + char_w > avail_w:
                break
            text_to_draw += ch
            drawn_w += char_w

        if not text_to_draw:
            return
        try:
            self.stdscr.addstr(screen_row, draw_x, text_to_draw.replace("\t", " "))
        except curses.error as e:
            # Writing the bottom-right cell raises after the text is drawn
            logging.debug("addstr failed at (%d,%d): %s", screen_row, draw_x, e)

    def _draw_line_numbers(self, model: RenderModel) -> None:
        if not self._text_start_x:
            return
        num_width = self._text_start_x - 1
        top = self.editor.scroll_top
        last = min(model.line_count, top + self.text_area_height())
        for screen_row, line_index in enumerate(range(top, last)):
            try:
                self.stdscr.addstr(
                    screen_row, 0, f"{line_index + 1:>{num_width}} ", curses.A_DIM
                )
            except curses.error:
                pass

    # ---------------------  Cursor  -------------------
    def _cursor_screen_pos(self, model: RenderModel) -> tuple[int, int]:
        """Return ``(screen_y, screen_x)`` of the cursor cell."""
        column, row = model.cursor
        line = model.lines[row] if row < model.line_count else ""
        display_x = self.get_string_width(line[:column])
        return (
            row - self.editor.scroll_top,
            self._text_start_x + display_x - self.editor.scroll_left,
        )

    def _draw_cursor_cell(self, model: RenderModel) -> None:
        """Highlight the single cell under the cursor."""
        _, width = self.stdscr.getmaxyx()
        column, row = model.cursor
        line = model.lines[row] if row < model.line_count else ""
        cell_w = self.get_char_width(line[column]) if column < len(line) else 1
        y, x = self._cursor_screen_pos(model)
        if x >= width:
            return
        try:
            self.stdscr.chgat(y, x, max(1, cell_w), self.colors.get("cursor", curses.A_REVERSE))
        except curses.error:
            pass

    def _adjust_scroll(self, model: RenderModel) -> None:
        """Move `scroll_top`/`scroll_left` so the cursor cell is on screen."""
        _, width = self.stdscr.getmaxyx()
        column, row = model.cursor
        text_area_height = self.text_area_height()

        if model.line_count <= text_area_height:
            self.editor.scroll_top = 0
        elif row < self.editor.scroll_top:
            self.editor.scroll_top = row
        elif row >= self.editor.scroll_top + text_area_height:
            self.editor.scroll_top = row - text_area_height + 1
        self.editor.scroll_top = max(
            0, min(self.editor.scroll_top, max(0, model.line_count - text_area_height))
        )

        line = model.lines[row] if row < model.line_count else ""
        cursor_display_width = self.get_string_width(line[:column])
        cell_w = self.get_char_width(line[column]) if column < len(line) else 1
        text_area_width = max(1, width - self._text_start_x)
        if cursor_display_width < self.editor.scroll_left:
            self.editor.scroll_left = cursor_display_width
        elif cursor_display_width + cell_w > self.editor.scroll_left + text_area_width:
            self.editor.scroll_left = cursor_display_width + cell_w - text_area_width

    def _position_cursor(self, model: RenderModel) -> None:
        height, width = self.stdscr.getmaxyx()
        y, x = self._cursor_screen_pos(model)
        y = max(0, min(y, self.text_area_height() - 1))
        x = max(self._text_start_x, min(x, width - 1))
        try:
            self.stdscr.move(y, x)
        except curses.error as e:
            logging.warning(f"Curses error positioning cursor at ({y}, {x}): {e}")

    # ---------------------  Status bar  -------------------
    def status_text(self, model: RenderModel, width: int) -> str:
        """Compose the status bar line, padded or clipped to *width* cells.

        Left: mode indicator and status message. Right: file name (``*`` when
        modified), encoding, ``Ln row/rows``, ``Col column``.
        """
        column, row = model.cursor
        fname = os.path.basename(self.editor.filename) if self.editor.filename else "No Name"
        modified = "*" if self.editor.state.modified else ""
        right = (
            f" {fname}{modified} | {self.editor.encoding.upper()} | "
            f"Ln {row + 1}/{max(1, model.line_count)} | Col {column + 1} "
        )
        left = f" {model.status}"

        right_w = self.get_string_width(right)
        if right_w >= width:
            return self.truncate_string(left, width).ljust(width)

        left = self.truncate_string(left, width - right_w)
        gap = width - right_w - self.get_string_width(left)
        return left + " " * gap + right

    def _draw_status_bar(self, model: RenderModel) -> None:
        height, width = self.stdscr.getmaxyx()
        y = height - 1
        line = self.status_text(model, width)
        try:
            # last cell excluded: writing it scrolls/raises on most terminals
            self.stdscr.addstr(y, 0, self.truncate_string(line, width - 1), self.colors["status"])
            lowered = model.status.lower()
            if "error" in lowered or "could not" in lowered:
                msg_w = min(self.get_string_width(model.status) + 1, width - 1)
                self.stdscr.chgat(y, 0, msg_w, self.colors["status_error"])
        except curses.error:
            pass
