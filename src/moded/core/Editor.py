# moded/core/Editor.py
"""moded.core.Editor
===================
Editor: the session driver of the moded terminal editor.

The Editor owns everything with side effects around the editing state
machine:

- loading the document named on the command line (degrading to an empty
  buffer when it cannot be read),
- the blocking event loop: read one key, dispatch it, perform the resulting
  effect, redraw,
- writing the buffer back on a COMMAND-mode save,
- terminal resize handling and cursor shape updates.

Buffer, mode and cursor live in an `EditorState`; every change to them goes
through `moded.core.ModalEngine.dispatch`. Nothing raised while handling a
key ends the session: errors are logged and reported on the status bar.
"""

import curses
import logging
import os
import unicodedata
from typing import TYPE_CHECKING, Any, Optional, cast

from wcwidth import wcswidth, wcwidth

from moded.core.EditorState import EditorState, Mode
from moded.core.FileStore import DEFAULT_ENCODING, load_buffer, write_text
from moded.core.KeyEvent import RESIZE, KeyEvent
from moded.core.LineBuffer import LineBuffer
from moded.core.ModalEngine import Effect, complete_save, dispatch
from moded.core.RenderModel import build_render_model
from moded.core.exceptions import LoadFailure, SaveFailure
from moded.ui.DrawScreen import DrawScreen
from moded.ui.KeyBinder import KeyBinder
from moded.utils.logging_config import logger

if TYPE_CHECKING:
    from moded.ui.TerminalAppMode import TerminalAppMode


class Editor:
    """Session driver tying the state machine to curses and the file system.

    Attributes:
        stdscr (curses.window): The main curses window.
        config (dict[str, Any]): Merged application configuration.
        state (EditorState): Buffer, mode, cursor and session flags.
        filename (Optional[str]): Save target. Kept even when loading failed.
        encoding (str): Encoding the file was read with; reused on save.
        scroll_top (int): First buffer row shown on screen.
        scroll_left (int): Display cells scrolled off to the left.
        running (bool): Mirrors `state.running`; the loop stops when False.
    """

    # -- Initialization and Setup ---
    def __init__(
        self,
        stdscr: "curses.window",
        config: dict[str, Any],
        initial_mode: Optional[Mode] = None,
        terminal: Optional["TerminalAppMode"] = None,
    ) -> None:
        self.stdscr = stdscr
        self.config: dict[str, Any] = config
        self.terminal = terminal

        self._initialize_state(initial_mode)
        self._initialize_components()
        self._setup_environment()

        self.handle_resize()
        logging.info(f"Editor initialized. Initial mode: {self.state.mode.name}")

    def _initialize_state(self, initial_mode: Optional[Mode]) -> None:
        editor_cfg = self.config.get("editor", {})
        if initial_mode is None:
            initial_mode = Mode.from_name(editor_cfg.get("default_mode", "normal"))

        self.state = EditorState(
            LineBuffer(),
            mode=initial_mode,
            enter_splits_line=bool(editor_cfg.get("enter_splits_line", False)),
        )
        self.filename: Optional[str] = None
        self.encoding: str = DEFAULT_ENCODING
        self.scroll_top: int = 0
        self.scroll_left: int = 0
        self.last_window_size: tuple[int, int] = (0, 0)
        self._force_full_redraw: bool = True

    def _initialize_components(self) -> None:
        self.colors: dict[str, int] = {}
        self.init_colors()
        self.drawer: DrawScreen = DrawScreen(self, self.config)
        self.keybinder: KeyBinder = KeyBinder(self)

    def _setup_environment(self) -> None:
        self.stdscr.keypad(True)
        try:
            curses.curs_set(1)
        except curses.error:
            logging.debug("Terminal does not support cursor visibility changes.")
        self._sync_cursor_shape()

    def init_colors(self) -> None:
        """Initializes base attributes; DrawScreen adds the status bar pairs."""
        self.colors = {
            "default": curses.A_NORMAL,
            "line_number": curses.A_DIM,
            "cursor": curses.A_REVERSE,
        }
        if not curses.has_colors():
            logging.warning("Terminal has no color support. Using monochrome attributes.")
            return
        try:
            curses.start_color()
        except curses.error as e:
            logging.warning(f"start_color failed: {e}")

    # --- Properties mirrored from the state ---
    @property
    def running(self) -> bool:
        return self.state.running

    @property
    def modified(self) -> bool:
        return self.state.modified

    @property
    def status_message(self) -> str:
        return self.state.status_message

    def _set_status_message(self, message_for_statusbar: str) -> None:
        message_for_statusbar = str(message_for_statusbar)
        if self.state.status_message != message_for_statusbar:
            self.state.status_message = message_for_statusbar
            logging.debug(f"Status message set to: '{message_for_statusbar}'")

    # --- File operations ---
    def open_file(self, path: str) -> bool:
        """Load *path* into a fresh buffer.

        The path becomes the save target whether or not it could be read. A
        failed load installs an empty buffer and reports the problem on the
        status bar.

        Returns:
            bool: True if the file was read.
        """
        self.filename = path
        self.scroll_top = 0
        self.scroll_left = 0
        mode = self.state.mode

        try:
            buffer, encoding = load_buffer(path)
        except LoadFailure as e:
            logging.warning(f"Open file failed: {e}")
            self.state.buffer = LineBuffer()
            self.encoding = DEFAULT_ENCODING
            self._reset_cursor(mode)
            self._set_status_message(f"{e}. Editing empty buffer")
            self._force_full_redraw = True
            return False

        self.state.buffer = buffer
        self.encoding = encoding
        self._reset_cursor(mode)
        self._set_status_message(f'"{os.path.basename(path)}" {len(buffer)}L')
        self._force_full_redraw = True
        logging.info(f"Opened '{path}': {len(buffer)} rows, encoding {encoding}")
        return True

    def _reset_cursor(self, mode: Mode) -> None:
        self.state.mode = mode
        self.state.row = 0
        self.state.column = 0
        self.state.modified = False
        self.state.clamp_cursor()

    def save_file(self) -> bool:
        """Write the buffer to `filename` and finish the COMMAND-mode save.

        Returns:
            bool: True if the file was written.
        """
        if not self.filename:
            message = "Could not write: no file name"
            logging.warning("save_file called without a target file name")
            complete_save(self.state, False, message)
            return False

        try:
            written = write_text(
                self.filename, self.state.buffer.serialize(), self.encoding
            )
        except SaveFailure as e:
            logging.error(f"Save failed: {e}")
            complete_save(self.state, False, str(e))
            return False

        name = os.path.basename(self.filename)
        complete_save(self.state, True, f'"{name}" written')
        logging.info(f"Saved '{self.filename}' ({written} bytes, {self.encoding})")
        return True

    # --- Input ---
    def handle_key(self, event: KeyEvent) -> bool:
        """Dispatch *event* and perform the effect it produced.

        Returns:
            bool: True if the screen needs a redraw.
        """
        if event.key == RESIZE:
            return self.handle_resize()

        mode_before = self.state.mode
        try:
            effect = dispatch(self.state, event)
            if effect is Effect.SAVE:
                self.save_file()
            elif effect is Effect.QUIT:
                self.exit_editor()
        except Exception as e_handler:
            logging.exception("Input handler error. This should be investigated.")
            self._set_status_message(f"Input handler error: {str(e_handler)[:50]}")
            self.state.clamp_cursor()
            return True

        if self.state.mode is not mode_before:
            self._sync_cursor_shape()
        return effect is not Effect.NONE

    def handle_resize(self) -> bool:
        """Re-read the window size and force a full redraw."""
        new_height, new_width = self.stdscr.getmaxyx()
        self.last_window_size = (new_height, new_width)
        self.scroll_left = 0
        self._force_full_redraw = True
        logging.debug(f"Window resized to {new_width}x{new_height}")
        return True

    def _sync_cursor_shape(self) -> None:
        if self.terminal is not None:
            self.terminal.set_cursor_shape(self.state.mode.cursor_style)

    def exit_editor(self) -> None:
        """Stop the main loop. Unsaved changes are discarded without a prompt."""
        if self.state.modified:
            logger.warning(
                f"Quitting with unsaved changes to '{self.filename or 'No Name'}'."
            )
        self.state.running = False
        logger.info("--- EXIT SEQUENCE INITIATED ---")

    # --- Main loop ---
    def run(self) -> None:
        """The main event loop of the editor.

        Each iteration blocks for one key, handles it and redraws if anything
        changed. The loop ends once a quit input clears `state.running`;
        Ctrl+C ends it as well.
        """
        logger.info("Editor main loop started.")
        self.stdscr.nodelay(False)
        self._render_screen(True)

        while self.state.running:
            try:
                redraw_needed = self._process_input()
                if self.state.running:
                    self._render_screen(redraw_needed)
            except KeyboardInterrupt:
                logger.info("Main loop interrupted by KeyboardInterrupt.")
                self.exit_editor()
                break

        logger.info("Editor main loop finished.")

    def _process_input(self) -> bool:
        event = self.keybinder.read_event()
        if event is None:
            return False
        return self.handle_key(event)

    def _render_screen(self, redraw_needed: bool) -> None:
        if not redraw_needed and not self._force_full_redraw:
            return
        self.drawer.draw(build_render_model(self.state))
        curses.doupdate()

    # --- Display widths ---
    def get_char_width(self, char: str) -> int:
        """Display width of a character. Control and combining characters are 0 wide."""
        if not isinstance(char, str) or len(char) != 1:
            return 1
        if char == "\t":
            # drawn as a single space
            return 1
        if unicodedata.category(char) in ("Cc", "Cf"):
            return 0
        if unicodedata.combining(char):
            return 0
        width = wcwidth(char)
        return width if width >= 0 else 1

    def get_string_width(self, text: str) -> int:
        """Display width of a string, summing per character when wcswidth gives up."""
        if text.isascii() and text.isprintable():
            return len(text)
        width = cast(int, wcswidth(text))
        if width != -1:
            return width
        return sum(self.get_char_width(ch) for ch in text)
