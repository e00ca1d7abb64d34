# src/moded/ui/TerminalAppMode.py
from __future__ import annotations

import curses
import logging
import sys
from typing import Optional

# DECSCUSR parameters: 2 = steady block, 6 = steady bar, 0 = terminal default
CURSOR_SHAPES: dict[str, int] = {"block": 2, "bar": 6, "default": 0}


class TerminalAppMode:
    """
    Put the terminal into the state a full-screen modal editor needs:

    - Alternate screen buffer (smcup/rmcup) so the shell prompt is hidden.
    - Application cursor keys (smkx/rmkx).
    - raw + noecho (cbreak fallback), keypad(True), meta(True).
    - Short ESC delay so a lone Esc leaves INSERT mode without a visible lag.
    - Cursor shape switching (block/bar) via DECSCUSR.

    Always pair `enter(stdscr)` with `exit()` (try/finally); `exit()` also
    resets the cursor shape to the terminal default.
    """

    def __init__(self, escdelay: int = 25) -> None:
        self._entered: bool = False
        self._stdscr: Optional[curses.window] = None
        self._shape: Optional[str] = None
        self.escdelay = escdelay

    @property
    def entered(self) -> bool:
        return self._entered

    def enter(self, stdscr: curses.window) -> None:
        self._stdscr = stdscr

        try:
            curses.setupterm()
        except curses.error as e:
            logging.debug("setupterm() failed or not required: %r", e)

        # Alternate screen before clearing
        self._tputs("smcup")
        self._tputs("smkx")

        try:
            curses.raw()
        except curses.error:
            curses.cbreak()
        curses.noecho()

        stdscr.keypad(True)
        try:
            curses.meta(stdscr, True)
        except curses.error:
            pass

        try:
            curses.set_escdelay(self.escdelay)
        except curses.error:
            pass

        try:
            curses.use_default_colors()
        except curses.error:
            pass

        stdscr.scrollok(False)
        stdscr.leaveok(False)
        stdscr.clearok(True)
        stdscr.erase()
        stdscr.refresh()

        self._entered = True
        logging.debug("TerminalAppMode: entered (alternate screen + app cursor keys).")

    def exit(self) -> None:
        if not self._entered:
            return

        self.set_cursor_shape("default")

        try:
            if self._stdscr is not None:
                self._stdscr.keypad(False)
        except curses.error:
            pass

        try:
            curses.noraw()
        except curses.error:
            try:
                curses.nocbreak()
            except curses.error:
                pass
        try:
            curses.echo()
        except curses.error:
            pass

        self._tputs("rmkx")
        self._tputs("rmcup")

        self._entered = False
        self._shape = None
        logging.debug("TerminalAppMode: exited (restored terminal modes).")

    def set_cursor_shape(self, style: str) -> bool:
        """Switch the hardware cursor to ``block``, ``bar`` or ``default``.

        Returns:
            bool: True if an escape sequence was written.
        """
        code = CURSOR_SHAPES.get(style)
        if code is None:
            logging.warning("TerminalAppMode: unknown cursor style %r", style)
            return False
        if style == self._shape:
            return False
        try:
            sys.stdout.write(f"\x1b[{code} q")
            sys.stdout.flush()
        except (OSError, ValueError) as e:
            logging.debug("Cursor shape %s not applied: %r", style, e)
            return False
        self._shape = style
        return True

    # ── helpers ───────────────────────────────────────────────────────────────

    def _tputs(self, capname: str) -> None:
        try:
            s = curses.tigetstr(capname)
            if s:
                curses.putp(s)
        except curses.error as e:
            # Capability missing (FreeBSD console, dumb terminals)
            logging.debug("tputs(%s) skipped: %r", capname, e)
