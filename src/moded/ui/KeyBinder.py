# moded/ui/KeyBinder.py
"""KeyBinder.py
==================
Description:
-----------------------
The KeyBinder class turns raw curses input into the `KeyEvent` values the
editing state machine understands. It owns everything terminal-specific about
keyboard input: wide-character reads, ESC sequence parsing (CSI/SS3 cursor and
function keys, Alt chords), and the many codes terminals send for Enter and
Backspace.

Key names produced:
- a single printable character for text input (``"h"``, ``"ж"``, ``"$"``);
- ``"esc"``, ``"enter"``, ``"backspace"``, ``"tab"``, ``"resize"``;
- navigation names from `ESCAPE_SEQUENCE_MAP` / `KEYCODE_NAMES`
  (``"up"``, ``"home"``, ``"delete"``, ``"f1"`` ...);
- ``"alt-<c>"`` for ESC followed by one printable character.

Inputs that are neither (unbound control characters, unknown key codes) are
dropped and logged on the key trace logger.

Intended Usage:
---------------
Instantiate KeyBinder with the session driver and call `read_event()` once per
loop iteration. Terminal sessions always report presses, so every event built
here has kind `KeyKind.PRESS`.
"""

import curses
import logging
import re
from typing import TYPE_CHECKING, Optional, Union

from wcwidth import wcswidth

from moded.core.KeyEvent import BACKSPACE, ENTER, ESC, RESIZE, TAB, KeyEvent

if TYPE_CHECKING:
    from moded.core.Editor import Editor

KEY_LOGGER = logging.getLogger("moded.keyevents")

RawKey = Union[int, str]


# ==================== KeyBinder Class ====================
class KeyBinder:
    """Translates terminal key input into `KeyEvent`s.

    Attributes:
        editor (Editor): The session driver; used for its window.
        stdscr: The curses window input is read from.
        keycode_names (dict[int, str]): curses key codes mapped to key names.
    """

    # Keys do NOT include the leading ESC; get_key_input() reads after it.
    ESCAPE_SEQUENCE_MAP: dict[str, str] = {
        # Arrows (CSI and SS3)
        "[A": "up", "[B": "down", "[C": "right", "[D": "left",
        "OA": "up", "OB": "down", "OC": "right", "OD": "left",

        # xterm modifiers: ;2=Shift, ;3=Alt, ;5=Ctrl
        "[1;2A": "shift+up", "[1;2B": "shift+down",
        "[1;2C": "shift+right", "[1;2D": "shift+left",
        "[1;3A": "alt+up", "[1;3B": "alt+down",
        "[1;3C": "alt+right", "[1;3D": "alt+left",
        "[1;5A": "ctrl+up", "[1;5B": "ctrl+down",
        "[1;5C": "ctrl+right", "[1;5D": "ctrl+left",

        # Home/End
        "[H": "home", "[F": "end", "OH": "home", "OF": "end",
        "[1~": "home", "[4~": "end", "[7~": "home", "[8~": "end",

        # Insert/Delete/PageUp/PageDown
        "[2~": "insert", "[3~": "delete", "[5~": "pageup", "[6~": "pagedown",

        # Function keys
        "OP": "f1", "OQ": "f2", "OR": "f3", "OS": "f4",
        "[11~": "f1", "[12~": "f2", "[13~": "f3", "[14~": "f4",
        "[15~": "f5", "[17~": "f6", "[18~": "f7", "[19~": "f8",
        "[20~": "f9", "[21~": "f10", "[23~": "f11", "[24~": "f12",
    }

    # Control characters with a meaning of their own
    CONTROL_CHAR_NAMES: dict[str, str] = {
        "\n": ENTER,
        "\r": ENTER,
        "\x7f": BACKSPACE,
        "\x08": BACKSPACE,
        "\t": TAB,
        "\x1b": ESC,
    }

    def __init__(self, editor: "Editor"):
        logging.debug("KeyBinder initialized with editor: %s", editor)
        self.editor = editor
        self.stdscr = editor.stdscr
        self.keycode_names = self._build_keycode_names()

    @staticmethod
    def _build_keycode_names() -> dict[int, str]:
        """Map curses key codes to key names.

        Built at instantiation, not import, so the codes come from whatever
        `curses` module is active at the time.
        """
        names: dict[int, str] = {
            curses.KEY_ENTER: ENTER,
            curses.KEY_BACKSPACE: BACKSPACE,
            curses.KEY_RESIZE: RESIZE,
            curses.KEY_UP: "up",
            curses.KEY_DOWN: "down",
            curses.KEY_LEFT: "left",
            curses.KEY_RIGHT: "right",
            curses.KEY_HOME: "home",
            curses.KEY_END: "end",
            curses.KEY_PPAGE: "pageup",
            curses.KEY_NPAGE: "pagedown",
            curses.KEY_DC: "delete",
            curses.KEY_IC: "insert",
            curses.KEY_BTAB: "shift+tab",
        }
        for n in range(1, 13):
            names[curses.KEY_F0 + n] = f"f{n}"
        return names

    # ---------------------- Raw input --------------------
    def get_key_input(self, window: Optional["curses.window"] = None) -> RawKey:
        """Read a single key or key sequence from the terminal.

        ESC handling:
        - lone ESC -> ``"\\x1b"``;
        - ESC + one printable character -> ``"alt-<char>"``;
        - CSI/SS3 sequences -> a name from `ESCAPE_SEQUENCE_MAP`.

        Returns:
            int | str: A curses key code (int), a character or key name (str),
            or ``curses.ERR`` when no input was available.
        """
        target = window or self.stdscr

        try:
            ch = target.get_wch()
        except curses.error:
            return curses.ERR

        if ch != "\x1b":
            return ch  # fast path

        seq = self._read_escape_tail(target)

        if not seq:
            KEY_LOGGER.debug("get_key_input: standalone ESC")
            return "\x1b"

        # Some terminals deliver ESC-prefixed sequences
        if seq[0] == "\x1b":
            seq = seq[1:]

        if len(seq) == 1 and seq.isprintable():
            alt_key = f"alt-{seq.lower()}"
            KEY_LOGGER.debug("get_key_input: Alt chord -> %r", alt_key)
            return alt_key

        mapped = self.ESCAPE_SEQUENCE_MAP.get(seq)
        if not mapped:
            cleaned = "".join(re.findall(r"[\[O0-9;~A-Za-z]", seq))
            mapped = self.ESCAPE_SEQUENCE_MAP.get(cleaned)

        if mapped:
            KEY_LOGGER.debug("get_key_input: ESC %r -> %r", seq, mapped)
            return mapped

        logging.warning("get_key_input: unknown escape sequence: ESC + %r", seq)
        return "\x1b"

    @staticmethod
    def _read_escape_tail(target: "curses.window") -> str:
        """Drain whatever follows an ESC without blocking."""
        seq = ""
        target.nodelay(True)
        try:
            while True:
                try:
                    nx = target.get_wch()
                except curses.error:
                    break
                if isinstance(nx, str):
                    seq += nx
                else:
                    # Extended key code inside a sequence; stripped later
                    seq += f"<{nx}>"
        finally:
            target.nodelay(False)
        return seq

    # ---------------------- Translation --------------------
    def translate(self, raw: RawKey) -> Optional[KeyEvent]:
        """Turn a raw key from `get_key_input` into a `KeyEvent`.

        Returns:
            Optional[KeyEvent]: None for timeouts and keys with no name.
        """
        if isinstance(raw, int):
            if raw == curses.ERR or raw < 0:
                return None
            name = self.keycode_names.get(raw)
            if name is None:
                KEY_LOGGER.debug("translate: unnamed key code %d dropped", raw)
                return None
            return KeyEvent(name)

        if not raw:
            return None

        if len(raw) > 1:
            # Already a key name ("up", "alt-x", ...)
            return KeyEvent(raw)

        name = self.CONTROL_CHAR_NAMES.get(raw)
        if name is not None:
            return KeyEvent(name)

        if raw.isprintable() and wcswidth(raw) > 0:
            return KeyEvent(raw)

        KEY_LOGGER.debug("translate: non-printable character %r dropped", raw)
        return None

    def read_event(self, window: Optional["curses.window"] = None) -> Optional[KeyEvent]:
        """Block for the next key and return it as a `KeyEvent` (or None)."""
        raw = self.get_key_input(window)
        event = self.translate(raw)
        if event is not None:
            KEY_LOGGER.debug("read_event: raw %r -> %r", raw, event.key)
        return event
