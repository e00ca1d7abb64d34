# moded/core/KeyEvent.py
"""Discrete key events consumed by the editing state machine."""

from dataclasses import dataclass
from enum import Enum

# Logical names for non-printable keys
ESC = "esc"
ENTER = "enter"
BACKSPACE = "backspace"
TAB = "tab"
RESIZE = "resize"


class KeyKind(Enum):
    PRESS = "press"
    REPEAT = "repeat"
    RELEASE = "release"


@dataclass(frozen=True)
class KeyEvent:
    """A single key event.

    Attributes:
        key: A single printable character (e.g. ``"h"``) or a lowercase
            key name (``"esc"``, ``"enter"``, ``"backspace"``, ``"up"``,
            ``"alt-x"`` ...).
        kind: Press, repeat or release. Only presses are acted upon.
    """

    key: str
    kind: KeyKind = KeyKind.PRESS

    @property
    def is_press(self) -> bool:
        return self.kind is KeyKind.PRESS
