# src/moded/core/__init__.py
"""Public facade for moded.core: re-export the editing core from CamelCase modules.

Only terminal-independent pieces are re-exported here; the curses session
driver is imported from `moded.core.Editor` directly.
"""

from .EditorState import EditorState, Mode  # noqa: F401
from .KeyEvent import KeyEvent, KeyKind  # noqa: F401
from .LineBuffer import LineBuffer  # noqa: F401
from .ModalEngine import Effect, complete_save, dispatch  # noqa: F401
from .RenderModel import RenderModel, build_render_model  # noqa: F401
from .exceptions import EditorError, LoadFailure, OutOfRange, SaveFailure  # noqa: F401


__all__ = [
    "LineBuffer",
    "EditorState",
    "Mode",
    "KeyEvent",
    "KeyKind",
    "Effect",
    "dispatch",
    "complete_save",
    "RenderModel",
    "build_render_model",
    "EditorError",
    "LoadFailure",
    "OutOfRange",
    "SaveFailure",
]
