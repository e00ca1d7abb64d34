# moded/core/ModalEngine.py
"""moded.core.ModalEngine
========================

The editing state machine. `dispatch(state, event)` applies one key event to
an `EditorState` according to the active mode and returns the `Effect` the
session driver has to carry out. Nothing in here touches the terminal or the
file system.

Modes and transitions::

    NORMAL --i/a--> INSERT --Esc--> NORMAL
    NORMAL --:----> COMMAND --Esc--> NORMAL
    COMMAND --w (saved)--> NORMAL
    NORMAL/COMMAND --q--> session stops

Every handler keeps the cursor invariant documented in
`moded.core.EditorState`; inputs that would index past a line (``$`` on an
empty line, Backspace at column 0, motions on an empty buffer) are no-ops.
"""

import logging
from enum import Enum
from typing import Callable

from moded.core.EditorState import EditorState, Mode
from moded.core.KeyEvent import BACKSPACE, ENTER, ESC, TAB, KeyEvent

logger = logging.getLogger("moded")
KEY_LOGGER = logging.getLogger("moded.keyevents")


class Effect(Enum):
    """What the driver must do after a dispatch."""

    NONE = "none"  # nothing visible changed
    REDRAW = "redraw"
    SAVE = "save"  # persist the buffer, then call complete_save()
    QUIT = "quit"


def _changed(changed: bool) -> Effect:
    return Effect.REDRAW if changed else Effect.NONE


# ==================== NORMAL mode ====================
def _move_left(state: EditorState) -> Effect:
    if state.column > 0:
        state.column -= 1
        return Effect.REDRAW
    return Effect.NONE


def _move_right(state: EditorState) -> Effect:
    if state.column < state.max_column():
        state.column += 1
        return Effect.REDRAW
    return Effect.NONE


def _move_down(state: EditorState) -> Effect:
    if state.row >= state.line_count - 1:
        return Effect.NONE
    state.row += 1
    state.clamp_column()
    return Effect.REDRAW


def _move_up(state: EditorState) -> Effect:
    if state.row == 0:
        return Effect.NONE
    state.row -= 1
    state.clamp_column()
    return Effect.REDRAW


def _line_start(state: EditorState) -> Effect:
    old = state.column
    state.column = 0
    return _changed(old != state.column)


def _line_end(state: EditorState) -> Effect:
    # max_column() is 0 on an empty line
    old = state.column
    state.column = state.max_column()
    return _changed(old != state.column)


def _enter_insert(state: EditorState) -> Effect:
    state.mode = Mode.INSERT
    state.status_message = ""
    return Effect.REDRAW


def _append(state: EditorState) -> Effect:
    state.mode = Mode.INSERT
    state.column = min(state.column + 1, len(state.current_line()))
    state.status_message = ""
    return Effect.REDRAW


def _enter_command(state: EditorState) -> Effect:
    state.mode = Mode.COMMAND
    state.status_message = ""
    return Effect.REDRAW


def _quit(state: EditorState) -> Effect:
    state.running = False
    return Effect.QUIT


NORMAL_ACTIONS: dict[str, Callable[[EditorState], Effect]] = {
    "h": _move_left,
    "l": _move_right,
    "j": _move_down,
    "k": _move_up,
    "^": _line_start,
    "$": _line_end,
    "i": _enter_insert,
    "a": _append,
    ":": _enter_command,
    "q": _quit,
}


def handle_normal(state: EditorState, key: str) -> Effect:
    action = NORMAL_ACTIONS.get(key)
    if action is None:
        logger.debug("NORMAL: ignoring key %r", key)
        return Effect.NONE
    return action(state)


# ==================== INSERT mode ====================
def _leave_insert(state: EditorState) -> Effect:
    state.mode = Mode.NORMAL
    state.clamp_column()
    return Effect.REDRAW


def _insert_newline(state: EditorState) -> Effect:
    state.ensure_row()
    if state.enter_splits_line:
        state.buffer.split_row(state.row, state.column)
    else:
        # Opens an empty row below without carrying the tail of the current
        # line over. Known limitation, see editor.enter_splits_line.
        state.buffer.insert_row(state.row + 1, "")
    state.row += 1
    state.column = 0
    state.modified = True
    return Effect.REDRAW


def _backspace(state: EditorState) -> Effect:
    if not state.line_count or state.column == 0:
        return Effect.NONE
    state.buffer.remove_char(state.row, state.column - 1)
    state.column -= 1
    state.modified = True
    return Effect.REDRAW


def _insert_char(state: EditorState, ch: str) -> Effect:
    state.ensure_row()
    state.buffer.insert_char(state.row, state.column, ch)
    state.column += 1
    state.modified = True
    return Effect.REDRAW


def handle_insert(state: EditorState, key: str) -> Effect:
    if key == ESC:
        return _leave_insert(state)
    if key == ENTER:
        return _insert_newline(state)
    if key == BACKSPACE:
        return _backspace(state)
    if key == TAB:
        return _insert_char(state, "\t")
    if len(key) == 1 and key.isprintable():
        return _insert_char(state, key)
    logger.debug("INSERT: ignoring key %r", key)
    return Effect.NONE


# ==================== COMMAND mode ====================
def handle_command(state: EditorState, key: str) -> Effect:
    if key == ESC:
        state.mode = Mode.NORMAL
        state.status_message = ""
        state.clamp_column()
        return Effect.REDRAW
    if key == "w":
        return Effect.SAVE
    if key == "q":
        return _quit(state)
    state.status_message = f"Not an editor command: {key}"
    return Effect.REDRAW


MODE_HANDLERS: dict[Mode, Callable[[EditorState, str], Effect]] = {
    Mode.NORMAL: handle_normal,
    Mode.INSERT: handle_insert,
    Mode.COMMAND: handle_command,
}


# ==================== Public API ====================
def dispatch(state: EditorState, event: KeyEvent) -> Effect:
    """Apply *event* to *state* and return the resulting effect.

    Only press events are actionable; repeats and releases return
    `Effect.NONE` without touching the state.
    """
    if not event.is_press:
        KEY_LOGGER.debug("dispatch: skipping %s of %r", event.kind.value, event.key)
        return Effect.NONE

    mode_before = state.mode
    effect = MODE_HANDLERS[state.mode](state, event.key)
    KEY_LOGGER.debug(
        "dispatch: %s %r -> %s, mode=%s cursor=%s",
        mode_before.name,
        event.key,
        effect.name,
        state.mode.name,
        state.cursor,
    )
    return effect


def complete_save(state: EditorState, succeeded: bool, message: str) -> None:
    """Finish a COMMAND-mode save once the driver has tried to write.

    On success the buffer is marked clean and the machine returns to NORMAL.
    On failure the message is shown and COMMAND mode is kept so the user can
    retry with ``w`` or cancel with Esc.
    """
    state.status_message = message
    if succeeded:
        state.modified = False
        state.mode = Mode.NORMAL
        state.clamp_column()
