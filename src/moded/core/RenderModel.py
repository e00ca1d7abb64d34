# moded/core/RenderModel.py
"""Read-only projection of the editor state handed to the renderer."""

from dataclasses import dataclass

from moded.core.EditorState import EditorState, Mode


@dataclass(frozen=True)
class RenderModel:
    """Everything `DrawScreen` needs to paint one frame.

    Attributes:
        lines: The buffer rows, top to bottom.
        cursor: Cursor cell as ``(column, row)``.
        status: Mode indicator followed by the current status message.
        mode: The active mode.
        cursor_style: ``"block"`` or ``"bar"``.
    """

    lines: tuple[str, ...]
    cursor: tuple[int, int]
    status: str
    mode: Mode
    cursor_style: str

    @property
    def line_count(self) -> int:
        return len(self.lines)


def status_line(state: EditorState) -> str:
    indicator = state.mode.indicator
    if not state.status_message:
        return indicator
    if state.mode is Mode.COMMAND:
        return f"{indicator}{state.status_message}"
    return f"{indicator} {state.status_message}"


def build_render_model(state: EditorState) -> RenderModel:
    return RenderModel(
        lines=tuple(state.buffer),
        cursor=state.cursor,
        status=status_line(state),
        mode=state.mode,
        cursor_style=state.mode.cursor_style,
    )
