"""Pure computation of what the terminal should show for an editor state."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from mini_vi.buffer import Buffer, Viewport
from mini_vi.modes.base_mode import EditorMode

DIRTY_MARKER = "[+]"


class RenderError(RuntimeError):
    """Raised when the cursor would land outside the viewport."""

    def __init__(self, message: str, *, position: Tuple[int, int]) -> None:
        super().__init__(message)
        self.position = position


@dataclass(frozen=True, slots=True)
class DrawPlan:
    """Screen content for one frame.

    ``rows[i]`` is drawn at screen row ``i``; ``command_line`` (if any) on
    row ``height - 2``; ``status_line`` on the last row. ``cursor`` is the
    ``(column, row)`` where the terminal cursor is placed.
    """

    width: int
    height: int
    rows: Tuple[str, ...]
    status_line: str
    command_line: Optional[str]
    cursor: Tuple[int, int]

    @property
    def command_row(self) -> int:
        return self.height - 2

    @property
    def status_row(self) -> int:
        return self.height - 1


def visible_rows(buffer: Buffer, viewport: Viewport) -> Tuple[str, ...]:
    cursor = buffer.cursor
    lines = buffer.lines
    start = cursor.scroll_y
    end = min(cursor.scroll_y + viewport.text_rows, len(lines))
    return tuple(
        line[cursor.scroll_x : cursor.scroll_x + viewport.width]
        for line in lines[start:end]
    )


def status_text(buffer: Buffer, mode: EditorMode) -> str:
    text = f" {mode.label} @ {buffer.display_name}"
    if buffer.document.dirty:
        text += f" {DIRTY_MARKER}"
    if buffer.status_message:
        text += f" | {buffer.status_message}"
    return text


def build_plan(buffer: Buffer, mode: EditorMode, viewport: Viewport) -> DrawPlan:
    screen_x, screen_y = buffer.cursor.screen_position
    if not (0 <= screen_x < viewport.width and 0 <= screen_y < viewport.text_rows):
        raise RenderError(
            f"Cursor {buffer.cursor.position} is outside the viewport "
            f"(scroll {(buffer.cursor.scroll_x, buffer.cursor.scroll_y)}, "
            f"{viewport.width}x{viewport.text_rows})",
            position=(screen_x, screen_y),
        )

    command_line = None
    cursor = (screen_x, screen_y)
    if mode is EditorMode.COMMAND:
        command_line = f":{buffer.command_line or ''}"
        cursor = (min(len(command_line), viewport.width - 1), viewport.height - 2)
        command_line = command_line[: viewport.width]

    return DrawPlan(
        width=viewport.width,
        height=viewport.height,
        rows=visible_rows(buffer, viewport),
        status_line=status_text(buffer, mode)[: viewport.width],
        command_line=command_line,
        cursor=cursor,
    )


__all__ = [
    "DIRTY_MARKER",
    "DrawPlan",
    "RenderError",
    "build_plan",
    "status_text",
    "visible_rows",
]
