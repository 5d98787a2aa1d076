"""Cursor, scroll offset and viewport state for buffers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from .document import BufferDocument

MIN_WIDTH = 1
MIN_HEIGHT = 3  # one text row, the command row and the status row


@dataclass(frozen=True, slots=True)
class Viewport:
    """Terminal size in cells; the bottom two rows are reserved."""

    width: int = 80
    height: int = 24

    def __post_init__(self) -> None:
        object.__setattr__(self, "width", max(MIN_WIDTH, int(self.width)))
        object.__setattr__(self, "height", max(MIN_HEIGHT, int(self.height)))

    @property
    def text_rows(self) -> int:
        return self.height - 2


@dataclass(slots=True)
class CursorState:
    """Cursor position and scroll offset in buffer coordinates.

    ``x`` may sit one past the last character of line ``y``. Movement only
    touches the cursor; ``reconcile`` then moves the scroll offset so that
    the visible range ``[scroll, scroll + extent)`` contains the cursor.
    """

    x: int = 0
    y: int = 0
    scroll_x: int = 0
    scroll_y: int = 0

    @property
    def position(self) -> Tuple[int, int]:
        return (self.x, self.y)

    @property
    def screen_position(self) -> Tuple[int, int]:
        return (self.x - self.scroll_x, self.y - self.scroll_y)

    def set_cursor(self, x: int, y: int) -> None:
        self.x = x
        self.y = y

    def reset(self) -> None:
        self.x = self.y = self.scroll_x = self.scroll_y = 0

    def move_left(self, document: BufferDocument) -> bool:
        del document
        if self.x > 0:
            self.x -= 1
            return True
        return False

    def move_right(self, document: BufferDocument) -> bool:
        if self.x < document.line_length(self.y):
            self.x += 1
            return True
        return False

    def move_up(self, document: BufferDocument) -> bool:
        if self.y > 0:
            self.y -= 1
            self.x = min(self.x, document.line_length(self.y))
            return True
        return False

    def move_down(self, document: BufferDocument) -> bool:
        if self.y + 1 < document.line_count:
            self.y += 1
            self.x = min(self.x, document.line_length(self.y))
            return True
        return False

    def clamp_to(self, document: BufferDocument) -> None:
        self.y = max(0, min(self.y, document.line_count - 1))
        self.x = max(0, min(self.x, document.line_length(self.y)))

    def reconcile(self, viewport: Viewport) -> None:
        """Shift the scroll offset the minimum needed to show the cursor."""

        if self.x < self.scroll_x:
            self.scroll_x = self.x
        elif self.x >= self.scroll_x + viewport.width:
            self.scroll_x = self.x - viewport.width + 1

        if self.y < self.scroll_y:
            self.scroll_y = self.y
        elif self.y >= self.scroll_y + viewport.text_rows:
            self.scroll_y = self.y - viewport.text_rows + 1


__all__ = ["CursorState", "Viewport", "MIN_WIDTH", "MIN_HEIGHT"]
