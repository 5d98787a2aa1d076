"""Screen-painting boundary: drives any ``Painter`` from a ``DrawPlan``."""

from __future__ import annotations

from typing import List, Protocol, Tuple

from .plan import DrawPlan


class Painter(Protocol):
    """Low-level terminal operations the renderer relies on."""

    def clear(self) -> None:
        ...

    def write(self, col: int, row: int, text: str) -> None:
        ...

    def move_cursor(self, col: int, row: int) -> None:
        ...

    def flush(self) -> None:
        ...


def paint(plan: DrawPlan, painter: Painter) -> None:
    """Clear the screen and draw one frame."""

    painter.clear()
    for row, text in enumerate(plan.rows):
        if text:
            painter.write(0, row, text)
    if plan.command_line is not None:
        painter.write(0, plan.command_row, plan.command_line)
    painter.write(0, plan.status_row, plan.status_line)
    painter.move_cursor(*plan.cursor)
    painter.flush()


class GridPainter:
    """In-memory painter keeping a character grid of the last frame.

    Writes outside the grid are clipped.
    """

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self.cursor: Tuple[int, int] = (0, 0)
        self.frames = 0
        self._cells: List[List[str]] = []
        self.clear()

    def resize(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self.clear()

    def clear(self) -> None:
        self._cells = [[" "] * self.width for _ in range(self.height)]

    def write(self, col: int, row: int, text: str) -> None:
        if not 0 <= row < self.height:
            return
        cells = self._cells[row]
        for offset, char in enumerate(text):
            column = col + offset
            if 0 <= column < self.width:
                cells[column] = char

    def move_cursor(self, col: int, row: int) -> None:
        self.cursor = (col, row)

    def flush(self) -> None:
        self.frames += 1

    @property
    def lines(self) -> List[str]:
        return ["".join(cells) for cells in self._cells]

    def line(self, row: int) -> str:
        return "".join(self._cells[row]).rstrip()


__all__ = ["GridPainter", "Painter", "paint"]
