"""Validation helpers shared across buffer services."""

from __future__ import annotations

from typing import Sequence, Tuple

from mini_vi.runtime import telemetry

Position = Tuple[int, int]  # (row, column)


class BufferValidationError(RuntimeError):
    """Raised in strict mode when a caller supplies an out-of-range index."""

    def __init__(self, message: str, *, position: Position | None = None) -> None:
        super().__init__(message)
        self.position = position


def ensure_position(
    lines: Sequence[str], row: int, col: int, *, strict: bool = False
) -> Position:
    """Return ``(row, col)`` if it addresses ``lines``, else raise or clamp.

    ``col`` may equal the line length (the append position).
    """

    if 0 <= row < len(lines) and 0 <= col <= len(lines[row]):
        return row, col
    if strict:
        raise BufferValidationError(
            f"Position {(row, col)} out of range", position=(row, col)
        )
    clamped_row = max(0, min(row, len(lines) - 1))
    clamped_col = max(0, min(col, len(lines[clamped_row])))
    telemetry.record_event(
        "buffer.clamp",
        level="warning",
        data={"requested": (row, col), "clamped": (clamped_row, clamped_col)},
    )
    return clamped_row, clamped_col


__all__ = ["BufferValidationError", "Position", "ensure_position"]
