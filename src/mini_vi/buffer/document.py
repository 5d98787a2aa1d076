"""Core document data structures for mini_vi buffers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Sequence

from .validation import ensure_position


def split_lines(text: str) -> List[str]:
    """Split file text into lines.

    A final newline does not open an extra empty line and a ``\\r`` before a
    newline is dropped. Empty text yields a single empty line.
    """

    lines = text.split("\n")
    if len(lines) > 1 and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


@dataclass(slots=True)
class BufferDocument:
    """Mutable text storage built on a simple list-of-lines model.

    The document always holds at least one (possibly empty) line. Every
    mutation bumps ``version`` and marks the document dirty.
    """

    _lines: List[str] = field(default_factory=lambda: [""])
    version: int = 0
    dirty: bool = False
    strict: bool = False

    def __post_init__(self) -> None:
        if not self._lines:
            self._lines = [""]

    @classmethod
    def from_text(cls, text: str, *, strict: bool = False) -> "BufferDocument":
        return cls(_lines=split_lines(text), strict=strict)

    def snapshot(self) -> Sequence[str]:
        """Return the current lines without exposing internal mutability."""

        return tuple(self._lines)

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def get_line(self, index: int) -> str:
        return self._lines[index]

    def line_length(self, index: int) -> int:
        return len(self._lines[index])

    def to_text(self) -> str:
        return "\n".join(self._lines)

    def load(self, lines: Iterable[str]) -> None:
        """Replace the whole content; the document is clean afterwards."""

        self._lines = list(lines) or [""]
        self.version += 1
        self.dirty = False

    def insert_char(self, row: int, col: int, char: str) -> None:
        row, col = self._checked(row, col)
        line = self._lines[row]
        self._lines[row] = line[:col] + char + line[col:]
        self._touch()

    def split_line(self, row: int, col: int) -> None:
        """Truncate ``row`` at ``col`` and insert the remainder below it."""

        row, col = self._checked(row, col)
        line = self._lines[row]
        self._lines[row] = line[:col]
        self._lines.insert(row + 1, line[col:])
        self._touch()

    def delete_char(self, row: int, col: int) -> None:
        """Remove the character left of ``col``."""

        row, col = self._checked(row, col)
        if col == 0:
            return
        line = self._lines[row]
        self._lines[row] = line[: col - 1] + line[col:]
        self._touch()

    def merge_with_previous(self, row: int) -> int:
        """Append ``row`` to the line above it and drop ``row``.

        Returns the previous line's length before the merge.
        """

        row, _ = self._checked(row, 0)
        if row == 0:
            return 0
        previous_length = len(self._lines[row - 1])
        self._lines[row - 1] += self._lines.pop(row)
        self._touch()
        return previous_length

    def _checked(self, row: int, col: int) -> tuple[int, int]:
        return ensure_position(self._lines, row, col, strict=self.strict)

    def _touch(self) -> None:
        self.version += 1
        self.dirty = True
