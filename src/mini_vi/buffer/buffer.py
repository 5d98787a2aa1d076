"""High-level buffer façade combining document, cursor, file and status state."""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import ContextManager, Optional, Sequence

from mini_vi.runtime import telemetry
from mini_vi import storage

from .document import BufferDocument
from .state import CursorState, Viewport

NO_NAME = "[No Name]"
NO_FILE_MESSAGE = "Error: no file to write"


class Buffer:
    """Everything the editor knows about the text being edited.

    ``command_line`` holds the in-progress ``:`` command while Command mode
    is active and is ``None`` otherwise; ``status_message`` is the transient
    message shown on the status line. The two never share storage.
    """

    def __init__(
        self,
        *,
        document: Optional[BufferDocument] = None,
        cursor: Optional[CursorState] = None,
        filename: Optional[str] = None,
    ) -> None:
        self.document = document or BufferDocument()
        self.cursor = cursor or CursorState()
        self.filename = filename
        self.command_line: Optional[str] = None
        self.status_message: Optional[str] = None

    @classmethod
    def from_text(
        cls, text: str, *, filename: Optional[str] = None, strict: bool = False
    ) -> "Buffer":
        return cls(
            document=BufferDocument.from_text(text, strict=strict), filename=filename
        )

    @property
    def lines(self) -> Sequence[str]:
        return self.document.snapshot()

    @property
    def display_name(self) -> str:
        return self.filename or NO_NAME

    def set_status(self, message: Optional[str]) -> None:
        self.status_message = message

    # -- Editing -------------------------------------------------------------

    def insert_char(self, char: str) -> None:
        with Transaction(self, "insert_char"):
            self.document.insert_char(self.cursor.y, self.cursor.x, char)
            self.cursor.x += 1

    def newline(self) -> None:
        with Transaction(self, "split_line"):
            self.document.split_line(self.cursor.y, self.cursor.x)
            self.cursor.set_cursor(0, self.cursor.y + 1)

    def backspace(self) -> bool:
        """Delete left of the cursor, joining lines at column zero."""

        if self.cursor.x > 0:
            with Transaction(self, "delete_char"):
                self.document.delete_char(self.cursor.y, self.cursor.x)
                self.cursor.x -= 1
            return True
        if self.cursor.y > 0:
            with Transaction(self, "merge_with_previous"):
                previous_length = self.document.merge_with_previous(self.cursor.y)
                self.cursor.set_cursor(previous_length, self.cursor.y - 1)
            return True
        return False

    def reconcile(self, viewport: Viewport) -> None:
        self.cursor.clamp_to(self.document)
        self.cursor.reconcile(viewport)

    # -- Files ---------------------------------------------------------------

    def load_file(self, path: str) -> storage.FileResult:
        """Replace the content with ``path``; unreadable files start empty.

        The filename is set either way so a later write creates the file.
        Only a file that does not exist is announced as new; any other
        failure is reported with its reason.
        """

        result = storage.load_lines(path)
        self.document.load(result.lines)
        self.cursor.reset()
        self.filename = path
        if result.ok:
            self.set_status(f'"{path}" {result.line_count}L')
        elif result.missing:
            self.set_status(f'"{path}" [New File]')
        else:
            self.set_status(f"Error: could not read {path}: {result.error}")
        return result

    def save_file(self, path: Optional[str] = None) -> Optional[storage.FileResult]:
        """Write the document to ``path`` (or the current filename).

        Returns ``None`` when there is nowhere to write. Failures are
        reported through ``status_message`` and leave the buffer dirty.
        """

        if path is not None:
            self.filename = path
        if not self.filename:
            self.set_status(NO_FILE_MESSAGE)
            return None

        result = storage.save_text(self.filename, self.document.to_text())
        if result.ok:
            self.document.dirty = False
            self.set_status(f'"{self.filename}" {result.line_count}L written')
        else:
            self.set_status(f"Error: could not write {self.filename}: {result.error}")
        return result


class Transaction(AbstractContextManager["Transaction"]):
    """Wraps a single document edit in a telemetry span."""

    def __init__(self, buffer: Buffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self._span_cm: Optional[ContextManager[object]] = None

    def __enter__(self) -> "Transaction":
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            metadata={
                "buffer": self.buffer.display_name,
                "cursor": self.buffer.cursor.position,
            },
        )
        self._span_cm.__enter__()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False


__all__ = ["Buffer", "Transaction", "NO_NAME", "NO_FILE_MESSAGE"]
