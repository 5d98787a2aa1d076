"""Buffer abstractions: document storage, cursor state and file binding."""

from .buffer import NO_FILE_MESSAGE, NO_NAME, Buffer, Transaction
from .document import BufferDocument, split_lines
from .state import CursorState, Viewport
from .validation import BufferValidationError, Position, ensure_position

__all__ = [
    "Buffer",
    "BufferDocument",
    "BufferValidationError",
    "CursorState",
    "NO_FILE_MESSAGE",
    "NO_NAME",
    "Position",
    "Transaction",
    "Viewport",
    "ensure_position",
    "split_lines",
]
