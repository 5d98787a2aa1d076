"""Normal-mode cursor motions (``h`` ``j`` ``k`` ``l``).

Motions only move the cursor inside the document; the mode manager
reconciles the scroll offset against the viewport afterwards.
"""

from __future__ import annotations

from mini_vi.keymaps import ResolutionMatch
from mini_vi.modes.base_mode import ModeContext, ModeResult


def _moved(moved: bool) -> ModeResult:
    return ModeResult(consumed=True, status="moved" if moved else "at_edge")


def move_left(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    buffer = context.buffer
    return _moved(buffer.cursor.move_left(buffer.document))


def move_right(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    buffer = context.buffer
    return _moved(buffer.cursor.move_right(buffer.document))


def move_up(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    buffer = context.buffer
    return _moved(buffer.cursor.move_up(buffer.document))


def move_down(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    buffer = context.buffer
    return _moved(buffer.cursor.move_down(buffer.document))


__all__ = ["move_left", "move_right", "move_up", "move_down"]
