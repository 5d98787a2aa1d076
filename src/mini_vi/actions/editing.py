"""Insert-mode edits applied at the cursor."""

from __future__ import annotations

from mini_vi.keymaps import ResolutionMatch
from mini_vi.modes.base_mode import ModeContext, ModeResult


def split_line(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.buffer.newline()
    return ModeResult(consumed=True, status="split_line")


def backspace(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    if context.buffer.backspace():
        return ModeResult(consumed=True, status="deleted")
    return ModeResult(consumed=True, status="at_start")


__all__ = ["split_line", "backspace"]
