"""Core action implementations shared across modes."""

from __future__ import annotations

from mini_vi.keymaps import ResolutionMatch
from mini_vi.modes.base_mode import EditorMode, ModeContext, ModeResult


def enter_insert_mode(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del context, match
    return ModeResult(
        consumed=True, switch_to=EditorMode.INSERT, message="enter_insert"
    )


def enter_command_mode(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del context, match
    return ModeResult(
        consumed=True, switch_to=EditorMode.COMMAND, message="enter_command"
    )


def exit_to_normal_mode(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del context, match
    return ModeResult(consumed=True, switch_to=EditorMode.NORMAL, message="exit")


def noop_action(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del context, match
    return ModeResult(consumed=True, status="noop")


__all__ = [
    "enter_insert_mode",
    "enter_command_mode",
    "exit_to_normal_mode",
    "noop_action",
]
