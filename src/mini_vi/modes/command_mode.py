"""Command-line mode: collects a ``:`` command and submits it."""

from __future__ import annotations

from typing import Optional

from mini_vi.runtime import telemetry

from .base_mode import EditorMode, KeyInput, Mode, ModeContext, ModeResult
from .insert_mode import is_text_input
from .keymap_helpers import dispatch_binding, require_keymap_resolver


class CommandMode(Mode):
    """Owns ``Buffer.command_line`` while active.

    Entering clears the command line and any status message; leaving
    (submit or cancel) drops the command line again.
    """

    name = EditorMode.COMMAND

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self.logger = telemetry.get_logger("mini_vi.modes.command")
        self._resolver = require_keymap_resolver(context)

    def on_enter(self, previous: Optional[EditorMode]) -> None:
        del previous
        self.context.buffer.command_line = ""
        self.context.buffer.set_status(None)
        self.context.bus.emit("command.start", None)

    def on_exit(self, next_mode: Optional[EditorMode]) -> None:
        del next_mode
        self.context.bus.emit("command.end", self.current_command)
        self.context.buffer.command_line = None

    @property
    def current_command(self) -> str:
        return self.context.buffer.command_line or ""

    def handle_key(self, key: KeyInput) -> ModeResult:
        outcome = dispatch_binding(self.context, self._resolver, self.name, key)
        if outcome is not None:
            return outcome
        if is_text_input(key):
            self.context.buffer.command_line = self.current_command + (key.text or "")
            return ModeResult(consumed=True, status="editing")
        return ModeResult(consumed=False, status="miss", message="unhandled")
