"""Insert mode: typed characters go into the buffer at the cursor."""

from __future__ import annotations

from mini_vi.runtime import telemetry

from .base_mode import EditorMode, KeyInput, Mode, ModeContext, ModeResult
from .keymap_helpers import dispatch_binding, require_keymap_resolver


def is_text_input(key: KeyInput) -> bool:
    text = key.text
    if not text or key.modifiers:
        return False
    return all(char.isprintable() or char == "\t" for char in text)


class InsertMode(Mode):
    name = EditorMode.INSERT

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self.logger = telemetry.get_logger("mini_vi.modes.insert")
        self._resolver = require_keymap_resolver(context)

    def handle_key(self, key: KeyInput) -> ModeResult:
        outcome = dispatch_binding(self.context, self._resolver, self.name, key)
        if outcome is not None:
            return outcome
        if is_text_input(key):
            for char in key.text or "":
                self.context.buffer.insert_char(char)
            return ModeResult(consumed=True, status="inserted")
        return ModeResult(consumed=False, status="ignored")
