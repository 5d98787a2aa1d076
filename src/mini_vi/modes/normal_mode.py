"""Normal mode: navigation and the entry points into the other modes."""

from __future__ import annotations

from mini_vi.runtime import telemetry

from .base_mode import EditorMode, KeyInput, Mode, ModeContext, ModeResult
from .keymap_helpers import dispatch_binding, require_keymap_resolver


class NormalMode(Mode):
    """Runs bound keys; every other key is ignored."""

    name = EditorMode.NORMAL

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self.logger = telemetry.get_logger("mini_vi.modes.normal")
        self._resolver = require_keymap_resolver(context)

    def handle_key(self, key: KeyInput) -> ModeResult:
        outcome = dispatch_binding(self.context, self._resolver, self.name, key)
        if outcome is not None:
            return outcome
        return ModeResult(consumed=False, status="ignored")
