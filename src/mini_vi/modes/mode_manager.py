"""Mode manager coordinating the Normal/Insert/Command state machine."""

from __future__ import annotations

from typing import Dict, Optional, Type

from mini_vi.keymaps import KeymapRegistry, KeymapResolver
from mini_vi.runtime import telemetry

from .base_mode import EditorMode, KeyInput, Mode, ModeContext, ModeResult


class ModeManager:
    """Owns the active mode, handles transitions, and dispatches key events.

    After every key the buffer's scroll offset is reconciled against the
    context viewport, so modes and actions never deal with scrolling.
    """

    def __init__(
        self,
        context: ModeContext,
        *,
        keymap_registry: KeymapRegistry | None = None,
        keymap_resolver: KeymapResolver | None = None,
    ) -> None:
        self.context = context
        self._modes: Dict[EditorMode, Mode] = {}
        self._active: Optional[EditorMode] = None
        self.logger = telemetry.get_logger("mini_vi.modes")
        self.keymap_registry = keymap_registry or KeymapRegistry(
            logger_name="mini_vi.keymaps"
        )
        self.keymap_resolver = keymap_resolver or KeymapResolver(
            self.keymap_registry, logger_name="mini_vi.keymaps"
        )
        self.context.extras.setdefault("keymap_registry", self.keymap_registry)
        self.context.extras.setdefault("keymap_resolver", self.keymap_resolver)

    @property
    def active_mode(self) -> Optional[Mode]:
        if self._active is None:
            return None
        return self._modes.get(self._active)

    @property
    def mode(self) -> EditorMode:
        if self._active is None:
            raise RuntimeError("No active mode registered")
        return self._active

    def register_mode(self, mode_cls: Type[Mode]) -> Mode:
        mode = mode_cls(self.context)
        if mode.name in self._modes:
            raise ValueError(f"Mode '{mode.name.value}' already registered")
        self._modes[mode.name] = mode
        if self._active is None:
            self._active = mode.name
            mode.on_enter(None)
        return mode

    def switch_mode(self, name: EditorMode) -> None:
        target = EditorMode(name)
        if target not in self._modes:
            raise KeyError(f"Unknown mode '{target.value}'")
        previous = self.active_mode
        if previous and previous.name == target:
            return
        if previous:
            previous.on_exit(target)
        self._active = target
        self._modes[target].on_enter(previous.name if previous else None)
        telemetry.record_event("mode.switch", data={"mode": target.value})

    def handle_key(self, key: KeyInput) -> ModeResult:
        mode = self.active_mode
        if mode is None:
            raise RuntimeError("No active mode registered")
        with telemetry.span(
            name=f"mode::{mode.name.value}",
            component=True,
            metadata={"key": key.key, "mode": mode.name.value},
        ):
            result = mode.handle_key(key)
        if result.switch_to:
            self.switch_mode(result.switch_to)
        self.context.buffer.reconcile(self.context.viewport)
        return result
