"""Textual adapter that wires the editor core into UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional

from mini_vi.modes import KeyInput, ModeResult
from mini_vi.render import DrawPlan
from mini_vi.runtime.loop import Editor

RELAYED_EVENTS = (
    "command.start",
    "command.end",
    "command.submit",
    "command.write",
    "command.quit",
    "command.edit",
    "command.error",
)


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks the adapter drives; only ``update_screen`` is required."""

    update_screen: Callable[[DrawPlan], None]
    handle_event: Callable[[str, object | None], None] = _noop
    exit: Callable[[int], None] = _noop
    log: Callable[[str], None] = _noop


class TextualEditorAdapter:
    """Feeds host key events to an ``Editor`` and pushes frames back.

    A frame is sent on construction, after every key and after every resize,
    except for the key that ends the session: that one calls ``hooks.exit``.
    """

    def __init__(self, editor: Editor, hooks: TextualUIHooks) -> None:
        self.editor = editor
        self.hooks = hooks
        for event in RELAYED_EVENTS:
            editor.bus.subscribe(
                event, lambda payload, name=event: self._relay(name, payload)
            )
        self.refresh()

    def handle_textual_key(
        self,
        key: str,
        *,
        text: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> ModeResult:
        key_input = KeyInput(
            key=key, text=text, modifiers=tuple(str(mod).upper() for mod in modifiers)
        )
        self._trace("key ->", key=key, text=text, mods=key_input.modifiers or None)
        result = self.editor.handle_key(key_input)
        self._trace(
            "result <-",
            status=result.status,
            message=result.message,
            exit_code=result.exit_code,
        )
        if result.exit_code is not None:
            self.hooks.exit(result.exit_code)
        else:
            self.refresh()
        return result

    def resize(self, width: int, height: int) -> None:
        self.editor.resize(width, height)
        self.refresh()

    def refresh(self) -> None:
        self.hooks.update_screen(self.editor.plan())

    def _relay(self, name: str, payload: object | None) -> None:
        self._trace("event ->", event=name, payload=payload)
        self.hooks.handle_event(name, payload)

    def _trace(self, prefix: str, **fields: object) -> None:
        state = self._state()
        state.update((key, value) for key, value in fields.items() if value is not None)
        self.hooks.log(
            " ".join([prefix, *(f"{key}={value!r}" for key, value in state.items())])
        )

    def _state(self) -> Dict[str, object]:
        buffer = self.editor.buffer
        return {
            "mode": self.editor.mode.value,
            "cursor": buffer.cursor.position,
            "scroll": (buffer.cursor.scroll_x, buffer.cursor.scroll_y),
            "command": buffer.command_line,
            "file": buffer.display_name,
        }


__all__ = ["RELAYED_EVENTS", "TextualEditorAdapter", "TextualUIHooks"]
