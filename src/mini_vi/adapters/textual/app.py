"""Executable Textual app hosting the editor core."""

from __future__ import annotations

from typing import Any, Optional, Tuple

from rich.text import Text
from textual import events
from textual.app import App, ComposeResult
from textual.widget import Widget

from mini_vi.render import DrawPlan, GridPainter, paint
from mini_vi.runtime import telemetry
from mini_vi.runtime.loop import Editor

from .controller import TextualEditorAdapter, TextualUIHooks

CURSOR_STYLE = "reverse"


class EditorView(Widget):
    """Full-screen character grid painted from ``DrawPlan`` frames."""

    DEFAULT_CSS = """
    EditorView {
        width: 1fr;
        height: 1fr;
    }
    """

    def __init__(self, *, id: str | None = None) -> None:
        super().__init__(id=id)
        self.painter = GridPainter(1, 3)

    def show(self, plan: DrawPlan) -> None:
        if (self.painter.width, self.painter.height) != (plan.width, plan.height):
            self.painter.resize(plan.width, plan.height)
        paint(plan, self.painter)
        self.refresh()

    def render(self) -> Text:
        return grid_to_text(self.painter)


def grid_to_text(painter: GridPainter) -> Text:
    text = Text(no_wrap=True, overflow="crop")
    text.append("\n".join(line.replace("\t", " ") for line in painter.lines))
    col, row = painter.cursor
    if 0 <= row < painter.height and 0 <= col < painter.width:
        offset = row * (painter.width + 1) + col
        text.stylize(CURSOR_STYLE, offset, offset + 1)
    return text


def normalize_key(event: Any) -> Optional[Tuple[str, Optional[str], Tuple[str, ...]]]:
    """Map a Textual key event to ``(key, text, modifiers)``."""

    key = event.key
    character = getattr(event, "character", None)
    if key == "escape":
        return ("ESC", None, ())
    if key in {"enter", "return", "ctrl+m"}:
        return ("ENTER", None, ())
    if key in {"backspace", "ctrl+h"}:
        return ("BACKSPACE", None, ())
    if key == "tab":
        return ("\t", "\t", ())
    if character and getattr(event, "is_printable", character.isprintable()):
        return (character, character, ())
    if "+" in key:
        *modifiers, name = key.split("+")
        return (name.upper(), None, tuple(mod.upper() for mod in modifiers))
    return (key.upper(), None, ())


class MiniViApp(App[int]):
    """Textual host: one editor, one full-screen view."""

    CSS = """
    Screen {
        layout: vertical;
        overflow: hidden;
    }
    """

    def __init__(self, editor: Editor) -> None:
        super().__init__()
        self.editor = editor
        self.adapter: TextualEditorAdapter | None = None
        self._view: EditorView | None = None
        self._logger = telemetry.get_logger("mini_vi.adapters.textual")

    def compose(self) -> ComposeResult:
        self._view = EditorView(id="editor-view")
        yield self._view

    def on_mount(self) -> None:
        hooks = TextualUIHooks(
            update_screen=self._update_screen,
            handle_event=self._handle_event,
            exit=self._exit_with,
            log=self._log_line,
        )
        self.editor.resize(self.size.width, self.size.height)
        self.adapter = TextualEditorAdapter(self.editor, hooks)

    def on_resize(self, event: events.Resize) -> None:
        if self.adapter:
            self.adapter.resize(event.size.width, event.size.height)

    def on_key(self, event: events.Key) -> None:
        if not self.adapter:
            return
        normalized = normalize_key(event)
        if normalized is None:
            return
        key, text, modifiers = normalized
        event.stop()
        event.prevent_default()
        self.adapter.handle_textual_key(key, text=text, modifiers=modifiers)

    def _update_screen(self, plan: DrawPlan) -> None:
        if self._view:
            self._view.show(plan)

    def _handle_event(self, name: str, payload: Any | None) -> None:
        telemetry.record_event(
            "ui.bus", level="debug", data={"name": name, "payload": payload}
        )

    def _exit_with(self, code: int) -> None:
        self.exit(result=code, return_code=code)

    def _log_line(self, line: str) -> None:
        self._logger.debug(line)


__all__ = ["EditorView", "MiniViApp", "grid_to_text", "normalize_key"]
