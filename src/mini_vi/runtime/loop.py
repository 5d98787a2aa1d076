"""The editor instance and its render, read key, dispatch loop."""

from __future__ import annotations

from typing import Callable, Optional, Protocol, Tuple

from mini_vi.buffer import Buffer, BufferDocument, Viewport
from mini_vi.keymaps import KeymapRegistry, KeymapResolver
from mini_vi.keymaps.defaults import load_default_keymaps
from mini_vi.modes import (
    CommandMode,
    EditorMode,
    InsertMode,
    KeyInput,
    ModeBus,
    ModeContext,
    ModeManager,
    ModeResult,
    NormalMode,
)
from mini_vi.render import DrawPlan, Painter, build_plan, paint

from . import telemetry
from .settings import Settings, load_settings

SizeProvider = Callable[[], Tuple[int, int]]


class KeySource(Protocol):
    """Blocking source of key events; ``None`` signals end of input."""

    def read_key(self) -> Optional[KeyInput]:
        ...


def create_default_manager(
    buffer: Buffer, *, viewport: Optional[Viewport] = None
) -> ModeManager:
    """Build a ModeManager with the three modes and the default keymaps."""

    registry = KeymapRegistry(logger_name="mini_vi.keymaps")
    load_default_keymaps(registry)
    resolver = KeymapResolver(registry, logger_name="mini_vi.keymaps")
    context = ModeContext(
        buffer=buffer,
        bus=ModeBus(),
        viewport=viewport or Viewport(),
        extras={},
    )
    manager = ModeManager(
        context, keymap_registry=registry, keymap_resolver=resolver
    )
    manager.register_mode(NormalMode)
    manager.register_mode(InsertMode)
    manager.register_mode(CommandMode)
    return manager


class Editor:
    """Single-session editor state: buffer, modes and viewport."""

    def __init__(
        self,
        *,
        buffer: Optional[Buffer] = None,
        viewport: Optional[Viewport] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        self.settings = settings or load_settings()
        self.buffer = buffer or Buffer(
            document=BufferDocument(strict=self.settings.strict_bounds)
        )
        self.manager = create_default_manager(self.buffer, viewport=viewport)
        self.logger = telemetry.get_logger("mini_vi.editor")

    @classmethod
    def open(
        cls,
        path: Optional[str] = None,
        *,
        viewport: Optional[Viewport] = None,
        settings: Optional[Settings] = None,
    ) -> "Editor":
        editor = cls(viewport=viewport, settings=settings)
        if path:
            editor.buffer.load_file(path)
        return editor

    @property
    def mode(self) -> EditorMode:
        return self.manager.mode

    @property
    def viewport(self) -> Viewport:
        return self.manager.context.viewport

    @property
    def bus(self) -> ModeBus:
        return self.manager.context.bus

    def resize(self, width: int, height: int) -> None:
        viewport = Viewport(width, height)
        if viewport == self.viewport:
            return
        self.manager.context.viewport = viewport
        self.buffer.reconcile(viewport)

    def handle_key(self, key: KeyInput) -> ModeResult:
        return self.manager.handle_key(key)

    def plan(self) -> DrawPlan:
        return build_plan(self.buffer, self.mode, self.viewport)


def run(
    editor: Editor,
    keys: KeySource,
    painter: Painter,
    *,
    size: Optional[SizeProvider] = None,
) -> int:
    """Drive ``editor`` until a command exits or the key source runs dry.

    Returns the process exit code.
    """

    with telemetry.span("editor::session", component=True):
        while True:
            if size is not None:
                editor.resize(*size())
            paint(editor.plan(), painter)
            key = keys.read_key()
            if key is None:
                return 0
            result = editor.handle_key(key)
            if result.exit_code is not None:
                return result.exit_code


__all__ = ["Editor", "KeySource", "SizeProvider", "create_default_manager", "run"]
