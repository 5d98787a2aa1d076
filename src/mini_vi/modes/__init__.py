"""Mode manager and the Normal / Insert / Command modes."""

from .base_mode import (
    BACKSPACE,
    ENTER,
    ESC,
    EditorMode,
    KeyInput,
    Mode,
    ModeBus,
    ModeContext,
    ModeResult,
)
from .normal_mode import NormalMode
from .insert_mode import InsertMode
from .command_mode import CommandMode
from .mode_manager import ModeManager

__all__ = [
    "BACKSPACE",
    "ENTER",
    "ESC",
    "EditorMode",
    "KeyInput",
    "Mode",
    "ModeBus",
    "ModeContext",
    "ModeResult",
    "ModeManager",
    "NormalMode",
    "InsertMode",
    "CommandMode",
]
