"""Built-in keymaps that seed each mode with its key set."""

from __future__ import annotations

from typing import Iterable, Sequence

from mini_vi.actions import command as command_actions
from mini_vi.actions import core as core_actions
from mini_vi.actions import editing as editing_actions
from mini_vi.actions import motion as motion_actions

from .models import ActionRef, Binding
from .registry import KeymapRegistry

DEFAULT_ACTIONS: tuple[ActionRef, ...] = (
    ActionRef(
        id="core.enter_insert",
        handler=core_actions.enter_insert_mode,
        description="Enter insert mode",
    ),
    ActionRef(
        id="core.enter_command",
        handler=core_actions.enter_command_mode,
        description="Enter command-line mode",
    ),
    ActionRef(
        id="core.exit_to_normal",
        handler=core_actions.exit_to_normal_mode,
        description="Return to normal mode",
    ),
    ActionRef(
        id="core.noop",
        handler=core_actions.noop_action,
        description="Do nothing",
    ),
    ActionRef(
        id="motion.left",
        handler=motion_actions.move_left,
        description="Move cursor left",
    ),
    ActionRef(
        id="motion.right",
        handler=motion_actions.move_right,
        description="Move cursor right",
    ),
    ActionRef(
        id="motion.up",
        handler=motion_actions.move_up,
        description="Move cursor up",
    ),
    ActionRef(
        id="motion.down",
        handler=motion_actions.move_down,
        description="Move cursor down",
    ),
    ActionRef(
        id="edit.split_line",
        handler=editing_actions.split_line,
        description="Break the line at the cursor",
    ),
    ActionRef(
        id="edit.backspace",
        handler=editing_actions.backspace,
        description="Delete left of the cursor",
    ),
    ActionRef(
        id="command.erase_char",
        handler=command_actions.erase_command_char,
        description="Delete the last command-line character",
    ),
    ActionRef(
        id="command.submit_line",
        handler=command_actions.submit_command_line,
        description="Evaluate the active command line",
    ),
)


def _bind(
    mode: str, key: str, action_id: str, description: str, *, suffix: str = ""
) -> Binding:
    return Binding(
        id=f"{mode}.{action_id.split('.')[-1]}{suffix}",
        mode=mode,
        key=key,
        action_id=action_id,
        description=description,
    )


DEFAULT_BINDINGS: tuple[Binding, ...] = (
    _bind("normal", "i", "core.enter_insert", "Enter insert mode"),
    _bind("normal", ":", "core.enter_command", "Enter command-line mode"),
    _bind("normal", "h", "motion.left", "Move cursor left"),
    _bind("normal", "l", "motion.right", "Move cursor right"),
    _bind("normal", "k", "motion.up", "Move cursor up"),
    _bind("normal", "j", "motion.down", "Move cursor down"),
    _bind("normal", "ESC", "core.noop", "Escape is a no-op in normal mode"),
    _bind("normal", "<Esc>", "core.noop", "Escape is a no-op", suffix="_alt"),
    _bind("insert", "ESC", "core.exit_to_normal", "Leave insert mode"),
    _bind("insert", "<Esc>", "core.exit_to_normal", "Leave insert mode", suffix="_alt"),
    _bind("insert", "ENTER", "edit.split_line", "Break the line"),
    _bind("insert", "RETURN", "edit.split_line", "Break the line", suffix="_alt"),
    _bind("insert", "BACKSPACE", "edit.backspace", "Delete left of the cursor"),
    _bind("command", "ESC", "core.exit_to_normal", "Cancel command line"),
    _bind("command", "<Esc>", "core.exit_to_normal", "Cancel command line", suffix="_alt"),
    _bind("command", "ENTER", "command.submit_line", "Submit the command line"),
    _bind("command", "RETURN", "command.submit_line", "Submit the command line", suffix="_alt"),
    _bind("command", "BACKSPACE", "command.erase_char", "Delete last character"),
)


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    replace: bool = False,
    extra_bindings: Iterable[Binding] | None = None,
    exclude_bindings: Sequence[str] | None = None,
) -> None:
    """Register built-in actions and bindings for every mode."""

    excluded = set(exclude_bindings or ())

    for action in DEFAULT_ACTIONS:
        registry.register_action(action, replace=replace)

    for binding in DEFAULT_BINDINGS:
        if binding.id in excluded:
            continue
        registry.register_binding(binding, replace=replace)

    if extra_bindings:
        for binding in extra_bindings:
            registry.register_binding(binding, replace=replace)


__all__ = ["load_default_keymaps", "DEFAULT_ACTIONS", "DEFAULT_BINDINGS"]
