"""High-level editing verbs reused across modes."""

from .core import (
    enter_command_mode,
    enter_insert_mode,
    exit_to_normal_mode,
    noop_action,
)
from .motion import move_down, move_left, move_right, move_up
from .editing import backspace, split_line
from .command import (
    erase_command_char,
    parse_command,
    run_command,
    submit_command_line,
)

__all__ = [
    "enter_insert_mode",
    "enter_command_mode",
    "exit_to_normal_mode",
    "noop_action",
    "move_left",
    "move_right",
    "move_up",
    "move_down",
    "split_line",
    "backspace",
    "erase_command_char",
    "parse_command",
    "run_command",
    "submit_command_line",
]
