"""Actions that edit and evaluate the ``:`` command line."""

from __future__ import annotations

from typing import Callable, Dict, Optional, Tuple

from mini_vi.keymaps import ResolutionMatch
from mini_vi.modes.base_mode import EditorMode, ModeContext, ModeResult
from mini_vi.runtime import telemetry

CommandHandler = Callable[[ModeContext, Optional[str]], ModeResult]

EXIT_SUCCESS = 0


def parse_command(raw: str) -> Tuple[str, Optional[str]]:
    """Split ``raw`` into a command name and an optional argument.

    ``"w  notes.txt "`` parses as ``("w", "notes.txt")``; a bare ``"w"``
    parses as ``("w", None)``.
    """

    parts = raw.strip().split(maxsplit=1)
    if not parts:
        return "", None
    argument = parts[1].strip() if len(parts) > 1 else None
    return parts[0], argument or None


def erase_command_char(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    buffer = context.buffer
    if buffer.command_line:
        buffer.command_line = buffer.command_line[:-1]
    return ModeResult(consumed=True, status="editing")


def submit_command_line(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    text = (context.buffer.command_line or "").strip()
    context.bus.emit("command.submit", text)
    return run_command(context, text)


def run_command(context: ModeContext, text: str) -> ModeResult:
    """Evaluate ``text``; the result always switches back to Normal mode."""

    name, argument = parse_command(text)
    if not name:
        return ModeResult(
            consumed=True, switch_to=EditorMode.NORMAL, status="command_empty"
        )
    handler = _COMMAND_HANDLERS.get(name)
    if handler is None:
        return _unknown_command(context, text)

    telemetry.record_event("command.run", data={"command": name, "arg": argument})
    with telemetry.span(
        f"command::{name}", component="commands", metadata={"command": text}
    ):
        return handler(context, argument)


def _unknown_command(context: ModeContext, text: str) -> ModeResult:
    context.bus.emit("command.error", text)
    return ModeResult(
        consumed=True,
        switch_to=EditorMode.NORMAL,
        status="command_unknown",
        message=text,
    )


def _handle_quit(context: ModeContext, argument: Optional[str]) -> ModeResult:
    if argument is not None:
        return _unknown_command(context, f"q {argument}")
    context.bus.emit("command.quit", {"exit_code": EXIT_SUCCESS})
    return ModeResult(
        consumed=True,
        switch_to=EditorMode.NORMAL,
        status="command_quit",
        message="quit",
        exit_code=EXIT_SUCCESS,
    )


def _handle_write(context: ModeContext, argument: Optional[str]) -> ModeResult:
    status = _write(context, argument)
    return ModeResult(
        consumed=True,
        switch_to=EditorMode.NORMAL,
        status=status,
        message=context.buffer.status_message,
    )


def _handle_wq(context: ModeContext, argument: Optional[str]) -> ModeResult:
    """Save, then quit; a save that did not happen keeps the session open."""

    if argument is not None:
        return _unknown_command(context, f"wq {argument}")
    status = _write(context, None)
    saved = status == "command_write"
    if saved:
        context.bus.emit("command.quit", {"exit_code": EXIT_SUCCESS})
    return ModeResult(
        consumed=True,
        switch_to=EditorMode.NORMAL,
        status=status,
        message=context.buffer.status_message,
        exit_code=EXIT_SUCCESS if saved else None,
    )


def _handle_edit(context: ModeContext, argument: Optional[str]) -> ModeResult:
    if argument is None:
        return _unknown_command(context, "e")
    buffer = context.buffer
    result = buffer.load_file(argument)
    context.bus.emit("command.edit", {"path": argument, "ok": result.ok})
    if result.ok:
        status = "command_edit"
    elif result.missing:
        status = "command_edit_new"
    else:
        status = "command_edit_failed"
    return ModeResult(
        consumed=True,
        switch_to=EditorMode.NORMAL,
        status=status,
        message=buffer.status_message,
    )


def _write(context: ModeContext, path: Optional[str]) -> str:
    buffer = context.buffer
    result = buffer.save_file(path)
    context.bus.emit(
        "command.write",
        {"path": buffer.filename, "ok": bool(result and result.ok)},
    )
    if result is None:
        return "command_no_file"
    return "command_write" if result.ok else "command_write_failed"


_COMMAND_HANDLERS: Dict[str, CommandHandler] = {
    "q": _handle_quit,
    "w": _handle_write,
    "wq": _handle_wq,
    "e": _handle_edit,
}


__all__ = [
    "EXIT_SUCCESS",
    "erase_command_char",
    "parse_command",
    "run_command",
    "submit_command_line",
]
