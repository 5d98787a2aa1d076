from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import pytest

from mini_vi.actions import parse_command, run_command
from mini_vi.actions.command import EXIT_SUCCESS
from mini_vi.buffer import NO_FILE_MESSAGE, Buffer
from mini_vi.modes import EditorMode, ModeBus, ModeContext


def make_context(buffer: Optional[Buffer] = None) -> ModeContext:
    return ModeContext(buffer=buffer or Buffer(), bus=ModeBus())


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("q", ("q", None)),
        ("  wq  ", ("wq", None)),
        ("w notes.txt", ("w", "notes.txt")),
        ("w   spaced name.txt  ", ("w", "spaced name.txt")),
        ("e ", ("e", None)),
        ("", ("", None)),
    ],
)
def test_parse_command(raw: str, expected: tuple) -> None:
    assert parse_command(raw) == expected


def test_quit_requests_exit() -> None:
    buffer = Buffer.from_text("unsaved")
    buffer.insert_char("!")
    result = run_command(make_context(buffer), "q")

    assert result.exit_code == EXIT_SUCCESS
    assert result.switch_to is EditorMode.NORMAL
    assert buffer.document.dirty is True


def test_write_without_filename_reports_and_keeps_buffer() -> None:
    buffer = Buffer.from_text("abc")
    context = make_context(buffer)

    result = run_command(context, "w")

    assert result.status == "command_no_file"
    assert result.exit_code is None
    assert buffer.status_message == NO_FILE_MESSAGE
    assert buffer.lines == ("abc",)
    assert buffer.filename is None


def test_write_with_path_sets_filename(tmp_path: Path) -> None:
    target = tmp_path / "out.txt"
    buffer = Buffer.from_text("hi\nthere")
    buffer.insert_char("x")

    result = run_command(make_context(buffer), f"w {target}")

    assert result.status == "command_write"
    assert target.read_text(encoding="utf-8") == "xhi\nthere"
    assert buffer.filename == str(target)
    assert buffer.document.dirty is False
    assert buffer.status_message == f'"{target}" 2L written'


def test_write_uses_current_filename(tmp_path: Path) -> None:
    target = tmp_path / "current.txt"
    target.write_text("old", encoding="utf-8")
    buffer = Buffer.from_text("new", filename=str(target))

    run_command(make_context(buffer), "w")

    assert target.read_text(encoding="utf-8") == "new"


def test_write_failure_is_recoverable(tmp_path: Path) -> None:
    buffer = Buffer.from_text("keep me", filename=str(tmp_path))
    buffer.insert_char("!")
    events: List[object] = []
    context = make_context(buffer)
    context.bus.subscribe("command.write", events.append)

    result = run_command(context, "w")

    assert result.status == "command_write_failed"
    assert result.exit_code is None
    assert buffer.status_message is not None
    assert buffer.status_message.startswith(f"Error: could not write {tmp_path}: ")
    assert buffer.lines == ("!keep me",)
    assert buffer.document.dirty is True
    assert events == [{"path": str(tmp_path), "ok": False}]


def test_write_quit_saves_then_exits(tmp_path: Path) -> None:
    target = tmp_path / "wq.txt"
    buffer = Buffer.from_text("done", filename=str(target))

    result = run_command(make_context(buffer), "wq")

    assert result.exit_code == EXIT_SUCCESS
    assert result.status == "command_write"
    assert target.read_text(encoding="utf-8") == "done"


def test_write_quit_without_filename_stays_open() -> None:
    buffer = Buffer.from_text("abc")
    buffer.insert_char("!")
    quits: List[object] = []
    context = make_context(buffer)
    context.bus.subscribe("command.quit", quits.append)

    result = run_command(context, "wq")

    assert result.exit_code is None
    assert result.status == "command_no_file"
    assert result.switch_to is EditorMode.NORMAL
    assert buffer.status_message == NO_FILE_MESSAGE
    assert buffer.document.dirty is True
    assert quits == []


def test_write_quit_failure_keeps_session_open(tmp_path: Path) -> None:
    buffer = Buffer.from_text("unsaved", filename=str(tmp_path))
    buffer.insert_char("!")

    result = run_command(make_context(buffer), "wq")

    assert result.exit_code is None
    assert result.status == "command_write_failed"
    assert buffer.status_message is not None
    assert buffer.status_message.startswith(f"Error: could not write {tmp_path}: ")
    assert buffer.document.dirty is True


def test_edit_missing_file_starts_empty(tmp_path: Path) -> None:
    target = tmp_path / "missing.txt"
    buffer = Buffer.from_text("old\ncontent")
    buffer.cursor.set_cursor(2, 1)

    result = run_command(make_context(buffer), f"e {target}")

    assert result.status == "command_edit_new"
    assert buffer.lines == ("",)
    assert buffer.filename == str(target)
    assert buffer.cursor.position == (0, 0)
    assert buffer.status_message == f'"{target}" [New File]'
    assert not target.exists()


def test_edit_existing_file_loads_lines(tmp_path: Path) -> None:
    target = tmp_path / "notes.txt"
    target.write_text("one\ntwo\n", encoding="utf-8")
    buffer = Buffer()
    buffer.insert_char("z")

    result = run_command(make_context(buffer), f"e {target}")

    assert result.status == "command_edit"
    assert buffer.lines == ("one", "two")
    assert buffer.document.dirty is False
    assert buffer.status_message == f'"{target}" 2L'


def test_edit_directory_reports_read_error(tmp_path: Path) -> None:
    buffer = Buffer.from_text("old")

    result = run_command(make_context(buffer), f"e {tmp_path}")

    assert result.status == "command_edit_failed"
    assert buffer.lines == ("",)
    assert buffer.filename == str(tmp_path)
    assert buffer.status_message is not None
    assert buffer.status_message.startswith(f"Error: could not read {tmp_path}: ")
    assert "[New File]" not in buffer.status_message


def test_edit_invalid_utf8_reports_read_error(tmp_path: Path) -> None:
    target = tmp_path / "binary.dat"
    target.write_bytes(b"ok\n\xff\xfe\n")
    buffer = Buffer()

    result = run_command(make_context(buffer), f"e {target}")

    assert result.status == "command_edit_failed"
    assert buffer.status_message is not None
    assert buffer.status_message.startswith(f"Error: could not read {target}: ")
    assert target.read_bytes() == b"ok\n\xff\xfe\n"


def test_unknown_command_changes_nothing() -> None:
    buffer = Buffer.from_text("abc")
    errors: List[object] = []
    context = make_context(buffer)
    context.bus.subscribe("command.error", errors.append)

    result = run_command(context, "frobnicate")

    assert result.status == "command_unknown"
    assert result.switch_to is EditorMode.NORMAL
    assert result.exit_code is None
    assert buffer.lines == ("abc",)
    assert buffer.status_message is None
    assert errors == ["frobnicate"]


@pytest.mark.parametrize("text", ["e", "q now", "wq file.txt"])
def test_malformed_commands_are_unknown(text: str) -> None:
    result = run_command(make_context(), text)

    assert result.status == "command_unknown"
    assert result.exit_code is None


def test_empty_command_returns_to_normal() -> None:
    result = run_command(make_context(), "")

    assert result.status == "command_empty"
    assert result.switch_to is EditorMode.NORMAL
