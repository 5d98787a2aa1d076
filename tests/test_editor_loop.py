from __future__ import annotations

import random
from pathlib import Path
from typing import Iterable, List, Optional

from mini_vi.buffer import NO_FILE_MESSAGE, Viewport
from mini_vi.modes import BACKSPACE, ENTER, ESC, EditorMode, KeyInput
from mini_vi.render import GridPainter
from mini_vi.runtime.loop import Editor, run
from mini_vi.runtime.settings import Settings


class ScriptedKeys:
    """Key source replaying a fixed script, then reporting end of input."""

    def __init__(self, keys: Iterable[str], editor: Optional[Editor] = None) -> None:
        self._keys: List[KeyInput] = []
        for key in keys:
            if key in {ESC, ENTER, BACKSPACE}:
                self._keys.append(KeyInput(key=key))
            else:
                self._keys.extend(KeyInput.char(char) for char in key)
        self.editor = editor

    def read_key(self) -> Optional[KeyInput]:
        if self.editor is not None:
            check_invariants(self.editor)
        if not self._keys:
            return None
        return self._keys.pop(0)


def check_invariants(editor: Editor) -> None:
    buffer = editor.buffer
    cursor = buffer.cursor
    viewport = editor.viewport
    assert buffer.document.line_count >= 1
    assert 0 <= cursor.y < buffer.document.line_count
    assert 0 <= cursor.x <= buffer.document.line_length(cursor.y)
    assert cursor.scroll_x <= cursor.x < cursor.scroll_x + viewport.width
    assert cursor.scroll_y <= cursor.y < cursor.scroll_y + viewport.text_rows


def make_editor(
    path: Optional[Path] = None, *, width: int = 40, height: int = 10
) -> Editor:
    return Editor.open(
        str(path) if path else None,
        viewport=Viewport(width, height),
        settings=Settings(),
    )


def drive(editor: Editor, keys: Iterable[str]) -> int:
    painter = GridPainter(editor.viewport.width, editor.viewport.height)
    return run(editor, ScriptedKeys(keys, editor), painter)


def test_type_two_lines_and_write_quit(tmp_path: Path) -> None:
    target = tmp_path / "scenario.txt"
    editor = make_editor(target)

    code = drive(editor, ["i", "hi", ENTER, "there", ESC, ":wq", ENTER])

    assert code == 0
    assert target.read_text(encoding="utf-8") == "hi\nthere"


def test_vertical_moves_return_with_clamped_column(tmp_path: Path) -> None:
    target = tmp_path / "three.txt"
    target.write_text("abcdef\nab\nabcd\n", encoding="utf-8")
    editor = make_editor(target)

    drive(editor, ["lllll"])
    assert editor.buffer.cursor.position == (5, 0)

    drive(editor, ["jj"])
    assert editor.buffer.cursor.position == (2, 2)

    drive(editor, ["kk"])
    assert editor.buffer.cursor.position == (2, 0)


def test_edit_missing_file_from_command_mode(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    editor = make_editor()
    editor.buffer.insert_char("x")

    drive(editor, [":e missing.txt", ENTER])

    assert editor.buffer.lines == ("",)
    assert editor.buffer.filename == "missing.txt"
    assert editor.mode is EditorMode.NORMAL


def test_backspace_at_line_start_joins_lines(tmp_path: Path) -> None:
    target = tmp_path / "join.txt"
    target.write_text("hello\nworld", encoding="utf-8")
    editor = make_editor(target)

    drive(editor, ["j", "i", BACKSPACE])

    assert editor.buffer.lines == ("helloworld",)
    assert editor.buffer.cursor.position == (5, 0)


def test_write_without_filename_sets_status() -> None:
    editor = make_editor()
    drive(editor, ["i", "abc", ESC])

    code = drive(editor, [":w", ENTER])

    assert code == 0
    assert editor.buffer.lines == ("abc",)
    assert editor.buffer.status_message == NO_FILE_MESSAGE
    assert editor.mode is EditorMode.NORMAL


def test_unmodified_round_trip_preserves_lines(tmp_path: Path) -> None:
    target = tmp_path / "round.txt"
    target.write_text("alpha\n\nbeta  \ngamma", encoding="utf-8")
    editor = make_editor(target)
    original = editor.buffer.lines

    drive(editor, [":w", ENTER])
    reloaded = make_editor(target)

    assert reloaded.buffer.lines == original
    assert target.read_text(encoding="utf-8") == "alpha\n\nbeta  \ngamma"


def test_round_trip_drops_trailing_newline(tmp_path: Path) -> None:
    target = tmp_path / "trailing.txt"
    target.write_text("one\ntwo\n", encoding="utf-8")
    editor = make_editor(target)

    drive(editor, [":w", ENTER])

    assert target.read_text(encoding="utf-8") == "one\ntwo"
    assert make_editor(target).buffer.lines == ("one", "two")


def test_end_of_input_exits_cleanly() -> None:
    editor = make_editor()
    painter = GridPainter(40, 10)

    assert run(editor, ScriptedKeys([]), painter) == 0
    assert painter.frames == 1
    assert painter.line(9) == " Normal @ [No Name]"


def test_each_key_repaints_the_screen() -> None:
    editor = make_editor()
    painter = GridPainter(40, 10)

    run(editor, ScriptedKeys(["i", "ok"]), painter)

    assert painter.frames == 4
    assert painter.line(0) == "ok"
    assert painter.cursor == (2, 0)


def test_quit_stops_before_remaining_keys() -> None:
    editor = make_editor()
    painter = GridPainter(40, 10)
    keys = ScriptedKeys([":q", ENTER, "i", "never"])

    assert run(editor, keys, painter) == 0
    assert editor.buffer.lines == ("",)


def test_size_provider_resizes_between_frames() -> None:
    editor = make_editor(width=40, height=10)
    sizes = iter([(40, 10), (40, 10), (3, 4), (3, 4), (3, 4)])
    painter = GridPainter(3, 4)

    run(
        editor,
        ScriptedKeys(["i", "abcd", ESC], editor),
        painter,
        size=lambda: next(sizes, (3, 4)),
    )

    assert editor.viewport == Viewport(3, 4)
    assert editor.buffer.cursor.scroll_x >= 2


def test_resize_reconciles_scroll() -> None:
    editor = make_editor(width=40, height=10)
    drive(editor, ["i"] + [ENTER] * 6 + ["abcdefgh"])
    assert editor.buffer.cursor.scroll_y == 0

    editor.resize(5, 4)

    check_invariants(editor)
    assert editor.buffer.cursor.scroll_y == 5
    assert editor.buffer.cursor.scroll_x == 4


def test_random_key_sequences_keep_invariants() -> None:
    rng = random.Random(1234)
    alphabet = ["i", "h", "j", "k", "l", "a", "b", " ", ESC, ENTER, BACKSPACE]
    for _ in range(20):
        editor = make_editor(width=rng.randint(1, 12), height=rng.randint(3, 8))
        keys = [rng.choice(alphabet) for _ in range(rng.randint(10, 80))]

        drive(editor, keys)

        check_invariants(editor)
        assert editor.buffer.command_line is None


def test_failed_write_quit_keeps_session_running(tmp_path: Path) -> None:
    editor = make_editor(width=300, height=6)
    editor.buffer.filename = str(tmp_path)
    painter = GridPainter(300, 6)

    code = run(
        editor,
        ScriptedKeys(["i", "keep", ESC, ":wq", ENTER, "i", "!"], editor),
        painter,
    )

    assert code == 0
    assert editor.buffer.lines == ("keep!",)
    assert editor.buffer.document.dirty is True
    assert editor.mode is EditorMode.INSERT
    assert f"Error: could not write {tmp_path}" in painter.line(5)
