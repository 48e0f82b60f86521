from __future__ import annotations

from pathlib import Path
from typing import Iterable, List

import pytest

from vimcore.editor import Editor, ResizeEvent
from vimcore.modes import EditorMode, KeyInput
from vimcore.runtime import EditorSettings


def make_editor(**settings: object) -> Editor:
    return Editor(EditorSettings(**settings), cols=20, rows=5)


def keys(text: str) -> List[KeyInput]:
    return [KeyInput(key=char) for char in text]


def run_command(editor: Editor, command: str) -> None:
    editor.feed([KeyInput(key=":"), *keys(command), KeyInput(key="ENTER")])


def test_new_editor_state() -> None:
    editor = make_editor()

    assert editor.running is True
    assert editor.mode is EditorMode.NORMAL
    assert editor.mode_label == "NORMAL"
    assert editor.message is None
    assert editor.viewport.size == (20, 5)
    assert list(editor.visible_lines()) == [""]
    assert editor.rel_cursor_pos() == (0, 0)


def test_size_defaults_come_from_settings() -> None:
    editor = Editor(EditorSettings(cols=40, rows=10))

    assert editor.viewport.size == (40, 10)


def test_typing_in_insert_mode() -> None:
    editor = make_editor()

    editor.feed([KeyInput(key="i"), *keys("hi"), KeyInput(key="ENTER"), *keys("yo")])

    assert editor.mode_label == "INSERT"
    assert editor.buffer.text() == "hi\nyo"
    assert editor.rel_cursor_pos() == (2, 1)


def test_write_command_writes_file(tmp_path: Path) -> None:
    target = tmp_path / "foo.txt"
    editor = make_editor()
    editor.feed([KeyInput(key="i"), *keys("abc"), KeyInput(key="ENTER"), KeyInput(key="ESC")])

    run_command(editor, f"w {target}")

    assert target.read_text() == "abc\n"
    assert editor.message == f'"{target}" 1L, 4C written'
    assert editor.mode is EditorMode.NORMAL
    assert editor.buffer.dirty is False


def test_write_without_filename_reports_error(tmp_path: Path) -> None:
    editor = make_editor()

    run_command(editor, "w")

    assert editor.message == "Expected filename"
    assert editor.running is True
    assert list(tmp_path.iterdir()) == []


def test_write_failure_is_reported(tmp_path: Path) -> None:
    editor = make_editor()
    target = tmp_path / "missing" / "out.txt"

    run_command(editor, f"w {target}")

    assert editor.message is not None
    assert editor.message.startswith(f"Could not write {target}: ")
    assert editor.running is True


def test_unknown_command_reports_error() -> None:
    editor = make_editor()

    run_command(editor, "frob now")

    assert editor.message == "Unknown command: frob"
    assert editor.mode is EditorMode.NORMAL


def test_entering_ex_mode_clears_message() -> None:
    editor = make_editor()
    run_command(editor, "w")
    assert editor.message == "Expected filename"

    editor.handle_key(KeyInput(key="h"))
    assert editor.message == "Expected filename"

    editor.handle_key(KeyInput(key=":"))
    assert editor.message is None
    assert editor.mode is EditorMode.EX


def test_ex_text_and_cursor_are_exposed() -> None:
    editor = make_editor()

    editor.feed([KeyInput(key=":"), *keys("wq"), KeyInput(key="LEFT")])

    assert editor.ex_text == "wq"
    assert editor.ex_cursor == 1


def test_quit_command_stops_session() -> None:
    editor = make_editor()

    editor.feed([KeyInput(key=":"), *keys("q"), KeyInput(key="ENTER"), *keys("i")])

    assert editor.running is False
    assert editor.mode is EditorMode.NORMAL


def test_open_file_loads_buffer(tmp_path: Path) -> None:
    source = tmp_path / "notes.txt"
    source.write_bytes(b"one\r\ntwo\n")
    editor = make_editor()
    editor.feed(keys("i"))
    editor.viewport.insert_char("x")

    assert editor.open_file(source) is True

    assert editor.buffer.text() == "one\r\ntwo\n"
    assert editor.viewport.cursor == (0, 0)
    assert editor.filename == str(source)
    assert editor.message is None


def test_open_missing_file_starts_empty(tmp_path: Path) -> None:
    target = tmp_path / "new.txt"
    editor = make_editor()

    assert editor.open_file(target) is True

    assert editor.buffer.text() == ""
    assert editor.message == f'"{target}" [New File]'
    assert editor.buffer.name == str(target)


def test_open_undecodable_file_keeps_buffer(tmp_path: Path) -> None:
    source = tmp_path / "binary.dat"
    source.write_bytes(b"\xff\xfe\x00bad")
    editor = make_editor(encoding="utf-8")
    editor.feed([KeyInput(key="i"), *keys("keep")])

    assert editor.open_file(source) is False

    assert editor.buffer.text() == "keep"
    assert editor.message is not None
    assert editor.message.startswith(f"Could not open {source}: ")


def test_round_trip_preserves_line_endings(tmp_path: Path) -> None:
    source = tmp_path / "mixed.txt"
    source.write_bytes(b"a\r\nb\nc")
    target = tmp_path / "copy.txt"
    editor = make_editor()
    editor.open_file(source)

    assert editor.write_file(target) is True

    assert target.read_bytes() == b"a\r\nb\nc"
    assert editor.message == f'"{target}" 3L, 6C written'


def test_feed_applies_resize_events() -> None:
    editor = make_editor()
    editor.feed([KeyInput(key="i"), *keys("abcdefghij")])

    editor.feed([ResizeEvent(cols=4, rows=2)])

    assert editor.viewport.size == (4, 2)
    assert editor.rel_cursor_pos() == (3, 0)


def test_feed_stops_after_quit() -> None:
    editor = make_editor()
    events: Iterable[KeyInput] = [
        KeyInput(key=":"),
        KeyInput(key="q"),
        KeyInput(key="ENTER"),
        KeyInput(key="i"),
        KeyInput(key="x"),
    ]

    editor.feed(events)

    assert editor.buffer.text() == ""


@pytest.mark.parametrize("label,keys_", [("INSERT", "i"), ("EX", ":")])
def test_mode_label_tracks_mode(label: str, keys_: str) -> None:
    editor = make_editor()

    editor.feed(keys(keys_))

    assert editor.mode_label == label
