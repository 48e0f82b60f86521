from __future__ import annotations

from typing import List

from vimcore.adapters.textual import RenderFrame, TextualEditorAdapter, TextualUIHooks
from vimcore.buffer import Buffer
from vimcore.editor import Editor
from vimcore.runtime import EditorSettings


def make_adapter(
    text: str = "", *, cols: int = 10, rows: int = 3, show_tildes: bool = True
) -> tuple[TextualEditorAdapter, List[RenderFrame], List[str]]:
    editor = Editor(EditorSettings(), cols=cols, rows=rows)
    editor.viewport.set_buffer(Buffer.from_text(text))
    frames: List[RenderFrame] = []
    exits: List[str] = []
    hooks = TextualUIHooks(
        update_view=frames.append,
        request_exit=lambda: exits.append("exit"),
    )
    adapter = TextualEditorAdapter(editor, hooks, show_tildes=show_tildes)
    return adapter, frames, exits


def test_initial_frame_pads_with_tildes() -> None:
    _, frames, _ = make_adapter("ab\r\ncd")

    frame = frames[-1]
    assert frame.lines == ("ab", "cd", "~")
    assert frame.cursor == (0, 0)
    assert frame.status == ""
    assert frame.mode_label == "NORMAL"


def test_tildes_can_be_disabled() -> None:
    _, frames, _ = make_adapter("ab", show_tildes=False)

    assert frames[-1].lines == ("ab", "", "")


def test_insert_mode_status_and_cursor() -> None:
    adapter, frames, _ = make_adapter()

    adapter.handle_textual_key("i", text="i")
    adapter.handle_textual_key("x", text="x")

    frame = frames[-1]
    assert frame.lines[0] == "x"
    assert frame.cursor == (1, 0)
    assert frame.status == "-- INSERT --"


def test_command_line_frame() -> None:
    adapter, frames, _ = make_adapter()

    adapter.handle_textual_key(":", text=":")
    adapter.handle_textual_key("w", text="w")

    frame = frames[-1]
    assert frame.status == ":w"
    assert frame.status_cursor == 2
    assert frame.mode_label == "EX"


def test_message_shown_after_command_error() -> None:
    adapter, frames, _ = make_adapter()

    for key in (":", "w", "ENTER"):
        adapter.handle_textual_key(key)

    assert frames[-1].status == "Expected filename"
    assert frames[-1].status_cursor is None


def test_lines_are_clipped_to_scrolled_window() -> None:
    adapter, frames, _ = make_adapter("abcdefghijklmnop", cols=5)

    for _ in range(7):
        adapter.handle_textual_key("l", text="l")

    frame = frames[-1]
    assert frame.lines[0] == "defgh"
    assert frame.cursor == (4, 0)


def test_modifiers_are_forwarded() -> None:
    text = "".join(f"{index}\n" for index in range(10))
    adapter, frames, _ = make_adapter(text, rows=4)

    adapter.handle_textual_key("d", modifiers=("ctrl",))

    assert adapter.editor.viewport.cursor == (0, 2)
    assert frames[-1].lines[0] == "0"


def test_resize_refreshes_frame() -> None:
    adapter, frames, _ = make_adapter("ab", rows=3)

    adapter.handle_resize(4, 5)

    assert len(frames[-1].lines) == 5


def test_quit_requests_exit() -> None:
    adapter, _, exits = make_adapter()

    for key in (":", "q", "ENTER"):
        adapter.handle_textual_key(key)

    assert exits == ["exit"]
    assert adapter.editor.running is False


def test_adapter_relays_events_and_logs() -> None:
    editor = Editor(EditorSettings(), cols=10, rows=3)
    events: List[tuple[str, object | None]] = []
    logs: List[str] = []
    hooks = TextualUIHooks(
        update_view=lambda frame: None,
        handle_event=lambda name, payload: events.append((name, payload)),
        log=logs.append,
    )
    adapter = TextualEditorAdapter(editor, hooks)

    for key in (":", "z", "ENTER"):
        adapter.handle_textual_key(key)

    names = [name for name, _ in events]
    assert names[0] == "mode.switch"
    assert "command.submit" in names
    assert ("command.error", "Unknown command: z") in events
    assert any(line.startswith("key ->") for line in logs)
