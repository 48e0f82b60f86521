"""Executable Textual app that hosts a vimcore editor session."""

from __future__ import annotations

import argparse
import dataclasses
from typing import Any, Optional, Sequence, Tuple

try:  # pragma: no cover - imported only when the app is run
    from rich.text import Text
    from textual import events
    from textual.app import App, ComposeResult
    from textual.widgets import Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use vimcore.adapters.textual.app"
    ) from exc

from vimcore.editor import Editor
from vimcore.runtime import EditorSettings, telemetry

from .controller import RenderFrame, TextualEditorAdapter, TextualUIHooks

CURSOR_STYLE = "reverse"
STATUS_ROWS = 1

_NAMED_KEYS = {
    "escape": "ESC",
    "enter": "ENTER",
    "return": "ENTER",
    "backspace": "BACKSPACE",
    "delete": "DELETE",
    "left": "LEFT",
    "right": "RIGHT",
    "up": "UP",
    "down": "DOWN",
    "tab": "TAB",
    "home": "HOME",
    "end": "END",
}


def render_text_area(frame: RenderFrame) -> Text:
    """Paint the text rows with the cursor cell in reverse video."""

    text = Text(no_wrap=True, overflow="crop")
    col, row = frame.cursor
    show_cursor = frame.status_cursor is None
    for index, line in enumerate(frame.lines):
        if index:
            text.append("\n")
        if not show_cursor or index != row:
            text.append(line)
            continue
        text.append(line[:col])
        text.append(line[col : col + 1] or " ", style=CURSOR_STYLE)
        text.append(line[col + 1 :])
    return text


def render_status_line(frame: RenderFrame) -> Text:
    text = Text(frame.status, no_wrap=True, overflow="crop")
    if frame.status_cursor is not None:
        col = frame.status_cursor
        if col >= len(frame.status):
            text.append(" ")
        text.stylize(CURSOR_STYLE, col, col + 1)
    return text


class VimcoreApp(App[None]):
    """Full-screen editor: text area on top, one status/command row below."""

    CSS = """
    Screen {
        layout: vertical;
    }

    #text-area {
        height: 1fr;
    }

    #status-line {
        height: 1;
    }
    """

    BINDINGS = [
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, editor: Editor, *, show_tildes: bool = True) -> None:
        super().__init__()
        self.editor = editor
        self.show_tildes = show_tildes
        self.adapter: TextualEditorAdapter | None = None
        self._text_widget: Static | None = None
        self._status_widget: Static | None = None
        self._logger = telemetry.get_logger("vimcore.app")

    def compose(self) -> ComposeResult:
        self._text_widget = Static("", id="text-area")
        self._status_widget = Static("", id="status-line")
        yield self._text_widget
        yield self._status_widget

    def on_mount(self) -> None:
        cols, rows = self._text_area_size(self.size.width, self.size.height)
        self.editor.handle_resize(cols, rows)
        hooks = TextualUIHooks(
            update_view=self._update_view,
            handle_event=self._handle_event,
            request_exit=self.exit,
            log=self._log_line,
        )
        self.adapter = TextualEditorAdapter(
            self.editor, hooks, show_tildes=self.show_tildes
        )

    def on_resize(self, event: events.Resize) -> None:
        if not self.adapter:
            return
        cols, rows = self._text_area_size(event.size.width, event.size.height)
        self.adapter.handle_resize(cols, rows)

    def on_key(self, event: events.Key) -> None:
        if not self.adapter:
            return
        normalized = self._normalize_key(event)
        if normalized is None:
            return
        key, text, modifiers = normalized
        self.adapter.handle_textual_key(key, text=text, modifiers=modifiers)
        event.stop()

    def _update_view(self, frame: RenderFrame) -> None:
        if self._text_widget:
            self._text_widget.update(render_text_area(frame))
        if self._status_widget:
            self._status_widget.update(render_status_line(frame))

    def _handle_event(self, name: str, payload: Any | None) -> None:
        self._logger.debug("event %s payload=%r", name, payload)

    def _log_line(self, line: str) -> None:
        self._logger.debug(line)

    @staticmethod
    def _text_area_size(width: int, height: int) -> Tuple[int, int]:
        return max(1, width), max(1, height - STATUS_ROWS)

    @staticmethod
    def _normalize_key(
        event: events.Key,
    ) -> Optional[Tuple[str, Optional[str], Tuple[str, ...]]]:
        if event.key == "ctrl+q":
            return None
        if event.is_printable and event.character:
            return (event.character, event.character, ())
        *modifiers, name = event.key.split("+")
        return (_NAMED_KEYS.get(name, name), None, tuple(modifiers))


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Edit a text file in the terminal.")
    parser.add_argument("path", nargs="?", help="File to open (created on :w)")
    parser.add_argument(
        "--encoding",
        default=None,
        help="Text encoding for reading and writing (default: utf-8)",
    )
    parser.add_argument(
        "--log-preset",
        choices=("development", "production", "quiet"),
        default=None,
        help="Logging preset; overrides VIMCORE_LOG_* variables",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    if args.log_preset:
        telemetry.configure(preset=args.log_preset)
    settings = EditorSettings.from_env()
    if args.encoding:
        settings = dataclasses.replace(settings, encoding=args.encoding)
    editor = Editor(settings)
    if args.path:
        editor.open_file(args.path)
    app = VimcoreApp(editor, show_tildes=settings.show_tildes)
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual run
    main()
