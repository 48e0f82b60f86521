"""Editor session wiring the viewport, modes, dispatcher and command line."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Iterable, Optional, Union

from vimcore.buffer import Buffer
from vimcore.ex import ExLineEditor
from vimcore.keymaps import Dispatcher
from vimcore.modes import (
    EditorMode,
    ExMode,
    InsertMode,
    KeyInput,
    ModeBus,
    ModeContext,
    ModeResult,
    NormalMode,
    OperatorMode,
)
from vimcore.modes.mode_manager import ModeManager
from vimcore.runtime import EditorSettings, telemetry
from vimcore.view import Position, Viewport, VisibleLines

PathLike = Union[str, "os.PathLike[str]"]


@dataclass(frozen=True, slots=True)
class ResizeEvent:
    cols: int
    rows: int


InputEvent = Union[KeyInput, ResizeEvent]


def _reason(exc: BaseException) -> str:
    strerror = getattr(exc, "strerror", None)
    return strerror or str(exc) or exc.__class__.__name__


class Editor:
    """Owns one viewport and routes input events through the active mode.

    File and command problems never escape: they become ``message``. The
    session only stops through the ``:q`` command.
    """

    def __init__(
        self,
        settings: Optional[EditorSettings] = None,
        *,
        cols: Optional[int] = None,
        rows: Optional[int] = None,
    ) -> None:
        self.settings = settings or EditorSettings.from_env()
        self.logger = telemetry.get_logger("vimcore.editor")
        self.viewport = Viewport(
            cols if cols is not None else self.settings.cols,
            rows if rows is not None else self.settings.rows,
        )
        self.ex_line = ExLineEditor()
        self.bus = ModeBus()
        self.context = ModeContext(
            viewport=self.viewport, ex_line=self.ex_line, bus=self.bus
        )
        self.modes = ModeManager(self.context)
        self.modes.register_mode(NormalMode)
        self.modes.register_mode(InsertMode)
        self.modes.register_mode(ExMode)
        self.modes.register_mode(OperatorMode)

        self.message: Optional[str] = None
        self.filename: Optional[str] = None
        self.running = True

        self.bus.subscribe("command.quit", self._on_quit)
        self.bus.subscribe("command.write", self._on_write)
        self.bus.subscribe("message.set", self._on_message)
        self.bus.subscribe("message.clear", lambda _payload: self.clear_message())

    # -- state ------------------------------------------------------------

    @property
    def dispatcher(self) -> Dispatcher:
        return self.modes.dispatcher

    @property
    def mode(self) -> EditorMode:
        active = self.modes.mode
        assert active is not None
        return active

    @property
    def mode_label(self) -> str:
        return self.mode.label

    @property
    def buffer(self) -> Buffer:
        return self.viewport.buffer

    @property
    def ex_text(self) -> str:
        return self.ex_line.text

    @property
    def ex_cursor(self) -> int:
        return self.ex_line.cursor_index

    def set_message(self, message: str) -> None:
        self.message = message

    def clear_message(self) -> None:
        self.message = None

    # -- events -----------------------------------------------------------

    def handle_key(self, key: KeyInput) -> ModeResult:
        return self.modes.handle_key(key)

    def handle_resize(self, cols: int, rows: int) -> None:
        self.viewport.resize(cols, rows)
        telemetry.record_event(
            "editor.resize", level="debug", data={"cols": cols, "rows": rows}
        )

    def feed(self, events: Iterable[InputEvent]) -> None:
        """Process events in order until the iterable ends or the session quits."""

        for event in events:
            if not self.running:
                break
            if isinstance(event, ResizeEvent):
                self.handle_resize(event.cols, event.rows)
            else:
                self.handle_key(event)

    # -- render query -----------------------------------------------------

    def visible_lines(self) -> VisibleLines:
        return self.viewport.visible_lines()

    def rel_cursor_pos(self) -> Position:
        return self.viewport.rel_cursor_pos()

    # -- files ------------------------------------------------------------

    def open_file(self, path: PathLike) -> bool:
        name = os.fspath(path)
        try:
            with open(name, "r", encoding=self.settings.encoding, newline="") as stream:
                buffer = Buffer.from_reader(stream, name=name)
        except FileNotFoundError:
            buffer = Buffer(name=name)
            self.set_message(f'"{name}" [New File]')
        except (OSError, UnicodeError) as exc:
            self.set_message(f"Could not open {name}: {_reason(exc)}")
            telemetry.record_event(
                "file.open", level="warning", data={"path": name, "error": _reason(exc)}
            )
            return False

        self.viewport.set_buffer(buffer)
        self.filename = name
        telemetry.record_event(
            "file.open", data={"path": name, "lines": buffer.len_lines()}
        )
        return True

    def write_file(self, path: PathLike) -> bool:
        name = os.fspath(path)
        buffer = self.viewport.buffer
        try:
            with open(name, "w", encoding=self.settings.encoding, newline="") as stream:
                chars = buffer.write_to(stream)
        except (OSError, UnicodeError) as exc:
            self.set_message(f"Could not write {name}: {_reason(exc)}")
            telemetry.record_event(
                "file.write", level="warning", data={"path": name, "error": _reason(exc)}
            )
            return False

        buffer.mark_clean()
        lines = buffer.len_lines()
        if not buffer.line(lines - 1):
            lines -= 1
        self.set_message(f'"{name}" {lines}L, {chars}C written')
        telemetry.record_event("file.write", data={"path": name, "chars": chars})
        return True

    # -- bus handlers -----------------------------------------------------

    def _on_quit(self, payload: object | None) -> None:
        del payload
        self.running = False
        telemetry.record_event("editor.quit")

    def _on_write(self, payload: object | None) -> None:
        if isinstance(payload, dict) and payload.get("filename"):
            self.write_file(str(payload["filename"]))

    def _on_message(self, payload: object | None) -> None:
        if payload is not None:
            self.set_message(str(payload))


__all__ = ["Editor", "InputEvent", "ResizeEvent"]
