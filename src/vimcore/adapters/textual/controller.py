"""Textual-facing controller that turns Editor state into render frames."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional, Tuple

from vimcore.buffer import content_length
from vimcore.editor import Editor
from vimcore.modes import EditorMode, KeyInput, ModeResult
from vimcore.view import Position


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(frozen=True, slots=True)
class RenderFrame:
    """Everything a host needs to paint one screen.

    ``lines`` holds exactly ``rows`` strings already clipped to the screen
    width. ``cursor`` is relative to the text area; when the command line
    is active ``status_cursor`` gives the column on the status row instead.
    """

    lines: Tuple[str, ...]
    cursor: Position
    status: str
    mode_label: str
    status_cursor: Optional[int] = None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_view: Callable[[RenderFrame], None]
    handle_event: Callable[[str, object | None], None] = _noop
    request_exit: Callable[[], None] = _noop
    log: Callable[[str], None] = _noop


class TextualEditorAdapter:
    """Bridges an ``Editor`` and its bus events to a Textual surface."""

    def __init__(
        self, editor: Editor, hooks: TextualUIHooks, *, show_tildes: bool = True
    ) -> None:
        self.editor = editor
        self.hooks = hooks
        self.show_tildes = show_tildes
        self._subscribe_events()
        self.refresh()

    def handle_textual_key(
        self,
        key: str,
        *,
        text: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> ModeResult:
        """Translate a Textual key event into a KeyInput and dispatch it."""

        key_input = KeyInput(key=key, text=text, modifiers=tuple(modifiers))
        self._log_state("key ->", key=key, mods=key_input.modifiers)
        result = self.editor.handle_key(key_input)
        self._log_state(
            "result <-",
            consumed=result.consumed,
            status=result.status,
            switch_to=result.switch_to,
        )
        self._after_event()
        return result

    def handle_resize(self, cols: int, rows: int) -> None:
        self.editor.handle_resize(cols, rows)
        self._log_state("resize ->", cols=cols, rows=rows)
        self.refresh()

    def refresh(self) -> RenderFrame:
        frame = self.build_frame()
        self.hooks.update_view(frame)
        return frame

    def build_frame(self) -> RenderFrame:
        viewport = self.editor.viewport
        cols, rows = viewport.size
        scroll_x, _ = viewport.scroll_offset

        lines = []
        for raw in viewport.visible_lines():
            text = raw[: content_length(raw)]
            lines.append(text[scroll_x : scroll_x + cols])
        filler = "~" if self.show_tildes else ""
        while len(lines) < rows:
            lines.append(filler)

        status, status_cursor = self._status_line()
        return RenderFrame(
            lines=tuple(lines),
            cursor=viewport.rel_cursor_pos(),
            status=status,
            mode_label=self.editor.mode_label,
            status_cursor=status_cursor,
        )

    def _status_line(self) -> Tuple[str, Optional[int]]:
        editor = self.editor
        if editor.mode is EditorMode.EX:
            return f":{editor.ex_text}", editor.ex_cursor + 1
        if editor.message:
            return editor.message, None
        if editor.mode is EditorMode.INSERT:
            return "-- INSERT --", None
        return "", None

    def _after_event(self) -> None:
        if not self.editor.running:
            self.hooks.request_exit()
            return
        self.refresh()

    def _subscribe_events(self) -> None:
        bus = self.editor.bus
        for event in (
            "mode.switch",
            "command.submit",
            "command.error",
            "command.write",
            "command.quit",
        ):
            bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name, payload=payload)
        self.hooks.handle_event(name, payload)

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        editor = self.editor
        return {
            "mode": editor.mode_label,
            "cursor": editor.viewport.cursor,
            "scroll": editor.viewport.scroll_offset,
            "command": editor.ex_text,
            "buffer": editor.buffer.name,
            "buffer_version": editor.buffer.version,
        }


__all__ = ["RenderFrame", "TextualEditorAdapter", "TextualUIHooks"]
