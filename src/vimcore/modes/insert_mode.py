"""Insert mode with default text editing for unbound keys."""

from __future__ import annotations

from vimcore.runtime import telemetry

from .base_mode import EditorMode, KeyInput, Mode, ModeContext, ModeResult


class InsertMode(Mode):
    name = EditorMode.INSERT

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self.logger = telemetry.get_logger("vimcore.modes.insert")

    def handle_unbound(self, key: KeyInput) -> ModeResult:
        if key.modifiers:
            return ModeResult(consumed=False, status="unbound")

        viewport = self.context.viewport
        if key.is_character:
            viewport.insert_char(key.key)
            return ModeResult(consumed=True, status="insert_char")
        if key.key == "ENTER":
            viewport.insert_enter()
            return ModeResult(consumed=True, status="insert_enter")
        if key.key == "BACKSPACE":
            viewport.backspace()
            return ModeResult(consumed=True, status="backspace")
        if key.key == "DELETE":
            viewport.delete()
            return ModeResult(consumed=True, status="delete")

        self.logger.debug("unbound key %r in insert mode", key.key)
        return ModeResult(consumed=False, status="unbound")
