"""Normal mode: bound motions and mode switches, everything else ignored."""

from __future__ import annotations

from vimcore.runtime import telemetry

from .base_mode import EditorMode, KeyInput, Mode, ModeContext, ModeResult


class NormalMode(Mode):
    name = EditorMode.NORMAL

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self.logger = telemetry.get_logger("vimcore.modes.normal")

    def handle_unbound(self, key: KeyInput) -> ModeResult:
        self.logger.debug("unbound key %r %r in normal mode", key.key, key.modifiers)
        return ModeResult(consumed=False, status="unbound")
