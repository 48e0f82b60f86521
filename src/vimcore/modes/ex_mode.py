"""Ex mode: every unbound key goes to the command-line editor."""

from __future__ import annotations

from vimcore.actions.command import run_ex_command
from vimcore.ex import ExStatus
from vimcore.runtime import telemetry

from .base_mode import EditorMode, KeyInput, Mode, ModeContext, ModeResult


class ExMode(Mode):
    name = EditorMode.EX

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self.logger = telemetry.get_logger("vimcore.modes.ex")

    def on_enter(self, previous: EditorMode | None) -> None:
        del previous
        self.context.ex_line.clear()
        self.context.bus.emit("message.clear", None)
        self.context.bus.emit("ex.start", None)

    def on_exit(self, next_mode: EditorMode | None) -> None:
        del next_mode
        self.context.ex_line.clear()
        self.context.bus.emit("ex.end", None)

    @property
    def current_command(self) -> str:
        return self.context.ex_line.text

    def handle_unbound(self, key: KeyInput) -> ModeResult:
        outcome = self.context.ex_line.handle_key(key)

        if outcome.status is ExStatus.FINISHED:
            return run_ex_command(self.context, outcome.text or "")

        if outcome.status is ExStatus.ABORTED:
            self.logger.debug("command line aborted")
            return ModeResult(
                consumed=True, switch_to=EditorMode.NORMAL, status="ex_abort"
            )

        return ModeResult(consumed=True, status="editing")
