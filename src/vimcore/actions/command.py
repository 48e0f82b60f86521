"""Evaluation of submitted Ex command lines.

Commands do not touch files or the process themselves; they emit bus events
(``command.quit``, ``command.write``) that the editor acts on, and report
problems through ``message.set``.
"""

from __future__ import annotations

from typing import Callable, Dict, List

from vimcore.modes.base_mode import EditorMode, ModeContext, ModeResult
from vimcore.runtime import telemetry

CommandHandler = Callable[[ModeContext, List[str]], ModeResult]

logger = telemetry.get_logger("vimcore.commands")


def run_ex_command(context: ModeContext, raw: str) -> ModeResult:
    context.bus.emit("command.submit", raw)
    telemetry.record_event("command.submit", level="debug", data={"text": raw})
    parts = raw.split()
    if not parts:
        return ModeResult(
            consumed=True, switch_to=EditorMode.NORMAL, status="command_empty"
        )
    command, args = parts[0], parts[1:]
    handler = _COMMAND_HANDLERS.get(command)
    if handler is None:
        return _command_error(context, f"Unknown command: {command}")
    return handler(context, args)


def _command_error(context: ModeContext, message: str) -> ModeResult:
    logger.info("ex command rejected: %s", message)
    context.bus.emit("command.error", message)
    context.bus.emit("message.set", message)
    return ModeResult(
        consumed=True,
        switch_to=EditorMode.NORMAL,
        status="command_error",
        message=message,
    )


def _handle_quit(context: ModeContext, args: List[str]) -> ModeResult:
    del args
    context.bus.emit("command.quit", {})
    return ModeResult(
        consumed=True,
        switch_to=EditorMode.NORMAL,
        status="command_quit",
        message="quit",
    )


def _handle_write(context: ModeContext, args: List[str]) -> ModeResult:
    if not args:
        return _command_error(context, "Expected filename")
    filename = args[0]
    context.bus.emit("command.write", {"filename": filename, "args": list(args)})
    return ModeResult(
        consumed=True,
        switch_to=EditorMode.NORMAL,
        status="command_write",
        message=filename,
    )


_COMMAND_HANDLERS: Dict[str, CommandHandler] = {
    "q": _handle_quit,
    "w": _handle_write,
}


def command_names() -> tuple[str, ...]:
    return tuple(sorted(_COMMAND_HANDLERS))


__all__ = ["run_ex_command", "command_names"]
