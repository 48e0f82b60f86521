"""Core action implementations shared across modes."""

from __future__ import annotations

from vimcore.modes.base_mode import EditorMode, ModeContext, ModeResult


def enter_insert_mode(context: ModeContext, match) -> ModeResult:
    del context, match
    return ModeResult(consumed=True, switch_to=EditorMode.INSERT, message="enter_insert")


def enter_ex_mode(context: ModeContext, match) -> ModeResult:
    del context, match
    return ModeResult(consumed=True, switch_to=EditorMode.EX, message="enter_ex")


def exit_to_normal_mode(context: ModeContext, match) -> ModeResult:
    del context, match
    return ModeResult(consumed=True, switch_to=EditorMode.NORMAL, message="exit_to_normal")


__all__ = [
    "enter_insert_mode",
    "enter_ex_mode",
    "exit_to_normal_mode",
]
