"""Cursor motion actions bound in normal and insert mode."""

from __future__ import annotations

from vimcore.modes.base_mode import ModeContext, ModeResult


def half_page(context: ModeContext) -> int:
    """Half the screen height, rounded up."""

    rows = context.viewport.size[1]
    return (rows + 1) // 2


def move_left(context: ModeContext, match) -> ModeResult:
    del match
    context.viewport.move_cursor_left(1)
    return ModeResult(consumed=True, status="motion")


def move_right(context: ModeContext, match) -> ModeResult:
    del match
    context.viewport.move_cursor_right(1)
    return ModeResult(consumed=True, status="motion")


def move_up(context: ModeContext, match) -> ModeResult:
    del match
    context.viewport.move_cursor_up(1)
    return ModeResult(consumed=True, status="motion")


def move_down(context: ModeContext, match) -> ModeResult:
    del match
    context.viewport.move_cursor_down(1)
    return ModeResult(consumed=True, status="motion")


def move_half_page_down(context: ModeContext, match) -> ModeResult:
    del match
    context.viewport.move_cursor_down(half_page(context))
    return ModeResult(consumed=True, status="motion")


def move_half_page_up(context: ModeContext, match) -> ModeResult:
    del match
    context.viewport.move_cursor_up(half_page(context))
    return ModeResult(consumed=True, status="motion")


__all__ = [
    "half_page",
    "move_left",
    "move_right",
    "move_up",
    "move_down",
    "move_half_page_down",
    "move_half_page_up",
]
