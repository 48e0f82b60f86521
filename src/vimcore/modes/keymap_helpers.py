"""Helper utilities for keymap-driven modes."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from vimcore.keymaps.dispatcher import Dispatcher

    from .base_mode import ModeContext


def require_dispatcher(context: "ModeContext") -> "Dispatcher":
    dispatcher = context.dispatcher
    if dispatcher is None:
        raise RuntimeError("ModeContext is missing a dispatcher")
    return dispatcher


__all__ = ["require_dispatcher"]
