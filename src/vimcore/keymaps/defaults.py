"""Built-in keymaps that seed each mode with sensible defaults."""

from __future__ import annotations

from typing import Iterable, Sequence

from vimcore.actions import core as core_actions
from vimcore.actions import motion as motion_actions

from .models import ActionRef, Binding, KeyStroke
from .registry import KeymapRegistry

DEFAULT_ACTIONS: tuple[ActionRef, ...] = (
    ActionRef(
        id="core.enter_insert",
        handler=core_actions.enter_insert_mode,
        description="Enter insert mode",
    ),
    ActionRef(
        id="core.enter_ex",
        handler=core_actions.enter_ex_mode,
        description="Enter command-line mode",
    ),
    ActionRef(
        id="core.exit_to_normal",
        handler=core_actions.exit_to_normal_mode,
        description="Return to normal mode",
    ),
    ActionRef(
        id="motion.left",
        handler=motion_actions.move_left,
        description="Move the cursor one column left",
    ),
    ActionRef(
        id="motion.right",
        handler=motion_actions.move_right,
        description="Move the cursor one column right",
    ),
    ActionRef(
        id="motion.up",
        handler=motion_actions.move_up,
        description="Move the cursor one line up",
    ),
    ActionRef(
        id="motion.down",
        handler=motion_actions.move_down,
        description="Move the cursor one line down",
    ),
    ActionRef(
        id="motion.half_page_down",
        handler=motion_actions.move_half_page_down,
        description="Move the cursor down half a screen",
    ),
    ActionRef(
        id="motion.half_page_up",
        handler=motion_actions.move_half_page_up,
        description="Move the cursor up half a screen",
    ),
)


def _bind(mode: str, key: str, action_id: str, description: str) -> Binding:
    stroke = KeyStroke.parse(key)
    return Binding(
        id=f"{mode}.{action_id.split('.', 1)[1]}.{stroke.token}",
        mode=mode,
        stroke=stroke,
        action_id=action_id,
        description=description,
        source="defaults",
    )


DEFAULT_BINDINGS: tuple[Binding, ...] = (
    _bind("normal", "h", "motion.left", "Move left"),
    _bind("normal", "j", "motion.down", "Move down"),
    _bind("normal", "k", "motion.up", "Move up"),
    _bind("normal", "l", "motion.right", "Move right"),
    _bind("normal", "LEFT", "motion.left", "Move left"),
    _bind("normal", "DOWN", "motion.down", "Move down"),
    _bind("normal", "UP", "motion.up", "Move up"),
    _bind("normal", "RIGHT", "motion.right", "Move right"),
    _bind("normal", "ctrl+d", "motion.half_page_down", "Half page down"),
    _bind("normal", "ctrl+u", "motion.half_page_up", "Half page up"),
    _bind("normal", "i", "core.enter_insert", "Enter insert mode"),
    _bind("normal", ":", "core.enter_ex", "Enter command-line mode"),
    _bind("insert", "ESC", "core.exit_to_normal", "Leave insert mode"),
    _bind("insert", "LEFT", "motion.left", "Move left"),
    _bind("insert", "DOWN", "motion.down", "Move down"),
    _bind("insert", "UP", "motion.up", "Move up"),
    _bind("insert", "RIGHT", "motion.right", "Move right"),
)


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    replace: bool = False,
    extra_bindings: Iterable[Binding] | None = None,
    include_bindings: Sequence[str] | None = None,
    exclude_bindings: Sequence[str] | None = None,
) -> None:
    """Register built-in actions and bindings for every mode."""

    allowed = _build_filters(include_bindings, exclude_bindings)

    for action in DEFAULT_ACTIONS:
        registry.register_action(action, replace=replace)

    for binding in DEFAULT_BINDINGS:
        if not _selected(binding.id, allowed):
            continue
        registry.register_binding(binding, replace=replace)

    if extra_bindings:
        for binding in extra_bindings:
            registry.register_binding(binding, replace=replace)


def _build_filters(
    include: Sequence[str] | None, exclude: Sequence[str] | None
) -> tuple[set[str] | None, set[str]]:
    include_set = set(include) if include else None
    exclude_set = set(exclude or ())
    return include_set, exclude_set


def _selected(item_id: str, filters: tuple[set[str] | None, set[str]]) -> bool:
    include, exclude = filters
    if include is not None and item_id not in include:
        return False
    if item_id in exclude:
        return False
    return True


__all__ = ["load_default_keymaps", "DEFAULT_ACTIONS", "DEFAULT_BINDINGS"]
