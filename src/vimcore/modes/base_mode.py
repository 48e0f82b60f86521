"""Base classes and shared utilities for editor modes."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Callable, Dict, Iterable, Optional, Tuple

from vimcore.runtime import telemetry

from .keymap_helpers import require_dispatcher

if TYPE_CHECKING:
    from vimcore.ex import ExLineEditor
    from vimcore.keymaps.dispatcher import DispatchMatch, Dispatcher
    from vimcore.view import Viewport


class EditorMode(str, Enum):
    """The closed set of modes; exactly one is active at a time."""

    NORMAL = "normal"
    INSERT = "insert"
    OPERATOR = "operator"
    EX = "ex"

    @property
    def label(self) -> str:
        return _MODE_LABELS[self]

    def __str__(self) -> str:
        return self.label


_MODE_LABELS = {
    EditorMode.NORMAL: "NORMAL",
    EditorMode.INSERT: "INSERT",
    EditorMode.OPERATOR: "OPERATOR",
    EditorMode.EX: "EX",
}


def normalize_modifiers(modifiers: Iterable[str]) -> Tuple[str, ...]:
    values = tuple(m.strip().lower() for m in modifiers if m.strip())
    return tuple(sorted(dict.fromkeys(values)))


@dataclass(slots=True)
class KeyInput:
    """Normalized key event passed to modes.

    Printable keys carry the character itself as ``key``; named keys use
    upper-case names such as ``ESC``, ``ENTER`` or ``BACKSPACE``.
    """

    key: str
    modifiers: Tuple[str, ...] = ()
    text: Optional[str] = None

    def __post_init__(self) -> None:
        self.modifiers = normalize_modifiers(self.modifiers)

    @property
    def is_character(self) -> bool:
        return len(self.key) == 1 and self.key.isprintable()


@dataclass(slots=True)
class ModeResult:
    """Result returned from ``Mode.handle_key``."""

    consumed: bool
    switch_to: Optional[EditorMode] = None
    status: str = "ok"
    message: Optional[str] = None


@dataclass(slots=True)
class ModeContext:
    """Shared services every mode can access."""

    viewport: "Viewport"
    ex_line: "ExLineEditor"
    bus: "ModeBus"
    dispatcher: Optional["Dispatcher"] = None
    extras: Dict[str, object] = field(default_factory=dict)


class ModeBus:
    """Minimal event bus letting modes exchange structured signals."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


class Mode:
    """Base class all concrete editor modes inherit from.

    ``handle_key`` consults the dispatcher first; keys with no binding in
    this mode go to ``handle_unbound``.
    """

    name: EditorMode = EditorMode.NORMAL

    def __init__(self, context: ModeContext) -> None:
        self.context = context

    def on_enter(
        self, previous: Optional[EditorMode]
    ) -> None:  # pragma: no cover - default no-op
        del previous

    def on_exit(
        self, next_mode: Optional[EditorMode]
    ) -> None:  # pragma: no cover - default no-op
        del next_mode

    def handle_key(self, key: KeyInput) -> ModeResult:
        match = require_dispatcher(self.context).lookup(self.name, key)
        if match is not None:
            return self._execute_match(match)
        return self.handle_unbound(key)

    def _execute_match(self, match: "DispatchMatch") -> ModeResult:
        with telemetry.span(
            "keymaps::execute",
            component="keymaps",
            metadata={"binding_id": match.binding.id, "action": match.action.id},
        ):
            outcome = match.action(self.context, match)

        if isinstance(outcome, ModeResult):
            return outcome
        return ModeResult(consumed=True)

    def handle_unbound(self, key: KeyInput) -> ModeResult:
        del key
        return ModeResult(consumed=False, status="unbound")
