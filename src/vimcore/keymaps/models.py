"""Dataclasses describing keymap bindings and action metadata."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Iterable, Mapping, MutableMapping

from vimcore.modes.base_mode import KeyInput, normalize_modifiers


def mode_key(mode: object) -> str:
    """Plain string key for a mode; ``EditorMode`` hashes by member name."""

    return str(getattr(mode, "value", mode))


@dataclass(frozen=True, slots=True)
class KeyStroke:
    """Single normalized key press; the unit every binding is keyed on."""

    key: str
    modifiers: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("key cannot be empty")
        object.__setattr__(self, "modifiers", normalize_modifiers(self.modifiers))

    @classmethod
    def parse(cls, spec: str) -> "KeyStroke":
        """Build a stroke from ``"ctrl+d"``-style notation.

        The final ``+``-separated part is the key, so ``"+"`` and ``"ctrl++"``
        both name the plus key.
        """

        if spec == "+" or "+" not in spec:
            return cls(spec)
        if spec.endswith("++"):
            head, key = spec[:-2], "+"
        else:
            head, _, key = spec.rpartition("+")
        return cls(key, tuple(part for part in head.split("+") if part))

    @classmethod
    def from_input(cls, key: KeyInput) -> "KeyStroke":
        return cls(key.key, key.modifiers)

    @property
    def token(self) -> str:
        if self.modifiers:
            modifier = "+".join(self.modifiers)
            return f"{modifier}+{self.key}"
        return self.key


@dataclass(frozen=True, slots=True)
class ActionRef:
    """Callable metadata used during binding execution."""

    id: str
    handler: Callable[..., object]
    telemetry_name: str | None = None
    description: str = ""
    metadata: Mapping[str, object] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("ActionRef id cannot be empty")
        if not callable(self.handler):
            raise TypeError("handler must be callable")
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))
        if self.telemetry_name is None:
            object.__setattr__(self, "telemetry_name", self.id)

    def __call__(self, *args: object, **kwargs: object) -> object:
        return self.handler(*args, **kwargs)


def _normalize_tags(tags: Iterable[str]) -> tuple[str, ...]:
    seen: MutableMapping[str, None] = {}
    result: list[str] = []
    for tag in tags:
        cleaned = tag.strip()
        if cleaned and cleaned not in seen:
            seen[cleaned] = None
            result.append(cleaned)
    return tuple(result)


@dataclass(frozen=True, slots=True)
class Binding:
    """Associates one key stroke in one mode with an action."""

    id: str
    mode: str
    stroke: KeyStroke
    action_id: str
    description: str = ""
    tags: tuple[str, ...] = ()
    source: str | None = None

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("binding id cannot be empty")
        if not self.mode:
            raise ValueError("binding mode cannot be empty")
        if not self.action_id:
            raise ValueError("binding action_id cannot be empty")
        object.__setattr__(self, "mode", mode_key(self.mode))
        if isinstance(self.stroke, str):
            object.__setattr__(self, "stroke", KeyStroke.parse(self.stroke))
        object.__setattr__(self, "tags", _normalize_tags(self.tags))

    @property
    def key_signature(self) -> str:
        return self.stroke.token


__all__ = [
    "mode_key",
    "KeyStroke",
    "ActionRef",
    "Binding",
]
