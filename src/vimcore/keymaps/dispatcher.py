"""Exact-match key dispatch built from a ``KeymapRegistry``."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Mapping, Optional

from vimcore.modes.base_mode import KeyInput
from vimcore.runtime.telemetry import span

from .models import ActionRef, Binding, KeyStroke, mode_key
from .registry import KeymapRegistry


@dataclass(frozen=True, slots=True)
class DispatchMatch:
    """Resolved binding paired with its action."""

    binding: Binding
    action: ActionRef


class Dispatcher:
    """Answers "which action, if any, is bound to this key in this mode".

    The per-mode tables are built once from the registry and are read-only
    afterwards; later registry changes require a new ``Dispatcher``. A key
    matches only when both the key name and the modifier set are equal.
    """

    def __init__(
        self, registry: KeymapRegistry, *, logger_name: str | None = None
    ) -> None:
        self._logger_name = logger_name
        self._revision = registry.revision()
        tables: Dict[str, Mapping[str, DispatchMatch]] = {}
        for mode in registry.modes():
            table = {
                binding.key_signature: DispatchMatch(
                    binding=binding, action=registry.get_action(binding.action_id)
                )
                for binding in registry.iter_bindings(mode)
            }
            tables[mode] = MappingProxyType(table)
        self._tables: Mapping[str, Mapping[str, DispatchMatch]] = MappingProxyType(
            tables
        )

    @property
    def revision(self) -> int:
        """Registry revision the tables were built from."""

        return self._revision

    def table(self, mode: object) -> Mapping[str, DispatchMatch]:
        return self._tables.get(mode_key(mode), MappingProxyType({}))

    def lookup(
        self, mode: object, key: KeyInput | KeyStroke
    ) -> Optional[DispatchMatch]:
        stroke = key if isinstance(key, KeyStroke) else KeyStroke.from_input(key)
        with span(
            "keymaps::lookup",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"mode": mode_key(mode), "key": stroke.token},
        ) as handle:
            match = self.table(mode).get(stroke.token)
            handle.add_metadata("status", "match" if match else "miss")
            return match


__all__ = ["Dispatcher", "DispatchMatch"]
