"""Mode manager coordinating Normal/Insert/Ex/Operator handling."""

from __future__ import annotations

from typing import Dict, Optional, Type

from vimcore.keymaps import Dispatcher, KeymapRegistry, load_default_keymaps
from vimcore.runtime import telemetry

from .base_mode import EditorMode, KeyInput, Mode, ModeContext, ModeResult


class ModeManager:
    """Owns the active mode, handles transitions, and dispatches key events."""

    def __init__(
        self,
        context: ModeContext,
        *,
        keymap_registry: KeymapRegistry | None = None,
        dispatcher: Dispatcher | None = None,
        load_defaults: bool = True,
    ) -> None:
        self.context = context
        self._modes: Dict[EditorMode, Mode] = {}
        self._active: Optional[EditorMode] = None
        self.logger = telemetry.get_logger("vimcore.modes")
        if dispatcher is None:
            if keymap_registry is None:
                keymap_registry = KeymapRegistry(logger_name="vimcore.keymaps")
                if load_defaults:
                    load_default_keymaps(keymap_registry)
            dispatcher = Dispatcher(keymap_registry)
        self.keymap_registry = keymap_registry
        self.dispatcher = dispatcher
        if self.context.dispatcher is None:
            self.context.dispatcher = dispatcher
        self.context.extras.setdefault("mode_manager", self)

    @property
    def active_mode(self) -> Optional[Mode]:
        if self._active is None:
            return None
        return self._modes.get(self._active)

    @property
    def mode(self) -> Optional[EditorMode]:
        return self._active

    def register_mode(
        self,
        mode_cls: Type[Mode],
        /,
        *mode_args: object,
        **mode_kwargs: object,
    ) -> Mode:
        mode = mode_cls(self.context, *mode_args, **mode_kwargs)
        if mode.name in self._modes:
            raise ValueError(f"Mode '{mode.name.value}' already registered")
        self._modes[mode.name] = mode
        if self._active is None:
            self._active = mode.name
            mode.on_enter(None)
        return mode

    def switch_mode(self, name: EditorMode | str) -> None:
        try:
            name = EditorMode(name)
        except ValueError as exc:
            raise KeyError(f"Unknown mode '{name}'") from exc
        if name not in self._modes:
            raise KeyError(f"Unknown mode '{name.value}'")
        previous = self.active_mode
        if previous and previous.name == name:
            return
        if previous:
            previous.on_exit(name)
        self._active = name
        self._modes[name].on_enter(previous.name if previous else None)
        self.context.bus.emit("mode.switch", name)
        telemetry.record_event("mode.switch", level="debug", data={"mode": name.value})

    def handle_key(self, key: KeyInput) -> ModeResult:
        mode = self.active_mode
        if mode is None:
            raise RuntimeError("No active mode registered")
        with telemetry.span(
            name=f"mode::{mode.name.value}",
            component="modes",
            metadata={"key": key.key, "mode": mode.name.value},
        ):
            result = mode.handle_key(key)
        if result.switch_to:
            self.switch_mode(result.switch_to)
        return result
