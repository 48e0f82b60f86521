"""Keymap registry, exact-match dispatcher, and default bindings."""

from .models import ActionRef, Binding, KeyStroke, mode_key
from .registry import KeymapConflictError, KeymapRegistry, RegistryStats
from .dispatcher import Dispatcher, DispatchMatch
from .defaults import DEFAULT_ACTIONS, DEFAULT_BINDINGS, load_default_keymaps

__all__ = [
    "ActionRef",
    "Binding",
    "KeyStroke",
    "mode_key",
    "KeymapRegistry",
    "KeymapConflictError",
    "RegistryStats",
    "Dispatcher",
    "DispatchMatch",
    "DEFAULT_ACTIONS",
    "DEFAULT_BINDINGS",
    "load_default_keymaps",
]
