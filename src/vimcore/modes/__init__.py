"""Editor modes and per-mode default key handling."""

from .base_mode import (
    EditorMode,
    KeyInput,
    Mode,
    ModeBus,
    ModeContext,
    ModeResult,
    normalize_modifiers,
)
from .normal_mode import NormalMode
from .insert_mode import InsertMode
from .ex_mode import ExMode
from .operator_mode import OperatorMode

__all__ = [
    "EditorMode",
    "KeyInput",
    "Mode",
    "ModeBus",
    "ModeContext",
    "ModeResult",
    "normalize_modifiers",
    "NormalMode",
    "InsertMode",
    "ExMode",
    "OperatorMode",
]
