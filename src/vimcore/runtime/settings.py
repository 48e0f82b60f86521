"""Editor settings resolved from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .telemetry import ENV_PREFIX


def _read_int(env: Mapping[str, str], key: str, fallback: int) -> int:
    value = env.get(f"{ENV_PREFIX}{key}")
    if value is None:
        return fallback
    try:
        return int(value)
    except ValueError:
        return fallback


def _read_flag(env: Mapping[str, str], key: str, fallback: bool) -> bool:
    value = env.get(f"{ENV_PREFIX}{key}")
    if value is None:
        return fallback
    return value.lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True, slots=True)
class EditorSettings:
    """Startup options for an editor session."""

    encoding: str = "utf-8"
    cols: int = 80
    rows: int = 24
    show_tildes: bool = True

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "EditorSettings":
        source = os.environ if env is None else env
        defaults = cls()
        return cls(
            encoding=source.get(f"{ENV_PREFIX}ENCODING") or defaults.encoding,
            cols=max(1, _read_int(source, "COLS", defaults.cols)),
            rows=max(1, _read_int(source, "ROWS", defaults.rows)),
            show_tildes=_read_flag(source, "SHOW_TILDES", defaults.show_tildes),
        )


__all__ = ["EditorSettings"]
