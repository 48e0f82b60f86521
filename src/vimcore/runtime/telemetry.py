"""Telemetry services built on the standard ``logging`` module.

This module exposes a narrow surface area for the rest of the editor:

``configure(...)`` -- override or preset the logging configuration
``get_logger(name)`` -- fetch (and cache) a logger under the package root
``record_event(name, ...)`` -- emit structured events at a chosen level
``span(name, ...)`` -- context manager timing a block and tagging its component
"""

from __future__ import annotations

import json
import logging
import os
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, MutableMapping, Optional

ENV_PREFIX = "VIMCORE_"
DEFAULT_LOGGER_NAME = os.getenv(f"{ENV_PREFIX}LOGGER", "vimcore")
DEFAULT_LOG_FILE = os.getenv(f"{ENV_PREFIX}LOG_FILE", "")

_LOGGER_CACHE: MutableMapping[str, logging.Logger] = {}
_HANDLERS: list[logging.Handler] = []

_TEXT_FORMAT = "%(asctime)s %(levelname)-7s %(name)s - %(message)s"


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}", default)


def _env_flag(name: str, default: bool) -> bool:
    raw = _env(name)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


def _stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    return repr(value) if isinstance(value, (dict, list, tuple, set)) else str(value)


def _format_pairs(data: Dict[str, Any]) -> str:
    return " ".join(f"{key}={_stringify(value)}" for key, value in data.items())


class JsonLineFormatter(logging.Formatter):
    """Render each record as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "ts": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        fields = getattr(record, "fields", None)
        if isinstance(fields, dict):
            payload.update(fields)
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


@dataclass(slots=True)
class TelemetryConfig:
    """Resolved logging options applied to the package root logger."""

    level: str = "WARNING"
    console: bool = False
    json_format: bool = False
    log_file: str = ""

    def build_handlers(self) -> list[logging.Handler]:
        handlers: list[logging.Handler] = []
        if self.console:
            handlers.append(logging.StreamHandler())
        if self.log_file:
            handlers.append(logging.FileHandler(self.log_file, encoding="utf-8"))
        formatter: logging.Formatter = (
            JsonLineFormatter() if self.json_format else logging.Formatter(_TEXT_FORMAT)
        )
        for handler in handlers:
            handler.setFormatter(formatter)
        return handlers


def _build_preset_config(preset: str) -> TelemetryConfig:
    key = preset.lower()

    if key == "development":
        return TelemetryConfig(
            level="DEBUG",
            log_file=_env("LOG_FILE", DEFAULT_LOG_FILE) or "vimcore-debug.log",
        )
    if key == "production":
        return TelemetryConfig(
            level="INFO",
            log_file=_env("LOG_FILE", DEFAULT_LOG_FILE) or "vimcore.log",
        )
    if key == "quiet":
        return TelemetryConfig(level="CRITICAL")
    raise ValueError(f"Unknown preset '{preset}'.")


def _build_default_config() -> TelemetryConfig:
    return TelemetryConfig(
        level=(_env("LOG_LEVEL") or "WARNING").upper(),
        console=_env_flag("LOG_CONSOLE", False),
        json_format=_env_flag("LOG_JSON", False),
        log_file=_env("LOG_FILE") or DEFAULT_LOG_FILE,
    )


def configure(
    *, config: Optional[TelemetryConfig] = None, preset: Optional[str] = None
) -> TelemetryConfig:
    """Apply a logging configuration to the ``vimcore`` logger tree.

    Parameters
    ----------
    config:
        Explicit ``TelemetryConfig`` instance to adopt.
    preset:
        Named preset (``"development"``, ``"production"``, ``"quiet"``).
        ``config`` and ``preset`` are mutually exclusive.
    """

    if config and preset:
        raise ValueError("Provide either `config` or `preset`, not both.")

    if preset:
        config = _build_preset_config(preset)
    elif config is None:
        config = _build_default_config()

    root = logging.getLogger(DEFAULT_LOGGER_NAME)
    for handler in _HANDLERS:
        root.removeHandler(handler)
        handler.close()
    _HANDLERS.clear()

    handlers = config.build_handlers() or [logging.NullHandler()]
    for handler in handlers:
        root.addHandler(handler)
        _HANDLERS.append(handler)
    root.setLevel(config.level)
    root.propagate = False
    _LOGGER_CACHE.clear()
    return config


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a cached logger living under the package root logger."""

    logger_name = name or DEFAULT_LOGGER_NAME
    if logger_name not in _LOGGER_CACHE:
        if logger_name != DEFAULT_LOGGER_NAME and not logger_name.startswith(
            f"{DEFAULT_LOGGER_NAME}."
        ):
            logger_name = f"{DEFAULT_LOGGER_NAME}.{logger_name}"
        _LOGGER_CACHE[name or DEFAULT_LOGGER_NAME] = logging.getLogger(logger_name)
    return _LOGGER_CACHE[name or DEFAULT_LOGGER_NAME]


def _resolve_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unsupported log level '{level}'.")
    return resolved


def record_event(
    name: str,
    *,
    level: str | int = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Emit a structured ``event::<name>`` record."""

    log = get_logger(logger_name)
    numeric = _resolve_level(level)
    if not log.isEnabledFor(numeric):
        return
    payload = {"event": name, **(data or {})}
    log.log(
        numeric,
        "event::%s %s",
        name,
        _format_pairs(payload),
        extra={"fields": {k: _stringify(v) for k, v in payload.items()}},
    )


@dataclass
class SpanHandle:
    """Handle returned from ``span`` for optional metadata updates."""

    logger: logging.Logger
    span_name: str
    component_name: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)
    started: float = field(default_factory=time.perf_counter)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _stringify(value)

    @property
    def elapsed_ms(self) -> float:
        return (time.perf_counter() - self.started) * 1000.0

    def _emit(
        self, level: int, message: str, extra: Optional[Dict[str, Any]] = None
    ) -> None:
        if not self.logger.isEnabledFor(level):
            return
        payload = {"span": self.span_name, **self.metadata}
        if self.component_name:
            payload["component"] = self.component_name
        if extra:
            payload.update({key: _stringify(val) for key, val in extra.items()})
        self.logger.log(
            level,
            "%s %s",
            message,
            _format_pairs(payload),
            extra={"fields": payload},
        )

    def fail(self, reason: str) -> None:
        self._emit(logging.ERROR, "span::fail", {"reason": reason})

    def cancel(self, reason: str | None = None) -> None:
        extra = {"reason": reason} if reason else None
        self._emit(logging.WARNING, "span::cancel", extra)


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Time a code block and (optionally) tag it with a component.

    Parameters
    ----------
    name:
        Operation name written on the ``span::end`` record.
    logger_name:
        Target logger; defaults to the package logger.
    component:
        If ``True`` use the same name as the span; if a string, use it as the
        component identifier.
    metadata:
        Optional key/value pairs attached to every record the span writes.
    """

    log = get_logger(logger_name)
    component_name = None
    if component is True:
        component_name = name
    elif isinstance(component, str):
        component_name = component

    handle = SpanHandle(
        logger=log,
        span_name=name,
        component_name=component_name,
        metadata={key: _stringify(value) for key, value in (metadata or {}).items()},
    )
    try:
        yield handle
    except Exception as exc:
        handle.fail(str(exc))
        raise
    else:
        handle._emit(logging.DEBUG, "span::end", {"ms": f"{handle.elapsed_ms:.3f}"})


# Initialize the package logger once at import.
configure()
logger = get_logger()

__all__ = [
    "JsonLineFormatter",
    "SpanHandle",
    "TelemetryConfig",
    "configure",
    "get_logger",
    "record_event",
    "span",
    "logger",
]
