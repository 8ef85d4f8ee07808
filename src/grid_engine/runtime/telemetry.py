"""Telemetry services built on the standard ``logging`` module and rich.

This module exposes a narrow surface area for the rest of the engine:

``configure(...)`` -- override or preset the logging configuration
``get_logger(name)`` -- fetch (and cache) a configured logger
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

from rich.console import Console
from rich.logging import RichHandler

ENV_PREFIX = "GRID_ENGINE_"
DEFAULT_LOGGER_NAME = os.getenv(f"{ENV_PREFIX}LOGGER", "grid_engine")
DEFAULT_LOG_FILE = os.getenv(f"{ENV_PREFIX}LOG_FILE", "")

_LOGGER_CACHE: MutableMapping[str, logging.Logger] = {}
_ACTIVE_CONFIG: Optional["TelemetryConfig"] = None


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


@dataclass(slots=True)
class TelemetryConfig:
    """Handler layout applied to the engine's root logger."""

    min_level: str = "INFO"
    console: bool = True
    colored: bool = True
    json_format: bool = False
    log_file: str = ""


class JsonLineFormatter(logging.Formatter):
    """One JSON object per record, carrying span/event payloads verbatim."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "ts": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        extra = getattr(record, "telemetry", None)
        if isinstance(extra, dict):
            payload.update(extra)
        return json.dumps(payload, default=str)


def _build_preset_config(preset: str) -> TelemetryConfig:
    key = preset.lower()

    if key == "development":
        return TelemetryConfig(min_level="DEBUG", console=True, colored=True)
    if key == "production":
        log_path = _env("LOG_FILE", DEFAULT_LOG_FILE) or "grid_engine.log"
        return TelemetryConfig(min_level="INFO", console=False, log_file=log_path)
    if key in {"performance", "performance_analysis"}:
        log_path = _env("LOG_FILE", DEFAULT_LOG_FILE) or "grid_engine-performance.log"
        return TelemetryConfig(
            min_level="DEBUG", console=False, json_format=True, log_file=log_path
        )
    raise ValueError(f"Unknown preset '{preset}'.")


def _build_default_config() -> TelemetryConfig:
    return TelemetryConfig(
        min_level=(_env("LOG_LEVEL") or "INFO").upper(),
        console=not _env_flag("DISABLE_CONSOLE", False),
        colored=not _env_flag("NO_COLOR", False),
        json_format=_env_flag("LOG_JSON", False),
        log_file=_env("LOG_FILE") or DEFAULT_LOG_FILE,
    )


def _install_handlers(config: TelemetryConfig) -> None:
    root = logging.getLogger(DEFAULT_LOGGER_NAME)
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    root.setLevel(config.min_level)
    root.propagate = False

    if config.console:
        console = RichHandler(
            console=Console(stderr=True, no_color=not config.colored),
            show_path=False,
            markup=False,
            rich_tracebacks=True,
        )
        root.addHandler(console)

    if config.log_file:
        file_handler = logging.FileHandler(config.log_file, encoding="utf-8")
        if config.json_format:
            file_handler.setFormatter(JsonLineFormatter())
        else:
            file_handler.setFormatter(
                logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")
            )
        root.addHandler(file_handler)

    if not root.handlers:
        root.addHandler(logging.NullHandler())


def configure(
    *, config: Optional[TelemetryConfig] = None, preset: Optional[str] = None
) -> None:
    """Override the active logging configuration.

    Parameters
    ----------
    config:
        Explicit ``TelemetryConfig`` instance to adopt.
    preset:
        Named preset (``"development"``, ``"production"``, ``"performance"``).
        ``config`` and ``preset`` are mutually exclusive.
    """

    global _ACTIVE_CONFIG
    if config and preset:
        raise ValueError("Provide either `config` or `preset`, not both.")

    if preset:
        config = _build_preset_config(preset)
    elif config is None:
        config = _build_default_config()

    _ACTIVE_CONFIG = config
    _LOGGER_CACHE.clear()
    _install_handlers(config)


def _ensure_config() -> TelemetryConfig:
    global _ACTIVE_CONFIG
    if _ACTIVE_CONFIG is None:
        configure()
    assert _ACTIVE_CONFIG is not None
    return _ACTIVE_CONFIG


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a cached logger living under the engine's root logger."""

    _ensure_config()
    logger_name = name or DEFAULT_LOGGER_NAME
    if logger_name not in _LOGGER_CACHE:
        qualified = logger_name
        if not qualified.startswith(DEFAULT_LOGGER_NAME):
            qualified = f"{DEFAULT_LOGGER_NAME}.{qualified}"
        _LOGGER_CACHE[logger_name] = logging.getLogger(qualified)
    return _LOGGER_CACHE[logger_name]


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
    payload = {"event": name, **(data or {})}
    log.log(
        _resolve_level(level),
        "event::%s %s",
        name,
        _format_pairs(payload),
        extra={"telemetry": payload},
    )


@dataclass
class SpanHandle:
    """Handle returned from ``span`` for optional metadata updates."""

    logger: logging.Logger
    span_name: str
    component_name: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _stringify(value)

    def _emit(
        self, level: int, message: str, extra: Optional[Dict[str, Any]] = None
    ) -> None:
        payload: Dict[str, Any] = {"span": self.span_name, **self.metadata}
        if self.component_name:
            payload["component"] = self.component_name
        if extra:
            payload.update({key: _stringify(val) for key, val in extra.items()})
        self.logger.log(
            level,
            "%s %s",
            message,
            _format_pairs(payload),
            extra={"telemetry": payload},
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
    """Time a code block and (optionally) tag it with a component name.

    Parameters
    ----------
    name:
        Operation name written on the closing ``span::end`` record.
    logger_name:
        Target logger; defaults to the engine logger.
    component:
        If ``True`` use the same name as the span; if a string, use it as the
        component identifier.
    metadata:
        Optional key/value pairs attached to every record the span emits.
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
    started = time.perf_counter()
    try:
        yield handle
    except Exception as exc:
        handle.fail(str(exc))
        raise
    finally:
        if log.isEnabledFor(logging.DEBUG):
            elapsed_ms = (time.perf_counter() - started) * 1000.0
            handle._emit(logging.DEBUG, "span::end", {"elapsed_ms": f"{elapsed_ms:.3f}"})


# Initialize the module-level logger once the config is ready.
configure()
logger = get_logger()

__all__ = [
    "SpanHandle",
    "TelemetryConfig",
    "JsonLineFormatter",
    "configure",
    "get_logger",
    "record_event",
    "span",
    "logger",
]
