"""Engine settings resolved from ``GRID_ENGINE_*`` environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

ENV_PREFIX = "GRID_ENGINE_"


@dataclass(frozen=True, slots=True)
class EngineSettings:
    rows: int = 100
    cols: int = 100
    cell_size: float = 10.0
    cell_margin: float = 0.0
    save_interval_ms: int = 1000
    pan_step: float = 50.0
    zoom_step: float = 0.01
    min_scale: float = 0.1
    pan_button: int = 1  # middle
    fill_min_batch: int = 4
    store_path: str = "grid_engine.json"
    store_key: str = "saved-grid"


def _lookup(env: Mapping[str, str], name: str) -> Optional[str]:
    return env.get(f"{ENV_PREFIX}{name}")


def _env_int(env: Mapping[str, str], name: str, fallback: int) -> int:
    value = _lookup(env, name)
    if value is None:
        return fallback
    try:
        return int(value)
    except ValueError:
        return fallback


def _env_float(env: Mapping[str, str], name: str, fallback: float) -> float:
    value = _lookup(env, name)
    if value is None:
        return fallback
    try:
        return float(value)
    except ValueError:
        return fallback


def load_settings(env: Optional[Mapping[str, str]] = None) -> EngineSettings:
    """Build settings from ``env`` (defaults to ``os.environ``).

    Unparseable values fall back to the defaults rather than failing startup.
    """

    source = os.environ if env is None else env
    defaults = EngineSettings()
    return EngineSettings(
        rows=_env_int(source, "ROWS", defaults.rows),
        cols=_env_int(source, "COLS", defaults.cols),
        cell_size=_env_float(source, "CELL_SIZE", defaults.cell_size),
        cell_margin=_env_float(source, "CELL_MARGIN", defaults.cell_margin),
        save_interval_ms=_env_int(source, "SAVE_INTERVAL_MS", defaults.save_interval_ms),
        pan_step=_env_float(source, "PAN_STEP", defaults.pan_step),
        zoom_step=_env_float(source, "ZOOM_STEP", defaults.zoom_step),
        min_scale=_env_float(source, "MIN_SCALE", defaults.min_scale),
        pan_button=_env_int(source, "PAN_BUTTON", defaults.pan_button),
        fill_min_batch=_env_int(source, "FILL_MIN_BATCH", defaults.fill_min_batch),
        store_path=_lookup(source, "STORE_PATH") or defaults.store_path,
        store_key=_lookup(source, "STORE_KEY") or defaults.store_key,
    )


__all__ = ["EngineSettings", "load_settings", "ENV_PREFIX"]
