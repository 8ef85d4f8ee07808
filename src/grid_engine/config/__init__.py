"""Editor configuration store and engine settings."""

from .settings import EngineSettings, load_settings
from .store import (
    ConfigStore,
    EditorConfig,
    PALETTE,
    PaintConfig,
    SelectConfig,
    SetMode,
    Store,
    UpdatePaint,
    UpdateSelect,
    create_config_store,
)

__all__ = [
    "ConfigStore",
    "EditorConfig",
    "EngineSettings",
    "PALETTE",
    "PaintConfig",
    "SelectConfig",
    "SetMode",
    "Store",
    "UpdatePaint",
    "UpdateSelect",
    "create_config_store",
    "load_settings",
]
