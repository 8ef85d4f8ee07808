"""Interaction modes and the input types they consume."""

from .base_mode import (
    KeyInput,
    Mode,
    ModeBus,
    ModeContext,
    ModeResult,
    MouseButton,
    Overlay,
    PointerInput,
    PointerState,
    WheelInput,
)
from .nop_mode import NopMode
from .paint_mode import PaintMode
from .select_mode import SelectMode, SelectState

__all__ = [
    "KeyInput",
    "Mode",
    "ModeBus",
    "ModeContext",
    "ModeResult",
    "MouseButton",
    "Overlay",
    "PointerInput",
    "PointerState",
    "WheelInput",
    "NopMode",
    "PaintMode",
    "SelectMode",
    "SelectState",
]
