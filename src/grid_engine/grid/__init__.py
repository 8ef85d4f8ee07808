"""Grid model, coordinate mapping, and the algorithms that edit it."""

from .camera import Camera, CellGeometry
from .clipboard import CellBuffer, ClipEntry
from .flood_fill import FloodFillTask
from .model import Cell, CellValue, GridModel
from .selection import (
    area_select,
    click_select,
    extend_rectangle,
    rectangle_anchor,
    toggle_select,
)
from .snapshot import (
    JsonFileStore,
    MemoryStore,
    Snapshot,
    SnapshotFormatError,
    SnapshotStore,
    apply_snapshot,
    decode_snapshot,
    encode_snapshot,
    take_snapshot,
)
from .transform import CoordinateTransform

__all__ = [
    "Camera",
    "CellGeometry",
    "CellBuffer",
    "ClipEntry",
    "FloodFillTask",
    "Cell",
    "CellValue",
    "GridModel",
    "CoordinateTransform",
    "area_select",
    "click_select",
    "extend_rectangle",
    "rectangle_anchor",
    "toggle_select",
    "JsonFileStore",
    "MemoryStore",
    "Snapshot",
    "SnapshotFormatError",
    "SnapshotStore",
    "apply_snapshot",
    "decode_snapshot",
    "encode_snapshot",
    "take_snapshot",
]
