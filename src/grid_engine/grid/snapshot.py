"""Grid snapshots and the key-value stores that persist them."""

from __future__ import annotations

import json
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Protocol, Tuple

from grid_engine.runtime import telemetry

from .camera import Point
from .model import Cell, CellValue, GridModel

DEFAULT_STORE_KEY = "saved-grid"


class SnapshotFormatError(ValueError):
    """Raised when a persisted payload does not describe a snapshot."""


@dataclass(slots=True)
class Snapshot:
    """Camera origin, grid offset, scale and the sparse cell values."""

    origin: Point = (0.0, 0.0)
    offset: Point = (0.0, 0.0)
    scale: float = 1.0
    cells: Dict[Cell, CellValue] = field(default_factory=dict)


class SnapshotStore(Protocol):
    """Persistence collaborator consulted at startup and after commits."""

    def restore(self) -> Optional[Snapshot]:
        """Return the saved snapshot, or ``None`` when absent or unreadable."""
        ...

    def save(self, snapshot: Snapshot) -> None:
        """Persist ``snapshot``, replacing any previous one."""
        ...


def take_snapshot(grid: GridModel) -> Snapshot:
    return Snapshot(
        origin=grid.camera.origin,
        offset=grid.offset,
        scale=grid.camera.scale,
        cells={cell: value for cell, value in grid.iter_occupied()},
    )


def apply_snapshot(grid: GridModel, snapshot: Snapshot) -> None:
    """Load ``snapshot`` into ``grid``; cells outside the grid are dropped."""

    grid.clear()
    for (i, j), value in snapshot.cells.items():
        grid.set(i, j, value)
    grid.offset = snapshot.offset
    grid.camera.update(origin=snapshot.origin, scale=snapshot.scale)


def encode_snapshot(snapshot: Snapshot) -> Dict[str, Any]:
    return {
        "origin": list(snapshot.origin),
        "offset": list(snapshot.offset),
        "scale": snapshot.scale,
        "cells": [[i, j, value] for (i, j), value in sorted(snapshot.cells.items())],
    }


def decode_snapshot(payload: Any) -> Snapshot:
    if not isinstance(payload, Mapping):
        raise SnapshotFormatError("snapshot payload must be an object")
    try:
        origin = _point(payload.get("origin", (0.0, 0.0)))
        offset = _point(payload.get("offset", (0.0, 0.0)))
        scale = float(payload.get("scale", 1.0))
        raw_cells = payload.get("cells", [])
        cells: Dict[Cell, CellValue] = {}
        for item in raw_cells:
            i, j, value = item
            if isinstance(value, bool) or not isinstance(value, int):
                raise SnapshotFormatError(f"cell value must be an int: {value!r}")
            cells[(_index(i), _index(j))] = value
    except SnapshotFormatError:
        raise
    except (TypeError, ValueError) as exc:
        raise SnapshotFormatError(str(exc)) from exc

    if not math.isfinite(scale) or scale <= 0:
        raise SnapshotFormatError(f"scale must be positive: {scale!r}")
    return Snapshot(origin=origin, offset=offset, scale=scale, cells=cells)


def _index(raw: Any) -> int:
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise SnapshotFormatError(f"cell index must be an integer: {raw!r}")
    if isinstance(raw, float) and not raw.is_integer():
        raise SnapshotFormatError(f"cell index must be an integer: {raw!r}")
    return int(raw)


def _point(raw: Any) -> Tuple[float, float]:
    x, y = raw
    point = (float(x), float(y))
    if not all(math.isfinite(value) for value in point):
        raise SnapshotFormatError(f"point must be finite: {raw!r}")
    return point


class MemoryStore:
    """In-process store keeping the encoded payload, as a real store would."""

    def __init__(self, payload: Any = None) -> None:
        self.payload = payload
        self.saves = 0

    def restore(self) -> Optional[Snapshot]:
        if self.payload is None:
            return None
        try:
            return decode_snapshot(self.payload)
        except SnapshotFormatError as exc:
            _report_restore_failure("memory", exc)
            return None

    def save(self, snapshot: Snapshot) -> None:
        self.payload = encode_snapshot(snapshot)
        self.saves += 1


class JsonFileStore:
    """Key-value JSON file; the snapshot lives under a single key."""

    def __init__(self, path: str | Path, *, key: str = DEFAULT_STORE_KEY) -> None:
        self.path = Path(path)
        self.key = key

    def restore(self) -> Optional[Snapshot]:
        with telemetry.span(
            "snapshot::restore",
            component="snapshot",
            metadata={"path": str(self.path), "key": self.key},
        ) as handle:
            if not self.path.exists():
                handle.add_metadata("status", "missing")
                return None
            try:
                document = json.loads(self.path.read_text(encoding="utf-8"))
                if not isinstance(document, dict) or self.key not in document:
                    handle.add_metadata("status", "absent")
                    return None
                return decode_snapshot(document[self.key])
            # UnicodeDecodeError, JSONDecodeError and SnapshotFormatError are ValueErrors.
            except (OSError, ValueError) as exc:
                _report_restore_failure(str(self.path), exc)
                return None

    def save(self, snapshot: Snapshot) -> None:
        with telemetry.span(
            "snapshot::save",
            component="snapshot",
            metadata={"path": str(self.path), "cells": len(snapshot.cells)},
        ):
            document = self._read_document()
            document[self.key] = encode_snapshot(snapshot)
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
            tmp_path.write_text(json.dumps(document), encoding="utf-8")
            tmp_path.replace(self.path)

    def _read_document(self) -> Dict[str, Any]:
        try:
            document = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            return {}
        return document if isinstance(document, dict) else {}


def _report_restore_failure(source: str, exc: Exception) -> None:
    telemetry.record_event(
        "snapshot.restore_failed",
        level="warning",
        data={"source": source, "error": str(exc)},
    )


__all__ = [
    "DEFAULT_STORE_KEY",
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
