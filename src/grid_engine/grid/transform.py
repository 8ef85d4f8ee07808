"""Screen/world/cell coordinate mapping and pan/zoom arithmetic."""

from __future__ import annotations

import math
from typing import Iterator, Tuple

from .camera import Point
from .model import Cell, GridModel

Rect = Tuple[float, float, float, float]  # (x, y, width, height)

DEFAULT_MIN_SCALE = 0.1
DEFAULT_SCALE_STEP = 0.01


class CoordinateTransform:
    """Maps between screen pixels, world units and cell indices for one grid.

    Screen points become world points through the camera
    (``world = screen / scale + origin``). World points become cells through
    the grid offset and cell geometry; the margin is divided by the camera
    scale so the visible gap between cells stays constant while zooming.
    """

    def __init__(
        self,
        grid: GridModel,
        *,
        min_scale: float = DEFAULT_MIN_SCALE,
        scale_step: float = DEFAULT_SCALE_STEP,
    ) -> None:
        if min_scale <= 0:
            raise ValueError("min_scale must be positive")
        self.grid = grid
        self.min_scale = min_scale
        self.scale_step = scale_step

    def _pitch(self) -> float:
        geometry = self.grid.geometry
        return geometry.margin / self.grid.camera.scale + geometry.size

    def to_world(self, sx: float, sy: float) -> Point:
        camera = self.grid.camera
        ox, oy = camera.origin
        return (sx / camera.scale + ox, sy / camera.scale + oy)

    def to_screen(self, x: float, y: float) -> Point:
        camera = self.grid.camera
        ox, oy = camera.origin
        return ((x - ox) * camera.scale, (y - oy) * camera.scale)

    def cell_at(self, x: float, y: float) -> Cell:
        pitch = self._pitch()
        ox, oy = self.grid.offset
        j = math.floor((x - ox) / pitch)
        i = math.floor((y - oy) / pitch)
        return (i, j)

    def cells_between(
        self, x1: float, y1: float, x2: float, y2: float
    ) -> Iterator[Cell]:
        i1, j1 = self.cell_at(x1, y1)
        i2, j2 = self.cell_at(x2, y2)
        if i1 > i2:
            i1, i2 = i2, i1
        if j1 > j2:
            j1, j2 = j2, j1
        for i in range(i1, i2 + 1):
            for j in range(j1, j2 + 1):
                yield (i, j)

    def cell_rect(self, i: int, j: int) -> Rect:
        pitch = self._pitch()
        size = self.grid.geometry.size
        ox, oy = self.grid.offset
        return (ox + pitch * j, oy + pitch * i, size, size)

    def pan(self, dx: float, dy: float) -> None:
        camera = self.grid.camera
        ox, oy = camera.origin
        camera.move_to(ox + dx / camera.scale, oy + dy / camera.scale)

    def zoom(self, steps: int) -> None:
        """Change the scale by ``steps`` increments, one notification per step."""

        if steps == 0:
            return
        direction = 1 if steps > 0 else -1
        for _ in range(abs(steps)):
            self._zoom_once(direction)

    def zoom_in(self) -> None:
        self.zoom(1)

    def zoom_out(self) -> None:
        self.zoom(-1)

    def _zoom_once(self, direction: int) -> None:
        camera = self.grid.camera
        scale = max(camera.scale + direction * self.scale_step, self.min_scale)
        ox, oy = camera.origin
        camera.update(origin=(ox - scale, oy - scale), scale=scale)


__all__ = ["CoordinateTransform", "Rect", "DEFAULT_MIN_SCALE", "DEFAULT_SCALE_STEP"]
