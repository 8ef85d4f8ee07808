"""Observable camera value object and constant cell layout."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Tuple

Point = Tuple[float, float]

CameraListener = Callable[["Camera"], None]


@dataclass(frozen=True, slots=True)
class CellGeometry:
    """Layout constants used to convert between world space and cell indices."""

    size: float = 10.0
    margin: float = 0.0

    def __post_init__(self) -> None:
        if self.size <= 0:
            raise ValueError("cell size must be positive")
        if self.margin < 0:
            raise ValueError("cell margin cannot be negative")


class Camera:
    """World-to-screen transform; every mutator publishes to subscribers."""

    def __init__(self, origin: Point = (0.0, 0.0), scale: float = 1.0) -> None:
        if scale <= 0:
            raise ValueError("camera scale must be positive")
        self._origin: Point = (float(origin[0]), float(origin[1]))
        self._scale = float(scale)
        self._listeners: List[CameraListener] = []

    @property
    def origin(self) -> Point:
        return self._origin

    @property
    def scale(self) -> float:
        return self._scale

    def subscribe(self, listener: CameraListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: CameraListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def move_to(self, x: float, y: float) -> None:
        self._origin = (float(x), float(y))
        self.publish()

    def set_scale(self, scale: float) -> None:
        if scale <= 0:
            raise ValueError("camera scale must be positive")
        self._scale = float(scale)
        self.publish()

    def update(self, *, origin: Point, scale: float) -> None:
        """Replace origin and scale together with a single notification."""

        if scale <= 0:
            raise ValueError("camera scale must be positive")
        self._origin = (float(origin[0]), float(origin[1]))
        self._scale = float(scale)
        self.publish()

    def publish(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    def __repr__(self) -> str:
        return f"Camera(origin={self._origin!r}, scale={self._scale!r})"


__all__ = ["Camera", "CameraListener", "CellGeometry", "Point"]
