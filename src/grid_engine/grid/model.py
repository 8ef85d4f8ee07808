"""Sparse cell storage, selection set, and camera ownership."""

from __future__ import annotations

from typing import Dict, Iterator, Optional, Set, Tuple

from .camera import Camera, CellGeometry, Point

CellValue = int
Cell = Tuple[int, int]  # (row, column)


class GridModel:
    """Fixed-size grid of optional cell values plus the live selection.

    Cells and the selection are keyed by the row-major index ``i * cols + j``.
    Reads outside the grid return ``None`` and writes outside it are ignored,
    so callers never have to bounds-check before touching the model.
    """

    def __init__(
        self,
        rows: int,
        cols: int,
        *,
        geometry: Optional[CellGeometry] = None,
        camera: Optional[Camera] = None,
        offset: Point = (0.0, 0.0),
    ) -> None:
        if rows <= 0 or cols <= 0:
            raise ValueError("grid dimensions must be positive")
        self._rows = rows
        self._cols = cols
        self.geometry = geometry or CellGeometry()
        self.camera = camera or Camera()
        self.offset: Point = (float(offset[0]), float(offset[1]))
        self._cells: Dict[int, CellValue] = {}
        self._selected: Set[int] = set()

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    def in_bounds(self, i: int, j: int) -> bool:
        return 0 <= i < self._rows and 0 <= j < self._cols

    def key(self, i: int, j: int) -> int:
        return i * self._cols + j

    def position(self, key: int) -> Cell:
        return divmod(key, self._cols)

    # cells

    def get(self, i: int, j: int) -> Optional[CellValue]:
        if not self.in_bounds(i, j):
            return None
        return self._cells.get(self.key(i, j))

    def set(self, i: int, j: int, value: Optional[CellValue]) -> None:
        if not self.in_bounds(i, j):
            return
        index = self.key(i, j)
        if value is None:
            self._cells.pop(index, None)
        else:
            self._cells[index] = value

    def is_empty(self, i: int, j: int) -> bool:
        return self.get(i, j) is None

    def clear(self) -> None:
        """Drop every cell value and the selection."""

        self._cells.clear()
        self._selected.clear()

    @property
    def occupied_count(self) -> int:
        return len(self._cells)

    # selection

    def select(self, i: int, j: int) -> None:
        if self.get(i, j) is not None:
            self._selected.add(self.key(i, j))

    def deselect(self, i: int, j: int) -> None:
        if self.in_bounds(i, j):
            self._selected.discard(self.key(i, j))

    def toggle(self, i: int, j: int) -> None:
        if self.is_selected(i, j):
            self.deselect(i, j)
        else:
            self.select(i, j)

    def is_selected(self, i: int, j: int) -> bool:
        return self.in_bounds(i, j) and self.key(i, j) in self._selected

    def has_selection(self) -> bool:
        return bool(self._selected)

    def clear_selection(self) -> None:
        self._selected.clear()

    @property
    def selection_size(self) -> int:
        return len(self._selected)

    # iteration

    def iter_selected(self) -> Iterator[Cell]:
        for index in tuple(self._selected):
            yield self.position(index)

    def iter_cells(self) -> Iterator[Cell]:
        for i in range(self._rows):
            for j in range(self._cols):
                yield (i, j)

    def iter_occupied(self) -> Iterator[Tuple[Cell, CellValue]]:
        for index, value in self._cells.items():
            yield self.position(index), value


__all__ = ["Cell", "CellValue", "GridModel"]
