"""Selection algorithms shared by the pointer-driven modes."""

from __future__ import annotations

from typing import Optional

from .camera import Point
from .model import Cell, GridModel
from .transform import CoordinateTransform


def click_select(grid: GridModel, i: int, j: int) -> None:
    """Select one cell, keeping the selection if the cell already belongs to it."""

    if not grid.is_selected(i, j):
        grid.clear_selection()
    grid.select(i, j)


def toggle_select(grid: GridModel, i: int, j: int) -> None:
    grid.toggle(i, j)


def rectangle_anchor(grid: GridModel) -> Optional[Cell]:
    """Selected cell closest to the grid origin by ``i + j``, ties by ``(i, j)``."""

    best: Optional[Cell] = None
    for cell in grid.iter_selected():
        if best is None or (sum(cell), cell) < (sum(best), best):
            best = cell
    return best


def extend_rectangle(grid: GridModel, i: int, j: int) -> None:
    """Replace the selection with the rectangle between the anchor and ``(i, j)``."""

    anchor = rectangle_anchor(grid)
    if anchor is None:
        grid.select(i, j)
        return

    grid.clear_selection()
    si, sj = anchor
    ei, ej = i, j
    if ei < si:
        si, ei = ei, si
    if ej < sj:
        sj, ej = ej, sj
    for row in range(si, ei + 1):
        for col in range(sj, ej + 1):
            grid.select(row, col)


def area_select(
    grid: GridModel, transform: CoordinateTransform, start: Point, end: Point
) -> int:
    """Add every occupied cell between two world points; returns the new size."""

    for i, j in transform.cells_between(start[0], start[1], end[0], end[1]):
        grid.select(i, j)
    return grid.selection_size


__all__ = [
    "area_select",
    "click_select",
    "extend_rectangle",
    "rectangle_anchor",
    "toggle_select",
]
