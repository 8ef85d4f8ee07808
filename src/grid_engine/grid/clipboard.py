"""Reference-relative cell buffers backing copy, cut, paste and rotate."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple

from .model import Cell, CellValue, GridModel


@dataclass(slots=True)
class ClipEntry:
    di: int
    dj: int
    value: CellValue


@dataclass(slots=True)
class CellBuffer:
    """Cells captured relative to ``reference``; pasting re-anchors them."""

    reference: Cell = (0, 0)
    entries: List[ClipEntry] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.entries)

    def is_empty(self) -> bool:
        return not self.entries

    def clear(self) -> None:
        self.entries.clear()
        self.reference = (0, 0)

    def copy_selection(
        self, grid: GridModel, reference: Optional[Cell] = None
    ) -> int:
        """Capture every selected, occupied cell; returns the entry count.

        Without an explicit ``reference`` the anchor is the midpoint of the
        occupied selection's bounding box.
        """

        occupied: List[Tuple[Cell, CellValue]] = []
        for cell in grid.iter_selected():
            value = grid.get(*cell)
            if value is not None:
                occupied.append((cell, value))

        self.entries.clear()
        if reference is None:
            reference = _bounding_midpoint([cell for cell, _ in occupied])
        self.reference = reference

        ri, rj = reference
        for (i, j), value in occupied:
            self.entries.append(ClipEntry(di=i - ri, dj=j - rj, value=value))
        return len(self.entries)

    def cut_selection(self, grid: GridModel) -> int:
        count = self.copy_selection(grid)
        for i, j in grid.iter_selected():
            grid.set(i, j, None)
        grid.clear_selection()
        return count

    def targets(self, i: int, j: int) -> Iterator[Tuple[Cell, CellValue]]:
        for entry in self.entries:
            yield (i + entry.di, j + entry.dj), entry.value

    def paste(self, grid: GridModel, i: int, j: int) -> int:
        """Write the buffer anchored at ``(i, j)``, replacing the selection."""

        grid.clear_selection()
        written = 0
        for (ti, tj), value in self.targets(i, j):
            if grid.in_bounds(ti, tj):
                grid.set(ti, tj, value)
                written += 1
        return written

    def rotate(self) -> None:
        """Rotate every offset 90 degrees about the reference, in place."""

        for entry in self.entries:
            entry.di, entry.dj = entry.dj, -entry.di


def _bounding_midpoint(cells: List[Cell]) -> Cell:
    if not cells:
        return (0, 0)
    rows = [i for i, _ in cells]
    cols = [j for _, j in cells]
    si, ei = min(rows), max(rows)
    sj, ej = min(cols), max(cols)
    return (si + (ei - si) // 2, sj + (ej - sj) // 2)


__all__ = ["CellBuffer", "ClipEntry"]
