"""Incremental 4-connected flood fill stepped by the host's scheduler."""

from __future__ import annotations

from collections import deque
from typing import Deque, Optional, Set

from grid_engine.runtime import telemetry

from .model import Cell, CellValue, GridModel

DEFAULT_MIN_BATCH = 4

_NEIGHBOURS = ((1, 0), (0, 1), (-1, 0), (0, -1))


class FloodFillTask:
    """Breadth-first region fill with a resumable frontier.

    ``find`` is the value that defines the region (``None`` fills empty
    cells); ``replace`` is written over it. Each ``step`` drains a quarter of
    the current frontier (at least ``min_batch`` cells), so a large fill is
    spread over several ticks instead of blocking input handling.
    """

    def __init__(
        self,
        grid: GridModel,
        start: Cell,
        find: Optional[CellValue],
        replace: Optional[CellValue],
        *,
        min_batch: int = DEFAULT_MIN_BATCH,
    ) -> None:
        if min_batch <= 0:
            raise ValueError("min_batch must be positive")
        self.grid = grid
        self.start = start
        self.find = find
        self.replace = replace
        self.min_batch = min_batch
        self.filled = 0
        self.cancelled = False
        self._queue: Deque[Cell] = deque([start])
        self._visited: Set[int] = set()

    @property
    def done(self) -> bool:
        return self.cancelled or not self._queue

    @property
    def pending(self) -> int:
        return len(self._queue)

    def cancel(self) -> None:
        self.cancelled = True
        self._queue.clear()

    def step(self, budget: Optional[int] = None) -> int:
        """Process one batch of frontier cells; returns how many were filled."""

        if self.done:
            return 0
        if budget is None:
            budget = max(self.min_batch, len(self._queue) // 4)

        grid = self.grid
        filled = 0
        for _ in range(budget):
            if not self._queue:
                break
            i, j = self._queue.popleft()
            if not grid.in_bounds(i, j):
                continue
            key = grid.key(i, j)
            if key in self._visited:
                continue
            self._visited.add(key)
            if grid.get(i, j) != self.find:
                continue
            grid.set(i, j, self.replace)
            filled += 1
            for di, dj in _NEIGHBOURS:
                self._queue.append((i + di, j + dj))

        self.filled += filled
        return filled

    def run(self) -> int:
        """Drain the frontier synchronously."""

        with telemetry.span(
            "flood_fill::run",
            component="flood_fill",
            metadata={"start": self.start, "find": self.find},
        ):
            while not self.done:
                self.step()
        return self.filled


__all__ = ["FloodFillTask", "DEFAULT_MIN_BATCH"]
