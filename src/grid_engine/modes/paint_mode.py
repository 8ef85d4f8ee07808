"""Paint mode: brush and erase strokes plus batched flood fills."""

from __future__ import annotations

from typing import List, Optional

from grid_engine.config.store import PaintConfig
from grid_engine.grid.flood_fill import FloodFillTask
from grid_engine.grid.model import CellValue
from grid_engine.runtime import telemetry

from .base_mode import Mode, ModeContext, ModeResult, MouseButton, PointerInput, PointerState


class PaintMode(Mode):
    name = "paint"

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self.pointer = PointerState()
        self.fills: List[FloodFillTask] = []
        self._fill_find: Optional[CellValue] = None

    def _paint(self) -> PaintConfig:
        return self.context.config.current.paint

    def _stroke(self, x: float, y: float) -> bool:
        """Apply the brush or eraser under the pointer; ``True`` if a cell changed."""

        paint = self._paint()
        i, j = self.transform.cell_at(x, y)
        value = paint.color if paint.tool == "brush" else None
        if not self.grid.in_bounds(i, j) or self.grid.get(i, j) == value:
            return False
        self.grid.set(i, j, value)
        return True

    def handle_pointer_down(
        self, x: float, y: float, event: PointerInput
    ) -> ModeResult:
        self.pointer.press((x, y), event)
        if event.button != MouseButton.LEFT:
            return ModeResult(status="ignored")

        if self._paint().tool == "fill":
            i, j = self.transform.cell_at(x, y)
            self._fill_find = self.grid.get(i, j)
            return ModeResult(status="fill_armed")

        return ModeResult(changed=self._stroke(x, y), status="stroke")

    def handle_pointer_move(
        self, x: float, y: float, event: PointerInput
    ) -> ModeResult:
        del event
        pointer = self.pointer
        if not pointer.active:
            return ModeResult(status="hover")
        pointer.current = (x, y)
        if pointer.button != MouseButton.LEFT:
            return ModeResult(status="ignored")
        if self._paint().tool == "fill":
            return ModeResult(status="fill_armed")
        return ModeResult(changed=self._stroke(x, y), status="stroke")

    def handle_pointer_up(
        self, x: float, y: float, event: PointerInput
    ) -> ModeResult:
        del x, y
        pointer = self.pointer
        if not pointer.active or pointer.button != event.button:
            return ModeResult(status="ignored")

        if pointer.button != MouseButton.LEFT:
            pointer.reset()
            return ModeResult(status="ignored")

        result = ModeResult(status="stroke_end")
        paint = self._paint()
        if paint.tool == "fill":
            assert pointer.start is not None
            start = self.transform.cell_at(*pointer.start)
            task = self.start_fill(start, self._fill_find, paint.color)
            result = ModeResult(
                changed=task is not None,
                status="fill" if task is not None else "fill_noop",
            )

        self._fill_find = None
        pointer.reset()
        return result

    def start_fill(
        self,
        start: tuple[int, int],
        find: Optional[CellValue],
        replace: CellValue,
    ) -> Optional[FloodFillTask]:
        """Queue a fill; the first batch runs immediately, the rest on ``update``."""

        if find == replace or not self.grid.in_bounds(*start):
            return None
        task = FloodFillTask(
            self.grid,
            start,
            find,
            replace,
            min_batch=self.context.settings.fill_min_batch,
        )
        telemetry.record_event(
            "paint.fill_started",
            data={"start": start, "find": find, "replace": replace},
        )
        self.fills.append(task)
        task.step()
        self.context.bus.emit("paint.fill", task)
        return task

    def update(self) -> ModeResult:
        if not self.fills:
            return ModeResult(status="idle")

        filled = 0
        with telemetry.span(
            "paint::fill_tick", component="flood_fill", metadata={"tasks": len(self.fills)}
        ):
            for task in self.fills:
                filled += task.step()

        finished = [task for task in self.fills if task.done]
        self.fills = [task for task in self.fills if not task.done]
        for task in finished:
            self.context.bus.emit("paint.fill_done", task)
            telemetry.record_event(
                "paint.fill_finished",
                level="debug",
                data={"start": task.start, "filled": task.filled},
            )
        return ModeResult(changed=filled > 0, status="filling" if self.fills else "idle")

    def cancel_fills(self) -> int:
        count = len(self.fills)
        for task in self.fills:
            task.cancel()
        self.fills.clear()
        return count


__all__ = ["PaintMode"]
