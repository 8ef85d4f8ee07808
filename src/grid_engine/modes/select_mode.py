"""Select-and-move mode: selection gestures, drag-moves, and clipboard paste."""

from __future__ import annotations

from enum import Enum
from typing import List, Mapping, Optional

from grid_engine.grid.clipboard import CellBuffer
from grid_engine.grid.model import Cell
from grid_engine.grid.selection import (
    area_select,
    click_select,
    extend_rectangle,
    toggle_select,
)
from grid_engine.runtime import telemetry

from .base_mode import (
    Mode,
    ModeContext,
    ModeResult,
    MouseButton,
    Overlay,
    PointerInput,
    PointerState,
)


class SelectState(str, Enum):
    IDLE = "idle"
    AREA_SELECTING = "area_selecting"
    DRAGGING = "dragging"
    PASTING = "pasting"


class SelectMode(Mode):
    name = "select"

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self.pointer = PointerState()
        self.state = SelectState.IDLE
        self.copied = CellBuffer()
        self.dragged = CellBuffer()

    def on_exit(self, next_mode: str | None) -> None:
        del next_mode
        self.cancel()

    def key_flags(self) -> Mapping[str, bool]:
        return {
            "pasting": self.state is SelectState.PASTING,
            "dragging": self.state is SelectState.DRAGGING,
            "has_selection": self.grid.has_selection(),
            "has_clipboard": not self.copied.is_empty(),
        }

    # state transitions

    def _set_state(self, state: SelectState) -> None:
        if state is self.state:
            return
        self.state = state
        self.context.bus.emit("select.state", state.value)

    def cancel(self) -> None:
        """Drop any in-flight gesture and return to idle."""

        self.dragged.clear()
        self.pointer.reset()
        self._set_state(SelectState.IDLE)

    def begin_paste(self) -> bool:
        if self.copied.is_empty():
            return False
        self._set_state(SelectState.PASTING)
        return True

    def _paste_armed(self) -> bool:
        return (
            self.state is SelectState.PASTING
            and self.pointer.hover is not None
            and not self.copied.is_empty()
        )

    # pointer handlers

    def handle_pointer_down(
        self, x: float, y: float, event: PointerInput
    ) -> ModeResult:
        pointer = self.pointer
        pointer.button = event.button
        pointer.shift = event.shift
        pointer.ctrl = event.ctrl

        if self._paste_armed():
            # Committed on release.
            return ModeResult(status="paste_pending")

        pointer.press((x, y), event)
        if event.button != MouseButton.LEFT:
            return ModeResult(status="ignored")

        grid = self.grid
        i, j = self.transform.cell_at(x, y)
        if grid.get(i, j) is None:
            if not event.shift:
                grid.clear_selection()
            self._set_state(SelectState.AREA_SELECTING)
            return ModeResult(changed=True, status="area_select")

        if event.ctrl:
            toggle_select(grid, i, j)
            return ModeResult(changed=True, status="toggle")

        if event.shift:
            extend_rectangle(grid, i, j)
            return ModeResult(changed=True, status="rectangle")

        click_select(grid, i, j)
        return ModeResult(changed=True, status="select")

    def handle_pointer_move(
        self, x: float, y: float, event: PointerInput
    ) -> ModeResult:
        del event
        pointer = self.pointer
        pointer.hover = (x, y)
        if not pointer.active:
            return ModeResult(status="hover")
        pointer.current = (x, y)

        if (
            pointer.button == MouseButton.LEFT
            and self.state is SelectState.IDLE
            and self.grid.has_selection()
        ):
            self._maybe_start_drag()
        return ModeResult(status=self.state.value)

    def _maybe_start_drag(self) -> None:
        assert self.pointer.start is not None
        si, sj = self.transform.cell_at(*self.pointer.start)
        if self.grid.get(si, sj) is None or not self.grid.is_selected(si, sj):
            return
        self.dragged.copy_selection(self.grid, reference=(si, sj))
        self._set_state(SelectState.DRAGGING)

    def handle_pointer_up(
        self, x: float, y: float, event: PointerInput
    ) -> ModeResult:
        pointer = self.pointer

        if self._paste_armed():
            if event.button == MouseButton.LEFT:
                return self._commit_paste()
            return ModeResult(status="paste_pending")

        if not pointer.active or pointer.button != event.button:
            return ModeResult(status="ignored")

        if pointer.button != MouseButton.LEFT:
            pointer.reset()
            return ModeResult(status="ignored")

        if self.state is SelectState.AREA_SELECTING:
            assert pointer.start is not None
            size = area_select(self.grid, self.transform, pointer.start, (x, y))
            self.context.bus.emit("select.area", size)
            self.cancel()
            return ModeResult(changed=True, status="area_select")

        if self.state is SelectState.DRAGGING:
            return self._commit_move()

        pointer.reset()
        return ModeResult(status="click")

    # commits

    def _commit_paste(self) -> ModeResult:
        assert self.pointer.hover is not None
        i, j = self.transform.cell_at(*self.pointer.hover)
        with telemetry.span(
            "select::paste",
            component="select",
            metadata={"anchor": (i, j), "cells": len(self.copied)},
        ):
            written = self.copied.paste(self.grid, i, j)
        self.context.bus.emit("select.paste", written)
        self.pointer.reset()
        self._set_state(SelectState.IDLE)
        return ModeResult(changed=True, status="paste", message=f"pasted {written}")

    def _drop_targets(self) -> List[Cell]:
        assert self.pointer.current is not None
        ei, ej = self.transform.cell_at(*self.pointer.current)
        return [cell for cell, _ in self.dragged.targets(ei, ej)]

    def _move_blocked(self, targets: List[Cell]) -> Optional[str]:
        grid = self.grid
        if any(not grid.in_bounds(i, j) for i, j in targets):
            return "out_of_bounds"
        if self.context.config.current.select.disallow_occupied_move:
            moving = set(grid.iter_selected())
            for i, j in targets:
                if (i, j) not in moving and grid.get(i, j) is not None:
                    return "occupied"
        return None

    def _commit_move(self) -> ModeResult:
        grid = self.grid
        targets = self._drop_targets()
        reason = self._move_blocked(targets)
        if reason is not None:
            telemetry.record_event(
                "select.move_aborted",
                data={"reason": reason, "cells": len(targets)},
            )
            self.context.bus.emit("select.move_aborted", reason)
            self.cancel()
            return ModeResult(status="move_aborted", message=reason)

        with telemetry.span(
            "select::move",
            component="select",
            metadata={"cells": len(targets)},
        ):
            for i, j in grid.iter_selected():
                grid.set(i, j, None)
            grid.clear_selection()
            for (ti, tj), entry in zip(targets, self.dragged.entries):
                grid.set(ti, tj, entry.value)
                grid.select(ti, tj)

        self.context.bus.emit("select.move", len(targets))
        self.cancel()
        return ModeResult(changed=True, status="move")

    # keyboard verbs, bound through the keymap registry

    def delete_selection(self) -> int:
        count = 0
        for i, j in self.grid.iter_selected():
            if self.grid.get(i, j) is not None:
                count += 1
            self.grid.set(i, j, None)
        self.grid.clear_selection()
        return count

    def copy_selection(self) -> int:
        count = self.copied.copy_selection(self.grid)
        self.grid.clear_selection()
        self.context.bus.emit("select.copy", count)
        return count

    def cut_selection(self) -> int:
        count = self.copied.cut_selection(self.grid)
        self.context.bus.emit("select.cut", count)
        return count

    def rotate_clipboard(self) -> bool:
        if self.state is not SelectState.PASTING:
            return False
        self.copied.rotate()
        return True

    def rotate_drag(self) -> bool:
        if self.state is not SelectState.DRAGGING:
            return False
        self.dragged.rotate()
        return True

    # rendering hints

    def overlays(self) -> List[Overlay]:
        pointer = self.pointer
        if self._paste_armed():
            assert pointer.hover is not None
            i, j = self.transform.cell_at(*pointer.hover)
            cells = tuple(cell for cell, _ in self.copied.targets(i, j))
            return [Overlay(kind="paste", cells=cells)]

        if not pointer.active or pointer.button != MouseButton.LEFT:
            return []

        if self.state is SelectState.DRAGGING and not self.dragged.is_empty():
            return [Overlay(kind="drag", cells=tuple(self._drop_targets()))]

        if self.state is SelectState.AREA_SELECTING:
            assert pointer.start is not None and pointer.current is not None
            sx, sy = pointer.start
            x, y = pointer.current
            return [Overlay(kind="marquee", rect=(sx, sy, x - sx, y - sy))]
        return []


__all__ = ["SelectMode", "SelectState"]
