"""Textual adapter that wires an EditorSession into UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from rich.style import Style
from rich.text import Text

from grid_engine.config.store import (
    EDITOR_MODES,
    ConfigStore,
    PALETTE,
    SetMode,
    UpdatePaint,
)
from grid_engine.grid.model import Cell
from grid_engine.modes.base_mode import (
    KeyInput,
    ModeResult,
    MouseButton,
    Overlay,
    PointerInput,
    WheelInput,
)
from grid_engine.modes.select_mode import SelectMode
from grid_engine.session import EditorSession, MissingCollaboratorError

# Textual reports 1/2/3 for left/middle/right; 0 means no button held.
TEXTUAL_BUTTONS: Dict[int, int] = {
    1: MouseButton.LEFT,
    2: MouseButton.MIDDLE,
    3: MouseButton.RIGHT,
}

TOOL_KEYS: Dict[str, str] = {"b": "brush", "f": "fill", "g": "erase"}

EMPTY_STYLE = Style(color="grey30")
OUTSIDE_STYLE = Style()
MARQUEE_STYLE = Style(bgcolor="grey50")
PREVIEW_STYLE = Style(color="black", bgcolor="grey70")


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    render: Optional[Callable[[Text], None]]
    update_status: Callable[[str], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    # Optional realtime log callback a host may use to surface debug lines
    log: Callable[[str], None] = _noop


class TextualGridAdapter:
    """Bridges an EditorSession and its bus events to a Textual-friendly surface.

    Positions arrive in terminal cells. One terminal row is ``cell_size``
    screen pixels tall and one column is half that wide, so a grid cell at
    scale 1 occupies two characters on one line.
    """

    def __init__(
        self,
        session: EditorSession,
        hooks: TextualUIHooks,
        *,
        size: Tuple[int, int] = (80, 24),
    ) -> None:
        if hooks.render is None:
            raise MissingCollaboratorError("TextualGridAdapter requires a render hook")
        self.session = session
        self.hooks = hooks
        self.width, self.height = size
        self.char_height = float(session.settings.cell_size)
        self.char_width = self.char_height / 2
        self.last_status = ""
        self._subscribe_events()
        self.refresh()

    @property
    def config(self) -> ConfigStore:
        return self.session.config

    # input translation

    def to_screen(self, column: float, row: float) -> Tuple[float, float]:
        """Centre of the terminal cell at ``(column, row)`` in screen pixels."""

        return (
            (column + 0.5) * self.char_width,
            (row + 0.5) * self.char_height,
        )

    def _pointer(
        self,
        column: float,
        row: float,
        button: int,
        *,
        shift: bool = False,
        ctrl: bool = False,
        delta_x: float = 0,
        delta_y: float = 0,
    ) -> PointerInput:
        x, y = self.to_screen(column, row)
        return PointerInput(
            x=x,
            y=y,
            button=TEXTUAL_BUTTONS.get(button, -1),
            shift=shift,
            ctrl=ctrl,
            dx=delta_x * self.char_width,
            dy=delta_y * self.char_height,
        )

    def handle_mouse_down(
        self, column: float, row: float, *, button: int, shift: bool = False, ctrl: bool = False
    ) -> bool:
        event = self._pointer(column, row, button, shift=shift, ctrl=ctrl)
        self._log_state("mouse_down ->", at=(column, row), button=event.button)
        return self._after_event(self.session.pointer_down(event))

    def handle_mouse_move(
        self,
        column: float,
        row: float,
        *,
        button: int = 0,
        shift: bool = False,
        ctrl: bool = False,
        delta_x: float = 0,
        delta_y: float = 0,
    ) -> bool:
        event = self._pointer(
            column,
            row,
            button,
            shift=shift,
            ctrl=ctrl,
            delta_x=delta_x,
            delta_y=delta_y,
        )
        return self._after_event(self.session.pointer_move(event))

    def handle_mouse_up(
        self, column: float, row: float, *, button: int, shift: bool = False, ctrl: bool = False
    ) -> bool:
        event = self._pointer(column, row, button, shift=shift, ctrl=ctrl)
        self._log_state("mouse_up ->", at=(column, row), button=event.button)
        return self._after_event(self.session.pointer_up(event))

    def handle_scroll(self, delta: int) -> bool:
        return self._after_event(self.session.wheel(WheelInput(delta=delta)))

    def handle_textual_key(
        self,
        key: str,
        *,
        character: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> bool:
        """Apply a settings key or translate the key into a KeyInput."""

        mods = tuple(str(mod).lower() for mod in modifiers)
        self._log_state("key ->", key=key, character=character, mods=mods)
        if not mods and self.handle_settings_key(key):
            self.refresh()
            return False
        name = character if character and len(character) == 1 else key
        changed = self.session.key(KeyInput(key=name, modifiers=mods))
        return self._after_event(changed)

    def handle_settings_key(self, key: str) -> bool:
        """Tool, color and mode shortcuts owned by the front-end."""

        store = self.config
        if key == "tab":
            modes = list(EDITOR_MODES)
            current = store.current.mode
            store.dispatch(SetMode(modes[(modes.index(current) + 1) % len(modes)]))
            return True
        if key in TOOL_KEYS:
            store.dispatch(SetMode("paint"))
            store.dispatch(UpdatePaint(tool=TOOL_KEYS[key]))
            return True
        if key.isdigit() and 1 <= int(key) <= len(PALETTE):
            store.dispatch(UpdatePaint(color=int(key) - 1))
            return True
        return False

    def tick(self) -> bool:
        changed = self.session.tick()
        if changed:
            self.refresh()
        return changed

    def resize(self, width: int, height: int) -> None:
        self.width, self.height = max(1, width), max(1, height)
        self.refresh()

    # rendering

    def refresh(self) -> None:
        assert self.hooks.render is not None
        self.hooks.render(self.render_frame())
        self._update_status()

    def render_frame(self) -> Text:
        session = self.session
        transform = session.transform
        overlays = session.controller.overlays()
        preview = _preview_cells(overlays)
        marquees = [o.rect for o in overlays if o.kind == "marquee" and o.rect]

        frame = Text(no_wrap=True, overflow="crop")
        for row in range(self.height):
            for column in range(self.width):
                wx, wy = transform.to_world(*self.to_screen(column, row))
                i, j = transform.cell_at(wx, wy)
                glyph, style = self._cell_glyph(i, j, preview)
                if any(_in_rect(wx, wy, rect) for rect in marquees):
                    style = style + MARQUEE_STYLE
                frame.append(glyph, style)
            if row < self.height - 1:
                frame.append("\n")
        return frame

    def _cell_glyph(
        self, i: int, j: int, preview: frozenset[Cell]
    ) -> Tuple[str, Style]:
        grid = self.session.grid
        if (i, j) in preview:
            return "+", PREVIEW_STYLE
        if not grid.in_bounds(i, j):
            return " ", OUTSIDE_STYLE
        value = grid.get(i, j)
        if value is None:
            return "·", EMPTY_STYLE
        style = Style(bgcolor=PALETTE.get(value, "white"))
        if grid.is_selected(i, j):
            return "▪", style + Style(color="black", bold=True)
        return " ", style

    def status_text(self) -> str:
        config = self.config.current
        grid = self.session.grid
        mode = self.session.controller.active_mode
        parts = [
            f"mode={config.mode}",
            f"tool={config.paint.tool}",
            f"color={config.paint.color + 1}",
            f"zoom={grid.camera.scale:.2f}",
            f"selected={grid.selection_size}",
        ]
        if isinstance(mode, SelectMode):
            parts.append(f"state={mode.state.value}")
        result = self.session.controller.context.extras.get("last_result")
        if isinstance(result, ModeResult) and result.message:
            parts.append(result.message)
        return "  ".join(parts)

    # internals

    def _after_event(self, changed: bool) -> bool:
        self.refresh()
        return changed

    def _update_status(self) -> None:
        status = self.status_text()
        if status != self.last_status:
            self.last_status = status
            self.hooks.update_status(status)

    def _subscribe_events(self) -> None:
        bus = self.session.bus
        for event in (
            "mode.switch",
            "select.state",
            "select.area",
            "select.move",
            "select.move_aborted",
            "select.paste",
            "select.copy",
            "select.cut",
            "paint.fill",
            "paint.fill_done",
        ):
            bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name, payload=payload)
        self.hooks.handle_event(name, payload)

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        controller = self.session.controller
        active_mode = controller.active_mode
        grid = self.session.grid
        return {
            "mode": active_mode.name if active_mode else "?",
            "selected": grid.selection_size,
            "cells": grid.occupied_count,
            "fills": len(getattr(controller.get_mode("paint"), "fills", ())),
            "save_pending": self.session.save_pending,
        }


def _preview_cells(overlays: List[Overlay]) -> frozenset[Cell]:
    cells: set[Cell] = set()
    for overlay in overlays:
        if overlay.kind in ("drag", "paste"):
            cells.update(overlay.cells)
    return frozenset(cells)


def _in_rect(x: float, y: float, rect: Tuple[float, float, float, float]) -> bool:
    rx, ry, width, height = rect
    left, right = sorted((rx, rx + width))
    top, bottom = sorted((ry, ry + height))
    return left <= x <= right and top <= y <= bottom


__all__ = ["TextualGridAdapter", "TextualUIHooks", "TEXTUAL_BUTTONS"]
