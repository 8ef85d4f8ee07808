"""Reducer-driven publish/subscribe store holding the editor configuration."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Callable, Generic, List, Literal, TypeVar, Union

from grid_engine.runtime import telemetry

DataT = TypeVar("DataT")
ActionT = TypeVar("ActionT")

Listener = Callable[[DataT], None]
Reducer = Callable[[DataT, ActionT], DataT]

EditorMode = Literal["select", "paint", "none"]
PaintTool = Literal["brush", "fill", "erase"]

EDITOR_MODES: tuple[str, ...] = ("select", "paint", "none")
PAINT_TOOLS: tuple[str, ...] = ("brush", "fill", "erase")

# Color ids understood by the bundled renderers.
PALETTE: dict[int, str] = {
    0: "#2ecc71",
    1: "#e74c3c",
    2: "#3498db",
    3: "#f1c40f",
    4: "#9b59b6",
    5: "#e67e22",
    6: "#ecf0f1",
}


class Store(Generic[DataT, ActionT]):
    """Holds ``current`` and notifies listeners after every change."""

    _ids = 0

    def __init__(self, *, initial: DataT, reducer: Reducer) -> None:
        self.current = initial
        self.reducer = reducer
        self._listeners: List[Listener] = []
        Store._ids += 1
        self.id = Store._ids

    def dispatch(self, action: ActionT) -> DataT:
        self.current = self.reducer(self.current, action)
        self._notify()
        return self.current

    def replace(self, data: DataT) -> None:
        self.current = data
        self._notify()

    def subscribe(self, listener: Listener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self.current)


@dataclass(frozen=True, slots=True)
class SelectConfig:
    disallow_occupied_move: bool = False


@dataclass(frozen=True, slots=True)
class PaintConfig:
    tool: PaintTool = "brush"
    color: int = 0


@dataclass(frozen=True, slots=True)
class EditorConfig:
    mode: EditorMode = "paint"
    select: SelectConfig = field(default_factory=SelectConfig)
    paint: PaintConfig = field(default_factory=PaintConfig)


@dataclass(frozen=True, slots=True)
class SetMode:
    mode: EditorMode


@dataclass(frozen=True, slots=True)
class UpdateSelect:
    disallow_occupied_move: bool


@dataclass(frozen=True, slots=True)
class UpdatePaint:
    tool: PaintTool | None = None
    color: int | None = None


ConfigAction = Union[SetMode, UpdateSelect, UpdatePaint]
ConfigStore = Store[EditorConfig, ConfigAction]


def reduce_config(state: EditorConfig, action: ConfigAction) -> EditorConfig:
    if isinstance(action, SetMode):
        if action.mode not in EDITOR_MODES:
            raise ValueError(f"Unknown editor mode '{action.mode}'")
        return replace(state, mode=action.mode)
    if isinstance(action, UpdateSelect):
        return replace(
            state,
            select=replace(
                state.select, disallow_occupied_move=action.disallow_occupied_move
            ),
        )
    if isinstance(action, UpdatePaint):
        paint = state.paint
        if action.tool is not None:
            if action.tool not in PAINT_TOOLS:
                raise ValueError(f"Unknown paint tool '{action.tool}'")
            paint = replace(paint, tool=action.tool)
        if action.color is not None:
            paint = replace(paint, color=action.color)
        return replace(state, paint=paint)
    raise TypeError(f"Unsupported config action {action!r}")


def create_config_store(initial: EditorConfig | None = None) -> ConfigStore:
    store: ConfigStore = Store(initial=initial or EditorConfig(), reducer=reduce_config)
    store.subscribe(
        lambda config: telemetry.record_event(
            "config.changed",
            level="debug",
            data={"mode": config.mode, "tool": config.paint.tool},
        )
    )
    return store


__all__ = [
    "ConfigAction",
    "ConfigStore",
    "EDITOR_MODES",
    "EditorConfig",
    "EditorMode",
    "PAINT_TOOLS",
    "PALETTE",
    "PaintConfig",
    "PaintTool",
    "SelectConfig",
    "SetMode",
    "Store",
    "UpdatePaint",
    "UpdateSelect",
    "create_config_store",
    "reduce_config",
]
