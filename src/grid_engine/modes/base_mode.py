"""Base classes and shared input types for editor modes."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import TYPE_CHECKING, Callable, Dict, List, Mapping, Optional, Tuple

from grid_engine.config.settings import EngineSettings
from grid_engine.config.store import ConfigStore
from grid_engine.grid.camera import Point
from grid_engine.grid.model import Cell, GridModel
from grid_engine.grid.transform import CoordinateTransform, Rect
from grid_engine.runtime import telemetry

if TYPE_CHECKING:  # pragma: no cover - typing only
    from grid_engine.keymaps.registry import KeymapRegistry, ResolutionMatch


class MouseButton(IntEnum):
    LEFT = 0
    MIDDLE = 1
    RIGHT = 2


@dataclass(slots=True)
class PointerInput:
    """Pointer event in screen coordinates; ``dx``/``dy`` are screen deltas."""

    x: float
    y: float
    button: int = MouseButton.LEFT
    shift: bool = False
    ctrl: bool = False
    dx: float = 0.0
    dy: float = 0.0


@dataclass(slots=True)
class WheelInput:
    delta: float


@dataclass(slots=True)
class KeyInput:
    """Normalized key event passed to modes."""

    key: str
    modifiers: Tuple[str, ...] = ()

    @property
    def ctrl(self) -> bool:
        return any(mod.lower() == "ctrl" for mod in self.modifiers)

    @property
    def shift(self) -> bool:
        return any(mod.lower() == "shift" for mod in self.modifiers)


@dataclass(slots=True)
class ModeResult:
    """Result returned from every mode handler.

    ``changed`` is true when the handler performed a mutation worth
    persisting.
    """

    changed: bool = False
    status: str = "ok"
    message: Optional[str] = None


@dataclass(slots=True)
class PointerState:
    """Transient pointer bookkeeping, positions in world coordinates."""

    start: Optional[Point] = None
    current: Optional[Point] = None
    hover: Optional[Point] = None
    button: int = -1
    shift: bool = False
    ctrl: bool = False

    @property
    def active(self) -> bool:
        return self.start is not None and self.current is not None

    def press(self, at: Point, event: PointerInput) -> None:
        self.start = at
        self.current = at
        self.button = event.button
        self.shift = event.shift
        self.ctrl = event.ctrl

    def reset(self) -> None:
        self.start = None
        self.current = None
        self.hover = None
        self.button = -1
        self.shift = False
        self.ctrl = False


@dataclass(frozen=True, slots=True)
class Overlay:
    """Transient drawing hint a renderer layers over the grid.

    ``kind`` is ``"marquee"`` (world ``rect``), ``"drag"`` or ``"paste"``
    (preview ``cells``).
    """

    kind: str
    cells: Tuple[Cell, ...] = ()
    rect: Optional[Rect] = None


class ModeBus:
    """Minimal event bus letting modes exchange structured signals."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, List[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


@dataclass(slots=True)
class ModeContext:
    """Shared services every mode can access."""

    grid: GridModel
    transform: CoordinateTransform
    config: ConfigStore
    keymaps: "KeymapRegistry"
    bus: ModeBus = field(default_factory=ModeBus)
    settings: EngineSettings = field(default_factory=EngineSettings)
    extras: Dict[str, object] = field(default_factory=dict)


def key_to_token(key: KeyInput) -> str:
    name = key.key.lower()
    modifiers = tuple(
        sorted({mod.strip().lower() for mod in key.modifiers if mod.strip()})
    )
    if len(name) == 1:
        # Printable keys already encode shift in the character itself.
        modifiers = tuple(mod for mod in modifiers if mod != "shift")
    if modifiers:
        return f"{'+'.join(modifiers)}+{name}"
    return name


class Mode:
    """Base class all concrete editor modes inherit from."""

    name: str = "mode"

    def __init__(self, context: ModeContext) -> None:
        self.context = context
        self.logger = telemetry.get_logger(f"grid_engine.modes.{self.name}")

    @property
    def grid(self) -> GridModel:
        return self.context.grid

    @property
    def transform(self) -> CoordinateTransform:
        return self.context.transform

    def on_enter(
        self, previous: Optional[str]
    ) -> None:  # pragma: no cover - default no-op
        del previous

    def on_exit(
        self, next_mode: Optional[str]
    ) -> None:  # pragma: no cover - default no-op
        del next_mode

    def handle_pointer_down(
        self, x: float, y: float, event: PointerInput
    ) -> ModeResult:  # pragma: no cover - abstract override
        raise NotImplementedError

    def handle_pointer_move(
        self, x: float, y: float, event: PointerInput
    ) -> ModeResult:  # pragma: no cover - abstract override
        raise NotImplementedError

    def handle_pointer_up(
        self, x: float, y: float, event: PointerInput
    ) -> ModeResult:  # pragma: no cover - abstract override
        raise NotImplementedError

    def handle_key(self, key: KeyInput) -> ModeResult:
        token = key_to_token(key)
        match = self.context.keymaps.resolve(self.name, token, context=self.key_flags())
        if match is None:
            return ModeResult(status="miss", message=token)
        return self._execute_match(match, key)

    def key_flags(self) -> Mapping[str, bool]:
        return {}

    def update(self) -> ModeResult:
        """Advance background work once per host tick."""

        return ModeResult(status="idle")

    def overlays(self) -> List[Overlay]:
        return []

    def _execute_match(self, match: "ResolutionMatch", key: KeyInput) -> ModeResult:
        with telemetry.span(
            "keymaps::execute",
            component="keymaps",
            metadata={"binding_id": match.binding.id, "action": match.action.id},
        ):
            outcome = match.action(self, key)

        if isinstance(outcome, ModeResult):
            return outcome
        return ModeResult()


__all__ = [
    "KeyInput",
    "Mode",
    "ModeBus",
    "ModeContext",
    "ModeResult",
    "MouseButton",
    "Overlay",
    "PointerInput",
    "PointerState",
    "WheelInput",
    "key_to_token",
]
