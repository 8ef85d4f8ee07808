"""Input controller dispatching pointer, wheel and key events to the active mode."""

from __future__ import annotations

from typing import Callable, Dict, List, Optional, Type

from grid_engine.config.settings import EngineSettings
from grid_engine.config.store import ConfigStore, create_config_store
from grid_engine.grid.model import GridModel
from grid_engine.grid.transform import CoordinateTransform
from grid_engine.keymaps import KeymapRegistry, load_default_keymaps
from grid_engine.runtime import telemetry

from .base_mode import (
    KeyInput,
    Mode,
    ModeBus,
    ModeContext,
    ModeResult,
    Overlay,
    PointerInput,
    WheelInput,
)
from .nop_mode import NopMode
from .paint_mode import PaintMode
from .select_mode import SelectMode

# Configuration mode names mapped to registered mode names.
CONFIG_MODE_NAMES: Dict[str, str] = {
    "select": SelectMode.name,
    "paint": PaintMode.name,
    "none": NopMode.name,
}


class InputController:
    """Owns the registered modes, follows the configured tool, and routes input.

    Every public handler returns ``True`` when a persistable mutation
    happened; ``on_commit`` is invoked at the same moment so the host can
    throttle saves without polling the model.
    """

    def __init__(
        self,
        context: ModeContext,
        *,
        on_commit: Optional[Callable[[], None]] = None,
    ) -> None:
        self.context = context
        self.on_commit = on_commit
        self.logger = telemetry.get_logger("grid_engine.controller")
        self._modes: Dict[str, Mode] = {}
        self._active: Optional[str] = None
        self._panning = False

    @property
    def active_mode(self) -> Optional[Mode]:
        if self._active is None:
            return None
        return self._modes.get(self._active)

    @property
    def modes(self) -> List[Mode]:
        return list(self._modes.values())

    def get_mode(self, name: str) -> Mode:
        try:
            return self._modes[name]
        except KeyError as exc:
            raise KeyError(f"Unknown mode '{name}'") from exc

    def register_mode(
        self,
        mode_cls: Type[Mode],
        /,
        *mode_args: object,
        **mode_kwargs: object,
    ) -> Mode:
        mode = mode_cls(self.context, *mode_args, **mode_kwargs)
        if mode.name in self._modes:
            raise ValueError(f"Mode '{mode.name}' already registered")
        self._modes[mode.name] = mode
        if self._active is None:
            self._active = mode.name
            mode.on_enter(None)
        return mode

    def switch_mode(self, name: str) -> None:
        if name not in self._modes:
            raise KeyError(f"Unknown mode '{name}'")
        previous = self.active_mode
        if previous and previous.name == name:
            return
        if previous:
            previous.on_exit(name)
        self._active = name
        self._modes[name].on_enter(previous.name if previous else None)
        self.context.bus.emit("mode.switch", name)
        telemetry.record_event("mode.switch", data={"mode": name})

    def sync_mode(self) -> Mode:
        """Follow the tool currently chosen in the configuration store."""

        wanted = CONFIG_MODE_NAMES.get(self.context.config.current.mode, NopMode.name)
        if wanted in self._modes:
            self.switch_mode(wanted)
        mode = self.active_mode
        if mode is None:
            raise RuntimeError("No active mode registered")
        return mode

    # input surface

    def pointer_down(self, event: PointerInput) -> bool:
        if event.button == self.context.settings.pan_button:
            self._panning = True
            return False
        mode = self.sync_mode()
        x, y = self.context.transform.to_world(event.x, event.y)
        return self._dispatch(mode, "pointer_down", mode.handle_pointer_down, x, y, event)

    def pointer_move(self, event: PointerInput) -> bool:
        if self._panning:
            self.context.transform.pan(-event.dx, -event.dy)
            return False
        mode = self.sync_mode()
        x, y = self.context.transform.to_world(event.x, event.y)
        return self._dispatch(mode, "pointer_move", mode.handle_pointer_move, x, y, event)

    def pointer_up(self, event: PointerInput) -> bool:
        if event.button == self.context.settings.pan_button:
            self._panning = False
            return False
        mode = self.sync_mode()
        x, y = self.context.transform.to_world(event.x, event.y)
        return self._dispatch(mode, "pointer_up", mode.handle_pointer_up, x, y, event)

    def wheel(self, event: WheelInput) -> bool:
        if event.delta == 0:
            return False
        # Scrolling down (positive delta) zooms out.
        self.context.transform.zoom(-1 if event.delta > 0 else 1)
        return False

    def key(self, event: KeyInput) -> bool:
        mode = self.sync_mode()
        return self._dispatch(mode, "key", mode.handle_key, event)

    def tick(self) -> bool:
        """Advance background work (flood fills) in every mode, active or not."""

        changed = False
        for mode in self._modes.values():
            result = mode.update()
            changed = self._after_mode_result(mode, result) or changed
        return changed

    def cancel_fills(self) -> int:
        paint = self._modes.get(PaintMode.name)
        if isinstance(paint, PaintMode):
            return paint.cancel_fills()
        return 0

    def overlays(self) -> List[Overlay]:
        mode = self.active_mode
        return mode.overlays() if mode else []

    # internals

    def _dispatch(
        self,
        mode: Mode,
        kind: str,
        handler: Callable[..., ModeResult],
        *args: object,
    ) -> bool:
        with telemetry.span(
            name=f"mode::{mode.name}",
            component=True,
            metadata={"event": kind, "mode": mode.name},
        ):
            result = handler(*args)
        self.context.extras["last_result"] = result
        return self._after_mode_result(mode, result)

    def _after_mode_result(self, mode: Mode, result: ModeResult) -> bool:
        if not result.changed:
            return False
        telemetry.record_event(
            "grid.commit",
            level="debug",
            data={"mode": mode.name, "status": result.status},
        )
        if self.on_commit is not None:
            self.on_commit()
        return True


def create_default_controller(
    grid: GridModel,
    *,
    config: ConfigStore | None = None,
    settings: EngineSettings | None = None,
    keymaps: KeymapRegistry | None = None,
    bus: ModeBus | None = None,
    on_commit: Optional[Callable[[], None]] = None,
) -> InputController:
    """Build a controller with the select, paint and nop modes plus default keys."""

    settings = settings or EngineSettings()
    if keymaps is None:
        keymaps = KeymapRegistry(logger_name="grid_engine.keymaps")
        load_default_keymaps(keymaps)
    transform = CoordinateTransform(
        grid, min_scale=settings.min_scale, scale_step=settings.zoom_step
    )
    context = ModeContext(
        grid=grid,
        transform=transform,
        config=config or create_config_store(),
        keymaps=keymaps,
        bus=bus or ModeBus(),
        settings=settings,
    )
    controller = InputController(context, on_commit=on_commit)
    controller.register_mode(NopMode)
    controller.register_mode(SelectMode)
    controller.register_mode(PaintMode)
    controller.sync_mode()
    return controller


__all__ = ["InputController", "CONFIG_MODE_NAMES", "create_default_controller"]
