"""Editor session: wires model, controller and persistence together."""

from __future__ import annotations

import time
from typing import Optional

from grid_engine.config.settings import EngineSettings
from grid_engine.config.store import ConfigStore, create_config_store
from grid_engine.grid.camera import CellGeometry
from grid_engine.grid.model import GridModel
from grid_engine.grid.snapshot import SnapshotStore, apply_snapshot, take_snapshot
from grid_engine.grid.transform import CoordinateTransform
from grid_engine.modes.base_mode import KeyInput, ModeBus, PointerInput, WheelInput
from grid_engine.modes.controller import InputController, create_default_controller
from grid_engine.runtime import telemetry
from grid_engine.runtime.throttle import Clock, Throttle


class MissingCollaboratorError(RuntimeError):
    """Raised when a required collaborator was not supplied."""


class EditorSession:
    """Owns one editable grid and the services around it.

    The snapshot store is read once at construction and written through a
    leading + trailing throttle whenever a handler reports a mutation.
    Hosts forward input to the ``pointer_*``/``wheel``/``key`` methods and
    call :meth:`tick` from their frame timer.
    """

    def __init__(
        self,
        store: Optional[SnapshotStore],
        *,
        config_store: ConfigStore | None = None,
        settings: EngineSettings | None = None,
        bus: ModeBus | None = None,
        clock: Clock = time.monotonic,
    ) -> None:
        if store is None:
            raise MissingCollaboratorError("EditorSession requires a snapshot store")
        self.store = store
        self.settings = settings or EngineSettings()
        self.config = config_store or create_config_store()
        self.logger = telemetry.get_logger("grid_engine.session")

        self.grid = GridModel(
            self.settings.rows,
            self.settings.cols,
            geometry=CellGeometry(
                size=self.settings.cell_size, margin=self.settings.cell_margin
            ),
        )
        self.saves = 0
        self.restored = self._restore()
        self._throttle = Throttle(self.settings.save_interval_ms, self.save, clock=clock)
        self.controller: InputController = create_default_controller(
            self.grid,
            config=self.config,
            settings=self.settings,
            bus=bus,
            on_commit=self._throttle,
        )

    @property
    def transform(self) -> CoordinateTransform:
        return self.controller.context.transform

    @property
    def bus(self) -> ModeBus:
        return self.controller.context.bus

    @property
    def save_pending(self) -> bool:
        return self._throttle.pending

    def _restore(self) -> bool:
        with telemetry.span("session::restore", component="session") as handle:
            snapshot = self.store.restore()
            if snapshot is None:
                handle.add_metadata("status", "empty")
                return False
            apply_snapshot(self.grid, snapshot)
            handle.add_metadata("cells", len(snapshot.cells))
            return True

    def save(self) -> None:
        with telemetry.span("session::save", component="session"):
            self.store.save(take_snapshot(self.grid))
        self.saves += 1

    # input forwarding

    def pointer_down(self, event: PointerInput) -> bool:
        return self.controller.pointer_down(event)

    def pointer_move(self, event: PointerInput) -> bool:
        return self.controller.pointer_move(event)

    def pointer_up(self, event: PointerInput) -> bool:
        return self.controller.pointer_up(event)

    def wheel(self, event: WheelInput) -> bool:
        return self.controller.wheel(event)

    def key(self, event: KeyInput) -> bool:
        return self.controller.key(event)

    def tick(self) -> bool:
        """Step background fills and fire any due trailing save."""

        changed = self.controller.tick()
        self._throttle.poll()
        return changed

    def close(self) -> None:
        """Cancel running fills and flush a pending save."""

        self.controller.cancel_fills()
        if self._throttle.flush():
            self.logger.debug("session flushed pending save on close")


def open_session(
    store: Optional[SnapshotStore],
    *,
    settings: EngineSettings | None = None,
    config_store: ConfigStore | None = None,
) -> EditorSession:
    """Create a session and record what was restored."""

    session = EditorSession(store, settings=settings, config_store=config_store)
    telemetry.record_event(
        "session.open",
        data={
            "rows": session.grid.rows,
            "cols": session.grid.cols,
            "restored": session.restored,
        },
    )
    return session


__all__ = ["EditorSession", "MissingCollaboratorError", "open_session"]
