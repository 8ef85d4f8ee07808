"""Camera verbs shared by every interactive mode."""

from __future__ import annotations

from grid_engine.modes.base_mode import KeyInput, Mode, ModeResult


def zoom_in(mode: Mode, key: KeyInput) -> ModeResult:
    del key
    mode.transform.zoom_in()
    return ModeResult(status="camera", message="zoom_in")


def zoom_out(mode: Mode, key: KeyInput) -> ModeResult:
    del key
    mode.transform.zoom_out()
    return ModeResult(status="camera", message="zoom_out")


def _pan(mode: Mode, dx: float, dy: float, label: str) -> ModeResult:
    step = mode.context.settings.pan_step
    mode.transform.pan(dx * step, dy * step)
    return ModeResult(status="camera", message=label)


def pan_up(mode: Mode, key: KeyInput) -> ModeResult:
    del key
    return _pan(mode, 0, -1, "pan_up")


def pan_down(mode: Mode, key: KeyInput) -> ModeResult:
    del key
    return _pan(mode, 0, 1, "pan_down")


def pan_left(mode: Mode, key: KeyInput) -> ModeResult:
    del key
    return _pan(mode, -1, 0, "pan_left")


def pan_right(mode: Mode, key: KeyInput) -> ModeResult:
    del key
    return _pan(mode, 1, 0, "pan_right")


__all__ = [
    "zoom_in",
    "zoom_out",
    "pan_up",
    "pan_down",
    "pan_left",
    "pan_right",
]
