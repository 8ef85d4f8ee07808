"""Mode used when no tool is selected: every event is ignored."""

from __future__ import annotations

from .base_mode import KeyInput, Mode, ModeResult, PointerInput


class NopMode(Mode):
    name = "nop"

    def handle_pointer_down(
        self, x: float, y: float, event: PointerInput
    ) -> ModeResult:
        del x, y, event
        return ModeResult(status="ignored")

    def handle_pointer_move(
        self, x: float, y: float, event: PointerInput
    ) -> ModeResult:
        del x, y, event
        return ModeResult(status="ignored")

    def handle_pointer_up(
        self, x: float, y: float, event: PointerInput
    ) -> ModeResult:
        del x, y, event
        return ModeResult(status="ignored")

    def handle_key(self, key: KeyInput) -> ModeResult:
        del key
        return ModeResult(status="ignored")


__all__ = ["NopMode"]
