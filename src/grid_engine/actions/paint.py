"""Paint-mode verbs."""

from __future__ import annotations

from typing import TYPE_CHECKING

from grid_engine.modes.base_mode import KeyInput, ModeResult

if TYPE_CHECKING:  # pragma: no cover - typing only
    from grid_engine.modes.paint_mode import PaintMode


def cancel_fills(mode: "PaintMode", key: KeyInput) -> ModeResult:
    del key
    count = mode.cancel_fills()
    return ModeResult(status="idle", message=f"cancelled {count} fill(s)")


__all__ = ["cancel_fills"]
