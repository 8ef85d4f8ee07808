"""Selection and clipboard verbs for the select mode."""

from __future__ import annotations

from typing import TYPE_CHECKING

from grid_engine.modes.base_mode import KeyInput, ModeResult

if TYPE_CHECKING:  # pragma: no cover - typing only
    from grid_engine.modes.select_mode import SelectMode


def cancel(mode: "SelectMode", key: KeyInput) -> ModeResult:
    del key
    mode.cancel()
    return ModeResult(status="idle", message="cancel")


def delete_selection(mode: "SelectMode", key: KeyInput) -> ModeResult:
    del key
    count = mode.delete_selection()
    return ModeResult(changed=count > 0, status="delete", message=f"deleted {count}")


def cut_selection(mode: "SelectMode", key: KeyInput) -> ModeResult:
    del key
    count = mode.cut_selection()
    return ModeResult(changed=count > 0, status="cut", message=f"cut {count}")


def copy_selection(mode: "SelectMode", key: KeyInput) -> ModeResult:
    del key
    count = mode.copy_selection()
    return ModeResult(status="copy", message=f"copied {count}")


def begin_paste(mode: "SelectMode", key: KeyInput) -> ModeResult:
    del key
    if not mode.begin_paste():
        return ModeResult(status="noop", message="clipboard empty")
    return ModeResult(status="pasting", message="paste")


def rotate_clipboard(mode: "SelectMode", key: KeyInput) -> ModeResult:
    del key
    mode.rotate_clipboard()
    return ModeResult(status="pasting", message="rotate")


def rotate_drag(mode: "SelectMode", key: KeyInput) -> ModeResult:
    del key
    mode.rotate_drag()
    return ModeResult(status="dragging", message="rotate")


__all__ = [
    "cancel",
    "delete_selection",
    "cut_selection",
    "copy_selection",
    "begin_paste",
    "rotate_clipboard",
    "rotate_drag",
]
