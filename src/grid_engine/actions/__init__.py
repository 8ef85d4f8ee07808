"""Editing verbs bound to keys through the keymap registry."""

from .paint import cancel_fills
from .selection import (
    begin_paste,
    cancel,
    copy_selection,
    cut_selection,
    delete_selection,
    rotate_clipboard,
    rotate_drag,
)
from .view import pan_down, pan_left, pan_right, pan_up, zoom_in, zoom_out

__all__ = [
    "begin_paste",
    "cancel",
    "cancel_fills",
    "copy_selection",
    "cut_selection",
    "delete_selection",
    "pan_down",
    "pan_left",
    "pan_right",
    "pan_up",
    "rotate_clipboard",
    "rotate_drag",
    "zoom_in",
    "zoom_out",
]
