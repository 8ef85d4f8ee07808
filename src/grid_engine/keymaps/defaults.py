"""Built-in keymaps that seed each mode with the editor's shortcuts."""

from __future__ import annotations

from typing import Iterable, Mapping, Sequence

from grid_engine.actions import paint as paint_actions
from grid_engine.actions import selection as selection_actions
from grid_engine.actions import view as view_actions

from .models import GLOBAL_MODE, ActionRef, Binding, KeyStroke, WhenClause
from .registry import KeymapRegistry

DEFAULT_ACTIONS: tuple[ActionRef, ...] = (
    ActionRef(id="view.zoom_in", handler=view_actions.zoom_in, description="Zoom in"),
    ActionRef(id="view.zoom_out", handler=view_actions.zoom_out, description="Zoom out"),
    ActionRef(id="view.pan_up", handler=view_actions.pan_up, description="Pan up"),
    ActionRef(id="view.pan_down", handler=view_actions.pan_down, description="Pan down"),
    ActionRef(id="view.pan_left", handler=view_actions.pan_left, description="Pan left"),
    ActionRef(
        id="view.pan_right", handler=view_actions.pan_right, description="Pan right"
    ),
    ActionRef(
        id="select.cancel",
        handler=selection_actions.cancel,
        description="Cancel the current drag or paste",
    ),
    ActionRef(
        id="select.delete",
        handler=selection_actions.delete_selection,
        description="Clear the selected cells",
    ),
    ActionRef(
        id="select.cut",
        handler=selection_actions.cut_selection,
        description="Cut the selected cells",
    ),
    ActionRef(
        id="select.copy",
        handler=selection_actions.copy_selection,
        description="Copy the selected cells",
    ),
    ActionRef(
        id="select.paste",
        handler=selection_actions.begin_paste,
        description="Start pasting the copied cells",
    ),
    ActionRef(
        id="select.rotate_clipboard",
        handler=selection_actions.rotate_clipboard,
        description="Rotate the paste preview",
    ),
    ActionRef(
        id="select.rotate_drag",
        handler=selection_actions.rotate_drag,
        description="Rotate the dragged cells",
    ),
    ActionRef(
        id="paint.cancel_fills",
        handler=paint_actions.cancel_fills,
        description="Stop running flood fills",
    ),
)


def _bind(
    binding_id: str,
    mode: str,
    stroke: str,
    action_id: str,
    description: str,
    *,
    when: tuple[str, ...] = (),
) -> Binding:
    return Binding(
        id=binding_id,
        mode=mode,
        stroke=KeyStroke.parse(stroke),
        action_id=action_id,
        description=description,
        when=tuple(WhenClause.parse(clause) for clause in when),
    )


DEFAULT_BINDINGS: tuple[Binding, ...] = (
    _bind("view.zoom_out", GLOBAL_MODE, "q", "view.zoom_out", "Zoom out"),
    _bind("view.zoom_in", GLOBAL_MODE, "e", "view.zoom_in", "Zoom in"),
    _bind("view.pan_up", GLOBAL_MODE, "w", "view.pan_up", "Pan up"),
    _bind("view.pan_down", GLOBAL_MODE, "s", "view.pan_down", "Pan down"),
    _bind("view.pan_left", GLOBAL_MODE, "a", "view.pan_left", "Pan left"),
    _bind("view.pan_right", GLOBAL_MODE, "d", "view.pan_right", "Pan right"),
    _bind("select.escape", "select", "escape", "select.cancel", "Cancel"),
    _bind("select.delete", "select", "delete", "select.delete", "Delete selection"),
    _bind(
        "select.backspace", "select", "backspace", "select.delete", "Delete selection"
    ),
    _bind("select.cut", "select", "x", "select.cut", "Cut selection"),
    _bind("select.cut_ctrl", "select", "ctrl+x", "select.cut", "Cut selection"),
    _bind("select.copy", "select", "ctrl+c", "select.copy", "Copy selection"),
    _bind("select.paste", "select", "v", "select.paste", "Paste"),
    _bind("select.paste_ctrl", "select", "ctrl+v", "select.paste", "Paste"),
    _bind(
        "select.rotate_paste",
        "select",
        "r",
        "select.rotate_clipboard",
        "Rotate paste preview",
        when=("pasting",),
    ),
    _bind(
        "select.rotate_drag",
        "select",
        "r",
        "select.rotate_drag",
        "Rotate dragged cells",
        when=("dragging",),
    ),
    _bind("paint.escape", "paint", "escape", "paint.cancel_fills", "Stop fills"),
)


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    replace: bool = False,
    extra_bindings: Iterable[Binding] | None = None,
    include_bindings: Sequence[str] | None = None,
    exclude_bindings: Sequence[str] | None = None,
    per_mode_overrides: Mapping[str, Iterable[Binding]] | None = None,
) -> None:
    """Seed ``registry`` with the camera, clipboard and fill shortcuts.

    ``include_bindings``/``exclude_bindings`` filter the built-in bindings by
    id; ``per_mode_overrides`` always replace whatever they collide with.
    """

    wanted = set(include_bindings) if include_bindings else None
    skipped = set(exclude_bindings or ())

    for action in DEFAULT_ACTIONS:
        registry.register_action(action, replace=replace)

    builtin = [
        binding
        for binding in DEFAULT_BINDINGS
        if (wanted is None or binding.id in wanted) and binding.id not in skipped
    ]
    for binding in (*builtin, *(extra_bindings or ())):
        registry.register_binding(binding, replace=replace)

    for mode, bindings in (per_mode_overrides or {}).items():
        for binding in bindings:
            if binding.mode != mode:
                raise ValueError(
                    f"Override binding '{binding.id}' is for mode '{binding.mode}', not '{mode}'"
                )
            registry.register_binding(binding, replace=True)


__all__ = ["DEFAULT_ACTIONS", "DEFAULT_BINDINGS", "load_default_keymaps"]
