from __future__ import annotations

from typing import List, Tuple

import pytest
from rich.text import Text

from grid_engine.adapters.textual.controller import TextualGridAdapter, TextualUIHooks
from grid_engine.config import EngineSettings, SetMode, create_config_store
from grid_engine.grid import MemoryStore
from grid_engine.session import EditorSession, MissingCollaboratorError


def make_session(mode: str = "paint") -> EditorSession:
    config = create_config_store()
    config.dispatch(SetMode(mode))  # type: ignore[arg-type]
    return EditorSession(
        MemoryStore(),
        config_store=config,
        settings=EngineSettings(rows=10, cols=10),
    )


def make_adapter(
    session: EditorSession | None = None, *, size: Tuple[int, int] = (24, 3)
) -> Tuple[TextualGridAdapter, List[Text], List[str], List[Tuple[str, object]], List[str]]:
    frames: List[Text] = []
    statuses: List[str] = []
    events: List[Tuple[str, object]] = []
    logs: List[str] = []
    hooks = TextualUIHooks(
        render=frames.append,
        update_status=statuses.append,
        handle_event=lambda name, payload: events.append((name, payload)),
        log=logs.append,
    )
    adapter = TextualGridAdapter(session or make_session(), hooks, size=size)
    return adapter, frames, statuses, events, logs


def test_render_hook_is_required() -> None:
    with pytest.raises(MissingCollaboratorError):
        TextualGridAdapter(make_session(), TextualUIHooks(render=None))


def test_initial_frame_and_status() -> None:
    _adapter, frames, statuses, _events, _logs = make_adapter()

    assert len(frames) == 1
    rows = frames[0].plain.split("\n")
    # 24 terminal columns cover 12 grid cells; only 10 exist.
    assert rows == ["·" * 20 + " " * 4] * 3
    assert statuses and "mode=paint" in statuses[-1]


def test_mouse_paints_cell_under_pointer() -> None:
    adapter, frames, _statuses, _events, _logs = make_adapter()

    changed = adapter.handle_mouse_down(2, 1, button=1)
    adapter.handle_mouse_up(2, 1, button=1)

    assert changed is True
    assert dict(adapter.session.grid.iter_occupied()) == {(1, 1): 0}
    row = frames[-1].plain.split("\n")[1]
    assert row[2:4] == "  "


def test_middle_drag_pans_camera() -> None:
    adapter, _frames, _statuses, _events, _logs = make_adapter()

    adapter.handle_mouse_down(5, 1, button=2)
    adapter.handle_mouse_move(7, 1, button=2, delta_x=2, delta_y=0)
    adapter.handle_mouse_up(7, 1, button=2)

    assert adapter.session.grid.camera.origin == (-10, 0)
    assert adapter.session.grid.occupied_count == 0


def test_scroll_zooms_and_updates_status() -> None:
    adapter, _frames, statuses, _events, _logs = make_adapter()

    adapter.handle_scroll(1)

    assert adapter.session.grid.camera.scale == pytest.approx(0.99)
    assert "zoom=0.99" in statuses[-1]


def test_settings_keys_update_config() -> None:
    adapter, _frames, _statuses, _events, _logs = make_adapter()
    config = adapter.session.config

    assert adapter.handle_textual_key("f", character="f") is False
    assert config.current.paint.tool == "fill"

    adapter.handle_textual_key("3", character="3")
    assert config.current.paint.color == 2

    adapter.handle_textual_key("tab")
    assert config.current.mode == "none"
    adapter.handle_textual_key("tab")
    assert config.current.mode == "select"

    adapter.handle_textual_key("g", character="g")
    assert config.current.mode == "paint"
    assert config.current.paint.tool == "erase"


def test_engine_keys_pass_through_with_modifiers() -> None:
    session = make_session("select")
    session.grid.set(0, 0, 4)
    session.grid.select(0, 0)
    adapter, _frames, _statuses, events, logs = make_adapter(session)

    adapter.handle_textual_key("c", character="c", modifiers=("ctrl",))

    assert ("select.copy", 1) in events
    assert not session.grid.has_selection()
    assert any(line.startswith("key ->") for line in logs)


def test_tick_refreshes_while_filling() -> None:
    session = make_session()
    adapter, frames, _statuses, _events, _logs = make_adapter(session)
    paint = session.controller.get_mode("paint")
    paint.start_fill((0, 0), None, 1)  # type: ignore[attr-defined]
    before = len(frames)

    while paint.fills:  # type: ignore[attr-defined]
        adapter.tick()

    assert len(frames) > before
    assert session.grid.occupied_count == 100


def test_paste_preview_is_drawn() -> None:
    session = make_session("select")
    session.grid.set(0, 0, 4)
    session.grid.select(0, 0)
    adapter, frames, _statuses, _events, _logs = make_adapter(session)
    adapter.handle_textual_key("c", character="c", modifiers=("ctrl",))
    adapter.handle_textual_key("v", character="v")

    adapter.handle_mouse_move(4, 2)

    row = frames[-1].plain.split("\n")[2]
    assert row[4:6] == "++"


def test_resize_changes_frame_size() -> None:
    adapter, frames, _statuses, _events, _logs = make_adapter()

    adapter.resize(6, 2)

    assert frames[-1].plain.split("\n") == ["······"] * 2
