import pytest

from grid_engine.config import (
    EditorConfig,
    EngineSettings,
    PaintConfig,
    SetMode,
    UpdatePaint,
    UpdateSelect,
    create_config_store,
    load_settings,
)


def test_default_config() -> None:
    store = create_config_store()

    assert store.current == EditorConfig(mode="paint", paint=PaintConfig("brush", 0))
    assert store.current.select.disallow_occupied_move is False


def test_dispatch_updates_and_notifies() -> None:
    store = create_config_store()
    seen: list[str] = []
    store.subscribe(lambda config: seen.append(config.mode))

    store.dispatch(SetMode("select"))
    store.dispatch(UpdateSelect(disallow_occupied_move=True))

    assert seen == ["select", "select"]
    assert store.current.select.disallow_occupied_move is True


def test_update_paint_only_changes_given_fields() -> None:
    store = create_config_store()

    store.dispatch(UpdatePaint(color=4))
    store.dispatch(UpdatePaint(tool="fill"))

    assert store.current.paint == PaintConfig(tool="fill", color=4)


def test_unknown_values_are_rejected() -> None:
    store = create_config_store()

    with pytest.raises(ValueError):
        store.dispatch(SetMode("lasso"))  # type: ignore[arg-type]
    with pytest.raises(ValueError):
        store.dispatch(UpdatePaint(tool="spray"))  # type: ignore[arg-type]
    with pytest.raises(TypeError):
        store.dispatch("paint")  # type: ignore[arg-type]
    assert store.current.mode == "paint"


def test_unsubscribe_and_replace() -> None:
    store = create_config_store()
    seen: list[EditorConfig] = []
    listener = seen.append
    store.subscribe(listener)

    store.replace(EditorConfig(mode="none"))
    store.unsubscribe(listener)
    store.dispatch(SetMode("select"))

    assert [config.mode for config in seen] == ["none"]


def test_stores_get_distinct_ids() -> None:
    assert create_config_store().id != create_config_store().id


def test_load_settings_reads_prefixed_environment() -> None:
    settings = load_settings(
        {
            "GRID_ENGINE_ROWS": "40",
            "GRID_ENGINE_COLS": "30",
            "GRID_ENGINE_ZOOM_STEP": "0.05",
            "GRID_ENGINE_STORE_PATH": "/tmp/grid.json",
            "UNRELATED": "1",
        }
    )

    assert settings.rows == 40
    assert settings.cols == 30
    assert settings.zoom_step == 0.05
    assert settings.store_path == "/tmp/grid.json"
    assert settings.save_interval_ms == 1000


def test_load_settings_ignores_unparseable_values() -> None:
    settings = load_settings({"GRID_ENGINE_ROWS": "many", "GRID_ENGINE_PAN_STEP": ""})

    assert settings.rows == EngineSettings().rows
    assert settings.pan_step == EngineSettings().pan_step
