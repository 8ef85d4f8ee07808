import json
from pathlib import Path

import pytest

from grid_engine.grid import (
    Camera,
    GridModel,
    JsonFileStore,
    MemoryStore,
    Snapshot,
    SnapshotFormatError,
    apply_snapshot,
    decode_snapshot,
    encode_snapshot,
    take_snapshot,
)


def make_grid() -> GridModel:
    grid = GridModel(10, 10, camera=Camera(origin=(-12.5, 4.0), scale=1.5))
    grid.offset = (3.0, 7.0)
    grid.set(0, 0, 1)
    grid.set(4, 9, 6)
    grid.set(9, 2, 0)
    return grid


def test_snapshot_round_trip_through_memory_store() -> None:
    source = make_grid()
    store = MemoryStore()

    store.save(take_snapshot(source))
    restored = store.restore()
    target = GridModel(10, 10)
    assert restored is not None
    apply_snapshot(target, restored)

    assert dict(target.iter_occupied()) == dict(source.iter_occupied())
    assert target.camera.origin == source.camera.origin
    assert target.camera.scale == source.camera.scale
    assert target.offset == source.offset
    assert store.saves == 1


def test_encode_is_json_ready_and_sorted() -> None:
    payload = encode_snapshot(take_snapshot(make_grid()))

    assert json.loads(json.dumps(payload)) == payload
    assert payload["cells"] == [[0, 0, 1], [4, 9, 6], [9, 2, 0]]
    assert payload["scale"] == 1.5


def test_apply_snapshot_replaces_contents_and_drops_out_of_range() -> None:
    grid = GridModel(3, 3)
    grid.set(1, 1, 4)
    grid.select(1, 1)
    snapshot = Snapshot(
        origin=(0.0, 0.0), offset=(0.0, 0.0), scale=1.0, cells={(0, 0): 2, (7, 7): 3}
    )

    apply_snapshot(grid, snapshot)

    assert dict(grid.iter_occupied()) == {(0, 0): 2}
    assert not grid.has_selection()


def test_apply_snapshot_notifies_camera_once() -> None:
    grid = GridModel(3, 3)
    calls: list[float] = []
    grid.camera.subscribe(lambda cam: calls.append(cam.scale))

    apply_snapshot(
        grid, Snapshot(origin=(1.0, 2.0), offset=(0.0, 0.0), scale=2.0, cells={})
    )

    assert calls == [2.0]


@pytest.mark.parametrize(
    "payload",
    [
        "not a mapping",
        {"scale": 0},
        {"scale": "wide"},
        {"origin": [1]},
        {"origin": [float("nan"), 0]},
        {"cells": [[0, 0]]},
        {"cells": [[0, 0, "red"]]},
        {"cells": [[0, 0, True]]},
        {"cells": [[float("inf"), 0, 1]]},
        {"cells": [[0, float("nan"), 1]]},
        {"cells": [[1.5, 0, 1]]},
        {"cells": [["1", 0, 1]]},
    ],
)
def test_decode_rejects_malformed_payloads(payload: object) -> None:
    with pytest.raises(SnapshotFormatError):
        decode_snapshot(payload)


def test_decode_accepts_integral_float_indices() -> None:
    snapshot = decode_snapshot({"cells": [[2.0, 3.0, 4]]})

    assert snapshot.cells == {(2, 3): 4}


def test_memory_store_infinite_index_restores_none() -> None:
    assert MemoryStore(payload={"cells": [[float("inf"), 0, 1]]}).restore() is None


def test_decode_defaults_missing_fields() -> None:
    snapshot = decode_snapshot({})

    assert snapshot.origin == (0.0, 0.0)
    assert snapshot.scale == 1.0
    assert snapshot.cells == {}


def test_memory_store_malformed_payload_restores_none() -> None:
    store = MemoryStore(payload={"scale": -1})

    assert store.restore() is None


def test_memory_store_empty_restores_none() -> None:
    assert MemoryStore().restore() is None


def test_json_file_store_round_trip(tmp_path: Path) -> None:
    path = tmp_path / "state" / "grid.json"
    store = JsonFileStore(path)

    store.save(take_snapshot(make_grid()))
    restored = JsonFileStore(path).restore()

    assert restored is not None
    assert restored.cells == {(0, 0): 1, (4, 9): 6, (9, 2): 0}
    assert restored.scale == 1.5
    assert not path.with_suffix(".json.tmp").exists()


def test_json_file_store_keeps_other_keys(tmp_path: Path) -> None:
    path = tmp_path / "storage.json"
    path.write_text(json.dumps({"theme": "dark"}), encoding="utf-8")

    JsonFileStore(path, key="saved-grid").save(take_snapshot(make_grid()))

    document = json.loads(path.read_text(encoding="utf-8"))
    assert document["theme"] == "dark"
    assert "saved-grid" in document


def test_json_file_store_missing_file_restores_none(tmp_path: Path) -> None:
    assert JsonFileStore(tmp_path / "absent.json").restore() is None


def test_json_file_store_missing_key_restores_none(tmp_path: Path) -> None:
    path = tmp_path / "storage.json"
    path.write_text(json.dumps({"other": 1}), encoding="utf-8")

    assert JsonFileStore(path).restore() is None


def test_json_file_store_corrupt_file_restores_none(tmp_path: Path) -> None:
    path = tmp_path / "storage.json"
    path.write_text("{not json", encoding="utf-8")

    assert JsonFileStore(path).restore() is None


def test_json_file_store_infinite_index_restores_none(tmp_path: Path) -> None:
    path = tmp_path / "storage.json"
    path.write_text('{"saved-grid": {"cells": [[Infinity, 0, 1]]}}', encoding="utf-8")

    assert JsonFileStore(path).restore() is None


def test_json_file_store_undecodable_bytes(tmp_path: Path) -> None:
    path = tmp_path / "storage.json"
    path.write_bytes(b"\xff\xfe\x00garbage")
    store = JsonFileStore(path)

    assert store.restore() is None

    store.save(Snapshot(cells={(1, 2): 3}))

    restored = store.restore()
    assert restored is not None
    assert restored.cells == {(1, 2): 3}
