import pytest

from grid_engine.grid import Camera, CellGeometry, GridModel


def make_grid(rows: int = 5, cols: int = 5) -> GridModel:
    return GridModel(rows, cols)


def test_dimensions_must_be_positive() -> None:
    with pytest.raises(ValueError):
        GridModel(0, 5)
    with pytest.raises(ValueError):
        GridModel(5, -1)


def test_geometry_rejects_invalid_layout() -> None:
    with pytest.raises(ValueError):
        CellGeometry(size=0)
    with pytest.raises(ValueError):
        CellGeometry(margin=-1)


def test_set_and_get_inside_bounds() -> None:
    grid = make_grid()

    grid.set(2, 3, 4)

    assert grid.get(2, 3) == 4
    assert grid.occupied_count == 1
    assert not grid.is_empty(2, 3)


def test_set_none_clears_cell() -> None:
    grid = make_grid()
    grid.set(1, 1, 2)

    grid.set(1, 1, None)

    assert grid.get(1, 1) is None
    assert grid.occupied_count == 0


@pytest.mark.parametrize("cell", [(-1, 0), (0, -1), (5, 0), (0, 5), (99, 99)])
def test_out_of_range_set_is_ignored_and_get_is_empty(cell: tuple[int, int]) -> None:
    grid = make_grid()

    grid.set(*cell, 3)

    assert grid.get(*cell) is None
    assert grid.occupied_count == 0


def test_composite_key_round_trips() -> None:
    grid = GridModel(4, 7)

    assert grid.key(2, 5) == 2 * 7 + 5
    assert grid.position(grid.key(3, 6)) == (3, 6)


def test_select_on_empty_cell_is_noop() -> None:
    grid = make_grid()

    grid.select(1, 1)
    grid.toggle(2, 2)

    assert not grid.has_selection()
    assert not grid.is_selected(1, 1)


def test_select_deselect_toggle() -> None:
    grid = make_grid()
    grid.set(0, 0, 1)
    grid.set(0, 1, 1)

    grid.select(0, 0)
    grid.toggle(0, 1)
    assert set(grid.iter_selected()) == {(0, 0), (0, 1)}

    grid.toggle(0, 1)
    grid.deselect(0, 0)
    assert grid.selection_size == 0


def test_cleared_cell_stays_selected() -> None:
    grid = make_grid()
    grid.set(3, 3, 5)
    grid.select(3, 3)

    grid.set(3, 3, None)

    assert grid.is_selected(3, 3)
    assert list(grid.iter_selected()) == [(3, 3)]


def test_iter_selected_tolerates_mutation() -> None:
    grid = make_grid()
    for j in range(3):
        grid.set(0, j, 1)
        grid.select(0, j)

    for i, j in grid.iter_selected():
        grid.deselect(i, j)

    assert not grid.has_selection()


def test_iter_cells_is_row_major() -> None:
    grid = GridModel(2, 3)

    assert list(grid.iter_cells()) == [
        (0, 0),
        (0, 1),
        (0, 2),
        (1, 0),
        (1, 1),
        (1, 2),
    ]


def test_clear_drops_cells_and_selection() -> None:
    grid = make_grid()
    grid.set(1, 2, 1)
    grid.select(1, 2)

    grid.clear()

    assert grid.occupied_count == 0
    assert not grid.has_selection()


def test_camera_publishes_after_each_mutation() -> None:
    camera = Camera()
    seen: list[tuple[tuple[float, float], float]] = []
    camera.subscribe(lambda cam: seen.append((cam.origin, cam.scale)))

    camera.move_to(3, 4)
    camera.set_scale(2)
    camera.update(origin=(1, 1), scale=0.5)

    assert seen == [((3.0, 4.0), 1.0), ((3.0, 4.0), 2.0), ((1.0, 1.0), 0.5)]


def test_camera_rejects_non_positive_scale() -> None:
    camera = Camera()

    with pytest.raises(ValueError):
        camera.set_scale(0)


def test_camera_unsubscribe_stops_notifications() -> None:
    camera = Camera()
    calls: list[Camera] = []
    listener = calls.append
    camera.subscribe(listener)
    camera.unsubscribe(listener)

    camera.move_to(1, 1)

    assert calls == []
