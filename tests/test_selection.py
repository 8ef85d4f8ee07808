from grid_engine.grid import (
    CoordinateTransform,
    GridModel,
    area_select,
    click_select,
    extend_rectangle,
    rectangle_anchor,
    toggle_select,
)


def make_grid(*cells: tuple[int, int], rows: int = 10, cols: int = 10) -> GridModel:
    grid = GridModel(rows, cols)
    for i, j in cells:
        grid.set(i, j, 1)
    return grid


def make_block(top: int, left: int, bottom: int, right: int) -> GridModel:
    return make_grid(
        *(
            (i, j)
            for i in range(top, bottom + 1)
            for j in range(left, right + 1)
        )
    )


def test_click_select_replaces_selection() -> None:
    grid = make_grid((1, 1), (2, 2))
    click_select(grid, 1, 1)

    click_select(grid, 2, 2)

    assert set(grid.iter_selected()) == {(2, 2)}


def test_click_on_selected_cell_keeps_selection() -> None:
    grid = make_grid((1, 1), (2, 2))
    grid.select(1, 1)
    grid.select(2, 2)

    click_select(grid, 1, 1)

    assert set(grid.iter_selected()) == {(1, 1), (2, 2)}


def test_toggle_select_only_touches_clicked_cell() -> None:
    grid = make_grid((1, 1), (2, 2))
    grid.select(1, 1)

    toggle_select(grid, 2, 2)
    assert set(grid.iter_selected()) == {(1, 1), (2, 2)}

    toggle_select(grid, 1, 1)
    assert set(grid.iter_selected()) == {(2, 2)}


def test_rectangle_anchor_breaks_ties_lexicographically() -> None:
    grid = make_grid((0, 2), (1, 1), (2, 0), (3, 3))
    for cell in ((3, 3), (2, 0), (1, 1), (0, 2)):
        grid.select(*cell)

    assert rectangle_anchor(grid) == (0, 2)


def test_rectangle_anchor_empty_selection() -> None:
    assert rectangle_anchor(make_grid()) is None


def test_shift_rectangle_selects_every_cell_in_block() -> None:
    grid = make_block(1, 1, 3, 3)
    click_select(grid, 1, 1)

    extend_rectangle(grid, 3, 3)

    expected = {(i, j) for i in range(1, 4) for j in range(1, 4)}
    assert set(grid.iter_selected()) == expected
    assert grid.selection_size == 9


def test_shift_rectangle_normalizes_reversed_corners() -> None:
    grid = make_block(0, 0, 2, 2)
    grid.select(0, 2)

    extend_rectangle(grid, 2, 0)

    assert grid.selection_size == 9


def test_shift_rectangle_skips_empty_cells() -> None:
    grid = make_grid((1, 1), (2, 2), (3, 3))
    grid.select(1, 1)

    extend_rectangle(grid, 3, 3)

    assert set(grid.iter_selected()) == {(1, 1), (2, 2), (3, 3)}


def test_shift_rectangle_without_selection_acts_as_click() -> None:
    grid = make_grid((4, 4))

    extend_rectangle(grid, 4, 4)

    assert set(grid.iter_selected()) == {(4, 4)}


def test_area_select_adds_occupied_cells_in_rectangle() -> None:
    grid = make_grid((0, 0), (1, 1), (2, 2), (5, 5))
    grid.select(5, 5)
    transform = CoordinateTransform(grid)

    size = area_select(grid, transform, (25, 25), (1, 1))

    assert size == 4
    assert set(grid.iter_selected()) == {(0, 0), (1, 1), (2, 2), (5, 5)}
