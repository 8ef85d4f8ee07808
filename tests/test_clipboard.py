from grid_engine.grid import CellBuffer, ClipEntry, GridModel


def make_grid(values: dict[tuple[int, int], int], *, select: bool = True) -> GridModel:
    grid = GridModel(10, 10)
    for (i, j), value in values.items():
        grid.set(i, j, value)
        if select:
            grid.select(i, j)
    return grid


def offsets(buffer: CellBuffer) -> list[tuple[int, int, int]]:
    return sorted((entry.di, entry.dj, entry.value) for entry in buffer.entries)


def test_copy_uses_bounding_box_midpoint() -> None:
    grid = make_grid({(2, 2): 1, (2, 4): 2, (4, 2): 3})
    buffer = CellBuffer()

    count = buffer.copy_selection(grid)

    assert count == 3
    assert buffer.reference == (3, 3)
    assert offsets(buffer) == [(-1, -1, 1), (-1, 1, 2), (1, -1, 3)]


def test_copy_ignores_selected_cells_that_were_cleared() -> None:
    grid = make_grid({(1, 1): 1, (1, 2): 2})
    grid.set(1, 2, None)
    buffer = CellBuffer()

    assert buffer.copy_selection(grid) == 1
    assert offsets(buffer) == [(0, 0, 1)]


def test_copy_with_explicit_reference() -> None:
    grid = make_grid({(1, 1): 1, (1, 2): 2})
    buffer = CellBuffer()

    buffer.copy_selection(grid, reference=(1, 1))

    assert offsets(buffer) == [(0, 0, 1), (0, 1, 2)]


def test_copy_then_paste_at_reference_is_identity() -> None:
    values = {(2, 2): 1, (2, 3): 2, (3, 5): 6}
    grid = make_grid(values)
    buffer = CellBuffer()
    buffer.copy_selection(grid)

    buffer.paste(grid, *buffer.reference)

    assert dict(grid.iter_occupied()) == values


def test_cut_clears_cells_and_selection() -> None:
    grid = make_grid({(0, 0): 1, (0, 1): 2})
    buffer = CellBuffer()

    count = buffer.cut_selection(grid)

    assert count == 2
    assert grid.occupied_count == 0
    assert not grid.has_selection()


def test_paste_replaces_selection_and_overwrites() -> None:
    grid = make_grid({(0, 0): 1})
    buffer = CellBuffer(reference=(0, 0), entries=[ClipEntry(0, 0, 5), ClipEntry(0, 1, 6)])
    grid.set(4, 5, 3)

    written = buffer.paste(grid, 4, 4)

    assert written == 2
    assert grid.get(4, 4) == 5
    assert grid.get(4, 5) == 6
    assert not grid.has_selection()


def test_paste_drops_out_of_bounds_entries() -> None:
    grid = GridModel(3, 3)
    buffer = CellBuffer(entries=[ClipEntry(0, 0, 1), ClipEntry(0, 1, 2)])

    written = buffer.paste(grid, 0, 2)

    assert written == 1
    assert grid.get(0, 2) == 1


def test_rotate_quarter_turn() -> None:
    buffer = CellBuffer(entries=[ClipEntry(1, 0, 1), ClipEntry(0, 2, 2)])

    buffer.rotate()

    assert offsets(buffer) == [(0, -1, 1), (2, 0, 2)]


def test_rotate_four_times_is_identity() -> None:
    buffer = CellBuffer(
        entries=[ClipEntry(1, 0, 1), ClipEntry(-2, 3, 2), ClipEntry(0, 0, 3)]
    )
    before = offsets(buffer)

    for _ in range(4):
        buffer.rotate()

    assert offsets(buffer) == before


def test_clear_resets_buffer() -> None:
    buffer = CellBuffer(reference=(2, 2), entries=[ClipEntry(0, 0, 1)])

    buffer.clear()

    assert buffer.is_empty()
    assert len(buffer) == 0
    assert buffer.reference == (0, 0)
