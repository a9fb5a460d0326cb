from __future__ import annotations

import numpy as np
import pytest

from falling_blocks.game import EMPTY, HIDDEN_ROWS, OUTSIDE, GameGrid, format_state


def test_dimensions_include_hidden_buffer():
    grid = GameGrid(10, 20)
    assert grid.width == 10
    assert grid.height == 20
    assert grid.total_height == 20 + HIDDEN_ROWS
    assert grid.clone_state().shape == (27, 10)
    assert grid.visible().shape == (20, 10)


def test_cell_queries():
    grid = GameGrid(10, 20)
    assert grid.cell(1, 2) == EMPTY
    assert grid.cell(1, -2) == EMPTY
    assert grid.cell(0, -HIDDEN_ROWS) == EMPTY
    assert grid.cell(-1, 2) == OUTSIDE
    assert grid.cell(10, 2) == OUTSIDE
    assert grid.cell(0, 20) == OUTSIDE
    assert grid.cell(0, -HIDDEN_ROWS - 1) == OUTSIDE
    assert grid.is_blocked(-1, 0)
    assert not grid.is_blocked(0, 0)


def test_write_sets_value_and_rejects_outside():
    grid = GameGrid(4, 2)
    grid.write(1, -3, 5)
    assert grid.cell(1, -3) == 5
    assert grid.is_blocked(1, -3)
    with pytest.raises(ValueError):
        grid.write(4, 0, 1)


def test_clear_without_filled_rows_is_noop():
    grid = GameGrid(4, 3)
    grid.write(0, 2, 1)
    before = grid.clone_state()
    assert grid.clear_filled_rows() == 0
    assert np.array_equal(grid.clone_state(), before)


def test_clear_single_bottom_row_shifts_rows_down():
    grid = GameGrid(10, 20)
    for x in range(10):
        grid.write(x, 19, 1)
    grid.write(4, 18, 3)
    assert grid.clear_filled_rows() == 1
    assert grid.clone_state().shape == (27, 10)
    assert grid.cell(4, 19) == 3
    assert all(grid.cell(x, 19) == EMPTY for x in range(10) if x != 4)
    assert not grid.clone_state()[0].any()


def test_clear_counts_non_adjacent_rows():
    rows = [[0] * 4 for _ in range(HIDDEN_ROWS)]
    rows += [[1, 1, 1, 1], [0, 2, 0, 0], [3, 3, 3, 3]]
    grid = GameGrid.from_rows(rows)
    assert grid.height == 3
    assert grid.clear_filled_rows() == 2
    assert grid.visible().tolist() == [[0, 0, 0, 0], [0, 0, 0, 0], [0, 2, 0, 0]]


def test_to_text_shows_visible_region():
    grid = GameGrid(4, 2)
    grid.write(0, 1, 1)
    grid.write(3, -1, 1)
    assert grid.to_text() == "....\n#..."


def test_format_state_marks_active_piece():
    state = np.array([[0, -3, 0], [2, 0, 0]], dtype=np.int8)
    assert format_state(state) == ".@.\n#.."
