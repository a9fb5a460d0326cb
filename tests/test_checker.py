from __future__ import annotations

from falling_blocks.game import HIDDEN_ROWS, Checker, Direction, GameGrid, Piece, TetrominoType, route_exists


def _grid(rows):
    width = len(rows[0])
    return GameGrid.from_rows([[0] * width for _ in range(HIDDEN_ROWS)] + rows)


def test_borders_count_as_blocked():
    grid = GameGrid(4, 2)
    check = Checker(grid, Piece(TetrominoType.O, x=0, y=0))
    assert check.touches_left()
    assert not check.touches_right()
    assert check.touches_down()
    assert not check.overlaps()
    assert check.blocked(Direction.LEFT) == check.touches_left()


def test_occupied_cells_block():
    grid = _grid([[0, 0, 0, 0], [1, 0, 0, 0]])
    check = Checker(grid, Piece(TetrominoType.T).move_to(1, 0))
    assert check.touches_left()
    assert not check.overlaps()
    assert Checker(grid, Piece(TetrominoType.T).move_to(0, 0)).overlaps()


def test_outside_pose_overlaps():
    grid = GameGrid(4, 2)
    assert Checker(grid, Piece(TetrominoType.O, x=3, y=0)).overlaps()
    assert Checker(grid, Piece(TetrominoType.O, x=0, y=-HIDDEN_ROWS - 1)).overlaps()


def test_route_around_obstacle():
    grid = _grid([[0, 0, 0, 1, 1, 1, 0, 0, 0, 0]] + [[0] * 10 for _ in range(3)])
    start = Piece(TetrominoType.T).move_to(3, -2)
    goal = Piece(TetrominoType.T).move_to(3, 2)
    assert route_exists(grid, start, goal)
    assert Checker(grid, goal).route_from(start)
    assert Checker(grid, start).route_to(goal)


def test_no_route_through_sealed_ceiling():
    grid = _grid([[0] * 4, [1, 1, 1, 1], [0] * 4, [0] * 4])
    start = Piece(TetrominoType.O, x=1, y=-2)
    goal = Piece(TetrominoType.O, x=1, y=2)
    assert not Checker(grid, goal).overlaps()
    assert not route_exists(grid, start, goal)


def test_route_uses_rotation_moves():
    grid = GameGrid(4, 4)
    start = Piece(TetrominoType.I, x=0, y=-1)
    goal = Piece(TetrominoType.I, rotation=1, x=0, y=0)
    assert route_exists(grid, start, goal)
