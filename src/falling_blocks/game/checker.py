from __future__ import annotations

from collections import deque
from enum import Enum
from typing import Callable, Deque, List, Set

from .grid import GameGrid
from .pieces import Piece


class Direction(Enum):
    LEFT = (-1, 0)
    RIGHT = (1, 0)
    DOWN = (0, 1)
    NONE = (0, 0)


# Edges of the pose graph searched by route_exists.
MOVES: List[Callable[[Piece], Piece]] = [
    lambda p: p.shift_left(1),
    lambda p: p.shift_right(1),
    lambda p: p.shift_down(1),
    lambda p: p.rotated(1),
    lambda p: p.rotated(2),
    lambda p: p.rotated(3),
]


class Checker:
    """Collision and reachability queries for one piece on one grid.

    Cells outside the grid count as blocked, so boundary and collision
    checks are the same test.
    """

    def __init__(self, grid: GameGrid, piece: Piece) -> None:
        self.grid = grid
        self.piece = piece

    def blocked(self, direction: Direction) -> bool:
        dx, dy = direction.value
        return any(self.grid.is_blocked(x + dx, y + dy) for x, y in self.piece.blocks())

    def touches_left(self) -> bool:
        return self.blocked(Direction.LEFT)

    def touches_right(self) -> bool:
        return self.blocked(Direction.RIGHT)

    def touches_down(self) -> bool:
        return self.blocked(Direction.DOWN)

    def overlaps(self) -> bool:
        return self.blocked(Direction.NONE)

    def route_from(self, start: Piece) -> bool:
        return route_exists(self.grid, start, self.piece)

    def route_to(self, goal: Piece) -> bool:
        return route_exists(self.grid, self.piece, goal)


def route_exists(grid: GameGrid, start: Piece, goal: Piece) -> bool:
    """Breadth-first search from `start` to `goal` over single moves.

    Only non-overlapping poses are expanded. Poses off the grid always
    overlap, so the search space is bounded by the grid's extents.
    """
    if start == goal:
        return True
    if Checker(grid, start).overlaps():
        return False
    seen: Set[Piece] = {start}
    queue: Deque[Piece] = deque([start])
    while queue:
        piece = queue.popleft()
        if piece == goal:
            return True
        for move in MOVES:
            nxt = move(piece)
            if nxt not in seen and not Checker(grid, nxt).overlaps():
                seen.add(nxt)
                queue.append(nxt)
    return False
