from __future__ import annotations

from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Dict, List, Tuple

from .grid import Coordinate


class TetrominoType(IntEnum):
    I = 1
    O = 2
    T = 3
    S = 4
    Z = 5
    J = 6
    L = 7


Rotation = Tuple[Coordinate, Coordinate, Coordinate, Coordinate]


# Block order within a rotation state is significant: Piece.blocks() keeps it.
ROTATIONS: Dict[TetrominoType, Tuple[Rotation, ...]] = {
    TetrominoType.O: (
        ((0, 0), (1, 0), (0, 1), (1, 1)),
    ),
    TetrominoType.I: (
        ((0, 1), (1, 1), (2, 1), (3, 1)),
        ((1, 0), (1, 1), (1, 2), (1, 3)),
    ),
    TetrominoType.Z: (
        ((0, 0), (1, 0), (1, 1), (2, 1)),
        ((2, 0), (2, 1), (1, 1), (1, 2)),
        ((2, 2), (1, 2), (1, 1), (0, 1)),
        ((0, 2), (0, 1), (1, 1), (1, 0)),
    ),
    TetrominoType.S: (
        ((1, 0), (2, 0), (0, 1), (1, 1)),
        ((2, 1), (2, 2), (1, 0), (1, 1)),
        ((1, 2), (0, 2), (2, 1), (1, 1)),
        ((0, 1), (0, 0), (1, 2), (1, 1)),
    ),
    TetrominoType.J: (
        ((0, 0), (0, 1), (1, 1), (2, 1)),
        ((2, 0), (1, 0), (1, 1), (1, 2)),
        ((2, 2), (2, 1), (1, 1), (0, 1)),
        ((0, 2), (1, 2), (1, 1), (1, 0)),
    ),
    TetrominoType.T: (
        ((1, 0), (0, 1), (1, 1), (2, 1)),
        ((2, 1), (1, 0), (1, 1), (1, 2)),
        ((1, 2), (2, 1), (1, 1), (0, 1)),
        ((0, 1), (1, 2), (1, 1), (1, 0)),
    ),
    TetrominoType.L: (
        ((2, 0), (0, 1), (1, 1), (2, 1)),
        ((2, 2), (1, 0), (1, 1), (1, 2)),
        ((0, 2), (2, 1), (1, 1), (0, 1)),
        ((0, 0), (1, 2), (1, 1), (1, 0)),
    ),
}

COLORS: Dict[TetrominoType, str] = {
    TetrominoType.O: "yellow",
    TetrominoType.I: "lightblue",
    TetrominoType.Z: "red",
    TetrominoType.S: "green",
    TetrominoType.J: "blue",
    TetrominoType.T: "purple",
    TetrominoType.L: "orange",
}


def offsets(kind: TetrominoType, rotation: int) -> Rotation:
    return ROTATIONS[kind][rotation]


def num_rotations(kind: TetrominoType) -> int:
    return len(ROTATIONS[kind])


def color(kind: TetrominoType) -> str:
    return COLORS[kind]


@dataclass(frozen=True)
class Piece:
    """A piece kind in one rotation state, anchored at (x, y).

    Immutable: every transform returns a new Piece, so pieces can be
    compared and hashed structurally.
    """

    kind: TetrominoType
    rotation: int = 0
    x: int = 0
    y: int = 0

    def offsets(self) -> Rotation:
        return offsets(self.kind, self.rotation)

    def blocks(self) -> List[Coordinate]:
        return [(self.x + dx, self.y + dy) for dx, dy in self.offsets()]

    def color(self) -> str:
        return color(self.kind)

    def width(self) -> int:
        xs = [dx for dx, _ in self.offsets()]
        return max(xs) - min(xs) + 1

    def height(self) -> int:
        ys = [dy for _, dy in self.offsets()]
        return max(ys) - min(ys) + 1

    def leading_edge(self) -> int:
        # Topmost row, i.e. the smallest y.
        return min(y for _, y in self.blocks())

    def move_to(self, left: int, top: int) -> "Piece":
        blocks = self.blocks()
        current_left = min(x for x, _ in blocks)
        current_top = min(y for _, y in blocks)
        return replace(self, x=self.x + left - current_left, y=self.y + top - current_top)

    def shift_left(self, dist: int) -> "Piece":
        return replace(self, x=self.x - dist)

    def shift_right(self, dist: int) -> "Piece":
        return replace(self, x=self.x + dist)

    def shift_up(self, dist: int) -> "Piece":
        return replace(self, y=self.y - dist)

    def shift_down(self, dist: int) -> "Piece":
        return replace(self, y=self.y + dist)

    def rotated(self, times: int) -> "Piece":
        return replace(self, rotation=(self.rotation + times) % num_rotations(self.kind))
