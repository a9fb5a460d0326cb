from __future__ import annotations

from typing import Sequence, Tuple

import numpy as np


Coordinate = Tuple[int, int]

# Rows above the visible area, addressed with negative y.
HIDDEN_ROWS = 7

OUTSIDE = -1
EMPTY = 0


class GameGrid:
    """Discrete 2D grid with a hidden spawn buffer above the visible area.

    Storage uses 0 for empty cells and positive integers (piece kind values)
    for occupied cells. Visible rows are addressed with y in [0, height);
    the hidden buffer with y in [-HIDDEN_ROWS, 0). Queries outside those
    bounds return OUTSIDE, which is never stored.
    """

    def __init__(self, width: int, height: int) -> None:
        self.width = int(width)
        self.height = int(height)
        self.grid = np.zeros((self.height + HIDDEN_ROWS, self.width), dtype=np.int8)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> "GameGrid":
        """Build a grid from full storage rows, hidden rows first."""
        state = np.asarray(rows, dtype=np.int8)
        if state.ndim != 2 or state.shape[0] < HIDDEN_ROWS:
            raise ValueError(f"expected at least {HIDDEN_ROWS} rows, got shape {state.shape}")
        grid = cls(state.shape[1], state.shape[0] - HIDDEN_ROWS)
        grid.grid = state.copy()
        return grid

    @property
    def total_height(self) -> int:
        return self.height + HIDDEN_ROWS

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and -HIDDEN_ROWS <= y < self.height

    def cell(self, x: int, y: int) -> int:
        if not self.is_inside(x, y):
            return OUTSIDE
        return int(self.grid[y + HIDDEN_ROWS, x])

    def is_blocked(self, x: int, y: int) -> bool:
        return self.cell(x, y) != EMPTY

    def write(self, x: int, y: int, value: int) -> None:
        if not self.is_inside(x, y):
            raise ValueError(f"cell ({x}, {y}) is outside the grid")
        self.grid[y + HIDDEN_ROWS, x] = int(value)

    def clear_filled_rows(self) -> int:
        """Remove filled rows, pad with empty rows at the top, return the count."""
        full_rows = np.where(np.all(self.grid != EMPTY, axis=1))[0]
        if full_rows.size == 0:
            return 0
        num = int(full_rows.size)
        remaining = np.delete(self.grid, full_rows, axis=0)
        new_rows = np.zeros((num, self.width), dtype=np.int8)
        self.grid = np.vstack((new_rows, remaining))
        return num

    def visible(self) -> np.ndarray:
        return self.grid[HIDDEN_ROWS:].copy()

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()

    def to_text(self) -> str:
        return format_state(self.grid[HIDDEN_ROWS:])


def format_state(state: np.ndarray, filled: str = "#", active: str = "@", empty: str = ".") -> str:
    """Text dump of a state array; negative values mark the active piece."""
    return "\n".join(
        "".join(active if cell < 0 else filled if cell > 0 else empty for cell in row) for row in state
    )
