"""Game module for the falling-block rules engine.

Exports the core game engine and supporting classes:
- GameGrid: Grid with a hidden spawn buffer and line clearing
- Piece: Immutable piece pose with geometric transforms
- TetrominoType: Enum of available piece kinds
- Checker: Collision and reachability queries
- RandomSelector: Default piece selector
- FallingBlockGame: Game state machine
"""

from .grid import GameGrid, HIDDEN_ROWS, EMPTY, OUTSIDE, format_state
from .pieces import Piece, TetrominoType, offsets, num_rotations, color
from .checker import Checker, Direction, route_exists
from .selectors import RandomSelector, Selector
from .core import FallingBlockGame, GameConfig, Action, KICK_OFFSETS

__all__ = [
    "GameGrid",
    "HIDDEN_ROWS",
    "EMPTY",
    "OUTSIDE",
    "format_state",
    "Piece",
    "TetrominoType",
    "offsets",
    "num_rotations",
    "color",
    "Checker",
    "Direction",
    "route_exists",
    "RandomSelector",
    "Selector",
    "FallingBlockGame",
    "GameConfig",
    "Action",
    "KICK_OFFSETS",
]
