from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from enum import IntEnum
from typing import Deque, List, Optional, Tuple

import numpy as np

from .checker import Checker
from .grid import GameGrid
from .pieces import Piece, TetrominoType
from .selectors import RandomSelector, Selector

logger = logging.getLogger(__name__)


class Action(IntEnum):
    LEFT = 0
    RIGHT = 1
    ROTATE = 2
    SOFT_DROP = 3
    HARD_DROP = 4
    HOLD = 5
    NONE = 6


@dataclass
class GameConfig:
    width: int = 10
    height: int = 20
    queue_size: int = 3
    random_seed: Optional[int] = None
    max_episode_steps: int = 10000


KICK_DISTANCE = 2


def _kick_offsets() -> List[Tuple[int, int]]:
    # Nearest first; on ties prefer upward (smaller dy), then leftward (smaller dx).
    points = [
        (dx, dy)
        for dx in range(-KICK_DISTANCE, KICK_DISTANCE + 1)
        for dy in range(-KICK_DISTANCE, KICK_DISTANCE + 1)
    ]
    return sorted(points, key=lambda p: (p[0] ** 2 + p[1] ** 2, p[1], p[0]))


KICK_OFFSETS = _kick_offsets()

SPAWN_LIFT = 4


class FallingBlockGame:
    """Rules engine: one grid, an active piece, a lookahead queue and a hold slot.

    The engine has no clock. Drivers call the commands below, each of which
    reports whether it had an effect (bool) or how many lines it cleared (int).
    Once the game has ended every command is a no-op.
    """

    def __init__(self, config: Optional[GameConfig] = None, selector: Optional[Selector] = None) -> None:
        self.config = config or GameConfig()
        if self.config.width < 4:
            raise ValueError(f"width must be at least 4, got {self.config.width}")
        if self.config.height < 1:
            raise ValueError(f"height must be at least 1, got {self.config.height}")
        self.selector: Selector = selector or RandomSelector(self.config.random_seed)
        self.grid = GameGrid(self.config.width, self.config.height)
        self.piece = Piece(self.selector())
        self._queue: Deque[TetrominoType] = deque()
        self.held: Optional[Piece] = None
        self.can_hold = True
        self.ended = False
        self.lines_cleared = 0
        self._respawn()
        for _ in range(self.config.queue_size):
            self._queue.append(self.selector())

    # ---------- Queries ----------
    @property
    def queue(self) -> Tuple[TetrominoType, ...]:
        return tuple(self._queue)

    def check(self) -> Checker:
        return Checker(self.grid, self.piece)

    def ghost(self) -> Piece:
        """Deepest resting position the active piece can actually reach.

        A resting spot that is free but cut off (e.g. under an overhang that
        cannot be entered) is skipped in favour of a higher one.
        """
        dist_down = self.grid.height - self.piece.leading_edge()
        for dist in range(dist_down, -1, -1):
            candidate = self.piece.shift_down(dist)
            check = Checker(self.grid, candidate)
            if check.touches_down() and not check.overlaps() and check.route_from(self.piece):
                return candidate
        # Only when the active piece itself overlaps after a blocked respawn.
        return self.piece

    def rotation_candidate(self) -> Optional[Piece]:
        """Pose that rotate() would move to, or None if every kick is blocked."""
        rotated = self.piece.rotated(1)
        for dx, dy in KICK_OFFSETS:
            candidate = rotated.shift_right(dx).shift_down(dy)
            if not Checker(self.grid, candidate).overlaps():
                return candidate
        return None

    def get_state(self) -> np.ndarray:
        # Visible grid with the active piece overlaid as negative kind values
        state = self.grid.visible()
        if not self.ended:
            for x, y in self.piece.blocks():
                if 0 <= y < self.grid.height and 0 <= x < self.grid.width:
                    state[y, x] = -int(self.piece.kind)
        return state

    def action_mask(self) -> np.ndarray:
        mask = np.zeros((len(Action),), dtype=np.bool_)
        mask[Action.NONE] = True
        if self.ended:
            return mask
        check = self.check()
        mask[Action.LEFT] = not check.touches_left()
        mask[Action.RIGHT] = not check.touches_right()
        mask[Action.ROTATE] = self.rotation_candidate() is not None
        mask[Action.SOFT_DROP] = True
        mask[Action.HARD_DROP] = True
        mask[Action.HOLD] = self.can_hold
        return mask

    # ---------- Commands ----------
    def move_left(self) -> bool:
        if self.ended or self.check().touches_left():
            return False
        self.piece = self.piece.shift_left(1)
        return True

    def move_right(self) -> bool:
        if self.ended or self.check().touches_right():
            return False
        self.piece = self.piece.shift_right(1)
        return True

    def soft_drop(self) -> bool:
        if self.ended or self.check().touches_down():
            return False
        self.piece = self.piece.shift_down(1)
        return True

    def rotate(self) -> bool:
        if self.ended:
            return False
        candidate = self.rotation_candidate()
        if candidate is None:
            return False
        self.piece = candidate
        return True

    def hard_drop(self) -> bool:
        if self.ended:
            return False
        self.piece = self.ghost()
        return True

    def lock(self) -> int:
        """Write the active piece into the grid and clear filled rows.

        Returns the number of rows cleared. Locking a piece that lies
        entirely in the hidden buffer ends the game.
        """
        if self.ended:
            return 0
        for x, y in self.piece.blocks():
            self.grid.write(x, y, int(self.piece.kind))
        if self.piece.leading_edge() < 0:
            self.ended = True
            logger.debug("game ended: %s locked above the visible area", self.piece)
            return 0
        self.piece = Piece(self._shift_queue())
        self._respawn()
        self.can_hold = True
        lines = self.grid.clear_filled_rows()
        self.lines_cleared += lines
        if lines:
            logger.debug("cleared %d line(s), %d total", lines, self.lines_cleared)
        return lines

    def hold(self) -> bool:
        if not self.can_hold or self.ended:
            return False
        new_held = Piece(self.piece.kind).move_to(0, 0)
        if self.held is not None:
            self.piece = self.held
        else:
            self.piece = Piece(self._shift_queue())
        self.held = new_held
        self._respawn()
        self.can_hold = False
        logger.debug("held %s, active is now %s", new_held.kind, self.piece.kind)
        return True

    def apply(self, action: Action) -> int:
        """Run one driver action and return the lines it cleared."""
        if action == Action.LEFT:
            self.move_left()
        elif action == Action.RIGHT:
            self.move_right()
        elif action == Action.ROTATE:
            self.rotate()
        elif action == Action.SOFT_DROP:
            # Gravity-free drivers lock once the piece cannot fall further
            if not self.soft_drop():
                return self.lock()
        elif action == Action.HARD_DROP:
            if self.hard_drop():
                return self.lock()
        elif action == Action.HOLD:
            self.hold()
        elif action == Action.NONE:
            pass
        return 0

    # ---------- Internals ----------
    def _shift_queue(self) -> TetrominoType:
        self._queue.append(self.selector())
        return self._queue.popleft()

    def _respawn(self) -> None:
        spawned = self.piece.move_to(
            (self.grid.width - self.piece.width()) // 2,
            -self.piece.height(),
        )
        for dist_up in range(SPAWN_LIFT + 1):
            candidate = spawned.shift_up(dist_up)
            if not Checker(self.grid, candidate).overlaps():
                self.piece = candidate
                return
        self.piece = spawned
