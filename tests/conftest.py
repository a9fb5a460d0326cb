from __future__ import annotations

import pytest

from falling_blocks.game import FallingBlockGame, GameConfig, TetrominoType


def scripted_selector(*kinds: TetrominoType, then: TetrominoType = TetrominoType.L):
    remaining = list(kinds)

    def select() -> TetrominoType:
        return remaining.pop(0) if remaining else then

    return select


@pytest.fixture
def game() -> FallingBlockGame:
    # T first, then J, I, and L forever
    selector = scripted_selector(TetrominoType.T, TetrominoType.J, TetrominoType.I)
    return FallingBlockGame(GameConfig(width=10, height=20, queue_size=3), selector)
