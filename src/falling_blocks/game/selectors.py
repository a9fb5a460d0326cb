from __future__ import annotations

import random
from typing import Callable, Optional

from .pieces import TetrominoType


# Called once per new piece; the game owns it and never shares it.
Selector = Callable[[], TetrominoType]


class RandomSelector:
    """Uniform choice over all kinds from a private, optionally seeded RNG."""

    def __init__(self, seed: Optional[int] = None) -> None:
        self.rng = random.Random(seed)
        self.kinds = list(TetrominoType)

    def __call__(self) -> TetrominoType:
        return self.rng.choice(self.kinds)
