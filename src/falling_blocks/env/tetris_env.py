from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from falling_blocks.game import (
    Action,
    FallingBlockGame,
    GameConfig,
    RandomSelector,
    TetrominoType,
    color,
    format_state,
)


RGB = {
    "yellow": (240, 240, 0),
    "lightblue": (0, 240, 240),
    "red": (240, 0, 0),
    "green": (0, 240, 0),
    "blue": (0, 0, 240),
    "purple": (160, 0, 240),
    "orange": (240, 160, 0),
}
BACKGROUND = (30, 30, 36)


def _color_for_value(v: int) -> Tuple[int, int, int]:
    if v == 0:
        return BACKGROUND
    return RGB[color(TetrominoType(abs(v)))]


class FallingBlocksEnv(gym.Env):
    """Step-by-step driver over FallingBlockGame.

    One action per step (see Action). The reward is the number of lines
    cleared by the step; the episode terminates when the game ends.
    """

    metadata = {"render_modes": ["ansi", "rgb_array"], "render_fps": 30}

    def __init__(self, config: Optional[GameConfig] = None, render_mode: Optional[str] = None) -> None:
        super().__init__()
        self.config = config or GameConfig()
        self.render_mode = render_mode
        self.game = FallingBlockGame(self.config)

        n_kinds = len(TetrominoType)
        self.observation_space = spaces.Dict(
            {
                "grid": spaces.Box(
                    low=-n_kinds, high=n_kinds, shape=(self.config.height, self.config.width), dtype=np.int8
                ),
                "queue": spaces.Box(low=1, high=n_kinds, shape=(self.config.queue_size,), dtype=np.int8),
                # 0 when nothing is held
                "held": spaces.Discrete(n_kinds + 1),
                "can_hold": spaces.Discrete(2),
            }
        )
        self.action_space = spaces.Discrete(len(Action))

        self._steps = 0

    def _get_obs(self) -> Dict[str, Any]:
        held = self.game.held
        return {
            "grid": self.game.get_state().astype(np.int8),
            "queue": np.array([int(k) for k in self.game.queue], dtype=np.int8),
            "held": int(held.kind) if held is not None else 0,
            "can_hold": int(self.game.can_hold),
        }

    def _get_info(self) -> Dict[str, Any]:
        return {
            "action_mask": self.game.action_mask(),
            "lines_cleared_total": self.game.lines_cleared,
            "steps": self._steps,
        }

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[dict] = None,
    ) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        if seed is None:
            seed = self.config.random_seed
        self.game = FallingBlockGame(self.config, RandomSelector(seed))
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action: int):
        lines = self.game.apply(Action(int(action)))
        self._steps += 1
        terminated = bool(self.game.ended)
        truncated = self._steps >= self.config.max_episode_steps
        info = self._get_info()
        info["lines"] = lines
        return self._get_obs(), float(lines), terminated, truncated, info

    # Mask exposure for wrappers
    def get_action_mask(self) -> np.ndarray:
        return self.game.action_mask()

    def render(self):
        if self.render_mode == "ansi":
            return format_state(self.game.get_state())
        if self.render_mode == "rgb_array":
            state = self.game.get_state()
            cell = 12
            h, w = state.shape
            img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
            for y in range(h):
                for x in range(w):
                    img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = _color_for_value(int(state[y, x]))
            return img
        return None

    def close(self) -> None:
        pass
