from __future__ import annotations

import numpy as np
import gymnasium as gym
from gymnasium import spaces


class ResampleInvalidActionWrapper(gym.Wrapper):
    """If the chosen action would have no effect, resample among those that would.

    Useful for random or unmasked agents, which otherwise spend most steps
    pushing the piece into walls.
    """

    def step(self, action):  # type: ignore[override]
        if isinstance(self.action_space, spaces.Discrete):
            mask = self.get_action_mask()
            if 0 <= int(action) < mask.shape[0] and not bool(mask[int(action)]):
                valid_idxs = np.flatnonzero(mask)
                if valid_idxs.size > 0:
                    action = int(self.np_random.choice(valid_idxs))
        return self.env.step(action)

    # Delegate mask access to the wrapped env
    def get_action_mask(self) -> np.ndarray:
        return self.env.unwrapped.get_action_mask()  # type: ignore[attr-defined]
