from __future__ import annotations

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .blocks_world_env import _compute_action_mask


class FlattenDiscreteActionWrapper(gym.ActionWrapper):
    """Flattens MultiDiscrete (block, dest) -> Discrete(N * (N + 1)) for PPO.

    Also exposes `get_action_mask()` returning a 1D boolean mask of shape (N * (N + 1),).
    Order: block, dest (C-order flattening).
    """

    def __init__(self, env: gym.Env):
        super().__init__(env)
        assert isinstance(env.action_space, spaces.MultiDiscrete)
        num_blocks, num_dests = map(int, env.action_space.nvec)
        assert num_dests == num_blocks + 1, "Expected (N, N + 1) action layout"
        self.num_blocks = num_blocks
        self.num_dests = num_dests
        self.n = int(num_blocks * num_dests)
        self.action_space = spaces.Discrete(self.n)

    def _unflatten(self, idx: int) -> tuple[int, int]:
        return int(idx // self.num_dests), int(idx % self.num_dests)

    def action(self, action: int):  # type: ignore[override]
        return np.array(self._unflatten(int(action)), dtype=np.int64)

    def get_action_mask(self) -> np.ndarray:
        mask2d = _compute_action_mask(self.env.unwrapped.world)
        return mask2d.reshape(-1)


class ResampleInvalidActionWrapper(gym.Wrapper):
    """If a sampled action is invalid, resample uniformly among valid ones.

    Useful when training with vanilla PPO (no action masking).
    """

    def step(self, action):  # type: ignore[override]
        if isinstance(self.action_space, spaces.Discrete) and hasattr(self.env, "get_action_mask"):
            mask = self.get_action_mask()
            if 0 <= int(action) < mask.shape[0] and not bool(mask[int(action)]):
                valid_idxs = np.flatnonzero(mask)
                if valid_idxs.size > 0:
                    action = int(self.np_random.choice(valid_idxs))
        return self.env.step(action)

    # Delegate mask access if the wrapped env provides it
    def get_action_mask(self) -> np.ndarray:
        if hasattr(self.env, "get_action_mask"):
            return getattr(self.env, "get_action_mask")()
        raise AttributeError("Underlying env does not provide get_action_mask")
